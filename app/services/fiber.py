# app/services/fiber.py
import logging
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote, urlencode

import httpx

from ..core.config import settings
from ..core.providers import (
    BEZEQ_API, BEZEQ_PAGE, PARTNER_API, MAJOR_CITIES, SPEED_1G,
    FiberProvider, ScrapeTarget,
)
from ..schemas.fiber import FiberQuery, FiberResult
from ..utils.http import get_text, post_json
from .chain import Abstain, ChainResolver

logger = logging.getLogger(__name__)


def format_address_for_search(address: Optional[str], city: Optional[str],
                              street: Optional[str], number: Optional[str]) -> str:
    if street and city:
        line = " ".join(p for p in (street, number) if p)
        return f"{line}, {city}"
    return address or city or ""

@dataclass(frozen=True)
class FiberLookup:
    search_address: str
    city: Optional[str] = None

    @classmethod
    def from_query(cls, q: FiberQuery) -> "FiberLookup":
        return cls(
            search_address=format_address_for_search(q.address, q.city, q.street, q.number),
            city=q.city,
        )

def _with_query(url: str, address: str) -> str:
    return f"{url}?{urlencode({'q': address}, quote_via=quote)}"


# =========================
# Structured JSON providers
# =========================
class StructuredApiAdapter:
    def __init__(self, provider: FiberProvider, client: httpx.AsyncClient):
        self.provider = provider
        self.name = provider.name
        self.client = client

    def _payload(self, lookup: FiberLookup) -> dict:
        p = self.provider
        body = {p.address_field: lookup.search_address}
        if p.city_field and lookup.city:
            body[p.city_field] = lookup.city
        return body

    def _headers(self) -> dict:
        h = {"User-Agent": settings.browser_user_agent}
        if self.provider.referer:
            h["Referer"] = self.provider.referer
        return h

    async def attempt(self, lookup: FiberLookup) -> FiberResult | Abstain:
        p = self.provider
        try:
            data = await post_json(self.client, p.url, self._payload(lookup),
                                   headers=self._headers(), timeout=p.timeout)
        except (httpx.HTTPError, ValueError) as e:
            return Abstain(f"{type(e).__name__}: {e}")

        if not isinstance(data, dict) or not isinstance(data.get("available"), bool):
            return Abstain("response without boolean 'available'")

        available = data["available"]
        speed = (data.get("speed") or p.default_speed) if available else ""
        upstream_msg = None if p.pin_message else data.get("message")
        link = _with_query(p.link, lookup.search_address) if p.link_with_query else p.link
        return FiberResult(
            available=available,
            speed=str(speed),
            message=str(upstream_msg or p.default_message),
            link=link,
            checked=True,
        )


# =========================
# HTML scraping
# =========================
class MarkerMatcher:
    """
    Substring classifier for a provider's result page. Swap it for a real
    parser without touching the adapter.
    """

    def __init__(self, positive: tuple[str, ...], negative: tuple[str, ...],
                 speed_pattern: Optional[str] = None):
        self.positive = positive
        self.negative = negative
        self.speed_re = re.compile(speed_pattern) if speed_pattern else None

    @classmethod
    def for_target(cls, target: ScrapeTarget) -> "MarkerMatcher":
        return cls(target.positive, target.negative, target.speed_pattern)

    def classify(self, html: str) -> Optional[bool]:
        """True/False when the page says so, None when it says nothing we know."""
        if any(m in html for m in self.negative):
            return False
        if any(m in html for m in self.positive):
            return True
        return None

    def extract_speed(self, html: str) -> Optional[str]:
        if not self.speed_re:
            return None
        m = self.speed_re.search(html)
        return m.group(1).strip() if m else None


class HtmlScrapeAdapter:
    def __init__(self, target: ScrapeTarget, client: httpx.AsyncClient,
                 matcher: Optional[MarkerMatcher] = None):
        self.target = target
        self.name = target.name
        self.client = client
        self.matcher = matcher or MarkerMatcher.for_target(target)

    async def attempt(self, lookup: FiberLookup) -> FiberResult | Abstain:
        t = self.target
        try:
            html = await get_text(self.client, t.url, params={"q": lookup.search_address},
                                  headers={"User-Agent": settings.browser_user_agent},
                                  timeout=t.timeout)
        except httpx.HTTPError as e:
            return Abstain(f"{type(e).__name__}: {e}")

        verdict = self.matcher.classify(html)
        if verdict is None:
            return Abstain("no known marker on page")

        return FiberResult(
            available=verdict,
            speed=(self.matcher.extract_speed(html) or SPEED_1G) if verdict else "",
            message="סיבים זמינים באזור" if verdict else "סיבים לא זמינים כרגע",
            link=_with_query(t.url, lookup.search_address),
            checked=True,
        )


# =========================
# Terminal heuristic
# =========================
class MetroHeuristicFallback:
    name = "metro-heuristic"

    def __init__(self, major_cities: tuple[str, ...] = MAJOR_CITIES,
                 link: str = settings.bezeq_check_page):
        # only the first word of each metro name is matched
        self.tokens = tuple(c.split()[0] for c in major_cities if c.split())
        self.link = link

    def is_major(self, city: Optional[str]) -> bool:
        return bool(city) and any(tok in city for tok in self.tokens)

    def resolve(self, lookup: FiberLookup, partial=None) -> FiberResult:
        available = self.is_major(lookup.city)
        return FiberResult(
            available=available,
            speed=SPEED_1G if available else "",
            message="זמין ברוב האזורים בעיר" if available else "יש לבדוק זמינות באתר הספק",
            link=self.link,
            checked=True,
        )


def build_fiber_resolver(client: httpx.AsyncClient) -> ChainResolver:
    return ChainResolver(
        adapters=[
            StructuredApiAdapter(BEZEQ_API, client),
            HtmlScrapeAdapter(BEZEQ_PAGE, client),
            StructuredApiAdapter(PARTNER_API, client),
        ],
        terminal=MetroHeuristicFallback(),
    )

async def check_fiber(q: FiberQuery, client: httpx.AsyncClient) -> FiberResult:
    lookup = FiberLookup.from_query(q)
    logger.info("fiber lookup for %r (city=%r)", lookup.search_address, lookup.city)
    return await build_fiber_resolver(client).resolve(lookup)
