# app/services/geocode.py
import logging
from typing import Optional

import httpx

from ..core.providers import GEOCODERS, FieldMap, Geocoder
from ..schemas.address import AddressResult, CoordinatesQuery
from ..utils.geo import DEFAULT_ANCHORS, AnchorTable
from ..utils.http import get_json
from .chain import Abstain, ChainResolver

logger = logging.getLogger(__name__)


def _first_present(source: dict, keys: tuple[str, ...]) -> str:
    for k in keys:
        v = source.get(k)
        s = str(v).strip() if v is not None else ""
        if s:
            return s
    return ""

def parse_address(payload: dict, fields: FieldMap) -> Optional[AddressResult]:
    """
    Maps a reverse-geocoder payload onto AddressResult. Each attribute takes
    the first non-empty key of its own priority list.
    """
    addr = payload.get("address")
    if not isinstance(addr, dict):
        return None
    result = AddressResult(
        street=_first_present(addr, fields.street),
        number=_first_present(addr, fields.number),
        city=_first_present(addr, fields.city),
        zip=_first_present(addr, fields.zip),
    )
    full = _first_present(payload, (fields.full_address,)) if fields.full_address else ""
    result.full_address = full or result.composed_full_address()
    return result


class ReverseGeocoderAdapter:
    def __init__(self, geocoder: Geocoder, client: httpx.AsyncClient):
        self.geocoder = geocoder
        self.name = geocoder.name
        self.client = client

    async def attempt(self, q: CoordinatesQuery) -> AddressResult | Abstain:
        g = self.geocoder
        params = {g.lat_param: q.lat, g.lon_param: q.lng, **dict(g.extra_params)}
        try:
            data = await get_json(self.client, g.url, params=params,
                                  headers=dict(g.headers) or None, timeout=g.timeout)
        except (httpx.HTTPError, ValueError) as e:
            return Abstain(f"{type(e).__name__}: {e}")

        result = parse_address(data, g.fields) if isinstance(data, dict) else None
        if result is None:
            return Abstain("response without 'address' object")
        if not result.city:
            return Abstain("no locality in response", partial=result)
        return result


class NearestCityFallback:
    name = "city-anchors"

    def __init__(self, table: AnchorTable = DEFAULT_ANCHORS):
        self.table = table

    def resolve(self, q: CoordinatesQuery, partial: Optional[AddressResult] = None) -> AddressResult:
        city = self.table.city_for(q.lat, q.lng)
        if partial is None:
            return AddressResult(city=city, full_address=city)

        # back-fill only the locality; never invent street/number/zip
        result = partial.model_copy()
        if not result.city:
            derived = result.full_address == result.composed_full_address()
            result.city = city
            if derived:
                result.full_address = result.composed_full_address()
        return result


def build_address_resolver(client: httpx.AsyncClient) -> ChainResolver:
    return ChainResolver(
        adapters=[ReverseGeocoderAdapter(g, client) for g in GEOCODERS],
        terminal=NearestCityFallback(),
    )

async def resolve_address(q: CoordinatesQuery, client: httpx.AsyncClient) -> AddressResult:
    logger.info("reverse lookup for %.5f,%.5f", q.lat, q.lng)
    return await build_address_resolver(client).resolve(q)
