# app/core/providers.py
"""
Upstream source tables, built once from settings at import time.
The order of each tuple is the order the chain tries them in.
"""
from dataclasses import dataclass
from typing import Optional

from .config import settings

# -------- fiber ----------
SPEED_1G = "עד 1Gbps"

@dataclass(frozen=True)
class FiberProvider:
    name: str
    url: str
    link: str
    timeout: float
    address_field: str = "address"
    city_field: Optional[str] = None
    default_speed: str = SPEED_1G
    default_message: str = "בדיקה הושלמה"
    pin_message: bool = False      # ignore the upstream message
    link_with_query: bool = False  # append ?q=<address> to the link
    referer: Optional[str] = None

BEZEQ_API = FiberProvider(
    name="bezeq-api",
    url=settings.bezeq_api_url,
    link=settings.bezeq_check_page,
    timeout=settings.fiber_timeout,
    city_field="city",
    link_with_query=True,
    referer=settings.bezeq_check_page,
)

PARTNER_API = FiberProvider(
    name="partner-api",
    url=settings.partner_api_url,
    link=settings.partner_link,
    timeout=settings.partner_timeout,
    default_speed="עד 500Mbps",
    default_message="נבדק דרך ספקים נוספים",
    pin_message=True,
)

@dataclass(frozen=True)
class ScrapeTarget:
    name: str
    url: str
    timeout: float
    positive: tuple[str, ...]
    negative: tuple[str, ...]
    speed_pattern: Optional[str] = None

BEZEQ_PAGE = ScrapeTarget(
    name="bezeq-page",
    url=settings.bezeq_check_page,
    timeout=settings.fiber_timeout,
    positive=("fiber-result-available", "זמין", "available"),
    negative=("לא זמין", "not available", "unavailable"),
    speed_pattern=r"מהירות: ([^<]+)<",
)

MAJOR_CITIES: tuple[str, ...] = (
    "תל אביב", "חיפה", "ירושלים", "ראשון לציון",
    "פתח תקווה", "נתניה", "חולון", "בת ים",
)

# -------- reverse geocoding ----------
@dataclass(frozen=True)
class FieldMap:
    street: tuple[str, ...]
    number: tuple[str, ...]
    city: tuple[str, ...]
    zip: tuple[str, ...]
    full_address: Optional[str] = None  # top-level key, outside `address`

@dataclass(frozen=True)
class Geocoder:
    name: str
    url: str
    timeout: float
    fields: FieldMap
    lat_param: str = "lat"
    lon_param: str = "lon"
    extra_params: tuple[tuple[str, str], ...] = ()
    headers: tuple[tuple[str, str], ...] = ()

ISRAEL_POST = Geocoder(
    name="israel-post",
    url=settings.israel_post_reverse_url,
    timeout=settings.geocode_timeout,
    fields=FieldMap(
        street=("street",),
        number=("house_number",),
        city=("city",),
        zip=("zipcode",),
    ),
)

NOMINATIM = Geocoder(
    name="nominatim",
    url=settings.nominatim_reverse_url,
    timeout=settings.geocode_timeout,
    fields=FieldMap(
        street=("road", "pedestrian"),
        number=("house_number",),
        city=("city", "town", "village", "municipality"),
        zip=("postcode",),
        full_address="display_name",
    ),
    extra_params=(
        ("format", "json"),
        ("accept-language", settings.geocoder_languages),
        ("addressdetails", "1"),
        ("zoom", "18"),
    ),
    headers=(("User-Agent", settings.geocoder_user_agent),),
)

GEOCODERS: tuple[Geocoder, ...] = (ISRAEL_POST, NOMINATIM)
