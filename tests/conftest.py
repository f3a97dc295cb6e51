import pytest
from fastapi.testclient import TestClient

from app.core.config import settings
from app.main import app
from app.utils.http import get_http_client
from helpers import Upstream


@pytest.fixture
def upstream():
    return Upstream()


@pytest.fixture
def api(upstream):
    async def _client():
        async with upstream.client() as c:
            yield c

    app.dependency_overrides[get_http_client] = _client
    with TestClient(app) as tc:
        yield tc
    app.dependency_overrides.clear()


@pytest.fixture
def fiber_urls():
    return {
        "bezeq_api": settings.bezeq_api_url,
        "bezeq_page": settings.bezeq_check_page,
        "partner": settings.partner_api_url,
    }


@pytest.fixture
def geo_urls():
    return {
        "israel_post": settings.israel_post_reverse_url,
        "nominatim": settings.nominatim_reverse_url,
    }
