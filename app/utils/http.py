# app/utils/http.py
import httpx
from typing import AsyncIterator, Optional


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """FastAPI dependency: one outbound client per inbound request."""
    async with httpx.AsyncClient(follow_redirects=True) as client:
        yield client


async def get_json(client: httpx.AsyncClient, url: str, params: Optional[dict] = None,
                   headers: Optional[dict] = None, timeout: float = 30.0):
    r = await client.get(url, params=params, headers=headers, timeout=timeout)
    r.raise_for_status()
    return r.json()


async def get_text(client: httpx.AsyncClient, url: str, params: Optional[dict] = None,
                   headers: Optional[dict] = None, timeout: float = 30.0):
    r = await client.get(url, params=params, headers=headers, timeout=timeout)
    r.raise_for_status()
    return r.text


async def post_json(client: httpx.AsyncClient, url: str, payload: dict,
                    headers: Optional[dict] = None, timeout: float = 30.0):
    h = {"Content-Type": "application/json", **(headers or {})}
    r = await client.post(url, json=payload, headers=h, timeout=timeout)
    r.raise_for_status()
    return r.json()
