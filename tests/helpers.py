import asyncio
import json

import httpx


def _bare(url) -> str:
    return str(url).split("?", 1)[0]


class Upstream:
    """Routes outbound calls to canned handlers keyed by URL (query stripped)."""

    def __init__(self):
        self.routes = {}
        self.calls: list[httpx.Request] = []

    def on(self, url: str, handler):
        self.routes[url] = handler
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        h = self.routes.get(_bare(request.url))
        if h is None:
            raise httpx.ConnectError("no route", request=request)
        return h(request) if callable(h) else h

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def called(self, url: str) -> int:
        return sum(1 for r in self.calls if _bare(r.url) == url)


def json_response(status: int, body) -> httpx.Response:
    return httpx.Response(status, content=json.dumps(body).encode("utf-8"),
                          headers={"Content-Type": "application/json"})


def html_response(status: int, text: str) -> httpx.Response:
    return httpx.Response(status, text=text, headers={"Content-Type": "text/html; charset=utf-8"})


def timeout(request: httpx.Request):
    raise httpx.ReadTimeout("timed out", request=request)


def run(coro):
    return asyncio.run(coro)
