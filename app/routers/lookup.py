# app/routers/lookup.py
import logging

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from ..schemas.address import AddressResult, CoordinatesQuery
from ..schemas.common import ErrorBody
from ..schemas.fiber import FiberQuery, FiberResult
from ..services.fiber import check_fiber
from ..services.geocode import resolve_address
from ..utils.http import get_http_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["lookup"])

_ERROR_RESPONSES = {400: {"model": ErrorBody}, 500: {"model": ErrorBody}}


def _internal_error(what: str, e: Exception) -> JSONResponse:
    body = ErrorBody(error=f"Failed to {what}", details=str(e))
    return JSONResponse(status_code=500, content=body.model_dump())


@router.get("/health", response_class=PlainTextResponse)
def health():
    return "Server is healthy"


@router.post("/check-fiber", response_model=FiberResult, responses=_ERROR_RESPONSES)
async def check_fiber_endpoint(q: FiberQuery, client: httpx.AsyncClient = Depends(get_http_client)):
    try:
        return await check_fiber(q, client)
    except Exception as e:
        logger.exception("fiber chain failed")
        return _internal_error("check fiber availability", e)


@router.post("/get-address", response_model=AddressResult, responses=_ERROR_RESPONSES)
async def get_address_endpoint(q: CoordinatesQuery, client: httpx.AsyncClient = Depends(get_http_client)):
    try:
        return await resolve_address(q, client)
    except Exception as e:
        logger.exception("address chain failed")
        return _internal_error("get address", e)
