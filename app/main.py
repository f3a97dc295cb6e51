import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .core.config import settings
from .routers import lookup
from .schemas.common import ErrorBody

logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
logger = logging.getLogger("lookup-api")

app = FastAPI(title=settings.app_name, version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    body = ErrorBody(error=first.removeprefix("Value error, "), details=jsonable_encoder(errors))
    return JSONResponse(status_code=400, content=body.model_dump())


app.include_router(lookup.router)

if settings.static_dir and Path(settings.static_dir).is_dir():
    logger.info("serving static files from %s", settings.static_dir)
    app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
else:
    @app.get("/")
    def root():
        return {"name": settings.app_name, "env": settings.app_env, "message": "OK"}
