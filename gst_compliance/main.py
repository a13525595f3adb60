import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from gst_compliance import __version__
from gst_compliance.api.v1 import v1_router
from gst_compliance.api.v1.envelope import error_response
from gst_compliance.core.config import settings
from gst_compliance.core.db import engine
from gst_compliance.core.logging_config import setup_logging
from gst_compliance.infrastructure.db.base import Base

logger = logging.getLogger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    if settings.CREATE_TABLES_ON_STARTUP:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    logger.info("%s %s started (%s)", settings.APP_NAME, __version__, settings.ENVIRONMENT)
    yield
    await engine.dispose()


app = FastAPI(title=settings.APP_NAME, version=__version__, debug=settings.DEBUG, lifespan=lifespan)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return error_response(422, "Validation failed", errors=jsonable_encoder(exc.errors()))


app.include_router(v1_router)
