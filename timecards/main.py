from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from timecards.core.config import get_settings
from timecards.core.errors import StoreError, TimecardError
from timecards.core.logging import configure_logging
from timecards.models import timecard, user  # noqa: F401
from timecards.routers.auth import router as auth_router
from timecards.routers.timecards import router as timecards_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    yield


app = FastAPI(
    title="Timecards",
    lifespan=lifespan,
)


def _error_body(msg: str, detail=None) -> dict:
    body = {"msg": msg}
    if detail and get_settings().expose_error_details:
        body["error"] = detail
    return body


@app.exception_handler(TimecardError)
async def handle_timecard_error(request: Request, exc: TimecardError):
    if isinstance(exc, StoreError):
        logger.error(
            "Store failure",
            exc_info=exc.__cause__ or exc,
            extra={"path": request.url.path, "method": request.method},
        )
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.msg, exc.detail))


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    detail = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    return JSONResponse(status_code=400, content=_error_body("Invalid request", detail))


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"msg": str(exc.detail)})


@app.middleware("http")
async def catch_unhandled_exceptions(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled exception")
        return JSONResponse(status_code=500, content={"msg": "Server error"})


app.include_router(auth_router)
app.include_router(timecards_router)


@app.get("/")
def root():
    return {"status": "Timecards running"}


@app.get("/health")
def health():
    return {
        "status": "ok",
        "version": "1.0.0",
    }
