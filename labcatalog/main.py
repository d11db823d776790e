import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.trustedhost import TrustedHostMiddleware

from labcatalog.api.router import router
from labcatalog.core.config import settings
from labcatalog.core.logging import setup_logging
from labcatalog.services.errors import CatalogError, InternalError

setup_logging()
logger = logging.getLogger("labcatalog.main")

app = FastAPI(
    title="Lab Services Catalog",
    version="0.1.0",
)

allowed_hosts = [h.strip() for h in settings.ALLOWED_HOSTS.split(",") if h.strip()]
if not allowed_hosts:
    allowed_hosts = ["*"]
app.add_middleware(TrustedHostMiddleware, allowed_hosts=allowed_hosts)


@app.middleware("http")
async def security_headers_middleware(request: Request, call_next):
    response: Response = await call_next(request)
    if settings.SECURITY_HEADERS_ENABLED:
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Content-Security-Policy"] = "frame-ancestors 'none'; base-uri 'self'"
        if settings.ENV != "dev":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    return response


def _envelope(status_code: int, message: str, error: str | None = None, headers=None) -> JSONResponse:
    body = {"success": False, "message": message}
    if error is not None and settings.ENV == "dev":
        body["error"] = error
    return JSONResponse(status_code=status_code, content=body, headers=headers)


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    if isinstance(exc, InternalError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
        return _envelope(exc.status_code, exc.message, exc.detail)
    return _envelope(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _envelope(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"Invalid value for {where}: {first.get('msg')}" if where else str(first.get("msg"))
    else:
        message = "Invalid request"
    return _envelope(400, message, str(errors))


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("%s %s failed", request.method, request.url.path)
    return _envelope(500, "Server error", str(exc))


app.include_router(router)

@app.get("/health")
def health():
    return {"ok": True}
