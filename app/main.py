import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.modules.i18n.service import Translator, language_from_header
from app.modules.auth import routes as auth_routes
from app.modules.i18n import routes as i18n_routes
from app.modules.navigation import routes as navigation_routes
from app.modules.affiliates import routes as affiliates_routes
from app.modules.payments import routes as payments_routes
from app.modules.loans import routes as loans_routes
from app.modules.cms_pages import routes as cms_pages_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


def error_page(request: Request, status_code: int, page: str, error: str, detail: str) -> JSONResponse:
    """Full-page error state for the web client, titled in the caller's language."""
    translator = Translator(language_from_header(request.headers.get("accept-language")))
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": detail,
            "error": error,
            "title": translator.t(f"pages.{page}.title"),
            "description": translator.t(f"pages.{page}.description"),
            "retry_path": request.url.path,
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    detail = "Internal server error" if settings.is_production else str(exc)
    return error_page(request, 500, "server_error", "internal_error", detail)


@app.exception_handler(404)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    return error_page(request, 404, "not_found", "not_found", exc.detail)


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include module routes
app.include_router(auth_routes.router, prefix="/api")
app.include_router(i18n_routes.router, prefix="/api")
app.include_router(navigation_routes.router, prefix="/api")
app.include_router(affiliates_routes.router, prefix="/api")
app.include_router(payments_routes.router, prefix="/api")
app.include_router(loans_routes.router, prefix="/api")
app.include_router(cms_pages_routes.router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    logger.info("Application startup")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": "Welcome to elverra-backend", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness probe: extend here with Supabase checks if needed."""
    return {"status": "ready"}
