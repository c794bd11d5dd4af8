from fastapi import APIRouter, Depends, FastAPI, Request # web framework
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager # for lifespan management
from typing import Any, Dict, Optional # type hints

# internal modules
from server.config import CORS_ALLOW_HEADERS, CORS_ALLOW_METHODS, Settings, load_settings
from server.logger import log
from server.mock_data import build_dashboard_data
from server.stats import RequestStats
from server.utils import iso_timestamp

SERVICE_BANNER = "🚀 Simple Web App API"
HELLO_MESSAGE = "Hello from AWS ECS Fargate! 🐳"


# --- dependencies: per-app state handed to the handlers ---
def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_stats(request: Request) -> RequestStats:
    return request.app.state.stats


router = APIRouter()


@router.api_route("/", methods=["GET", "HEAD"]) # service banner
def root(settings: Settings = Depends(get_settings)):
    return {
        "message": SERVICE_BANNER,
        "version": settings.app_version,
        "timestamp": iso_timestamp(),
    }


@router.api_route("/hello", methods=["GET", "HEAD"]) # greeting endpoint
def hello(settings: Settings = Depends(get_settings)):
    return {
        "message": HELLO_MESSAGE,
        "timestamp": iso_timestamp(),
        "environment": settings.environment,
    }


# health check endpoint
# uptime is reported as a string with an "s" suffix, e.g. "42s"
@router.api_route("/health", methods=["GET", "HEAD"])
def health(settings: Settings = Depends(get_settings), stats: RequestStats = Depends(get_stats)):
    return {
        "status": "healthy",
        "uptime": f"{stats.uptime_seconds()}s",
        "environment": settings.environment,
        "timestamp": iso_timestamp(),
        "version": settings.app_version,
    }


# request statistics endpoint
# the counting middleware has already run, so `requests` includes this call
# return value:
#   - requests: total requests since process start
#   - uptime: whole seconds since process start
#   - timestamp: current time
#   - lastRequest: time of the most recent request (null before the first one)
@router.api_route("/stats", methods=["GET", "HEAD"])
def get_request_stats(settings: Settings = Depends(get_settings), stats: RequestStats = Depends(get_stats)):
    snap = stats.snapshot()
    return {
        "requests": snap["requests"],
        "uptime": snap["uptime"],
        "timestamp": iso_timestamp(),
        "lastRequest": snap["last_request"],
        "environment": settings.environment,
    }


@router.api_route("/api/data", methods=["GET", "HEAD"]) # mock dashboard payload
def get_data():
    return {
        "success": True,
        "data": build_dashboard_data(),
        "timestamp": iso_timestamp(),
    }


# --- error handlers ---

def _request_target(request: Request) -> str:
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    return path


async def _http_error_handler(request: Request, exc: StarletteHTTPException):
    # unknown path, or known path with an unsupported method
    if exc.status_code in (404, 405):
        return JSONResponse(
            status_code=404,
            content={
                "error": "Route not found",
                "path": _request_target(request),
                "method": request.method,
                "timestamp": iso_timestamp(),
            },
        )
    return await http_exception_handler(request, exc)


async def _unhandled_error_handler(request: Request, exc: Exception):
    log.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    settings: Settings = request.app.state.settings
    return JSONResponse(
        status_code=500,
        content={
            "error": "Something went wrong!",
            "message": str(exc) if settings.is_development else "Internal server error",
        },
    )


# FastAPI lifespan: startup banner
@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    log.info(f"Server is running on port {settings.port}")
    log.info(f"Environment: {settings.environment}")
    log.info(f"Health check: http://localhost:{settings.port}/health")
    try:
        yield
    finally:
        snap = app.state.stats.snapshot()
        log.info(f"Server stopping after {snap['requests']} requests since {snap['start_time']}, uptime {snap['uptime']}s")


def create_app(settings: Optional[Settings] = None, stats: Optional[RequestStats] = None) -> FastAPI:
    """Build the API application around its own settings and request statistics."""
    if settings is None:
        settings = load_settings()
    if stats is None:
        stats = RequestStats()

    app = FastAPI(title="Simple Web App API", version=settings.app_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.stats = stats

    # request counting runs before every route, including 404s and 500s
    # handler errors are turned into responses here, inside the CORS layer
    @app.middleware("http")
    async def count_requests(request: Request, call_next):
        total = request.app.state.stats.record()
        log.debug(f"{request.method} {request.url.path} (request #{total})")
        try:
            return await call_next(request)
        except Exception as exc:
            return await _unhandled_error_handler(request, exc)

    # outermost: preflights are answered here and never reach the counter
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
    )

    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
    app.include_router(router)
    return app


app = create_app() # uvicorn server.api:app


def describe_app(app: FastAPI) -> Dict[str, Any]:
    """Summary used by the launcher log line."""
    settings: Settings = app.state.settings
    return {
        "host": settings.host,
        "port": settings.port,
        "environment": settings.environment,
        "version": settings.app_version,
        "cors_origins": list(settings.cors_origins),
    }
