# parkslot/main.py
"""
FastAPI application entry point.
Includes security middleware, error handlers, all routers, and the expiry sweep lifecycle.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from parkslot.routers import areas, bookings, vehicles, health
from parkslot.database import create_tables, SessionLocal
from parkslot.config import settings
from parkslot.exceptions import EngineError
from parkslot.services.booking_coordinator import coordinator
from parkslot.services.expiry_sweeper import ExpirySweeper
from parkslot.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title="Parkslot Booking API",
    description="Parking slot allocation, timed holds and booking confirmation.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],   # Mobile client calls from arbitrary origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── API Key Middleware ───────────────────────────────────────────────────────
class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Optional lightweight API key auth in front of every endpoint except health and docs.
    Set API_KEY in .env. Leave empty to disable auth.
    """
    open_paths = {"/api/v1/health", "/docs", "/redoc", "/openapi.json"}

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.open_paths or not settings.API_KEY:
            return await call_next(request)

        api_key = request.headers.get("X-API-Key") or request.query_params.get("api_key")
        if api_key != settings.API_KEY:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": "Invalid or missing API key"},
            )
        return await call_next(request)


if settings.API_KEY:
    app.add_middleware(APIKeyMiddleware)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Error Handlers ───────────────────────────────────────────────────────────
@app.exception_handler(EngineError)
async def engine_error_handler(request: Request, exc: EngineError):
    if exc.status_code >= 500:
        logger.error(f"Engine error on {request.url.path}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} → {exc.code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(bookings.router, prefix="/api/v1", tags=["🅿️  Bookings"])
app.include_router(areas.router,    prefix="/api/v1", tags=["🗺️  Areas & Slots"])
app.include_router(vehicles.router, prefix="/api/v1", tags=["🚗 Vehicles"])
app.include_router(health.router,   prefix="/api/v1", tags=["💚 Health"])

app.state.sweeper = ExpirySweeper(coordinator, SessionLocal, settings.SWEEP_INTERVAL_SECONDS)


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("🚀 Parkslot Backend starting up...")
    create_tables()
    logger.info("✅ Database tables ready")
    logger.info(f"⏳ Hold TTL: {settings.HOLD_TTL_SECONDS}s")
    logger.info(f"🌐 Listening on http://{settings.BACKEND_HOST}:{settings.BACKEND_PORT}")
    logger.info("📖 API docs at /docs")

    if settings.SWEEP_ENABLED:
        app.state.sweeper.start()


@app.on_event("shutdown")
async def shutdown():
    logger.info("🛑 Parkslot Backend shutting down...")
    await app.state.sweeper.stop()
