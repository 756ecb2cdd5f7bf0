"""
clarityweb/main.py

Purpose: Application entry point and composition root

- Initializes FastAPI app
- Loads configuration and logging
- Builds the shared objects (DB connector, session store, extractor)
  and stores them on app.state for request dependencies
- Registers middleware (CORS, timing, route gate) and routers
- No business logic should be written here
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import time

from clarityweb.core.config import settings, validate_settings
from clarityweb.core.errors import add_exception_handlers
from clarityweb.core.logging import setup_logging, get_logger
from clarityweb.core.route_gate import route_gate_middleware
from clarityweb.db.mongo import DatabaseConnector
from clarityweb.services.readability_service import ReadabilityExtractor
from clarityweb.services.session_service import SessionStore
from clarityweb.utils.constants import APP_DESCRIPTION, APP_NAME, APP_VERSION
from clarityweb.api import dashboard, extract, history, user

# Initialize logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info(f"🚀 Starting {APP_NAME} application...")

    try:
        logger.info("Validating configuration...")
        validate_settings()
        logger.info("✅ Configuration validated")

        # The connector connects on first use, not here
        app.state.db_connector = DatabaseConnector(
            settings.MONGODB_URI,
            settings.MONGODB_DB_NAME,
            server_selection_timeout_ms=settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
        )
        app.state.session_store = SessionStore(
            settings.SESSION_SECRET,
            settings.SESSION_MAX_AGE_SECONDS,
        )
        app.state.extractor = ReadabilityExtractor(
            timeout=settings.EXTRACTION_TIMEOUT_SECONDS,
            min_content_length=settings.EXTRACTION_MIN_CONTENT_LENGTH,
        )

        logger.info(f"🎉 {APP_NAME} application started successfully!")
        logger.info(f"Environment: {settings.ENVIRONMENT}")
        logger.info(f"Debug Mode: {settings.DEBUG}")

    except Exception as e:
        logger.critical(f"Failed to start application: {str(e)}", exc_info=True)
        raise

    yield  # Application runs here

    logger.info(f"🛑 Shutting down {APP_NAME} application...")

    try:
        await app.state.extractor.close()
        logger.info("✅ Extraction client closed")

        await app.state.db_connector.close()
        logger.info("✅ MongoDB connection closed")

        logger.info(f"👋 {APP_NAME} application shut down successfully")

    except Exception as e:
        logger.error(f"Error during shutdown: {str(e)}", exc_info=True)


app = FastAPI(
    title=APP_NAME,
    description=APP_DESCRIPTION,
    version=APP_VERSION,
    lifespan=lifespan,
    debug=settings.DEBUG,
    docs_url="/docs" if settings.is_development else None,  # Disable docs in production
    redoc_url="/redoc" if settings.is_development else None,
)

add_exception_handlers(app)

# Route gate runs innermost; registered first so CORS and timing wrap it
app.middleware("http")(route_gate_middleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add processing time header to all responses."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    if process_time > 5.0:
        logger.warning(
            f"Slow request detected: {request.method} {request.url.path}",
            extra={"process_time": process_time}
        )

    return response


app.include_router(user.router, prefix="/api/user", tags=["User"])
app.include_router(history.router, prefix="/api/history", tags=["History"])
app.include_router(extract.router, prefix="/api", tags=["Extraction"])
app.include_router(dashboard.router, tags=["Dashboard"])


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - basic info."""
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "description": APP_DESCRIPTION,
        "status": "running",
        "environment": settings.ENVIRONMENT
    }


@app.get("/health", tags=["Health"])
async def health_check(request: Request):
    """
    Health check endpoint. Does not open a database connection;
    a connector that was never used reports not_connected.
    """
    connector: DatabaseConnector = request.app.state.db_connector
    health_status = {
        "status": "healthy",
        "timestamp": time.time(),
        "environment": settings.ENVIRONMENT,
        "version": APP_VERSION,
        "checks": {}
    }

    if not connector.is_connected:
        health_status["checks"]["database"] = "not_connected"
    elif await connector.check_health():
        health_status["checks"]["database"] = "healthy"
    else:
        health_status["checks"]["database"] = "unhealthy"
        health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "healthy" else 503
    return JSONResponse(content=health_status, status_code=status_code)


@app.get("/ready", tags=["Health"])
async def readiness_check(request: Request):
    """
    Readiness check - connects if needed and pings the database.
    """
    connector: DatabaseConnector = request.app.state.db_connector
    try:
        await connector.acquire()
    except ConnectionError:
        logger.warning("Readiness check could not reach the database")
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "reason": "database_unavailable"}
        )

    if await connector.check_health():
        return {"status": "ready"}
    return JSONResponse(
        status_code=503,
        content={"status": "not_ready", "reason": "database_unavailable"}
    )


@app.get("/live", tags=["Health"])
async def liveness_check():
    """
    Liveness check - indicates if app is alive.
    """
    return {"status": "alive"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "clarityweb.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower()
    )
