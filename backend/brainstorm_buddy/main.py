import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from brainstorm_buddy.config import get_settings
from brainstorm_buddy.middleware import setup_middleware
from brainstorm_buddy.strategy.router import router as strategy_router
from brainstorm_buddy.presentation.router import router as page_router

settings = get_settings()
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "presentation" / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    required = ["openai_api_key"]
    missing = [k for k in required if not getattr(settings, k)]
    if missing:
        logger.warning(f"Missing env vars: {missing}. Strategy generation unavailable.")
    logger.info(f"Model: {settings.openai_model}, rate limit: {settings.rate_limit}")

    yield


app = FastAPI(
    title="Brainstorm Buddy API",
    version="1.0.0",
    docs_url="/docs" if settings.debug else None,
    lifespan=lifespan,
)

setup_middleware(app, settings.frontend_url, settings.allowed_hosts or None)

app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
app.include_router(strategy_router, prefix="/api")
app.include_router(page_router)


@app.get("/health")
async def health():
    return {"status": "healthy", "service": "brainstorm-buddy"}


@app.get("/health/detailed")
async def health_detailed():
    checks = {"api": "healthy"}
    if settings.openai_api_key:
        checks["openai"] = "configured"
    else:
        checks["openai"] = "missing"
    overall = "healthy" if all(v != "missing" for v in checks.values()) else "degraded"
    return {"status": overall, "checks": checks, "model": settings.openai_model}
