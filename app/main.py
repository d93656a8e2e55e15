import logging
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version as package_version

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import start_http_server
from prometheus_fastapi_instrumentator import Instrumentator

from app.api.balance.routes import router as balance_router
from app.api.common.routes import router as base_router
from app.api.common.routes import setup_api_error_handler
from app.api.market.routes import router as market_router
from app.api.whatif.routes import router as whatif_router
from app.config import settings
from app.core.cache import Cache
from app.web.routes import router as web_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

try:
    version = package_version("eth-whatif")
except PackageNotFoundError:
    version = "0.0.0"

sentry_sdk.init(
    dsn=settings.SENTRY_DSN,
    environment=settings.ENVIRONMENT,
    release=f"eth-whatif@{version}",
)


@asynccontextmanager
async def lifespan_cache(app: FastAPI):
    await Cache.init()
    if not await Cache.ping():
        raise RuntimeError("Redis connection failed")
    yield
    await Cache.close()


@asynccontextmanager
async def lifespan_metrics(app: FastAPI):
    start_http_server(port=settings.PROMETHEUS_PORT)
    yield


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with lifespan_cache(app), lifespan_metrics(app):
        yield


app = FastAPI(title="Ethereum What-If Machine", version=version, lifespan=lifespan)
Instrumentator().instrument(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routers
app.include_router(base_router)
app.include_router(balance_router, prefix="/api")
app.include_router(market_router, prefix="/api")
app.include_router(whatif_router)

# Unprefixed routes for older clients
app.include_router(balance_router, include_in_schema=False)
app.include_router(market_router, include_in_schema=False)

# Browser UI
app.include_router(web_router)

# Register error handlers
setup_api_error_handler(app)
