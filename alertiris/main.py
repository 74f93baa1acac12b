"""Alertmanager → IRIS relay — FastAPI service entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from starlette.responses import Response

from alertiris.config import Settings
from alertiris.ingestion.receiver import router as webhook_router
from alertiris.iris.client import IrisClient
from alertiris.middleware import MetricsMiddleware
from alertiris.reconcile.reconciler import AlertReconciler
from alertiris.store.fingerprints import FingerprintIndex
from alertiris.store.redis_client import close_redis, create_redis
from alertiris.telemetry.logging import setup_logging
from alertiris.telemetry.metrics import get_metrics
from alertiris.telemetry.tracing import setup_tracing

logger = logging.getLogger("alertiris")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    redis = create_redis(settings.store)
    index = FingerprintIndex(redis, settings.store.key_prefix)
    if await index.ping():
        logger.info("Redis connected: %s", settings.store.redis_url)
    else:
        logger.warning("Redis not reachable at startup: %s", settings.store.redis_url)

    iris = IrisClient(settings.iris)
    app.state.index = index
    app.state.reconciler = AlertReconciler(iris, index, settings.alerts)

    logger.info(
        "Relay ready: iris=%s resolved_action=%s customer_id=%d",
        settings.iris.url, settings.alerts.resolved_action.value, settings.alerts.customer_id,
    )

    yield

    await iris.close()
    await close_redis(redis)
    logger.info("Relay shut down")


def create_app(settings: Settings) -> FastAPI:
    app = FastAPI(
        title="alertiris",
        description="Relays Alertmanager notifications into IRIS alerts",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.add_middleware(MetricsMiddleware)
    app.include_router(webhook_router)

    @app.get("/health")
    async def health(request: Request):
        index: FingerprintIndex | None = getattr(request.app.state, "index", None)
        store_ok = index is not None and await index.ping()
        return {"status": "healthy" if store_ok else "degraded", "store": store_ok}

    @app.get("/metrics", include_in_schema=False)
    async def metrics():
        body, content_type = get_metrics()
        return Response(content=body, media_type=content_type)

    if settings.telemetry.otlp_endpoint:
        FastAPIInstrumentor.instrument_app(app)

    return app


def run() -> None:
    settings = Settings()
    setup_logging(settings.telemetry.log_level, settings.telemetry.otlp_endpoint)
    if settings.telemetry.otlp_endpoint:
        setup_tracing(settings.telemetry.otlp_endpoint)

    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        timeout_graceful_shutdown=settings.server.shutdown_grace_seconds,
        log_config=None,
    )


if __name__ == "__main__":
    run()
