from __future__ import annotations

from fastapi import FastAPI

from mq_bridge import __version__
from mq_bridge.config import AppConfig
from mq_bridge.core import BridgeService
from mq_bridge.settings import Settings, get_settings, prepare_config

from .routers import health, query


def create_app(
    settings: Settings | None = None,
    *,
    config: AppConfig | None = None,
    service: BridgeService | None = None,
) -> FastAPI:
    config = config or prepare_config(settings or get_settings())
    if not config.runtime.enable_local_api:
        raise RuntimeError("Local API is disabled. Enable it via configuration or environment.")

    app = FastAPI(title="mq bridge", version=__version__)
    app.state.config = config
    app.state.service = service or BridgeService(config)

    app.include_router(health.router)
    app.include_router(query.router)
    return app


__all__ = ["create_app"]
