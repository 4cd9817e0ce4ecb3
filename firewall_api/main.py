# firewall_api/main.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI

from firewall_api.pipeline import Pipeline
from firewall_api.routes import config as config_routes
from firewall_api.routes import interfaces as interfaces_routes
from firewall_api.services.activation import Activator, CommandActivator
from firewall_api.settings import Settings

log = logging.getLogger(__name__)

APP_VERSION = "1.0.0"


def create_app(
    settings: Optional[Settings] = None,
    activator: Optional[Activator] = None,
) -> FastAPI:
    """
    Routes:
      GET /interfaces
      GET /config
      PUT /config
    Anything else is a 404/405 from the router, still passing through the
    pipeline so CORS headers are attached.
    """
    settings = settings or Settings()
    pipeline = Pipeline.from_settings(settings)

    app = FastAPI(
        title="Awall configurator",
        description="Read network interfaces and read/replace the awall firewall policy.",
        version=APP_VERSION,
        middleware=pipeline.middleware(),
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.pipeline = pipeline
    app.state.activator = activator or CommandActivator.from_settings(settings)

    app.include_router(interfaces_routes.router)
    app.include_router(config_routes.router)

    log.debug(
        "app created",
        extra={"config_file": pipeline.context.config_file, "cors_origin": pipeline.cors.origin},
    )
    return app


build_app = create_app
