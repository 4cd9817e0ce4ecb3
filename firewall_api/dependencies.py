from __future__ import annotations

from fastapi import Request

from firewall_api.middleware.config_context import ConfigContext, get_config_context
from firewall_api.services.activation import Activator
from firewall_api.settings import Settings


def get_activator(request: Request) -> Activator:
    return request.app.state.activator


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


__all__ = ["ConfigContext", "get_activator", "get_app_settings", "get_config_context"]
