from __future__ import annotations

from dataclasses import dataclass

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

_STATE_KEY = "config_context"


@dataclass(frozen=True)
class ConfigContext:
    """Where the firewall configuration document is stored."""

    config_file: str


class ConfigContextMiddleware(BaseHTTPMiddleware):
    """
    Attaches the process-wide ConfigContext to every request:
    - request.state.config_context for handlers and dependencies.
    - request.scope["config_context"] for raw ASGI consumers.
    Never touches the filesystem and never alters the response.
    """

    def __init__(self, app: ASGIApp, context: ConfigContext) -> None:
        super().__init__(app)
        self.context = context

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        setattr(request.state, _STATE_KEY, self.context)
        request.scope[_STATE_KEY] = self.context
        return await call_next(request)


def get_config_context(request: Request) -> ConfigContext:
    """FastAPI dependency returning the context injected by ConfigContextMiddleware."""
    ctx = getattr(request.state, _STATE_KEY, None)
    if ctx is None:
        ctx = request.scope.get(_STATE_KEY)
    if not isinstance(ctx, ConfigContext):
        raise RuntimeError("ConfigContextMiddleware is not installed")
    return ctx


__all__ = ["ConfigContext", "ConfigContextMiddleware", "get_config_context"]
