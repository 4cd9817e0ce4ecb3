"""
CORS policy middleware.

Unlike Starlette's CORSMiddleware this one does not filter by origin or
short-circuit preflights: after the downstream handler answers, it inserts
a fixed set of Access-Control-* headers on every response, errors included.

Allow-Origin resolution order:
1. the policy's fixed origin, when configured
2. the request's Origin header, when sent
3. "*"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from firewall_api.errors import error_response
from firewall_api.settings import DEFAULT_CORS_MAX_AGE, DEFAULT_CORS_METHODS, Settings

log = logging.getLogger(__name__)

ALLOW_CREDENTIALS = "true"
ALLOW_HEADERS = "Authorization, Content-Type"


def _ordered_methods(methods: Iterable[str]) -> Tuple[str, ...]:
    seen: list[str] = []
    for m in methods:
        name = str(m).strip().upper()
        if name and name not in seen:
            seen.append(name)
    return tuple(seen)


@dataclass(frozen=True)
class CORSPolicy:
    methods: Tuple[str, ...] = DEFAULT_CORS_METHODS
    origin: Optional[str] = None
    max_age: int = DEFAULT_CORS_MAX_AGE

    def __post_init__(self) -> None:
        if self.max_age < 0:
            raise ValueError("max_age must be >= 0")
        object.__setattr__(self, "methods", _ordered_methods(self.methods))

    @classmethod
    def default(cls) -> "CORSPolicy":
        return cls()

    @classmethod
    def from_settings(cls, settings: Settings) -> "CORSPolicy":
        return cls(
            methods=tuple(settings.cors_allow_methods),
            origin=settings.cors_allow_origin,
            max_age=settings.cors_max_age,
        )

    def resolve_origin(self, request_origin: Optional[str]) -> str:
        if self.origin is not None:
            return self.origin
        return request_origin if request_origin is not None else "*"

    def apply(self, response: Response, request_origin: Optional[str]) -> Response:
        h = response.headers
        # Assignment replaces any value set downstream.
        h["Access-Control-Allow-Credentials"] = ALLOW_CREDENTIALS
        h["Access-Control-Allow-Headers"] = ALLOW_HEADERS
        h["Access-Control-Allow-Origin"] = self.resolve_origin(request_origin)
        h["Access-Control-Allow-Methods"] = ", ".join(self.methods)
        h["Access-Control-Max-Age"] = str(self.max_age)
        return response


class CORSPolicyMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, policy: Optional[CORSPolicy] = None) -> None:
        super().__init__(app)
        self.policy = policy or CORSPolicy.default()

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            response = await call_next(request)
        except Exception:
            log.exception("unhandled error in %s %s", request.method, request.url.path)
            response = error_response("Internal Server Error")
        return self.policy.apply(response, request.headers.get("origin"))


__all__ = ["ALLOW_CREDENTIALS", "ALLOW_HEADERS", "CORSPolicy", "CORSPolicyMiddleware"]
