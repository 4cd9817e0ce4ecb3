"""Ordered middleware chain applied to every route.

Starlette treats the first entry of ``FastAPI(middleware=[...])`` as the
outermost layer, so the order below is also the order on the way in:

    ConfigContextMiddleware -> CORSPolicyMiddleware -> router

On the way out only the CORS layer touches the response.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from starlette.middleware import Middleware

from firewall_api.middleware.config_context import ConfigContext, ConfigContextMiddleware
from firewall_api.middleware.cors import CORSPolicy, CORSPolicyMiddleware
from firewall_api.settings import Settings


@dataclass(frozen=True)
class Pipeline:
    context: ConfigContext
    cors: CORSPolicy = field(default_factory=CORSPolicy.default)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Pipeline":
        return cls(
            context=ConfigContext(config_file=settings.config_file),
            cors=CORSPolicy.from_settings(settings),
        )

    def middleware(self) -> List[Middleware]:
        return [
            Middleware(ConfigContextMiddleware, context=self.context),
            Middleware(CORSPolicyMiddleware, policy=self.cors),
        ]


__all__ = ["Pipeline"]
