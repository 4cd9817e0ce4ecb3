from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool
from starlette.requests import ClientDisconnect

from firewall_api.dependencies import (
    ConfigContext,
    get_activator,
    get_app_settings,
    get_config_context,
)
from firewall_api.errors import error_response
from firewall_api.models import parse_config
from firewall_api.services.activation import Activator
from firewall_api.services.config_store import persist_and_activate, read_config_bytes
from firewall_api.settings import Settings

router = APIRouter(tags=["config"])

log = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"


@router.get("/config")
def get_config(ctx: ConfigContext = Depends(get_config_context)) -> Response:
    # Stored bytes are passed through unparsed.
    try:
        data = read_config_bytes(ctx.config_file)
    except (OSError, UnicodeDecodeError) as exc:
        log.warning("reading config failed: %s", exc, extra={"config_file": ctx.config_file})
        return error_response(exc)
    return Response(content=data, media_type=JSON_MEDIA_TYPE)


@router.put("/config")
async def put_config(
    request: Request,
    ctx: ConfigContext = Depends(get_config_context),
    activator: Activator = Depends(get_activator),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    """
    Replace the stored configuration:
    - body must parse as a ConfigDocument, otherwise nothing is written
    - the canonical form is written over the config file
    - the firewall is activated; its outcome only matters with activate_strict
    - the canonical form is echoed back
    """
    try:
        body = await request.body()
    except (ClientDisconnect, RuntimeError) as exc:
        log.warning("reading request body failed: %s", exc)
        return error_response(exc)

    try:
        doc = parse_config(body)
    except ValidationError as exc:
        log.info("rejected config: %d validation error(s)", exc.error_count())
        return error_response(exc)

    canonical = doc.to_canonical()
    try:
        result = await run_in_threadpool(persist_and_activate, ctx.config_file, canonical, activator)
    except OSError as exc:
        return error_response(exc)

    if settings.activate_strict and not result.ok:
        return error_response(f"activation failed: {result.describe()}")
    return Response(content=canonical, media_type=JSON_MEDIA_TYPE)
