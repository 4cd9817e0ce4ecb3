from __future__ import annotations

import logging
from typing import List

import psutil
from fastapi import APIRouter
from fastapi.responses import JSONResponse, Response

from firewall_api.errors import error_response
from firewall_api.models import Interface

router = APIRouter(tags=["interfaces"])

log = logging.getLogger(__name__)


def list_host_interfaces() -> List[Interface]:
    """Host network interfaces in the order the OS enumerates them."""
    return [Interface(iface=name) for name in psutil.net_if_addrs()]


@router.get("/interfaces")
def get_interfaces() -> Response:
    try:
        interfaces = list_host_interfaces()
    except (OSError, psutil.Error) as exc:
        log.error("listing interfaces failed: %s", exc)
        return error_response(exc)
    return JSONResponse([i.model_dump() for i in interfaces])
