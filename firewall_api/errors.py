"""JSON error responses shared by the route handlers and middleware."""

from __future__ import annotations

from typing import Union

from fastapi.responses import JSONResponse

from firewall_api.models import Message


def error_response(error: Union[BaseException, str], status_code: int = 500) -> JSONResponse:
    """Terminal ``{"message": ...}`` response; validation and I/O errors share the 500 status."""
    text = error if isinstance(error, str) else str(error)
    if not text:
        text = type(error).__name__
    return JSONResponse(status_code=status_code, content=Message(message=text).model_dump())


__all__ = ["error_response"]
