from __future__ import annotations

import logging
from pathlib import Path
from threading import RLock
from typing import Union

from firewall_api.services.activation import ActivationResult, Activator

log = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Serializes write+activate within this process. Reads are not locked, and
# other processes writing the same file are not coordinated.
_WRITE_LOCK = RLock()


def read_config_bytes(path: PathLike) -> bytes:
    """Stored document, byte for byte. Raises OSError, or UnicodeDecodeError if not UTF-8."""
    data = Path(path).read_bytes()
    data.decode("utf-8")
    return data


def write_config_text(path: PathLike, text: str) -> None:
    Path(path).write_text(text, encoding="utf-8")


def persist_and_activate(path: PathLike, text: str, activator: Activator) -> ActivationResult:
    """
    Overwrite the stored document, then activate it.
    A failed write raises OSError and activation is skipped.
    There is no rollback if activation fails after the write.
    """
    with _WRITE_LOCK:
        try:
            write_config_text(path, text)
        except OSError as exc:
            log.error("writing config failed: %s", exc, extra={"config_file": str(path)})
            raise
        log.info("config written", extra={"config_file": str(path), "bytes": len(text)})
        return activator.activate()


__all__ = ["persist_and_activate", "read_config_bytes", "write_config_text"]
