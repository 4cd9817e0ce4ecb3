"""Runs the external firewall activation step (``awall activate``)."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import List, Optional, Protocol

from firewall_api.settings import DEFAULT_ACTIVATE_COMMAND, Settings

log = logging.getLogger(__name__)

ACTIVATE_SUBCOMMAND = "activate"


@dataclass(frozen=True)
class ActivationResult:
    ok: bool
    returncode: Optional[int] = None
    stdout: str = ""
    stderr: str = ""
    error: Optional[str] = None

    def describe(self) -> str:
        if self.error:
            return self.error
        detail = self.stderr.strip() or self.stdout.strip()
        text = f"exit status {self.returncode}"
        return f"{text}: {detail}" if detail else text


class Activator(Protocol):
    def activate(self) -> ActivationResult: ...


class CommandActivator:
    """
    Invokes ``<command> activate`` without a shell. Spawn failures and
    timeouts are reported as a failed result, never raised.
    """

    def __init__(self, command: str = DEFAULT_ACTIVATE_COMMAND, timeout: Optional[float] = None) -> None:
        self.command = command
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "CommandActivator":
        return cls(command=settings.activate_command, timeout=settings.activate_timeout_s)

    @property
    def argv(self) -> List[str]:
        return [self.command, ACTIVATE_SUBCOMMAND]

    def activate(self) -> ActivationResult:
        try:
            proc = subprocess.run(
                self.argv,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            result = ActivationResult(ok=False, error=f"{self.command} timed out after {exc.timeout}s")
        except OSError as exc:
            result = ActivationResult(ok=False, error=str(exc) or type(exc).__name__)
        else:
            result = ActivationResult(
                ok=proc.returncode == 0,
                returncode=proc.returncode,
                stdout=proc.stdout or "",
                stderr=proc.stderr or "",
            )

        if result.ok:
            log.info("firewall activated", extra={"command": self.argv})
        else:
            log.warning(
                "firewall activation failed: %s", result.describe(), extra={"command": self.argv}
            )
        return result


__all__ = ["ACTIVATE_SUBCOMMAND", "ActivationResult", "Activator", "CommandActivator"]
