from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RouteCheck:
    """One expected exchange: a request and the reply the server must give."""

    method: str
    path: str
    status: int
    content_type: str
    body: str | dict[str, Any]

    @property
    def name(self) -> str:
        return f"{self.method} {self.path}"


@dataclass
class CheckResult:
    """Outcome of running a RouteCheck against a live server."""

    check: RouteCheck
    ok: bool
    elapsed_ms: float
    status: int | None = None
    detail: str | None = None


class SmokeError(RuntimeError):
    """Raised when the smoke flow cannot proceed (e.g., server never answers)."""


class ReadinessError(SmokeError):
    """Raised when the server does not answer within the readiness timeout."""
