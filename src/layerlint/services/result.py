"""ServiceResult and ServiceError: what every layerlint service returns.

A service either ran (``ok``) and reports what it found in ``data``, or
could not run at all and says why in ``error``. Finding violations is
not an error; :meth:`ServiceResult.fails_build` turns the counts into
the CLI's exit status.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Reasons a service refuses to run."""

    PATH_NOT_FOUND = "PATH_NOT_FOUND"
    NO_FILES = "NO_FILES"
    INVALID_SEVERITY = "INVALID_SEVERITY"
    UNKNOWN_RULE = "UNKNOWN_RULE"
    INVALID_SPECIFIER = "INVALID_SPECIFIER"


class ServiceError(BaseModel):
    """Why a service could not run, with machine-readable *detail*."""

    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type of every service operation.

    Attributes:
        ok: False when the operation refused to run (see ``error``).
        op: Operation name, which also selects the renderer.
        data: Operation payload: ``violations``/``issues`` plus
            ``error_count`` and ``warning_count`` for lint and check.
        warnings: Problems that did not stop the run (unreadable files,
            broken plugins).
        error: Set exactly when ``ok`` is False.
        meta: Span tree under ``telemetry`` when ``--verbose``.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, code: ErrorCode, message: str, **detail: Any) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))

    def with_meta(self, **entries: Any) -> ServiceResult:
        """Copy with *entries* merged over the existing meta."""
        return self.model_copy(update={"meta": {**(self.meta or {}), **entries}})

    def fails_build(self, *, max_warnings: int = -1) -> bool:
        """True when a successful run found an error, or more than
        *max_warnings* warnings (``-1`` allows any number).

        Failed runs answer False: they exit non-zero on their own.
        """
        if not self.ok:
            return False
        if self.data.get("error_count", 0) > 0:
            return True
        return max_warnings >= 0 and self.data.get("warning_count", 0) > max_warnings
