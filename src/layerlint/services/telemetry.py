"""Timing spans and work counters for ``--verbose`` runs.

A traced service call opens a root span and ``trace_span`` nests its
phases (discover, evaluate, one span per structural check) below it.
Every span keeps integer counters bumped through :func:`count`: files
read, edges decided, directories inspected. A span reports its own
counters plus those of its descendants, so the root of a lint run
carries the totals for the whole run.

Telemetry is off unless ``--verbose``; then every entry point returns
after a single ContextVar read.
"""

from __future__ import annotations

import functools
import time
from collections import Counter
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from layerlint.services.result import ServiceResult

logger = structlog.get_logger(__name__)

_enabled: ContextVar[bool] = ContextVar("_enabled", default=False)
_active: ContextVar[Span | None] = ContextVar("_active", default=None)


@dataclass
class Span:
    """One timed phase and the work it counted."""

    name: str
    children: list[Span] = field(default_factory=list)
    counts: Counter[str] = field(default_factory=Counter)
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None

    @property
    def duration_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    def close(self) -> None:
        self.finished = time.perf_counter()

    def totals(self) -> Counter[str]:
        """Own counters plus every descendant's."""
        total = Counter(self.counts)
        for child in self.children:
            total.update(child.totals())
        return total

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "duration_ms": round(self.duration_ms, 2),
        }
        totals = self.totals()
        if totals:
            result["counts"] = dict(totals)
        if self.children:
            result["children"] = [c.to_dict() for c in self.children]
        return result


def _open_span() -> Span | None:
    return _active.get() if _enabled.get() else None


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Time a phase as a child of the open span.

    Yields None when telemetry is off or no traced call is running.
    """
    parent = _open_span()
    if parent is None:
        yield None
        return

    child = Span(name=name)
    parent.children.append(child)
    token = _active.set(child)
    try:
        yield child
    finally:
        child.close()
        _active.reset(token)


def count(key: str, n: int = 1) -> None:
    """Add *n* to counter *key* on the innermost open span."""
    span = _open_span()
    if span is not None:
        span.counts[key] += n


def _finish(span: Span, token: Token[Span | None], outcome: str) -> None:
    span.close()
    _active.reset(token)
    logger.debug(
        "span.complete",
        span_name=span.name,
        duration_ms=round(span.duration_ms, 2),
        outcome=outcome,
        **span.totals(),
    )


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Run a service method under a root span and attach the span tree
    to the returned ServiceResult as ``meta["telemetry"]``."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        span = Span(name=func.__qualname__)
        token = _active.set(span)
        try:
            result = func(*args, **kwargs)
        except Exception:
            _finish(span, token, "raised")
            raise

        if not isinstance(result, ServiceResult):
            _finish(span, token, "ok")
            return result
        _finish(span, token, "ok" if result.ok else "refused")
        return result.with_meta(telemetry=span.to_dict())  # type: ignore[return-value]

    return wrapper


def enable_telemetry() -> None:
    """Switch spans on for this context (``--verbose``)."""
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)


def current_span() -> Span | None:
    """The innermost open span, or None when telemetry is off."""
    return _open_span()
