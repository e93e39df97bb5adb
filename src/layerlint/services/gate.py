"""SessionGate — run-once guard for project-wide checks.

A gate is owned by the host (one per CLI invocation or editor session)
and handed to the services that need it. The policy engine never sees
it, so policy decisions stay pure.
"""

from __future__ import annotations

import threading


class SessionGate:
    """Admit each key exactly once per gate instance. Thread-safe."""

    def __init__(self) -> None:
        self._seen: set[str] = set()
        self._lock = threading.Lock()

    def try_enter(self, key: str) -> bool:
        """Return True the first time *key* is seen, False afterwards."""
        with self._lock:
            if key in self._seen:
                return False
            self._seen.add(key)
            return True

    def reset(self) -> None:
        """Forget every key (a new session)."""
        with self._lock:
            self._seen.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._seen
