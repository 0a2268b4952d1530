"""Run-scoped cooperative cancellation.

A batch run polls its token once per iteration, before starting the next
item. Work already in flight is never interrupted.
"""

from __future__ import annotations


class CancellationToken:
    """Monotonic cancel flag owned by a single run."""

    __slots__ = ("_cancelled",)

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> bool:
        """Request cancellation. Returns ``True`` only for the first request."""
        if self._cancelled:
            return False
        self._cancelled = True
        return True

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self._cancelled})"
