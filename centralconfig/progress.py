"""Phase tracking for a generator run (scan, analyze, generate, write, update)."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

_STATUS_ICONS = {
    "completed": "+",
    "failed": "!",
    "skipped": "-",
    "running": "~",
}


@dataclass
class PhaseProgress:
    phase: str
    status: str = "running"  # "running" | "completed" | "failed" | "skipped"
    start_time: float | None = None
    end_time: float | None = None
    detail: str = ""
    error: str | None = None

    @property
    def duration(self) -> float | None:
        if self.start_time is not None and self.end_time is not None:
            return round(self.end_time - self.start_time, 3)
        return None

    def describe(self) -> str:
        icon = _STATUS_ICONS.get(self.status, "?")
        duration = f" ({self.duration}s)" if self.duration else ""
        detail = f" - {self.detail}" if self.detail else ""
        error = f" ERROR: {self.error}" if self.error else ""
        return f"[{icon}] {self.phase}{duration}{detail}{error}"


class ProgressTracker:
    """Record the phases of one command run, notifying callbacks on each change."""

    def __init__(self) -> None:
        self.phases: list[PhaseProgress] = []
        self.callbacks: list[Callable[[PhaseProgress], None]] = []

    @contextmanager
    def phase(self, name: str) -> Iterator[PhaseProgress]:
        """Run a block as phase *name*; exceptions mark it failed and propagate.

        The block may set ``detail`` on the yielded :class:`PhaseProgress`.
        """
        p = PhaseProgress(phase=name, start_time=time.monotonic())
        self.phases.append(p)
        self._notify(p)
        try:
            yield p
        except Exception as exc:
            p.status = "failed"
            p.error = str(exc)
            p.end_time = time.monotonic()
            self._notify(p)
            raise
        p.status = "completed"
        p.end_time = time.monotonic()
        self._notify(p)

    def skip(self, name: str, reason: str) -> None:
        p = PhaseProgress(phase=name, status="skipped", detail=reason)
        self.phases.append(p)
        self._notify(p)

    def get_summary(self) -> dict[str, Any]:
        total_duration = sum(p.duration or 0 for p in self.phases)
        return {
            "phases": [
                {
                    "phase": p.phase,
                    "status": p.status,
                    "duration": p.duration,
                    "detail": p.detail,
                    "error": p.error,
                }
                for p in self.phases
            ],
            "total_duration": round(total_duration, 3),
        }

    def _notify(self, p: PhaseProgress) -> None:
        for cb in self.callbacks:
            try:
                cb(p)
            except Exception:
                logger.debug("Progress callback error for phase %s", p.phase, exc_info=True)
