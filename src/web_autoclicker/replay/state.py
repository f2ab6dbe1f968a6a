"""
Replay state machine and cooperative cancellation.

    idle -> running -> {paused <-> running} -> {complete | stopped | failed}

Terminal states reset to idle when the next job starts. Transitions not
in the table are refused, which makes e.g. resume() while idle a no-op.
"""

from enum import Enum
from typing import Dict, FrozenSet


class ReplayStatus(str, Enum):
    """Replay job status."""
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETE = "complete"
    STOPPED = "stopped"
    FAILED = "failed"

    @property
    def is_active(self) -> bool:
        return self in (ReplayStatus.RUNNING, ReplayStatus.PAUSED)

    @property
    def is_terminal(self) -> bool:
        return self in (ReplayStatus.COMPLETE, ReplayStatus.STOPPED, ReplayStatus.FAILED)


TRANSITIONS: Dict[ReplayStatus, FrozenSet[ReplayStatus]] = {
    ReplayStatus.IDLE: frozenset({ReplayStatus.RUNNING}),
    ReplayStatus.RUNNING: frozenset({
        ReplayStatus.PAUSED,
        ReplayStatus.COMPLETE,
        ReplayStatus.STOPPED,
        ReplayStatus.FAILED,
    }),
    ReplayStatus.PAUSED: frozenset({
        ReplayStatus.RUNNING,
        ReplayStatus.COMPLETE,
        ReplayStatus.STOPPED,
        ReplayStatus.FAILED,
    }),
    ReplayStatus.COMPLETE: frozenset({ReplayStatus.IDLE}),
    ReplayStatus.STOPPED: frozenset({ReplayStatus.IDLE}),
    ReplayStatus.FAILED: frozenset({ReplayStatus.IDLE}),
}


def can_transition(current: ReplayStatus, target: ReplayStatus) -> bool:
    """Whether the state machine allows ``current -> target``."""
    return target in TRANSITIONS[current]


class CancellationToken:
    """
    Pause and stop flags shared between the control methods and the
    execution loop. Pause is checked between actions, stop also before
    each element lookup.
    """

    def __init__(self) -> None:
        self._stopped = False
        self._paused = False

    @property
    def stopped(self) -> bool:
        return self._stopped

    @property
    def paused(self) -> bool:
        return self._paused and not self._stopped

    def stop(self) -> None:
        self._stopped = True

    def pause(self) -> None:
        self._paused = True

    def resume(self) -> None:
        self._paused = False
