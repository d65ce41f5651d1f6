"""
TweenHandle: one interpolation of a numeric attribute over elapsed time.

The handle never reads a clock: it is advanced by the caller with a
timestamp (milliseconds), so every animation in the cursor moves in lockstep
with the host's frame tick.
"""
from __future__ import annotations
from typing import Any, Callable, Optional

import numpy as np

from domain.enums import Direction, Easing
from utils.easing import get_easing


class TweenHandle:
    """
    Interpolates ``getattr(target, attr)`` towards ``end``.

    Parameters
    ----------
    target : object
        Object owning the animated attribute (a slot, the cursor ring, ...).
    attr : str
        Attribute name; a float or a small numpy vector.
    end : float | sequence
        Final value, same shape as the current value.
    duration_ms : float
        0 settles on the first advance().
    easing : Easing
        Curve applied to the linear progress.
    on_complete : callable, optional
        Called exactly once, when progress reaches 1.0.
    direction : Direction
        ALTERNATE goes out to ``end`` and back within ``duration_ms``.
    """

    def __init__(
        self,
        target: Any,
        attr: str,
        end: Any,
        duration_ms: float,
        easing: Easing = Easing.LINEAR,
        on_complete: Optional[Callable[[], None]] = None,
        direction: Direction = Direction.NORMAL,
    ) -> None:
        if duration_ms < 0:
            raise ValueError(f"Tween duration must be >= 0, got {duration_ms}")

        start = getattr(target, attr)
        self._target = target
        self._attr = attr
        self._scalar = np.ndim(start) == 0
        self._start = np.array(start, dtype=np.float64)
        self._end = np.array(end, dtype=np.float64)
        self._duration = float(duration_ms)
        self._ease = get_easing(easing)
        self._direction = Direction(direction)
        self._on_complete = on_complete

        self._t0: Optional[float] = None
        self._progress = 0.0
        self._paused = False
        self._completed = False

    # ------------------------------------------------------------------
    def advance(self, timestamp: float) -> None:
        """Move to ``timestamp``; the first call anchors the start time."""
        if self._paused or self._completed:
            return

        if self._t0 is None:
            self._t0 = timestamp

        if self._duration == 0:
            progress = 1.0
        else:
            progress = (timestamp - self._t0) / self._duration
            progress = min(1.0, max(0.0, progress))

        self._progress = progress
        self._apply(progress)

        if progress >= 1.0:
            self._completed = True
            if self._on_complete is not None:
                self._on_complete()

    def pause(self) -> None:
        """Freeze the handle. Harmless on a finished handle."""
        self._paused = True

    # ------------------------------------------------------------------
    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def running(self) -> bool:
        """True while the handle would still move on advance()."""
        return not (self._paused or self._completed)

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def duration_ms(self) -> float:
        return self._duration

    # ------------------------------------------------------------------
    def _apply(self, progress: float) -> None:
        if self._direction is Direction.ALTERNATE:
            progress = 1.0 - abs(2.0 * progress - 1.0)

        eased = self._ease(progress)
        value = self._start + (self._end - self._start) * eased
        setattr(self._target, self._attr, float(value) if self._scalar else value)

    def __repr__(self) -> str:
        return (
            f"<TweenHandle {self._attr} progress={self._progress:.2f} "
            f"paused={self._paused} completed={self._completed}>"
        )
