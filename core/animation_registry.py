"""
AnimationRegistry: owns every running tween, at most one per logical key.

Scheduling a key that is already busy pauses the previous handle, so two
tweens never drive the same visual target at once.
"""
from __future__ import annotations
import logging
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

from core.tween import TweenHandle
from domain.enums import Direction, Easing

logger = logging.getLogger(__name__)


class AnimationRegistry:
    """
    Usage
    -----
    registry = AnimationRegistry()
    registry.schedule("primary", slot, "opacity", 0.75, 200, Easing.EASE_OUT_CUBIC)
    registry.advance_all(now_ms)   # once per frame
    """

    def __init__(self) -> None:
        self._handles: Dict[str, Optional[TweenHandle]] = {}

    # ------------------------------------------------------------------
    def schedule(
        self,
        key: str,
        target: Any,
        attr: str,
        end: Any,
        duration_ms: float,
        easing: Easing = Easing.LINEAR,
        on_complete: Optional[Callable[[], None]] = None,
        direction: Direction = Direction.NORMAL,
    ) -> TweenHandle:
        """Pause whatever runs under ``key`` and store a fresh handle."""
        self.pause(key)
        handle = TweenHandle(
            target, attr, end, duration_ms,
            easing=easing, on_complete=on_complete, direction=direction,
        )
        self._handles[key] = handle
        logger.debug("[ANIM] %s → %s over %.0fms (%s)", key, attr, duration_ms, Easing(easing).value)
        return handle

    def advance_all(self, timestamp: float) -> None:
        """
        Advance every live handle to ``timestamp``.

        Iterates over a snapshot: completion callbacks may schedule or clear
        entries, and handles added during this pass move on the next one.
        """
        for handle in list(self._handles.values()):
            if handle is None:
                continue
            handle.advance(timestamp)

    # ------------------------------------------------------------------
    def get(self, key: str) -> Optional[TweenHandle]:
        return self._handles.get(key)

    def pause(self, key: str) -> bool:
        """Pause the handle under ``key``. Returns False if there was none."""
        handle = self._handles.get(key)
        if handle is None:
            return False
        handle.pause()
        return True

    def clear(self, key: str, handle: Optional[TweenHandle] = None) -> None:
        """
        Drop the entry for ``key``.
        With ``handle`` given, only if that handle is still the one stored.
        """
        if handle is not None and self._handles.get(key) is not handle:
            return
        if key in self._handles:
            self._handles[key] = None

    def pause_all(self, keep: Iterable[str] = ()) -> None:
        """Pause and drop every entry except those under ``keep``."""
        keep = set(keep)
        for key in [k for k in self._handles if k not in keep]:
            handle = self._handles.pop(key)
            if handle is not None:
                handle.pause()

    def live_keys(self) -> List[str]:
        """Keys whose handle would still move on the next advance."""
        return [k for k, h in self._handles.items() if h is not None and h.running]

    # ------------------------------------------------------------------
    def __contains__(self, key: object) -> bool:
        return self._handles.get(key) is not None  # type: ignore[arg-type]

    def __len__(self) -> int:
        return sum(1 for h in self._handles.values() if h is not None)

    def __iter__(self) -> Iterator[str]:
        return (k for k, h in self._handles.items() if h is not None)
