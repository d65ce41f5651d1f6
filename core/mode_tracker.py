"""
InteractionModeTracker: decides between gaze-dwell and direct-click input.

Touch-first devices (phones in a headset) start in gaze mode. Connecting a
remote switches to direct clicks; disconnecting it restores the device's
native mode.
"""
from __future__ import annotations
import logging

logger = logging.getLogger(__name__)


class InteractionModeTracker:
    """
    Parameters
    ----------
    touch_capable : bool
        Device touch capability, captured once at startup.
    """

    def __init__(self, touch_capable: bool) -> None:
        self._touch_capable = bool(touch_capable)
        self._gaze_click = self._touch_capable
        self._remote_connected = False

    # ------------------------------------------------------------------
    def on_remote_connected(self) -> None:
        self._remote_connected = True
        if self._gaze_click:
            logger.info("[MODE] Remote connected → direct click")
        self._gaze_click = False

    def on_remote_disconnected(self) -> None:
        self._remote_connected = False
        self._gaze_click = self._touch_capable
        logger.info(
            "[MODE] Remote disconnected → %s",
            "gaze dwell" if self._gaze_click else "direct click",
        )

    # ------------------------------------------------------------------
    @property
    def gaze_click(self) -> bool:
        """True when actions are confirmed by dwelling instead of clicking."""
        return self._gaze_click

    @property
    def touch_capable(self) -> bool:
        return self._touch_capable

    @property
    def remote_connected(self) -> bool:
        return self._remote_connected

    def __repr__(self) -> str:
        mode = "gaze" if self._gaze_click else "click"
        return f"<InteractionModeTracker mode={mode} remote={self._remote_connected}>"
