"""
CursorHost: binds a CursorController to a Qt event loop.

  • QTimer on the GUI thread drives advance() with a QElapsedTimer clock.
  • Mouse presses become hardware-click codes once a remote asked for them.
  • Outbound cursor events are re-emitted as Qt signals for the UI.

Everything runs on the thread that owns the host, so the controller's
single-threaded model is preserved.
"""
from __future__ import annotations
import logging
from typing import List, Optional

from PyQt6.QtCore import QElapsedTimer, QEvent, QObject, Qt, QTimer, pyqtSignal

from app.config import CursorConfig
from core.cursor_controller import CursorController
from domain.enums import CursorEventKind
from domain.models import CursorEvent

logger = logging.getLogger(__name__)

_QT_BUTTONS = {
    Qt.MouseButton.LeftButton: 0,
    Qt.MouseButton.MiddleButton: 1,
    Qt.MouseButton.RightButton: 2,
}


def qt_button_code(button: Qt.MouseButton) -> Optional[int]:
    """DOM-style button code for a Qt mouse button (None if unmapped)."""
    return _QT_BUTTONS.get(button)


class CursorHost(QObject):
    """
    Signals:
        title_changed: (slot name, title or None)
        clicked: slot name of a confirmed action
        click_listener_requested: event names the platform should forward
    """

    title_changed            = pyqtSignal(str, object)
    clicked                  = pyqtSignal(str)
    click_listener_requested = pyqtSignal(list)

    def __init__(self, controller: CursorController, config: CursorConfig, parent=None) -> None:
        super().__init__(parent)
        self._controller = controller
        self._forward_clicks = config.always_forward_clicks

        self._clock = QElapsedTimer()
        self._timer = QTimer(self)
        self._timer.setInterval(config.tick_interval_ms)
        self._timer.timeout.connect(self._on_timeout)

        controller.subscribe(self._on_cursor_event)

    # ------------------------------------------------------------------
    def start(self) -> None:
        self._clock.start()
        self._timer.start()
        logger.info("[HOST] Frame tick every %dms", self._timer.interval())

    def stop(self) -> None:
        self._timer.stop()

    def tick(self, timestamp: float) -> List[CursorEvent]:
        """Advance the cursor to ``timestamp`` (ms)."""
        return self._controller.advance(timestamp)

    @property
    def controller(self) -> CursorController:
        return self._controller

    @property
    def forwarding_clicks(self) -> bool:
        return self._forward_clicks

    # ------------------------------------------------------------------
    def eventFilter(self, obj: QObject, event: QEvent) -> bool:
        """Install on a widget (or the app) to route its mouse presses."""
        if self._forward_clicks and event.type() == QEvent.Type.MouseButtonPress:
            code = qt_button_code(event.button())
            self._controller.handle_hardware_click(code)
        return super().eventFilter(obj, event)

    # ------------------------------------------------------------------
    def _on_timeout(self) -> None:
        self.tick(float(self._clock.elapsed()))

    def _on_cursor_event(self, event: CursorEvent) -> None:
        if event.kind is CursorEventKind.TITLE:
            self.title_changed.emit(event.slot.value, event.payload)
        elif event.kind is CursorEventKind.CLICK:
            self.clicked.emit(event.slot.value)
        elif event.kind is CursorEventKind.REMOTE_ADD_LISTENER:
            self._forward_clicks = True
            self.click_listener_requested.emit(list(event.payload["events"]))
