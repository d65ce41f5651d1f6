"""
CursorController: orchestrates the reticle cursor's interaction model.

Inbound signals (activate / deactivate / click / remote connect / tick) mutate
the two action slots and the mode tracker; every visual change is a tween in
the AnimationRegistry, advanced by the host's frame tick.

Design decisions:
  - The dwell timer *is* the slot color tween: a duration-0 tween settles on
    the next tick (click mode), a timed one counts the dwell (gaze mode).
  - Completions only fire inside advance(), so a whole activate() batch is
    applied before any callback or click can run.
  - Every outbound event goes through _emit(): listeners see it immediately
    and the public entry point returns the events it produced.
"""
from __future__ import annotations
import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from app.config import CursorConfig
from core.animation_registry import AnimationRegistry
from core.mode_tracker import InteractionModeTracker
from core.tween import TweenHandle
from domain.enums import CursorEventKind, Direction, Easing, InboundSignal, SlotId, SlotState
from domain.models import (
    ActionDescriptor,
    ActionSlot,
    CursorEvent,
    CursorRing,
    EventLog,
    IconHandle,
    RenderHints,
)
from utils.constants import (
    BUTTON_PRIMARY,
    BUTTON_SECONDARY,
    CLICK_LISTENER_EVENTS,
    CURSOR_KEY,
    RENDER_ORDER_DEFAULT,
    RENDER_ORDER_ON_TOP,
    RING_OPACITY,
)

logger = logging.getLogger(__name__)

Listener = Callable[[CursorEvent], None]
DescriptorLike = Union[ActionDescriptor, Mapping[str, Any]]

_BUTTONS: Dict[int, SlotId] = {
    BUTTON_PRIMARY: SlotId.PRIMARY,
    BUTTON_SECONDARY: SlotId.SECONDARY,
}


def render_hints(on_top: bool) -> RenderHints:
    """An on-top cursor ignores the depth buffer and draws last."""
    return RenderHints(
        render_order=RENDER_ORDER_ON_TOP if on_top else RENDER_ORDER_DEFAULT,
        depth_test=not on_top,
        depth_write=not on_top,
    )


class CursorController:
    """
    The single entry point for cursor interaction.

    Usage
    -----
    cursor = CursorController(config)
    cursor.activate([ActionDescriptor(SlotId.PRIMARY, title="Open", delay_ms=800,
                                      triggers_click=True)])
    events = cursor.advance(now_ms)    # once per frame

    Parameters
    ----------
    config : CursorConfig, optional
        When given, initialize() is called right away.
    """

    def __init__(self, config: Optional[CursorConfig] = None) -> None:
        self._config: Optional[CursorConfig] = None
        self._registry: Optional[AnimationRegistry] = None
        self._mode: Optional[InteractionModeTracker] = None
        self._slots: Dict[SlotId, ActionSlot] = {}
        self._ring: Optional[CursorRing] = None
        self._hints: Optional[RenderHints] = None
        self._listeners: List[Listener] = []
        self._pending: Dict[SlotId, TweenHandle] = {}
        self._log = EventLog()

        if config is not None:
            self.initialize(config)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def initialize(self, config: CursorConfig) -> None:
        """Create slots, registry and mode tracker. Called once."""
        self._config = config
        self._registry = AnimationRegistry()
        self._mode = InteractionModeTracker(config.touch_capable)
        self._ring = CursorRing(color=config.start_color.as_array(), opacity=RING_OPACITY)
        self._slots = {
            slot_id: ActionSlot(id=slot_id, color=config.start_color.as_array())
            for slot_id in SlotId
        }
        self._hints = render_hints(config.on_top)
        logger.info(
            "[CURSOR] Initialised (%s, on_top=%s)",
            "gaze dwell" if self._mode.gaze_click else "direct click",
            config.on_top,
        )

    def reconfigure(self, config: CursorConfig) -> None:
        """
        Apply new colors / render flags. Visuals are rebuilt from scratch:
        icon fades and the ring flash are dropped and icons are hidden.
        Pending dwells keep counting and still fire their click and
        callback. The interaction mode is kept.
        """
        self._require()
        self._config = config
        pending = {
            slot_id for slot_id, handle in self._pending.items()
            if handle.running and self._registry.get(self._slots[slot_id].delay_key) is handle
        }
        self._registry.pause_all(keep=[self._slots[s].delay_key for s in pending])
        self._ring.color = config.start_color.as_array()
        self._ring.opacity = RING_OPACITY
        for slot in self._slots.values():
            slot.reset(config.start_color, keep_state=slot.id in pending)
        self._hints = render_hints(config.on_top)
        logger.info("[CURSOR] Reconfigured (on_top=%s)", config.on_top)

    def advance(self, timestamp: float) -> List[CursorEvent]:
        """Per-frame tick: move every live tween to ``timestamp`` (ms)."""
        self._require()
        self._registry.advance_all(timestamp)
        return self._log.drain()

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------
    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Inbound signals
    # ------------------------------------------------------------------
    def dispatch(self, signal: Union[InboundSignal, str], payload: Any = None) -> List[CursorEvent]:
        """Route a named host signal to the matching entry point."""
        try:
            signal = InboundSignal(signal)
        except ValueError:
            logger.warning("[CURSOR] Ignoring unknown signal %r", signal)
            return []

        payload = payload or {}
        if signal is InboundSignal.REMOTE_CONNECTED:
            return self.remote_connected()
        if signal is InboundSignal.REMOTE_DISCONNECTED:
            return self.remote_disconnected()
        if signal is InboundSignal.CURSOR_ACTIVATE:
            return self.activate(payload.get("actions") or [])
        if signal is InboundSignal.CURSOR_DEACTIVATE:
            return self.deactivate(payload.get("actions") or [])
        if signal is InboundSignal.HARDWARE_CLICK:
            return self.handle_hardware_click(payload.get("button"))

        timestamp = payload.get("time")
        if timestamp is None:
            logger.warning("[CURSOR] Ignoring tick without a timestamp")
            return []
        return self.advance(timestamp)

    def remote_connected(self) -> List[CursorEvent]:
        """A remote with a physical button is available: ask for its clicks."""
        self._require()
        self._emit(
            CursorEventKind.REMOTE_ADD_LISTENER,
            payload={"events": list(CLICK_LISTENER_EVENTS)},
        )
        self._mode.on_remote_connected()
        return self._log.drain()

    def remote_disconnected(self) -> List[CursorEvent]:
        self._require()
        self._mode.on_remote_disconnected()
        return self._log.drain()

    def activate(self, descriptors: Iterable[DescriptorLike]) -> List[CursorEvent]:
        """Show titles/icons for the given actions and start their delay tweens."""
        self._require()
        for raw in descriptors:
            descriptor = self._descriptor(raw)
            if descriptor is None:
                continue
            self._activate_one(descriptor)
        return self._log.drain()

    def deactivate(self, slot_ids: Iterable[Union[SlotId, str]]) -> List[CursorEvent]:
        """Abort the given actions: no callback, no click."""
        self._require()
        for raw in slot_ids:
            slot = self._slot(raw)
            if slot is None:
                continue
            slot.title = None
            self._emit(CursorEventKind.TITLE, slot.id, None)
            self._set_icon(slot, None)
            self._pending.pop(slot.id, None)
            self.reset_delay_animation(slot.id, slot.delay_key)
            slot.state = SlotState.IDLE
            logger.debug("[CURSOR] %s deactivated", slot.id.value)
        return self._log.drain()

    def handle_hardware_click(self, button: Optional[int]) -> List[CursorEvent]:
        """Button 0 → primary, 2 → secondary, anything else is ignored."""
        self._require()
        slot_id = _BUTTONS.get(button) if isinstance(button, int) else None
        if slot_id is None:
            logger.debug("[CLICK] Ignoring button %r", button)
            return []
        return self.trigger_click(slot_id)

    def trigger_click(self, slot_id: Union[SlotId, str]) -> List[CursorEvent]:
        """Fire ``<slot>-click`` and flash the ring."""
        self._require()
        slot = self._slot(slot_id)
        if slot is not None:
            self._click(slot.id)
        return self._log.drain()

    # ------------------------------------------------------------------
    # Slot animations
    # ------------------------------------------------------------------
    def set_icon(self, slot_id: Union[SlotId, str], icon: Optional[IconHandle]) -> None:
        """Fade the slot icon in (icon given) or out and detach it (None)."""
        self._require()
        slot = self._slot(slot_id)
        if slot is not None:
            self._set_icon(slot, icon)

    def reset_delay_animation(self, slot_id: Union[SlotId, str], key: str) -> None:
        """Ease the slot color back to the start color, if a delay tween exists."""
        self._require()
        slot = self._slot(slot_id)
        if slot is None or self._registry.get(key) is None:
            return
        self._schedule_transient(
            key, slot, "color", self._config.start_color.as_array(),
            self._config.fade_duration_ms, Easing.EASE_OUT_CUBIC,
        )

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------
    @property
    def config(self) -> Optional[CursorConfig]:
        return self._config

    @property
    def registry(self) -> AnimationRegistry:
        self._require()
        return self._registry

    @property
    def mode(self) -> InteractionModeTracker:
        self._require()
        return self._mode

    @property
    def gaze_click(self) -> bool:
        return self.mode.gaze_click

    @property
    def ring(self) -> CursorRing:
        self._require()
        return self._ring

    @property
    def render_hints(self) -> RenderHints:
        self._require()
        return self._hints

    def slot(self, slot_id: Union[SlotId, str]) -> ActionSlot:
        self._require()
        return self._slots[SlotId(slot_id)]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _activate_one(self, descriptor: ActionDescriptor) -> None:
        slot = self._slot(descriptor.name)
        if slot is None:
            return
        cfg = self._config

        slot.title = descriptor.title
        self._emit(CursorEventKind.TITLE, slot.id, descriptor.title)
        self._set_icon(slot, descriptor.icon)

        use_delay = (
            descriptor.delay_ms is not None
            and descriptor.delay_ms > 0
            and self._mode.gaze_click
        )
        target = cfg.interaction_color if use_delay else cfg.start_color
        slot.state = SlotState.DWELL_COUNTING if use_delay else SlotState.ICON_FADE_IN

        self._pending[slot.id] = self._registry.schedule(
            slot.delay_key, slot, "color", target.as_array(),
            descriptor.delay_ms if use_delay else 0,
            Easing.LINEAR,
            on_complete=lambda: self._delay_complete(slot, descriptor, use_delay),
        )
        logger.debug(
            "[CURSOR] %s activated (title=%r, dwell=%s)",
            slot.id.value, descriptor.title,
            f"{descriptor.delay_ms:.0f}ms" if use_delay else "off",
        )

    def _delay_complete(self, slot: ActionSlot, descriptor: ActionDescriptor, use_delay: bool) -> None:
        self._pending.pop(slot.id, None)
        if use_delay:
            slot.state = SlotState.DWELL_COMPLETE
        self.reset_delay_animation(slot.id, slot.delay_key)

        if self._mode.gaze_click and descriptor.triggers_click:
            self._click(slot.id)

        if descriptor.callback is not None:
            try:
                descriptor.callback()
            except Exception:
                logger.exception("[CURSOR] Callback for %s failed", slot.id.value)

    def _set_icon(self, slot: ActionSlot, icon: Optional[IconHandle]) -> None:
        fade = self._config.fade_duration_ms

        if icon is None:
            def _detach() -> None:
                slot.icon = None
                slot.visible = False

            self._registry.schedule(
                slot.icon_key, slot, "opacity", 0.0, fade,
                Easing.EASE_OUT_CUBIC, on_complete=_detach,
            )
            return

        slot.visible = True
        slot.icon = icon
        self._registry.schedule(
            slot.icon_key, slot, "opacity", self._config.icon_opacity, fade,
            Easing.EASE_OUT_CUBIC,
        )

    def _click(self, slot_id: SlotId) -> None:
        logger.debug("[CLICK] %s", slot_id.value)
        self._emit(CursorEventKind.CLICK, slot_id)

        if CURSOR_KEY in self._registry:
            return
        self._schedule_transient(
            CURSOR_KEY, self._ring, "color", self._config.interaction_color.as_array(),
            self._config.flash_duration_ms, Easing.EASE_OUT_CUBIC,
            direction=Direction.ALTERNATE,
        )

    def _schedule_transient(
        self,
        key: str,
        target: Any,
        attr: str,
        end: Any,
        duration_ms: float,
        easing: Easing,
        direction: Direction = Direction.NORMAL,
    ) -> TweenHandle:
        """Schedule a tween that removes its own registry entry when done."""
        handle: Optional[TweenHandle] = None

        def _done() -> None:
            self._registry.clear(key, handle)

        handle = self._registry.schedule(
            key, target, attr, end, duration_ms,
            easing=easing, on_complete=_done, direction=direction,
        )
        return handle

    def _emit(self, kind: CursorEventKind, slot: Optional[SlotId] = None, payload: Any = None) -> None:
        event = CursorEvent(kind=kind, slot=slot, payload=payload)
        self._log.events.append(event)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("[CURSOR] Listener failed on %s", event.name)

    def _descriptor(self, raw: DescriptorLike) -> Optional[ActionDescriptor]:
        if isinstance(raw, ActionDescriptor):
            return raw
        try:
            return ActionDescriptor.from_mapping(raw)
        except (KeyError, ValueError, TypeError):
            logger.warning("[CURSOR] Skipping malformed action %r", raw)
            return None

    def _slot(self, raw: Union[SlotId, str]) -> Optional[ActionSlot]:
        try:
            return self._slots[SlotId(raw)]
        except ValueError:
            logger.warning("[CURSOR] Unknown action slot %r", raw)
            return None

    def _require(self) -> None:
        if self._registry is None:
            raise RuntimeError("CursorController.initialize() has not been called")
