from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Sequence

import numpy as np

from domain.enums import CursorEventKind, SlotId, SlotState
from domain.errors import ConfigError

# Type aliases
IconHandle = Any                  # texture / pixmap owned by the renderer
Callback = Callable[[], None]


@dataclass(frozen=True)
class Color3:
    """RGB color with every channel in [0, 1]."""
    r: float
    g: float
    b: float

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0.0 <= float(channel) <= 1.0:
                raise ConfigError(f"Color channel out of range [0, 1]: {channel!r}")

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "Color3":
        if len(values) != 3:
            raise ConfigError(f"Expected 3 color channels, got {len(values)}")
        return cls(float(values[0]), float(values[1]), float(values[2]))

    @classmethod
    def from_mapping(cls, values: Mapping[str, float]) -> "Color3":
        """Accept both {r, g, b} and the vec3 style {x, y, z}."""
        try:
            if "r" in values:
                return cls(float(values["r"]), float(values["g"]), float(values["b"]))
            return cls(float(values["x"]), float(values["y"]), float(values["z"]))
        except KeyError as exc:
            raise ConfigError(f"Missing color channel {exc}") from exc

    def as_array(self) -> np.ndarray:
        return np.array([self.r, self.g, self.b], dtype=np.float64)


@dataclass
class ActionDescriptor:
    """
    One action offered to the user while the cursor rests on a target.
    Supplied by the host on every activation.
    """
    name: SlotId
    title: Optional[str] = None
    icon: Optional[IconHandle] = None
    delay_ms: Optional[float] = None
    triggers_click: bool = False
    callback: Optional[Callback] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ActionDescriptor":
        """
        Build a descriptor from a loose host payload.

        Raises ValueError if ``name`` is not a known slot.
        """
        callback = data.get("callback")
        delay = data.get("delay_ms", data.get("delay"))
        return cls(
            name=SlotId(data["name"]),
            title=data.get("title"),
            icon=data.get("icon") or None,
            delay_ms=float(delay) if delay is not None else None,
            triggers_click=bool(data.get("triggers_click", data.get("click", False))),
            callback=callback if callable(callback) else None,
        )


@dataclass
class ActionSlot:
    """
    Visual state of one action channel (icon opacity + slot color).
    Exactly two exist per controller; they are reset, never recreated.
    """
    id: SlotId
    color: np.ndarray
    visible: bool = False
    icon: Optional[IconHandle] = None
    opacity: float = 0.0
    title: Optional[str] = None
    state: SlotState = SlotState.IDLE

    # ---- registry keys -------------------------------------------------
    @property
    def icon_key(self) -> str:
        return self.id.value

    @property
    def delay_key(self) -> str:
        return f"{self.id.value}-delay"

    def reset(self, color: Color3, keep_state: bool = False) -> None:
        """Hide the icon and recolor; a slot with a pending dwell keeps its title and state."""
        self.color = color.as_array()
        self.visible = False
        self.icon = None
        self.opacity = 0.0
        if not keep_state:
            self.title = None
            self.state = SlotState.IDLE


@dataclass
class CursorRing:
    """The small ring glyph at the centre of the reticle."""
    color: np.ndarray
    opacity: float = 0.75


@dataclass(frozen=True)
class RenderHints:
    """Z-ordering flags handed to the renderer; no effect on interaction."""
    render_order: int
    depth_test: bool
    depth_write: bool


@dataclass(frozen=True)
class CursorEvent:
    """An outbound event emitted by the controller."""
    kind: CursorEventKind
    slot: Optional[SlotId] = None
    payload: Any = None

    @property
    def name(self) -> str:
        if self.slot is None:
            return self.kind.value
        return f"{self.slot.value}-{self.kind.value}"


@dataclass
class EventLog:
    """Collects the events emitted while handling one inbound signal."""
    events: list[CursorEvent] = field(default_factory=list)

    def drain(self) -> list[CursorEvent]:
        drained, self.events = self.events, []
        return drained
