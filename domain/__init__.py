from domain.enums import (
    CursorEventKind,
    Direction,
    Easing,
    InboundSignal,
    SlotId,
    SlotState,
)
from domain.errors import ConfigError
from domain.models import (
    ActionDescriptor,
    ActionSlot,
    Color3,
    CursorEvent,
    CursorRing,
    RenderHints,
)

__all__ = [
    "ActionDescriptor",
    "ActionSlot",
    "Color3",
    "ConfigError",
    "CursorEvent",
    "CursorEventKind",
    "CursorRing",
    "Direction",
    "Easing",
    "InboundSignal",
    "RenderHints",
    "SlotId",
    "SlotState",
]
