from enum import Enum


class SlotId(str, Enum):
    """The two addressable interaction channels of the cursor."""
    PRIMARY   = "primary"
    SECONDARY = "secondary"


class SlotState(str, Enum):
    """Activation state of a single action slot."""
    IDLE           = "IDLE"
    ICON_FADE_IN   = "ICON_FADE_IN"
    DWELL_COUNTING = "DWELL_COUNTING"
    DWELL_COMPLETE = "DWELL_COMPLETE"


class Easing(str, Enum):
    """Easing curves understood by TweenHandle."""
    LINEAR         = "linear"
    EASE_OUT_CUBIC = "easeOutCubic"


class Direction(str, Enum):
    """Playback direction of a tween."""
    NORMAL    = "normal"
    ALTERNATE = "alternate"


class InboundSignal(str, Enum):
    """Signals consumed from the host scene / runtime."""
    REMOTE_CONNECTED    = "remote-connected"
    REMOTE_DISCONNECTED = "remote-disconnected"
    CURSOR_ACTIVATE     = "cursor-activate"
    CURSOR_DEACTIVATE   = "cursor-deactivate"
    HARDWARE_CLICK      = "hardware-click"
    TICK                = "tick"


class CursorEventKind(str, Enum):
    """Events produced toward the host application."""
    TITLE               = "title"
    CLICK               = "click"
    REMOTE_ADD_LISTENER = "remote-add-listener"
