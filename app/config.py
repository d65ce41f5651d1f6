from __future__ import annotations
from dataclasses import dataclass, field, fields
from typing import Any, Mapping

from domain.errors import ConfigError
from domain.models import Color3
from utils.constants import (
    DEFAULT_INTERACTION_COLOR,
    DEFAULT_START_COLOR,
    FADE_DURATION_MS,
    FLASH_DURATION_MS,
    ICON_OPACITY,
    TICK_INTERVAL_MS,
)


def _color(value: Any) -> Color3:
    if isinstance(value, Color3):
        return value
    if isinstance(value, Mapping):
        return Color3.from_mapping(value)
    try:
        return Color3.from_sequence(tuple(value))
    except ConfigError:
        raise
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Cannot read a color from {value!r}") from exc


@dataclass
class CursorConfig:
    """
    Central configuration injected into the controller and the Qt host.
    Read once per initialize()/reconfigure(); never mutated by the core.
    """
    # ---- colors --------------------------------------------------------
    start_color: Color3 = field(default_factory=lambda: Color3(*DEFAULT_START_COLOR))
    interaction_color: Color3 = field(default_factory=lambda: Color3(*DEFAULT_INTERACTION_COLOR))

    # ---- rendering -----------------------------------------------------
    on_top: bool = True

    # ---- device --------------------------------------------------------
    touch_capable: bool = False

    # ---- animation (ms) ------------------------------------------------
    fade_duration_ms: float = FADE_DURATION_MS
    flash_duration_ms: float = FLASH_DURATION_MS
    icon_opacity: float = ICON_OPACITY

    # ---- qt host -------------------------------------------------------
    tick_interval_ms: int = TICK_INTERVAL_MS
    always_forward_clicks: bool = False

    def __post_init__(self) -> None:
        self.start_color = _color(self.start_color)
        self.interaction_color = _color(self.interaction_color)

        for name in ("fade_duration_ms", "flash_duration_ms", "tick_interval_ms"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be > 0, got {getattr(self, name)!r}")
        if not 0.0 <= self.icon_opacity <= 1.0:
            raise ConfigError(f"icon_opacity must be in [0, 1], got {self.icon_opacity!r}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CursorConfig":
        """
        Build a config from host attributes.
        camelCase keys (startColor, onTop, ...) are accepted as well.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _snake(key)
            if name not in known:
                raise ConfigError(f"Unknown cursor option: {key!r}")
            kwargs[name] = value
        return cls(**kwargs)


def _snake(key: str) -> str:
    return "".join("_" + c.lower() if c.isupper() else c for c in key)


# Default singleton: import and use directly, or override in tests.
default_config = CursorConfig()
