from core.tween import TweenHandle
from core.animation_registry import AnimationRegistry
from core.mode_tracker import InteractionModeTracker
from core.cursor_controller import CursorController

__all__ = [
    "TweenHandle",
    "AnimationRegistry",
    "InteractionModeTracker",
    "CursorController",
]
