from __future__ import annotations
from typing import List

import pytest

from app.config import CursorConfig
from core.cursor_controller import CursorController
from domain.enums import CursorEventKind, SlotId
from domain.models import CursorEvent


class EventRecorder:
    """Listener that keeps every event the controller emits."""

    def __init__(self) -> None:
        self.events: List[CursorEvent] = []

    def __call__(self, event: CursorEvent) -> None:
        self.events.append(event)

    def names(self) -> List[str]:
        return [e.name for e in self.events]

    def clicks(self, slot: SlotId = SlotId.PRIMARY) -> int:
        return sum(1 for e in self.events if e.kind is CursorEventKind.CLICK and e.slot is slot)


class CallCounter:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1


@pytest.fixture
def config() -> CursorConfig:
    return CursorConfig(start_color=(0, 1, 1), interaction_color=(0, 0, 1))


@pytest.fixture
def gaze_controller(config) -> CursorController:
    return CursorController(CursorConfig(
        start_color=config.start_color,
        interaction_color=config.interaction_color,
        touch_capable=True,
    ))


@pytest.fixture
def click_controller(config) -> CursorController:
    return CursorController(config)


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture
def counter() -> CallCounter:
    return CallCounter()
