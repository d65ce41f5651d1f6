import logging

import numpy as np
import pytest

from app.config import CursorConfig
from core.cursor_controller import CursorController
from domain.enums import CursorEventKind, SlotId, SlotState
from domain.models import ActionDescriptor

START = [0.0, 1.0, 1.0]
INTERACTION = [0.0, 0.0, 1.0]


def dwell(delay_ms=500, callback=None, click=True, slot=SlotId.PRIMARY, **kw):
    return ActionDescriptor(
        name=slot, title=kw.pop("title", "Open"), delay_ms=delay_ms,
        triggers_click=click, callback=callback, **kw,
    )


def tick(controller, *timestamps):
    events = []
    for t in timestamps:
        events.extend(controller.advance(t))
    return events


# ----------------------------------------------------------------------
# Activation
# ----------------------------------------------------------------------
def test_activate_emits_title_and_fades_icon_in(gaze_controller):
    events = gaze_controller.activate([dwell(icon="tex")])

    assert [e.name for e in events] == ["primary-title"]
    assert events[0].payload == "Open"

    slot = gaze_controller.slot("primary")
    assert slot.visible and slot.icon == "tex"
    assert slot.state is SlotState.DWELL_COUNTING

    tick(gaze_controller, 0, 200)
    assert slot.opacity == pytest.approx(0.75)


def test_reactivation_never_stacks_delay_handles(gaze_controller):
    handles = []
    for _ in range(4):
        gaze_controller.activate([dwell()])
        handles.append(gaze_controller.registry.get("primary-delay"))
        gaze_controller.advance(0)

    running = [h for h in handles if h.running]
    assert running == [handles[-1]]
    assert all(h.paused for h in handles[:-1])


def test_zero_duration_settles_on_next_advance_in_click_mode(click_controller, counter):
    click_controller.activate([dwell(delay_ms=500, callback=counter)])
    assert counter.calls == 0

    events = click_controller.advance(0)

    assert counter.calls == 1
    assert events == []  # click mode never synthesises clicks
    np.testing.assert_allclose(click_controller.slot("primary").color, START)


def test_missing_delay_settles_immediately_in_gaze_mode(gaze_controller, counter):
    gaze_controller.activate([dwell(delay_ms=None, callback=counter)])

    events = gaze_controller.advance(0)

    assert counter.calls == 1
    assert [e.name for e in events] == ["primary-click"]


def test_dwell_fires_exactly_once(gaze_controller, recorder, counter):
    gaze_controller.subscribe(recorder)
    gaze_controller.activate([dwell(delay_ms=500, callback=counter)])

    tick(gaze_controller, *range(0, 1001, 25))

    assert recorder.clicks() == 1
    assert counter.calls == 1
    assert gaze_controller.slot("primary").state is SlotState.DWELL_COMPLETE


def test_dwell_colors_towards_interaction_color(gaze_controller):
    gaze_controller.activate([dwell(delay_ms=400)])
    tick(gaze_controller, 0, 200)

    np.testing.assert_allclose(gaze_controller.slot("primary").color, [0.0, 0.5, 1.0])


def test_gaze_scenario_click_only_after_dwell_elapsed(gaze_controller):
    activation = gaze_controller.activate([dwell(delay_ms=300)])
    assert [e.name for e in activation] == ["primary-title"]

    per_tick = {t: gaze_controller.advance(t) for t in (0, 100, 200, 300, 301)}

    assert per_tick[0] == per_tick[100] == per_tick[200] == []
    assert [e.name for e in per_tick[300]] == ["primary-click"]
    assert per_tick[301] == []


def test_reactivation_restarts_the_dwell(gaze_controller, recorder):
    gaze_controller.subscribe(recorder)
    gaze_controller.activate([dwell(delay_ms=300)])
    tick(gaze_controller, 0, 200)

    gaze_controller.activate([dwell(delay_ms=300)])
    tick(gaze_controller, 250, 500)
    assert recorder.clicks() == 0

    tick(gaze_controller, 550, 600)
    assert recorder.clicks() == 1


def test_delay_reset_returns_color_and_clears_entry(gaze_controller):
    gaze_controller.activate([dwell(delay_ms=300)])
    tick(gaze_controller, 0, 300, 301, 501)

    np.testing.assert_allclose(gaze_controller.slot("primary").color, START)
    assert gaze_controller.registry.get("primary-delay") is None


def test_slots_are_independent(gaze_controller, recorder):
    gaze_controller.subscribe(recorder)
    gaze_controller.activate([
        dwell(delay_ms=300, slot=SlotId.PRIMARY),
        dwell(delay_ms=600, slot=SlotId.SECONDARY, title="Back"),
    ])
    assert recorder.names() == ["primary-title", "secondary-title"]

    tick(gaze_controller, 0, 300)
    gaze_controller.trigger_click("primary")
    tick(gaze_controller, 600)

    assert recorder.clicks(SlotId.PRIMARY) == 2
    assert recorder.clicks(SlotId.SECONDARY) == 1


def test_mapping_descriptors_and_unknown_slots(gaze_controller, caplog):
    with caplog.at_level(logging.WARNING):
        events = gaze_controller.activate([
            {"name": "tertiary", "title": "Nope"},
            {"name": "secondary", "title": "Back", "delay": 100, "click": True},
        ])

    assert [e.name for e in events] == ["secondary-title"]
    assert "Skipping malformed action" in caplog.text
    assert gaze_controller.slot("primary").state is SlotState.IDLE


def test_typed_descriptor_with_unknown_slot_is_skipped(gaze_controller, caplog):
    with caplog.at_level(logging.WARNING):
        events = gaze_controller.activate([
            ActionDescriptor(name="tertiary", title="Nope"),
            ActionDescriptor(SlotId.SECONDARY, title="ok"),
        ])

    assert [(e.name, e.payload) for e in events] == [("secondary-title", "ok")]
    assert "Unknown action slot 'tertiary'" in caplog.text
    assert gaze_controller.slot("secondary").state is SlotState.ICON_FADE_IN


def test_failing_listener_does_not_break_the_dwell(gaze_controller, counter, caplog):
    def explode(event):
        if event.kind is CursorEventKind.CLICK:
            raise RuntimeError("listener failed")

    gaze_controller.subscribe(explode)
    gaze_controller.activate([dwell(delay_ms=100, callback=counter)])

    with caplog.at_level(logging.ERROR):
        events = tick(gaze_controller, 0, 100)

    assert [e.name for e in events] == ["primary-click"]
    assert counter.calls == 1
    assert "Listener failed on primary-click" in caplog.text
    assert gaze_controller.advance(101) == []


def test_callback_error_is_logged_not_raised(gaze_controller, caplog):
    def boom():
        raise RuntimeError("host callback failed")

    gaze_controller.activate([dwell(delay_ms=100, callback=boom)])
    with caplog.at_level(logging.ERROR):
        events = tick(gaze_controller, 0, 100)

    assert [e.name for e in events] == ["primary-click"]
    assert "Callback for primary failed" in caplog.text


# ----------------------------------------------------------------------
# Deactivation
# ----------------------------------------------------------------------
def test_deactivate_aborts_without_side_effects(gaze_controller, recorder, counter):
    gaze_controller.subscribe(recorder)
    gaze_controller.activate([dwell(delay_ms=500, callback=counter, icon="tex")])
    tick(gaze_controller, 0, 250)

    events = gaze_controller.deactivate(["primary"])
    assert [(e.name, e.payload) for e in events] == [("primary-title", None)]

    tick(gaze_controller, 300, 400, 600, 1000)

    slot = gaze_controller.slot("primary")
    assert recorder.clicks() == 0
    assert counter.calls == 0
    np.testing.assert_allclose(slot.color, START)
    assert slot.state is SlotState.IDLE
    assert not slot.visible and slot.icon is None


def test_deactivate_without_activation_is_harmless(click_controller):
    events = click_controller.deactivate([SlotId.SECONDARY, "bogus"])

    assert [e.name for e in events] == ["secondary-title"]
    assert click_controller.registry.get("secondary-delay") is None


# ----------------------------------------------------------------------
# Icons
# ----------------------------------------------------------------------
def test_icon_round_trip_pauses_fade_in(click_controller):
    click_controller.set_icon("primary", "tex")
    fade_in = click_controller.registry.get("primary")
    tick(click_controller, 0, 50)

    click_controller.set_icon("primary", None)
    assert fade_in.paused
    slot = click_controller.slot("primary")
    assert slot.visible

    tick(click_controller, 100, 200, 300)

    assert not slot.visible
    assert slot.icon is None
    assert slot.opacity == pytest.approx(0.0)


# ----------------------------------------------------------------------
# Clicks
# ----------------------------------------------------------------------
def test_click_flash_is_idempotent(click_controller):
    first = click_controller.trigger_click("primary")
    flash = click_controller.registry.get("cursor")
    second = click_controller.trigger_click("primary")

    assert [e.name for e in first + second] == ["primary-click", "primary-click"]
    assert click_controller.registry.get("cursor") is flash

    tick(click_controller, 0, 100)
    np.testing.assert_allclose(click_controller.ring.color, INTERACTION)
    tick(click_controller, 200)

    np.testing.assert_allclose(click_controller.ring.color, START)
    assert flash.completed
    assert click_controller.registry.get("cursor") is None


def test_flash_can_retrigger_after_completion(click_controller):
    click_controller.trigger_click("secondary")
    first = click_controller.registry.get("cursor")
    tick(click_controller, 0, 200)

    click_controller.trigger_click("secondary")

    assert click_controller.registry.get("cursor") is not first


@pytest.mark.parametrize("button, expected", [(0, "primary-click"), (2, "secondary-click")])
def test_hardware_buttons_map_to_slots(click_controller, button, expected):
    events = click_controller.handle_hardware_click(button)
    assert [e.name for e in events] == [expected]


@pytest.mark.parametrize("button", [1, 3, -1, None])
def test_unknown_button_ignored(click_controller, recorder, button):
    click_controller.subscribe(recorder)

    assert click_controller.handle_hardware_click(button) == []
    assert recorder.events == []
    assert len(click_controller.registry) == 0
    for slot_id in SlotId:
        assert click_controller.slot(slot_id).state is SlotState.IDLE


# ----------------------------------------------------------------------
# Mode switching / signals
# ----------------------------------------------------------------------
def test_remote_connect_requests_clicks_and_disables_dwell(gaze_controller, recorder):
    gaze_controller.subscribe(recorder)

    events = gaze_controller.remote_connected()
    assert events[0].kind is CursorEventKind.REMOTE_ADD_LISTENER
    assert events[0].payload == {"events": ["mousedown"]}
    assert not gaze_controller.gaze_click

    gaze_controller.activate([dwell(delay_ms=300)])
    tick(gaze_controller, 0, 300, 600)
    assert recorder.clicks() == 0

    gaze_controller.remote_disconnected()
    assert gaze_controller.gaze_click


def test_remote_connect_mid_dwell_suppresses_the_click(gaze_controller, recorder, counter):
    gaze_controller.subscribe(recorder)
    gaze_controller.activate([dwell(delay_ms=300, callback=counter)])
    tick(gaze_controller, 0, 100)

    gaze_controller.remote_connected()
    tick(gaze_controller, 300)

    assert recorder.clicks() == 0
    assert counter.calls == 1


def test_dispatch_routes_named_signals(gaze_controller):
    events = gaze_controller.dispatch("cursor-activate", {"actions": [
        {"name": "primary", "title": "Go", "delay": 200, "click": True},
    ]})
    assert [e.name for e in events] == ["primary-title"]

    events = gaze_controller.dispatch("tick", {"time": 0})
    events += gaze_controller.dispatch("tick", {"time": 200})
    assert [e.name for e in events] == ["primary-click"]

    assert [e.name for e in gaze_controller.dispatch("hardware-click", {"button": 2})] == ["secondary-click"]
    assert gaze_controller.dispatch("hardware-click", {"button": 1}) == []
    assert gaze_controller.dispatch("cursor-deactivate", {"actions": ["primary"]})[0].payload is None
    assert gaze_controller.dispatch("remote-connected")[0].name == "remote-add-listener"
    assert gaze_controller.dispatch("remote-disconnected") == []
    assert gaze_controller.dispatch("no-such-signal") == []


def test_dispatch_tolerates_incomplete_payloads(gaze_controller, caplog):
    gaze_controller.activate([dwell(delay_ms=100)])

    with caplog.at_level(logging.WARNING):
        assert gaze_controller.dispatch("tick", {}) == []
        assert gaze_controller.dispatch("tick") == []
    assert "tick without a timestamp" in caplog.text

    assert gaze_controller.dispatch("cursor-activate", {"actions": None}) == []
    assert gaze_controller.dispatch("cursor-deactivate", {"actions": None}) == []
    assert gaze_controller.slot("primary").state is SlotState.DWELL_COUNTING


def test_unsubscribe_stops_delivery(click_controller, recorder):
    click_controller.subscribe(recorder)
    click_controller.unsubscribe(recorder)
    click_controller.trigger_click("primary")
    assert recorder.events == []


# ----------------------------------------------------------------------
# Lifecycle
# ----------------------------------------------------------------------
def test_render_hints_follow_on_top():
    on_top = CursorController(CursorConfig(on_top=True)).render_hints
    occluded = CursorController(CursorConfig(on_top=False)).render_hints

    assert (on_top.render_order, on_top.depth_test) == (999, False)
    assert (occluded.render_order, occluded.depth_test, occluded.depth_write) == (0, True, True)


def test_reconfigure_resets_visuals_and_keeps_mode(click_controller):
    click_controller.set_icon("secondary", "tex")
    click_controller.trigger_click("secondary")
    tick(click_controller, 0, 100)

    click_controller.reconfigure(CursorConfig(start_color=(1, 0, 0), on_top=False))
    tick(click_controller, 200, 400)

    slot = click_controller.slot("secondary")
    assert len(click_controller.registry) == 0
    np.testing.assert_allclose(slot.color, [1.0, 0.0, 0.0])
    np.testing.assert_allclose(click_controller.ring.color, [1.0, 0.0, 0.0])
    assert not slot.visible and slot.opacity == 0.0
    assert slot.state is SlotState.IDLE
    assert click_controller.render_hints.render_order == 0
    assert not click_controller.gaze_click


def test_reconfigure_lets_a_pending_dwell_complete(gaze_controller, recorder, counter):
    gaze_controller.subscribe(recorder)
    gaze_controller.activate([dwell(delay_ms=300, callback=counter, icon="tex")])
    tick(gaze_controller, 0, 100)

    gaze_controller.reconfigure(CursorConfig(start_color=(1, 0, 0), touch_capable=True))
    slot = gaze_controller.slot("primary")
    assert not slot.visible and slot.icon is None
    assert slot.state is SlotState.DWELL_COUNTING
    assert gaze_controller.registry.live_keys() == ["primary-delay"]

    tick(gaze_controller, 200, 300)
    assert recorder.clicks() == 1
    assert counter.calls == 1

    tick(gaze_controller, 301, 501)
    np.testing.assert_allclose(slot.color, [1.0, 0.0, 0.0])
    np.testing.assert_allclose(gaze_controller.ring.color, [1.0, 0.0, 0.0])
    assert len(gaze_controller.registry) == 0
    assert gaze_controller.gaze_click


def test_reconfigure_after_deactivate_keeps_nothing(gaze_controller, counter):
    gaze_controller.activate([dwell(delay_ms=300, callback=counter)])
    tick(gaze_controller, 0, 100)
    gaze_controller.deactivate(["primary"])

    gaze_controller.reconfigure(CursorConfig(touch_capable=True))
    tick(gaze_controller, 200, 600)

    assert counter.calls == 0
    assert len(gaze_controller.registry) == 0
    assert gaze_controller.slot("primary").state is SlotState.IDLE


def test_entry_points_require_initialize():
    controller = CursorController()
    with pytest.raises(RuntimeError):
        controller.advance(0)
    with pytest.raises(RuntimeError):
        controller.activate([])
