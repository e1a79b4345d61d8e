import pendulum

from timegrid.core.models import CalendarEvent, DateRange, MoveAxis, ResizeHandle
from timegrid.input.events import KeyEvent, PointerEvent
from timegrid.input.gesture import GesturePhase


def _calls(store, name: str) -> list[object]:
    return [payload for call, payload in store.calls if call == name]


def test_drag_create_commits_once_and_resets(scheduler_factory, at) -> None:
    scheduler, store = scheduler_factory()
    generation = scheduler.handle_pointer_down(150, 200)
    assert generation == 1
    assert scheduler.handle_pointer_move(150, 260, generation)
    pending = scheduler.pending_creation
    assert pending is not None
    assert pending.ranges == (DateRange(at(1, 5), at(1, 6, 30)),)

    assert scheduler.handle_pointer_up(150, 260, generation)
    added = _calls(store, "add_event")
    assert len(added) == 1
    assert added[0].ranges == DateRange(at(1, 5), at(1, 6, 30))
    assert scheduler.pending_creation is None
    assert scheduler.gesture.phase is GesturePhase.IDLE
    assert not scheduler.handle_pointer_up(150, 260, generation)
    assert len(_calls(store, "add_event")) == 1


def test_click_gesture_creates_click_sized_event(scheduler_factory, at) -> None:
    scheduler, store = scheduler_factory()
    scheduler.handle_pointer_down(250, 200)
    scheduler.handle_pointer_up(250, 200)
    (added,) = _calls(store, "add_event")
    assert added.ranges == DateRange(at(2, 5), at(2, 5, 30))


def test_click_cell_uses_click_precision(scheduler_factory, at) -> None:
    scheduler, store = scheduler_factory(click_precision=60)
    created = scheduler.click_cell(2, 10)
    assert created is not None
    assert created.ranges == DateRange(at(2, 5), at(2, 6))
    (added,) = _calls(store, "add_event")
    assert added.ranges == created.ranges
    assert added.id is not None


def test_drag_across_days_keeps_every_range_but_commits_first(scheduler_factory, at) -> None:
    scheduler, store = scheduler_factory()
    scheduler.handle_pointer_down(150, 200)
    scheduler.handle_pointer_move(250, 260)
    pending = scheduler.pending_creation
    assert pending is not None
    assert pending.cell.span_x == 2
    assert [r.start for r in pending.ranges] == [at(1, 5), at(2, 5)]
    scheduler.handle_pointer_up(250, 260)
    (added,) = _calls(store, "add_event")
    assert added.ranges == DateRange(at(1, 5), at(1, 6, 30))


def test_escape_cancels_without_adding(scheduler_factory) -> None:
    scheduler, store = scheduler_factory()
    scheduler.handle_pointer_down(150, 200)
    scheduler.handle_pointer_move(150, 400)
    assert scheduler.handle_key_event(KeyEvent("Escape"))
    assert scheduler.gesture.box is None
    assert not scheduler.gesture.has_finished_dragging
    assert scheduler.pending_creation is None
    assert not scheduler.handle_pointer_up(150, 400)
    assert _calls(store, "add_event") == []
    assert not scheduler.handle_key("Escape")


def test_pointer_event_routing_ignores_secondary_button(scheduler_factory) -> None:
    scheduler, store = scheduler_factory()
    assert not scheduler.handle_pointer_event(PointerEvent("pointer_down", 150, 200, button=3))
    assert scheduler.handle_pointer_event(PointerEvent("pointer_down", 150, 200))
    assert scheduler.handle_pointer_event(PointerEvent("pointer_move", 150, 240, generation=1))
    assert not scheduler.handle_pointer_event(PointerEvent("pointer_move", 150, 300, generation=7))
    assert scheduler.handle_pointer_event(PointerEvent("pointer_up", 150, 240, generation=1))
    (added,) = _calls(store, "add_event")
    assert (added.start_time.hour, added.end_time.hour) == (5, 6)


def test_gestures_ignored_without_layout(scheduler_factory) -> None:
    scheduler, store = scheduler_factory(laid_out=False)
    assert scheduler.grid is None
    assert scheduler.handle_pointer_down(10, 10) is None
    assert scheduler.click_cell(0, 0) is None
    assert scheduler.range_boxes() == []
    assert scheduler.initial_scroll_top() is None

    scheduler.resize_surface(700, 960)
    scheduler.resize_surface(0, 960)
    assert scheduler.grid is None


def test_resize_mid_drag_cancels_gesture(scheduler_factory) -> None:
    scheduler, store = scheduler_factory()
    scheduler.handle_pointer_down(150, 200)
    scheduler.resize_surface(350, 480)
    assert scheduler.gesture.phase is GesturePhase.IDLE
    assert scheduler.pending_creation is None
    assert scheduler.grid is not None and scheduler.grid.cell_height == 10
    assert not scheduler.handle_pointer_up(150, 200)
    assert _calls(store, "add_event") == []


def test_move_within_same_cell_does_not_edit(scheduler_factory, event_factory) -> None:
    scheduler, store = scheduler_factory([event_factory("e1", 1, (10, 0), (11, 0))])
    session = scheduler.begin_event_drag(0, 0)
    assert session is not None
    session.drag_to(103, 404)
    assert not scheduler.end_event_drag()
    assert _calls(store, "edit_event") == []
    assert scheduler.event_drag is None


def test_move_shifts_whole_event(scheduler_factory, event_factory, at) -> None:
    scheduler, store = scheduler_factory([event_factory("e1", 1, (10, 0), (11, 0))])
    session = scheduler.begin_event_drag(0, 0)
    assert session is not None
    session.drag_to(200, 440)
    assert scheduler.end_event_drag()
    assert _calls(store, "edit_event") == [("e1", at(2, 11), at(2, 12))]
    assert store.get("e1").ranges == DateRange(at(2, 11), at(2, 12))


def test_move_keeps_unaligned_offsets(scheduler_factory, event_factory, at) -> None:
    scheduler, store = scheduler_factory([event_factory("e1", 0, (10, 7), (10, 52))])
    session = scheduler.begin_event_drag(0, 0)
    assert session is not None
    session.drag_to(0, 420)
    assert scheduler.end_event_drag()
    assert _calls(store, "edit_event") == [("e1", at(0, 10, 37), at(0, 11, 22))]


def test_resize_bottom_sets_new_end(scheduler_factory, event_factory, at) -> None:
    scheduler, store = scheduler_factory([event_factory("e1", 1, (10, 0), (11, 0))])
    session = scheduler.begin_event_drag(0, 0)
    assert session is not None
    session.resize(ResizeHandle.BOTTOM, 40)
    assert scheduler.end_event_drag()
    assert _calls(store, "edit_event") == [("e1", at(1, 10), at(1, 12))]


def test_multi_day_event_exposes_handles_on_outer_cells(scheduler_factory, at) -> None:
    event = CalendarEvent(ranges=DateRange(at(0, 23), at(1, 1)), id="night")
    scheduler, store = scheduler_factory([event])
    first = scheduler.begin_event_drag(0, 0)
    assert first is not None and first.resize_handles == frozenset({ResizeHandle.TOP})
    last = scheduler.begin_event_drag(0, 1)
    assert last is not None and last.resize_handles == frozenset({ResizeHandle.BOTTOM})
    last.resize(ResizeHandle.BOTTOM, 20)
    assert scheduler.end_event_drag()
    assert _calls(store, "edit_event") == [("night", at(0, 23), at(1, 1, 30))]


def test_event_drag_honours_move_axis_and_blocks_creation(scheduler_factory, event_factory) -> None:
    scheduler, store = scheduler_factory([event_factory("e1", 1, (10, 0), (11, 0))])
    session = scheduler.begin_event_drag(0, 0, move_axis=MoveAxis.Y)
    assert session is not None
    assert scheduler.handle_pointer_down(500, 500) is None
    assert session.drag_to(600, 400).start_x == 1
    assert scheduler.handle_key("esc")
    assert scheduler.event_drag is None
    assert not scheduler.end_event_drag()


def test_selection_and_delete_key(scheduler_factory, event_factory) -> None:
    scheduler, store = scheduler_factory(
        [event_factory("e1", 1, (10, 0), (11, 0)), event_factory("e2", 2, (12, 0), (13, 0))]
    )
    assert not scheduler.handle_key("Delete")
    scheduler.set_active(1, 0)
    scheduler.set_active(1, 0)
    assert _calls(store, "select_event") == ["e2"]
    assert scheduler.active == (1, 0)
    assert scheduler.selected_event is not None and scheduler.selected_event.id == "e2"

    scheduler.clear_active()
    assert scheduler.active is None
    assert scheduler.handle_key("Backspace")
    assert _calls(store, "delete_event") == ["e2"]
    assert scheduler.selected_event is None
    assert [event.id for event in store.events] == ["e1"]


def test_disabled_scheduler_ignores_interaction(scheduler_factory, event_factory) -> None:
    scheduler, store = scheduler_factory([event_factory("e1", 1, (10, 0), (11, 0))])
    scheduler.handle_pointer_down(150, 200)
    scheduler.set_disabled(True)
    assert scheduler.gesture.phase is GesturePhase.IDLE
    assert scheduler.handle_pointer_down(150, 200) is None
    assert scheduler.begin_event_drag(0, 0) is None
    assert scheduler.click_cell(0, 0) is None
    scheduler.set_active(0, 0)
    assert scheduler.active is None
    assert store.calls == []


def test_range_boxes_project_schedule_and_pending(scheduler_factory, event_factory, renderer) -> None:
    scheduler, store = scheduler_factory([event_factory("e1", 1, (10, 0), (11, 0))])
    (box,) = scheduler.range_boxes()
    assert (box.rect.top, box.rect.height, box.rect.left) == (400, 40, 100)
    assert box.is_start and box.is_end and not box.is_pending and not box.is_active

    scheduler.handle_pointer_down(350, 100)
    scheduler.handle_pointer_move(350, 160)
    boxes = scheduler.range_boxes()
    assert [b.is_pending for b in boxes] == [False, True]
    assert boxes[1].range_index == 1
    assert boxes[1].rect.top == 100

    assert scheduler.render(renderer) == 2
    assert [geometry.event.id for _, geometry in renderer.calls] == ["e1", None]


def test_range_boxes_follow_open_event_drag(scheduler_factory, event_factory) -> None:
    scheduler, store = scheduler_factory([event_factory("e1", 1, (10, 0), (11, 0))])
    session = scheduler.begin_event_drag(0, 0)
    assert session is not None
    session.drag_to(200, 440)
    (box,) = scheduler.range_boxes()
    assert (box.rect.top, box.rect.left) == (440, 200)
    assert box.is_active


def test_schedule_is_filtered_to_visible_hours(scheduler_factory, event_factory) -> None:
    scheduler, store = scheduler_factory(
        [event_factory("early", 0, (6, 0), (7, 0)), event_factory("inside", 0, (9, 0), (10, 0))],
        hour_start=8,
        hour_end=18,
    )
    assert [event.id for event in scheduler.schedule] == ["inside"]
    (box,) = scheduler.range_boxes()
    assert box.cell.start_y == 2


def test_initial_scroll_top_targets_earliest_event(scheduler_factory, event_factory) -> None:
    scheduler, _ = scheduler_factory(
        [event_factory("late", 0, (14, 0), (15, 0)), event_factory("early", 4, (10, 0), (11, 0))]
    )
    assert scheduler.initial_scroll_top() == 400
    empty, _ = scheduler_factory()
    assert empty.initial_scroll_top() == 360
    assert empty.initial_scroll_top(default_hours=(6, 7)) == 240


def test_visual_grid_labels_visible_rows(scheduler_factory, origin) -> None:
    scheduler, _ = scheduler_factory(hour_start=8, hour_end=10, drag_precision=15, visual_grid_precision=60)
    rows = scheduler.visual_grid()
    assert [row.index for row, _ in rows] == [8, 9]
    assert rows[0][1] == DateRange(origin.set(hour=8), origin.set(hour=9))
    assert all(row.is_hour_start for row, _ in rows)


def test_config_changes_ripple_into_grid_rows(scheduler_factory) -> None:
    scheduler, _ = scheduler_factory(hour_start=8, hour_end=20, drag_precision=15)
    assert scheduler.grid is not None
    assert scheduler.grid.num_vertical_cells == 48
    assert scheduler.config.origin_date == pendulum.datetime(2024, 1, 1)


def test_click_in_lower_half_of_row_starts_at_that_row(scheduler_factory, at) -> None:
    scheduler, store = scheduler_factory()
    scheduler.handle_pointer_down(250, 215)
    scheduler.handle_pointer_up(250, 215)
    (added,) = _calls(store, "add_event")
    assert added.ranges == DateRange(at(2, 5), at(2, 5, 30))


def test_click_on_last_row_stays_inside_grid(scheduler_factory, at) -> None:
    scheduler, store = scheduler_factory(click_precision=60)
    scheduler.handle_pointer_down(50, 955)
    scheduler.handle_pointer_up(50, 955)
    (added,) = _calls(store, "add_event")
    assert added.ranges == DateRange(at(0, 23), at(1, 0))


def test_schedule_refresh_drops_open_event_drag(scheduler_factory, event_factory) -> None:
    first = event_factory("e1", 1, (10, 0), (11, 0))
    second = event_factory("e2", 2, (12, 0), (13, 0))
    scheduler, store = scheduler_factory([first, second])
    session = scheduler.begin_event_drag(0, 0)
    assert session is not None
    session.drag_to(200, 440)
    scheduler.set_schedule([second])
    assert scheduler.event_drag is None
    assert scheduler.active is None
    assert not scheduler.end_event_drag()
    assert _calls(store, "edit_event") == []


def test_out_of_range_indices_are_ignored(scheduler_factory, event_factory) -> None:
    scheduler, store = scheduler_factory([event_factory("e1", 1, (10, 0), (11, 0))])
    assert scheduler.begin_event_drag(1, 0) is None
    assert scheduler.begin_event_drag(-1, 0) is None
    assert scheduler.begin_event_drag(0, 1) is None
    scheduler.set_active(5, 0)
    assert scheduler.active is None
    assert store.calls == []
