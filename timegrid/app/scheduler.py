"""Time-grid scheduler controller: gestures in, event mutations out."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Iterable

from timegrid.app.ports import EventCollaborator, EventRenderer, RangeBoxView
from timegrid.app.scheduler_config import SchedulerConfig
from timegrid.app.scheduler_state import SchedulerState
from timegrid.core.grid import Grid, create_grid
from timegrid.core.mapping import (
    CellRangeMapper,
    create_cell_range_mapper,
    create_visual_grid_mapper,
    expect_single_range,
)
from timegrid.core.models import (
    CalendarEvent,
    CellInfo,
    DateRange,
    MoveAxis,
    PendingCreation,
    PixelRect,
    ResizeHandle,
)
from timegrid.core.precision import VisualRow
from timegrid.core.week import at_minute, earliest_time_range, filter_schedule_by_hours, minute_of_day
from timegrid.input.events import KeyEvent, PointerEvent
from timegrid.input.gesture import GestureListener, GesturePhase, GestureState
from timegrid.input.keymap import map_key_name
from timegrid.input.range_box import EditKind, EventDragSession

logger = logging.getLogger(__name__)

_PRIMARY_BUTTON = 1


class TimeGridScheduler:
    """Owns the grid, the creation gesture and event drags for one week view."""

    def __init__(
        self,
        config: SchedulerConfig,
        collaborator: EventCollaborator,
        *,
        schedule: Iterable[CalendarEvent] = (),
        disabled: bool = False,
    ) -> None:
        self._config = config
        self._collaborator = collaborator
        self._state = SchedulerState(disabled=disabled)
        self._state.surface.set_disabled(disabled)
        self._mapper = create_cell_range_mapper(
            origin_date=config.origin_date,
            precision=config.precision,
            hour_start=config.hour_start,
            num_vertical_cells=config.num_vertical_cells,
            num_horizontal_cells=config.num_horizontal_cells,
        )
        self._visual_mapper = create_visual_grid_mapper(
            origin_date=config.origin_date,
            precision=config.precision,
            num_horizontal_cells=config.num_horizontal_cells,
        )
        self._state.surface.subscribe(self._on_gesture_change)
        self.set_schedule(schedule)

    @property
    def config(self) -> SchedulerConfig:
        return self._config

    @property
    def mapper(self) -> CellRangeMapper:
        return self._mapper

    @property
    def grid(self) -> Grid | None:
        return self._state.grid

    @property
    def gesture(self) -> GestureState:
        return self._state.surface.state

    @property
    def pending_creation(self) -> PendingCreation | None:
        return self._state.pending_creation

    @property
    def schedule(self) -> list[CalendarEvent]:
        """Events visible within the configured hours."""
        return list(self._state.visible_schedule)

    @property
    def selected_event(self) -> CalendarEvent | None:
        return self._state.selected_event

    @property
    def active(self) -> tuple[int, int] | None:
        if self._state.active_range_index is None or self._state.active_cell_index is None:
            return None
        return self._state.active_range_index, self._state.active_cell_index

    @property
    def event_drag(self) -> EventDragSession | None:
        return self._state.event_drag

    @property
    def disabled(self) -> bool:
        return self._state.disabled

    def subscribe_gesture(self, listener: GestureListener) -> Callable[[], None]:
        """Forward creation-gesture state changes to ``listener``."""
        return self._state.surface.subscribe(listener)

    def set_schedule(self, events: Iterable[CalendarEvent]) -> None:
        """Replace the current schedule.

        Any open event drag and the positional focus are dropped.
        """
        self._cancel_event_drag("schedule_replaced")
        self.clear_active()
        self._state.schedule = list(events)
        self._state.visible_schedule = filter_schedule_by_hours(
            self._state.schedule, self._config.hour_start, self._config.hour_end
        )
        logger.debug(
            "schedule_updated total=%d visible=%d",
            len(self._state.schedule),
            len(self._state.visible_schedule),
        )

    def set_disabled(self, disabled: bool) -> None:
        """Toggle read-only mode; disabling drops in-flight gestures."""
        self._state.disabled = disabled
        self._state.surface.set_disabled(disabled)
        if disabled:
            self._state.surface.acknowledge()
            self._cancel_event_drag("disabled")

    def resize_surface(self, width: float, height: float) -> None:
        """Rebuild the grid for new surface dimensions and cancel gestures bound to the old one."""
        self._state.surface.resize(width, height)
        self._state.surface.acknowledge()
        self._cancel_event_drag("surface_resized")
        self._state.pending_creation = None
        self._state.grid = create_grid(
            total_height=height,
            total_width=width,
            num_horizontal_cells=self._config.num_horizontal_cells,
            num_vertical_cells=self._config.num_vertical_cells,
        )
        logger.info("surface_resized width=%.1f height=%.1f has_grid=%s", width, height, self._state.grid is not None)

    # Creation gesture

    def handle_pointer_event(self, event: PointerEvent) -> bool:
        """Route a raw pointer event to the creation gesture."""
        if event.event_type == "pointer_down":
            if event.button != _PRIMARY_BUTTON:
                return False
            return self.handle_pointer_down(event.x, event.y) is not None
        if event.event_type == "pointer_move":
            return self.handle_pointer_move(event.x, event.y, generation=event.generation)
        if event.event_type == "pointer_up":
            return self.handle_pointer_up(event.x, event.y, generation=event.generation)
        return False

    def handle_pointer_down(self, x: float, y: float) -> int | None:
        """Start a creation gesture; return its generation, or ``None`` if ignored."""
        if self._state.grid is None or self._state.event_drag is not None:
            return None
        gesture = self._state.surface.pointer_down(x, y)
        if gesture is None:
            return None
        self.clear_active()
        return gesture.generation

    def handle_pointer_move(self, x: float, y: float, generation: int | None = None) -> bool:
        return self._state.surface.pointer_move(x, y, generation) is not None

    def handle_pointer_up(self, x: float, y: float, generation: int | None = None) -> bool:
        """Finish the creation gesture and commit the pending event."""
        gesture = self._state.surface.pointer_up(x, y, generation)
        if gesture is None:
            return False
        if gesture.has_finished_dragging:
            self._commit_pending_creation()
        self._state.surface.acknowledge()
        return True

    def click_cell(self, day_index: int, visual_row: int) -> CalendarEvent | None:
        """Create an event of the click duration from a background grid cell."""
        if self._state.grid is None or self._state.disabled:
            return None
        row = self._config.precision.visual_row_to_drag_row(visual_row, self._config.hour_start)
        cell = self._config.precision.click_cell(day_index, row, self._config.num_vertical_cells)
        candidate = CalendarEvent(ranges=expect_single_range(self._mapper.cell_info_to_date_ranges(cell)))
        logger.info("event_created source=click start=%s end=%s", candidate.start_time, candidate.end_time)
        self._collaborator.add_event(candidate)
        return candidate

    def cancel_pending(self) -> bool:
        """Cancel the creation gesture or the open event drag."""
        cancelled = self._state.surface.cancel() is not None
        self._state.surface.acknowledge()
        if self._cancel_event_drag("cancelled"):
            cancelled = True
        return cancelled

    def handle_key_event(self, event: KeyEvent) -> bool:
        return self.handle_key(event.value)

    def handle_key(self, key: str) -> bool:
        """Handle escape (cancel) and delete/backspace (delete selected event)."""
        mapped = map_key_name(key)
        if mapped == "escape":
            return self.cancel_pending()
        if mapped == "delete":
            return self.delete_selected_event()
        return False

    # Existing events

    def begin_event_drag(
        self, range_index: int, cell_index: int, *, move_axis: MoveAxis = MoveAxis.BOTH
    ) -> EventDragSession | None:
        """Open a move/resize session for one rendered cell of an event."""
        grid = self._state.grid
        if grid is None or self._state.disabled or self.gesture.phase is GesturePhase.DRAGGING:
            return None
        if not 0 <= range_index < len(self._state.visible_schedule):
            return None
        event = self._state.visible_schedule[range_index]
        cells = self._mapper.date_range_to_cells(event.ranges)
        if not 0 <= cell_index < len(cells):
            return None
        handles: set[ResizeHandle] = set()
        if cell_index == 0:
            handles.add(ResizeHandle.TOP)
        if cell_index == len(cells) - 1:
            handles.add(ResizeHandle.BOTTOM)
        self._cancel_event_drag("replaced")
        session = EventDragSession(
            grid=grid,
            cell=cells[cell_index],
            event_id=event.id,
            range_index=range_index,
            cell_index=cell_index,
            move_axis=move_axis,
            resize_handles=frozenset(handles),
        )
        self._state.event_drag = session
        self.set_active(range_index, cell_index)
        return session

    def end_event_drag(self) -> bool:
        """Close the open session; call ``edit_event`` only if the range changed."""
        session = self._state.event_drag
        self._state.event_drag = None
        if session is None:
            return False
        new_cell_range = session.finish(self._mapper)
        if new_cell_range is None or session.edit_kind is None:
            return False
        event = self._state.visible_schedule[session.range_index]
        old_cell_range = expect_single_range(self._mapper.cell_info_to_date_ranges(session.cell))
        new_range = _apply_cell_edit(event.ranges, old_cell_range, new_cell_range, session.edit_kind)
        if new_range == event.ranges:
            logger.debug("event_edit_skipped reason=unchanged event_id=%s", event.id)
            return False
        if event.id is None:
            logger.warning("event_edit_skipped reason=missing_id range_index=%d", session.range_index)
            return False
        logger.info(
            "event_edited event_id=%s kind=%s start=%s end=%s",
            event.id,
            session.edit_kind,
            new_range.start,
            new_range.end,
        )
        self._collaborator.edit_event(event.id, new_range.start, new_range.end)
        return True

    def delete_event(self, event_id: str) -> None:
        logger.info("event_deleted event_id=%s", event_id)
        self._collaborator.delete_event(event_id)
        selected = self._state.selected_event
        if selected is not None and selected.id == event_id:
            self._state.selected_event = None

    def delete_selected_event(self) -> bool:
        selected = self._state.selected_event
        if self._state.disabled or selected is None or selected.id is None:
            return False
        self.delete_event(selected.id)
        return True

    def set_active(self, range_index: int, cell_index: int) -> None:
        """Mark one event cell as focused and select its event."""
        if self._state.disabled or not 0 <= range_index < len(self._state.visible_schedule):
            return
        self._state.active_range_index = range_index
        self._state.active_cell_index = cell_index
        event = self._state.visible_schedule[range_index]
        selected = self._state.selected_event
        if selected is None or selected.id != event.id:
            self._state.selected_event = event
            self._collaborator.select_event(event)

    def clear_active(self) -> None:
        self._state.active_range_index = None
        self._state.active_cell_index = None

    # Render projection

    def range_boxes(self) -> list[RangeBoxView]:
        """Return render geometry for every visible event cell and the pending creation."""
        grid = self._state.grid
        if grid is None:
            return []
        views: list[RangeBoxView] = []
        for range_index, event in enumerate(self._state.visible_schedule):
            views.extend(self._views_for(grid, event, range_index, pending=False))
        pending = self._state.pending_creation
        if pending is not None:
            base_index = len(self._state.visible_schedule)
            for offset, date_range in enumerate(pending.ranges):
                views.extend(
                    self._views_for(grid, CalendarEvent(ranges=date_range), base_index + offset, pending=True)
                )
        return views

    def render(self, renderer: EventRenderer) -> int:
        """Hand every range box to ``renderer``; return the number rendered."""
        views = self.range_boxes()
        for view in views:
            renderer.render(view.event, view)
        return len(views)

    def visual_grid(self) -> list[tuple[VisualRow, DateRange]]:
        """Return background rows with the time slot each one labels on the first day."""
        rows: list[tuple[VisualRow, DateRange]] = []
        for row in self._config.precision.visual_rows(self._config.hour_start, self._config.hour_end):
            cell = CellInfo(start_x=0, end_x=0, span_x=1, start_y=row.index, end_y=row.index + 1, span_y=1)
            rows.append((row, expect_single_range(self._visual_mapper.cell_info_to_date_ranges(cell))))
        return rows

    def initial_scroll_top(self, default_hours: tuple[int, int] = (9, 15)) -> float | None:
        """Return the pixel offset that brings the earliest event into view."""
        grid = self._state.grid
        if grid is None:
            return None
        earliest = earliest_time_range([event.ranges for event in self._state.visible_schedule])
        if earliest is None:
            origin = self._config.origin_date
            earliest = DateRange(at_minute(origin, default_hours[0] * 60), at_minute(origin, default_hours[1] * 60))
        cells = self._mapper.date_range_to_cells(earliest)
        if not cells:
            return 0.0
        return grid.get_rect_from_cell(cells[0]).top

    def _views_for(self, grid: Grid, event: CalendarEvent, range_index: int, *, pending: bool) -> list[RangeBoxView]:
        cells = self._mapper.date_range_to_cells(event.ranges)
        session = self._state.event_drag
        views: list[RangeBoxView] = []
        for cell_index, cell in enumerate(cells):
            rect: PixelRect
            if (
                not pending
                and session is not None
                and session.range_index == range_index
                and session.cell_index == cell_index
            ):
                cell = session.modified_cell
                rect = session.rect
            else:
                rect = grid.get_rect_from_cell(cell)
            views.append(
                RangeBoxView(
                    event=event,
                    range_index=range_index,
                    cell_index=cell_index,
                    cell=cell,
                    rect=rect,
                    is_start=cell_index == 0,
                    is_end=cell_index == len(cells) - 1,
                    is_active=not pending and self._is_active(event, range_index, cell_index),
                    is_pending=pending,
                )
            )
        return views

    def _is_active(self, event: CalendarEvent, range_index: int, cell_index: int) -> bool:
        if (range_index, cell_index) == self.active:
            return True
        selected = self._state.selected_event
        return selected is not None and selected.id is not None and selected.id == event.id

    def _on_gesture_change(self, gesture: GestureState) -> None:
        grid = self._state.grid
        if gesture.box is None or grid is None:
            self._state.pending_creation = None
            return
        cell = grid.get_cell_from_rect(gesture.box)
        if cell.span_y <= 0 or gesture.box.height == 0:
            row = grid.row_at(gesture.box.top)
            clicked = dataclasses.replace(cell, start_y=row, end_y=row, span_y=0)
            cell = self._config.precision.apply_click_span(clicked, grid.num_vertical_cells)
        ranges = self._mapper.cell_info_to_date_ranges(cell)
        self._state.pending_creation = PendingCreation(cell=cell, ranges=tuple(ranges))

    def _commit_pending_creation(self) -> None:
        pending = self._state.pending_creation
        self._state.pending_creation = None
        if pending is None or self._state.disabled:
            return
        if len(pending.ranges) > 1:
            logger.debug("pending_creation_extra_ranges_dropped count=%d", len(pending.ranges) - 1)
        candidate = pending.as_event()
        logger.info("event_created source=drag start=%s end=%s", candidate.start_time, candidate.end_time)
        self._collaborator.add_event(candidate)

    def _cancel_event_drag(self, reason: str) -> bool:
        session = self._state.event_drag
        if session is None:
            return False
        self._state.event_drag = None
        logger.debug("event_drag_cancelled reason=%s event_id=%s", reason, session.event_id)
        return True


def _apply_cell_edit(
    event_range: DateRange, old_cell_range: DateRange, new_cell_range: DateRange, kind: EditKind
) -> DateRange:
    if kind == "move":
        days = (new_cell_range.start.date() - old_cell_range.start.date()).days
        minutes = round(minute_of_day(new_cell_range.start) - minute_of_day(old_cell_range.start))
        return DateRange(
            event_range.start.add(days=days, minutes=minutes),
            event_range.end.add(days=days, minutes=minutes),
        )
    if kind == "resize_top":
        return DateRange(new_cell_range.start, event_range.end)
    return DateRange(event_range.start, new_cell_range.end)
