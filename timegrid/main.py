"""Demo entry point: replay scripted gestures against an in-memory store."""

import logging

from timegrid.app.memory_store import InMemoryEventStore
from timegrid.app.scheduler import TimeGridScheduler
from timegrid.core.models import ResizeHandle
from timegrid.infra.config import load_default_env_files, load_scheduler_config
from timegrid.infra.logging import setup_logging, shutdown_logging

logger = logging.getLogger(__name__)

DEMO_WIDTH = 700.0
DEMO_HEIGHT = 960.0


def run_demo(scheduler: TimeGridScheduler, store: InMemoryEventStore) -> None:
    """Create one event by dragging, then move and resize it."""
    scheduler.resize_surface(DEMO_WIDTH, DEMO_HEIGHT)
    grid = scheduler.grid
    assert grid is not None
    start_row = grid.num_vertical_cells // 3
    end_row = min(grid.num_vertical_cells, start_row + 3)
    x = grid.cell_width * 1.5
    generation = scheduler.handle_pointer_down(x, start_row * grid.cell_height)
    scheduler.handle_pointer_move(x, end_row * grid.cell_height, generation)
    scheduler.handle_pointer_up(x, end_row * grid.cell_height, generation)
    _log_events("after_create", store)

    scheduler.set_schedule(store.events)
    session = scheduler.begin_event_drag(0, 0)
    if session is not None:
        original = session.original_rect
        session.drag_to(original.left + grid.cell_width, original.top + 2 * grid.cell_height)
        scheduler.end_event_drag()
    _log_events("after_move", store)

    scheduler.set_schedule(store.events)
    session = scheduler.begin_event_drag(0, 0)
    if session is not None:
        session.resize(ResizeHandle.BOTTOM, grid.cell_height)
        scheduler.end_event_drag()
    _log_events("after_resize", store)


def main() -> None:
    """Run the timegrid demo."""
    load_default_env_files()
    setup_logging()
    config = load_scheduler_config()
    store = InMemoryEventStore()
    scheduler = TimeGridScheduler(config, store)
    logger.info(
        "demo_started origin=%s hours=%d-%d drag_precision=%d",
        config.origin_date,
        config.hour_start,
        config.hour_end,
        config.drag_precision,
    )
    try:
        run_demo(scheduler, store)
    finally:
        shutdown_logging()


def _log_events(stage: str, store: InMemoryEventStore) -> None:
    for event in store.events:
        logger.info("demo_event stage=%s id=%s start=%s end=%s", stage, event.id, event.start_time, event.end_time)


if __name__ == "__main__":
    main()
