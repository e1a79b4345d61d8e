"""Scheduler configuration and env loading."""

from __future__ import annotations

import datetime
import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path

import pendulum

from timegrid.app.scheduler_config import SchedulerConfig
from timegrid.core.errors import ConfigurationError
from timegrid.core.models import DAYS_IN_WEEK
from timegrid.core.week import start_of_week, to_timestamp

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILES: tuple[str, ...] = (".env.timegrid", ".env.timegrid.local")


def load_env_file(path: str = ".env.timegrid", *, override_existing: bool = True) -> bool:
    """Load KEY=VALUE pairs from an env file into process environment.

    By default, values from the env file overwrite existing environment variables.
    Returns whether the file existed.
    """
    env_path = _resolve_env_path(path)
    if not env_path.exists():
        return False

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :].lstrip()
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]

        if override_existing or key not in os.environ:
            os.environ[key] = value
    return True


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> list[str]:
    """Load ``.env.timegrid`` then ``.env.timegrid.local``; later files win.

    Returns the paths that were found.
    """
    loaded: list[str] = []
    for path in tuple(paths) if paths is not None else DEFAULT_ENV_FILES:
        if load_env_file(path, override_existing=override_existing):
            loaded.append(path)
    return loaded


def load_scheduler_config(
    *,
    env: Mapping[str, str] | None = None,
    today: datetime.datetime | None = None,
) -> SchedulerConfig:
    """Build a validated ``SchedulerConfig`` from ``TIMEGRID_*`` variables.

    Without ``TIMEGRID_ORIGIN_DATE`` the origin is the start of the week
    containing ``today`` (defaulting to now).
    Malformed or out-of-range values raise ``ConfigurationError``.
    """
    week_start = _int("TIMEGRID_WEEK_START", 1, env=env)
    origin_raw = _text("TIMEGRID_ORIGIN_DATE", "", env=env)
    if origin_raw:
        origin = to_timestamp(origin_raw)
    else:
        origin = start_of_week(today if today is not None else pendulum.now(), week_start)
    config = SchedulerConfig(
        origin_date=origin,
        hour_start=_int("TIMEGRID_HOUR_START", 0, env=env),
        hour_end=_int("TIMEGRID_HOUR_END", 24, env=env),
        week_start=week_start,
        drag_precision=_int("TIMEGRID_DRAG_PRECISION", 30, env=env),
        visual_grid_precision=_int("TIMEGRID_VISUAL_GRID_PRECISION", 30, env=env),
        click_precision=_int("TIMEGRID_CLICK_PRECISION", 30, env=env),
        num_horizontal_cells=_int("TIMEGRID_NUM_DAYS", DAYS_IN_WEEK, env=env),
    )
    logger.debug(
        "scheduler_config_loaded origin=%s hours=%d-%d drag=%d visual=%d click=%d",
        config.origin_date,
        config.hour_start,
        config.hour_end,
        config.drag_precision,
        config.visual_grid_precision,
        config.click_precision,
    )
    return config


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _int(name: str, default: int, *, env: Mapping[str, str] | None = None) -> int:
    raw = _raw(name, env=env)
    if raw is None or not raw.strip():
        return int(default)
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def _resolve_env_path(path: str) -> Path:
    """Resolve env path from cwd, then the project root."""
    candidate = Path(path)
    if candidate.exists() or candidate.is_absolute():
        return candidate
    # Fallback for IDE run configs with different working directory.
    project_root = Path(__file__).resolve().parents[2]
    return project_root / path
