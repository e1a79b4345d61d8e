"""Shared exception policy for geometry and configuration faults."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class TimeGridError(Exception):
    """Base class for scheduler core errors."""


class ConfigurationError(TimeGridError, ValueError):
    """Invalid scheduler configuration detected at construction time."""


class GeometryInvariantError(TimeGridError, AssertionError):
    """A geometry invariant was violated by the caller's cell construction."""


def invariant(condition: bool, message: str, **fields: object) -> None:
    """Raise ``GeometryInvariantError`` with structured observability when ``condition`` fails."""
    if condition:
        return
    logger.error("geometry_invariant_violated msg=%s", message, extra={"invariant": fields})
    raise GeometryInvariantError(message)
