"""Horizontal span helpers."""

from __future__ import annotations


def get_span(start: int, end: int) -> int:
    """Return inclusive count of day indices between ``start`` and ``end``.

    Callers guarantee ``end >= start``.
    """
    return end - start + 1
