"""Backend-agnostic key normalization helpers."""

from __future__ import annotations


def map_key_name(key_name: str) -> str | None:
    """Normalize backend key names to the scheduler's key identifiers."""
    normalized = key_name.strip().lower()
    key_map = {
        "escape": "escape",
        "esc": "escape",
        "delete": "delete",
        "del": "delete",
        "backspace": "delete",
        "enter": "enter",
        "return": "enter",
    }
    return key_map.get(normalized)
