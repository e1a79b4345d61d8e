import pytest

from timegrid.input.keymap import map_key_name


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Escape", "escape"),
        ("esc", "escape"),
        ("Delete", "delete"),
        (" backspace ", "delete"),
        ("Return", "enter"),
        ("a", None),
        ("", None),
    ],
)
def test_map_key_name_normalizes_backend_names(raw: str, expected: str | None) -> None:
    assert map_key_name(raw) == expected
