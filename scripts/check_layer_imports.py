#!/usr/bin/env python3
"""Enforce import direction between timegrid layers."""

from __future__ import annotations

import argparse
import ast
from pathlib import Path

# Layer -> packages it must not import.
FORBIDDEN_IMPORTS = {
    "timegrid/core": ("timegrid.input", "timegrid.app", "timegrid.infra"),
    "timegrid/input": ("timegrid.app", "timegrid.infra"),
    "timegrid/app": ("timegrid.infra",),
}


def _imported_modules(tree: ast.AST) -> list[str]:
    modules: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.ImportFrom) and node.module:
            modules.append(node.module)
        elif isinstance(node, ast.Import):
            modules.extend(alias.name for alias in node.names)
    return modules


def main() -> int:
    parser = argparse.ArgumentParser(description="Check timegrid layer import direction.")
    parser.parse_args()

    violations: list[str] = []
    for layer, forbidden in FORBIDDEN_IMPORTS.items():
        for path in sorted(Path(layer).rglob("*.py")):
            tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
            for module in _imported_modules(tree):
                if module.startswith(forbidden):
                    violations.append(f"{path.as_posix()}: imports {module}")

    if violations:
        print("Layer import violations:")
        for line in violations:
            print(f"  {line}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
