#!/usr/bin/env python3
"""Layering checks for the funcworker package."""

from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PACKAGE = ROOT / "src/funcworker"

# Lower layers never reach into the ones listed for them.
LAYERS: dict[str, list[str]] = {
    "converters": ["funcworker.metadata", "funcworker.application"],
    "metadata": ["funcworker.converters", "funcworker.application.use_cases"],
    "application": ["funcworker.converters"],
}


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _assert_no_imports(path: Path, banned: list[str]) -> None:
    text = _read(path)
    for token in banned:
        if f"from {token}" in text or f"import {token}" in text:
            raise SystemExit(f"Architecture violation in {path}: found '{token}'")


def main(package: Path = PACKAGE) -> None:
    """Run repository architecture boundary checks."""
    for layer, banned in LAYERS.items():
        for path in (package / layer).glob("*.py"):
            _assert_no_imports(path, banned)

    for name in ("errors.py", "types.py", "schemas.py"):
        _assert_no_imports(
            package / name,
            ["funcworker.converters", "funcworker.metadata", "funcworker.application"],
        )

    print("Architecture checks passed.")


if __name__ == "__main__":
    main()
