#!/usr/bin/env python3
"""Architecture boundary checks."""

from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PACKAGE = ROOT / "src/line_converter"


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _assert_no_imports(path: Path, banned: list[str]) -> None:
    text = _read(path)
    for token in banned:
        if token in text:
            raise SystemExit(f"Architecture violation in {path}: found '{token}'")


def main() -> None:
    """Run repository architecture boundary checks."""
    for directory in ("application", "adapters", "rules", "infrastructure"):
        for path in (PACKAGE / directory).glob("*.py"):
            _assert_no_imports(path, ["import typer", "from typer"])

    for path in (PACKAGE / "rules").glob("*.py"):
        _assert_no_imports(
            path,
            [
                "from line_converter.application",
                "from line_converter.adapters",
                "from line_converter.infrastructure",
            ],
        )

    _assert_no_imports(PACKAGE / "culture.py", ["import locale", "setlocale"])

    print("Architecture checks passed.")


if __name__ == "__main__":
    main()
