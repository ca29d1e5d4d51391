"""Shared pytest configuration, markers and file fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        path = Path(str(item.fspath))
        parts = set(path.parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def write_lines(tmp_path: Path) -> Callable[[str, list[str]], Path]:
    """Write ``lines`` to ``tmp_path / name`` and return the path."""

    def _write(name: str, lines: list[str]) -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_settings(tmp_path: Path) -> Callable[..., Path]:
    """Write a ``settings.xml`` with the given culture and verbosity."""

    def _write(culture: str = "en-US", verbose: bool = False) -> Path:
        path = tmp_path / "settings.xml"
        path.write_text(
            '<?xml version="1.0" encoding="utf-8"?>\n'
            "<Settings>\n"
            f"  <SourceCultureName>{culture}</SourceCultureName>\n"
            f"  <Verbose>{str(verbose).lower()}</Verbose>\n"
            "</Settings>\n",
            encoding="utf-8",
        )
        return path

    return _write
