#!/usr/bin/env python3
"""Statement-count guard for the public conversion use-cases."""

from __future__ import annotations

import ast
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
TARGET = ROOT / "src/line_converter/application/use_cases.py"
MAX_STATEMENTS = 30


def count_statements(function: ast.FunctionDef) -> int:
    """Count statements at any depth inside ``function``, docstring excluded."""
    body = function.body
    if ast.get_docstring(function) is not None:
        body = body[1:]
    return sum(
        isinstance(node, ast.stmt)
        for statement in body
        for node in ast.walk(statement)
    )


def find_violations(source: str, limit: int = MAX_STATEMENTS) -> list[str]:
    """Return ``"name: count"`` for public use-cases over ``limit`` statements."""
    violations: list[str] = []
    for node in ast.parse(source).body:
        if not isinstance(node, ast.FunctionDef) or node.name.startswith("_"):
            continue
        count = count_statements(node)
        if count > limit:
            violations.append(f"{node.name}: {count} statements")
    return violations


def main() -> None:
    """Fail when a use-case grows beyond the statement threshold."""
    violations = find_violations(TARGET.read_text(encoding="utf-8"))
    if violations:
        raise SystemExit(
            "Use-case complexity threshold exceeded:\n"
            + "\n".join(f"- {v}" for v in violations)
        )
    print("Orchestrator complexity check passed.")


if __name__ == "__main__":
    main()
