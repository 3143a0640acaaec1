#!/usr/bin/env python
"""Require a single literal `__all__` as the last top-level statement.

Modules without `__all__` (scripts, `__main__`) are skipped.
"""

from __future__ import annotations

import ast
import sys
import argparse
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


def _binds_all(node: ast.stmt) -> bool:
    if isinstance(node, ast.Assign):
        return any(isinstance(t, ast.Name) and t.id == "__all__" for t in node.targets)
    if isinstance(node, (ast.AnnAssign, ast.AugAssign)):
        return isinstance(node.target, ast.Name) and node.target.id == "__all__"
    if isinstance(node, ast.Expr) and isinstance(node.value, ast.Call):
        func = node.value.func
        return isinstance(func, ast.Attribute) and isinstance(func.value, ast.Name) and func.value.id == "__all__"
    return False


def check_file(filepath: Path, root: Path = ROOT) -> list[str]:
    try:
        tree = ast.parse(filepath.read_text(encoding="utf-8"), filename=str(filepath))
    except (OSError, UnicodeDecodeError, SyntaxError):
        return []

    rel = filepath.relative_to(root)
    bindings = [(i, node) for i, node in enumerate(tree.body) if _binds_all(node)]
    if not bindings:
        return []
    if len(bindings) > 1:
        return [f"  {rel}:{node.lineno} `__all__` bound more than once" for _, node in bindings]

    idx, node = bindings[0]
    if not isinstance(node, (ast.Assign, ast.AnnAssign)) or not isinstance(node.value, (ast.List, ast.Tuple)):
        return [f"  {rel}:{node.lineno} `__all__` must be a single list literal"]
    return [f"  {rel}:{later.lineno} statement after `__all__`" for later in tree.body[idx + 1 :]]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Enforce that __all__ is defined once at module bottom.")
    parser.add_argument("--dirs", nargs="+", default=["assistant_ws", "linting"])
    args = parser.parse_args(argv)

    violations: list[str] = []
    for d in args.dirs:
        for py_file in sorted((ROOT / d).rglob("*.py")):
            violations.extend(check_file(py_file))

    if violations:
        print("__all__ placement violations:", file=sys.stderr)
        print("\n".join(violations), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
