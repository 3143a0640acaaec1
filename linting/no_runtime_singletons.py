#!/usr/bin/env python
"""Reject module-level client instances and lazy singleton accessors.

Clients must be constructed by their owner; a shared module instance makes
two connections (or two tests) step on each other's state.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PACKAGE_DIR = ROOT / "assistant_ws"

STATEFUL_CLASS_SUFFIXES = ("Client", "Queue", "Emitter", "Scheduler", "Monitor", "Slot")
SINGLETON_FN_NAMES = {"get_instance", "reset_instance", "get_client"}


def _called_class_name(value: ast.expr | None) -> str | None:
    if not isinstance(value, ast.Call):
        return None
    func = value.func
    if isinstance(func, ast.Name):
        return func.id
    if isinstance(func, ast.Attribute):
        return func.attr
    return None


def _assigned_names(node: ast.Assign | ast.AnnAssign) -> list[str]:
    targets = [node.target] if isinstance(node, ast.AnnAssign) else node.targets
    return [t.id for t in targets if isinstance(t, ast.Name)]


def check_file(filepath: Path, root: Path = ROOT) -> list[str]:
    try:
        tree = ast.parse(filepath.read_text(encoding="utf-8"), filename=str(filepath))
    except (OSError, UnicodeDecodeError, SyntaxError):
        return []

    rel = filepath.relative_to(root)
    violations: list[str] = []
    for node in tree.body:
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)) and node.name in SINGLETON_FN_NAMES:
            violations.append(f"  {rel}:{node.lineno} function `{node.name}` suggests a shared instance")
        elif isinstance(node, (ast.Assign, ast.AnnAssign)):
            class_name = _called_class_name(node.value)
            if class_name and class_name.endswith(STATEFUL_CLASS_SUFFIXES):
                names = ", ".join(_assigned_names(node))
                violations.append(f"  {rel}:{node.lineno} module-level `{class_name}` instance: {names}")
    return violations


def main() -> int:
    if not PACKAGE_DIR.is_dir():
        print(f"[no-runtime-singletons] Missing package directory: {PACKAGE_DIR}", file=sys.stderr)
        return 1

    violations: list[str] = []
    for py_file in sorted(PACKAGE_DIR.rglob("*.py")):
        violations.extend(check_file(py_file))

    if violations:
        print("Runtime singleton violations:", file=sys.stderr)
        print("\n".join(violations), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
