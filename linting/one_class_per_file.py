#!/usr/bin/env python
"""Allow at most one behavioural class per module.

Dataclasses and enums are data, not behaviour, and do not count.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PACKAGE_DIR = ROOT / "assistant_ws"

DATA_BASES = {"Enum", "IntEnum", "StrEnum"}


def _decorator_name(decorator: ast.expr) -> str | None:
    target = decorator.func if isinstance(decorator, ast.Call) else decorator
    if isinstance(target, ast.Name):
        return target.id
    if isinstance(target, ast.Attribute):
        return target.attr
    return None


def _is_data_class(node: ast.ClassDef) -> bool:
    if any(_decorator_name(d) == "dataclass" for d in node.decorator_list):
        return True
    bases = {b.id if isinstance(b, ast.Name) else getattr(b, "attr", None) for b in node.bases}
    return bool(bases & DATA_BASES)


def behaviour_classes(filepath: Path) -> list[str]:
    try:
        tree = ast.parse(filepath.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, SyntaxError):
        return []
    return [n.name for n in tree.body if isinstance(n, ast.ClassDef) and not _is_data_class(n)]


def check_file(filepath: Path, root: Path = ROOT) -> list[str]:
    classes = behaviour_classes(filepath)
    if len(classes) <= 1:
        return []
    return [f"  {filepath.relative_to(root)}: {len(classes)} classes ({', '.join(classes)})"]


def main() -> int:
    violations: list[str] = []
    for py_file in sorted(PACKAGE_DIR.rglob("*.py")):
        violations.extend(check_file(py_file))

    if violations:
        print("One-class-per-file violations:", file=sys.stderr)
        print("\n".join(violations), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
