from __future__ import annotations

from pathlib import Path

from linting import all_at_bottom, one_class_per_file, no_runtime_singletons


def _module(tmp_path: Path, source: str) -> Path:
    path = tmp_path / "mod.py"
    path.write_text(source, encoding="utf-8")
    return path


def test_package_passes_code_policies() -> None:
    assert all_at_bottom.main([]) == 0
    assert one_class_per_file.main() == 0
    assert no_runtime_singletons.main() == 0


def test_module_level_client_instance_is_flagged(tmp_path: Path) -> None:
    path = _module(tmp_path, "from x import RealtimeClient\n\nclient = RealtimeClient(config)\n")
    violations = no_runtime_singletons.check_file(path, tmp_path)
    assert len(violations) == 1
    assert "RealtimeClient" in violations[0]


def test_second_behaviour_class_is_flagged(tmp_path: Path) -> None:
    source = "from dataclasses import dataclass\n\n@dataclass\nclass A:\n    x: int\n\nclass B: ...\nclass C: ...\n"
    path = _module(tmp_path, source)
    assert one_class_per_file.behaviour_classes(path) == ["B", "C"]
    assert len(one_class_per_file.check_file(path, tmp_path)) == 1


def test_statement_after_all_is_flagged(tmp_path: Path) -> None:
    path = _module(tmp_path, "__all__ = ['f']\n\ndef f() -> None: ...\n")
    violations = all_at_bottom.check_file(path, tmp_path)
    assert len(violations) == 1
    assert "after `__all__`" in violations[0]
