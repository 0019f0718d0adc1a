"""Tests for bundlemap CLI entrypoints."""

from __future__ import annotations

import io
import json
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest
from rich.console import Console

import bundlemap.main as main
from bundlemap.cli import inspect as inspect_module

MANIFEST = {
    "collect": [
        {"path": "Assets/UI/Login.prefab", "tags": ["login"]},
        {"path": "Assets/UI/Shop.prefab", "tags": ["shop"]},
    ],
    "dependencies": {
        "Assets/UI/Login.prefab": ["Assets/Art/Atlas.png"],
        "Assets/UI/Shop.prefab": ["Assets/Art/Atlas.png"],
    },
}

COLLIDING_MANIFEST = {
    "collect": [
        {"path": "Assets/UI/a/icon.png"},
        {"path": "Assets/UI/b/icon.png"},
    ],
}

EXPLICIT_UI_CONFIG = (
    '{"pack_rules": {"rules": [{"pattern": "Assets/UI/*", '
    '"pack": "explicit", "label": "ui"}]}}'
)


def _write_manifest(tmp_path: Path, data: dict) -> Path:
    path = tmp_path / "project.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def _run_main(monkeypatch: pytest.MonkeyPatch, *argv: str) -> int:
    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)
    monkeypatch.setattr(sys, "argv", ["bundlemap", *argv])
    return main.main()


def test_build_command_writes_build_map(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    manifest = _write_manifest(tmp_path, MANIFEST)
    output = tmp_path / "buildmap.json"

    exit_code = _run_main(
        monkeypatch, "build", str(manifest), "-o", str(output), "--no-progress"
    )

    assert exit_code == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert [bundle["name"] for bundle in data["bundles"]] == ["assets/ui", "assets/art"]
    assert data["bundles"][1]["tags"] == ["login", "shop"]


def test_build_command_fails_on_collision(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    manifest = _write_manifest(tmp_path, COLLIDING_MANIFEST)
    output = tmp_path / "buildmap.json"

    exit_code = _run_main(
        monkeypatch,
        "build",
        str(manifest),
        "-o",
        str(output),
        "-c",
        EXPLICIT_UI_CONFIG,
        "--no-progress",
    )

    assert exit_code == 1
    assert not output.exists()


def test_build_command_collision_check_can_be_skipped(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    manifest = _write_manifest(tmp_path, COLLIDING_MANIFEST)
    output = tmp_path / "buildmap.json"

    exit_code = _run_main(
        monkeypatch,
        "build",
        str(manifest),
        "-o",
        str(output),
        "-c",
        EXPLICIT_UI_CONFIG,
        "--no-collision-check",
        "--no-progress",
    )

    assert exit_code == 0
    assert output.exists()


def test_build_command_reports_invalid_manifest(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    manifest = _write_manifest(tmp_path, {"collect": [{"tags": ["x"]}]})

    exit_code = _run_main(
        monkeypatch, "build", str(manifest), "-o", str(tmp_path / "out.json")
    )

    assert exit_code == 1


def test_inspect_command_prints_bundles(tmp_path: Path) -> None:
    manifest = _write_manifest(tmp_path, MANIFEST)
    buffer = io.StringIO()
    console = Console(file=buffer, width=200)
    args = SimpleNamespace(manifest=str(manifest), config=None, no_collision_check=False)

    exit_code = inspect_module.inspect_command(args, console=console)

    assert exit_code == 0
    output = buffer.getvalue()
    assert "assets/ui" in output
    assert "assets/art" in output
    assert "login, shop" in output


def test_graph_command_reports_cycles(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    manifest = _write_manifest(
        tmp_path,
        {"collect": [{"path": "A.prefab"}], "dependencies": {"A.prefab": ["B.mat"], "B.mat": ["A.prefab"]}},
    )

    exit_code = _run_main(monkeypatch, "graph", str(manifest))

    assert exit_code == 0
    assert "Detected 1 reference cycle(s)" in caplog.text


def test_main_requires_command(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """Ensure missing subcommands make the CLI print help and fail."""
    exit_code = _run_main(monkeypatch)

    assert exit_code == 1
    assert "Bundlemap" in capsys.readouterr().out
