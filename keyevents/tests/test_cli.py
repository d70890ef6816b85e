from __future__ import annotations

import json
from pathlib import Path

import pytest

from keyevents.build_timeline_layout import ENV_YEARS_BACK, ENV_YEARS_FORWARD, main, resolve_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv(ENV_YEARS_BACK, raising=False)
    monkeypatch.delenv(ENV_YEARS_FORWARD, raising=False)
    monkeypatch.chdir(tmp_path)


def test_write_sample_then_layout(tmp_path: Path) -> None:
    table = tmp_path / "events.tsv"
    out = tmp_path / "out" / "layout.json"
    assert main([str(table), "--write-sample", "--today", "2025-06-01", "--output", str(out)]) == 0
    assert table.exists()

    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["empty"] is False
    assert payload["window"] == {"min": "2024-01-01", "max": "2033-01-01"}
    assert len(payload["events"]) == 5
    assert payload["plot"]["width"] == 1120


def test_env_overrides_years_back(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    table = tmp_path / "events.tsv"
    out = tmp_path / "layout.json"
    monkeypatch.setenv(ENV_YEARS_BACK, "0")
    main([str(table), "--write-sample", "--today", "2026-06-01", "--output", str(out)])

    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["window"]["min"] == "2026-01-01"
    assert [e["company"] for e in payload["events"]] == ["Northwind Pharma", "Northwind Pharma", "Contoso Therapeutics"]


def test_viewport_flags_override_config(tmp_path: Path) -> None:
    config = tmp_path / "timeline.toml"
    config.write_text('layout_mode = "footer"\n[viewport]\nwidth = 800\nheight = 400\n', encoding="utf-8")
    loaded = resolve_config(config, width=None, height=300)
    assert loaded.timeline.layout_mode == "footer"
    assert (loaded.viewport.width, loaded.viewport.height) == (800, 300)


def test_bad_env_value_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_YEARS_FORWARD, "-3")
    with pytest.raises(SystemExit):
        resolve_config(None, width=None, height=None)
    monkeypatch.setenv(ENV_YEARS_FORWARD, "many")
    with pytest.raises(SystemExit):
        resolve_config(None, width=None, height=None)


def test_missing_input_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        main([str(tmp_path / "missing.tsv")])


def test_bad_today_exits(tmp_path: Path) -> None:
    table = tmp_path / "events.tsv"
    with pytest.raises(SystemExit):
        main([str(table), "--write-sample", "--today", "06/01/2025"])
