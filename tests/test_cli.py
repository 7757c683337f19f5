# tests/test_cli.py
import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from deblurkit.cli.diagnostics import main, synthetic_scene
from deblurkit.cli.settings import (
    load_settings,
    load_taper_config,
    save_settings,
    select_settings,
)
from deblurkit.taper.edge import TaperConfig


def test_load_flat_and_sectioned_json(tmp_path: Path):
    flat = tmp_path / "flat.json"
    flat.write_text(json.dumps({"guide_ksize": 21}), encoding="utf-8")
    assert load_taper_config(flat).guide_ksize == 21

    sectioned = tmp_path / "sectioned.json"
    sectioned.write_text(
        json.dumps({"taper": {"smooth_ksize": 31}, "other": {"x": 1}}), encoding="utf-8"
    )
    cfg = load_taper_config(sectioned)
    assert cfg.smooth_ksize == 31
    assert cfg.guide_ksize == TaperConfig().guide_ksize


def test_load_csv(tmp_path: Path):
    path = tmp_path / "taper.csv"
    path.write_text("key,value\nguide_ksize,15\ntaper_weight,0.8\n", encoding="utf-8")
    assert load_settings(path) == {"guide_ksize": 15, "taper_weight": 0.8}
    cfg = load_taper_config(path)
    assert cfg.guide_ksize == 15
    assert cfg.taper_weight == pytest.approx(0.8)


def test_save_and_reload_round(tmp_path: Path):
    path = tmp_path / "out" / "settings.json"
    save_settings(path, TaperConfig(guide_ksize=23).to_dict(), section="taper")
    data = load_settings(path)
    assert select_settings(data, "taper")["guide_ksize"] == 23
    assert load_taper_config(path) == TaperConfig(guide_ksize=23)


def test_missing_settings_file_exits(tmp_path: Path):
    with pytest.raises(SystemExit):
        load_settings(tmp_path / "nope.json")


def test_unknown_setting_rejected(tmp_path: Path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"taper": {"radius": 3}}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_taper_config(path)


def test_synthetic_scene_shapes():
    img, mask = synthetic_scene(32, seed=1)
    assert img.shape == mask.shape == (32, 32)
    assert (img == 0).any()
    assert mask.any()


def test_diagnostics_command_runs(tmp_path: Path):
    saved = tmp_path / "effective.json"
    runner = CliRunner()
    result = runner.invoke(main, ["--size", "32", "--save-settings", str(saved)])
    assert result.exit_code == 0, result.output
    assert "valid: (32, 32) * (1, 3) -> (32, 30)" in result.output
    assert "mask region preserved: True" in result.output
    assert load_taper_config(saved) == TaperConfig()
