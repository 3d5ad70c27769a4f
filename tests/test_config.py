import json

import pytest

from mindmap.config import EditorSettings, load_config, save_config, load_settings
from mindmap.constants import JITTER_X, VERTICAL_STEP


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("JITTER_X", "VERTICAL_STEP", "MAX_HISTORY", "LOG_LEVEL"):
        monkeypatch.delenv(f"MINDMAP_{key}", raising=False)


def test_defaults_when_no_config(tmp_path):
    settings = load_settings(tmp_path / "config.json")
    assert settings == EditorSettings()
    assert settings.jitter_x == JITTER_X
    assert settings.vertical_step == VERTICAL_STEP
    assert settings.max_history is None


def test_config_file_values(tmp_path):
    path = tmp_path / "config.json"
    save_config({"jitter_x": 10, "max_history": 25, "log_level": "debug"}, path)

    settings = load_settings(path)

    assert settings.jitter_x == 10.0
    assert settings.max_history == 25
    assert settings.log_level == "DEBUG"


def test_environment_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    save_config({"max_history": 25, "vertical_step": 80}, path)
    monkeypatch.setenv("MINDMAP_MAX_HISTORY", "5")

    settings = load_settings(path)

    assert settings.max_history == 5
    assert settings.vertical_step == 80.0


def test_zero_or_none_history_means_unbounded(tmp_path, monkeypatch):
    monkeypatch.setenv("MINDMAP_MAX_HISTORY", "none")
    assert load_settings(tmp_path / "config.json").max_history is None
    monkeypatch.setenv("MINDMAP_MAX_HISTORY", "0")
    assert load_settings(tmp_path / "config.json").max_history is None


def test_malformed_config_is_ignored(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_config(path) == {}
    assert load_settings(path) == EditorSettings()


def test_bad_value_raises(tmp_path, monkeypatch):
    monkeypatch.setenv("MINDMAP_JITTER_X", "wide")
    with pytest.raises(ValueError):
        load_settings(tmp_path / "config.json")


def test_save_config_round_trips(tmp_path):
    path = tmp_path / "config.json"
    save_config({"jitter_x": 5}, path)
    with path.open("r", encoding="utf-8") as f:
        assert json.load(f) == {"jitter_x": 5}
