from pathlib import Path

import pytest

from scorecard.config import coerce_boolish, env_bool, get_settings, reset_settings_cache


def test_settings_default_to_data_dir(settings_env, tmp_path):
    settings_env.setenv("SCORECARD_DATA_DIR", str(tmp_path))
    settings_env.delenv("SCORECARD_ROUNDS_DIR", raising=False)
    settings_env.delenv("SCORECARD_CONFIG_DIR", raising=False)
    reset_settings_cache()

    settings = get_settings()

    assert settings.rounds_dir == tmp_path / "rounds"
    assert settings.config_dir == tmp_path / "config"


def test_settings_explicit_dirs(settings_env, tmp_path):
    settings_env.setenv("SCORECARD_ROUNDS_DIR", str(tmp_path / "r"))
    settings_env.setenv("SCORECARD_CONFIG_DIR", str(tmp_path / "c"))
    settings_env.setenv("REQUIRE_API_KEY", "yes")
    settings_env.setenv("API_KEY", "k1, k2,,")
    reset_settings_cache()

    settings = get_settings()

    assert settings.rounds_dir == Path(tmp_path / "r")
    assert settings.config_dir == Path(tmp_path / "c")
    assert settings.require_api_key is True
    assert settings.api_keys == frozenset({"k1", "k2"})


def test_env_bool(monkeypatch):
    monkeypatch.setenv("SCORECARD_FLAG", " On ")
    assert env_bool("SCORECARD_FLAG") is True
    monkeypatch.delenv("SCORECARD_FLAG")
    assert env_bool("SCORECARD_FLAG", True) is True


@pytest.mark.parametrize(
    "raw, expected",
    [(True, True), (0, False), ("no", False), ("TRUE", True), ("maybe", None), (None, None)],
)
def test_coerce_boolish(raw, expected):
    assert coerce_boolish(raw) is expected
