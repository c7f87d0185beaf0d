import json

from scorecard.corners.presets import get_preset
from scorecard.corners.schemas import CornerStatisticsConfig
from scorecard.corners.storage import (
    COLUMN_VISIBILITY_FILE,
    CORNER_CONFIG_FILE,
    ColumnVisibility,
    CornerConfigStore,
)


def _statistics_config() -> CornerStatisticsConfig:
    return CornerStatisticsConfig(
        top_left=get_preset("Personal Best on Hole").config,
        bottom_right=get_preset("Personal Avg of Last 3 Rounds").config,
    )


def test_corner_config_missing(tmp_path):
    store = CornerConfigStore(base_dir=tmp_path)
    assert store.get_corner_config() is None


def test_corner_config_persisted_in_wire_format(tmp_path):
    store = CornerConfigStore(base_dir=tmp_path)
    config = _statistics_config()

    store.save_corner_config(config)

    raw = json.loads((tmp_path / CORNER_CONFIG_FILE).read_text())
    assert raw["topLeft"]["roundUserFilter"] == "todaysPlayers"
    assert raw["bottomRight"]["roundSelection"] == "latest3"
    assert "topRight" not in raw
    assert store.get_corner_config() == config


def test_invalid_corner_config_is_ignored(tmp_path):
    (tmp_path / CORNER_CONFIG_FILE).write_text('{"topLeft": {"scope": "galaxy"}}')
    store = CornerConfigStore(base_dir=tmp_path)
    assert store.get_corner_config() is None

    (tmp_path / CORNER_CONFIG_FILE).write_text("not json")
    assert store.get_corner_config() is None


def test_column_visibility_defaults(tmp_path):
    visibility = CornerConfigStore(base_dir=tmp_path).get_column_visibility()
    assert visibility.distance is True
    assert visibility.par is False
    assert visibility.g_stats is True
    assert visibility.show_underlines is None


def test_column_visibility_coerces_stored_flags(tmp_path):
    (tmp_path / COLUMN_VISIBILITY_FILE).write_text(
        json.dumps({"distance": "false", "par": "yes", "gStats": 0, "showUnderlines": "?"})
    )
    visibility = CornerConfigStore(base_dir=tmp_path).get_column_visibility()
    assert visibility.distance is False
    assert visibility.par is True
    assert visibility.g_stats is False
    assert visibility.show_underlines is None


def test_column_visibility_round_trip(tmp_path):
    store = CornerConfigStore(base_dir=tmp_path / "nested")
    visibility = ColumnVisibility(par=True, show_font_size_adjustments=True)

    store.save_column_visibility(visibility)

    assert store.get_column_visibility() == visibility
