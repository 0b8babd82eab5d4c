from datetime import date

import pytest

from config import ConfigError, DEFAULT_CONFIG, config_from_dict, load_config


def test_defaults():
    config = config_from_dict({})
    assert config.threshold_degrees == 0.5
    assert config.ticks_per_second == 60
    assert config.cutoff_date == date(2015, 1, 1)
    assert config.center_lat == 45.0
    assert config.center_lon == -62.0


def test_partial_override_keeps_other_defaults():
    config = config_from_dict({"alert": {"threshold_degrees": 0.25}})
    assert config.threshold_degrees == 0.25
    assert config.default_speed == DEFAULT_CONFIG["playback"]["default_speed"]


def test_null_cutoff_disables_it():
    assert config_from_dict({"data": {"cutoff_date": None}}).cutoff_date is None


def test_missing_file_uses_defaults(tmp_path):
    config = load_config(tmp_path / "nope.yaml")
    assert config.metadata_source == DEFAULT_CONFIG["data"]["metadata"]


def test_yaml_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("playback:\n  ticks_per_second: 30\ndata:\n  cutoff_date: 2019-06-01\n")
    config = load_config(path)
    assert config.ticks_per_second == 30
    assert config.cutoff_date == date(2019, 6, 1)


@pytest.mark.parametrize("text", [
    "alert:\n  threshold_degrees: -1\n",
    "playback:\n  ticks_per_second: fast\n",
    "data:\n  cutoff_date: someday\n",
    "- just\n- a list\n",
    "alert: [unclosed\n",
])
def test_invalid_config(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text)
    with pytest.raises(ConfigError):
        load_config(path)
