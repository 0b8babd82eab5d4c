"""Dashboard configuration loaded from YAML, merged over built-in defaults."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.yaml"

DEFAULT_CONFIG = {
    'data': {
        'metadata': 'data/turtle_metadata.json',
        'sightings': 'data/predicted_turtle_data.csv',
        'vessels': 'data/vessel_presence.csv',
        'cutoff_date': '2015-01-01',
        'timeout_seconds': 30,
    },
    'map': {
        'center_lat': 45.0,
        'center_lon': -62.0,
        'zoom_start': 5.5,
        'tiles': 'CartoDB positron',
    },
    'alert': {
        'threshold_degrees': 0.5,
    },
    'playback': {
        'ticks_per_second': 60,
        'default_speed': 1.0,
    },
}


class ConfigError(ValueError):
    """Raised when a config file cannot be read or holds invalid values."""


@dataclass(frozen=True, slots=True)
class MapConfig:
    metadata_source: str
    sightings_source: str
    vessels_source: str
    cutoff_date: date | None
    timeout_seconds: float
    center_lat: float
    center_lon: float
    zoom_start: float
    tiles: str
    threshold_degrees: float
    ticks_per_second: float
    default_speed: float


def _merge(base, override):
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merged[key] = _merge(base[key], value)
        else:
            merged[key] = value
    return merged


def _parse_cutoff(value):
    if value is None or value == '':
        return None
    if isinstance(value, date):
        # yaml.safe_load already turns unquoted ISO dates into date objects
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise ConfigError(f"Invalid cutoff_date: {value!r}") from exc


def config_from_dict(raw):
    """Build a MapConfig from a (possibly partial) config dictionary."""
    merged = _merge(DEFAULT_CONFIG, raw or {})
    data = merged['data']
    map_cfg = merged['map']
    try:
        cfg = MapConfig(
            metadata_source=str(data['metadata']),
            sightings_source=str(data['sightings']),
            vessels_source=str(data['vessels']),
            cutoff_date=_parse_cutoff(data.get('cutoff_date')),
            timeout_seconds=float(data['timeout_seconds']),
            center_lat=float(map_cfg['center_lat']),
            center_lon=float(map_cfg['center_lon']),
            zoom_start=float(map_cfg['zoom_start']),
            tiles=str(map_cfg['tiles']),
            threshold_degrees=float(merged['alert']['threshold_degrees']),
            ticks_per_second=float(merged['playback']['ticks_per_second']),
            default_speed=float(merged['playback']['default_speed']),
        )
    except ConfigError:
        raise
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid configuration value: {exc}") from exc

    if cfg.threshold_degrees <= 0:
        raise ConfigError("alert.threshold_degrees must be positive")
    if cfg.ticks_per_second <= 0:
        raise ConfigError("playback.ticks_per_second must be positive")
    return cfg


def load_config(config_path=DEFAULT_CONFIG_PATH):
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML file. A missing file falls back to defaults.

    Returns:
        MapConfig with file values merged over DEFAULT_CONFIG.

    Raises:
        ConfigError: If the file is not valid YAML or holds invalid values.
    """
    path = Path(config_path)
    if not path.exists():
        logger.warning("Config file %s not found, using defaults", path)
        return config_from_dict({})

    try:
        with path.open('r', encoding='utf-8') as handle:
            raw = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Could not parse {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")
    return config_from_dict(raw)
