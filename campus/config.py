"""
config.py
Campus configuration (map center, zoom deltas, campus boundary).

Values resolve per field: persisted override file -> environment -> defaults.
The resulting CampusConfig is passed explicitly to whatever needs it.
"""
import json
import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from campus.base import Bounds, GeoPoint

log = logging.getLogger(__name__)


# ========================
# Defaults (EVSU campus)
# ========================

DEFAULT_CENTER_LATITUDE = 11.2443
DEFAULT_CENTER_LONGITUDE = 125.0023
DEFAULT_LATITUDE_DELTA = 0.01
DEFAULT_LONGITUDE_DELTA = 0.01
DEFAULT_NE_LATITUDE = 11.2500
DEFAULT_NE_LONGITUDE = 125.0080
DEFAULT_SW_LATITUDE = 11.2380
DEFAULT_SW_LONGITUDE = 124.9960

# override-file key -> (environment variable, default)
FIELDS = {
    "centerLatitude":  ("CAMPUS_CENTER_LATITUDE",  DEFAULT_CENTER_LATITUDE),
    "centerLongitude": ("CAMPUS_CENTER_LONGITUDE", DEFAULT_CENTER_LONGITUDE),
    "latitudeDelta":   ("CAMPUS_LATITUDE_DELTA",   DEFAULT_LATITUDE_DELTA),
    "longitudeDelta":  ("CAMPUS_LONGITUDE_DELTA",  DEFAULT_LONGITUDE_DELTA),
    "northEastLat":    ("CAMPUS_NE_LATITUDE",      DEFAULT_NE_LATITUDE),
    "northEastLng":    ("CAMPUS_NE_LONGITUDE",     DEFAULT_NE_LONGITUDE),
    "southWestLat":    ("CAMPUS_SW_LATITUDE",      DEFAULT_SW_LATITUDE),
    "southWestLng":    ("CAMPUS_SW_LONGITUDE",     DEFAULT_SW_LONGITUDE),
}


class ConfigError(ValueError):
    """Invalid campus configuration; .problems lists every failed check."""

    def __init__(self, problems):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


@dataclass(frozen=True)
class CampusConfig:
    center: GeoPoint
    latitude_delta: float
    longitude_delta: float
    bounds: Bounds

    @classmethod
    def from_values(cls, values):
        """Build from a dict keyed like the override file."""
        return cls(
            center=GeoPoint(values["centerLatitude"], values["centerLongitude"]),
            latitude_delta=values["latitudeDelta"],
            longitude_delta=values["longitudeDelta"],
            bounds=Bounds(
                north_east=GeoPoint(values["northEastLat"], values["northEastLng"]),
                south_west=GeoPoint(values["southWestLat"], values["southWestLng"]),
            ),
        )

    def to_values(self):
        return {
            "centerLatitude": self.center.latitude,
            "centerLongitude": self.center.longitude,
            "latitudeDelta": self.latitude_delta,
            "longitudeDelta": self.longitude_delta,
            "northEastLat": self.bounds.north_east.latitude,
            "northEastLng": self.bounds.north_east.longitude,
            "southWestLat": self.bounds.south_west.latitude,
            "southWestLng": self.bounds.south_west.longitude,
        }


def default_config():
    return CampusConfig.from_values({key: default for key, (_, default) in FIELDS.items()})


def _read_override(path):
    if path is None or not os.path.exists(path):
        return {}
    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        log.warning("Failed to parse campus config %s, using defaults: %s", path, e)
        return {}
    if not isinstance(data, dict):
        log.warning("Campus config %s is not a JSON object, using defaults", path)
        return {}
    return data


def _env_value(environ, name):
    raw = environ.get(name)
    if raw is None or raw == "":
        return None
    try:
        return float(raw)
    except ValueError:
        log.warning("Ignoring non-numeric %s=%r", name, raw)
        return None


def load_campus_config(override_path=None, environ=None):
    """
    Resolve a CampusConfig.

    override_path: JSON file written by save_campus_config (optional).
    environ: mapping of environment variables; defaults to os.environ after
             loading a .env file.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    override = _read_override(override_path)
    values = {}
    for key, (env_name, default) in FIELDS.items():
        value = override.get(key)
        if value is not None:
            try:
                value = float(value)
            except (TypeError, ValueError):
                log.warning("Ignoring non-numeric %s=%r in %s", key, value, override_path)
                value = None
        if value is None:
            value = _env_value(environ, env_name)
        if value is None:
            value = default
        values[key] = float(value)
    return CampusConfig.from_values(values)


def validate_campus_config(config):
    problems = []
    if not config.latitude_delta > 0:
        problems.append("Latitude delta must be positive")
    if not config.longitude_delta > 0:
        problems.append("Longitude delta must be positive")
    ne, sw = config.bounds.north_east, config.bounds.south_west
    if not ne.latitude > sw.latitude:
        problems.append("North-east latitude must be greater than south-west latitude")
    if not ne.longitude > sw.longitude:
        problems.append("North-east longitude must be greater than south-west longitude")
    if problems:
        raise ConfigError(problems)


def save_campus_config(config, path):
    """Validate then persist config as the override file."""
    validate_campus_config(config)
    with open(path, "w") as f:
        json.dump(config.to_values(), f, indent=2)
    log.info("Saved campus config to %s", path)
