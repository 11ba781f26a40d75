# breakin/config.py
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError
from .parsers import DEFAULT_YEAR, FAILED_MARKER

logger = logging.getLogger(__name__)

# Lookup files are read from the working directory unless configured
AUTHORIZED_USERS_FILE = Path("authorized_users.txt")
BANNED_IPS_FILE = Path("banned_ips.txt")

WINDOW_SECONDS = 20
FAILURE_THRESHOLD = 3
REQUEST_TIMEOUT = 30

_INT_FIELDS = ("window_seconds", "failure_threshold", "reference_year", "request_timeout")
_PATH_FIELDS = ("authorized_users_file", "banned_ips_file")


@dataclass(frozen=True)
class DetectorConfig:
    authorized_users_file: Path = AUTHORIZED_USERS_FILE
    banned_ips_file: Path = BANNED_IPS_FILE
    window_seconds: int = WINDOW_SECONDS
    failure_threshold: int = FAILURE_THRESHOLD
    reference_year: int = DEFAULT_YEAR
    failure_marker: str = FAILED_MARKER
    request_timeout: int = REQUEST_TIMEOUT

    def override(self, **changes: Any) -> "DetectorConfig":
        """Return a copy with every non-None value in changes applied."""
        changes = {k: v for k, v in changes.items() if v is not None}
        if not changes:
            return self
        return replace(self, **_coerce(changes, source="command line"))


def _coerce(data: Dict[str, Any], source: str) -> Dict[str, Any]:
    known = {f.name for f in fields(DetectorConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown settings in {source}: {', '.join(unknown)}")

    values: Dict[str, Any] = {}
    for key, value in data.items():
        if key in _INT_FIELDS:
            # bool is an int subclass, "yes" in YAML must not become 1
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigError(
                    f"{key} in {source} must be a positive integer, got {value!r}"
                )
            values[key] = value
        elif key in _PATH_FIELDS:
            if not isinstance(value, (str, Path)) or not str(value).strip():
                raise ConfigError(f"{key} in {source} must be a file path")
            values[key] = Path(value)
        else:
            if not isinstance(value, str) or not value:
                raise ConfigError(f"{key} in {source} must be a non-empty string")
            values[key] = value
    return values


def load_config(path: Optional[Path] = None) -> DetectorConfig:
    """
    Load detector settings from a YAML file.

    No path means defaults. An empty file also gives defaults, anything
    other than a mapping of known settings raises ConfigError.
    """
    if path is None:
        return DetectorConfig()

    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not data:
        logger.info("Config file %s is empty, using defaults", path)
        return DetectorConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    config = DetectorConfig(**_coerce(data, source=str(path)))
    logger.info("Loaded config from %s", path)
    return config
