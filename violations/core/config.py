"""Per-category threshold configuration.

Each violation category (checkstyle, pmd, pylint, ...) carries its own
thresholds. ``TypeConfig.health_for`` turns a violation count into a 0-100
health score; a negative count means no report files were found for the
category and yields the negative sentinel ``-1``.

Configuration is read from YAML:

    types:
      checkstyle: {min: 10, max: 200, unstable: 150}
      pylint: {min: 0, max: 50}
    limit: 100
    encoding: utf-8
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .constants import DEFAULT_LIMIT, DEFAULT_MAX, DEFAULT_MIN, DEFAULT_TYPES

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "VIOLATIONS_CONFIG"

_TYPE_KEYS = {"min", "max", "unstable", "pattern"}


class ConfigError(ValueError):
    """Raised when the threshold configuration is invalid."""


@dataclass
class TypeConfig:
    """Thresholds for one violation category."""

    name: str
    min: int = DEFAULT_MIN  # at or below: 100% healthy
    max: int = DEFAULT_MAX  # at or above: 0% healthy
    unstable: Optional[int] = None  # above: build is unstable
    pattern: Optional[str] = None  # report file glob used by the recorder

    def health_for(self, count: int) -> int:
        """Health score for a violation count, or -1 if no reports were found."""
        if count < 0:
            return -1
        if count <= self.min:
            return 100
        if count >= self.max or self.max <= self.min:
            return 0
        return 100 - (100 * (count - self.min)) // (self.max - self.min)

    def is_unstable(self, count: int) -> bool:
        return self.unstable is not None and count > self.unstable


@dataclass
class ViolationsConfig:
    """Category name -> TypeConfig, plus file page display settings."""

    type_configs: Dict[str, TypeConfig] = field(default_factory=dict)
    limit: int = DEFAULT_LIMIT
    source_path_pattern: Optional[str] = None
    encoding: Optional[str] = None

    @classmethod
    def default(cls) -> "ViolationsConfig":
        return cls(type_configs={name: TypeConfig(name=name) for name in DEFAULT_TYPES})

    def get(self, type_name: str) -> Optional[TypeConfig]:
        return self.type_configs.get(type_name)


def _as_int(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{what} must be an integer, got {value!r}")
    return value


def _type_config_from_dict(name: str, raw: Any) -> TypeConfig:
    if raw is None:
        return TypeConfig(name=name)
    if not isinstance(raw, dict):
        raise ConfigError(f"Configuration for type '{name}' must be a mapping")

    unknown = set(raw) - _TYPE_KEYS
    if unknown:
        raise ConfigError(f"Unknown keys for type '{name}': {', '.join(sorted(unknown))}")

    tc = TypeConfig(name=name)
    if "min" in raw:
        tc.min = _as_int(raw["min"], f"{name}.min")
    if "max" in raw:
        tc.max = _as_int(raw["max"], f"{name}.max")
    if raw.get("unstable") is not None:
        tc.unstable = _as_int(raw["unstable"], f"{name}.unstable")
    if raw.get("pattern") is not None:
        tc.pattern = str(raw["pattern"])

    if tc.min < 0:
        raise ConfigError(f"{name}.min must not be negative")
    return tc


def config_from_dict(data: Dict[str, Any]) -> ViolationsConfig:
    """Build a ViolationsConfig from parsed YAML.

    Categories not mentioned keep the default thresholds.
    """
    config = ViolationsConfig.default()
    types = data.get("types") or {}
    if not isinstance(types, dict):
        raise ConfigError("'types' must be a mapping of category name to thresholds")

    for name, raw in types.items():
        config.type_configs[str(name)] = _type_config_from_dict(str(name), raw)

    if data.get("limit") is not None:
        config.limit = _as_int(data["limit"], "limit")
    config.source_path_pattern = data.get("source_path_pattern")
    config.encoding = data.get("encoding")
    return config


def load_config(path: Optional[Union[str, Path]] = None) -> ViolationsConfig:
    """Load configuration from a YAML file.

    Args:
        path: YAML file. Defaults to the VIOLATIONS_CONFIG env var.

    Returns:
        The loaded configuration, or the defaults if no file is configured
        or the file does not exist.

    Raises:
        ConfigError: If the file exists but is not valid configuration.
    """
    if path is None:
        path = os.getenv(CONFIG_ENV_VAR)
    if not path:
        logger.info("No violations config given, using default thresholds")
        return ViolationsConfig.default()

    config_path = Path(path)
    if not config_path.exists():
        logger.warning(f"Violations config not found at {config_path}, using default thresholds")
        return ViolationsConfig.default()

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping at the top level")

    config = config_from_dict(data)
    logger.debug(f"Loaded thresholds for {len(config.type_configs)} types from {config_path}")
    return config
