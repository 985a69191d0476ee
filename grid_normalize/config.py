"""Configuration management."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Dict, Any, Tuple
import math
import os

import yaml

from grid_normalize.core.errors import ConfigError


_TRUE_STRINGS = {'1', 'true', 'yes', 'on'}
_FALSE_STRINGS = {'0', 'false', 'no', 'off', ''}


class Config:
    """Configuration manager."""

    def __init__(self, config_file: Optional[Path] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to YAML config file (optional)
        """
        self.config = self._load_defaults()

        if config_file:
            self.load_from_file(Path(config_file))

        # Override with environment variables
        self._load_from_env()

    def _load_defaults(self) -> Dict[str, Any]:
        """Load default configuration."""
        return {
            'normalization': {
                'epsilon': 0.0,
                'ignore_value': -1.0,
                'clamp': False,
                'minimum': None,
                'maximum': None,
                'images': [],
            },
            'output': {
                'report': None,
            },
        }

    def load_from_file(self, config_file: Path) -> None:
        """Load configuration from YAML file.

        Raises:
            ConfigError: If the file is missing or is not a YAML mapping
        """
        try:
            with open(config_file, 'r') as f:
                file_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Could not load config file {config_file}: {e}") from e

        if file_config is None:
            return
        if not isinstance(file_config, dict):
            raise ConfigError(f"Config file {config_file} must contain a mapping")
        self._merge_config(self.config, file_config)

    def _merge_config(self, base: Dict, override: Dict) -> None:
        """Recursively merge configuration dictionaries."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        env_mappings = {
            'GRIDNORM_EPSILON': ('normalization', 'epsilon'),
            'GRIDNORM_IGNORE_VALUE': ('normalization', 'ignore_value'),
            'GRIDNORM_CLAMP': ('normalization', 'clamp'),
            'GRIDNORM_MINIMUM': ('normalization', 'minimum'),
            'GRIDNORM_MAXIMUM': ('normalization', 'maximum'),
            'GRIDNORM_REPORT': ('output', 'report'),
        }

        for env_var, config_path in env_mappings.items():
            value = os.getenv(env_var)
            if value:
                self._set_nested(self.config, config_path, value)

    def _set_nested(self, config: Dict, path: tuple, value: Any) -> None:
        """Set nested configuration value."""
        for key in path[:-1]:
            if key not in config:
                config[key] = {}
            config = config[key]
        config[path[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        keys = key.split('.')
        value = self.config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value


def load_config(config_file: Optional[Path] = None) -> Config:
    """
    Load configuration.

    Args:
        config_file: Path to config file (optional)

    Returns:
        Config instance
    """
    return Config(config_file)


def _to_float(name: str, value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a number, got {value!r}") from None


def _to_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in _TRUE_STRINGS | _FALSE_STRINGS:
        return value.strip().lower() in _TRUE_STRINGS
    if isinstance(value, (int, float)):
        return bool(value)
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


def _to_names(value: Any) -> Tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        value = value.split(',')
    return tuple(str(v).strip() for v in value if str(v).strip())


@dataclass
class NormalizeOptions:
    """Options controlling one normalization run."""
    epsilon: float = 0.0
    ignore_value: float = -1.0
    clamp: bool = False
    min_override: Optional[float] = None
    max_override: Optional[float] = None
    source_names: Tuple[str, ...] = ()

    def validate(self) -> "NormalizeOptions":
        """
        Check option invariants.

        Only explicit bounds are checked against each other; bounds derived
        from the data are never validated here.

        Returns:
            self, for chaining

        Raises:
            ConfigError: If epsilon is outside [0, 1] or maximum < minimum
        """
        if math.isnan(self.epsilon) or not 0.0 <= self.epsilon <= 1.0:
            raise ConfigError(
                f"epsilon is supposed to be in the interval [0.0, 1.0], got {self.epsilon}"
            )
        if (self.min_override is not None and self.max_override is not None
                and self.max_override < self.min_override):
            raise ConfigError(
                f"minimum ({self.min_override}) has to be smaller than "
                f"maximum ({self.max_override})"
            )
        return self

    @classmethod
    def from_config(cls, cfg: Config, **overrides: Any) -> "NormalizeOptions":
        """
        Build options from configuration, letting non-None overrides win.

        Args:
            cfg: Loaded configuration
            **overrides: Values from the command line (None means "not given").
                Accepted keys: epsilon, ignore_value, clamp, min_override,
                max_override, source_names

        Returns:
            NormalizeOptions (not yet validated)
        """
        def pick(key: str, config_key: str) -> Any:
            value = overrides.get(key)
            return value if value is not None else cfg.get(config_key)

        epsilon = _to_float('epsilon', pick('epsilon', 'normalization.epsilon'))
        ignore_value = _to_float('ignore_value', pick('ignore_value', 'normalization.ignore_value'))

        return cls(
            epsilon=0.0 if epsilon is None else epsilon,
            ignore_value=-1.0 if ignore_value is None else ignore_value,
            clamp=_to_bool('clamp', pick('clamp', 'normalization.clamp') or False),
            min_override=_to_float('minimum', pick('min_override', 'normalization.minimum')),
            max_override=_to_float('maximum', pick('max_override', 'normalization.maximum')),
            source_names=_to_names(pick('source_names', 'normalization.images')),
        )
