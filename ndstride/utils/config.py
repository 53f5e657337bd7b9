"""Global configuration settings."""

import copy
from typing import Dict, Any


_DEFAULTS: Dict[str, Any] = {
    # Element type used when a constructor has nothing better to infer
    "dtype": {
        "default": "float64",
    },
    # Formatter settings
    "display": {
        "precision": 3,
    },
    # Bounds for random fill
    "random": {
        "low": 0.0,
        "high": 1.0,
    },
    # Plotting settings
    "plotting": {
        "theme": "plotly_dark",
        "width": 800,
        "height": 600,
    },
}


class Config:
    """
    Global configuration for ndstride.

    Values are addressed with dotted keys, e.g. ``Config.get("display.precision")``.
    """

    _config: Dict[str, Any] = copy.deepcopy(_DEFAULTS)

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        keys = key.split(".")
        value = cls._config
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k, default)
            else:
                return default
        return value

    @classmethod
    def set(cls, key: str, value: Any) -> None:
        """Set configuration value."""
        keys = key.split(".")
        config = cls._config
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value

    @classmethod
    def reset(cls) -> None:
        """Reset to default configuration."""
        cls._config = copy.deepcopy(_DEFAULTS)
