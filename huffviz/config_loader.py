# config_loader.py
import copy
import logging
import os

import yaml

from .errors import ConfigError

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "config", "config.yaml")

DEFAULTS = {
    "input": {"uppercase": True, "default_text": "HELLO WORLD"},
    "metrics": {"bits_per_symbol": 8},
    "server": {"host": "0.0.0.0", "port": 4000, "debug": False, "max_sessions": 1000},
    "logging": {"level": "INFO"},
}

# section -> key -> accepted type(s)
_TYPES = {
    "input": {"uppercase": bool, "default_text": str},
    "metrics": {"bits_per_symbol": int},
    "server": {"host": str, "port": int, "debug": bool, "max_sessions": int},
    "logging": {"level": str},
}


def _merge(base, override):
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _validate(config):
    for section, keys in _TYPES.items():
        if not isinstance(config[section], dict):
            raise ConfigError(f"Config section '{section}' must be a mapping")
        for key, expected in keys.items():
            value = config[section][key]
            # bool is an int subclass, don't let true pass as a port
            if expected is int and isinstance(value, bool) or not isinstance(value, expected):
                raise ConfigError(f"Config value {section}.{key} must be {expected.__name__}, got {value!r}")
    if config["metrics"]["bits_per_symbol"] < 1:
        raise ConfigError("metrics.bits_per_symbol must be positive")
    if config["server"]["max_sessions"] < 1:
        raise ConfigError("server.max_sessions must be positive")


def load_config(config_path=DEFAULT_CONFIG_PATH):
    """
    Loads the YAML config and fills in anything it leaves out from DEFAULTS.

    Parameters:
    config_path (str): Path to the YAML file. None means defaults only.

    Returns:
    dict: The merged configuration.
    """
    if config_path is None:
        return copy.deepcopy(DEFAULTS)
    try:
        with open(config_path, "r") as f:
            loaded = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    config = _merge(DEFAULTS, loaded)
    _validate(config)
    return config


def configure_logging(level="INFO"):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
