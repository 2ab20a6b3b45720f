"""
Render and logging configuration.

Settings come from a YAML file merged over built-in defaults:

    indent: 16                 # spaces (or a literal string) before each body line
    namespace: GeneratedCAD
    class_name: CADCommands
    command_method: RUNGENERATED
    header: null               # full header text; null builds the default
    footer: null
    logging:
      level: INFO

Without an explicit path, `load_config` reads the file named by the
CADSCRIPT_CONFIG environment variable, if set.
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

CONFIG_ENV = "CADSCRIPT_CONFIG"


@dataclass(frozen=True)
class Config:
    indent: str = " " * 16
    namespace: str = "GeneratedCAD"
    class_name: str = "CADCommands"
    command_method: str = "RUNGENERATED"
    header: Optional[str] = None
    footer: Optional[str] = None
    log_level: str = "WARNING"


DEFAULT_CONFIG = Config()


def _normalize(data: Dict[str, Any]) -> Dict[str, Any]:
    """Map the YAML document onto Config field names."""
    data = dict(data)
    known = {f.name for f in fields(Config)}

    logging_section = data.pop("logging", None)
    if logging_section is not None:
        if not isinstance(logging_section, dict):
            raise ValueError("'logging' must be a mapping")
        if "level" in logging_section:
            data["log_level"] = str(logging_section["level"]).upper()

    if "indent" in data:
        indent = data["indent"]
        if isinstance(indent, bool) or not isinstance(indent, (int, str)):
            raise ValueError("'indent' must be a number of spaces or a string")
        data["indent"] = " " * indent if isinstance(indent, int) else indent

    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"unknown configuration key(s): {', '.join(unknown)}")
    return data


def config_from_dict(data: Optional[Dict[str, Any]]) -> Config:
    """Build a Config from a parsed YAML mapping."""
    if not data:
        return DEFAULT_CONFIG
    if not isinstance(data, dict):
        raise ValueError("configuration must be a mapping")
    return Config(**_normalize(data))


def load_config(path: Optional[Union[str, Path]] = None) -> Config:
    """
    Load configuration from path, or from $CADSCRIPT_CONFIG.

    Returns the defaults when neither is given. A path that does not exist
    raises FileNotFoundError.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV)
        if not path:
            return DEFAULT_CONFIG

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"config file not found: {config_path}")
    with config_path.open("r", encoding="utf-8") as fp:
        try:
            data = yaml.safe_load(fp)
        except yaml.YAMLError as e:
            raise ValueError(f"invalid config file {config_path}: {e}") from e
    return config_from_dict(data)
