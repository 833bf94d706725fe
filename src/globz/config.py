from __future__ import annotations

"""Configuration loading utilities for the globz package."""

from dataclasses import dataclass
from pathlib import Path
import os
import textwrap
from typing import Any

import tomllib

from loguru import logger

__all__ = ["Config", "ConfigError", "load_config", "write_default_config", "DEFAULT_CONFIG_TOML"]

DEFAULT_CONFIG_TOML = textwrap.dedent(
    """
    [defaults]
    mode = "path"
    ignore_case = false
    anchor = false

    [output]
    json = false
    """
)

_MODES = ("path", "string")


class ConfigError(ValueError):
    """The configuration file is unreadable or holds a bad value."""


@dataclass(slots=True)
class Config:
    """Default options for the globz command."""

    mode: str = "path"
    ignore_case: bool = False
    anchor: bool = False
    json: bool = False
    source: str = "<default>"


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a candidate list of paths.

    Resolution order:
        1. explicit ``config_path`` argument
        2. ``GLOBZ_CONFIG`` environment variable
        3. ``~/.config/globz/config.toml``
        4. packaged default configuration

    Raises:
        ConfigError: If the chosen file is not valid TOML or has bad values
    """

    candidates: list[Path] = []
    if config_path:
        candidates.append(Path(config_path).expanduser())

    env_path = os.environ.get("GLOBZ_CONFIG")
    if env_path:
        candidates.append(Path(env_path).expanduser())

    candidates.append(Path.home() / ".config" / "globz" / "config.toml")

    for candidate in candidates:
        if candidate.is_file():
            logger.debug(f"loading config from {candidate}")
            return _config_from_toml(candidate.read_text(encoding="utf-8"), str(candidate))

    return _config_from_toml(DEFAULT_CONFIG_TOML, "<default>")


def _config_from_toml(content: str, source: str) -> Config:
    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{source}: {e}") from e

    defaults = data.get("defaults", {})
    output = data.get("output", {})

    mode = defaults.get("mode", "path")
    if mode not in _MODES:
        raise ConfigError(f"{source}: defaults.mode must be one of {', '.join(_MODES)}, got {mode!r}")

    return Config(
        mode=mode,
        ignore_case=_bool(defaults, "ignore_case", source, "defaults"),
        anchor=_bool(defaults, "anchor", source, "defaults"),
        json=_bool(output, "json", source, "output"),
        source=source,
    )


def _bool(section: dict[str, Any], key: str, source: str, section_name: str) -> bool:
    value = section.get(key, False)
    if not isinstance(value, bool):
        raise ConfigError(f"{source}: {section_name}.{key} must be true or false, got {value!r}")
    return value


def write_default_config(target_path: str | Path) -> Path:
    """Write the default configuration to ``target_path``.

    Creates parent directories if needed and returns the absolute path
    to the created file.
    """

    target = Path(target_path).expanduser()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(DEFAULT_CONFIG_TOML, encoding="utf-8")
    return target.resolve()
