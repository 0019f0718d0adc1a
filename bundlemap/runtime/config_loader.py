"""Helpers for loading build map configuration from TOML/JSON sources.

This module provides a single entry point `load_build_map_config`
that accepts various configuration sources:

* None -> default BuildMapConfig
* dict -> BuildMapConfig.from_dict
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Union

from bundlemap.config import BuildMapConfig

logger = logging.getLogger("bundlemap.runtime.config_loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]


def read_mapping(source: Union[str, Path]) -> Dict[str, Any]:
    """Read a TOML/JSON mapping from a file path or inline text.

    The format comes from the file suffix when ``source`` is an existing
    file, otherwise it is guessed from the content.

    Raises:
        ValueError: If the document is not a mapping or cannot be parsed.
    """
    path = Path(source)
    try:
        is_file = path.is_file()
    except OSError:
        # Inline text too long to be a path on some platforms.
        is_file = False

    if is_file:
        text = path.read_text(encoding="utf-8")
        suffix = path.suffix.lower()
        if suffix in {".toml", ".tml"}:
            fmt = "toml"
        elif suffix == ".json":
            fmt = "json"
        else:
            fmt = "json" if text.lstrip().startswith(("{", "[")) else "toml"
        logger.info("Loading %s document from file: %s", fmt, path)
    else:
        text = str(source)
        fmt = "json" if text.lstrip().startswith(("{", "[")) else "toml"
        logger.info("Loading %s document from inline string", fmt)

    try:
        data = json.loads(text) if fmt == "json" else tomllib.loads(text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        raise ValueError(f"Failed to parse {fmt} document: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("Top-level document must be a mapping/dict")
    return data


def load_build_map_config(source: ConfigSource) -> BuildMapConfig:
    """Load BuildMapConfig from various configuration sources.

    Args:
        source: One of:
            * None: returns BuildMapConfig.default()
            * dict: treated as already-parsed configuration mapping
            * str/Path: either a filesystem path to a .toml/.json file,
              or an inline TOML/JSON string (auto-detected)

    Returns:
        BuildMapConfig instance.
    """
    if source is None:
        logger.debug("No config source provided; using default BuildMapConfig")
        return BuildMapConfig.default()

    if isinstance(source, dict):
        logger.debug("Loading BuildMapConfig from provided dict")
        return BuildMapConfig.from_dict(source)

    if isinstance(source, (str, Path)):
        return BuildMapConfig.from_dict(read_mapping(source))

    raise TypeError(f"Unsupported config source type: {type(source)!r}")


__all__ = ["ConfigSource", "load_build_map_config", "read_mapping"]
