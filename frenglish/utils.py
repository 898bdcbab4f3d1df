"""
Utility functions used across the CLI, the SDK and the workflows.

Functions:
    normalize_path: Convert a path to forward slashes
    path_segments: Split a normalized path into non-empty segments
    parse_partial_config: Parse inline JSON or a JSON file into a dict

Example:
    >>> from frenglish.utils import normalize_path, parse_partial_config
    >>> normalize_path("C:\\\\locales\\\\en\\\\app.json")
    'C:/locales/en/app.json'
    >>> parse_partial_config('{"languages": ["fr"]}')
    {'languages': ['fr']}
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional, Union

from frenglish.errors import PartialConfigError


def normalize_path(path: Union[str, os.PathLike]) -> str:
    """
    Convert a path to forward slashes.

    Backslashes are always treated as separators, whatever the host
    platform, so Windows-style paths compare equal to POSIX ones.

    Args:
        path: Path string or path-like object

    Returns:
        The same path with every ``\\`` replaced by ``/``
    """
    return os.fspath(path).replace("\\", "/")


def path_segments(path: Union[str, os.PathLike]) -> list[str]:
    """Split a path into its non-empty forward-slash segments."""
    return [part for part in normalize_path(path).split("/") if part and part != "."]


def parse_partial_config(partial_config: Union[str, dict, None]) -> Optional[dict]:
    """
    Parse a partial configuration given on the command line.

    Accepts, in order:
    - None or empty: no override
    - A dict: returned as-is
    - A JSON string: parsed
    - A path to a JSON file: read and parsed

    Args:
        partial_config: Inline JSON, a file path, a dict, or None

    Returns:
        The parsed configuration dict, or None when nothing was given

    Raises:
        PartialConfigError: If the value is neither valid JSON nor a
            readable JSON file, or does not describe a JSON object
    """
    if not partial_config:
        return None

    if isinstance(partial_config, dict):
        return partial_config

    try:
        parsed = json.loads(partial_config)
    except json.JSONDecodeError:
        try:
            parsed = json.loads(Path(partial_config).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise PartialConfigError(
                f"Failed to parse partialConfig: {partial_config}. "
                f"Must be valid JSON string or path to JSON file. Error: {e}"
            ) from e

    if not isinstance(parsed, dict):
        raise PartialConfigError(
            f"partialConfig must be a JSON object, got {type(parsed).__name__}"
        )
    return parsed
