"""
Small helpers shared by the package validator: JSON loading and dict merging.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict

from .exceptions import InvalidJSONError


def deep_merge(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Merge ``overlay`` onto a copy of ``base``.

    Overlay values win on conflicts. When both sides hold a dict for the same
    key the two are merged recursively; any other value (lists included) is
    replaced wholesale. Neither argument is modified.
    """
    merged = copy.deepcopy(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def chomp(text: str) -> str:
    """Remove a single trailing line ending (\\r\\n, \\n or \\r)."""
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith(("\n", "\r")):
        return text[:-1]
    return text


def load_json_file(path: Path) -> Any:
    """Read and parse a UTF-8 JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidJSONError: If the content is not valid JSON
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidJSONError(str(path), str(e)) from e
