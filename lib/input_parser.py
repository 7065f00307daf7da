"""
Input parsing and validation utilities.

Functions for parsing and normalizing MCP tool inputs,
handling various input formats (strings, dicts, lists).
"""
import json
from typing import Any

from lib.types import Cell, SheetValues

_ROW_KEYS = ("rows", "data", "values")


def strip_quotes(s: str) -> str:
    """
    Strip outer quotes from a string.

    Args:
        s: Input string

    Returns:
        String with leading/trailing quotes removed
    """
    s = s.strip()
    if (s.startswith('"') and s.endswith('"')) or (s.startswith("'") and s.endswith("'")):
        return s[1:-1]
    return s


def coerce_str(x: Any, keys: tuple[str, ...] = ()) -> str | None:
    """
    Extract a string from various input formats.

    Handles:
    - Direct string input
    - Dict with specified keys

    Args:
        x: Input value (string, dict, or other)
        keys: Tuple of keys to try in dict order

    Returns:
        Extracted string or None if not found
    """
    if isinstance(x, str):
        return strip_quotes(x)
    if isinstance(x, dict):
        for k in keys:
            v = x.get(k)
            if isinstance(v, str):
                return strip_quotes(v)
    return None


def _is_cell(v: Any) -> bool:
    return v is None or isinstance(v, (str, int, float, bool))


def _coerce_row(row: Any) -> list[Cell] | None:
    if not isinstance(row, (list, tuple)):
        return None
    if not all(_is_cell(v) for v in row):
        return None
    return list(row)


def coerce_rows(x: Any) -> SheetValues | None:
    """
    Extract a row batch from various input formats.

    Handles:
    - JSON string -> decoded, then parsed as below
    - Dict with "rows", "data" or "values" key
    - List of lists -> batch
    - Flat list of scalars -> single-row batch
    - Empty list -> empty batch

    Args:
        x: Input value

    Returns:
        List of rows, or None if the input cannot be read as rows
    """
    if isinstance(x, str):
        try:
            x = json.loads(x)
        except json.JSONDecodeError:
            return None
        if isinstance(x, str):
            return None
        return coerce_rows(x)
    if isinstance(x, dict):
        for k in _ROW_KEYS:
            if k in x:
                return coerce_rows(x[k])
        return None
    if not isinstance(x, (list, tuple)):
        return None

    if all(isinstance(r, (list, tuple)) for r in x):
        rows = [_coerce_row(r) for r in x]
        if any(r is None for r in rows):
            return None
        return rows  # type: ignore[return-value]

    single = _coerce_row(x)
    return [single] if single is not None else None
