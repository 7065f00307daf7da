"""
Common utility functions.
"""
import sys
from typing import Any

from lib.types import AppsScriptResponse


def log(*a: Any) -> None:
    print(*a, file=sys.stderr, flush=True)


def is_blank(value: Any) -> bool:
    """
    Check whether a value carries no information.
    - None
    - Whitespace-only string
    - Empty list/tuple/dict
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def _response(success: bool, message: str, fields: dict[str, Any]) -> AppsScriptResponse:
    result: dict[str, Any] = {"success": success, "message": message}
    result.update({k: v for k, v in fields.items() if v is not None})
    return result  # type: ignore[return-value]


def ok(message: str, **fields: Any) -> AppsScriptResponse:
    """Create a successful response. None-valued fields are omitted."""
    return _response(True, message, fields)


def ng(message: str, **fields: Any) -> AppsScriptResponse:
    """Create an error response. None-valued fields are omitted."""
    return _response(False, message, fields)
