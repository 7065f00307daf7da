"""
Utility libraries for the clinic sheets client.
Response builders, error classification, and input parsing.
"""
from .common import log, is_blank, ok, ng
from .errors import (
    FETCH_FAILED_MESSAGE,
    UNKNOWN_ERROR_MESSAGE,
    bad_request,
    client_error,
    http_error,
    merge_server_error,
    protocol_error,
)
from .input_parser import coerce_str, coerce_rows
from .types import (
    AppsScriptPayload,
    AppsScriptResponse,
    Cell,
    SheetRow,
    SheetValues,
)

__all__ = [
    # Types
    "AppsScriptPayload",
    "AppsScriptResponse",
    "Cell",
    "SheetRow",
    "SheetValues",
    # Functions
    "log",
    "is_blank",
    "ok",
    "ng",
    "FETCH_FAILED_MESSAGE",
    "UNKNOWN_ERROR_MESSAGE",
    "bad_request",
    "client_error",
    "http_error",
    "merge_server_error",
    "protocol_error",
    "coerce_str",
    "coerce_rows",
]
