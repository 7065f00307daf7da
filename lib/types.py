"""
Type definitions for the clinic sheets client.
Provides type safety for Apps Script payloads, responses, and sheet data.
"""
from typing import TypedDict, Any

# Sheet data types
Cell = str | int | float | bool | None
SheetRow = list[Cell]
SheetValues = list[SheetRow]


class AppsScriptPayload(TypedDict):
    """Request body posted to the Web App's doPost."""
    sheetName: str
    data: SheetValues


class _ResponseBase(TypedDict):
    success: bool
    message: str


class AppsScriptResponse(_ResponseBase, total=False):
    """
    Uniform result envelope.

    Success paths usually fill updates/sheet/data; failure paths fill
    errorDetails. receivedPayload is echoed by the script for debugging.
    """
    data: Any
    updates: int
    sheet: str
    errorDetails: Any
    receivedPayload: Any
