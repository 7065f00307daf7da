"""
Google Apps Script Web App client using httpx.
Posts row batches to the script's doPost and normalizes every outcome
into an AppsScriptResponse. Without a configured Web App the client runs
in simulated mode and only logs the rows.
"""
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import httpx

from config import DEFAULT_TIMEOUT_SECONDS
from lib.common import log, ok
from lib.errors import client_error, http_error, merge_server_error, protocol_error
from lib.types import AppsScriptPayload, AppsScriptResponse

HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


@dataclass(frozen=True)
class WebAppEndpoint:
    """A deployed Web App, e.g. https://script.google.com/macros/s/<DEPLOY_ID>/exec"""
    url: str
    timeout: float | None = DEFAULT_TIMEOUT_SECONDS


@dataclass(frozen=True)
class SimulatedEndpoint:
    """No remote endpoint: rows are logged and success is synthesized."""
    reason: str = "APPS_SCRIPT_WEB_APP_URL is not configured."


Endpoint = WebAppEndpoint | SimulatedEndpoint


class SheetsClient:
    """Client for appending rows to sheets through the Apps Script Web App."""

    def __init__(
        self,
        endpoint: Endpoint,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client with an endpoint.

        Args:
            endpoint: WebAppEndpoint for real delivery, SimulatedEndpoint to
                      only log rows
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.endpoint = endpoint
        self._transport = transport
        if isinstance(endpoint, SimulatedEndpoint):
            log(
                "WARNING: Google Sheets integration via Apps Script is disabled "
                f"({endpoint.reason}) Data will be logged to console instead."
            )

    @property
    def simulated(self) -> bool:
        return isinstance(self.endpoint, SimulatedEndpoint)

    async def save_rows(
        self,
        sheet_name: str,
        rows: Iterable[Sequence[Any]],
    ) -> AppsScriptResponse:
        """
        Append rows to a sheet.

        Never raises: HTTP errors, malformed replies and transport failures
        all come back as a response with success=False.

        Args:
            sheet_name: Target sheet, e.g. config.SHEET_PATIENTS
            rows: Rows to append; each row is a sequence of cell values

        Returns:
            The script's response on success, otherwise a failure response.
        """
        try:
            batch = [list(row) for row in rows]
            if isinstance(self.endpoint, SimulatedEndpoint):
                return self._simulate(self.endpoint, sheet_name, batch)
            return await self._post(self.endpoint, sheet_name, batch)
        except Exception as e:
            log("Failed to send data to Apps Script:", repr(e))
            return client_error(e)

    def _simulate(
        self,
        endpoint: SimulatedEndpoint,
        sheet_name: str,
        batch: list[list[Any]],
    ) -> AppsScriptResponse:
        log(f"[SIMULATED] Sending to Apps Script for sheet {sheet_name}:", batch)
        return ok(
            f"SIMULATED: Data logged to console. {endpoint.reason}",
            updates=len(batch),
            sheet=sheet_name,
        )

    async def _post(
        self,
        endpoint: WebAppEndpoint,
        sheet_name: str,
        batch: list[list[Any]],
    ) -> AppsScriptResponse:
        payload: AppsScriptPayload = {"sheetName": sheet_name, "data": batch}

        log(f"Attempting to POST to Apps Script URL: {endpoint.url}")
        log("Payload:", payload)

        # doPost replies with a 302 to script.googleusercontent.com
        async with httpx.AsyncClient(
            timeout=endpoint.timeout,
            transport=self._transport,
            follow_redirects=True,
        ) as client:
            r = await client.post(endpoint.url, headers=HEADERS, json=payload)

        if not r.is_success:
            return self._error_response(r)

        try:
            data = r.json()
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        except ValueError as e:
            result = protocol_error(r.status_code, r.text, e)
            log("Invalid response from Apps Script:", result["message"])
            return result

        log("Response from Apps Script:", data)
        return data  # type: ignore[return-value]

    def _error_response(self, r: httpx.Response) -> AppsScriptResponse:
        error = http_error(r.status_code, r.reason_phrase)
        try:
            body = r.json()
        except ValueError as e:
            log("Could not parse error response JSON from Apps Script:", repr(e))
        else:
            error = merge_server_error(error, body)
        log("Error response from Apps Script:", error)
        return error


def build_endpoint() -> Endpoint:
    """
    Build the endpoint from environment variables.

    Priority:
    1. SHEETS_SIMULATE forces simulated mode
    2. APPS_SCRIPT_WEB_APP_URL selects the Web App
    3. Otherwise simulated mode
    """
    from env_loader import get_request_timeout, get_web_app_url, is_simulation_forced

    if is_simulation_forced():
        return SimulatedEndpoint("SHEETS_SIMULATE is enabled.")
    url = get_web_app_url()
    if not url:
        return SimulatedEndpoint()
    return WebAppEndpoint(url=url, timeout=get_request_timeout())


# Singleton instance for the application
_sheets_client: SheetsClient | None = None


def get_sheets_client() -> SheetsClient:
    """
    Get the global SheetsClient instance.
    Initializes from environment variables on first call.
    """
    global _sheets_client
    if _sheets_client is None:
        _sheets_client = SheetsClient(build_endpoint())
    return _sheets_client


def reset_sheets_client() -> None:
    """Reset the global client (useful for testing)."""
    global _sheets_client
    _sheets_client = None


async def save_data_to_sheet(
    sheet_name: str,
    rows: Iterable[Sequence[Any]],
) -> AppsScriptResponse:
    """Append rows to a sheet using the global client."""
    return await get_sheets_client().save_rows(sheet_name, rows)
