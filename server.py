"""
Clinic Sheets MCP Server

Lets Claude append clinic records (patients, anamnesis forms, blood
pressure readings, treatment plans) to Google Sheets through the
Apps Script Web App.
"""
from typing import Any

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from config import KNOWN_SHEETS
from env_loader import get_allowed_hosts, get_port
from sheets_client import get_sheets_client
from lib.common import log, ok
from lib.errors import bad_request
from lib.input_parser import coerce_str, coerce_rows

transport_security = TransportSecuritySettings(
    enable_dns_rebinding_protection=True,
    allowed_hosts=get_allowed_hosts(),
)

mcp = FastMCP("clinic-sheets", transport_security=transport_security)


# ===== Sheets Tools =====

@mcp.tool()
async def sheets_append(sheet_name: Any, rows: Any = None) -> dict:
    """Append rows to a sheet.

    Args:
    - sheet_name: target sheet (required). Usually one of Patients,
      AnamnesisForms, BloodPressureReadings, TreatmentPlans.
    - rows: list of rows, each a list of cell values
      (string / number / boolean / null). A flat list is one row.

    Examples:
    - sheets_append({"sheet_name": "Patients", "rows": [["Jane Doe", 42, true]]})
    - sheets_append("BloodPressureReadings", [["2025-01-01", 120, 80]])

    Returns (example):
    { "success": true, "message": "...", "updates": 1, "sheet": "Patients" }
    """
    name = coerce_str(sheet_name, ("sheet_name", "sheetName", "sheet"))
    if rows is None and isinstance(sheet_name, dict):
        rows = sheet_name.get("rows", sheet_name.get("data"))
    if not name:
        return bad_request("sheet_name is required")

    batch = coerce_rows(rows)
    if batch is None:
        return bad_request("rows must be a list of rows (lists of string/number/boolean/null)")

    client = get_sheets_client()
    return await client.save_rows(name, batch)


@mcp.tool()
async def sheets_targets() -> dict:
    """List the well-known sheet names and whether delivery is simulated."""
    client = get_sheets_client()
    return ok(
        "known sheets",
        data={"sheets": list(KNOWN_SHEETS), "simulated": client.simulated},
    )


@mcp.tool()
async def tools_help() -> dict:
    """List the tools exposed by this MCP server and how to call them."""
    tools = [
        {"name": "sheets_append", "desc": "Append rows to a sheet", "args": {"sheet_name": "string", "rows": "list[list]"}},
        {"name": "sheets_targets", "desc": "Well-known sheet names and delivery mode", "args": {}},
    ]
    return ok("tools", data={"tools": tools})


# ===== Server Entry Point =====

if __name__ == "__main__":
    import uvicorn
    from contextlib import asynccontextmanager
    from starlette.applications import Starlette
    from starlette.routing import Route
    from starlette.responses import JSONResponse

    async def healthz(request):
        mode = "simulated" if get_sheets_client().simulated else "webapp"
        return JSONResponse({"status": "ok", "mode": mode})

    async def root(request):
        return JSONResponse(
            {"error": "Use /mcp for MCP endpoint or /healthz for health check"},
            status_code=406,
        )

    # Get MCP ASGI app
    mcp_app = mcp.streamable_http_app()

    @asynccontextmanager
    async def lifespan(app):
        async with mcp.session_manager.run():
            yield

    # Create Starlette app for non-MCP routes
    starlette_app = Starlette(
        routes=[
            Route("/", root),
            Route("/healthz", healthz),
        ],
        lifespan=lifespan,
    )

    # Combined ASGI app - MCP app handles /mcp path internally
    async def combined_app(scope, receive, send):
        path = scope.get("path", "/")
        if path.startswith("/mcp"):
            await mcp_app(scope, receive, send)
        else:
            await starlette_app(scope, receive, send)

    port = get_port()
    log(f"Starting server on port {port}")
    uvicorn.run(combined_app, host="0.0.0.0", port=port, lifespan="on")
