"""FastAPI application configuration for the BI Publisher report MCP server.

This module sets up the application by:
1. Loading configuration and building the report session
2. Creating the FastMCP server and registering the report tools
3. Adding the HTML results page with its Prev/Next controls
4. Combining MCP routes with the FastAPI routes
"""

import asyncio
import os
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse, RedirectResponse
from fastmcp import FastMCP

from ..config import load_config
from ..errors import ValidationError
from ..logging_utils import configure_logging
from ..render import render_html
from ..session import ReportSession
from .tools import load_tools


def _config_path() -> Path:
    """Get the configuration file path from environment or default."""
    path = os.environ.get("BIP_REPORT_CONFIG", "config.example.yml")
    return Path(path)


def register_result_routes(app: FastAPI, session: ReportSession) -> None:
    """Serve the live result page and relay the next/prev page commands."""

    @app.get("/results", response_class=HTMLResponse)
    async def show_results() -> str:
        page = await asyncio.to_thread(session.current_page)
        return render_html(page, base_path="/results")

    @app.post("/results/{command}")
    async def page_command(command: str) -> RedirectResponse:
        try:
            await asyncio.to_thread(session.handle_command, command)
        except ValidationError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return RedirectResponse(url="/results", status_code=303)


def create_app(config_path: Path | None = None) -> tuple[FastAPI, ReportSession]:
    """Create and configure the FastMCP server application.

    Args:
        config_path: Optional path to config file. If None, uses default from environment.

    Returns:
        tuple: (combined_app, session)
    """
    if config_path is None:
        config_path = _config_path()

    config = load_config(config_path)
    configure_logging(config.observability.log_level)

    session = ReportSession.from_config(config)

    mcp_server = FastMCP(name="bip-report")
    load_tools(mcp_server, session)

    # Convert the MCP server to a streamable HTTP application
    mcp_app = mcp_server.http_app()

    app = FastAPI(
        title="BI Publisher Report Server",
        description="MCP tools and a results page for BI Publisher SQL reports",
        version="0.1.0",
        lifespan=mcp_app.lifespan,
    )

    @app.get("/", include_in_schema=False)
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"message": "BI Publisher report server is running", "status": "healthy"}

    register_result_routes(app, session)

    combined_app = FastAPI(
        title="BI Publisher Report App",
        routes=[
            *mcp_app.routes,
            *app.routes,
        ],
        lifespan=mcp_app.lifespan,
    )

    return combined_app, session


def build_app() -> FastAPI:
    """Factory used by uvicorn; reads the config named by BIP_REPORT_CONFIG."""
    combined_app, _session = create_app()
    return combined_app
