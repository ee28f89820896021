"""Tools module for the BI Publisher report MCP server.

This module defines the tools the MCP server exposes to clients: managing
saved connections, running a SELECT against one of them and paging through
the result. Blocking store and HTTP calls run in a worker thread so the event
loop stays free while a report request is in flight.

Errors from the library surface as ``ToolError`` with a single readable
message; nothing is retried.
"""

from __future__ import annotations

import asyncio
import uuid
from typing import Any, Callable, TypeVar

from fastmcp.exceptions import ToolError

from ..connections import Connection
from ..errors import (
    DuplicateNameError,
    NetworkError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from ..session import ReportSession

USER_FACING_ERRORS = (
    DuplicateNameError,
    NotFoundError,
    StorageError,
    ValidationError,
    NetworkError,
)

T = TypeVar("T")


def _request_id(value: str | None = None) -> str:
    """Generate a unique request ID for tracing."""
    return value or str(uuid.uuid4())


async def _call(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    try:
        return await asyncio.to_thread(func, *args, **kwargs)
    except USER_FACING_ERRORS as exc:
        raise ToolError(str(exc)) from exc


def load_tools(mcp_server: Any, session: ReportSession) -> None:
    """Register all MCP tools with the server.

    Args:
        mcp_server: The FastMCP server instance to register tools with
        session: ReportSession holding the connection store and live result
    """

    @mcp_server.tool()
    async def list_connections() -> list[dict[str, str]]:
        """List saved report connections. Passwords are never returned."""
        connections = await _call(session.store.list)
        return [conn.public() for conn in connections]

    @mcp_server.tool()
    async def add_connection(
        name: str, url: str, username: str, password: str
    ) -> dict[str, str]:
        """Save a new named connection to a report endpoint.

        The password may be given as ``${ENV_VAR}`` to keep it out of the
        connection file; it is then read from the environment per request.
        """
        conn = Connection(name=name, url=url, username=username, password=password)
        await _call(session.store.add, conn)
        return conn.public()

    @mcp_server.tool()
    async def update_connection(
        name: str,
        url: str | None = None,
        username: str | None = None,
        password: str | None = None,
        new_name: str | None = None,
    ) -> dict[str, str]:
        """Change the URL, credentials or name of a saved connection."""
        fields = {
            key: value
            for key, value in (
                ("name", new_name),
                ("url", url),
                ("username", username),
                ("password", password),
            )
            if value is not None
        }
        if fields:
            await _call(session.store.update, name, fields)
        conn = await _call(session.store.get, new_name or name)
        return conn.public()

    @mcp_server.tool()
    async def delete_connection(name: str) -> dict[str, Any]:
        """Delete a saved connection. Deleting an unknown name does nothing."""
        await _call(session.store.delete, name)
        return {"name": name, "deleted": True}

    @mcp_server.tool()
    async def run_query(
        connection: str, sql: str, request_id: str | None = None
    ) -> dict[str, Any]:
        """Run a SELECT statement against a saved connection.

        Returns the first page of the CSV result. The result replaces any
        previous one and the page cursor starts again at page 1.
        """
        connections = await _call(session.store.list)
        if not connections:
            raise ToolError("No connections configured")
        rid = _request_id(request_id)
        page = await _call(session.run_query, connection, sql, rid)
        return page.as_dict()

    @mcp_server.tool()
    async def current_page() -> dict[str, Any]:
        """Show the current page of the last result."""
        return (await _call(session.current_page)).as_dict()

    @mcp_server.tool()
    async def next_page() -> dict[str, Any]:
        """Move to the next page of the last result (stays on the last page)."""
        return (await _call(session.next_page)).as_dict()

    @mcp_server.tool()
    async def prev_page() -> dict[str, Any]:
        """Move to the previous page of the last result (stays on the first page)."""
        return (await _call(session.prev_page)).as_dict()
