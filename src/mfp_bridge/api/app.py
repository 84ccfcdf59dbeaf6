"""FastAPI application factory."""

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from mfp_bridge.app_logging import configure_logging
from mfp_bridge.containers import AppContainer

SERVER_NAME = "mfp-bridge"
SERVER_VERSION = "0.1.0"
PROTOCOL_VERSION = "2024-11-05"


class ToolCallRequest(BaseModel):
    """Tool invocation payload."""

    name: str
    arguments: dict[str, object] = Field(default_factory=dict)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        if state_container.settings.mfp_validate_on_startup:
            try:
                valid = await state_container.mfp_client.validate_session()
            except Exception:
                logger.exception("Failed to validate MyFitnessPal session")
            else:
                if not valid:
                    logger.warning(
                        "Cookie is invalid or session has expired. "
                        "Please update MFP_COOKIE."
                    )
        yield
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/tools")
    async def list_tools(request: Request) -> list[dict[str, object]]:
        """List the available tools."""
        state_container: AppContainer = request.app.state.container
        return state_container.tool_registry.list_tools()

    @app.post("/tools/call")
    async def call_tool(
        payload: ToolCallRequest, request: Request
    ) -> dict[str, object]:
        """Invoke a tool by name."""
        state_container: AppContainer = request.app.state.container
        return await state_container.tool_registry.call_tool(
            payload.name, payload.arguments
        )

    @app.post("/mcp")
    async def mcp_rpc(request: Request) -> Response:
        """JSON-RPC endpoint supporting initialize, tools/list and tools/call."""
        state_container: AppContainer = request.app.state.container
        try:
            payload = json.loads(await request.body())
        except ValueError:
            return JSONResponse(
                _rpc_error(None, -32700, "Parse error"), status_code=400
            )

        if isinstance(payload, list):
            replies = []
            for item in payload:
                reply = await _handle_rpc(state_container, item)
                if reply is not None:
                    replies.append(reply)
            if not replies:
                return Response(status_code=202)
            return JSONResponse(replies)

        reply = await _handle_rpc(state_container, payload)
        if reply is None:
            return Response(status_code=202)
        return JSONResponse(reply)

    return app


async def _handle_rpc(
    container: AppContainer, message: object
) -> dict[str, object] | None:
    if not isinstance(message, dict):
        return _rpc_error(None, -32600, "Invalid Request")
    request_id = message.get("id")
    method = message.get("method")
    params = message.get("params") or {}

    if method == "initialize":
        return _rpc_result(
            request_id,
            {
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {"tools": {}},
                "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
            },
        )
    if method == "notifications/initialized":
        return None
    if method == "tools/list":
        return _rpc_result(request_id, {"tools": container.tool_registry.list_tools()})
    if method == "tools/call":
        if not isinstance(params, dict):
            return _rpc_error(request_id, -32602, "Invalid params")
        name = params.get("name")
        arguments = params.get("arguments") or {}
        if not isinstance(name, str) or not name:
            return _rpc_error(request_id, -32602, "Missing tool name")
        if not isinstance(arguments, dict):
            return _rpc_error(request_id, -32602, "Invalid arguments")
        result = await container.tool_registry.call_tool(name, arguments)
        return _rpc_result(request_id, result)
    if request_id is None:
        return None
    return _rpc_error(request_id, -32601, f"Method not found: {method}")


def _rpc_result(request_id: object, result: dict[str, object]) -> dict[str, object]:
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


def _rpc_error(request_id: object, code: int, message: str) -> dict[str, object]:
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "error": {"code": code, "message": message},
    }
