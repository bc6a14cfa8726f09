"""Status tool and resource: get_status, state://session."""

import json
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..pipeline import RoutePipeline


def session_summary(pipeline: RoutePipeline) -> dict:
    ui = pipeline.ui
    canvas = pipeline.canvas
    window = getattr(ui, "window_size", None)
    return {
        "window": {"width": window[0], "height": window[1]} if window else None,
        "canvas": {
            "viewport_center": list(canvas.viewport_center),
            "routes": len(getattr(canvas, "nodes", [])),
        },
        "notifications": list(getattr(ui, "notifications", []))[-5:],
        "config": pipeline.config.model_dump(),
    }


def register_status_tools(mcp: FastMCP, pipeline: RoutePipeline):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_status() -> str:
        """Return a summary of the plugin window, drawing surface and settings."""
        return json.dumps(session_summary(pipeline), indent=2)

    @mcp.resource("state://session")
    def session_state() -> str:
        return json.dumps(session_summary(pipeline), indent=2)
