"""Route tools: parse_gpx, show_route, summarize_gpx, resize_window."""

import json
import logging
import os
from pathlib import Path

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..core.gpx import parse_gpx_file
from ..core.stats import summarize
from ..errors import ParseError
from ..exporters.svg import export_svg as do_export_svg
from ..pipeline import RoutePipeline

logger = logging.getLogger(__name__)


def _validate_output_path(output_path: str) -> None:
    """Raise ValueError if output_path resolves outside the user's home directory."""
    resolved = Path(output_path).resolve()
    home = Path.home().resolve()
    try:
        resolved.relative_to(home)
    except ValueError:
        raise ValueError(
            f"Output path {output_path!r} is outside the home directory. "
            "Use a path within your home directory."
        )


def _read_text(file_path: str) -> str:
    with open(file_path, "r", encoding="utf-8") as f:
        return f.read()


def register_route_tools(mcp: FastMCP, pipeline: RoutePipeline):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    async def parse_gpx(file_path: str) -> str:
        """Load a GPX file, extract its track points and store them for show_route.

        Replaces any previously stored track.
        **Next:** show_route to draw the track.

        Args:
            file_path: Absolute path to a .gpx file.
        """
        try:
            content = _read_text(file_path)
        except OSError as e:
            return f"Error: Could not read {file_path}: {e}"

        result = await pipeline.dispatch({"type": "parse-gpx", "content": content})
        if result["type"] == "error":
            return f"Error: {result['message']}"

        stats = result["stats"]
        return (
            f"Parsed {len(result['points'])} track points "
            f"({stats['total_distance_m'] / 1000:.2f} km). "
            f"Route preview {result['routeWidth']:.0f}x{result['routeHeight']:.0f}."
        )

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    async def show_route(output_path: str | None = None, square: bool = False) -> str:
        """Draw the stored track as a vector path centered in the current viewport.

        **Requires:** parse_gpx first.

        Args:
            output_path: Optional .svg path (absolute, inside your home directory).
                Only the route drawn by this call is written to it.
            square: Stretch the track over a fixed 1000x1000 square instead of
                keeping its aspect ratio.
        """
        if output_path:
            try:
                _validate_output_path(output_path)
            except ValueError as e:
                return f"Error: {e}"

        result = await pipeline.dispatch({"type": "show-route", "square": square})
        if result["type"] == "error":
            return f"Error: {result['message']}"

        message = (
            f"{result['name']} created: {result['commands']} path commands, "
            f"{result['width']:.0f}x{result['height']:.0f} at ({result['x']:.0f}, {result['y']:.0f})"
        )
        if output_path:
            os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
            do_export_svg(pipeline.canvas.nodes[-1:], output_path)
            message += f". SVG exported to {output_path}"
        return message

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def summarize_gpx(file_path: str) -> str:
        """Report distance, duration and pace for a GPX file.

        Uses a full document parse, so timestamps give real duration and pace.
        Does not store the track.

        Args:
            file_path: Absolute path to a .gpx file.
        """
        try:
            track = parse_gpx_file(file_path, mode="structured")
        except (OSError, ParseError) as e:
            return f"Error: {e}"

        stats = summarize(track, max_jump_m=pipeline.config.max_jump_m)
        return json.dumps({
            "points": len(track),
            "has_timestamps": track.has_timestamps(),
            **stats.model_dump(),
        }, indent=2)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    async def resize_window(width: int, height: int) -> str:
        """Resize the plugin window to exactly width x height.

        Args:
            width: Window width in pixels.
            height: Window height in pixels.
        """
        result = await pipeline.dispatch({"type": "resize-window", "width": width, "height": height})
        if result is not None and result["type"] == "error":
            return f"Error: {result['message']}"
        return f"Window resized to {width}x{height}"
