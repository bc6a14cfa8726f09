"""MCP server for gpx-route-vector.

Registers all tools and runs via stdio transport.
"""

from mcp.server.fastmcp import FastMCP

from .pipeline import RoutePipeline
from .tools.route import register_route_tools
from .tools.status import register_status_tools

mcp = FastMCP(
    "gpx-route-vector",
    instructions="Turn GPX track recordings into vector route paths with distance, duration and pace",
)

# One pipeline per server process; the parsed track lives in its storage
pipeline = RoutePipeline.default()

register_route_tools(mcp, pipeline)
register_status_tools(mcp, pipeline)


def main():
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
