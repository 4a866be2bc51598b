"""Module declaring the singleton MCP instance.

Tools are attached to it at startup by ``server.main`` once the settings and
the Data API client exist.
"""
from fastmcp import FastMCP

from . import __version__

# Creates the singleton.
mcp = FastMCP("google-analytics-mcp", version=__version__)
