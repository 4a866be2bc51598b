"""
Google Analytics MCP Server

A Model Context Protocol server for the Google Analytics Data API.
Provides an arbitrary report tool, a custom report tool, a realtime
snapshot and fixed preset reports (traffic sources, demographics, page
performance, conversions).
"""

import logging

from dotenv import load_dotenv
from fastmcp import FastMCP

# Import coordinator with singleton MCP instance
from .coordinator import mcp

# Import our modular components
from . import utils
from .config import Settings
from .realtime import register_realtime_tools
from .reporting import ReportRequestBuilder, register_report_tools

logger = logging.getLogger(__name__)


def build_server(settings: Settings, client=None, server: FastMCP = mcp) -> FastMCP:
    """
    Attach every tool to ``server``.

    Args:
        settings: Process settings, shared read-only by all tools
        client: Data API client; created from ``settings`` when omitted
        server: The FastMCP instance to register on

    Returns:
        The same FastMCP instance, ready to run
    """
    if client is None:
        client = utils.initialize_client(settings)

    builder = ReportRequestBuilder(client, settings)
    register_report_tools(server, builder)
    register_realtime_tools(server, builder)
    return server


def main():
    """Main entry point for the MCP server."""
    # Real environment variables win over .env entries
    load_dotenv()
    settings = Settings.from_env()

    # Configure logging; stdout belongs to the stdio transport
    logging.basicConfig(level=settings.log_level)

    try:
        server = build_server(settings)

        # Start the MCP server
        logger.info("Starting Google Analytics MCP Server...")
        server.run()

    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error(f"Server error: {e}")
        raise


if __name__ == "__main__":
    main()
