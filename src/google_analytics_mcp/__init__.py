"""
Google Analytics MCP Server

A Model Context Protocol server exposing preset Google Analytics 4
report queries as tools.
"""

__version__ = "1.0.0"

from .server import main

__all__ = ["main"]
