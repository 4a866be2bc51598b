"""
Google Analytics realtime data tools.

Contains tools for retrieving real-time GA4 data.
"""

import logging
from typing import Annotated, List, Optional

from fastmcp import FastMCP
from pydantic import Field

from .presets import REALTIME_DATA
from .reporting import DimensionsArg, PropertyIdArg, ReportRequestBuilder

# Configure logging
logger = logging.getLogger(__name__)


def register_realtime_tools(mcp: FastMCP, builder: ReportRequestBuilder) -> None:
    """Register the realtime snapshot tool."""

    @mcp.tool(name=REALTIME_DATA.name, description=REALTIME_DATA.description)
    async def get_realtime_data(
        property_id: PropertyIdArg = None,
        dimensions: DimensionsArg = None,
        metrics: Annotated[
            Optional[List[str]],
            Field(description="Realtime metric names; defaults to ['activeUsers']"),
        ] = None,
    ) -> str:
        # Missing lists fall back to country / activeUsers
        return await builder.execute(
            REALTIME_DATA,
            {"property_id": property_id, "dimensions": dimensions, "metrics": metrics},
        )

    logger.info("Registered realtime tools")
