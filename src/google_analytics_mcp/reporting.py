"""
Google Analytics Data API reporting tools.

Contains the report request builder shared by every tool and the
registration of the report tools (arbitrary query, custom report and the
fixed presets).
"""

import asyncio
import logging
from typing import Annotated, Any, Callable, Dict, List, Optional, Sequence

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from google.analytics.data_v1beta import BetaAnalyticsDataClient
from google.analytics.data_v1beta.types import (
    DateRange,
    Dimension,
    FilterExpression,
    Metric,
    OrderBy,
    RunRealtimeReportRequest,
    RunReportRequest,
)
from google.api_core.exceptions import GoogleAPIError
from pydantic import BaseModel, Field, NonNegativeInt, PositiveInt

from . import utils
from .config import Settings
from .presets import (
    FIXED_PRESETS,
    QUERY_PRESETS,
    REALTIME,
    ReportPreset,
    apply_defaults,
)

# Configure logging
logger = logging.getLogger(__name__)


class DateRangeArg(BaseModel):
    """A date range argument, as accepted by the report tools."""

    start_date: str = Field(description="YYYY-MM-DD, 'today', 'yesterday' or 'NdaysAgo'")
    end_date: str = Field(description="YYYY-MM-DD, 'today', 'yesterday' or 'NdaysAgo'")
    name: Optional[str] = Field(default=None, description="Label for the range in comparison reports")


def _names(cls, names: Sequence[str]) -> List[Any]:
    return [cls(name=name) for name in names]


class ReportRequestBuilder:
    """
    Turns tool arguments into Data API requests and runs them.

    The builder holds the Data API client and the process settings; it
    keeps no other state, so one instance serves every tool concurrently.
    """

    def __init__(self, client: BetaAnalyticsDataClient, settings: Settings):
        self.client = client
        self.settings = settings

    def resolve_property(self, override: Optional[str] = None) -> Optional[str]:
        """
        Resolve the property resource name for a call.

        Args:
            override: Per-call property ID; wins over the configured default

        Returns:
            "properties/<id>", or None when no ID is available
        """
        property_id = override or self.settings.property_id
        if not property_id:
            return None
        return utils.format_property_id(property_id)

    def _base_request(self, preset: ReportPreset, arguments: Optional[Dict[str, Any]]):
        args = apply_defaults(arguments, preset.fields)

        dimensions = preset.dimensions if preset.dimensions is not None else args.get("dimensions") or []
        metrics = preset.metrics if preset.metrics is not None else args.get("metrics") or []
        if not metrics:
            raise ValueError(f"{preset.name}: at least one metric is required")

        kwargs: Dict[str, Any] = {
            "dimensions": _names(Dimension, dimensions),
            "metrics": _names(Metric, metrics),
        }

        prop = self.resolve_property(args.get("property_id"))
        if prop is None:
            logger.warning(f"{preset.name}: no property ID provided or configured")
        else:
            kwargs["property"] = prop

        return args, kwargs

    def build_report_request(
        self, preset: ReportPreset, arguments: Optional[Dict[str, Any]] = None
    ) -> RunReportRequest:
        """Assemble a RunReportRequest for a report preset."""
        args, kwargs = self._base_request(preset, arguments)

        if "date_ranges" in args:
            date_ranges = args["date_ranges"]
        else:
            date_ranges = [{"start_date": args["start_date"], "end_date": args["end_date"]}]
        if not date_ranges:
            raise ValueError(f"{preset.name}: at least one date range is required")

        request = RunReportRequest(
            date_ranges=[DateRange(**dr) for dr in date_ranges],
            **kwargs,
        )

        if args.get("dimension_filter"):
            request.dimension_filter = utils.dict_to_proto(FilterExpression, args["dimension_filter"])

        if args.get("metric_filter"):
            request.metric_filter = utils.dict_to_proto(FilterExpression, args["metric_filter"])

        if args.get("order_bys"):
            request.order_bys = [utils.dict_to_proto(OrderBy, order_by) for order_by in args["order_bys"]]

        if args.get("limit"):
            request.limit = args["limit"]
        if args.get("offset"):
            request.offset = args["offset"]

        return request

    def build_realtime_request(
        self, preset: ReportPreset, arguments: Optional[Dict[str, Any]] = None
    ) -> RunRealtimeReportRequest:
        """Assemble a RunRealtimeReportRequest for a realtime preset."""
        _, kwargs = self._base_request(preset, arguments)
        return RunRealtimeReportRequest(**kwargs)

    async def _call(self, preset: ReportPreset, method: Callable[[Any], Any], request: Any) -> Any:
        # The Data API client is blocking; keep it off the event loop.
        loop = asyncio.get_event_loop()
        try:
            return await loop.run_in_executor(None, method, request)
        except GoogleAPIError as e:
            logger.error(f"Google API error in {preset.name}: {e}")
            raise ToolError(f"Google API error: {e}") from e

    async def run_report(self, preset: ReportPreset, request: RunReportRequest) -> Any:
        return await self._call(preset, self.client.run_report, request)

    async def run_realtime_report(self, preset: ReportPreset, request: RunRealtimeReportRequest) -> Any:
        return await self._call(preset, self.client.run_realtime_report, request)

    async def execute(self, preset: ReportPreset, arguments: Optional[Dict[str, Any]] = None) -> str:
        """
        Run one tool invocation end to end.

        Args:
            preset: The tool variant being invoked
            arguments: The caller's arguments, already schema-validated

        Returns:
            The backend result as 2-space indented JSON text
        """
        if preset.kind == REALTIME:
            request = self.build_realtime_request(preset, arguments)
            logger.debug(f"{preset.name}: {request}")
            response = await self.run_realtime_report(preset, request)
        else:
            request = self.build_report_request(preset, arguments)
            logger.debug(f"{preset.name}: {request}")
            response = await self.run_report(preset, request)

        return utils.to_tool_text(response)


# Argument annotations shared by the report tools.
PropertyIdArg = Annotated[
    Optional[str],
    Field(description="GA4 property ID; defaults to the GA4_PROPERTY_ID env var"),
]
DateRangesArg = Annotated[
    List[DateRangeArg],
    Field(min_length=1, description="One or more date ranges; several ranges compare periods"),
]
MetricsArg = Annotated[
    List[str],
    Field(min_length=1, description="Metric names, e.g. ['activeUsers', 'sessions']"),
]
DimensionsArg = Annotated[
    Optional[List[str]],
    Field(description="Dimension names, e.g. ['country', 'date']"),
]
FilterArg = Annotated[
    Optional[Dict[str, Any]],
    Field(description="A Data API FilterExpression; snake_case or camelCase field names"),
]
OrderBysArg = Annotated[
    Optional[List[Dict[str, Any]]],
    Field(description="A list of Data API OrderBy objects; snake_case or camelCase field names"),
]


def _query_tool(builder: ReportRequestBuilder, preset: ReportPreset):
    async def tool(
        date_ranges: DateRangesArg,
        metrics: MetricsArg,
        dimensions: DimensionsArg = None,
        property_id: PropertyIdArg = None,
        dimension_filter: FilterArg = None,
        metric_filter: FilterArg = None,
        limit: Optional[PositiveInt] = None,
        offset: Optional[NonNegativeInt] = None,
        order_bys: OrderBysArg = None,
    ) -> str:
        return await builder.execute(
            preset,
            {
                "property_id": property_id,
                "date_ranges": [
                    dr.model_dump(exclude_none=True) if isinstance(dr, BaseModel) else dict(dr)
                    for dr in date_ranges
                ],
                "dimensions": dimensions,
                "metrics": metrics,
                "dimension_filter": dimension_filter,
                "metric_filter": metric_filter,
                "limit": limit,
                "offset": offset,
                "order_bys": order_bys,
            },
        )

    return tool


def _fixed_tool(builder: ReportRequestBuilder, preset: ReportPreset):
    async def tool(
        property_id: PropertyIdArg = None,
        start_date: Annotated[str, Field(description="Start of the date window")] = preset.default_for("start_date"),
        end_date: Annotated[str, Field(description="End of the date window")] = preset.default_for("end_date"),
    ) -> str:
        return await builder.execute(
            preset,
            {"property_id": property_id, "start_date": start_date, "end_date": end_date},
        )

    return tool


def register_report_tools(mcp: FastMCP, builder: ReportRequestBuilder) -> None:
    """Register the query, custom report and fixed preset tools."""
    for preset in QUERY_PRESETS:
        mcp.tool(name=preset.name, description=preset.description)(_query_tool(builder, preset))

    for preset in FIXED_PRESETS:
        mcp.tool(name=preset.name, description=preset.description)(_fixed_tool(builder, preset))

    logger.info(f"Registered {len(QUERY_PRESETS) + len(FIXED_PRESETS)} report tools")
