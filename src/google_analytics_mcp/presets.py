"""
Declarative descriptors for the report tools.

Every tool is the same report call specialised by a ReportPreset: which
arguments it accepts, their defaults, and the dimension/metric lists it
pins. Defaults are applied uniformly by ``apply_defaults`` before a request
is assembled.
"""

import copy
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

REPORT = "report"
REALTIME = "realtime"

DEFAULT_START_DATE = "7daysAgo"
DEFAULT_END_DATE = "today"


@dataclass(frozen=True)
class FieldSpec:
    """One tool argument: name, expected type, whether required, default."""

    name: str
    type: type
    required: bool = False
    default: Any = None


@dataclass(frozen=True)
class ReportPreset:
    """
    A named tool variant.

    ``dimensions`` and ``metrics`` are the fixed lists sent for preset
    tools. When they are None the values come from the caller's arguments.
    """

    name: str
    description: str
    kind: str
    fields: Tuple[FieldSpec, ...]
    dimensions: Optional[Tuple[str, ...]] = None
    metrics: Optional[Tuple[str, ...]] = None

    def get_field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(f"{self.name} has no argument named {name!r}")

    def default_for(self, name: str) -> Any:
        return copy.deepcopy(self.get_field(name).default)


def apply_defaults(arguments: Optional[Dict[str, Any]], fields: Tuple[FieldSpec, ...]) -> Dict[str, Any]:
    """
    Fill missing optional arguments with their declared defaults.

    Args:
        arguments: Caller-supplied arguments; None values count as missing
        fields: The argument descriptors of the tool

    Returns:
        A new dict with one entry per declared field

    Raises:
        ValueError: If a required argument is missing
        TypeError: If an argument has the wrong type
    """
    arguments = arguments or {}
    resolved: Dict[str, Any] = {}

    for spec in fields:
        value = arguments.get(spec.name)
        if value is None:
            if spec.required:
                raise ValueError(f"Missing required argument: {spec.name}")
            value = copy.deepcopy(spec.default)
        elif not isinstance(value, spec.type):
            raise TypeError(
                f"Argument {spec.name} must be {spec.type.__name__}, "
                f"got {type(value).__name__}"
            )
        resolved[spec.name] = value

    return resolved


PROPERTY_ID = FieldSpec("property_id", str)

# Arguments shared by the fixed preset tools.
_DATE_WINDOW_FIELDS = (
    PROPERTY_ID,
    FieldSpec("start_date", str, default=DEFAULT_START_DATE),
    FieldSpec("end_date", str, default=DEFAULT_END_DATE),
)

# Arguments of the caller-driven report tools.
_QUERY_FIELDS = (
    PROPERTY_ID,
    FieldSpec("date_ranges", list, required=True),
    FieldSpec("dimensions", list, default=[]),
    FieldSpec("metrics", list, required=True),
    FieldSpec("dimension_filter", dict),
    FieldSpec("metric_filter", dict),
    FieldSpec("limit", int),
    FieldSpec("offset", int),
    FieldSpec("order_bys", list),
)

QUERY_ANALYTICS = ReportPreset(
    name="query_analytics",
    description=(
        "Run an arbitrary GA4 runReport request. Provide dimensions, metrics, "
        "date_ranges, filters, etc."
    ),
    kind=REPORT,
    fields=_QUERY_FIELDS,
)

CUSTOM_REPORT = ReportPreset(
    name="get_custom_report",
    description=(
        "Generate a custom GA4 report with chosen dimensions, metrics, "
        "and date_ranges."
    ),
    kind=REPORT,
    fields=_QUERY_FIELDS,
)

REALTIME_DATA = ReportPreset(
    name="get_realtime_data",
    description="Retrieve GA4 realtime metrics (activeUsers by country by default).",
    kind=REALTIME,
    fields=(
        PROPERTY_ID,
        FieldSpec("dimensions", list, default=["country"]),
        FieldSpec("metrics", list, default=["activeUsers"]),
    ),
)

TRAFFIC_SOURCES = ReportPreset(
    name="get_traffic_sources",
    description="Traffic sources over a date range (source/medium, sessions).",
    kind=REPORT,
    fields=_DATE_WINDOW_FIELDS,
    dimensions=("source", "medium"),
    metrics=("sessions",),
)

USER_DEMOGRAPHICS = ReportPreset(
    name="get_user_demographics",
    description="User demographics by country and city over a date range.",
    kind=REPORT,
    fields=_DATE_WINDOW_FIELDS,
    dimensions=("country", "city"),
    metrics=("activeUsers",),
)

PAGE_PERFORMANCE = ReportPreset(
    name="get_page_performance",
    description="Page performance metrics like views and avg session duration by pagePath.",
    kind=REPORT,
    fields=_DATE_WINDOW_FIELDS,
    dimensions=("pagePath",),
    metrics=("screenPageViews", "averageSessionDuration"),
)

CONVERSION_DATA = ReportPreset(
    name="get_conversion_data",
    description="Conversion-related metrics by eventName over a date range.",
    kind=REPORT,
    fields=_DATE_WINDOW_FIELDS,
    dimensions=("eventName",),
    metrics=("eventCount",),
)

# Presets whose dimensions and metrics are pinned.
FIXED_PRESETS: List[ReportPreset] = [
    TRAFFIC_SOURCES,
    USER_DEMOGRAPHICS,
    PAGE_PERFORMANCE,
    CONVERSION_DATA,
]

# Presets where the caller chooses dimensions, metrics and date ranges.
QUERY_PRESETS: List[ReportPreset] = [QUERY_ANALYTICS, CUSTOM_REPORT]

ALL_PRESETS: List[ReportPreset] = QUERY_PRESETS + [REALTIME_DATA] + FIXED_PRESETS
