"""Shared test fixtures.

Provides settings, a mock Data API client, a report builder and a fresh
FastMCP server with every tool registered against the mock client.
"""

from unittest.mock import MagicMock

import pytest
from fastmcp import FastMCP

from google_analytics_mcp.config import Settings
from google_analytics_mcp.reporting import ReportRequestBuilder
from google_analytics_mcp.server import build_server

REPORT_RESULT = {
    "dimension_headers": [{"name": "country"}],
    "metric_headers": [{"name": "activeUsers", "type_": "TYPE_INTEGER"}],
    "rows": [
        {"dimension_values": [{"value": "Germany"}], "metric_values": [{"value": "42"}]},
        {"dimension_values": [{"value": "France"}], "metric_values": [{"value": "17"}]},
    ],
    "row_count": 2,
}


@pytest.fixture
def settings() -> Settings:
    return Settings(property_id="123456")


@pytest.fixture
def unconfigured_settings() -> Settings:
    """Settings with no default property ID."""
    return Settings()


@pytest.fixture
def mock_client() -> MagicMock:
    """Mock Data API client returning a fixed report for every call."""
    client = MagicMock()
    client.run_report.return_value = REPORT_RESULT
    client.run_realtime_report.return_value = REPORT_RESULT
    return client


@pytest.fixture
def builder(mock_client: MagicMock, settings: Settings) -> ReportRequestBuilder:
    return ReportRequestBuilder(mock_client, settings)


@pytest.fixture
def server(mock_client: MagicMock, settings: Settings) -> FastMCP:
    """A fresh server so registrations never leak between tests."""
    return build_server(settings, client=mock_client, server=FastMCP("test-ga4"))


def sent_request(method: MagicMock):
    """Return the request object a mocked client method was called with."""
    method.assert_called_once()
    return method.call_args.args[0]
