"""Tests for utility helpers."""

import json
from unittest.mock import patch

from google.analytics.data_v1beta.types import (
    DimensionValue,
    FilterExpression,
    MetricValue,
    OrderBy,
    Row,
    RunReportResponse,
)

from google_analytics_mcp import utils
from google_analytics_mcp.config import Settings


class TestFormatPropertyId:
    def test_adds_prefix(self) -> None:
        assert utils.format_property_id("123") == "properties/123"

    def test_keeps_existing_prefix(self) -> None:
        assert utils.format_property_id("properties/123") == "properties/123"


class TestToToolText:
    """Tests for rendering backend results."""

    def test_mapping_is_dumped_verbatim(self) -> None:
        result = {"rows": [{"b": 1, "a": 2}], "row_count": 1}
        assert utils.to_tool_text(result) == json.dumps(result, indent=2)

    def test_key_order_preserved(self) -> None:
        text = utils.to_tool_text({"z": 1, "a": 2})
        assert text.index('"z"') < text.index('"a"')

    def test_non_ascii_kept_verbatim(self) -> None:
        result = {"rows": [{"dimension_values": [{"value": "München"}]}]}
        text = utils.to_tool_text(result)

        assert "München" in text
        assert "\\u00fc" not in text
        assert json.loads(text) == result

    def test_proto_message_is_converted(self) -> None:
        response = RunReportResponse(
            row_count=1,
            rows=[
                Row(
                    dimension_values=[DimensionValue(value="Germany")],
                    metric_values=[MetricValue(value="42")],
                )
            ],
        )
        data = json.loads(utils.to_tool_text(response))
        assert data["row_count"] == 1
        assert data["rows"][0]["dimension_values"][0]["value"] == "Germany"
        assert data["rows"][0]["metric_values"][0]["value"] == "42"


class TestDictToProto:
    """Tests for building request messages from plain dicts."""

    def test_snake_case_fields(self) -> None:
        expr = utils.dict_to_proto(
            FilterExpression, {"filter": {"field_name": "city", "string_filter": {"value": "Köln"}}}
        )
        assert isinstance(expr, FilterExpression)
        assert expr.filter.field_name == "city"
        assert expr.filter.string_filter.value == "Köln"

    def test_camel_case_fields(self) -> None:
        order_by = utils.dict_to_proto(OrderBy, {"metric": {"metricName": "sessions"}, "desc": True})
        assert order_by.metric.metric_name == "sessions"
        assert order_by.desc is True


class TestCredentials:
    """Tests for credential and client construction."""

    def test_no_service_account(self) -> None:
        assert utils.build_credentials(Settings()) is None

    def test_service_account_key_is_unescaped(self) -> None:
        settings = Settings(client_email="sa@x.iam", private_key="-----BEGIN\\nKEY")
        with patch.object(
            utils.service_account.Credentials, "from_service_account_info"
        ) as from_info:
            utils.build_credentials(settings)

        info = from_info.call_args.args[0]
        assert info["client_email"] == "sa@x.iam"
        assert info["private_key"] == "-----BEGIN\nKEY"
        assert from_info.call_args.kwargs["scopes"] == utils.SCOPES

    def test_initialize_client_uses_default_credentials(self) -> None:
        with patch.object(utils, "BetaAnalyticsDataClient") as client_cls:
            client = utils.initialize_client(Settings(property_id="1"))

        client_cls.assert_called_once_with()
        assert client is client_cls.return_value

    def test_initialize_client_uses_service_account(self) -> None:
        settings = Settings(client_email="sa@x.iam", private_key="key")
        with patch.object(utils, "BetaAnalyticsDataClient") as client_cls, patch.object(
            utils, "build_credentials"
        ) as build:
            utils.initialize_client(settings)

        client_cls.assert_called_once_with(credentials=build.return_value)
