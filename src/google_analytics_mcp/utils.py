"""
Utility functions for Google Analytics MCP Server.

Contains common utilities for authentication, property naming and
protocol buffer conversion.
"""

import json
import logging
from typing import Any, Dict, Optional

import proto
from google.protobuf import json_format
from google.oauth2 import service_account
from google.analytics.data_v1beta import BetaAnalyticsDataClient

from .config import Settings

# Configure logging
logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/analytics.readonly"]

PROPERTY_PREFIX = "properties/"


def proto_to_dict(obj: proto.Message) -> Dict[str, Any]:
    """Converts a proto message to a dictionary."""
    return type(obj).to_dict(
        obj, use_integers_for_enums=False, preserving_proto_field_name=True
    )


def dict_to_proto(message_cls, data: Dict[str, Any]) -> proto.Message:
    """
    Build a proto-plus message from a plain dict.

    Accepts both the protobuf field names (snake_case) and the JSON names
    used by the REST reference (camelCase).
    """
    pb = json_format.ParseDict(data, message_cls.pb()())
    return message_cls.wrap(pb)


def to_tool_text(result: Any) -> str:
    """
    Render a backend result as the text returned by a tool.

    Proto messages are converted to plain dicts first; anything else is
    assumed to be JSON-serializable already. Key order is preserved.
    """
    if isinstance(result, proto.Message):
        result = proto_to_dict(result)
    return json.dumps(result, indent=2, ensure_ascii=False)


def format_property_id(property_id: str) -> str:
    """Format property ID for API calls."""
    if property_id.startswith(PROPERTY_PREFIX):
        return property_id
    return f"{PROPERTY_PREFIX}{property_id}"


def build_credentials(settings: Settings) -> Optional[service_account.Credentials]:
    """
    Build service account credentials from the configured key material.

    Returns None when no service account is configured, in which case the
    client falls back to Application Default Credentials.
    """
    if not settings.has_service_account:
        return None

    # Keys pasted into env files usually carry escaped newlines
    private_key = settings.private_key.replace("\\n", "\n")

    credentials_info = {
        "type": "service_account",
        "client_email": settings.client_email,
        "private_key": private_key,
        "private_key_id": "",
        "client_id": "",
        "auth_uri": "https://accounts.google.com/o/oauth2/auth",
        "token_uri": "https://oauth2.googleapis.com/token",
    }

    return service_account.Credentials.from_service_account_info(
        credentials_info, scopes=SCOPES
    )


def initialize_client(settings: Settings) -> BetaAnalyticsDataClient:
    """Create the Google Analytics Data API client."""
    try:
        credentials = build_credentials(settings)
        if credentials is None:
            logger.info("No service account configured, using Application Default Credentials")
            client = BetaAnalyticsDataClient()
        else:
            logger.info(f"Using service account {settings.client_email}")
            client = BetaAnalyticsDataClient(credentials=credentials)

        if not settings.property_id:
            logger.warning(
                "No default property ID configured (GA4_PROPERTY_ID / GA_PROPERTY_ID); "
                "every tool call must pass property_id"
            )

        logger.info("Google Analytics client initialized successfully")
        return client

    except Exception as e:
        logger.error(f"Failed to initialize Google Analytics client: {e}")
        raise
