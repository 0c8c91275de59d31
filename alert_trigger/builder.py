"""
Request Builder

Renders the JSON body for ``POST /api/v2/alerts``: an array holding a
single alert with ``labels``, ``startsAt`` and ``endsAt``. The document
is assembled from a PostableAlert and serialized with ``json``; label
keys carry no meaning here and are copied verbatim.
"""

import json
from datetime import datetime, timezone
from typing import Mapping

from pydantic import ValidationError

from alert_trigger.models.alert import DATE_FORMAT, PostableAlert
from alert_trigger.utils.error_handling import RenderError


def format_timestamp(value: datetime) -> str:
    """Format as ``YYYY-MM-DDTHH:MM:SS`` in UTC.

    Aware datetimes are converted to UTC; naive ones are taken as UTC.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(DATE_FORMAT)


def build_alert(labels: Mapping[str, str], start: datetime, end: datetime) -> PostableAlert:
    """Assemble the alert object for the given labels and window.

    Raises:
        RenderError: If a timestamp is not a datetime or a label is not
            a non-empty string key with a string value.
    """
    try:
        return PostableAlert(
            labels=dict(labels),
            startsAt=format_timestamp(start),
            endsAt=format_timestamp(end),
        )
    except (ValidationError, AttributeError, TypeError, ValueError) as e:
        raise RenderError(f"failed to render alert body: {e}") from e


def build_body(labels: Mapping[str, str], start: datetime, end: datetime) -> str:
    """Render the request body.

    Pure function of its inputs: the same labels and timestamps always
    produce the same text.

    Args:
        labels: Alert labels (may be empty)
        start: Start of the alert window
        end: End of the alert window

    Returns:
        JSON text of a one-element array

    Raises:
        RenderError: If the alert cannot be assembled or serialized
    """
    alert = build_alert(labels, start, end)
    try:
        return json.dumps([alert.to_wire()], ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise RenderError(f"failed to serialize alert body: {e}") from e
