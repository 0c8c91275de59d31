# Utils Package
"""
Cross-cutting utilities.

- durations.py: Duration and label flag parsing
- error_handling.py: Exception taxonomy
- structured_logging.py: Logger setup and formatters
"""

from alert_trigger.utils.durations import format_duration, parse_duration, parse_labels
from alert_trigger.utils.error_handling import (
    AlertTriggerError,
    ConfigurationError,
    DeliveryError,
    RejectedError,
    RenderError,
    TransportError,
    classify_error,
)
from alert_trigger.utils.structured_logging import StructuredLogger, setup_logging

__all__ = [
    "format_duration",
    "parse_duration",
    "parse_labels",
    "AlertTriggerError",
    "ConfigurationError",
    "DeliveryError",
    "RejectedError",
    "RenderError",
    "TransportError",
    "classify_error",
    "StructuredLogger",
    "setup_logging",
]
