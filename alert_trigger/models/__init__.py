# Models Package
"""
Pydantic models for typed data contracts.

All entities are immutable after creation.
"""

from alert_trigger.models.alert import DATE_FORMAT, AlertWindow, PostableAlert

__all__ = [
    "DATE_FORMAT",
    "AlertWindow",
    "PostableAlert",
]
