# Config Package
"""
Settings loaded from ALERT_TRIGGER_* environment variables (or .env)
and the per-invocation TriggerConfig.
"""

from alert_trigger.config.settings import (
    AlertTriggerSettings,
    TriggerConfig,
    get_settings,
    reload_settings,
    validate_address,
)

__all__ = [
    "AlertTriggerSettings",
    "TriggerConfig",
    "get_settings",
    "reload_settings",
    "validate_address",
]
