# Tools Package
"""
External integrations.

- alertmanager_client.py: POST /api/v2/alerts
"""

from alert_trigger.tools.alertmanager_client import (
    ALERTS_PATH,
    AlertmanagerClient,
    prepare_alertmanager_url,
    send_alert,
)

__all__ = [
    "ALERTS_PATH",
    "AlertmanagerClient",
    "prepare_alertmanager_url",
    "send_alert",
]
