"""
Error Handling Utilities

Provides:
- The exception taxonomy shared by every layer of the command
- Classification of transport failures for diagnostics
"""

from typing import Optional


class AlertTriggerError(Exception):
    """Base class for every failure the command reports."""
    pass


class ConfigurationError(AlertTriggerError):
    """Raised for missing or malformed flags and settings."""
    pass


class RenderError(AlertTriggerError):
    """Raised when the alert body cannot be assembled or serialized."""
    pass


class DeliveryError(AlertTriggerError):
    """Raised when the alert could not be delivered to Alertmanager."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class TransportError(DeliveryError):
    """
    Connection, timeout, DNS or cancellation failure.

    The original exception is kept in ``cause`` and is also chained
    with ``raise ... from``.
    """

    def __init__(self, message: str, url: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(message, url=url)
        self.cause = cause
        self.category = classify_error(cause) if cause is not None else "unknown"


class RejectedError(DeliveryError):
    """Alertmanager answered with a status other than 200."""

    def __init__(
        self,
        status_code: int,
        reason: str,
        body: str,
        url: Optional[str] = None,
    ):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(
            f"Failed to create alert: {self.status_line} {body}",
            url=url,
        )

    @property
    def status_line(self) -> str:
        return f"{self.status_code} {self.reason}".strip()


def classify_error(error: BaseException) -> str:
    """
    Classify a transport error for diagnostics.

    Args:
        error: Exception to classify.

    Returns:
        Error category string.
    """
    if isinstance(error, KeyboardInterrupt):
        return "cancelled"

    error_name = type(error).__name__.lower()
    error_msg = str(error).lower()

    # Timeout errors
    if "timeout" in error_name or "timed out" in error_msg:
        return "timeout"

    # DNS errors
    if any(x in error_msg for x in ["name or service not known", "nodename nor servname", "getaddrinfo"]):
        return "dns"

    # Network errors
    if any(x in error_name for x in ["connect", "network", "socket"]):
        return "network"
    if any(x in error_msg for x in ["connection refused", "network unreachable"]):
        return "network"

    # Invalid target
    if "url" in error_name or "invalid" in error_msg:
        return "invalid_url"

    # Default
    return "unknown"
