"""
Configuration Management for alert-trigger

Uses Pydantic Settings for type-safe environment variable loading.
Settings only provide defaults; the command copies them into an
immutable TriggerConfig that is passed through the call chain.
"""

from datetime import timedelta
from typing import Dict, Optional
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from alert_trigger.utils.durations import MAX_DURATION, format_duration

DEFAULT_ALERTMANAGER_ADDRESS = "localhost:9093"
DEFAULT_ALERT_DURATION = timedelta(minutes=1)
DEFAULT_REQUEST_TIMEOUT_SECONDS = 5.0


class AlertTriggerSettings(BaseSettings):
    """Environment-driven settings."""

    request_timeout_seconds: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT_SECONDS,
        gt=0,
        description="Client-side timeout for the Alertmanager request"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: str = Field(
        default="text",
        description="Log output format: text or json"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        valid_formats = ["text", "json"]
        if v.lower() not in valid_formats:
            raise ValueError(f"log_format must be one of {valid_formats}")
        return v.lower()

    model_config = SettingsConfigDict(
        env_prefix="ALERT_TRIGGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


def validate_address(address: str) -> str:
    """Check that ``address`` is a bare ``host[:port]``.

    Raises:
        ValueError: If the address carries a scheme, path, query,
            credentials or whitespace, or has an invalid port.
    """
    if not address or address != address.strip() or any(c.isspace() for c in address):
        raise ValueError(f"invalid Alertmanager address {address!r}: expected host[:port]")
    if "://" in address:
        raise ValueError(f"invalid Alertmanager address {address!r}: scheme is selected with --use-tls")

    parts = urlsplit(f"//{address}")
    if parts.path or parts.query or parts.fragment or "@" in parts.netloc or not parts.hostname:
        raise ValueError(f"invalid Alertmanager address {address!r}: expected host[:port]")

    # .port raises ValueError for non-numeric or out of range ports
    port = parts.port
    if port == 0 or (port is None and address.endswith(":")):
        raise ValueError(f"invalid Alertmanager address {address!r}: port must be in 1..65535")
    return address


class TriggerConfig(BaseModel):
    """Immutable configuration of a single invocation."""

    address: str = Field(..., description="Alertmanager host[:port]")
    use_tls: bool = Field(default=False, description="Use https instead of http")
    labels: Dict[str, str] = Field(default_factory=dict, description="Alert labels")
    duration: timedelta = Field(default=DEFAULT_ALERT_DURATION, description="Alert window length")
    verbose: bool = Field(default=False, description="Echo the body sent on success")
    timeout_seconds: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT_SECONDS,
        gt=0,
        description="Client-side request timeout"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("address")
    @classmethod
    def check_address(cls, v: str) -> str:
        return validate_address(v)

    @field_validator("duration")
    @classmethod
    def check_duration(cls, v: timedelta) -> timedelta:
        if v <= timedelta(0):
            raise ValueError("alert-duration must be positive")
        if v > MAX_DURATION:
            raise ValueError(f"alert-duration must not exceed {format_duration(MAX_DURATION)}")
        return v


# Global settings instance
_settings: Optional[AlertTriggerSettings] = None


def get_settings() -> AlertTriggerSettings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = AlertTriggerSettings()
    return _settings


def reload_settings() -> AlertTriggerSettings:
    """Reload settings from environment (useful for testing)."""
    global _settings
    _settings = AlertTriggerSettings()
    return _settings
