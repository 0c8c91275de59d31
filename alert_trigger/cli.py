"""
alert-trigger command line

``create-alert`` posts one test alert to an Alertmanager-compatible API:
flags -> TriggerConfig -> request body -> single POST -> exit code.
"""

import argparse
import sys
from datetime import datetime
from typing import Dict, Optional, Sequence

import httpx
from pydantic import ValidationError

from alert_trigger import __version__
from alert_trigger.builder import build_body
from alert_trigger.config.settings import (
    DEFAULT_ALERT_DURATION,
    DEFAULT_ALERTMANAGER_ADDRESS,
    AlertTriggerSettings,
    TriggerConfig,
    get_settings,
)
from alert_trigger.models.alert import AlertWindow
from alert_trigger.tools.alertmanager_client import send_alert
from alert_trigger.utils.durations import format_duration, parse_duration, parse_labels
from alert_trigger.utils.error_handling import AlertTriggerError, ConfigurationError
from alert_trigger.utils.structured_logging import StructuredLogger, setup_logging

logger = StructuredLogger(__name__)

COMMAND_NAME = "create-alert"


class CommandParser(argparse.ArgumentParser):
    """ArgumentParser that raises ConfigurationError instead of exiting."""

    def error(self, message):
        self.print_usage(sys.stderr)
        raise ConfigurationError(message)


def _duration_arg(text: str):
    try:
        return parse_duration(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _labels_arg(text: str) -> Dict[str, str]:
    try:
        return parse_labels(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    p = CommandParser(
        prog=COMMAND_NAME,
        description="Create test alert for Alert Manager. "
                    "This command creates a popup alert for the user.",
    )
    p.add_argument(
        "--alert-duration", "-d",
        dest="alert_duration",
        type=_duration_arg,
        default=DEFAULT_ALERT_DURATION,
        metavar="DURATION",
        help=f"How long the alert stays active, e.g. 90s or 1h30m (default: {format_duration(DEFAULT_ALERT_DURATION)})",
    )
    p.add_argument(
        "--alert-manager-address", "--address",
        dest="alert_manager_address",
        required=True,
        metavar="HOST:PORT",
        help=f"The URL of the alert manager service (e.g. {DEFAULT_ALERTMANAGER_ADDRESS})",
    )
    p.add_argument(
        "--use-tls", "--tls",
        dest="use_tls",
        action="store_true",
        help="Use TLS for the connection to the alert manager",
    )
    p.add_argument(
        "--labels", "-l",
        dest="labels",
        action="append",
        type=_labels_arg,
        metavar="KEY=VALUE",
        help="Labels to attach to the alert in the format key=value. Can be specified multiple times.",
    )
    p.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def load_settings() -> AlertTriggerSettings:
    try:
        return get_settings()
    except ValidationError as e:
        raise ConfigurationError(f"invalid settings: {_describe(e)}") from e


def _describe(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'value'}: {err['msg']}"
        for err in error.errors()
    )


def build_config(args: argparse.Namespace, settings: AlertTriggerSettings) -> TriggerConfig:
    """Freeze parsed flags and settings into a TriggerConfig.

    Raises:
        ConfigurationError: On an invalid address or non-positive duration.
    """
    labels: Dict[str, str] = {}
    for group in args.labels or []:
        labels.update(group)

    try:
        return TriggerConfig(
            address=args.alert_manager_address,
            use_tls=args.use_tls,
            labels=labels,
            duration=args.alert_duration,
            verbose=args.verbose,
            timeout_seconds=settings.request_timeout_seconds,
        )
    except ValidationError as e:
        raise ConfigurationError(_describe(e)) from e


def run(
    config: TriggerConfig,
    now: Optional[datetime] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """Build and send the alert described by ``config``.

    Returns:
        The body that was sent.

    Raises:
        ConfigurationError: If the alert window ends past the calendar range.
        RenderError: If the body cannot be built.
        DeliveryError: If the request fails or is not answered with 200.
    """
    try:
        window = AlertWindow.starting_now(config.duration, now=now)
    except OverflowError as e:
        raise ConfigurationError(f"alert-duration {format_duration(config.duration)} ends out of range: {e}") from e
    body = build_body(config.labels, window.start, window.end)

    logger.debug(
        "Sending alert",
        {
            "address": config.address,
            "tls": config.use_tls,
            "duration": format_duration(config.duration),
            "labels": len(config.labels),
        },
    )
    send_alert(config.address, config.use_tls, body, timeout=config.timeout_seconds, transport=transport)

    if config.verbose:
        print(f"alert created with body: {body}")
    return body


def main(argv: Optional[Sequence[str]] = None) -> int:
    setup_logging()
    try:
        settings = load_settings()
        setup_logging(settings.log_level, settings.log_format)
        args = build_parser().parse_args(argv)
        run(build_config(args, settings))
    except AlertTriggerError as e:
        logger.error("Error running command", {"error": str(e)})
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
