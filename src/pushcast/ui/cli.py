# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import find_dotenv, load_dotenv

from pushcast.app import report_to_dict, send_push
from pushcast.config import configure_logging
from pushcast.domain.errors import InvalidArgumentError
from pushcast.domain.model import Message, Notification

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Send push notifications through the gateway")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    send = subparsers.add_parser("send", help="Send a message to one or more recipients")
    send.add_argument(
        "--to",
        dest="recipients",
        action="append",
        required=True,
        help="Recipient registration id (repeat for multicast)",
    )
    send.add_argument(
        "--data",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Data payload entry (repeatable)",
    )
    send.add_argument("--title", type=str, help="Notification title")
    send.add_argument("--body", type=str, help="Notification body")
    send.add_argument("--collapse-key", type=str, help="Collapse key for the message")
    send.add_argument("--ttl", type=int, help="Time to live in seconds")
    send.add_argument("--dry-run", action="store_true", help="Ask the gateway not to deliver")
    send.add_argument(
        "--retries",
        type=int,
        default=None,
        help="Retry budget for transient failures (defaults to config)",
    )

    return parser.parse_args(list(argv))


def _parse_data(entries: Sequence[str]) -> dict[str, str]:
    data: dict[str, str] = {}
    for entry in entries:
        key, sep, value = entry.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Invalid data entry (expected KEY=VALUE): {entry}")
        data[key.strip()] = value
    return data


def _build_message(args: argparse.Namespace) -> Message:
    notification = None
    if args.title is not None or args.body is not None:
        notification = Notification(title=args.title, body=args.body)
    return Message(
        collapse_key=args.collapse_key,
        time_to_live=args.ttl,
        dry_run=True if args.dry_run else None,
        data=_parse_data(args.data),
        notification=notification,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        message = _build_message(parsed_args)
        if parsed_args.retries is not None and parsed_args.retries < 0:
            raise ValueError("Retries must be non-negative")  # noqa: TRY301
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        report = send_push(message, parsed_args.recipients, retries=parsed_args.retries)
    except InvalidArgumentError:
        log.exception("Invalid dispatch arguments")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during dispatch")
        sys.exit(1)

    print(json.dumps(report_to_dict(report), indent=2))


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run(argv: Sequence[str] | None = None) -> None:
    """Console entry point: load ``.env`` from the working directory, then run ``main``."""
    load_dotenv(find_dotenv(usecwd=True))
    signal(SIGINT, sigint_handler)
    main(argv)


if __name__ == "__main__":
    run()
