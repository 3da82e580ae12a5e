from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv
from pydantic import ValidationError

from eventrelay.adapters.gladly import (
    ConversationItemPayload,
    CustomerPayload,
    GladlyDestination,
)
from eventrelay.config import configure_logging
from eventrelay.errors import PayloadValidationError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Send resolved event payloads to Gladly")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log lookups and request details",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    customer = subparsers.add_parser("customer", help="Create or update a customer profile")
    customer.add_argument(
        "--payload",
        type=str,
        required=True,
        help="Path to a JSON customer payload, or '-' to read stdin",
    )
    customer.add_argument(
        "--override",
        action="store_true",
        help="Overwrite existing profile values (sets override in the payload)",
    )

    item = subparsers.add_parser(
        "conversation-item",
        help="Add an activity to a customer's conversation timeline",
    )
    item.add_argument(
        "--payload",
        type=str,
        required=True,
        help="Path to a JSON conversation item payload, or '-' to read stdin",
    )
    item.add_argument(
        "--customer-id",
        type=str,
        help="Gladly customer id; when omitted the customer is looked up by email or phone",
    )

    return parser.parse_args(list(argv))


def _read_payload(source: str) -> dict[str, Any]:
    try:
        raw = sys.stdin.read() if source == "-" else Path(source).read_text()
        data = json.loads(raw)
    except OSError as exc:
        raise ValueError(f"Cannot read payload {source}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Payload {source} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Payload {source} must be a JSON object")
    return data


def _build_payload(args: argparse.Namespace) -> CustomerPayload | ConversationItemPayload:
    data = _read_payload(args.payload)
    try:
        if args.command == "customer":
            payload = CustomerPayload.model_validate(data)
            if args.override:
                payload = payload.model_copy(update={"override": True})
            return payload
        return ConversationItemPayload.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid {args.command} payload: {exc}") from exc


def main(
    argv: Sequence[str] | None = None,
    *,
    destination_factory: Callable[[], GladlyDestination] = GladlyDestination,
) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        payload = _build_payload(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        destination = destination_factory()
        if isinstance(payload, CustomerPayload):
            result = destination.sync_customer(payload)
            log.info(
                "Customer %s: %s (status %s)",
                result.action,
                result.customer_id,
                result.response.status_code,
            )
        elif parsed_args.customer_id:
            response = destination.create_conversation_item(parsed_args.customer_id, payload)
            log.info("Conversation item created (status %s)", response.status_code)
        else:
            response = destination.post_conversation_item(payload)
            log.info("Conversation item created (status %s)", response.status_code)
    except PayloadValidationError:
        log.exception("Payload cannot be sent to Gladly")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error while sending to Gladly")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
