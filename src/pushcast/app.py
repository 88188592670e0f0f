"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pushcast.adapters.gateway import GatewaySender
from pushcast.config import get_backoff_config, get_gateway_config
from pushcast.domain.model import Delivered, Failed

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pushcast.domain.model import Message, Outcome, RecipientId
    from pushcast.domain.results import DispatchReport

log = getLogger(__name__)


def send_push(
    message: Message,
    recipients: Sequence[RecipientId],
    *,
    retries: int | None = None,
    sender: GatewaySender | None = None,
) -> DispatchReport:
    """Send a message to the given recipients using the environment configuration."""

    effective_sender = sender or GatewaySender(
        config=get_gateway_config(),
        backoff=get_backoff_config(),
    )
    log.info(
        "Starting push dispatch: recipients=%s, retries=%s",
        len(recipients),
        effective_sender.config.default_retries if retries is None else retries,
    )
    report = effective_sender.send_multicast_sync(message, recipients, retries=retries)
    for recipient, canonical_id in report.canonical_replacements().items():
        log.info(
            "Recipient %s has canonical id %s", _abbreviate(recipient), _abbreviate(canonical_id)
        )
    return report


def outcome_to_dict(outcome: Outcome) -> dict[str, object]:
    if isinstance(outcome, Delivered):
        return {
            "status": "delivered",
            "message_id": outcome.message_id,
            "canonical_id": outcome.canonical_id,
        }
    if isinstance(outcome, Failed):
        return {"status": "failed", "error": outcome.error, "transient": outcome.is_transient}
    return {"status": "unresolved"}


def report_to_dict(report: DispatchReport) -> dict[str, object]:
    return {
        "attempt_id": report.attempt_id,
        "retry_attempt_ids": list(report.retry_attempt_ids),
        "success": report.success,
        "failure": report.failure,
        "canonical_ids": report.canonical_ids,
        "results": [
            {"recipient": recipient, **outcome_to_dict(outcome)}
            for recipient, outcome in report.results
        ],
    }


def _abbreviate(recipient: RecipientId) -> str:
    if len(recipient) <= 12:
        return recipient
    return f"{recipient[:6]}...{recipient[-4:]}"
