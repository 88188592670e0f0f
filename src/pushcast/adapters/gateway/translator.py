"""Translate between domain messages/outcomes and gateway payloads."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pushcast.domain.model import UNRESOLVED, Delivered, Failed
from pushcast.domain.results import AttemptResponse

from .schema import NotificationPayload, ResultPayload, SendRequest, SendResponse

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from pushcast.domain.model import Message, Notification, Outcome, RecipientId


def _notification_payload(notification: Notification) -> NotificationPayload:
    return NotificationPayload(
        title=notification.title,
        body=notification.body,
        icon=notification.icon,
        sound=notification.sound,
        badge=notification.badge,
        tag=notification.tag,
        color=notification.color,
        click_action=notification.click_action,
        body_loc_key=notification.body_loc_key,
        body_loc_args=list(notification.body_loc_args)
        if notification.body_loc_args is not None
        else None,
        title_loc_key=notification.title_loc_key,
        title_loc_args=list(notification.title_loc_args)
        if notification.title_loc_args is not None
        else None,
    )


def build_send_request(message: Message, recipients: Sequence[RecipientId]) -> SendRequest:
    return SendRequest(
        registration_ids=list(recipients),
        collapse_key=message.collapse_key,
        time_to_live=message.time_to_live,
        delay_while_idle=message.delay_while_idle,
        dry_run=message.dry_run,
        restricted_package_name=message.restricted_package_name,
        data=dict(message.data) or None,
        notification=_notification_payload(message.notification)
        if message.notification is not None
        else None,
    )


def parse_outcome(payload: ResultPayload) -> Outcome:
    if payload.message_id is not None:
        return Delivered(message_id=payload.message_id, canonical_id=payload.registration_id)
    if payload.error is not None:
        return Failed(error=payload.error)
    return UNRESOLVED


def parse_attempt_response(payload: SendResponse | Mapping[str, object]) -> AttemptResponse:
    response = (
        payload if isinstance(payload, SendResponse) else SendResponse.model_validate(payload)
    )
    return AttemptResponse(
        attempt_id=response.multicast_id,
        outcomes=tuple(parse_outcome(result) for result in response.results),
        success=response.success,
        failure=response.failure,
        canonical_ids=response.canonical_ids,
    )
