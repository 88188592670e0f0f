"""Pydantic models describing the gateway's JSON send API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_serializer, field_validator


class GatewayBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class NotificationPayload(GatewayBaseModel):
    title: str | None = None
    body: str | None = None
    icon: str | None = None
    sound: str | None = None
    badge: int | None = None
    tag: str | None = None
    color: str | None = None
    click_action: str | None = None
    body_loc_key: str | None = None
    body_loc_args: list[str] | None = None
    title_loc_key: str | None = None
    title_loc_args: list[str] | None = None

    @field_serializer("badge")
    def _badge_as_string(self, value: int | None) -> str | None:
        return None if value is None else str(value)


class SendRequest(GatewayBaseModel):
    registration_ids: list[str]
    collapse_key: str | None = None
    time_to_live: int | None = None
    delay_while_idle: bool | None = None
    dry_run: bool | None = None
    restricted_package_name: str | None = None
    data: dict[str, str] | None = None
    notification: NotificationPayload | None = None

    def to_json_body(self) -> dict[str, object]:
        return self.model_dump(exclude_none=True)


class ResultPayload(GatewayBaseModel):
    message_id: str | None = None
    registration_id: str | None = None
    error: str | None = None


class SendResponse(GatewayBaseModel):
    multicast_id: StrictInt
    success: StrictInt
    failure: StrictInt
    canonical_ids: StrictInt
    results: list[ResultPayload] = Field(default_factory=list[ResultPayload])

    @field_validator("results", mode="before")
    @classmethod
    def _null_results(cls, value: object) -> object:
        return [] if value is None else value
