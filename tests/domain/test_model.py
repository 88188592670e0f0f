from __future__ import annotations

import pytest

from pushcast.domain.errors import InvalidArgumentError
from pushcast.domain.model import (
    UNRESOLVED,
    Delivered,
    ErrorKind,
    Failed,
    Message,
    Notification,
    is_final,
    is_transient,
    is_transient_error,
)


@pytest.mark.parametrize("error", ["Unavailable", "InternalServerError"])
def test_transient_error_kinds(error: str) -> None:
    assert is_transient_error(error)
    assert is_transient(Failed(error=error))
    assert not is_final(Failed(error=error))


@pytest.mark.parametrize(
    "error",
    [ErrorKind.NOT_REGISTERED, ErrorKind.INVALID_REGISTRATION, "SomethingNew"],
)
def test_other_error_kinds_are_final(error: str) -> None:
    assert not is_transient(Failed(error=error))
    assert is_final(Failed(error=error))


def test_delivered_is_final_and_unresolved_is_neither() -> None:
    assert is_final(Delivered(message_id="m1"))
    assert not is_transient(Delivered(message_id="m1"))
    assert not is_final(UNRESOLVED)
    assert not is_transient(UNRESOLVED)


def test_canonical_id_flag() -> None:
    assert Delivered(message_id="m1", canonical_id="c1").has_canonical_id
    assert not Delivered(message_id="m1").has_canonical_id


def test_message_data_is_copied_and_read_only() -> None:
    source = {"k": "v"}
    message = Message(data=source)
    source["k"] = "changed"

    assert message.data == {"k": "v"}
    with pytest.raises(TypeError):
        message.data["k"] = "x"  # type: ignore[index]


def test_with_data_keeps_other_fields() -> None:
    notification = Notification(title="t", badge=3)
    message = Message(collapse_key="ck", time_to_live=10, data={"a": "1"}, notification=notification)

    updated = message.with_data(b="2")

    assert updated.data == {"a": "1", "b": "2"}
    assert updated.collapse_key == "ck"
    assert updated.time_to_live == 10
    assert updated.notification is notification
    assert message.data == {"a": "1"}


def test_negative_time_to_live_is_rejected() -> None:
    with pytest.raises(ValueError, match="time_to_live"):
        Message(time_to_live=-1)


@pytest.mark.parametrize("data", [{"k": 3}, {1: "v"}, {"k": None}])
def test_non_string_data_is_rejected(data: dict[object, object]) -> None:
    with pytest.raises(InvalidArgumentError, match="data entries"):
        Message(data=data)  # type: ignore[arg-type]
