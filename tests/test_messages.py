from datetime import date, datetime, timedelta, timezone

import pytest
import requests

from smsapi import BulkSendResult, ValidationError
from stubs import StubResponse


def test_send_to_contact(api, session):
    api.messages.send_to_contact("50212345678", "Test sms", id=1)

    call = session.calls[0]
    assert call.method == "POST"
    assert call.path == "/messages/send_to_contact"
    assert call.body_text == '{"msisdn":"50212345678","message":"Test sms","id":1}'


def test_send_to_contact_with_schedule(api, session):
    api.messages.send_to_contact("50212345678", "Later", scheduled_at="2026-10-16T12:30:00")
    assert session.calls[0].json["scheduled_at"] == "2026-10-16 12:30:00"


def test_send_requires_message(api, session):
    with pytest.raises(ValidationError) as excinfo:
        api.messages.send_to_contact("50212345678", "")
    assert excinfo.value.field == "message"
    assert session.calls == []


@pytest.mark.parametrize("recipients", [[], None, "50212345678", ["50212345678", ""]])
def test_bulk_send_rejects_invalid_recipients(api, session, recipients):
    with pytest.raises(ValidationError):
        api.messages.send_to_multiple_contacts(recipients, "Hello everyone")
    assert session.calls == []


def test_bulk_send_reports_partial_success(api, session):
    session._responses.extend([
        StubResponse(200, {"id": "m1"}),
        StubResponse(400, {"error": "Invalid msisdn"}),
        requests.exceptions.ConnectionError("Connection refused"),
    ])

    result = api.messages.send_to_multiple_contacts(
        ["50212345678", "50200000000", "50287654321"], "Hello everyone"
    )

    assert isinstance(result, BulkSendResult)
    assert (result.total, result.successful, result.failed) == (3, 1, 2)
    assert result.ok is False

    first, second, third = result.outcomes
    assert first.ok and first.response.data == {"id": "m1"}
    assert not second.ok and second.response.data == {"error": "Invalid msisdn"}
    assert third.response is None and "Connection refused" in third.error

    # one call per recipient, in order
    assert [c.json["msisdn"] for c in session.calls] == ["50212345678", "50200000000", "50287654321"]


def test_bulk_send_parallel_keeps_recipient_order(api, session):
    recipients = [f"5021234{i:04d}" for i in range(8)]

    def handler(call):
        msisdn = call.json["msisdn"]
        if msisdn.endswith("3"):
            return StubResponse(500, {"error": "boom"}, reason="Internal Server Error")
        return StubResponse(200, {"msisdn": msisdn})

    session._handler = handler
    result = api.messages.send_to_multiple_contacts(recipients, "Hi", max_workers=4)

    assert [o.msisdn for o in result.outcomes] == recipients
    assert result.total == 8
    assert result.failed == 1
    assert len(session.calls) == 8
    assert result.to_dict()["successful"] == 7


def test_send_to_tags(api, session):
    api.messages.send_to_tags(["vip", "premium"], "Special offer")

    call = session.calls[0]
    assert call.path == "/messages/send"
    assert call.json == {"tags": ["vip", "premium"], "message": "Special offer"}


def test_send_to_tags_requires_tags(api, session):
    with pytest.raises(ValidationError):
        api.messages.send_to_tags([], "Special offer")
    assert session.calls == []


def test_list_messages_normalizes_dates(api, session):
    api.messages.list_messages(start_date="2024-01-01", end_date=date(2024, 1, 2), limit=5, direction="MT")

    call = session.calls[0]
    assert call.path == "/messages"
    assert call.params == {
        "direction": "MT",
        "end_date": "2024-01-02 00:00:00",
        "limit": "5",
        "start_date": "2024-01-01 00:00:00",
    }
    assert "start_date=2024-01-01+00%3A00%3A00" in call.query


def test_list_messages_validation(api, session):
    with pytest.raises(ValidationError):
        api.messages.list_messages(direction="SIDEWAYS")
    with pytest.raises(ValidationError):
        api.messages.list_messages(start_date="yesterday")
    with pytest.raises(ValidationError):
        api.messages.list_messages(limit=1.5)
    assert session.calls == []


def test_message_status_and_delivery_reports(api, session):
    api.messages.get_message_status("test-123")
    api.messages.get_delivery_reports(limit=5)

    status, reports = session.calls
    assert status.path == "/messages" and status.params == {"id": "test-123"}
    assert reports.path == "/messages/delivery_reports" and reports.params == {"limit": "5"}


def test_bulk_send_accepts_numeric_string_workers(api, session):
    result = api.messages.send_to_multiple_contacts(["50211111111", "50222222222"], "hi", max_workers="2")

    assert result.total == 2 and result.ok
    assert len(session.calls) == 2


@pytest.mark.parametrize("workers", [0, -3, "many"])
def test_bulk_send_rejects_bad_worker_count(api, session, workers):
    with pytest.raises(ValidationError) as excinfo:
        api.messages.send_to_multiple_contacts(["50211111111"], "hi", max_workers=workers)
    assert excinfo.value.field == "max_workers"
    assert session.calls == []


def test_dates_with_offset_are_sent_in_utc(api, session):
    aware = datetime(2024, 1, 2, 8, 0, tzinfo=timezone(timedelta(hours=-6)))
    api.messages.list_messages(start_date="2024-01-01T08:00:00+02:00", end_date=aware)

    params = session.calls[0].params
    assert params["start_date"] == "2024-01-01 06:00:00"
    assert params["end_date"] == "2024-01-02 14:00:00"


def test_trailing_z_is_utc(api, session):
    api.messages.list_messages(start_date="2024-01-01T08:00:00Z")
    assert session.calls[0].params["start_date"] == "2024-01-01 08:00:00"
