"""
Messages resource

Sending to several contacts fans out one send_to_contact call per recipient.
There is no atomicity across recipients: partial success is reported in the
BulkSendResult, never rolled back.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..api_caller import ApiResponse
from ..exceptions import TransportError, ValidationError
from ..validators import (
    MESSAGE_DIRECTIONS,
    require,
    validate_choice,
    validate_date,
    validate_integer,
    validate_list,
)
from .base import Resource


@dataclass(frozen=True)
class RecipientOutcome:
    """Result of sending to one recipient of a bulk send"""

    msisdn: str
    response: Optional[ApiResponse] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.response is not None and self.response.ok


@dataclass(frozen=True)
class BulkSendResult:
    """Aggregate of a multi-recipient send, outcomes in recipient order"""

    outcomes: List[RecipientOutcome] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def successful(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def failed(self) -> int:
        return self.total - self.successful

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "successful": self.successful,
            "failed": self.failed,
            "results": [
                {
                    "msisdn": outcome.msisdn,
                    "ok": outcome.ok,
                    "code": outcome.response.code if outcome.response else None,
                    "data": outcome.response.data if outcome.response else None,
                    "error": outcome.error,
                }
                for outcome in self.outcomes
            ],
        }


class Messages(Resource):
    """Message listing, sending and delivery reports"""

    def list_messages(self, start_date=None, end_date=None, limit: Optional[int] = None,
                      start: Optional[int] = None, direction: Optional[str] = None,
                      msisdn: Optional[str] = None,
                      delivery_status_enable: Optional[bool] = None) -> ApiResponse:
        """
        List messages in a date range

        Args:
            start_date: Range start (date, datetime or "YYYY-MM-DD[ HH:MM:SS]")
            end_date: Range end, same formats
            limit: Number of results to return
            start: Starting offset
            direction: MT (sent) or MO (received)
            msisdn: Only messages exchanged with this contact
            delivery_status_enable: Include delivery status per message

        Returns:
            ApiResponse: data is the list of messages
        """
        params = self._compact({
            "start_date": validate_date(start_date, "start_date"),
            "end_date": validate_date(end_date, "end_date"),
            "limit": validate_integer(limit, "limit"),
            "start": validate_integer(start, "start"),
            "direction": validate_choice(direction, MESSAGE_DIRECTIONS, "direction"),
            "msisdn": msisdn,
            "delivery_status_enable": delivery_status_enable,
        })
        return self._caller.get("messages", params=params or None)

    def send_to_contact(self, msisdn: str, message: str, id: Optional[Any] = None,
                        scheduled_at=None) -> ApiResponse:
        """
        Send a message to one contact

        Args:
            msisdn: Recipient subscriber id
            message: Message text
            id: Optional client-side identifier for the message
            scheduled_at: Optional send time (date, datetime or ISO string)
        """
        msisdn = str(require(msisdn, "msisdn")).strip()
        body = {"msisdn": msisdn, **self._message_body(message, id, scheduled_at)}
        return self._caller.post("messages/send_to_contact", body=body)

    def send_to_multiple_contacts(self, msisdns: List[str], message: str,
                                  id: Optional[Any] = None,
                                  max_workers: Optional[int] = None) -> BulkSendResult:
        """
        Send the same message to several contacts, one call per recipient

        The recipient list is validated before anything is sent. Calls run
        one after another unless max_workers > 1, in which case they are
        issued from a thread pool. Outcomes keep the recipient order either
        way.

        Pool workers share the client's requests.Session, which requests does
        not document as thread-safe. Pass a client built on its own session
        when sending in parallel alongside other traffic.

        Args:
            msisdns: Recipient subscriber ids
            message: Message text
            id: Optional identifier sent with every message
            max_workers: Thread pool size for parallel sends (at least 1)

        Returns:
            BulkSendResult: total/successful/failed counts and per-recipient outcomes
        """
        recipients = validate_list(msisdns, "msisdns", required=True)
        for recipient in recipients:
            if recipient is None or not str(recipient).strip():
                raise ValidationError("msisdns must not contain empty values", field="msisdns")
        self._message_body(message, id, None)
        max_workers = validate_integer(max_workers, "max_workers")
        if max_workers is not None and max_workers < 1:
            raise ValidationError("max_workers must be at least 1", field="max_workers")

        def send_one(recipient) -> RecipientOutcome:
            recipient = str(recipient).strip()
            try:
                response = self.send_to_contact(recipient, message, id=id)
            except TransportError as e:
                self.logger.warning(f"Send to {recipient} failed: {e}")
                return RecipientOutcome(msisdn=recipient, error=str(e))
            return RecipientOutcome(msisdn=recipient, response=response, error=response.error)

        if max_workers is not None and max_workers > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                outcomes = list(pool.map(send_one, recipients))
        else:
            outcomes = [send_one(recipient) for recipient in recipients]

        result = BulkSendResult(outcomes=outcomes)
        self.logger.info(
            f"Bulk send finished: total={result.total} successful={result.successful} "
            f"failed={result.failed}"
        )
        return result

    def send_to_tags(self, tags: List[str], message: str, id: Optional[Any] = None,
                     scheduled_at=None) -> ApiResponse:
        """Send a message to every contact carrying any of the given tags"""
        tags = validate_list(tags, "tags", required=True)
        body = {"tags": tags, **self._message_body(message, id, scheduled_at)}
        return self._caller.post("messages/send", body=body)

    def get_message_status(self, message_id: Any) -> ApiResponse:
        require(message_id, "message_id")
        return self._caller.get("messages", params={"id": message_id})

    def get_delivery_reports(self, start_date=None, end_date=None, limit: Optional[int] = None,
                             start: Optional[int] = None,
                             msisdn: Optional[str] = None) -> ApiResponse:
        params = self._compact({
            "start_date": validate_date(start_date, "start_date"),
            "end_date": validate_date(end_date, "end_date"),
            "limit": validate_integer(limit, "limit"),
            "start": validate_integer(start, "start"),
            "msisdn": msisdn,
        })
        return self._caller.get("messages/delivery_reports", params=params or None)

    def _message_body(self, message: str, id: Optional[Any], scheduled_at) -> Dict[str, Any]:
        require(message, "message")
        return self._compact({
            "message": message,
            "id": id,
            "scheduled_at": validate_date(scheduled_at, "scheduled_at"),
        })
