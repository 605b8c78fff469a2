"""
Render SQS messages in a more friendly format (e.g. epoch milliseconds as ISO 8601 timestamps, JSON bodies parsed) and order them.
"""

import json
import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Iterable, Mapping, Union

from balsa import get_logger

from .__version__ import __application_name__

log = get_logger(__application_name__)

unknown_message_id = "Unknown"

sent_timestamp_key = "SentTimestamp"
first_receive_timestamp_key = "ApproximateFirstReceiveTimestamp"

epoch = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class NormalizedMessage:
    message_id: str
    sent_time_epoch: int  # mS since epoch
    sent_time: str  # ISO 8601
    first_receive_time: str  # ISO 8601
    attributes: Mapping[str, Any] = field(default_factory=dict)  # SQS message attributes, as-is
    body: Any = None  # parsed JSON, or the original string if not JSON

    def to_dict(self) -> Dict[str, Any]:
        return {
            "messageId": self.message_id,
            "sentTime": self.sent_time,
            "sentTimeEpoch": self.sent_time_epoch,
            "firstReceiveTime": self.first_receive_time,
            "attributes": self.attributes,
            "body": self.body,
        }


def epoch_ms_to_iso(epoch_ms: int) -> str:
    """
    epoch milliseconds to an ISO 8601 UTC string with millisecond resolution, e.g. 2021-10-24T17:38:54.524Z

    :param epoch_ms: mS since epoch
    :return: ISO 8601 string
    """
    return (epoch + timedelta(milliseconds=epoch_ms)).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _get_epoch_ms(system_attributes: Mapping[str, str], key: str) -> int:
    # absent or bad timestamps become the epoch
    value = system_attributes.get(key)
    try:
        epoch_ms = int(value)  # type: ignore
        epoch_ms_to_iso(epoch_ms)  # make sure it's representable
    except (TypeError, ValueError, OverflowError):
        log.debug(f"{key}={value} is not a valid epoch mS timestamp")
        epoch_ms = 0
    return epoch_ms


def _parse_finite_float(s: str) -> float:
    # e.g. 1e999 would be infinity, which can not be written back out as JSON
    value = float(s)
    if not math.isfinite(value):
        raise ValueError(f"non-finite number : {s}")
    return value


def _reject_constant(s: str):
    raise ValueError(f"non-standard JSON constant : {s}")


def parse_body(body: Union[str, None]) -> Any:
    """
    Parse message body as JSON. Never fails - if it's not JSON, return the original string.

    :param body: message body
    :return: parsed JSON or the original string
    """
    if body is None:
        body = ""
    try:
        parsed = json.loads(body, parse_float=_parse_finite_float, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:  # RecursionError for deeply nested bodies
        log.warning(f"payload not in JSON format ({type(e).__name__}) : {body[:100]}")
        parsed = body
    return parsed


def normalize_message(message: Mapping[str, Any]) -> NormalizedMessage:
    """
    Normalize one boto3 SQS message dict. Never fails.

    :param message: boto3 message dict (from receive_message)
    :return: normalized message
    """
    system_attributes = message.get("Attributes") or {}
    sent_time_epoch = _get_epoch_ms(system_attributes, sent_timestamp_key)
    first_receive_time_epoch = _get_epoch_ms(system_attributes, first_receive_timestamp_key)
    return NormalizedMessage(
        message_id=message.get("MessageId") or unknown_message_id,
        sent_time_epoch=sent_time_epoch,
        sent_time=epoch_ms_to_iso(sent_time_epoch),
        first_receive_time=epoch_ms_to_iso(first_receive_time_epoch),
        attributes=message.get("MessageAttributes") or {},
        body=parse_body(message.get("Body")),
    )


def normalize_messages(messages: Iterable[Mapping[str, Any]]) -> List[NormalizedMessage]:
    return [normalize_message(m) for m in messages]


def order_messages(messages: Iterable[NormalizedMessage]) -> List[NormalizedMessage]:
    """
    Order by sent time, newest first. Messages with the same sent time keep their arrival order.

    :param messages: normalized messages
    :return: new sorted list
    """
    return sorted(messages, key=lambda m: m.sent_time_epoch, reverse=True)  # sorted() is stable, even with reverse
