"""
Drain an SQS queue: receive batches until the estimated number of messages has been obtained or progress stalls.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Any, Callable

from typeguard import typechecked
from balsa import get_logger

from .__version__ import __application_name__
from .config import InspectConfiguration, aws_sqs_max_messages
from .exceptions import QueueUnavailable

log = get_logger(__application_name__)


class DrainStatus(Enum):
    COMPLETE = "complete"  # target reached
    STALLED = "stalled"  # too many consecutive receives returned nothing
    TIMED_OUT = "timed_out"  # visibility timeout elapsed, so the first messages may be visible again
    CALL_LIMIT = "call_limit"  # hit the max receive calls ceiling


@dataclass
class DrainResult:
    target: int  # estimated number of messages
    messages: List[Dict[str, Any]] = field(default_factory=list)  # boto3 message dicts, in arrival order
    status: DrainStatus = DrainStatus.COMPLETE
    receive_calls: int = 0

    @property
    def is_degraded(self) -> bool:
        """
        True if the drain stopped before reaching its target (the messages obtained are still valid)
        """
        return self.status != DrainStatus.COMPLETE


class MessageDrainer:
    @typechecked()
    def __init__(self, access: Any, configuration: InspectConfiguration):
        """
        Message drainer

        :param access: SQSInspectAccess (or anything else with receive_batch())
        :param configuration: inspection configuration (batch size, stall limit, ceilings)
        """
        self.access = access
        self.configuration = configuration
        self.clock = time.monotonic  # type: Callable[[], float]

    @typechecked()
    def drain(self, target: int, visibility_timeout: int) -> DrainResult:
        """
        Receive messages until target messages have been obtained. The target is only an estimate, so also stop after the configured number of consecutive
        empty receives, after the visibility timeout has elapsed, or at the receive call ceiling. Those cases return what was obtained with a degraded status.
        Only an empty receive counts as a stall: a short poll can legitimately return fewer messages than requested, and any message received is progress.

        :param target: number of messages to obtain (usually the approximate number of messages in the queue)
        :param visibility_timeout: seconds received messages are hidden from other receivers (and from us)
        :return: drain result
        """

        result = DrainResult(target)
        batch_cap = min(self.configuration.messages_per_receive, aws_sqs_max_messages)
        max_receive_calls = self.configuration.max_receive_calls
        consecutive_stalls = 0
        start = self.clock()
        total = 0

        while total < target:

            if max_receive_calls is not None and result.receive_calls >= max_receive_calls:
                result.status = DrainStatus.CALL_LIMIT
                break
            if result.receive_calls > 0 and self.clock() - start >= visibility_timeout:
                result.status = DrainStatus.TIMED_OUT
                break

            request_count = min(batch_cap, target - total)
            try:
                messages = self.access.receive_batch(request_count, visibility_timeout, 0)
            except QueueUnavailable as e:
                e.partial_messages = result.messages
                raise
            result.receive_calls += 1

            received_count = len(messages)
            result.messages.extend(messages)
            total += received_count
            log.info(f"{received_count} messages received ({total}/{target})")

            if received_count == 0:
                consecutive_stalls += 1
                if consecutive_stalls >= self.configuration.stall_limit:
                    result.status = DrainStatus.STALLED
                    break
            else:
                consecutive_stalls = 0

        if result.is_degraded:
            log.warning(f"drain stopped early : {result.status.value},{total=},{target=},{result.receive_calls=}")
        return result

