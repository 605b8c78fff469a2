"""
Inspect a queue: estimate, drain, normalize and order.
"""

from dataclasses import dataclass, field
from typing import List

from typeguard import typechecked
from balsa import get_logger

from .__version__ import __application_name__
from .config import InspectConfiguration
from .drain import MessageDrainer, DrainResult
from .normalize import NormalizedMessage, normalize_messages, order_messages
from .sqs import SQSInspectAccess

log = get_logger(__application_name__)


@dataclass
class InspectionResult:
    estimated_count: int
    visibility_timeout: int
    drain: DrainResult
    messages: List[NormalizedMessage] = field(default_factory=list)  # newest first

    @property
    def is_degraded(self) -> bool:
        return self.drain.is_degraded


@typechecked()
def get_message_data(access: SQSInspectAccess, configuration: InspectConfiguration) -> InspectionResult:
    """
    Get (but do not delete) the messages currently in a queue, as normalized messages ordered newest first.

    :param access: SQS access
    :param configuration: inspection configuration
    :return: inspection result
    """
    estimated_count = access.messages_available()
    visibility_timeout = configuration.calculate_visibility_timeout(estimated_count)
    log.info(f"queue has approximately {estimated_count} messages, using visibility timeout of {visibility_timeout}s")

    drain_result = MessageDrainer(access, configuration).drain(estimated_count, visibility_timeout)
    messages = order_messages(normalize_messages(drain_result.messages))
    return InspectionResult(estimated_count, visibility_timeout, drain_result, messages)
