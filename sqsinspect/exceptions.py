from typing import Any, List, Union


class SQSInspectException(Exception):
    """Base exception for sqsinspect errors."""

    pass


class QueueUnavailable(SQSInspectException):
    """Raised when the queue can not be reached (auth failure, unknown queue, network fault)."""

    def __init__(self, queue: str, cause: Union[BaseException, str], partial_messages: Union[List[Any], None] = None):
        self.queue = queue
        self.cause = cause
        # messages received before the failure (only for failures in the middle of a drain)
        self.partial_messages = [] if partial_messages is None else partial_messages
        super().__init__(f'queue "{queue}" unavailable : {cause}')
