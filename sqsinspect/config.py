"""
Inspection configuration
"""

import math
from dataclasses import dataclass
from typing import Union, Dict, Any

from typeguard import typechecked

# AWS limits
aws_sqs_max_messages = 10  # per receive call
aws_sqs_max_visibility_timeout = 12 * 60 * 60  # seconds

default_minimum_visibility_timeout = 15  # seconds
default_stall_limit = 3
default_outfile = "sqs-inspect.json"
default_region = "eu-north-1"

# one second of visibility timeout for this many messages in the queue
visibility_timeout_messages_per_second = 4


@dataclass(frozen=True)
class InspectConfiguration:
    """
    Everything a queue inspection needs. Constructed once (e.g. from the command line) and passed to the components that need it.
    """

    queue: str  # queue URL or queue name
    region_name: Union[str, None] = None
    profile_name: Union[str, None] = None
    aws_access_key_id: Union[str, None] = None
    aws_secret_access_key: Union[str, None] = None
    aws_session_token: Union[str, None] = None
    messages_per_receive: int = aws_sqs_max_messages
    visibility_timeout: Union[int, None] = None  # None to derive from the queue depth
    minimum_visibility_timeout: int = default_minimum_visibility_timeout
    stall_limit: int = default_stall_limit  # consecutive empty receives before the drain gives up
    max_receive_calls: Union[int, None] = None  # hard ceiling on receive calls (None for no ceiling beyond the stall limit)
    outfile: str = default_outfile

    def __post_init__(self):
        if len(self.queue) < 1:
            raise ValueError(f"{self.queue=}")
        if not 1 <= self.messages_per_receive <= aws_sqs_max_messages:
            raise ValueError(f"{self.messages_per_receive=} must be between 1 and {aws_sqs_max_messages}")
        if self.visibility_timeout is not None and not 0 <= self.visibility_timeout <= aws_sqs_max_visibility_timeout:
            raise ValueError(f"{self.visibility_timeout=} must be between 0 and {aws_sqs_max_visibility_timeout}")
        if not 0 <= self.minimum_visibility_timeout <= aws_sqs_max_visibility_timeout:
            raise ValueError(f"{self.minimum_visibility_timeout=} must be between 0 and {aws_sqs_max_visibility_timeout}")
        if self.stall_limit < 1:
            raise ValueError(f"{self.stall_limit=}")
        if self.max_receive_calls is not None and self.max_receive_calls < 1:
            raise ValueError(f"{self.max_receive_calls=}")

    def aws_kwargs(self) -> Dict[str, Any]:
        """
        kwargs for the AWS access classes

        :return: dict of AWS authentication/region kwargs
        """
        return {
            "profile_name": self.profile_name,
            "aws_access_key_id": self.aws_access_key_id,
            "aws_secret_access_key": self.aws_secret_access_key,
            "aws_session_token": self.aws_session_token,
            "region_name": self.region_name,
        }

    @typechecked()
    def calculate_visibility_timeout(self, estimated_count: int) -> int:
        """
        Visibility timeout for the drain. Messages have to stay hidden for the whole run (not just one batch), so scale with the queue depth.

        :param estimated_count: approximate number of messages in the queue
        :return: visibility timeout in seconds
        """
        if self.visibility_timeout is None:
            visibility_timeout = max(self.minimum_visibility_timeout, math.ceil(estimated_count / visibility_timeout_messages_per_second))
        else:
            visibility_timeout = self.visibility_timeout  # explicitly given by the user
        return min(visibility_timeout, aws_sqs_max_visibility_timeout)
