"""
SQS Access
"""

from typing import List, Dict, Any, Union

from botocore.exceptions import ClientError, BotoCoreError
from typeguard import typechecked
from balsa import get_logger

from .__version__ import __application_name__
from .aws import AWSAccess, boto_error_to_string
from .config import aws_sqs_max_messages
from .exceptions import QueueUnavailable

log = get_logger(__application_name__)

approximate_number_of_messages_key = "ApproximateNumberOfMessages"


class SQSInspectAccess(AWSAccess):
    @typechecked()
    def __init__(self, queue: str, **kwargs):
        """
        SQS access for inspecting (draining) a queue

        :param queue: queue URL or queue name
        :param kwargs: kwargs to send to base class
        """
        try:
            super().__init__(resource_name="sqs", **kwargs)
        except BotoCoreError as e:
            # e.g. profile not found
            raise QueueUnavailable(queue, e) from e
        self.queue = queue
        self.queue_url = queue if queue.startswith("https://") or queue.startswith("http://") else None  # a name is resolved only when needed

    def _unavailable(self, e: Union[ClientError, BotoCoreError], partial_messages: Union[List[Dict[str, Any]], None] = None) -> QueueUnavailable:
        self.most_recent_error = boto_error_to_string(e)
        log.info(f"{self.queue=},{self.most_recent_error=}")
        return QueueUnavailable(self.queue, e, partial_messages)

    @typechecked()
    def get_queue_url(self) -> str:
        """
        get the queue URL (resolving the queue name if a name was given)

        :return: queue URL
        """
        if self.queue_url is None:
            try:
                self.queue_url = self.client.get_queue_url(QueueName=self.queue)["QueueUrl"]
            except (ClientError, BotoCoreError) as e:
                raise self._unavailable(e) from e
        return self.queue_url

    @typechecked()
    def create_queue(self) -> str:
        """
        create SQS queue (queue must have been given by name)

        :return: queue URL
        """
        self.queue_url = self.client.create_queue(QueueName=self.queue)["QueueUrl"]
        return self.queue_url

    def delete_queue(self):
        """
        delete queue
        """
        self.client.delete_queue(QueueUrl=self.get_queue_url())

    @typechecked()
    def send(self, message: str, message_attributes: Union[Dict[str, Any], None] = None) -> str:
        """
        send SQS message

        :param message: message string
        :param message_attributes: message attributes (see AWS SQS documentation on MessageAttributes)
        :return: message ID
        """
        kwargs = {"QueueUrl": self.get_queue_url(), "MessageBody": message}  # type: Dict[str, Any]
        if message_attributes is not None:
            kwargs["MessageAttributes"] = message_attributes
        return self.client.send_message(**kwargs)["MessageId"]

    @typechecked()
    def messages_available(self) -> int:
        """
        Approximate number of messages visible in the queue. Eventually consistent, so may be stale.

        :return: number of messages available
        """
        try:
            response = self.client.get_queue_attributes(QueueUrl=self.get_queue_url(), AttributeNames=["All"])
        except (ClientError, BotoCoreError) as e:
            raise self._unavailable(e) from e
        number_of_messages_available = int(response.get("Attributes", {}).get(approximate_number_of_messages_key, 0))
        return max(number_of_messages_available, 0)

    @typechecked()
    def receive_batch(self, max_number_of_messages: int, visibility_timeout: int, wait_time: int = 0) -> List[Dict[str, Any]]:
        """
        one receive call (the messages are not deleted, just hidden for the visibility timeout)

        :param max_number_of_messages: maximum number of messages to receive (capped at the AWS max per call)
        :param visibility_timeout: seconds the received messages are hidden from other receivers
        :param wait_time: long poll wait time in seconds (0 returns immediately)
        :return: list of (possibly zero) boto3 message dicts
        """
        try:
            response = self.client.receive_message(
                QueueUrl=self.get_queue_url(),
                AttributeNames=["All"],
                MessageAttributeNames=["All"],
                MaxNumberOfMessages=min(max_number_of_messages, aws_sqs_max_messages),
                VisibilityTimeout=visibility_timeout,
                WaitTimeSeconds=wait_time,
            )
        except (ClientError, BotoCoreError) as e:
            raise self._unavailable(e) from e
        return response.get("Messages", [])
