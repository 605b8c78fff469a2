from typing import List, Union, Dict, Any

from sqsinspect import QueueUnavailable

fake_queue_url = "https://sqs.us-east-1.amazonaws.com/123456789012/fake"


def make_raw_message(index: int, sent_timestamp: Union[int, None] = None, body: Union[str, None] = None) -> Dict[str, Any]:
    """
    make a message dict like boto3's receive_message returns
    """
    message = {"MessageId": f"id-{index}", "ReceiptHandle": f"handle-{index}", "Body": f'{{"index": {index}}}' if body is None else body, "Attributes": {}}  # type: Dict[str, Any]
    if sent_timestamp is not None:
        message["Attributes"]["SentTimestamp"] = str(sent_timestamp)
        message["Attributes"]["ApproximateFirstReceiveTimestamp"] = str(sent_timestamp + 1000)
    return message


class FakeQueueAccess:
    """
    Stands in for SQSInspectAccess, returning batches of the given sizes (then empty batches).
    """

    def __init__(self, batch_sizes: List[int], messages_available: int = 0, fail_on_call: Union[int, None] = None):
        self.batch_sizes = list(batch_sizes)
        self._messages_available = messages_available
        self.fail_on_call = fail_on_call
        self.requests = []  # type: List[tuple]
        self.sent = 0

    def messages_available(self) -> int:
        return self._messages_available

    def receive_batch(self, max_number_of_messages: int, visibility_timeout: int, wait_time: int = 0) -> List[Dict[str, Any]]:
        self.requests.append((max_number_of_messages, visibility_timeout, wait_time))
        if self.fail_on_call is not None and len(self.requests) >= self.fail_on_call:
            raise QueueUnavailable(fake_queue_url, "network fault")
        batch_size = min(self.batch_sizes.pop(0), max_number_of_messages) if len(self.batch_sizes) > 0 else 0
        messages = [make_raw_message(self.sent + i, 1600000000000 + self.sent + i) for i in range(batch_size)]
        self.sent += batch_size
        return messages
