import pytest

from sqsinspect import SQSInspectAccess, QueueUnavailable, is_mock

from test_sqsinspect import test_sqsinspect_str


def test_sqs_messages_available():
    queue = SQSInspectAccess(f"{test_sqsinspect_str}_available")
    queue.create_queue()
    assert queue.messages_available() == 0
    for count in range(1, 4):
        queue.send(str(count))
    if is_mock():
        assert queue.messages_available() == 3  # real AWS is only eventually consistent
    queue.delete_queue()


def test_sqs_queue_url():
    name = f"{test_sqsinspect_str}_url"
    queue = SQSInspectAccess(name)
    queue_url = queue.create_queue()
    assert queue_url.endswith(name)
    assert queue.get_queue_url() == queue_url

    by_url = SQSInspectAccess(queue_url)
    assert by_url.queue_url == queue_url  # nothing to resolve
    assert by_url.messages_available() == 0
    queue.delete_queue()


def test_sqs_receive_batch():
    queue = SQSInspectAccess(f"{test_sqsinspect_str}_receive_batch")
    queue.create_queue()
    for count in range(0, 4):
        queue.send(f'{{"count": {count}}}', {"color": {"DataType": "String", "StringValue": "blue"}})

    received = []
    while len(received) < 4 and len(messages := queue.receive_batch(10, 30)) > 0:
        received.extend(messages)
    assert len(received) == 4
    for message in received:
        assert "SentTimestamp" in message["Attributes"]
        assert message["MessageAttributes"]["color"]["StringValue"] == "blue"

    assert len(queue.receive_batch(10, 30)) == 0  # all hidden by the visibility timeout
    queue.delete_queue()


def test_sqs_queue_does_not_exist():
    queue = SQSInspectAccess(f"{test_sqsinspect_str}_does_not_exist")
    with pytest.raises(QueueUnavailable) as e:
        queue.messages_available()
    assert e.value.queue == f"{test_sqsinspect_str}_does_not_exist"
    assert queue.most_recent_error is not None


def test_sqs_receive_deleted_queue():
    queue = SQSInspectAccess(f"{test_sqsinspect_str}_deleted")
    queue.create_queue()
    queue.delete_queue()
    with pytest.raises(QueueUnavailable):
        queue.receive_batch(10, 30)
