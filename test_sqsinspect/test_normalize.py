from sqsinspect import normalize_message, normalize_messages, unknown_message_id, epoch_ms_to_iso, parse_body

from test_sqsinspect import make_raw_message

epoch_iso = "1970-01-01T00:00:00.000Z"


def test_normalize_message():
    message = make_raw_message(1, 1635097134524, '{"a": 1, "b": [1, 2]}')
    message["MessageAttributes"] = {"color": {"StringValue": "blue", "DataType": "String"}}
    normalized = normalize_message(message)
    assert normalized.message_id == "id-1"
    assert normalized.sent_time_epoch == 1635097134524
    assert normalized.sent_time == "2021-10-24T17:38:54.524Z"
    assert normalized.first_receive_time == "2021-10-24T17:38:55.524Z"
    assert normalized.attributes == {"color": {"StringValue": "blue", "DataType": "String"}}
    assert normalized.body == {"a": 1, "b": [1, 2]}


def test_normalize_message_not_json():
    body = "hello, not JSON {"
    normalized = normalize_message(make_raw_message(2, 1635097134524, body))
    assert normalized.body == body  # exactly the original


def test_normalize_message_json_scalar():
    assert normalize_message(make_raw_message(3, 1635097134524, "42")).body == 42
    assert normalize_message(make_raw_message(3, 1635097134524, '"s"')).body == "s"


def test_normalize_message_missing_fields():
    normalized = normalize_message({"Body": "x"})
    assert normalized.message_id == unknown_message_id
    assert normalized.sent_time_epoch == 0
    assert normalized.sent_time == epoch_iso
    assert normalized.first_receive_time == epoch_iso
    assert normalized.attributes == {}
    assert normalized.body == "x"


def test_normalize_message_empty():
    normalized = normalize_message({})
    assert normalized.message_id == unknown_message_id
    assert normalized.body == ""


def test_normalize_message_bad_timestamps():
    message = make_raw_message(4)
    message["Attributes"] = {"SentTimestamp": "not a number", "ApproximateFirstReceiveTimestamp": str(10**20)}
    normalized = normalize_message(message)
    assert normalized.sent_time_epoch == 0
    assert normalized.sent_time == epoch_iso
    assert normalized.first_receive_time == epoch_iso


def test_normalize_messages_one_to_one():
    messages = [make_raw_message(i, 1635097134524 + i) for i in range(7)]
    messages.append(make_raw_message(7, 1635097134524, "not json"))
    normalized = normalize_messages(messages)
    assert len(normalized) == len(messages)
    assert [n.message_id for n in normalized] == [m["MessageId"] for m in messages]


def test_epoch_ms_to_iso():
    assert epoch_ms_to_iso(0) == epoch_iso
    assert epoch_ms_to_iso(1000) == "1970-01-01T00:00:01.000Z"


def test_parse_body():
    assert parse_body(None) == ""
    assert parse_body("{}") == {}
    assert parse_body("[1, 2]") == [1, 2]
    assert parse_body("{'single': 'quotes'}") == "{'single': 'quotes'}"


def test_to_dict():
    d = normalize_message(make_raw_message(5, 1635097134524)).to_dict()
    assert list(d.keys()) == ["messageId", "sentTime", "sentTimeEpoch", "firstReceiveTime", "attributes", "body"]
    assert d["body"] == {"index": 5}


def test_normalize_message_deeply_nested():
    body = "[" * 100000 + "]" * 100000  # too deep for the JSON decoder
    normalized = normalize_message(make_raw_message(6, 1635097134524, body))
    assert normalized.body == body
    assert normalized.message_id == "id-6"


def test_normalize_message_non_finite_numbers():
    for body in ["1e999", "NaN", "Infinity", "-Infinity", '{"a": 1e999}', "[NaN]"]:
        assert normalize_message(make_raw_message(7, 1635097134524, body)).body == body  # kept as the original string
    assert normalize_message(make_raw_message(8, 1635097134524, '{"a": 1.5}')).body == {"a": 1.5}
