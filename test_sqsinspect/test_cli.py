import json

import pytest

from sqsinspect import SQSInspectAccess, QueueUnavailable, aws
from sqsinspect.cli import main

from test_sqsinspect import test_sqsinspect_str, temp_dir


def test_cli():
    name = f"{test_sqsinspect_str}_cli"
    queue = SQSInspectAccess(name)
    queue_url = queue.create_queue()
    for count in range(0, 3):
        queue.send(f'{{"count": {count}}}')

    outfile = temp_dir / "test_cli.json"
    outfile.unlink(missing_ok=True)
    assert main(["--sqs_queue_url", queue_url, "--outfile", str(outfile)]) == 0
    written = json.loads(outfile.read_text())
    assert sorted(m["body"]["count"] for m in written) == [0, 1, 2]
    queue.delete_queue()


def test_cli_queue_unavailable():
    outfile = temp_dir / "test_cli_queue_unavailable.json"
    outfile.unlink(missing_ok=True)
    assert main(["--sqs_queue_url", f"{test_sqsinspect_str}_cli_does_not_exist", "--outfile", str(outfile)]) == 1
    assert not outfile.exists()  # hard failure - nothing written


def test_cli_invalid_option():
    outfile = temp_dir / "test_cli_invalid_option.json"
    assert main(["--sqs_queue_url", test_sqsinspect_str, "--sqs_messages_per_receive", "11", "--outfile", str(outfile)]) == 2
    assert not outfile.exists()


def test_cli_profile_not_found(monkeypatch):
    # use the real (unmocked) boto3 session so the profile is actually looked up
    monkeypatch.setattr(aws, "is_mock", lambda: False)
    monkeypatch.setattr(aws, "is_using_localstack", lambda: False)
    outfile = temp_dir / "test_cli_profile_not_found.json"
    outfile.unlink(missing_ok=True)
    assert main(["--sqs_queue_url", test_sqsinspect_str, "--aws_profile", "IAmNotAProfile", "--outfile", str(outfile)]) == 1
    assert not outfile.exists()


def test_sqs_access_profile_not_found(monkeypatch):
    monkeypatch.setattr(aws, "is_mock", lambda: False)
    monkeypatch.setattr(aws, "is_using_localstack", lambda: False)
    with pytest.raises(QueueUnavailable) as e:
        SQSInspectAccess(test_sqsinspect_str, profile_name="IAmNotAProfile")
    assert e.value.queue == test_sqsinspect_str
