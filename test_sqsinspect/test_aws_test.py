from sqsinspect import AWSAccess, SQSInspectAccess, is_mock

from test_sqsinspect import test_sqsinspect_str


def test_aws_test():

    # test the test() method (basic AWS connection)
    assert AWSAccess().test()
    assert SQSInspectAccess(test_sqsinspect_str).test()


def test_get_region_and_access_key():
    sqs_access = SQSInspectAccess(test_sqsinspect_str, region_name="eu-north-1")
    region = sqs_access.get_region()
    access_key = sqs_access.get_access_key()
    print(f"{region=},{access_key=}")
    if is_mock():
        assert region == "us-east-1"  # mock always uses the same region
        assert access_key == "testing"
    else:
        assert region == "eu-north-1"
        assert len(access_key) >= 16
