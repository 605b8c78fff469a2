import os
from typing import Union, Any

from typeguard import typechecked

from boto3.session import Session
from botocore.credentials import Credentials

from .mock import is_mock, is_using_localstack

mock_region = "us-east-1"
localstack_region = "us-west-2"


def boto_error_to_string(boto_error) -> Union[str, None]:
    """
    Get the AWS error code (e.g. "AWS.SimpleQueueService.NonExistentQueue") from a boto error, or the error's string if it has no response.

    :param boto_error: botocore ClientError or BotoCoreError
    :return: error string
    """
    if (response := getattr(boto_error, "response", None)) is None:
        error_string = str(boto_error)
    else:
        if (response_error := response.get("Error")) is None:
            error_string = None
        else:
            error_string = response_error.get("Code")
    return error_string


class AWSAccess:
    @typechecked()
    def __init__(
        self,
        resource_name: Union[str, None] = None,
        profile_name: Union[str, None] = None,
        aws_access_key_id: Union[str, None] = None,
        aws_secret_access_key: Union[str, None] = None,
        aws_session_token: Union[str, None] = None,
        region_name: Union[str, None] = None,
    ):
        """
        AWSAccess - takes care of the boto3 session and client, plus moto mock and localstack support for testing.

        :param resource_name: AWS service name (e.g. sqs). Can be None if just testing the connection.

        # Provide either: profile name or access key ID/secret access key pair (with an optional session token for temporary credentials)

        :param profile_name: AWS profile name
        :param aws_access_key_id: AWS access key (required if secret_access_key given)
        :param aws_secret_access_key: AWS secret access key (required if access_key_id given)
        :param aws_session_token: AWS session token (only for temporary credentials)
        :param region_name: AWS region (may be optional - see AWS docs)
        """

        import boto3  # import here to facilitate mocking

        self.resource_name = resource_name
        self.profile_name = profile_name
        self.aws_access_key_id = aws_access_key_id
        self.aws_secret_access_key = aws_secret_access_key
        self.aws_session_token = aws_session_token
        self.region_name = region_name

        # string representation of AWS most recent error code
        self.most_recent_error = None  # type: Union[str, None]

        self._moto_mock = None
        self._aws_keys_save = {}

        # use keys in AWS config if not explicitly given
        # https://docs.aws.amazon.com/cli/latest/userguide/cli-config-files.html
        kwargs = {}
        for k in ["profile_name", "aws_access_key_id", "aws_secret_access_key", "aws_session_token", "region_name"]:
            if getattr(self, k) is not None:
                kwargs[k] = getattr(self, k)

        self.client = None  # type: Any
        if is_mock():
            # moto mock AWS
            for aws_key in ["AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY", "AWS_SECURITY_TOKEN", "AWS_SESSION_TOKEN"]:
                self._aws_keys_save[aws_key] = os.environ.get(aws_key)  # will be None if not set
                os.environ[aws_key] = "testing"

            from moto import mock_aws

            self._moto_mock = mock_aws()
            self._moto_mock.start()
            self.region_name = mock_region
            self.session = boto3.session.Session(region_name=self.region_name)
            if self.resource_name is not None:
                self.client = self.session.client(self.resource_name, region_name=self.region_name)  # type: ignore
        elif is_using_localstack():
            self.aws_access_key_id = "test"
            self.aws_secret_access_key = "test"
            self.region_name = localstack_region
            self.session = boto3.session.Session(aws_access_key_id=self.aws_access_key_id, aws_secret_access_key=self.aws_secret_access_key, region_name=self.region_name)
            if self.resource_name is not None:
                self.client = self.session.client(self.resource_name, endpoint_url=self._get_localstack_endpoint_url())  # type: ignore
        else:
            self.session = boto3.session.Session(**kwargs)
            if self.resource_name is not None:
                self.client = self.session.client(self.resource_name, config=self._get_config())  # type: ignore

    def _get_localstack_endpoint_url(self) -> str:
        endpoint_url = "http://localhost:4566"  # default localstack endpoint
        return endpoint_url

    def _get_config(self):
        from botocore.config import Config  # import here to facilitate mocking

        timeout = 5 * 60  # seconds
        return Config(connect_timeout=timeout, read_timeout=timeout, retries={"mode": "standard"})

    @typechecked()
    def get_region(self) -> Union[str, None]:
        """
        Get current selected AWS region

        :return: region string
        """
        return self.session.region_name

    def get_access_key(self) -> Union[str, None]:
        """
        Get current access key string

        :return: access key
        """
        _session = self.session
        assert isinstance(_session, Session)  # for mypy
        _credentials = _session.get_credentials()
        assert isinstance(_credentials, Credentials)  # for mypy
        access_key = _credentials.access_key
        return access_key

    def test(self) -> bool:
        """
        Basic connection/capability test

        :return: True if connection OK
        """

        services = self.session.get_available_services()  # boto3 will throw an error if there's an issue here
        if self.resource_name is not None and self.resource_name not in services:
            raise PermissionError(self.resource_name)  # we don't have permission to the specified service
        return True  # if we got here, we were successful

    def is_mocked(self) -> bool:
        """
        Return True if currently mocking the AWS interface (e.g. for testing).

        :return: True if mocked
        """
        return self._moto_mock is not None

    def __del__(self):
        if self._moto_mock is not None:
            # if mocking, put everything back

            for aws_key, value in self._aws_keys_save.items():
                if value is None:
                    os.environ.pop(aws_key, None)
                else:
                    os.environ[aws_key] = value

            self._moto_mock.stop()
            self._moto_mock = None  # mock is "done"
