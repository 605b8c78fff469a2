import os
import pytest

from sqsinspect import is_mock, use_moto_mock_env_var, is_using_localstack

from test_sqsinspect import temp_dir

mock_env_var = os.environ.get(use_moto_mock_env_var)

if mock_env_var is None:
    # facilitates CI by using mocking by default
    os.environ[use_moto_mock_env_var] = "1"


@pytest.fixture(scope="session", autouse=True)
def session_fixture():
    temp_dir.mkdir(parents=True, exist_ok=True)
    print(f"{is_mock()=},{is_using_localstack()=}")
