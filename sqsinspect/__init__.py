from .__version__ import __application_name__, __version__, __author__, __title__
from .mock import use_moto_mock_env_var, is_mock, use_localstack_env_var, is_using_localstack
from .exceptions import SQSInspectException, QueueUnavailable
from .aws import AWSAccess, boto_error_to_string
from .config import InspectConfiguration, aws_sqs_max_messages, aws_sqs_max_visibility_timeout
from .sqs import SQSInspectAccess
from .drain import MessageDrainer, DrainResult, DrainStatus
from .normalize import NormalizedMessage, normalize_message, normalize_messages, order_messages, epoch_ms_to_iso, parse_body, unknown_message_id
from .serialization import convert_serializable_special_cases, messages_to_json, write_messages
from .inspector import get_message_data, InspectionResult
