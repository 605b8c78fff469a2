"""
sqsinspect command line
"""

import argparse
import sys
from typing import List, Union

from balsa import Balsa, get_logger
from ismain import is_main

from .__version__ import __application_name__, __author__, __version__
from .config import InspectConfiguration, default_minimum_visibility_timeout, default_stall_limit, default_outfile, default_region, aws_sqs_max_messages
from .exceptions import QueueUnavailable
from .inspector import get_message_data
from .serialization import write_messages
from .sqs import SQSInspectAccess

log = get_logger(__application_name__)


def get_arguments(args: Union[List[str], None] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog=__application_name__, description="get (but do not delete) all messages in an SQS queue and write them to a JSON file, newest first")
    parser.add_argument("--sqs_queue_url", required=True, help="SQS queue URL (or queue name)")
    parser.add_argument("--aws_access_key", help="AWS access key ID")
    parser.add_argument("--aws_secret_key", help="AWS secret access key")
    parser.add_argument("--aws_session_token", help="AWS session token (temporary credentials only)")
    parser.add_argument("--aws_region", default=default_region, help=f"AWS region (default: {default_region})")
    parser.add_argument("--aws_profile", help="AWS profile name (instead of access key and secret key)")
    parser.add_argument("--sqs_messages_per_receive", type=int, default=aws_sqs_max_messages, help=f"max number of messages per receive, 1 - {aws_sqs_max_messages}")
    parser.add_argument(
        "--sqs_visibility_timeout",
        type=int,
        help="time in seconds that received messages are hidden in the queue (default: derived from the number of messages in the queue)",
    )
    parser.add_argument(
        "--sqs_minimum_visibility_timeout", type=int, default=default_minimum_visibility_timeout, help=f"minimum derived visibility timeout (default: {default_minimum_visibility_timeout})"
    )
    parser.add_argument("--stall_limit", type=int, default=default_stall_limit, help=f"stop after this many consecutive empty receives (default: {default_stall_limit})")
    parser.add_argument("--max_receive_calls", type=int, help="stop after this many receive calls (default: no limit)")
    parser.add_argument("--outfile", default=default_outfile, help=f"output JSON file (default: {default_outfile})")
    parser.add_argument("-v", "--verbose", action="store_true", help="verbose")
    parser.add_argument("--version", action="version", version=__version__)
    return parser.parse_args(args)


def get_configuration(arguments: argparse.Namespace) -> InspectConfiguration:
    return InspectConfiguration(
        queue=arguments.sqs_queue_url,
        region_name=arguments.aws_region,
        profile_name=arguments.aws_profile,
        aws_access_key_id=arguments.aws_access_key,
        aws_secret_access_key=arguments.aws_secret_key,
        aws_session_token=arguments.aws_session_token,
        messages_per_receive=arguments.sqs_messages_per_receive,
        visibility_timeout=arguments.sqs_visibility_timeout,
        minimum_visibility_timeout=arguments.sqs_minimum_visibility_timeout,
        stall_limit=arguments.stall_limit,
        max_receive_calls=arguments.max_receive_calls,
        outfile=arguments.outfile,
    )


def inspect(configuration: InspectConfiguration) -> int:
    """
    run an inspection and write the results

    :param configuration: inspection configuration
    :return: exit code (0 for success, including a drain that stopped early)
    """
    log.info(f"queue {configuration.queue}")
    try:
        access = SQSInspectAccess(configuration.queue, **configuration.aws_kwargs())
        result = get_message_data(access, configuration)
    except QueueUnavailable as e:
        log.error(f"{e} (no results written)")
        return 1

    if result.is_degraded:
        log.warning(f"got {len(result.messages)} of approximately {result.estimated_count} messages ({result.drain.status.value})")
    output_path = write_messages(result.messages, configuration.outfile)
    log.info(f'{len(result.messages)} messages stored to "{output_path.absolute()}"')
    return 0


def main(args: Union[List[str], None] = None) -> int:
    arguments = get_arguments(args)

    balsa = Balsa(__application_name__, __author__)
    balsa.verbose = arguments.verbose
    balsa.init_logger()

    try:
        configuration = get_configuration(arguments)
    except ValueError as e:
        log.error(f"invalid option : {e}")
        return 2

    return inspect(configuration)


if is_main():
    sys.exit(main())
