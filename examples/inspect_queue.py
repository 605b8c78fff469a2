from ismain import is_main

from sqsinspect import SQSInspectAccess, InspectConfiguration, get_message_data, write_messages


def inspect_queue():
    configuration = InspectConfiguration("my-queue", profile_name="my-profile", stall_limit=5)
    sqs_access = SQSInspectAccess(configuration.queue, **configuration.aws_kwargs())
    result = get_message_data(sqs_access, configuration)
    for message in result.messages[:3]:
        print(message.sent_time, message.message_id, message.body)  # newest first
    if result.is_degraded:
        print(f"only got {len(result.messages)} of approximately {result.estimated_count} messages ({result.drain.status.value})")
    write_messages(result.messages, configuration.outfile)


if is_main():
    inspect_queue()
