import decimal
import json
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Iterable, Union

from typeguard import typechecked

from .normalize import NormalizedMessage


def convert_serializable_special_cases(o):
    """
    Convert an object to a type that is JSON serializable. This only handles the cases that need converting (e.g. binary message attribute values).
    The json module handles all the rest. Use with json.dump or json.dumps with argument default=convert_serializable_special_cases.

    :param o: object to be converted to a type that is serializable
    :return: a serializable representation
    """

    if isinstance(o, Enum):
        serializable_representation = o.name
    elif isinstance(o, Decimal):
        try:
            is_int = o % 1 == 0  # doesn't work for numbers greater than decimal.MAX_EMAX
        except decimal.InvalidOperation:
            is_int = False  # numbers larger than decimal.MAX_EMAX will get a decimal.DivisionImpossible, so we'll just have to represent those as a float

        if is_int:
            # if representable with an integer, use an integer
            serializable_representation = int(o)
        else:
            # not representable with an integer so use a float
            serializable_representation = float(o)
    elif isinstance(o, (bytes, bytearray)):
        serializable_representation = str(o)
    elif isinstance(o, (set, frozenset)):
        serializable_representation = sorted(o, key=str)
    else:
        serializable_representation = str(o)
    return serializable_representation


@typechecked()
def messages_to_json(messages: Iterable[NormalizedMessage]) -> str:
    """
    render normalized messages as a JSON array string

    :param messages: normalized messages (already ordered)
    :return: JSON string
    """
    return json.dumps([m.to_dict() for m in messages], indent=2, default=convert_serializable_special_cases, allow_nan=False)


@typechecked()
def write_messages(messages: Iterable[NormalizedMessage], file_path: Union[Path, str]) -> Path:
    """
    write normalized messages to a JSON file

    :param messages: normalized messages (already ordered)
    :param file_path: output file path
    :return: output file path
    """
    file_path = Path(file_path)
    json_string = messages_to_json(messages)  # render before opening so a failure doesn't leave a partial file
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(json_string, encoding="utf-8")
    return file_path
