from datetime import datetime
from typing import Any


PRIMITIVE_TYPES = (str, int, float, bool, type(None))


def camel_case(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)


def serialize(obj: Any):
    """
    Serialize domain objects into JSON-compatible structures.
    Keys come out camelCase, datetimes as ISO-8601 strings.
    """

    if isinstance(obj, PRIMITIVE_TYPES):
        return obj

    if isinstance(obj, datetime):
        return obj.isoformat()

    if isinstance(obj, (list, tuple)):
        return [serialize(item) for item in obj]

    if isinstance(obj, dict):
        return {camel_case(str(k)): serialize(v) for k, v in obj.items()}

    # dataclass-like objects
    if hasattr(obj, "__dict__"):
        return {
            camel_case(key): serialize(value)
            for key, value in obj.__dict__.items()
            if not key.startswith("_")
        }

    return str(obj)


def serialize_conversation(conversation, include_messages: bool = False) -> dict:
    data = serialize(conversation)
    if not include_messages:
        data.pop("messages", None)
    else:
        data.pop("lastMessage", None)
    return data
