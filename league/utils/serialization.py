"""
snake_case <-> camelCase translation at the JSON API boundary.

Python code and the database use snake_case; API clients send and receive
camelCase. Only this module knows about the second form.
"""

import dataclasses
import re

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_camel(name):
    """bowler_id -> bowlerId"""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def to_snake(name):
    """bowlerId -> bowler_id"""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def camelize(value):
    """Recursively camelCase the keys of dicts (and dataclass records)."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        value = record_to_dict(value)
    if isinstance(value, dict):
        return {to_camel(str(k)): camelize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [camelize(v) for v in value]
    return value


def snakeify(value):
    """Recursively snake_case the keys of an incoming JSON payload."""
    if isinstance(value, dict):
        return {to_snake(str(k)): snakeify(v) for k, v in value.items()}
    if isinstance(value, list):
        return [snakeify(v) for v in value]
    return value


def record_to_dict(record):
    """Dataclass record to a dict, including read-only properties."""
    data = dataclasses.asdict(record)
    for name in ("series_total", "games_entered"):
        if hasattr(type(record), name):
            data[name] = getattr(record, name)
    return data
