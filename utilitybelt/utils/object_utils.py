"""
Object utilities for mappings and lists of records.
"""
from collections.abc import Iterable, Mapping
from typing import Any


def is_object_empty(obj) -> bool:
    """
    True for None and for objects without keys or items.

    Examples:
        >>> is_object_empty({}), is_object_empty(None), is_object_empty({"a": 1})
        (True, True, False)
    """
    if obj is None:
        return True

    if hasattr(obj, "__len__"):
        return len(obj) == 0

    return not vars(obj) if hasattr(obj, "__dict__") else False


def count_value_in_objects(objects: Iterable[Mapping], key_name: str, value_to_count: Any) -> int:
    """
    Count the records whose key_name equals value_to_count.

    Examples:
        >>> count_value_in_objects([{"status": "paid"}, {"status": "due"}, {"status": "paid"}], "status", "paid")
        2
    """
    return sum(1 for obj in objects if isinstance(obj, Mapping) and key_name in obj and obj[key_name] == value_to_count)
