"""Ordering of object members by key, ignoring ASCII case."""

from __future__ import annotations

import string
from typing import Any

__all__ = ["key_order", "sort_object", "sorted_items"]

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def key_order(key: str) -> str:
    """Return the value that object keys are ordered by."""
    return key.translate(_ASCII_LOWER)


def _is_ascending(items: list[tuple[str, Any]]) -> bool:
    return all(
        key_order(left) < key_order(right)
        for (left, _), (right, _) in zip(items, items[1:])
    )


def _merge_sort(items: list[tuple[str, Any]]) -> list[tuple[str, Any]]:
    if len(items) < 2 or _is_ascending(items):
        return items
    middle = (len(items) + 1) // 2
    first = _merge_sort(items[:middle])
    second = _merge_sort(items[middle:])
    merged = []
    while first and second:
        # Ties are taken from the second half first.
        if key_order(first[0][0]) < key_order(second[0][0]):
            merged.append(first.pop(0))
        else:
            merged.append(second.pop(0))
    return merged + first + second


def sorted_items(obj: dict[str, Any]) -> list[tuple[str, Any]]:
    """Return the members of ``obj`` as (key, value) pairs in key order."""
    if not isinstance(obj, dict):
        raise TypeError(f"expected a JSON object, got {type(obj).__name__}")
    return _merge_sort(list(obj.items()))


def sort_object(obj: dict[str, Any]) -> None:
    """Reorder the members of ``obj`` in place by key."""
    items = sorted_items(obj)
    obj.clear()
    obj.update(items)