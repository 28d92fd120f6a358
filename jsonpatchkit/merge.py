"""JSON Merge Patch: applying and generating merge patches."""

from __future__ import annotations

import copy
from typing import Any

from .patch import compare
from .sorting import key_order, sorted_items

__all__ = ["merge_patch", "generate_merge_patch"]

_MISSING = object()


def _pop_key(obj: dict[str, Any], name: str) -> Any:
    wanted = key_order(name)
    for key in obj:
        if key_order(key) == wanted:
            return obj.pop(key)
    return _MISSING


def merge_patch(target: Any, patch: Any) -> Any:
    """Return ``target`` with the merge patch applied; ``target`` is left unchanged.

    A null member in the patch removes the member; keys match without
    regard to ASCII case, and changed members move to the end.
    """
    if not isinstance(patch, dict):
        return copy.deepcopy(patch)
    result = dict(target) if isinstance(target, dict) else {}
    for key, value in patch.items():
        current = _pop_key(result, key)
        if value is not None:
            result[key] = merge_patch(None if current is _MISSING else current, value)
    return result


def _diff(source: Any, target: Any) -> Any:
    if not (isinstance(source, dict) and isinstance(target, dict)):
        return copy.deepcopy(target)
    old, new = sorted_items(source), sorted_items(target)
    patch: dict[str, Any] = {}
    while old or new:
        if old and (not new or old[0][0] < new[0][0]):
            key, _ = old.pop(0)
            patch[key] = None
        elif new and (not old or old[0][0] > new[0][0]):
            key, value = new.pop(0)
            patch[key] = copy.deepcopy(value)
        else:
            (key, before), (_, after) = old.pop(0), new.pop(0)
            if not compare(before, after):
                change = _diff(before, after)
                if change is not _MISSING:
                    patch[key] = change
    return patch if patch else _MISSING


def generate_merge_patch(source: Any, target: Any) -> Any:
    """Return a merge patch turning ``source`` into ``target``.

    Returns None when two objects hold the same members.
    """
    patch = _diff(source, target)
    return None if patch is _MISSING else patch