"""JSON Patch: comparing values, applying operations and generating patches."""

from __future__ import annotations

import copy
import re
from enum import Enum
from typing import Any

from .pointer import PointerError, decode_token, encode_token, resolve_pointer
from .sorting import key_order, sorted_items

__all__ = [
    "PatchError",
    "PatchTestFailed",
    "compare",
    "apply_patch",
    "apply_patches",
    "add_patch",
    "generate_patches",
]

_MISSING = object()
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class PatchError(ValueError):
    """Raised when a patch is malformed or cannot be applied."""


class PatchTestFailed(PatchError):
    """Raised when a 'test' operation finds a different value."""

    def __init__(self, path: str) -> None:
        super().__init__(f"test failed at {path!r}")
        self.path = path


class _Op(Enum):
    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    MOVE = "move"
    COPY = "copy"
    TEST = "test"


def _kind(value: Any) -> str:
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    raise TypeError(f"not a JSON value: {type(value).__name__}")


def compare(a: Any, b: Any) -> bool:
    """Return True when two JSON values are equal.

    Object members are compared in key order and keys match without
    regard to ASCII case; true and false are different kinds.
    """
    kind = _kind(a)
    if kind != _kind(b):
        return False
    if kind in ("number", "string"):
        return a == b
    if kind == "array":
        return len(a) == len(b) and all(compare(x, y) for x, y in zip(a, b))
    if kind == "object":
        left, right = sorted_items(a), sorted_items(b)
        return len(left) == len(right) and all(
            key_order(left_key) == key_order(right_key) and compare(left_value, right_value)
            for (left_key, left_value), (right_key, right_value) in zip(left, right)
        )
    return True


def _member(obj: Any, name: str) -> Any:
    """Return the first member whose key matches ``name`` ignoring ASCII case."""
    if not isinstance(obj, dict):
        return _MISSING
    wanted = key_order(name)
    return next((value for key, value in obj.items() if key_order(key) == wanted), _MISSING)


def _pop_member(obj: dict[str, Any], name: str) -> Any:
    wanted = key_order(name)
    for key in obj:
        if key_order(key) == wanted:
            return obj.pop(key)
    return _MISSING


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _locate(document: Any, pointer: str) -> Any:
    try:
        return resolve_pointer(document, pointer)
    except PointerError:
        return _MISSING


def _detach(document: Any, path: str) -> Any:
    """Remove and return the value at ``path``, or _MISSING if there is none."""
    parent_path, separator, child = path.rpartition("/")
    if not separator:
        return _MISSING
    parent = _locate(document, parent_path)
    child = decode_token(child)
    if isinstance(parent, list):
        index = _atoi(child)
        if 0 <= index < len(parent):
            return parent.pop(index)
    elif isinstance(parent, dict):
        return _pop_member(parent, child)
    return _MISSING


def _insert(document: Any, path: str, value: Any) -> None:
    parent_path, separator, child = path.rpartition("/")
    parent = _locate(document, parent_path)
    if not separator or parent is _MISSING:
        raise PatchError(f"no place to add a value at {path!r}")
    child = decode_token(child)
    if isinstance(parent, list):
        if child == "-":
            parent.append(value)
        else:
            parent.insert(max(_atoi(child), 0), value)
    elif isinstance(parent, dict):
        _pop_member(parent, child)
        parent[child] = value


def _operation(op: Any) -> _Op:
    if isinstance(op, str):
        try:
            return _Op(op)
        except ValueError:
            pass
    raise PatchError(f"unknown operation {op!r}")


def _text(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise PatchError(f"{name!r} must be a string")
    return value


def apply_patch(document: Any, patch: dict[str, Any]) -> None:
    """Apply one patch operation to ``document`` in place."""
    op = _member(patch, "op")
    path = _member(patch, "path")
    if op is _MISSING or path is _MISSING:
        raise PatchError("a patch needs both 'op' and 'path'")
    operation = _operation(op)
    path = _text(path, "path")

    if operation is _Op.TEST:
        found = _locate(document, path)
        expected = _member(patch, "value")
        if found is _MISSING or expected is _MISSING or not compare(found, expected):
            raise PatchTestFailed(path)
        return

    if operation in (_Op.REMOVE, _Op.REPLACE):
        _detach(document, path)
        if operation is _Op.REMOVE:
            return

    if operation in (_Op.MOVE, _Op.COPY):
        source = _member(patch, "from")
        if source is _MISSING:
            raise PatchError(f"{operation.value!r} needs 'from'")
        source = _text(source, "from")
        if operation is _Op.MOVE:
            value = _detach(document, source)
        else:
            value = _locate(document, source)
        if value is _MISSING:
            raise PatchError(f"no value at 'from' pointer {source!r}")
        if operation is _Op.COPY:
            value = copy.deepcopy(value)
    else:
        value = _member(patch, "value")
        if value is _MISSING:
            raise PatchError(f"{operation.value!r} needs 'value'")
        value = copy.deepcopy(value)

    _insert(document, path, value)


def apply_patches(document: Any, patches: list[dict[str, Any]]) -> None:
    """Apply a list of patch operations to ``document`` in place, in order.

    Operations applied before a failing one stay applied.
    """
    if not isinstance(patches, list):
        raise PatchError("patches must be a JSON array")
    for patch in patches:
        apply_patch(document, patch)


def add_patch(patches: list[dict[str, Any]], op: str, path: str, value: Any = _MISSING) -> None:
    """Append an operation to ``patches``; ``value`` is copied when given."""
    patch: dict[str, Any] = {"op": op, "path": path}
    if value is not _MISSING:
        patch["value"] = copy.deepcopy(value)
    patches.append(patch)


def _diff(patches: list[dict[str, Any]], path: str, source: Any, target: Any) -> None:
    kind = _kind(source)
    if kind != _kind(target):
        add_patch(patches, "replace", path, target)
        return
    if kind in ("number", "string"):
        if source != target:
            add_patch(patches, "replace", path, target)
    elif kind == "array":
        common = min(len(source), len(target))
        for index in range(common):
            _diff(patches, f"{path}/{index}", source[index], target[index])
        for index in range(common, len(source)):
            add_patch(patches, "remove", f"{path}/{index}")
        for item in target[common:]:
            add_patch(patches, "add", f"{path}/-", item)
    elif kind == "object":
        old, new = sorted_items(source), sorted_items(target)
        while old or new:
            if old and (not new or key_order(old[0][0]) < key_order(new[0][0])):
                key, _ = old.pop(0)
                add_patch(patches, "remove", f"{path}/{encode_token(key)}")
            elif new and (not old or key_order(old[0][0]) > key_order(new[0][0])):
                key, value = new.pop(0)
                add_patch(patches, "add", f"{path}/{encode_token(key)}", value)
            else:
                (key, before), (_, after) = old.pop(0), new.pop(0)
                _diff(patches, f"{path}/{encode_token(key)}", before, after)


def generate_patches(source: Any, target: Any) -> list[dict[str, Any]]:
    """Return the patch operations that turn ``source`` into ``target``."""
    patches: list[dict[str, Any]] = []
    _diff(patches, "", source, target)
    return patches