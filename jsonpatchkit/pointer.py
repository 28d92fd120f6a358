"""JSON Pointer lookup and construction over plain Python JSON values."""

from __future__ import annotations

import re
import string
from typing import Any

__all__ = [
    "PointerError",
    "encode_token",
    "decode_token",
    "find_pointer",
    "get_pointer",
    "resolve_pointer",
]

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_BAD_ESCAPE = re.compile(r"~(?![01])")
_ARRAY_INDEX = re.compile(r"[0-9]*")
_INDEX_LIMIT = 2**31 - 1
_MISSING = object()


class PointerError(LookupError):
    """Raised when a JSON pointer does not lead to a value."""

    def __init__(self, pointer: str) -> None:
        super().__init__(f"no value at pointer {pointer!r}")
        self.pointer = pointer


def _fold(text: str) -> str:
    return text.translate(_ASCII_LOWER)


def encode_token(token: str) -> str:
    """Escape a single reference token: '~' becomes '~0', '/' becomes '~1'."""
    return token.replace("~", "~0").replace("/", "~1")


def decode_token(token: str) -> str:
    """Undo the escaping of a reference token.

    '~0' becomes '~'; a '~' followed by anything else becomes '/'.
    """
    decoded = []
    chars = iter(token)
    for char in chars:
        if char == "~":
            char = "~" if next(chars, "") == "0" else "/"
        decoded.append(char)
    return "".join(decoded)


def _token_matches(key: str, token: str) -> bool:
    """Compare an object key with an escaped token, ignoring ASCII case."""
    if _BAD_ESCAPE.search(token):
        return False
    return _fold(key) == _fold(decode_token(token))


def find_pointer(root: Any, target: Any) -> str | None:
    """Return the pointer from ``root`` to the very object ``target``.

    Objects are matched by identity. Returns None when ``target`` is not
    inside ``root``.
    """
    if root is target:
        return ""
    if isinstance(root, list):
        children = ((str(index), child) for index, child in enumerate(root))
    elif isinstance(root, dict):
        children = ((encode_token(key), child) for key, child in root.items())
    else:
        return None
    for token, child in children:
        found = find_pointer(child, target)
        if found is not None:
            return f"/{token}{found}"
    return None


def _lookup(root: Any, pointer: str) -> Any:
    node = root
    rest = pointer
    while rest.startswith("/"):
        token, separator, remainder = rest[1:].partition("/")
        rest = separator + remainder
        if isinstance(node, list):
            if not _ARRAY_INDEX.fullmatch(token):
                return _MISSING
            index = int(token) if token else 0
            if index > _INDEX_LIMIT or index >= len(node):
                return _MISSING
            node = node[index]
        elif isinstance(node, dict):
            node = next(
                (value for key, value in node.items() if _token_matches(key, token)),
                _MISSING,
            )
            if node is _MISSING:
                return _MISSING
        else:
            return _MISSING
    return node


def resolve_pointer(root: Any, pointer: str) -> Any:
    """Return the value ``pointer`` refers to, or raise PointerError.

    Object keys are matched without regard to ASCII case.
    """
    found = _lookup(root, pointer)
    if found is _MISSING:
        raise PointerError(pointer)
    return found


def get_pointer(root: Any, pointer: str) -> Any:
    """Return the value ``pointer`` refers to, or None when there is none."""
    found = _lookup(root, pointer)
    return None if found is _MISSING else found