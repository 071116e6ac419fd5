"""Configuration keys made of string and index parts.

A key such as ``cfg.v5.arr[0]`` is a sequence of partial keys: names,
separated by dots, and indices, written in square brackets. Any part that
reads as a non-negative integer is an index, so ``cfg.0`` means ``cfg[0]``.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from functools import reduce

PartialKey = str | int

_SEPARATORS = re.compile(r"[.\[\]]")
_MAX_INDEX = 2**64 - 1


def _parse_index(part: str) -> int | None:
    digits = part[1:] if part.startswith("+") else part
    if digits and digits.isascii() and digits.isdigit():
        index = int(digits)
        if index <= _MAX_INDEX:
            return index
    return None


def split_key(key: str | int) -> Iterator[PartialKey]:
    """Yield the partial keys of ``key``, skipping empty parts."""
    if isinstance(key, int):
        yield key
        return
    for part in _SEPARATORS.split(key):
        if not part:
            continue
        index = _parse_index(part)
        yield part if index is None else index


def join_partial(prefix: str, part: PartialKey) -> str:
    """Append one partial key to a normalized key."""
    if isinstance(part, int):
        return f"{prefix}[{part}]"
    return f"{prefix}.{part}" if prefix else part


def normalize_key(key: str | int) -> str:
    """Return the normalized text form of ``key``."""
    return reduce(join_partial, split_key(key), "")


class ConfigKey:
    """A key that grows and shrinks as nested values are read.

    ``push`` appends parts and returns a mark; passing that mark to ``pop``
    undoes the push. Pushes and pops must nest.
    """

    __slots__ = ("text", "_mark")

    def __init__(self) -> None:
        self.text = ""
        self._mark = 0

    def push(self, key: str | int) -> int:
        mark = self._mark
        self._mark = len(self.text)
        self.text = reduce(join_partial, split_key(key), self.text)
        return mark

    def pop(self, mark: int) -> None:
        self.text = self.text[: self._mark]
        self._mark = mark

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"ConfigKey({self.text!r})"


@dataclass
class PartialKeyCollector:
    """The child names and the array length found under one key."""

    str_keys: set[str] = field(default_factory=set)
    int_key: int | None = None

    def insert_int(self, key: int) -> None:
        """Record index ``key``; ``int_key`` becomes the array length."""
        if self.int_key is not None and self.int_key > key:
            return
        self.int_key = key + 1