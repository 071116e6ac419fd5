"""An in-memory source that stores values under normalized keys."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from confstack.key import (
    ConfigKey,
    PartialKey,
    PartialKeyCollector,
    join_partial,
    normalize_key,
    split_key,
)
from confstack.source import ConfigSource

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1

Converter = Callable[[Any, "ConfigSourceBuilder"], None]


def _stored(value: Any) -> Any:
    """Keep integers in the 64-bit signed range; larger ones become text."""
    if (
        isinstance(value, int)
        and not isinstance(value, bool)
        and not _I64_MIN <= value <= _I64_MAX
    ):
        return str(value)
    return value


def _key_text(key: str | int | ConfigKey) -> str:
    return key.text if isinstance(key, ConfigKey) else normalize_key(key)


@dataclass
class _HashValue:
    sub_str: set[str] = field(default_factory=set)
    sub_int: int | None = None
    value: Any = None

    def offer(self, value: Any) -> None:
        if self.value is None:
            self.value = value

    def add_child(self, part: PartialKey) -> None:
        if isinstance(part, int):
            if self.sub_int is None or self.sub_int < part:
                self.sub_int = part
        else:
            self.sub_str.add(part)


class ConfigSourceBuilder:
    """Writes values into a source, tracking the current key prefix.

    The first value written under a key wins; later writes are ignored.
    ``count`` is the number of values offered so far.
    """

    def __init__(self, entries: dict[str, _HashValue]) -> None:
        self._entries = entries
        self._stack: list[str] = []
        self.count = 0

    def _current(self) -> str:
        return self._stack[-1] if self._stack else ""

    def _entry(self, key: str) -> _HashValue:
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = _HashValue()
        return entry

    @contextmanager
    def _scope(self, key: str | int) -> Iterator[None]:
        current = self._current()
        for part in split_key(key):
            self._entry(current).add_child(part)
            current = join_partial(current, part)
        self._stack.append(current)
        try:
            yield
        finally:
            self._stack.pop()

    def set(self, key: str | int, value: Any) -> None:
        """Write ``value`` under ``key`` relative to the current prefix."""
        with self._scope(key):
            self.insert(value)

    def insert(self, value: Any) -> None:
        """Write ``value`` at the current prefix."""
        self.count += 1
        self._entry(self._current()).offer(_stored(value))

    def insert_map(
        self,
        items: Mapping[str, Any] | Iterable[tuple[str, Any]],
        convert: Converter,
    ) -> None:
        """Write each ``(key, item)`` by calling ``convert(item, self)`` under its key."""
        pairs = items.items() if isinstance(items, Mapping) else items
        for key, item in pairs:
            with self._scope(key):
                convert(item, self)

    def insert_array(self, items: Iterable[Any], convert: Converter) -> None:
        """Write each item by calling ``convert(item, self)`` under its index."""
        for index, item in enumerate(items):
            with self._scope(index):
                convert(item, self)


class HashSource(ConfigSource):
    """A source holding values in a dictionary of normalized keys."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.entries: dict[str, _HashValue] = {}

    def __len__(self) -> int:
        return len(self.entries)

    def set(self, key: str | int, value: Any) -> HashSource:
        """Write ``value`` under ``key`` and return this source."""
        self.prefixed().set(key, value)
        return self

    def prefixed(self) -> ConfigSourceBuilder:
        """Return a builder writing into this source from the root."""
        return ConfigSourceBuilder(self.entries)

    def get_value(self, key: str | int | ConfigKey) -> Any:
        """Return the value stored under ``key``, or ``None``."""
        entry = self.entries.get(_key_text(key))
        return None if entry is None else entry.value

    def collect_keys(self, key: str | int | ConfigKey) -> PartialKeyCollector:
        """Return the child names and array length found under ``key``."""
        collector = PartialKeyCollector()
        entry = self.entries.get(_key_text(key))
        if entry is not None:
            collector.str_keys.update(entry.sub_str)
            if entry.sub_int is not None:
                collector.insert_int(entry.sub_int)
        return collector

    def load(self, builder: ConfigSourceBuilder) -> None:
        for key, entry in self.entries.items():
            if entry.value is not None:
                builder.set(key, entry.value)