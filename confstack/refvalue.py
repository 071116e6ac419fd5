"""Values that follow their configuration when it is refreshed."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any, Generic, Protocol, TypeVar

from confstack.errors import RefValueRecursiveError, TooManyInstances

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_REF_LIMIT = 1024


class _Getter(Protocol):
    def get(self, key: str, target: Any) -> Any: ...


class RefValue(Generic[T]):
    """A value read from one key that is replaced whenever the
    configuration it came from is refreshed.

    Write ``RefValue[target]`` as a target type to read one. A refreshable
    value cannot hold another refreshable value.
    """

    __slots__ = ("key", "target", "_value", "_lock")

    def __init__(self, key: str, value: T, target: Any) -> None:
        self.key = key
        self.target = target
        self._value = value
        self._lock = threading.Lock()

    def get(self) -> T:
        """Return the current value."""
        with self._lock:
            return self._value

    def use(self, func: Callable[[T], R]) -> R:
        """Call ``func`` with the current value while holding its lock."""
        with self._lock:
            return func(self._value)

    def refresh(self, config: _Getter) -> None:
        """Read this value's key from ``config`` again and keep the result."""
        value = config.get(self.key, self.target)
        with self._lock:
            self._value = value

    def __repr__(self) -> str:
        return f"RefValue({self.key!r}, {self.get()!r})"


class Refresher:
    """Keeps every refreshable value read from one configuration."""

    def __init__(self, limit: int = DEFAULT_REF_LIMIT) -> None:
        self.limit = limit
        self._refs: list[RefValue[Any]] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._refs)

    def push(self, ref: RefValue[Any]) -> None:
        """Track ``ref``.

        Raises :class:`RefValueRecursiveError` when called while a refresh
        is running, and :class:`TooManyInstances` past the limit.
        """
        if not self._lock.acquire(blocking=False):
            raise RefValueRecursiveError()
        try:
            if len(self._refs) >= self.limit:
                raise TooManyInstances(self.limit)
            self._refs.append(ref)
        finally:
            self._lock.release()

    def refresh(self, config: _Getter) -> None:
        """Refresh every tracked value from ``config``, in the order they came."""
        with self._lock:
            for ref in self._refs:
                ref.refresh(config)