"""Errors raised while loading and reading configuration."""

from __future__ import annotations

from pathlib import Path


class ConfigError(Exception):
    """Base class of every configuration error.

    Two errors are equal when they are of the same class and carry the
    same arguments, which makes them easy to compare in checks and tests.
    """

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigError):
            return NotImplemented
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class ConfigNotFound(ConfigError):
    """No value exists for a key."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"config not found: {self.key}"


class ConfigRecursiveNotFound(ConfigError):
    """A placeholder refers to a key that has no value and no default."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"placeholder refers to missing config: {self.key}"


class ConfigTypeMismatch(ConfigError):
    """A value has a kind that cannot become the requested type."""

    def __init__(self, key: str, found: str, expected: str) -> None:
        super().__init__(key, found, expected)
        self.key = key
        self.found = found
        self.expected = expected

    def __str__(self) -> str:
        return (
            f"config {self.key} type mismatch: "
            f"found {self.found}, expected {self.expected}"
        )


class ConfigParseError(ConfigError):
    """A value could not be parsed."""

    def __init__(self, key: str, value: str) -> None:
        super().__init__(key, value)
        self.key = key
        self.value = value

    def __str__(self) -> str:
        return f"config {self.key} cannot parse value {self.value!r}"


class ConfigRecursiveError(ConfigError):
    """A placeholder refers back to a key that is being resolved."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"config {self.key} refers to itself"


class ConfigFileNotExists(ConfigError):
    """A required configuration file is missing."""

    def __init__(self, path: str | Path) -> None:
        super().__init__(Path(path))
        self.path = Path(path)

    def __str__(self) -> str:
        return f"config file does not exist: {self.path}"


class ConfigFileNotSupported(ConfigError):
    """A configuration file has an extension with no known format."""

    def __init__(self, path: str | Path) -> None:
        super().__init__(Path(path))
        self.path = Path(path)

    def __str__(self) -> str:
        return f"config file format not supported: {self.path}"


class RefValueRecursiveError(ConfigError):
    """A refreshable value was nested inside another refreshable value."""

    def __init__(self) -> None:
        super().__init__()

    def __str__(self) -> str:
        return "refreshable values cannot be nested"


class TooManyInstances(ConfigError):
    """More instances were registered than the limit allows."""

    def __init__(self, limit: int) -> None:
        super().__init__(limit)
        self.limit = limit

    def __str__(self) -> str:
        return f"too many instances, limit is {self.limit}"


class ConfigCause(ConfigError):
    """Another error occurred while reading configuration."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(cause)
        self.cause = cause
        self.__cause__ = cause

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigCause):
            return NotImplemented
        return type(self.cause) is type(other.cause) and (
            self.cause.args == other.cause.args
        )

    def __hash__(self) -> int:
        return hash((ConfigCause, type(self.cause), self.cause.args))

    def __str__(self) -> str:
        return f"{type(self.cause).__name__}: {self.cause}"