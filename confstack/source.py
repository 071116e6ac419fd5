"""The interfaces every configuration source and file format follows."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from confstack.memory import ConfigSourceBuilder


class ConfigSource(ABC):
    """Something that puts key-value pairs into a configuration.

    Sources may come from code, the environment, files, the network and
    so on. Every source has a ``name`` used in listings and logs.
    """

    name: str

    @abstractmethod
    def load(self, builder: ConfigSourceBuilder) -> None:
        """Write this source's values into ``builder``."""

    def allow_refresh(self) -> bool:
        """Whether this source may ever change after loading."""
        return False

    def refreshable(self) -> bool:
        """Whether this source changed since the last call.

        Every call must reset the changed state to false.
        """
        return False


class ConfigSourceParser(ABC):
    """A text format that can be turned into configuration values."""

    extensions: ClassVar[tuple[str, ...]] = ()

    @abstractmethod
    def parse_source(self, content: str) -> Any:
        """Parse ``content`` into an intermediate document."""

    @abstractmethod
    def convert_source(self, data: Any, builder: ConfigSourceBuilder) -> None:
        """Write a parsed document into ``builder``."""