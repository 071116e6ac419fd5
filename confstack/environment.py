"""A source reading environment variables that share a prefix."""

from __future__ import annotations

import os
from collections.abc import Mapping

from confstack.memory import ConfigSourceBuilder
from confstack.source import ConfigSource


class PrefixEnvironment(ConfigSource):
    """Loads every environment variable named ``<PREFIX>_*``.

    The rest of the name is lower-cased and underscores become dots, so
    ``CFG_APP_NAME`` is read as ``app.name`` and ``CFG_APP_0_NAME`` as
    ``app[0].name``.
    """

    def __init__(self, prefix: str, environ: Mapping[str, str] | None = None) -> None:
        self.prefix = f"{prefix.upper()}_"
        self.name = f"prefix_env:{self.prefix}**"
        self._environ = environ

    def load(self, builder: ConfigSourceBuilder) -> None:
        environ = os.environ if self._environ is None else self._environ
        for key, value in environ.items():
            if key.startswith(self.prefix):
                rest = key[len(self.prefix):]
                builder.set(rest.lower().replace("_", "."), value)