"""Sources read from configuration files."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from pathlib import Path

from confstack.errors import ConfigCause, ConfigFileNotExists, ConfigFileNotSupported
from confstack.formats import parser_for_extension
from confstack.memory import ConfigSourceBuilder, HashSource
from confstack.source import ConfigSource, ConfigSourceParser


def _modified_time(path: Path) -> int | None:
    try:
        return path.stat().st_mtime_ns
    except OSError:
        return None


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigCause(exc) from exc


class FileLoader(ConfigSource):
    """Loads one file, or one file per extension of its parser.

    With ``has_ext`` the path is read as given. Without it, the parser's
    extensions are tried in order, and every file found is loaded. A
    required source raises when no file is found.
    """

    def __init__(
        self,
        path: str | Path,
        parser: ConfigSourceParser,
        required: bool = False,
        has_ext: bool = True,
    ) -> None:
        self.path = Path(path)
        self.parser = parser
        self.required = required
        self.has_ext = has_ext
        self.name = f"file:{self.path}.[{','.join(parser.extensions)}]"
        self._modified = _modified_time(self.path)
        self._lock = threading.Lock()

    def _candidates(self) -> Iterator[Path]:
        if self.has_ext:
            yield self.path
            return
        if self.path.name in ("", ".", ".."):
            return
        for ext in self.parser.extensions:
            yield self.path.with_suffix(f".{ext}")

    def load(self, builder: ConfigSourceBuilder) -> None:
        found = False
        for candidate in self._candidates():
            if candidate.exists():
                found = True
                content = _read_text(candidate)
                self.parser.convert_source(self.parser.parse_source(content), builder)
        if self.required and not found:
            raise ConfigFileNotExists(self.path)

    def allow_refresh(self) -> bool:
        return True

    def refreshable(self) -> bool:
        current = _modified_time(self.path)
        with self._lock:
            changed = current != self._modified
            self._modified = current
        return changed


def source_from_string(name: str, content: str, parser: ConfigSourceParser) -> HashSource:
    """Parse ``content`` with ``parser`` into a new source called ``name``."""
    data = parser.parse_source(content)
    source = HashSource(name)
    parser.convert_source(data, source.prefixed())
    return source


def inline_source(path: str | Path) -> HashSource:
    """Read the file at ``path`` into a source, choosing the format by extension."""
    text = str(path)
    _, dot, ext = text.rpartition(".")
    if not dot:
        raise ConfigFileNotSupported(path)
    parser = parser_for_extension(ext)
    if parser is None:
        raise ConfigFileNotSupported(path)
    return source_from_string(f"inline:{text}", _read_text(Path(path)), parser)