"""Parsers for the file formats that configuration can be read from.

Each parser turns text into a plain document and then writes that
document into a source builder. Mappings become named keys, lists become
indexed keys, and scalars become values.
"""

from __future__ import annotations

import configparser
import datetime
import json
import tomllib
from collections.abc import Mapping
from typing import Any

import yaml

from confstack.errors import ConfigCause
from confstack.memory import ConfigSourceBuilder
from confstack.source import ConfigSourceParser

_SCALARS = (str, bool, int, float)

# Keys written before the first section header land here and are dropped.
_GENERAL_SECTION = "\x00general"
_DEFAULT_SECTION = "\x00default"


def _unsupported(data: Any) -> TypeError:
    return TypeError(f"cannot convert {type(data).__name__} into configuration")


class TomlParser(ConfigSourceParser):
    """Reads TOML documents."""

    extensions = ("toml", "tml")

    def parse_source(self, content: str) -> dict[str, Any]:
        try:
            return tomllib.loads(content)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigCause(exc) from exc

    def convert_source(self, data: Any, builder: ConfigSourceBuilder) -> None:
        if isinstance(data, _SCALARS):
            builder.insert(data)
        elif isinstance(data, (datetime.date, datetime.time)):
            builder.insert(data.isoformat())
        elif isinstance(data, Mapping):
            builder.insert_map(data, self.convert_source)
        elif isinstance(data, list):
            builder.insert_array(data, self.convert_source)
        else:
            raise _unsupported(data)


class YamlParser(ConfigSourceParser):
    """Reads YAML streams; every document in the stream is loaded in turn."""

    extensions = ("yaml", "yml")

    def parse_source(self, content: str) -> list[Any]:
        try:
            return list(yaml.safe_load_all(content))
        except yaml.YAMLError as exc:
            raise ConfigCause(exc) from exc

    def convert_source(self, data: Any, builder: ConfigSourceBuilder) -> None:
        for document in data:
            self._convert(document, builder)

    def _convert(self, node: Any, builder: ConfigSourceBuilder) -> None:
        if isinstance(node, float):
            builder.insert(str(node))
        elif isinstance(node, _SCALARS):
            builder.insert(node)
        elif isinstance(node, (datetime.date, datetime.time)):
            builder.insert(node.isoformat())
        elif isinstance(node, Mapping):
            builder.insert_map(
                ((key, value) for key, value in node.items() if isinstance(key, str)),
                self._convert,
            )
        elif isinstance(node, list):
            builder.insert_array(node, self._convert)
        # Nulls and other nodes carry no value.


def _reject_constant(name: str) -> Any:
    raise ValueError(f"unsupported JSON constant: {name}")


class JsonParser(ConfigSourceParser):
    """Reads JSON documents; numbers are kept as their literal text."""

    extensions = ("json",)

    def parse_source(self, content: str) -> Any:
        try:
            return json.loads(
                content,
                parse_int=str,
                parse_float=str,
                parse_constant=_reject_constant,
            )
        except ValueError as exc:
            raise ConfigCause(exc) from exc

    def convert_source(self, data: Any, builder: ConfigSourceBuilder) -> None:
        if data is None:
            return
        if isinstance(data, (str, bool)):
            builder.insert(data)
        elif isinstance(data, (int, float)):
            builder.insert(str(data))
        elif isinstance(data, Mapping):
            builder.insert_map(data, self.convert_source)
        elif isinstance(data, list):
            builder.insert_array(data, self.convert_source)
        else:
            raise _unsupported(data)


def _insert_value(value: Any, builder: ConfigSourceBuilder) -> None:
    builder.insert(value)


def _insert_section(properties: Mapping[str, str], builder: ConfigSourceBuilder) -> None:
    builder.insert_map(properties, _insert_value)


class IniParser(ConfigSourceParser):
    """Reads INI files; a section name is the key prefix of its entries.

    Entries before the first section header are ignored.
    """

    extensions = ("ini",)

    def parse_source(self, content: str) -> dict[str, dict[str, str]]:
        parser = configparser.ConfigParser(
            interpolation=None,
            strict=False,
            default_section=_DEFAULT_SECTION,
        )
        parser.optionxform = str  # type: ignore[assignment,method-assign]
        try:
            parser.read_string(f"[{_GENERAL_SECTION}]\n{content}")
        except configparser.Error as exc:
            raise ConfigCause(exc) from exc
        return {
            section: dict(parser[section])
            for section in parser.sections()
            if section != _GENERAL_SECTION
        }

    def convert_source(self, data: Any, builder: ConfigSourceBuilder) -> None:
        builder.insert_map(data, _insert_section)


PARSERS: tuple[ConfigSourceParser, ...] = (
    TomlParser(),
    YamlParser(),
    JsonParser(),
    IniParser(),
)


def parser_for_extension(ext: str) -> ConfigSourceParser | None:
    """Return the parser reading files with extension ``ext``, or ``None``."""
    for parser in PARSERS:
        if ext in parser.extensions:
            return parser
    return None