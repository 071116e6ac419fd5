import os
from pathlib import Path

import pytest

from confstack.errors import ConfigCause, ConfigFileNotExists, ConfigFileNotSupported
from confstack.file import FileLoader, inline_source, source_from_string
from confstack.formats import JsonParser, TomlParser, YamlParser
from confstack.memory import HashSource
from confstack.source import ConfigSourceParser


class TempParser(ConfigSourceParser):
    extensions = ("tmp",)

    def parse_source(self, content):
        return content

    def convert_source(self, data, builder):
        builder.set("content", data)


def bump_mtime(path):
    stat = path.stat()
    later = stat.st_mtime_ns + 5_000_000_000
    os.utime(path, ns=(stat.st_atime_ns, later))


def test_refresh_file(tmp_path):
    path = tmp_path / "file_2.tmp"
    path.write_text("")
    loader = FileLoader(path, TempParser(), required=False, has_ext=True)
    assert not loader.refreshable()
    path.write_text("hello")
    bump_mtime(path)
    assert loader.refreshable()
    assert not loader.refreshable()


def test_refresh_when_file_appears(tmp_path):
    path = tmp_path / "late.tmp"
    loader = FileLoader(path, TempParser())
    assert not loader.refreshable()
    path.write_text("now")
    assert loader.refreshable()


def test_allow_refresh(tmp_path):
    assert FileLoader(tmp_path / "x.tmp", TempParser()).allow_refresh() is True


def test_load_with_extension(tmp_path):
    path = tmp_path / "app.toml"
    path.write_text('a = 1\n[b]\nc = "x"\n')
    source = HashSource("t")
    FileLoader(path, TomlParser()).load(source.prefixed())
    assert source.get_value("a") == 1
    assert source.get_value("b.c") == "x"


def test_load_every_extension(tmp_path):
    (tmp_path / "app.yaml").write_text("k: from-yaml\n")
    (tmp_path / "app.yml").write_text("k: from-yml\nonly: from-yml\n")
    source = HashSource("t")
    FileLoader(tmp_path / "app", YamlParser(), has_ext=False).load(source.prefixed())
    assert source.get_value("k") == "from-yaml"
    assert source.get_value("only") == "from-yml"


def test_required_missing_raises(tmp_path):
    path = tmp_path / "missing.toml"
    loader = FileLoader(path, TomlParser(), required=True)
    with pytest.raises(ConfigFileNotExists) as info:
        loader.load(HashSource("t").prefixed())
    assert info.value == ConfigFileNotExists(path)


def test_optional_missing_loads_nothing(tmp_path):
    source = HashSource("t")
    FileLoader(tmp_path / "app", TomlParser(), has_ext=False).load(source.prefixed())
    assert len(source) == 0


def test_required_found_by_extension(tmp_path):
    (tmp_path / "app.tml").write_text('v = "ok"\n')
    source = HashSource("t")
    FileLoader(tmp_path / "app", TomlParser(), required=True, has_ext=False).load(
        source.prefixed()
    )
    assert source.get_value("v") == "ok"


def test_loader_name():
    path = Path("conf") / "app"
    loader = FileLoader(path, YamlParser(), has_ext=False)
    assert loader.name == f"file:{path}.[yaml,yml]"


def test_bad_content_raises(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{")
    with pytest.raises(ConfigCause):
        FileLoader(path, JsonParser()).load(HashSource("t").prefixed())


def test_source_from_string():
    source = source_from_string("mem", '{"a": [1, 2]}', JsonParser())
    assert source.name == "mem"
    assert source.get_value("a[1]") == "2"
    assert source.collect_keys("a").int_key == 2


def test_source_from_string_error():
    with pytest.raises(ConfigCause):
        source_from_string("mem", "a = ", TomlParser())


def test_inline_source(tmp_path):
    path = tmp_path / "app.toml"
    path.write_text('[hello]\ntoml = "toml"\n')
    source = inline_source(str(path))
    assert source.name == f"inline:{path}"
    assert source.get_value("hello.toml") == "toml"


def test_inline_source_without_extension():
    with pytest.raises(ConfigFileNotSupported):
        inline_source("no_extension")


def test_inline_source_unknown_extension(tmp_path):
    path = tmp_path / "app.not_exist"
    with pytest.raises(ConfigFileNotSupported) as info:
        inline_source(path)
    assert info.value == ConfigFileNotSupported(path)