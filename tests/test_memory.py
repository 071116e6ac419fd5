import pytest

from confstack.errors import ConfigParseError
from confstack.key import ConfigKey
from confstack.memory import HashSource


def _convert(item, builder):
    if isinstance(item, dict):
        builder.insert_map(item, _convert)
    elif isinstance(item, list):
        builder.insert_array(item, _convert)
    else:
        builder.insert(item)


def test_set_and_get_value():
    source = HashSource("test").set("suit.val.v1", "1").set("suit.arr[0]", "a0")
    assert source.name == "test"
    assert source.get_value("suit.val.v1") == "1"
    assert source.get_value("suit.arr.0") == "a0"
    assert source.get_value("suit.val") is None
    assert source.get_value("missing") is None


def test_get_value_accepts_config_key():
    source = HashSource("test").set("suit.brr[0][0]", "b00")
    key = ConfigKey()
    key.push("suit.brr")
    key.push(0)
    key.push(0)
    assert source.get_value(key) == "b00"


def test_first_value_wins():
    source = HashSource("test").set("a", "0").set("a", "1")
    assert source.get_value("a") == "0"


def test_collect_keys():
    source = (
        HashSource("test")
        .set("suit.map.b1[0]", True)
        .set("suit.map.b2[0]", True)
        .set("suit.map.b2[1]", False)
    )
    assert source.collect_keys("suit.map").str_keys == {"b1", "b2"}
    assert source.collect_keys("suit.map.b2").int_key == 2
    assert source.collect_keys("suit.map.b1").int_key == 1
    empty = source.collect_keys("nowhere")
    assert empty.str_keys == set() and empty.int_key is None


def test_sparse_array_length():
    source = HashSource("test").set("key[5]", "xx").set("key[0]", "xx")
    assert source.collect_keys("key").int_key == 6
    assert source.get_value("key[3]") is None


def test_insert_map_and_array():
    source = HashSource("test")
    builder = source.prefixed()
    builder.insert_map(
        {"suit": {"arr": ["a0", "a1", "a2"], "crr": [{"v1": 1.0, "v2": 2.0}]}},
        _convert,
    )
    assert source.get_value("suit.arr[1]") == "a1"
    assert source.get_value("suit.crr[0].v2") == 2.0
    assert source.collect_keys("suit.arr").int_key == 3
    assert source.collect_keys("suit").str_keys == {"arr", "crr"}
    assert builder.count == 5


def test_insert_map_restores_prefix_on_error():
    source = HashSource("test")
    builder = source.prefixed()

    def failing(item, b):
        raise ConfigParseError("k", item)

    with pytest.raises(ConfigParseError):
        builder.insert_map({"k": "bad"}, failing)
    builder.insert("root")
    assert source.get_value("") == "root"
    assert source.get_value("k") is None


def test_large_integers_become_text():
    large = 2**63
    fits = 2**63 - 1
    source = HashSource("test").set("big", large).set("fits", fits)
    assert source.get_value("big") == str(large)
    assert source.get_value("fits") == fits


def test_load_copies_values_without_overriding():
    origin = HashSource("origin").set("a", "0").set("b.c[1]", True)
    target = HashSource("target").set("a", "1")
    origin.load(target.prefixed())
    assert target.get_value("a") == "1"
    assert target.get_value("b.c[1]") is True
    assert target.collect_keys("b.c").int_key == 2
    assert len(target) == len(origin)