from pathlib import Path

import pytest

from confstack.errors import (
    ConfigCause,
    ConfigError,
    ConfigFileNotExists,
    ConfigFileNotSupported,
    ConfigNotFound,
    ConfigParseError,
    ConfigRecursiveError,
    ConfigRecursiveNotFound,
    ConfigTypeMismatch,
    RefValueRecursiveError,
    TooManyInstances,
)


@pytest.mark.parametrize(
    "error",
    [
        ConfigNotFound("e"),
        ConfigRecursiveNotFound("z"),
        ConfigTypeMismatch("a", "Integer", "bool"),
        ConfigParseError("n", "$"),
        ConfigRecursiveError("b"),
        ConfigFileNotExists("app.toml"),
        ConfigFileNotSupported("/conf/no_extension"),
        RefValueRecursiveError(),
        TooManyInstances(64),
        ConfigCause(ValueError("bad")),
    ],
)
def test_every_error_is_caught_as_config_error(error):
    with pytest.raises(ConfigError) as info:
        raise error
    assert info.value == error


def test_equal_when_same_class_and_arguments():
    assert ConfigNotFound("a") == ConfigNotFound("a")
    assert not ConfigNotFound("a") == ConfigNotFound("b")
    assert not ConfigNotFound("z") == ConfigRecursiveNotFound("z")
    assert hash(ConfigParseError("p", "}")) == hash(ConfigParseError("p", "}"))


def test_attributes_are_kept():
    err = ConfigParseError("q", "${")
    assert (err.key, err.value) == ("q", "${")
    mismatch = ConfigTypeMismatch("k", "Bool", "int")
    assert (mismatch.key, mismatch.found, mismatch.expected) == ("k", "Bool", "int")
    assert TooManyInstances(1024).limit == 1024


def test_paths_are_path_objects():
    err = ConfigFileNotSupported("/conf/app.not_exist")
    assert err.path == Path("/conf/app.not_exist")
    assert ConfigFileNotExists("x.yaml") == ConfigFileNotExists(Path("x.yaml"))


def test_message_names_key():
    assert "world2" in str(ConfigNotFound("world2"))
    assert "z" in str(ConfigRecursiveNotFound("z"))
    assert "app.ini" in str(ConfigFileNotExists("app.ini"))


def test_cause_wraps_original_error():
    original = ValueError("invalid digit")
    err = ConfigCause(original)
    assert err.cause is original
    assert err.__cause__ is original
    assert "invalid digit" in str(err)
    assert err == ConfigCause(ValueError("invalid digit"))
    assert not err == ConfigCause(TypeError("invalid digit"))