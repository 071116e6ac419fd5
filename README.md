# confstack

Building blocks for loading configuration. It gives you:

- normalized configuration keys;
- an in-memory key-value store;
- sources that read environment variables, random numbers and TOML, YAML,
  JSON or INI files;
- conversion of stored values into typed Python objects;
- values that can be refreshed.

## Installing

```
pip install confstack
```

To run the test suite, install the `test` extra (`pip install confstack[test]`)
and run `pytest`.

## Keys

`confstack.key` deals with keys such as `app.name`, `server.ports[0]` or
`db.replicas[2].host`. A key is made of name parts and index parts. Name parts
are joined with dots and index parts are written in square brackets. A name
part made only of digits counts as an index. Empty parts are skipped.

```python
from confstack.key import normalize_key, split_key

normalize_key("prefix.0.prop")    # "prefix[0].prop"
normalize_key(".prefix.prop")     # "prefix.prop"
list(split_key("a.b[1]"))         # ["a", "b", 1]
```

`ConfigKey` is a key that can grow and shrink. `push(key)` adds parts and
returns a mark. `pop(mark)` takes those parts off again.

`PartialKeyCollector` holds the child names found under one key
(`str_keys`). It also holds the array length found there (`int_key`).

## Storing values

`confstack.memory.HashSource` stores values under normalized keys. Once a key
has a value, later writes to that key are ignored.

```python
from confstack.memory import HashSource

source = (
    HashSource("defaults")
    .set("app.name", "demo")
    .set("server.hosts[0]", "a.example.com")
    .set("server.hosts[1]", "b.example.com")
)

source.get_value("app.name")                   # "demo"
source.get_value("missing")                    # None
source.collect_keys("server").str_keys         # {"hosts"}
source.collect_keys("server.hosts").int_key    # 2
```

`HashSource.prefixed()` returns a `ConfigSourceBuilder`. Every source writes
through a builder, which provides these methods:

- `set(key, value)` writes a value at a key below the current prefix.
- `insert(value)` writes a value at the current prefix.
- `insert_map(items, convert)` calls `convert(item, builder)` once for each
  `(key, item)` pair, under that pair's key.
- `insert_array(items, convert)` calls `convert(item, builder)` once for each
  item, under that item's index.

Integers outside the signed 64-bit range are stored as text.

## Sources

Every source subclasses `confstack.source.ConfigSource`. A source has a `name`
and writes its values in `load(builder)`. If the source can change while the
program runs, it overrides `allow_refresh()` and `refreshable()`.
`refreshable()` reports whether the source changed since it was last called.
A `HashSource` is itself a source: it copies its values into any builder.

- `confstack.environment.PrefixEnvironment(prefix, environ=None)` loads every
  variable named `<PREFIX>_*`. The name after the prefix is lower-cased and
  its underscores become dots, so `CFG_APP_0_NAME` is stored as `app[0].name`.
  Pass `environ` to read from a mapping instead of `os.environ`.
- `confstack.random.RandomSource()` stores a `RandValue` placeholder for each
  of `random.u8` … `random.u128`, `random.usize`, `random.i8` …
  `random.i128` and `random.isize`. `confstack.random.normalize(kind)` draws a
  fresh integer of that kind.
- `confstack.file.FileLoader(path, parser, required=False, has_ext=True)`
  loads a file. When `has_ext` is false it tries every extension of the
  parser in turn and loads each file it finds. If the source is required and
  no file is found, it raises `ConfigFileNotExists`. It reports that it is
  refreshable when the file's modification time changes.

```python
import os

from confstack.environment import PrefixEnvironment
from confstack.memory import HashSource

store = HashSource("env")
PrefixEnvironment("cfg", environ={"CFG_APP_NAME": "demo"}).load(store.prefixed())
store.get_value("app.name")   # "demo"
```

## File formats

`confstack.formats` has `TomlParser`, `YamlParser`, `JsonParser` and
`IniParser`. Each parser handles one or more file extensions:

| Parser       | Extensions     |
|--------------|----------------|
| `TomlParser` | `toml`, `tml`  |
| `YamlParser` | `yaml`, `yml`  |
| `JsonParser` | `json`         |
| `IniParser`  | `ini`          |

`parser_for_extension(ext)` returns the parser for an extension, or `None`.

A parser first reads the text with `parse_source(content)`. It then writes the
result into a builder with `convert_source(data, builder)`:

- Mappings become named keys, lists become indexed keys and scalars become
  values.
- JSON numbers and YAML floats are stored as their text.
- In INI files, the section name is the prefix of each key in that section.
  Entries that come before the first section are ignored.

If the text cannot be parsed, the error is raised wrapped in `ConfigCause`.

```python
from confstack.file import inline_source, source_from_string
from confstack.formats import TomlParser

source = source_from_string("inline", "[app]\nport = 8080\n", TomlParser())
source.get_value("app.port")   # 8080

settings = inline_source("settings.yaml")   # format chosen by extension
```

`inline_source` raises `ConfigFileNotSupported` when the path has no extension
or an extension with no known format.

## Converting values

`confstack.value.from_value(target, value, key)` converts a stored value into
`target`. The `key` argument is used only in error messages.

```python
from datetime import timedelta
from pathlib import Path

from confstack.value import U8, Ordering, from_value

from_value(int, "8080", "server.port")           # 8080
from_value(bool, "Yes", "debug")                 # True
from_value(timedelta, "500ms", "timeout")        # timedelta(milliseconds=500)
from_value(Path, "/var", "dir")                  # Path("/var")
from_value(Ordering, "less", "order")            # Ordering.LESS
from_value(U8, "300", "small")                   # raises ConfigCause
```

Targets can be any of the following:

- `str`, `int`, `float` or `bool`. For `bool`, the words `true`, `yes`,
  `false` and `no` are accepted in any case.
- `datetime.timedelta`. Durations are written like `123`, `123s`, `10m`, `2h`,
  `123ms`, `123us` or `123ns`. A bare number means seconds, and nanoseconds
  are rounded to whole microseconds.
- Any enumeration. Member names, aliases included, are matched ignoring case.
  The package provides `Ordering` and `Shutdown`.
- An `IntRange`, such as `I8` … `I128`, `U8` … `U128`, `ISIZE` and `USIZE`.
  Strings and integers must fit in the range. Finite floats are truncated and
  then clamped to the range.
- Any callable that builds a value from text, for example `Path` or
  `ipaddress.IPv4Address`.

Other conversions behave as follows:

- A missing value (`None`) raises `ConfigNotFound`.
- An empty string gives `""` when the target is `str`, and raises
  `ConfigNotFound` for every other target.
- A value of the wrong kind raises `ConfigTypeMismatch`.

The module also has these helpers:

- `to_config_value(value)` turns a Python value into a value that can be
  stored.
- `value_kind(value)` returns the name of a stored value's kind.
- `parse_bool`, `parse_duration`, `parse_enum` and `empty_value` each do one
  step of the conversion on its own.

## Refreshable values

`confstack.refvalue.RefValue(key, value, target)` holds a value behind a lock.
`get()` returns the value. `use(func)` calls `func` with the value while the
lock is held. `refresh(config)` reads the value again by calling
`config.get(key, target)` on any object that has such a method.

`Refresher` keeps up to 1024 `RefValue`s (the limit can be changed) and
refreshes all of them in the order they were added:

- Adding a value past the limit raises `TooManyInstances`.
- Adding a value while a refresh is running raises `RefValueRecursiveError`.

## Errors

Every error derives from `confstack.errors.ConfigError`. Two errors are equal
when they have the same class and the same arguments.

- `ConfigNotFound`
- `ConfigRecursiveNotFound`
- `ConfigTypeMismatch`
- `ConfigParseError`
- `ConfigRecursiveError`
- `ConfigFileNotExists`
- `ConfigFileNotSupported`
- `RefValueRecursiveError`
- `TooManyInstances`
- `ConfigCause`, which wraps an underlying exception

## What it does not do

This package provides the parts listed above but does not assemble them:

- There is no configuration object that stacks several sources by priority
  and reads typed values, lists or mappings out of them.
- `${...}` placeholders in values are stored as plain text and are not
  resolved.
- There is no decorator for typed settings classes.
- There is no ready-made layering of values set in code, environment
  variables and profile files.
- There is no source for package metadata.

To layer sources, load each one into a builder yourself, in order of priority.
The first value written for a key is the one that is kept.