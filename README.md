# layercfg

Building blocks for layered application configuration: lenient conversion of
loosely typed values, helpers for searching and merging nested,
case-insensitive configuration maps, encoders and decoders for common file
formats, and command-line flag values that can feed configuration keys.

## Installation

```
pip install layercfg
```

## Converting values — `layercfg.cast`

Every converter returns the zero value of its target type instead of raising
when the input cannot be converted.

```python
from datetime import timedelta
from layercfg import cast

cast.to_bool("t")                         # True
cast.to_bool("maybe")                     # False
cast.to_int("0x1F")                       # 31
cast.to_int("010")                        # 8 (leading zero means octal)
cast.to_uint(-5)                          # 0
cast.to_float("2.5")                      # 2.5
cast.to_string(True)                      # "true"
cast.to_duration("1h30m")                 # timedelta(hours=1, minutes=30)
cast.to_string(timedelta(seconds=90))     # "1m30s"
cast.to_string_slice("a b c")             # ["a", "b", "c"]
cast.to_int_slice(["1", "2"])             # [1, 2]
cast.parse_size_in_bytes("10kb")          # 10240
```

Also available: `to_time` (ISO 8601 and several common layouts; numbers are
Unix seconds; naive results are given UTC), `to_string_map`,
`to_string_map_string` and `to_string_map_string_slice` (mappings, or a JSON
object in a string).

## Working with nested maps — `layercfg.maps`

```python
from layercfg import maps

cfg = {"clothing": {"pants": {"size": "large"}}, "foo.bar": 1, "foo": {"bar": 2}}

maps.search_map(cfg, ["clothing", "pants", "size"])            # "large"
maps.search_with_path_prefixes(cfg, ["foo", "bar"], ".")       # 1: the dotted key wins
maps.search_with_path_prefixes({"l": [{"x": 5}]}, ["l", "0", "x"], ".")  # 5

target = {"Name": "a", "sub": {"x": 1}}
maps.merge_maps({"name": "b", "sub": {"y": 2}}, target)
# target == {"Name": "b", "sub": {"x": 1, "y": 2}}

data = {"Hacker": True, "Clothing": {"Jacket": "leather"}}
maps.insensitivise_map(data)          # keys lower-cased in place, recursively

maps.flatten_keys(None, None, {"a": {"b": 1}, "c": 2}, "", ".", False)
# {"a.b", "c"}
```

`deep_search` returns (creating as needed) the innermost map along a path,
`to_case_insensitive_value` returns a lower-cased copy of a map,
`shadowed_in_deep_map` and `shadowed_in_flat_map` report the key of a plain value
that hides a deeper path, and `merge_flat_keys` adds flat keys to a key set
unless a parent path is already present.

## File formats — `layercfg.codecs`

`default_registry(key_delimiter=".")` returns a `CodecRegistry` holding:

| names                          | codec             |
|--------------------------------|-------------------|
| `yaml`, `yml`                  | `YamlCodec`       |
| `json`                         | `JsonCodec`       |
| `toml`                         | `TomlCodec`       |
| `ini`                          | `IniCodec`        |
| `properties`, `props`, `prop`  | `PropertiesCodec` |
| `dotenv`, `env`                | `DotenvCodec`     |

```python
from layercfg.codecs import default_registry

registry = default_registry()
data = registry.decode("yaml", b"name: steve\nclothing:\n  jacket: leather\n")
# {"name": "steve", "clothing": {"jacket": "leather"}}
text = registry.encode("json", data)      # bytes, keys sorted
registry.decode("xml", b"")               # raises UnsupportedConfigError
```

INI section names and delimited property keys become nested maps; when
encoding, nested maps are flattened with the key delimiter. Dotenv encoding
joins nested keys with underscores and upper-cases them. Further codecs can be
added with `CodecRegistry.register(name, codec)` using any subclass of `Codec`.

## Flags — `layercfg.flags`

`FlagValue` is the interface a command-line flag offers: `name`,
`has_changed()`, `value_string()` and `value_type()`. `Flag` is a simple
in-memory implementation. `flag_to_value` converts a flag's text according to
its type:

```python
from layercfg.flags import Flag, flag_to_value, read_as_csv, string_to_string

flag_to_value(Flag("port", "8080", "int"))               # 8080
flag_to_value(Flag("verbose", "true", "bool"))           # True
flag_to_value(Flag("names", "[a,b]", "stringSlice"))     # ["a", "b"]
flag_to_value(Flag("ports", "[1,2]", "intSlice"))        # [1, 2]
string_to_string("[a=1,b=2]")                            # {"a": "1", "b": "2"}
read_as_csv("x,\"y,z\"")                                 # ["x", "y,z"]
```

## Errors — `layercfg.errors`

All errors derive from `ConfigError`: `ConfigMarshalError`, `ConfigParseError`,
`UnsupportedConfigError`, `UnsupportedRemoteProviderError`, `RemoteConfigError`,
`ConfigFileNotFoundError` (also a `FileNotFoundError`) and
`ConfigFileAlreadyExistsError` (also a `FileExistsError`).

## What this package does not do

There is no configuration registry object in this package: nothing here keeps
overrides, flags, environment variables, files, remote stores and defaults
together and resolves a key across them by priority. It does not search
directories for configuration files, read environment variables, build typed
objects from settings, write configuration files, talk to remote key/value
stores or watch files for changes. The modules above supply the conversions,
map operations and codecs such a registry would be built from.