"""
Key re-casing over generic tree-shaped data (mappings, sequences, scalars).

`transform_keys` is convention-agnostic: it receives the function applied to
each mapping key. `camel_key` and `pascal_key` are the two conventions used by
the config deployment resource.
"""

import re
from collections.abc import Mapping
from typing import Any, Callable

_SEPARATORS = re.compile(r"[\s_\-.]+")
_CAMEL_BOUNDARY = re.compile(r"[_.\-](\w|$)")


def transform_keys(value: Any, key_fn: Callable[[str], str]) -> Any:
    """
    Returns a copy of `value` with `key_fn` applied to every string key,
    recursing through nested mappings and lists/tuples. Values are untouched.
    """
    if isinstance(value, Mapping):
        return {
            (key_fn(k) if isinstance(k, str) else k): transform_keys(v, key_fn)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [transform_keys(item, key_fn) for item in value]
    return value


def _segments(key: str) -> list[str]:
    return [s for s in _SEPARATORS.split(key) if s]


def camel_key(key: str) -> str:
    """foo_bar / foo-bar / foo.bar -> fooBar; the first character and whitespace are kept."""
    return _CAMEL_BOUNDARY.sub(lambda m: m.group(1).upper(), key)


def pascal_key(key: str) -> str:
    """foo_bar / foo-bar / fooBar -> FooBar"""
    parts = _segments(key)
    if not parts:
        return key
    return "".join(p[0].upper() + p[1:] for p in parts)


def camelize(value: Any) -> Any:
    return transform_keys(value, camel_key)
