"""
Accumulation helpers for key/value maps.

A key seen once holds a plain string. When the same key recurs its values
accumulate into a list in the order they were seen, never overwriting.
"""

from typing import Iterable

from .data_models import KVMap, KVValue


def add_value(kv: KVMap, key: str, value: str) -> None:
    """Add ``value`` under ``key``, turning the entry into a list on collision."""
    existing = kv.get(key)
    if existing is None:
        kv[key] = value
    elif isinstance(existing, list):
        existing.append(value)
    else:
        kv[key] = [existing, value]


def _values(value: KVValue) -> Iterable[str]:
    return value if isinstance(value, list) else [value]


def merge_kv(target: KVMap, source: KVMap) -> KVMap:
    """Append every value of ``source`` into ``target``, key by key."""
    for key, value in source.items():
        for item in _values(value):
            add_value(target, key, item)
    return target


def fill_missing(target: KVMap, source: KVMap) -> KVMap:
    """Copy entries of ``source`` whose key is not already in ``target``."""
    for key, value in source.items():
        if key not in target:
            target[key] = list(value) if isinstance(value, list) else value
    return target
