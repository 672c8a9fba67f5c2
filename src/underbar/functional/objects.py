"""Helpers for merging mappings."""

import typing as tp
from collections.abc import Mapping, MutableMapping

from underbar.functional.collections import each

__all__ = ["extend", "defaults"]


def extend(target: MutableMapping, *sources: Mapping) -> MutableMapping:
    """Copy every key of every source onto ``target``; later sources win.

    Example:
        >>> extend({"a": 1}, {"b": 2}, {"a": 3})
        {'a': 3, 'b': 2}
    """
    for source in sources:
        each(source, lambda value, key, _: target.__setitem__(key, value))
    return target


def defaults(target: MutableMapping, *sources: Mapping) -> MutableMapping:
    """Fill in keys missing from ``target``; existing keys are never overwritten.

    When several sources provide the same key the earliest one wins.
    """

    def _fill(value: tp.Any, key: tp.Any, _) -> None:
        if key not in target:
            target[key] = value

    for source in sources:
        each(source, _fill)
    return target
