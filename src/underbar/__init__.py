"""A small functional utility belt over sequences and mappings."""

from underbar.core.types import MISSING
from underbar.functional.collections import (
    contains,
    difference,
    each,
    every,
    filter,
    first,
    flatten,
    identity,
    index_of,
    intersection,
    invoke,
    last,
    map,
    pluck,
    reduce,
    reject,
    shuffle,
    some,
    sort_by,
    uniq,
    zip,
)
from underbar.functional.decorators import delay, memoize, once, throttle
from underbar.functional.objects import defaults, extend

__all__ = [
    "MISSING",
    "identity",
    "first",
    "last",
    "each",
    "index_of",
    "filter",
    "reject",
    "uniq",
    "map",
    "pluck",
    "invoke",
    "reduce",
    "contains",
    "every",
    "some",
    "shuffle",
    "sort_by",
    "zip",
    "flatten",
    "intersection",
    "difference",
    "extend",
    "defaults",
    "once",
    "memoize",
    "delay",
    "throttle",
]
