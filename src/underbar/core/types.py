"""Reusable type definitions for the underbar collection module.

This module provides type aliases and constrained types that are shared across
the functional helpers, plus the ``MISSING`` sentinel used to tell an omitted
argument apart from an explicit ``None``.

Type Aliases:
    Collection: A sequence of values or a mapping from keys to values.
    Iterator: A callable invoked as ``iterator(value, key_or_index, collection)``.
    Predicate: A callable returning a truthy or falsy result for one element.
    Waitable: A non-negative duration in milliseconds.
"""

import typing as tp
from collections.abc import Mapping, Sequence

import annotated_types as at

__all__ = [
    "MISSING",
    "Collection",
    "Iterator",
    "Predicate",
    "Waitable",
    "strict_equal",
    "strict_type",
]

T = tp.TypeVar("T")
R = tp.TypeVar("R")


class _Missing:
    """Marker for an argument that was not supplied."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<MISSING>"

    def __bool__(self) -> bool:
        return False


MISSING: tp.Any = _Missing()

# Either shape accepted by ``each`` and ``map``
Collection = tp.Union[Sequence[T], Mapping[tp.Any, T]]

Iterator = tp.Callable[..., R]

Predicate = tp.Callable[[tp.Any], tp.Any]

# Timer durations in milliseconds, validated before a timer is started
Waitable = tp.Annotated[float, at.Ge(0)]


def strict_type(value: tp.Any) -> type:
    """Type used to compare ``value`` strictly.

    Non-bool ``int`` and ``float`` share one number class, as JavaScript numbers
    do. Every other value is classed by its exact type.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float
    return type(value)


def strict_equal(a: tp.Any, b: tp.Any) -> bool:
    """Equality between values of the same strict type.

    ``strict_equal(1, 1.0)`` is True while ``strict_equal(1, True)`` is False.
    NaN never equals itself. Values whose ``==`` has no single truth value
    (numpy arrays) are equal only when they are the same object.
    """
    kind = strict_type(a)
    if kind is not strict_type(b):
        return False
    if kind is float:
        return bool(a == b)
    if a is b:
        return True
    try:
        return bool(a == b)
    except ValueError:
        return False
