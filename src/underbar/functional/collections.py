"""Iteration primitives over sequences and mappings.

Every helper in this module is a plain function over one of two collection
shapes:

    - **Sequence**: an ordered, integer-indexed container (``list``, ``tuple``,
      ``str``...). Iterators receive ``(value, index, collection)``.
    - **Mapping**: a key/value container (``dict``...). Iterators receive
      ``(value, key, collection)`` in the mapping's own iteration order.

``each`` is the only function that decides between the two shapes; the rest
of the module is written on top of ``each``, ``reduce`` and ``filter``.
Operations that only make sense for ordered data (``filter``, ``reduce``,
``uniq``, ``index_of``, ``some``, ``invoke``...) raise ``TypeError`` when handed
a mapping.

None of the helpers mutate their input. Exceptions raised by caller supplied
callables propagate unchanged.

Examples:
    >>> from underbar import each, map, reduce, uniq
    >>> map({"a": 1, "b": 2}, lambda value, key, _: f"{key}={value}")
    ['a=1', 'b=2']
    >>> reduce([1, 2, 3], lambda total, n: total + n, 0)
    6
    >>> uniq([1, 2, 1, 3, 2])
    [1, 2, 3]
"""

import typing as tp
from collections.abc import Mapping, MutableSequence, MutableSet, Sequence

import numpy as np

from underbar.core.types import MISSING, Collection, Iterator, Predicate, strict_equal

__all__ = [
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
]

# Containers whose None-returning methods mutate the receiver in place
_IN_PLACE = (MutableSequence, MutableSet)


def _require_sequence(collection: tp.Any, operation: str) -> Sequence:
    if isinstance(collection, Mapping) or not isinstance(collection, Sequence):
        raise TypeError(
            f"{operation}() expects a sequence, got {type(collection).__name__}"
        )
    return collection


def _project(element: tp.Any, name: tp.Any) -> tp.Any:
    if isinstance(element, Mapping):
        return element.get(name)
    if isinstance(name, str) and not isinstance(element, Sequence):
        return getattr(element, name, None)
    try:
        return element[name]
    except (IndexError, KeyError, TypeError):
        return None


def identity(value: tp.Any) -> tp.Any:
    """Return ``value`` unchanged. Used as the default iterator."""
    return value


def first(sequence: Sequence, n: tp.Optional[int] = None) -> tp.Any:
    """Return the first element, or a list of the first ``n`` elements."""
    _require_sequence(sequence, "first")
    if n is None:
        return sequence[0] if len(sequence) else None
    return list(sequence[: max(n, 0)])


def last(sequence: Sequence, n: tp.Optional[int] = None) -> tp.Any:
    """Return the last element, or a list of the last ``n`` elements."""
    _require_sequence(sequence, "last")
    if n is None:
        return sequence[-1] if len(sequence) else None
    if n <= 0:
        return []
    return list(sequence[max(len(sequence) - n, 0) :])


def each(collection: Collection, iterator: Iterator) -> None:
    """Call ``iterator(value, key_or_index, collection)`` for every element.

    Sequences are visited in index order, mappings in their own iteration
    order. Nothing is returned; ``each`` exists for the side effects of
    ``iterator``. An empty collection results in zero calls.

    Args:
        collection: A sequence or a mapping.
        iterator: Callable receiving ``(value, key_or_index, collection)``.

    Raises:
        TypeError: If ``collection`` is neither a sequence nor a mapping.
    """
    if isinstance(collection, Mapping):
        for key in list(collection):
            iterator(collection[key], key, collection)
    elif isinstance(collection, Sequence):
        for index in range(len(collection)):
            iterator(collection[index], index, collection)
    else:
        raise TypeError(
            f"each() expects a sequence or a mapping, got {type(collection).__name__}"
        )


def index_of(sequence: Sequence, target: tp.Any) -> int:
    """Return the lowest index holding ``target``, or -1 when absent."""
    _require_sequence(sequence, "index_of")
    result = -1

    def _visit(item, index, _):
        nonlocal result
        if result == -1 and strict_equal(item, target):
            result = index

    each(sequence, _visit)
    return result


def filter(collection: Sequence, test: Predicate) -> list:
    """Return a new list of the elements for which ``test(element)`` is truthy."""
    _require_sequence(collection, "filter")
    passed = []

    def _visit(item, *_):
        if test(item):
            passed.append(item)

    each(collection, _visit)
    return passed


def reject(collection: Sequence, test: Predicate) -> list:
    """Return the elements for which ``test(element)`` is falsy.

    The result is ``collection`` minus what ``filter`` keeps. Filtering runs
    over positions rather than values so equal duplicates are told apart.
    """
    _require_sequence(collection, "reject")
    passed = filter(range(len(collection)), lambda i: test(collection[i]))
    failed = []
    matched = 0

    for index, item in enumerate(collection):
        if matched < len(passed) and passed[matched] == index:
            matched += 1
        else:
            failed.append(item)
    return failed


def uniq(sequence: Sequence) -> list:
    """Return the distinct elements of ``sequence`` in order of first occurrence.

    Comparison uses ``strict_equal`` against the already accepted values, so
    unhashable elements are supported at quadratic cost.
    """
    _require_sequence(sequence, "uniq")
    seen: list = []

    def _visit(item, *_):
        if not any(strict_equal(item, kept) for kept in seen):
            seen.append(item)

    each(sequence, _visit)
    return seen


def map(collection: Collection, iterator: Iterator) -> list:
    """Return ``[iterator(value, key_or_index, collection), ...]``.

    A mapping of N entries produces a list of N results in the mapping's
    iteration order.
    """
    results = []

    def _visit(value, key, coll):
        results.append(iterator(value, key, coll))

    each(collection, _visit)
    return results


def pluck(collection: Collection, property_name: tp.Any) -> list:
    """Project ``property_name`` out of every element.

    Mapping elements are read by key. A string name is read as an attribute
    of plain objects, any other name (or any sequence element) by indexing.
    Elements lacking the property yield ``None``.
    """
    return map(collection, lambda value, *_: _project(value, property_name))


def invoke(
    collection: Sequence,
    function_or_name: tp.Union[tp.Callable, str],
    args: Sequence = (),
) -> list:
    """Call a function, or a named method, on every element.

    With a callable, each result is ``function_or_name(element, *args)``; the
    element plays the part of ``self``. With a string, the method of that name
    is looked up on the element and called with ``*args``.

    Note:
        On mutable sequences and sets (``list``, ``set``...) a method returning
        ``None`` is an in-place mutator such as ``list.sort``, so the mutated
        element itself is reported. Everywhere else ``None`` is kept as the
        result, e.g. ``dict.get`` on a missing key.

    Raises:
        AttributeError: If an element has no method named ``function_or_name``.
    """
    _require_sequence(collection, "invoke")

    if callable(function_or_name):
        return map(collection, lambda value, *_: function_or_name(value, *args))

    def _call_method(value, *_):
        result = getattr(value, function_or_name)(*args)
        if result is None and isinstance(value, _IN_PLACE):
            return value
        return result

    return map(collection, _call_method)


def reduce(
    collection: Sequence,
    iterator: tp.Callable[[tp.Any, tp.Any], tp.Any],
    initial: tp.Any = MISSING,
) -> tp.Any:
    """Fold ``collection`` left to right with ``iterator(accumulator, item)``.

    When ``initial`` is omitted the first element seeds the accumulator and
    folding starts from the second one. ``None`` is a legitimate initial value.

    Args:
        collection: Sequence to fold.
        iterator: Callable returning the next accumulator.
        initial: Starting accumulator.

    Returns:
        The final accumulator.

    Raises:
        TypeError: If ``collection`` is empty and no ``initial`` was given.
    """
    _require_sequence(collection, "reduce")
    seeded = initial is not MISSING
    if not seeded and len(collection) == 0:
        raise TypeError("reduce() of empty sequence with no initial value")

    accumulator = initial

    def _visit(item, *_):
        nonlocal accumulator, seeded
        if not seeded:
            accumulator, seeded = item, True
            return
        accumulator = iterator(accumulator, item)

    each(collection, _visit)
    return accumulator


def contains(collection: Collection, target: tp.Any) -> bool:
    """Return True if any element (any value, for mappings) equals ``target``."""
    if isinstance(collection, Mapping):
        return any(strict_equal(value, target) for value in collection.values())

    def _search(was_found, item):
        if was_found:
            return True
        return strict_equal(item, target)

    return reduce(collection, _search, False)


def every(collection: Collection, iterator: tp.Optional[Predicate] = None) -> bool:
    """Return True if ``iterator`` holds for every element.

    Without ``iterator`` the truthiness of each element is tested. An empty
    collection is vacuously true. After the first falsy result ``iterator`` is
    no longer called.
    """
    test = identity if iterator is None else iterator
    values = map(collection, lambda value, *_: value)

    def _all(so_far, item):
        if not so_far:
            return False
        return bool(test(item))

    return reduce(values, _all, True)


def some(collection: Sequence, iterator: tp.Optional[Predicate] = None) -> bool:
    """Return True as soon as ``iterator`` holds for one element.

    Without ``iterator`` the truthiness of each element is tested. An empty
    collection gives False.
    """
    _require_sequence(collection, "some")
    test = identity if iterator is None else iterator

    for item in collection:
        if test(item):
            return True
    return False


def shuffle(
    sequence: Sequence, seed: tp.Union[int, np.random.Generator, None] = None
) -> list:
    """Return a new list holding a uniformly random permutation of ``sequence``.

    Args:
        sequence: Values to shuffle. Left untouched.
        seed: Seed or ``numpy.random.Generator`` for reproducible output.
    """
    _require_sequence(sequence, "shuffle")
    rng = np.random.default_rng(seed)
    return [sequence[int(i)] for i in rng.permutation(len(sequence))]


def sort_by(
    collection: Collection, iterator: tp.Union[tp.Callable, str]
) -> list:
    """Return the values sorted by the key ``iterator`` produces.

    ``iterator`` is either a callable receiving ``(value, key_or_index,
    collection)`` or a property name looked up like ``pluck``. The sort is
    stable and elements whose key is ``None`` go last.
    """
    if callable(iterator):
        keys = map(collection, iterator)
    else:
        keys = pluck(collection, iterator)
    values = map(collection, lambda value, *_: value)
    order = sorted(range(len(values)), key=lambda i: (keys[i] is None, keys[i]))
    return [values[i] for i in order]


def zip(*sequences: Sequence) -> list:
    """Group elements by position, padding shorter sequences with ``None``."""
    for sequence in sequences:
        _require_sequence(sequence, "zip")
    length = max((len(s) for s in sequences), default=0)
    return [
        [s[i] if i < len(s) else None for s in sequences] for i in range(length)
    ]


def flatten(nested: Sequence) -> list:
    """Flatten arbitrarily nested lists and tuples into one list."""
    flat: list = []

    def _visit(item, *_):
        if isinstance(item, (list, tuple)):
            each(item, _visit)
        else:
            flat.append(item)

    each(_require_sequence(nested, "flatten"), _visit)
    return flat


def intersection(*sequences: Sequence) -> list:
    """Return the distinct values of the first sequence found in all the others."""
    if not sequences:
        return []
    for sequence in sequences:
        _require_sequence(sequence, "intersection")
    head, rest = sequences[0], sequences[1:]
    return filter(uniq(head), lambda item: every(rest, lambda s: contains(s, item)))


def difference(sequence: Sequence, *others: Sequence) -> list:
    """Return the values of ``sequence`` that appear in none of ``others``."""
    for other in others:
        _require_sequence(other, "difference")
    return reject(sequence, lambda item: some(others, lambda s: contains(s, item)))
