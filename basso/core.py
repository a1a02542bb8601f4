"""
basso.core - Collection operations

This module contains every operation basso provides. All of them accept
either collection shape, a Sequence (list, tuple, range, any
collections.abc.Sequence other than str/bytes) or a Mapping (dict, any
collections.abc.Mapping), and always return eagerly built results.

Categories:
- Collection protocol: the ICollection registry and its lookup
- Collection shapes: the Sequence/Mapping impls
- Iteration primitives: each, find
- Transforms: map, filter, reject, pluck
- Aggregates: reduce, reduce_right, max, min
- Predicates: every, some, contains, where, find_where
- Ordering and introspection: sort_by, keys
- Memoization: once
"""

import logging
import numbers
import threading
from abc import ABC
from collections.abc import Mapping, Sequence
from functools import cmp_to_key
from typing import Any, Callable, Optional

from basso.config import get_config
from basso.types import _MISSING, CollectionKind, InvalidArgumentError, strict_equals

logger = logging.getLogger(__name__)

# =============================================================================
# Collection Protocol
# =============================================================================


class ICollection(ABC):
    """Uniform traversal over the Sequence and Mapping collection shapes.

    Every registered type is a virtual subclass, so
    isinstance(obj, ICollection) holds for anything basso can traverse.
    """


# Methods every ICollection implementation must provide
_COLLECTION_METHODS = ("kind", "each", "find", "keys")

_COLLECTION_IMPLS: dict[type, Optional[dict[str, Any]]] = {
    # py_type: {"each": callable, ...},
    # excluded_type: None,
}


def register_collection_impl(py_type: type, methods_dict: dict[str, Any]) -> None:
    """
    Register an ICollection implementation for a type.

    Args:
        py_type: The Python type being extended (an ABC is fine)
        methods_dict: Dict mapping method names to callables

    Raises:
        TypeError: If a method is missing
    """
    missing = [m for m in _COLLECTION_METHODS if m not in methods_dict]
    if missing:
        raise TypeError(
            f"ICollection implementation for {py_type.__name__} "
            f"is missing: {', '.join(missing)}"
        )

    _COLLECTION_IMPLS[py_type] = dict(methods_dict)
    ICollection.register(py_type)
    logger.debug("Registered ICollection implementation for %s", py_type.__name__)


def exclude_from_collections(py_type: type) -> None:
    """
    Mark a type as never being a collection.

    Needed where a type matches a registered ABC but must not be treated as
    an implementation (str is a Sequence, yet not a collection for basso).
    """
    _COLLECTION_IMPLS[py_type] = None


def resolve_impl(obj: Any) -> Optional[dict[str, Any]]:
    """
    Find the ICollection implementation for an object.

    Lookup order:
    1. Exact type match
    2. Walk the MRO for supertype implementations
    3. isinstance() against registered ABCs, in registration order

    Returns:
        The methods dict, or None if the object isn't a collection
    """
    t = type(obj)

    # 1. Exact type match
    if t in _COLLECTION_IMPLS:
        return _COLLECTION_IMPLS[t]

    # 2. Walk MRO for supertype implementations
    for base in t.__mro__[1:]:
        if base in _COLLECTION_IMPLS:
            return _COLLECTION_IMPLS[base]

    # 3. Structural match through ABCs (list is only virtually a Sequence)
    for py_type, entry in _COLLECTION_IMPLS.items():
        if isinstance(obj, py_type):
            return entry

    return None


# =============================================================================
# Collection Shapes
# =============================================================================


def _sequence_each(coll, callback):
    for i in range(len(coll)):
        callback(coll[i])


def _sequence_find(coll, callback):
    for i in range(len(coll)):
        item = coll[i]
        if callback(item):
            return item
    return _MISSING


def _sequence_keys(coll):
    raise InvalidArgumentError(
        f"keys() expects a mapping, got sequence type {type(coll).__name__}"
    )


def _mapping_each(coll, callback):
    for key in coll:
        callback(coll[key])


def _mapping_find(coll, callback):
    for key in coll:
        item = coll[key]
        if callback(item):
            return item
    return _MISSING


def _mapping_keys(coll):
    return [key for key in coll]


SEQUENCE_IMPL = {
    "kind": lambda coll: CollectionKind.SEQUENCE,
    "each": _sequence_each,
    "find": _sequence_find,
    "keys": _sequence_keys,
}

MAPPING_IMPL = {
    "kind": lambda coll: CollectionKind.MAPPING,
    "each": _mapping_each,
    "find": _mapping_find,
    "keys": _mapping_keys,
}

for _text_type in (str, bytes, bytearray):
    exclude_from_collections(_text_type)
register_collection_impl(Sequence, SEQUENCE_IMPL)
register_collection_impl(Mapping, MAPPING_IMPL)


def extend_collection(py_type: type, kind: CollectionKind) -> None:
    """
    Treat instances of py_type as a Sequence or a Mapping.

    A SEQUENCE type must support len() and integer indexing; a MAPPING type
    must support iteration over its keys and lookup by key.
    """
    if kind is CollectionKind.SEQUENCE:
        register_collection_impl(py_type, SEQUENCE_IMPL)
    elif kind is CollectionKind.MAPPING:
        register_collection_impl(py_type, MAPPING_IMPL)
    else:
        raise InvalidArgumentError(f"Unknown collection kind: {kind!r}")


def _collection(coll, op: str) -> dict[str, Any]:
    """Resolve the ICollection implementation for coll, or fail for op."""
    impl = resolve_impl(coll)
    if impl is None:
        raise InvalidArgumentError(
            f"{op}() expects a sequence or mapping, got {type(coll).__name__}"
        )
    return impl


def _check_callable(fn, op: str, role: str = "callback") -> None:
    if not callable(fn):
        raise InvalidArgumentError(
            f"{op}() expects a callable {role}, got {type(fn).__name__}"
        )


def collection_kind(coll) -> CollectionKind:
    """Return whether coll is a SEQUENCE or a MAPPING."""
    impl = _collection(coll, "collection_kind")
    return impl["kind"](coll)


def is_collection(obj) -> bool:
    """Return True if obj is a Sequence or Mapping basso can traverse."""
    return resolve_impl(obj) is not None


def get_property(item, name, default=None):
    """Read a named property from an element.

    Mappings are read by key, sequences by in-range non-negative int index,
    anything else by attribute. Missing properties give default.
    """
    if isinstance(item, Mapping):
        return item.get(name, default)
    if isinstance(name, int) and not isinstance(name, bool):
        if isinstance(item, Sequence) and 0 <= name < len(item):
            return item[name]
        return default
    if isinstance(name, str):
        return getattr(item, name, default)
    return default


# =============================================================================
# Iteration Primitives
# =============================================================================


def _each(coll, callback, op: str) -> None:
    impl = _collection(coll, op)
    impl["each"](coll, callback)


def each(collection, callback) -> None:
    """Call callback(element) for every element, in visitation order.

    Sequences are visited by index from 0 to len - 1, mappings in their own
    key iteration order. Exceptions raised by callback propagate.
    """
    _check_callable(callback, "each")
    _each(collection, callback, "each")


def _find(coll, callback, op: str):
    impl = _collection(coll, op)
    return impl["find"](coll, callback)


def find(collection, callback, default=None):
    """Return the first element for which callback is truthy, or default.

    Stops at the first match: callback is not called for later elements.
    """
    _check_callable(callback, "find")
    found = _find(collection, callback, "find")
    return default if found is _MISSING else found


# =============================================================================
# Transforms
# =============================================================================


def _map(coll, fn, op: str) -> list:
    result = []

    def visit(item):
        result.append(fn(item))

    _each(coll, visit, op)
    return result


def basso_map(collection, callback) -> list:
    """Return a new list of callback(element) for each element."""
    _check_callable(callback, "map")
    return _map(collection, callback, "map")


def basso_filter(collection, callback) -> list:
    """Return a new list of the elements for which callback is truthy."""
    _check_callable(callback, "filter")
    result = []

    def keep(item):
        if callback(item):
            result.append(item)

    _each(collection, keep, "filter")
    return result


def reject(collection, callback) -> list:
    """The opposite of filter: elements for which callback is falsy."""
    _check_callable(callback, "reject")
    result = []

    def keep(item):
        if not callback(item):
            result.append(item)

    _each(collection, keep, "reject")
    return result


def pluck(collection, property_name) -> list:
    """Return the named property of every element (None where missing)."""
    return _map(
        collection, lambda item: get_property(item, property_name), "pluck"
    )


# =============================================================================
# Aggregates
# =============================================================================


def reduce(collection, iterator, initial_value=_MISSING):
    """Fold the collection left to right: acc = iterator(acc, element).

    The seed defaults to 0. Unless coalesce_falsy_seed is switched off, a
    falsy seed ('' / False / None / empty container) is also replaced by 0.
    """
    _check_callable(iterator, "reduce", "iterator")
    if initial_value is _MISSING or (
        get_config().coalesce_falsy_seed and not initial_value
    ):
        acc = 0
    else:
        acc = initial_value

    def fold(item):
        nonlocal acc
        acc = iterator(acc, item)

    _each(collection, fold, "reduce")
    return acc


def _descending_by_value(a, b) -> int:
    # Anything that is not a real number ties with everything.
    if not isinstance(a, numbers.Real) or not isinstance(b, numbers.Real):
        return 0
    if b > a:
        return 1
    if b < a:
        return -1
    return 0


def reduce_right(collection, iterator, initial_value=_MISSING):
    """Fold a sequence "from the right".

    By default the sequence is copied and sorted into descending numeric
    order before folding, so [3, 1, 2] is folded as [3, 2, 1]. The sort is
    stable, and elements that are not real numbers (strings, records) count
    as equal to everything, so a list of them keeps its order. With
    reduce_right_by_value switched off the copy is simply reversed.
    Mappings have no order to reverse and are folded like reduce().
    """
    _check_callable(iterator, "reduce_right", "iterator")
    impl = _collection(collection, "reduce_right")
    if impl["kind"](collection) is not CollectionKind.SEQUENCE:
        return reduce(collection, iterator, initial_value)

    items = []
    impl["each"](collection, items.append)
    if get_config().reduce_right_by_value:
        items.sort(key=cmp_to_key(_descending_by_value))
    else:
        items.reverse()
    return reduce(items, iterator, initial_value)


def _extreme(collection, callback, op: str, better: Callable, empty: float):
    if callback is not None:
        _check_callable(callback, op)
    best = _MISSING
    best_rank = None

    def visit(item):
        nonlocal best, best_rank
        rank = item if callback is None else callback(item)
        if best is _MISSING or better(rank, best_rank):
            best, best_rank = item, rank

    _each(collection, visit, op)
    return empty if best is _MISSING else best


def basso_max(collection, callback=None):
    """Return the highest-ranked element, or -inf for an empty collection.

    With a callback, elements are ranked by callback(element) and the
    element itself is returned. Ties keep the first element seen.
    """
    return _extreme(collection, callback, "max", lambda a, b: a > b, float("-inf"))


def basso_min(collection, callback=None):
    """Return the lowest-ranked element, or inf for an empty collection.

    With a callback, elements are ranked by callback(element) and the
    element itself is returned. Ties keep the first element seen.
    """
    return _extreme(collection, callback, "min", lambda a, b: a < b, float("inf"))


# =============================================================================
# Predicates
# =============================================================================


def every(collection, callback) -> bool:
    """Return True if callback is truthy for every element.

    Always visits the whole collection, even after a falsy result.
    """
    _check_callable(callback, "every")
    result = True

    def check(item):
        nonlocal result
        if not callback(item):
            result = False

    _each(collection, check, "every")
    return result


def some(collection, callback) -> bool:
    """Return True if callback is truthy for any element; stops at the first."""
    _check_callable(callback, "some")
    return _find(collection, callback, "some") is not _MISSING


def contains(collection, value, from_index=0) -> bool:
    """Return True if value is present in the collection.

    Sequences are scanned by position starting at from_index, an int or a
    whole-number float (negative offsets count from the end). Mappings are
    searched by value and from_index is ignored. Comparison uses
    strict_equals.
    """
    impl = _collection(collection, "contains")
    if impl["kind"](collection) is not CollectionKind.SEQUENCE:
        found = impl["find"](collection, lambda item: strict_equals(item, value))
        return found is not _MISSING

    start = from_index or 0
    if isinstance(start, float) and start.is_integer():
        start = int(start)
    if not isinstance(start, int) or isinstance(start, bool):
        raise InvalidArgumentError(
            f"contains() expects a whole-number from_index, got {start!r}"
        )
    length = len(collection)
    if start < 0:
        start = max(length + start, 0)
    for i in range(start, length):
        if strict_equals(collection[i], value):
            return True
    return False


def _matcher(properties, op: str) -> Callable[[Any], bool]:
    """Build the predicate shared by where() and find_where()."""
    if not isinstance(properties, Mapping):
        raise InvalidArgumentError(
            f"{op}() expects a mapping of properties, got {type(properties).__name__}"
        )
    required = list(properties.items())
    allow_falsy = get_config().match_falsy_values

    def matches(item) -> bool:
        for key, expected in required:
            actual = get_property(item, key, _MISSING)
            if actual is _MISSING:
                return False
            if not actual and not allow_falsy:
                return False
            if not strict_equals(actual, expected):
                return False
        return True

    return matches


def where(collection, properties) -> list:
    """Return every element that has all the key/value pairs in properties.

    A candidate whose value under a key is falsy (0, '', False, None)
    never matches unless match_falsy_values is switched on.
    """
    matches = _matcher(properties, "where")
    result = []

    def keep(item):
        if matches(item):
            result.append(item)

    _each(collection, keep, "where")
    return result


def find_where(collection, properties):
    """Return the first element matching properties (see where()), or None."""
    matches = _matcher(properties, "find_where")
    found = _find(collection, matches, "find_where")
    return None if found is _MISSING else found


# =============================================================================
# Ordering and Introspection
# =============================================================================


def sort_by(collection, callback=None) -> list:
    """Return a stably sorted copy, ascending by each element's key.

    The key is callback(element) for a callable, the element's property of
    that name otherwise, or the element itself when callback is None. Keys
    that cannot be ordered against each other (None next to an int, say)
    compare as equal, so the result is still a permutation of the input.
    """
    if callback is None:
        key_of = _identity
    elif callable(callback):
        key_of = callback
    else:
        key_of = lambda item: get_property(item, callback)  # noqa: E731

    pairs = _map(collection, lambda item: (item, key_of(item)), "sort_by")
    pairs.sort(key=cmp_to_key(_compare_keys))
    return [item for item, _ in pairs]


def _compare_keys(left, right) -> int:
    a, b = left[1], right[1]
    try:
        if a > b:
            return 1
        if a < b:
            return -1
    except TypeError:
        pass
    return 0


def _identity(x):
    return x


def keys(mapping) -> list:
    """Return the keys of a mapping, in its iteration order."""
    impl = _collection(mapping, "keys")
    return impl["keys"](mapping)


# =============================================================================
# Memoization
# =============================================================================


class Once:
    """
    A zero-argument wrapper that runs its producer at most once.

    The first call runs producer() and caches the result; every later call
    returns the cached result, whatever arguments it is given. If the
    producer raises, nothing is cached and the next call tries again.
    """

    __slots__ = ("_producer", "_fired", "_result", "_lock")

    def __init__(self, producer: Callable[[], Any]):
        self._producer = producer
        self._fired = False
        self._result = None
        self._lock = threading.RLock()

    @property
    def fired(self) -> bool:
        """True once the producer has run successfully."""
        return self._fired

    def __call__(self, *args, **kwargs):
        if self._fired:
            return self._result
        with self._lock:
            if not self._fired:
                self._result = self._producer()
                self._fired = True
                logger.debug("once wrapper for %r fired", self._producer)
                self._producer = None
        return self._result

    def __repr__(self):
        state = "fired" if self._fired else "unfired"
        return f"<Once {state}>"


def once(producer: Callable[[], Any]) -> Once:
    """Wrap producer so it is executed only on the first call."""
    _check_callable(producer, "once", "producer")
    return Once(producer)
