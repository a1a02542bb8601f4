"""
basso.types - Core type definitions for basso

This module contains the small set of types shared by every other module:
- _MISSING: Sentinel for "no value supplied" (distinct from None)
- CollectionKind: The two collection shapes basso operates on
- InvalidArgumentError: Raised when an operation is handed something it can't use
- normalize_name: Converts camelCase API names to Python identifiers
- strict_equals: Type-strict equality used by membership and property matching
"""

import numbers
import re
from enum import Enum
from typing import Any

# Sentinel for missing values
_MISSING = object()


class CollectionKind(Enum):
    """The shape of a collection, decided once at the entry of every operation."""

    SEQUENCE = "sequence"
    MAPPING = "mapping"


class InvalidArgumentError(TypeError):
    """Raised when an operation receives a value of the wrong kind.

    Examples: a string or number where a collection is expected, a
    non-callable callback, a Sequence passed to keys().
    """

    pass


_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def normalize_name(name: str) -> str:
    """
    Normalize a camelCase API name to a snake_case Python identifier.

    "reduceRight" -> "reduce_right", "findWhere" -> "find_where".
    Names that are already snake_case pass through unchanged.
    """
    return _CAMEL_BOUNDARY.sub(r"_\1", name).lower()


def strict_equals(a: Any, b: Any) -> bool:
    """
    Equality without cross-type coercion.

    Two values are strictly equal when they are the same object, or when they
    have the same type and compare equal. Numbers are the one family that
    compares across types (1 and 1.0 are equal), but bools never equal
    numbers (True is not 1).
    """
    if a is b:
        return True
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, numbers.Number) and isinstance(b, numbers.Number):
        return a == b
    return type(a) is type(b) and a == b


# Type exports
__all__ = [
    "CollectionKind",
    "InvalidArgumentError",
    "normalize_name",
    "strict_equals",
    "_MISSING",
]
