"""
basso - Functional collection helpers for sequences and mappings

basso is a small library of eager, stateless collection operations that
work the same way on an ordered sequence (list, tuple, ...) and on a
mapping (dict, ...). Everything is built on one iteration primitive,
each(), plus one short-circuiting search, find().

Submodules:
- types: Shared types (CollectionKind, InvalidArgumentError, _MISSING, ...)
- config: Compatibility switches for inherited behaviours
- core: The operations and the ICollection protocol
- utils: setup_env, which binds the API into a namespace dict

Usage:
    from basso import basso_map, pluck, sort_by, where

    people = [{"name": "Ada", "age": 36}, {"name": "Alan", "age": 41}]
    pluck(sort_by(people, "age"), "name")   # => ["Ada", "Alan"]
    where(people, {"age": 41})              # => [{"name": "Alan", "age": 41}]
"""

# Re-export configuration
from basso.config import (
    CompatConfig,
    configure,
    get_config,
    override,
    reset_config,
)

# Re-export core functions
from basso.core import (
    _COLLECTION_IMPLS,
    ICollection,
    Once,
    basso_filter,
    basso_map,
    basso_max,
    basso_min,
    collection_kind,
    contains,
    each,
    every,
    exclude_from_collections,
    extend_collection,
    find,
    find_where,
    get_property,
    is_collection,
    keys,
    once,
    pluck,
    reduce,
    reduce_right,
    register_collection_impl,
    reject,
    resolve_impl,
    some,
    sort_by,
    where,
)

# Re-export types
from basso.types import (
    _MISSING,
    CollectionKind,
    InvalidArgumentError,
    normalize_name,
    strict_equals,
)

# Re-export utils
from basso.utils import API, setup_env

__version__ = "0.1.0"

__all__ = [
    # Types
    "CollectionKind",
    "InvalidArgumentError",
    "normalize_name",
    "strict_equals",
    "_MISSING",
    # Configuration
    "CompatConfig",
    "configure",
    "get_config",
    "override",
    "reset_config",
    # Collection protocol
    "_COLLECTION_IMPLS",
    "ICollection",
    "register_collection_impl",
    "exclude_from_collections",
    "resolve_impl",
    # Collection shapes
    "collection_kind",
    "is_collection",
    "extend_collection",
    "get_property",
    # Iteration primitives
    "each",
    "find",
    # Transforms
    "basso_map",
    "basso_filter",
    "reject",
    "pluck",
    # Aggregates
    "reduce",
    "reduce_right",
    "basso_max",
    "basso_min",
    # Predicates
    "every",
    "some",
    "contains",
    "where",
    "find_where",
    # Ordering and introspection
    "sort_by",
    "keys",
    # Memoization
    "Once",
    "once",
    # Utils
    "API",
    "setup_env",
]
