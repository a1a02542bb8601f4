"""
basso.utils - Namespace binding helpers

setup_env populates a namespace dict (a module's globals, a REPL or
template environment) with basso's API. Every operation is bound under its
Python name and under its camelCase name, so code written against the
reduceRight/findWhere/sortBy naming works unchanged:

    env = {}
    setup_env(env)
    env["reduceRight"] is env["reduce_right"]  # True
    env["map"] is basso_map                    # True
"""

from typing import Any

from basso.config import CompatConfig, configure, get_config, override
from basso.core import (
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
    some,
    sort_by,
    where,
)
from basso.types import CollectionKind, InvalidArgumentError, normalize_name

# Public name -> implementation. Keys use the camelCase spelling; the
# snake_case spelling is derived with normalize_name.
API: dict[str, Any] = {
    "each": each,
    "map": basso_map,
    "reduce": reduce,
    "reduceRight": reduce_right,
    "find": find,
    "filter": basso_filter,
    "where": where,
    "findWhere": find_where,
    "reject": reject,
    "every": every,
    "some": some,
    "contains": contains,
    "pluck": pluck,
    "max": basso_max,
    "min": basso_min,
    "sortBy": sort_by,
    "keys": keys,
    "once": once,
}


def setup_env(env: dict[str, Any]) -> None:
    """Add basso's operations and helper types to an environment dict.

    Existing bindings in env are left untouched.
    """

    def setboth(name: str, value: Any) -> None:
        """Register value under both original name and normalized Python name."""
        env.setdefault(name, value)
        normalized = normalize_name(name)
        if normalized != name:
            env.setdefault(normalized, value)

    for name, fn in API.items():
        setboth(name, fn)

    # Prefixed spellings, as imported from basso directly
    env.setdefault("basso_map", basso_map)
    env.setdefault("basso_filter", basso_filter)
    env.setdefault("basso_max", basso_max)
    env.setdefault("basso_min", basso_min)

    # Collection shapes and the ICollection registry
    env.setdefault("CollectionKind", CollectionKind)
    setboth("collectionKind", collection_kind)
    setboth("isCollection", is_collection)
    setboth("extendCollection", extend_collection)
    setboth("getProperty", get_property)
    env.setdefault("ICollection", ICollection)
    setboth("registerCollectionImpl", register_collection_impl)

    # Errors, memoization and configuration
    env.setdefault("InvalidArgumentError", InvalidArgumentError)
    env.setdefault("Once", Once)
    env.setdefault("CompatConfig", CompatConfig)
    env.setdefault("get_config", get_config)
    env.setdefault("configure", configure)
    env.setdefault("override", override)


__all__ = [
    "API",
    "setup_env",
]
