"""
basso.config - Compatibility configuration

A handful of basso's behaviours are inherited quirks that callers may want
to switch off. They live in a single frozen CompatConfig held at module
level:

    coalesce_falsy_seed    reduce() replaces a falsy seed ('' / 0 / False /
                           None / empty container) with 0, not just a
                           missing one
    reduce_right_by_value  reduce_right() folds over a copy sorted by value
                           (descending) instead of folding last-to-first
    match_falsy_values     where()/find_where() accept falsy property values
                           (by default a falsy candidate value never matches)

Usage:
    from basso.config import configure, override

    configure(coalesce_falsy_seed=False)

    with override(reduce_right_by_value=False):
        reduce_right([1, 2, 3], lambda acc, x: acc + [x], [])
"""

import logging
from contextlib import contextmanager
from dataclasses import asdict, dataclass, fields, replace
from typing import Iterator

logger = logging.getLogger(__name__)

# Default configuration values
DEFAULT_COALESCE_FALSY_SEED = True
DEFAULT_REDUCE_RIGHT_BY_VALUE = True
DEFAULT_MATCH_FALSY_VALUES = False


@dataclass(frozen=True)
class CompatConfig:
    """
    Switches for basso's inherited behaviours.

    All fields are booleans. The defaults reproduce the historical
    behaviour; see the module docstring for what each switch does.
    """

    coalesce_falsy_seed: bool = DEFAULT_COALESCE_FALSY_SEED
    reduce_right_by_value: bool = DEFAULT_REDUCE_RIGHT_BY_VALUE
    match_falsy_values: bool = DEFAULT_MATCH_FALSY_VALUES

    def to_dict(self) -> dict[str, bool]:
        """Return the options as a plain dict."""
        return asdict(self)


_config = CompatConfig()


def get_config() -> CompatConfig:
    """Return the active configuration."""
    return _config


def _validate(changes: dict) -> None:
    known = {f.name for f in fields(CompatConfig)}
    for name, value in changes.items():
        if name not in known:
            raise TypeError(f"Unknown basso option: {name}")
        if not isinstance(value, bool):
            raise ValueError(
                f"Option {name} must be a bool, got {type(value).__name__}"
            )


def configure(**changes: bool) -> CompatConfig:
    """
    Update the active configuration.

    Args:
        **changes: Option names mapped to their new boolean values

    Returns:
        The new active CompatConfig

    Raises:
        TypeError: If an option name is unknown
        ValueError: If an option value is not a bool
    """
    global _config
    _validate(changes)
    _config = replace(_config, **changes)
    logger.debug("basso configuration changed: %s", _config)
    return _config


def reset_config() -> CompatConfig:
    """Restore every option to its default and return the new config."""
    global _config
    _config = CompatConfig()
    logger.debug("basso configuration reset to defaults")
    return _config


@contextmanager
def override(**changes: bool) -> Iterator[CompatConfig]:
    """Temporarily change options, restoring the previous config on exit."""
    global _config
    previous = _config
    try:
        yield configure(**changes)
    finally:
        _config = previous
        logger.debug("basso configuration restored: %s", _config)


__all__ = [
    "CompatConfig",
    "get_config",
    "configure",
    "reset_config",
    "override",
]
