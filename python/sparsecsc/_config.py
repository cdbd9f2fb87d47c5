#!/usr/bin/env python3
# =============================================================================
#     File: _config.py
#  Created: 2026-10-19 09:20
#   Author: Bernie Roesler
#
"""
Runtime options for the sparsecsc engine.

Options are global, with thread-local overrides installed by
`config_context`::

    with sparsecsc.config_context(check_structure=True):
        y = A @ x  # A is validated before the product
"""
# =============================================================================

import os
import threading

from contextlib import contextmanager
from dataclasses import dataclass, fields, replace


_ENV_CHECK_STRUCTURE = 'SPARSECSC_CHECK_STRUCTURE'


def _env_flag(name):
    """Interpret an environment variable as a boolean flag."""
    return os.environ.get(name, '').strip().lower() in {'1', 'true', 'yes'}


@dataclass(frozen=True)
class Config:
    """Engine options.

    Attributes
    ----------
    check_structure : bool
        If True, every read operation validates the compressed-column
        invariants of its operands and raises `InvalidStructureError` on
        violation. Off by default for speed.
    growth_factor : int
        Capacity multiplier of `COOMatrix` when its storage is full.
    """
    check_structure: bool = False
    growth_factor: int = 2


_global_config = Config(check_structure=_env_flag(_ENV_CHECK_STRUCTURE))
_local = threading.local()


def _validate(options):
    names = {f.name for f in fields(Config)}
    for key, value in options.items():
        if key not in names:
            raise TypeError(f"Unknown configuration option '{key}'.")
        if key == 'growth_factor' and (int(value) != value or value < 2):
            raise ValueError("growth_factor must be an integer >= 2.")


def get_config():
    """Return the options in effect for the current thread."""
    return getattr(_local, 'config', None) or _global_config


def set_config(**options):
    """Set global options.

    Parameters
    ----------
    **options
        Any attribute of `Config`.

    Returns
    -------
    result : Config
        The new global configuration.
    """
    global _global_config
    _validate(options)
    _global_config = replace(_global_config, **options)
    return _global_config


@contextmanager
def config_context(**options):
    """Temporarily override options in the current thread.

    Parameters
    ----------
    **options
        Any attribute of `Config`.

    Yields
    ------
    config : Config
        The options in effect inside the context.
    """
    _validate(options)
    previous = getattr(_local, 'config', None)
    _local.config = replace(get_config(), **options)
    try:
        yield _local.config
    finally:
        _local.config = previous

# =============================================================================
# =============================================================================
