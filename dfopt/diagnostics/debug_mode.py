"""Process-wide switch for the minimizers' invariant checks.

The switch starts from the ``DFOPT_DEBUG`` environment variable and can be
flipped at run time. While it is on, the bracketing, Brent and Powell
routines verify their invariants and raise ValueError on violation.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator, Mapping, Optional

DEBUG_ENV_VAR = "DFOPT_DEBUG"
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _flag_from_env(environ: Mapping[str, str]) -> bool:
    return environ.get(DEBUG_ENV_VAR, "0").strip().lower() in _TRUTHY


_debug_enabled: bool = _flag_from_env(os.environ)


def is_debug_enabled() -> bool:
    """Return True if invariant checks are active."""
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """Turn invariant checks on or off for the whole process."""
    global _debug_enabled
    _debug_enabled = bool(enabled)


def reload_debug_from_env(environ: Optional[Mapping[str, str]] = None) -> bool:
    """
    Re-read ``DFOPT_DEBUG`` and apply it.

    Parameters
    ----------
    environ:
        Mapping to read instead of ``os.environ``.

    Returns
    -------
    bool
        The new state of the switch.
    """
    set_debug_enabled(_flag_from_env(os.environ if environ is None else environ))
    return _debug_enabled


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Temporarily set the switch, restoring the previous state on exit.

    Example
    -------
    >>> with debug_context(True):
    ...     pass  # checks active here
    """
    previous = _debug_enabled
    set_debug_enabled(enabled)
    try:
        yield
    finally:
        set_debug_enabled(previous)
