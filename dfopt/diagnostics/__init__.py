"""Diagnostics and debugging utilities for dfopt."""

from .core import (
    assert_bracket,
    assert_finite,
    assert_non_increasing,
    is_valid_bracket,
)
from .debug_mode import (
    debug_context,
    is_debug_enabled,
    reload_debug_from_env,
    set_debug_enabled,
)

__all__ = [
    "assert_bracket",
    "assert_finite",
    "assert_non_increasing",
    "is_valid_bracket",
    "is_debug_enabled",
    "set_debug_enabled",
    "reload_debug_from_env",
    "debug_context",
]
