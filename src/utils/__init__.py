"""
Utility functions for the playground launcher
"""

from .parsing import (
    parse_invariant_float,
    parse_bool,
    split_key_value,
    resolve_relative,
    iter_content_lines,
)

__all__ = [
    'parse_invariant_float',
    'parse_bool',
    'split_key_value',
    'resolve_relative',
    'iter_content_lines',
]
