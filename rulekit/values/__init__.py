"""
Values Package

Value wrapper and ordered Set used during evaluation.
"""

from .set import Set, is_numeric, strict_equal
from .value import Value

__all__ = [
    "Set",
    "Value",
    "is_numeric",
    "strict_equal",
]
