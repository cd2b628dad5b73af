"""
Builder Package

Operator registry and fluent rule builder.
"""

from .registry import OperatorRegistry, OperatorSpec, default_registry, normalize_token
from .rule_builder import BuilderVariable, BuilderVariableProperty, RuleBuilder

__all__ = [
    "OperatorRegistry",
    "OperatorSpec",
    "default_registry",
    "normalize_token",
    "RuleBuilder",
    "BuilderVariable",
    "BuilderVariableProperty",
]
