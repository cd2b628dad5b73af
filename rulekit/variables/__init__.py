"""
Variables Package

Placeholders resolved against a Context, with nested property lookup.
"""

from .variable import Variable
from .variable_property import VariableProperty
from .property_resolvers import (
    DEFAULT_RESOLVERS,
    MISSING,
    ArrayResolver,
    AttributeResolver,
    IndexedObjectResolver,
    MethodResolver,
    PropertyResolver,
    resolve_property,
)

__all__ = [
    "Variable",
    "VariableProperty",
    "PropertyResolver",
    "MethodResolver",
    "AttributeResolver",
    "IndexedObjectResolver",
    "ArrayResolver",
    "DEFAULT_RESOLVERS",
    "MISSING",
    "resolve_property",
]
