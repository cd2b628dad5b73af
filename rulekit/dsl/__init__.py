"""
DSL Package

Shared AST, field resolution, compilation and validation used by the
expression, JMESPath, natural language, MongoDB, GraphQL, SQL WHERE and
LDAP filter front-ends.
"""

from .ast import FieldNode, LiteralNode, Node, OperatorNode
from .field_resolver import FieldResolver
from .compiler import RuleCompiler
from .validation import ValidationIssue, ValidationResult
from .introspection import field_path, field_segments, is_field, is_literal, literal_value, operator_name

__all__ = [
    "FieldNode",
    "LiteralNode",
    "Node",
    "OperatorNode",
    "FieldResolver",
    "RuleCompiler",
    "ValidationIssue",
    "ValidationResult",
    "field_path",
    "field_segments",
    "is_field",
    "is_literal",
    "literal_value",
    "operator_name",
]
