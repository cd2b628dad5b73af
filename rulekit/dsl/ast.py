"""
Shared AST emitted by every DSL parser.
"""

from dataclasses import dataclass
from typing import Any, Tuple, Union


@dataclass(frozen=True)
class FieldNode:
    """Reference to a (dotted) field path in the evaluation data."""
    path: str


@dataclass(frozen=True)
class LiteralNode:
    value: Any


@dataclass(frozen=True)
class OperatorNode:
    """Operator token applied to operand nodes. The token is front-end vocabulary."""
    operator: str
    operands: Tuple["Node", ...] = ()


Node = Union[FieldNode, LiteralNode, OperatorNode]
