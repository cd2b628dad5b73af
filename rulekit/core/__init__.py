"""
Core Package

Context, evaluation contracts, operator base classes, rules and rule sets.
"""

from .context import Context
from .proposition import Proposition, VariableOperand
from .operator import OperandCardinality, Operator, PropositionOperator, VariableOperator
from .rule import Rule, RuleSet

__all__ = [
    "Context",
    "Proposition",
    "VariableOperand",
    "OperandCardinality",
    "Operator",
    "PropositionOperator",
    "VariableOperator",
    "Rule",
    "RuleSet",
]
