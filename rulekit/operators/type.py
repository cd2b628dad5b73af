"""
Type Operators

Type predicates and introspection. These never raise on any input.
"""

from collections.abc import Sized

from rulekit.core.context import Context
from rulekit.core.operator import OperandCardinality, VariableOperator
from rulekit.core.proposition import Proposition, VariableOperand
from rulekit.values import Value, is_numeric

ARRAY_TYPES = (list, tuple, set, frozenset)


class TypePredicate(VariableOperator, Proposition):
    cardinality = OperandCardinality.UNARY

    def evaluate(self, context: Context) -> bool:
        (operand,) = self.resolve(context)
        return self.check(operand.value)

    def check(self, value) -> bool:
        raise NotImplementedError


class IsNull(TypePredicate):
    def check(self, value) -> bool:
        return value is None


class IsBoolean(TypePredicate):
    def check(self, value) -> bool:
        return isinstance(value, bool)


class IsNumeric(TypePredicate):
    def check(self, value) -> bool:
        return is_numeric(value)


class IsString(TypePredicate):
    def check(self, value) -> bool:
        return isinstance(value, str)


class IsArray(TypePredicate):
    def check(self, value) -> bool:
        return isinstance(value, ARRAY_TYPES)


class IsEmpty(TypePredicate):
    """None, False, zero and empty strings or collections are empty."""

    def check(self, value) -> bool:
        return not value


class ArrayCount(VariableOperator, VariableOperand):
    """Length of a collection. None counts as 0 and any other scalar as 1."""
    cardinality = OperandCardinality.UNARY

    def prepare_value(self, context: Context) -> Value:
        (operand,) = self.resolve(context)
        value = operand.value
        if value is None:
            return Value(0)
        if isinstance(value, Sized) and not isinstance(value, (str, bytes)):
            return Value(len(value))
        return Value(1)
