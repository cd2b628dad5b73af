"""
Comparison Operators

Binary and ternary propositions comparing resolved operand values.
"""

from rulekit.core.context import Context
from rulekit.core.operator import OperandCardinality, VariableOperator
from rulekit.core.proposition import Proposition
from rulekit.exceptions import OperandTypeError
from rulekit.values import is_numeric, strict_equal

ARRAY_TYPES = (list, tuple, set, frozenset)


class EqualTo(VariableOperator, Proposition):
    """Loose equality."""
    cardinality = OperandCardinality.BINARY

    def evaluate(self, context: Context) -> bool:
        left, right = self.resolve(context)
        return left.equal_to(right)


class NotEqualTo(VariableOperator, Proposition):
    cardinality = OperandCardinality.BINARY

    def evaluate(self, context: Context) -> bool:
        left, right = self.resolve(context)
        return not left.equal_to(right)


class SameAs(VariableOperator, Proposition):
    """Strict equality: same type and same value."""
    cardinality = OperandCardinality.BINARY

    def evaluate(self, context: Context) -> bool:
        left, right = self.resolve(context)
        return left.same_as(right)


class NotSameAs(VariableOperator, Proposition):
    cardinality = OperandCardinality.BINARY

    def evaluate(self, context: Context) -> bool:
        left, right = self.resolve(context)
        return not left.same_as(right)


class GreaterThan(VariableOperator, Proposition):
    cardinality = OperandCardinality.BINARY

    def evaluate(self, context: Context) -> bool:
        left, right = self.resolve(context)
        return left.greater_than(right)


class GreaterThanOrEqualTo(VariableOperator, Proposition):
    cardinality = OperandCardinality.BINARY

    def evaluate(self, context: Context) -> bool:
        left, right = self.resolve(context)
        if left.value is None or right.value is None:
            return False
        return not left.less_than(right)


class LessThan(VariableOperator, Proposition):
    cardinality = OperandCardinality.BINARY

    def evaluate(self, context: Context) -> bool:
        left, right = self.resolve(context)
        return left.less_than(right)


class LessThanOrEqualTo(VariableOperator, Proposition):
    cardinality = OperandCardinality.BINARY

    def evaluate(self, context: Context) -> bool:
        left, right = self.resolve(context)
        if left.value is None or right.value is None:
            return False
        return not left.greater_than(right)


def _array_operand(name: str, value):
    if not isinstance(value, ARRAY_TYPES):
        raise OperandTypeError(
            f"{name}: second operand must be an array",
            component=name,
            context={"value": value}
        )
    return value


def _contains(array, needle) -> bool:
    return any(strict_equal(item, needle) for item in array)


class In(VariableOperator, Proposition):
    """Strict membership of the first operand in the second (array) operand."""
    cardinality = OperandCardinality.BINARY

    def evaluate(self, context: Context) -> bool:
        needle, haystack = self.resolve(context)
        return _contains(_array_operand("In", haystack.value), needle.value)


class NotIn(VariableOperator, Proposition):
    cardinality = OperandCardinality.BINARY

    def evaluate(self, context: Context) -> bool:
        needle, haystack = self.resolve(context)
        return not _contains(_array_operand("NotIn", haystack.value), needle.value)


class Between(VariableOperator, Proposition):
    """Inclusive numeric range check: ``Between(value, min, max)``."""
    min_operands = 3
    max_operands = 3

    def evaluate(self, context: Context) -> bool:
        value, low, high = (operand.value for operand in self.resolve(context))
        if not (is_numeric(value) and is_numeric(low) and is_numeric(high)):
            raise OperandTypeError(
                "Between: all values must be numeric",
                component="Between",
                context={"value": value, "min": low, "max": high}
            )
        return low <= value <= high
