"""
Set Operators

Set algebra over resolved operands. Scalars are coerced into one-element
sets before any operation runs.
"""

from functools import reduce

from rulekit.core.context import Context
from rulekit.core.operator import OperandCardinality, VariableOperator
from rulekit.core.proposition import Proposition, VariableOperand
from rulekit.values import Value


class SetFold(VariableOperator, VariableOperand):
    """Folds the operands left to right, seeded by the first one."""
    cardinality = OperandCardinality.MULTIPLE
    method = ""

    def prepare_value(self, context: Context) -> Value:
        sets = [value.as_set() for value in self.resolve(context)]
        result = reduce(lambda acc, item: getattr(acc, self.method)(item), sets[1:], sets[0])
        return Value(result.value)


class Union(SetFold):
    method = "union"


class Intersect(SetFold):
    method = "intersect"


class Complement(SetFold):
    method = "complement"


class SymmetricDifference(VariableOperator, VariableOperand):
    cardinality = OperandCardinality.BINARY

    def prepare_value(self, context: Context) -> Value:
        left, right = self.resolve(context)
        return Value(left.as_set().symmetric_difference(right.as_set()).value)


class ContainsSubset(VariableOperator, Proposition):
    cardinality = OperandCardinality.BINARY

    def evaluate(self, context: Context) -> bool:
        left, right = self.resolve(context)
        return left.as_set().contains_subset(right.as_set())


class DoesNotContainSubset(VariableOperator, Proposition):
    cardinality = OperandCardinality.BINARY

    def evaluate(self, context: Context) -> bool:
        left, right = self.resolve(context)
        return not left.as_set().contains_subset(right.as_set())


class SetContains(VariableOperator, Proposition):
    """Strict membership of the second operand in the first operand's set."""
    cardinality = OperandCardinality.BINARY

    def evaluate(self, context: Context) -> bool:
        left, right = self.resolve(context)
        return left.as_set().set_contains(right.value)


class SetDoesNotContain(VariableOperator, Proposition):
    cardinality = OperandCardinality.BINARY

    def evaluate(self, context: Context) -> bool:
        left, right = self.resolve(context)
        return not left.as_set().set_contains(right.value)
