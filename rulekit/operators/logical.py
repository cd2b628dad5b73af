"""
Logical Operators

Boolean combinators over a growable list of propositions. Evaluating any
of them without operands is a structural error.
"""

from rulekit.core.context import Context
from rulekit.core.operator import OperandCardinality, PropositionOperator
from rulekit.core.proposition import Proposition


class LogicalOperator(PropositionOperator, Proposition):
    cardinality = OperandCardinality.MULTIPLE

    def _results(self, context: Context):
        return (proposition.evaluate(context) for proposition in self.operands)


class LogicalAnd(LogicalOperator):
    def evaluate(self, context: Context) -> bool:
        return all(self._results(context))


class LogicalOr(LogicalOperator):
    def evaluate(self, context: Context) -> bool:
        return any(self._results(context))


class LogicalXor(LogicalOperator):
    """True when exactly one operand is true."""

    def evaluate(self, context: Context) -> bool:
        return sum(1 for result in self._results(context) if result) == 1


class LogicalNand(LogicalOperator):
    def evaluate(self, context: Context) -> bool:
        return not all(self._results(context))


class LogicalNor(LogicalOperator):
    def evaluate(self, context: Context) -> bool:
        return not any(self._results(context))


class LogicalNot(LogicalOperator):
    """Negation of exactly one proposition."""
    cardinality = OperandCardinality.UNARY

    def evaluate(self, context: Context) -> bool:
        (proposition,) = self.operands
        return not proposition.evaluate(context)
