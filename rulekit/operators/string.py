"""
String Operators

Prefix, suffix, substring and regular expression checks. Operands must
resolve to strings.
"""

import re

from rulekit.core.context import Context
from rulekit.core.operator import OperandCardinality, VariableOperator
from rulekit.core.proposition import Proposition, VariableOperand
from rulekit.exceptions import InvalidPatternError, OperandTypeError
from rulekit.values import Value


class StringPredicate(VariableOperator, Proposition):
    cardinality = OperandCardinality.BINARY
    method = ""
    insensitive = False
    negate = False

    def evaluate(self, context: Context) -> bool:
        left, right = self.resolve(context)
        result = getattr(left, self.method)(right, insensitive=self.insensitive)
        return not result if self.negate else result


class StartsWith(StringPredicate):
    method = "starts_with"


class StartsWithInsensitive(StringPredicate):
    method = "starts_with"
    insensitive = True


class EndsWith(StringPredicate):
    method = "ends_with"


class EndsWithInsensitive(StringPredicate):
    method = "ends_with"
    insensitive = True


class StringContains(StringPredicate):
    method = "string_contains"


class StringContainsInsensitive(StringPredicate):
    method = "string_contains"
    insensitive = True


class StringDoesNotContain(StringPredicate):
    method = "string_contains"
    negate = True


class StringDoesNotContainInsensitive(StringPredicate):
    method = "string_contains"
    insensitive = True
    negate = True


def _search(name: str, subject, pattern) -> bool:
    if not isinstance(subject, str) or not isinstance(pattern, str):
        raise OperandTypeError(
            f"{name}: value and pattern must be strings",
            component=name,
            context={"value": subject, "pattern": pattern}
        )
    try:
        return re.search(pattern, subject) is not None
    except re.error as e:
        raise InvalidPatternError(
            f"{name}: invalid regular expression {pattern!r}: {e}",
            component=name,
            context={"pattern": pattern}
        )


class Matches(VariableOperator, Proposition):
    """Regular expression search. The pattern is passed to ``re`` unmodified."""
    cardinality = OperandCardinality.BINARY

    def evaluate(self, context: Context) -> bool:
        subject, pattern = self.resolve(context)
        return _search("Matches", subject.value, pattern.value)


class DoesNotMatch(VariableOperator, Proposition):
    cardinality = OperandCardinality.BINARY

    def evaluate(self, context: Context) -> bool:
        subject, pattern = self.resolve(context)
        return not _search("DoesNotMatch", subject.value, pattern.value)


class StringLength(VariableOperator, VariableOperand):
    cardinality = OperandCardinality.UNARY

    def prepare_value(self, context: Context) -> Value:
        (operand,) = self.resolve(context)
        if not isinstance(operand.value, str):
            raise OperandTypeError(
                "StringLength: value must be a string",
                component="StringLength",
                context={"value": operand.value}
            )
        return Value(len(operand.value))
