"""
Date Operators

Chronological comparisons. Operands may be datetime or date objects,
ISO-8601 strings, or numeric POSIX timestamps. Naive values are read as UTC.
"""

from datetime import date, datetime, timezone

from rulekit.core.context import Context
from rulekit.core.operator import OperandCardinality, VariableOperator
from rulekit.core.proposition import Proposition
from rulekit.exceptions import InvalidDateError, OperandTypeError
from rulekit.values import is_numeric


def to_datetime(name: str, value) -> datetime:
    """
    Convert a date/time representation into an aware datetime.

    Args:
        name: Operator name used in error messages
        value: datetime, date, ISO-8601 string or POSIX timestamp

    Returns:
        Timezone-aware datetime

    Raises:
        OperandTypeError: If the value is not a date/time representation
        InvalidDateError: If a string or timestamp cannot be converted
    """
    if isinstance(value, datetime):
        result = value
    elif isinstance(value, date):
        result = datetime(value.year, value.month, value.day)
    elif is_numeric(value):
        try:
            result = datetime.fromtimestamp(float(value), tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise InvalidDateError(
                f"{name}: timestamp out of range: {value}",
                component=name
            ) from e
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            result = datetime.fromisoformat(text)
        except ValueError as e:
            raise InvalidDateError(
                f"{name}: unable to parse date {value!r}",
                component=name,
                context={"value": value}
            ) from e
    else:
        raise OperandTypeError(
            f"{name}: values must be valid date/time representations",
            component=name,
            context={"type": type(value).__name__}
        )

    if result.tzinfo is None:
        result = result.replace(tzinfo=timezone.utc)
    return result


class Before(VariableOperator, Proposition):
    """True when the first date is strictly earlier than the second."""
    cardinality = OperandCardinality.BINARY

    def evaluate(self, context: Context) -> bool:
        left, right = self.resolve(context)
        return to_datetime("Before", left.value) < to_datetime("Before", right.value)


class After(VariableOperator, Proposition):
    cardinality = OperandCardinality.BINARY

    def evaluate(self, context: Context) -> bool:
        left, right = self.resolve(context)
        return to_datetime("After", left.value) > to_datetime("After", right.value)


class IsBetweenDates(VariableOperator, Proposition):
    """``IsBetweenDates(date, start, end)``, inclusive of both boundaries."""
    min_operands = 3
    max_operands = 3

    def evaluate(self, context: Context) -> bool:
        moment, start, end = (
            to_datetime("IsBetweenDates", value.value) for value in self.resolve(context)
        )
        return start <= moment <= end
