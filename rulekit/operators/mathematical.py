"""
Mathematical Operators

Value-producing operators. Every resolved operand must be numeric.
"""

from decimal import ROUND_HALF_UP, Decimal

from rulekit.core.context import Context
from rulekit.core.operator import OperandCardinality, VariableOperator
from rulekit.core.proposition import VariableOperand
from rulekit.exceptions import OperandTypeError
from rulekit.values import Value, is_numeric


def _require_numeric(name: str, value, role: str = "value"):
    if not is_numeric(value):
        raise OperandTypeError(
            f"{name}: {role} must be numeric",
            component=name,
            context={role: value}
        )
    return value


class BinaryArithmetic(VariableOperator, VariableOperand):
    cardinality = OperandCardinality.BINARY
    method = ""

    def prepare_value(self, context: Context) -> Value:
        left, right = self.resolve(context)
        return Value(getattr(left, self.method)(right))


class Addition(BinaryArithmetic):
    method = "add"


class Subtraction(BinaryArithmetic):
    method = "subtract"


class Multiplication(BinaryArithmetic):
    method = "multiply"


class Division(BinaryArithmetic):
    """Raises DivisionByZeroError on a zero divisor."""
    method = "divide"


class Modulo(BinaryArithmetic):
    method = "modulo"


class Exponentiate(BinaryArithmetic):
    method = "exponentiate"


class Negation(VariableOperator, VariableOperand):
    cardinality = OperandCardinality.UNARY

    def prepare_value(self, context: Context) -> Value:
        (operand,) = self.resolve(context)
        return Value(operand.negate())


class Abs(VariableOperator, VariableOperand):
    cardinality = OperandCardinality.UNARY

    def prepare_value(self, context: Context) -> Value:
        (operand,) = self.resolve(context)
        return Value(abs(_require_numeric("Abs", operand.value)))


class Ceil(VariableOperator, VariableOperand):
    cardinality = OperandCardinality.UNARY

    def prepare_value(self, context: Context) -> Value:
        (operand,) = self.resolve(context)
        return Value(operand.ceil())


class Floor(VariableOperator, VariableOperand):
    cardinality = OperandCardinality.UNARY

    def prepare_value(self, context: Context) -> Value:
        (operand,) = self.resolve(context)
        return Value(operand.floor())


class Round(VariableOperator, VariableOperand):
    """
    ``Round(value, precision=0)``, halves rounded away from zero.

    A precision of 0 or below yields an int.
    """
    min_operands = 1
    max_operands = 2

    def prepare_value(self, context: Context) -> Value:
        values = [operand.value for operand in self.resolve(context)]
        value = _require_numeric("Round", values[0])
        precision = 0
        if len(values) > 1:
            precision = int(_require_numeric("Round", values[1], role="precision"))
        rounded = Decimal(str(value)).quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
        if precision <= 0:
            return Value(int(rounded))
        return Value(float(rounded))


class Min(VariableOperator, VariableOperand):
    """Smallest element of an array operand; a scalar is returned as-is and an empty array gives None."""
    cardinality = OperandCardinality.UNARY

    def prepare_value(self, context: Context) -> Value:
        (operand,) = self.resolve(context)
        return Value(operand.as_set().min())


class Max(VariableOperator, VariableOperand):
    cardinality = OperandCardinality.UNARY

    def prepare_value(self, context: Context) -> Value:
        (operand,) = self.resolve(context)
        return Value(operand.as_set().max())
