"""
Operator base classes.

Operators hold an ordered list of operands guarded by a cardinality
contract. Proposition-producing operators additionally implement
``Proposition.evaluate``; value-producing ones implement
``VariableOperand.prepare_value``.
"""

from abc import ABC
from enum import Enum
from typing import Any, List, Optional, Tuple

from rulekit.core.context import Context
from rulekit.core.proposition import Proposition, VariableOperand
from rulekit.exceptions import OperandCardinalityError, OperandTypeError
from rulekit.values import Value
from rulekit.variables.variable import Variable


class OperandCardinality(str, Enum):
    """How many operands an operator accepts."""
    UNARY = "unary"
    BINARY = "binary"
    MULTIPLE = "multiple"


class Operator(ABC):
    """
    Abstract operator over an ordered, growable operand list.

    Subclasses set ``cardinality``; operators with a bounded arity inside
    MULTIPLE also set ``min_operands``/``max_operands``, which are then
    enforced at construction as well.
    """

    cardinality: OperandCardinality = OperandCardinality.MULTIPLE
    min_operands: Optional[int] = None
    max_operands: Optional[int] = None

    def __init__(self, *operands: Any):
        self._operands: List[Any] = []
        for operand in operands:
            self.add_operand(operand)

        minimum, _ = self.arity()
        if self.cardinality == OperandCardinality.BINARY or self.min_operands is not None:
            if len(self._operands) < minimum:
                raise self._cardinality_error(len(self._operands))

    @classmethod
    def arity(cls) -> Tuple[int, Optional[int]]:
        """
        Return the accepted operand count as ``(minimum, maximum)``.

        A maximum of None means unbounded.
        """
        if cls.cardinality == OperandCardinality.UNARY:
            return 1, 1
        if cls.cardinality == OperandCardinality.BINARY:
            return 2, 2
        return (cls.min_operands if cls.min_operands is not None else 1), cls.max_operands

    def add_operand(self, operand: Any) -> None:
        _, maximum = self.arity()
        if maximum is not None and len(self._operands) >= maximum:
            raise self._cardinality_error(len(self._operands) + 1)
        self._operands.append(operand)

    @property
    def operands(self) -> List[Any]:
        """Operands after checking the cardinality contract."""
        minimum, maximum = self.arity()
        count = len(self._operands)
        if count < minimum or (maximum is not None and count > maximum):
            raise self._cardinality_error(count)
        return list(self._operands)

    def _cardinality_error(self, count: int) -> OperandCardinalityError:
        minimum, maximum = self.arity()
        name = type(self).__name__
        if maximum is None:
            expected = f"at least {minimum}"
        elif minimum == maximum:
            expected = f"exactly {minimum}"
        else:
            expected = f"between {minimum} and {maximum}"

        return OperandCardinalityError(
            f"{name} takes {expected} operand(s), got {count}",
            component=name,
            context={"cardinality": self.cardinality.value, "count": count}
        )

    def __repr__(self) -> str:
        args = ", ".join(repr(operand) for operand in self._operands)
        return f"{type(self).__name__}({args})"


class PropositionOperator(Operator):
    """Operator whose operands are Propositions (logical combinators)."""

    def add_operand(self, operand: Any) -> None:
        if not isinstance(operand, Proposition):
            raise OperandTypeError(
                f"{type(self).__name__}: operands must be propositions, got {type(operand).__name__}",
                component=type(self).__name__
            )
        super().add_operand(operand)

    def add_proposition(self, proposition: Proposition) -> None:
        self.add_operand(proposition)


class VariableOperator(Operator):
    """Operator whose operands resolve to Values. Raw data is wrapped in anonymous Variables."""

    def add_operand(self, operand: Any) -> None:
        if not isinstance(operand, VariableOperand):
            operand = Variable(value=operand)
        super().add_operand(operand)

    def add_variable(self, variable: Any) -> None:
        self.add_operand(variable)

    def resolve(self, context: Context) -> List[Value]:
        return [operand.prepare_value(context) for operand in self.operands]
