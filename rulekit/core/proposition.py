"""
Evaluation contracts shared by operators, variables and rules.
"""

from abc import ABC, abstractmethod

from rulekit.core.context import Context
from rulekit.values import Value


class Proposition(ABC):
    """Anything that evaluates to a boolean against a Context."""

    @abstractmethod
    def evaluate(self, context: Context) -> bool:
        ...


class VariableOperand(ABC):
    """Anything that resolves to a Value against a Context."""

    @abstractmethod
    def prepare_value(self, context: Context) -> Value:
        ...
