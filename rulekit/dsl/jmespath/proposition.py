"""
Proposition evaluating a whole JMESPath query with the jmespath runtime.
"""

from typing import Any, Optional

import jmespath
from jmespath import exceptions as jmespath_exceptions
from jmespath.parser import ParsedResult

from rulekit.core.context import Context
from rulekit.core.proposition import Proposition
from rulekit.exceptions import OperandCardinalityError, OperandTypeError


def is_truthy(result: Any) -> bool:
    """Booleans as-is; null, empty string, empty array, empty object and zero are false."""
    if isinstance(result, bool):
        return result
    if result is None:
        return False
    if isinstance(result, (str, list, dict)):
        return len(result) > 0
    if isinstance(result, (int, float)):
        return result != 0
    return True


class JMESPathProposition(Proposition):
    """
    Query that holds when its JMESPath result is truthy.

    The query runs against a plain dict built from every Context entry.
    """

    def __init__(self, expression: str, parsed: Optional[ParsedResult] = None):
        self.expression = expression
        self.parsed = parsed or jmespath.compile(expression)

    def evaluate(self, context: Context) -> bool:
        data = {key: context[key] for key in context}
        try:
            result = self.parsed.search(data)
        except jmespath_exceptions.JMESPathTypeError as e:
            raise OperandTypeError(str(e), component="JMESPathProposition", context={"query": self.expression})
        except jmespath_exceptions.ArityError as e:
            raise OperandCardinalityError(str(e), component="JMESPathProposition", context={"query": self.expression})
        return is_truthy(result)

    def __repr__(self) -> str:
        return f"JMESPathProposition({self.expression!r})"
