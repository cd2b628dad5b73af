"""
Infix expression front-end.
"""

from .parser import ExpressionParser
from .builder import ExpressionRuleBuilder
from .serializer import ExpressionSerializer

__all__ = ["ExpressionParser", "ExpressionRuleBuilder", "ExpressionSerializer"]
