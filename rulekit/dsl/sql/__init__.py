"""
SQL WHERE clause front-end.
"""

from .parser import SQLWhereParser
from .builder import SQLWhereRuleBuilder
from .serializer import SQLWhereSerializer

__all__ = ["SQLWhereParser", "SQLWhereRuleBuilder", "SQLWhereSerializer"]
