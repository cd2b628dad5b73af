"""
SQL WHERE Rule Builder
"""

from rulekit.dsl.ast import Node
from rulekit.dsl.base import DSLRuleBuilder
from rulekit.dsl.sql.parser import SQLWhereParser

VOCABULARY = {
    "or": "logical_or",
    "and": "logical_and",
    "not": "logical_not",
    "=": "equal_to",
    "!=": "not_equal_to",
    "<>": "not_equal_to",
    "<": "less_than",
    "<=": "less_than_or_equal_to",
    ">": "greater_than",
    ">=": "greater_than_or_equal_to",
    "in": "in",
    "not_in": "not_in",
    "between": "between",
    "is_null": "is_null",
    "like": "matches",
    "not_like": "does_not_match",
}


class SQLWhereRuleBuilder(DSLRuleBuilder):
    """
    Build rules from SQL WHERE conditions.

    ``LIKE`` patterns compile to anchored regular expressions, so matching
    is case-sensitive.

    Example:
        SQLWhereRuleBuilder().parse("age >= 18 AND country IN ('US', 'CA')")
    """

    syntax = "sql"
    vocabulary = VOCABULARY

    def parse_ast(self, source: str) -> Node:
        return SQLWhereParser(self.separator).parse(source)
