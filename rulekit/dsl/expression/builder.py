"""
Expression Rule Builder

Compiles infix expressions into operator trees.
"""

from rulekit.dsl.ast import Node
from rulekit.dsl.base import DSLRuleBuilder
from rulekit.dsl.expression.parser import ExpressionParser

VOCABULARY = {
    "or": "logical_or",
    "xor": "logical_xor",
    "and": "logical_and",
    "not": "logical_not",
    "==": "equal_to",
    "!=": "not_equal_to",
    "===": "same_as",
    "!==": "not_same_as",
    "<": "less_than",
    "<=": "less_than_or_equal_to",
    ">": "greater_than",
    ">=": "greater_than_or_equal_to",
    "in": "in",
    "not in": "not_in",
    "matches": "matches",
    "+": "addition",
    "-": "subtraction",
    "*": "multiplication",
    "/": "division",
    "%": "modulo",
    "**": "exponentiate",
    "neg": "negation",
    "contains": "string_contains",
    "startsWith": "starts_with",
    "endsWith": "ends_with",
}


class ExpressionRuleBuilder(DSLRuleBuilder):
    """
    Build rules from infix expressions.

    Example:
        builder = ExpressionRuleBuilder()
        rule = builder.parse('age >= 18 and country == "US"')
        rule.evaluate(Context({"age": 20, "country": "US"}))
    """

    syntax = "expression"
    vocabulary = VOCABULARY

    def parse_ast(self, source: str) -> Node:
        return ExpressionParser(self.separator).parse(source)
