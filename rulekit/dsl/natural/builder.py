"""
Natural Language Rule Builder
"""

from rulekit.dsl.ast import Node
from rulekit.dsl.base import DSLRuleBuilder
from rulekit.dsl.natural.parser import NaturalLanguageParser

VOCABULARY = {
    "and": "logical_and",
    "or": "logical_or",
    "eq": "equal_to",
    "ne": "not_equal_to",
    "gt": "greater_than",
    "gte": "greater_than_or_equal_to",
    "lt": "less_than",
    "lte": "less_than_or_equal_to",
    "between": "between",
    "in": "in",
    "not_in": "not_in",
    "contains": "string_contains",
    "not_contains": "string_does_not_contain",
    "starts_with": "starts_with",
    "ends_with": "ends_with",
}


class NaturalLanguageRuleBuilder(DSLRuleBuilder):
    """
    Build rules from controlled English.

    Example:
        NaturalLanguageRuleBuilder().parse("age is at least 18 and country is US")
    """

    syntax = "natural"
    vocabulary = VOCABULARY

    def parse_ast(self, source: str) -> Node:
        return NaturalLanguageParser(self.separator).parse(source)
