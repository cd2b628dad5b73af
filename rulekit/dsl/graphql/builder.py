"""
GraphQL Filter Rule Builder
"""

from typing import Any, Dict, Union

from rulekit.dsl.ast import Node
from rulekit.dsl.base import DSLRuleBuilder
from rulekit.dsl.graphql.parser import GraphQLFilterParser

VOCABULARY = {
    "AND": "logical_and",
    "OR": "logical_or",
    "NOT": "logical_not",
    "eq": "equal_to",
    "ne": "not_equal_to",
    "gt": "greater_than",
    "gte": "greater_than_or_equal_to",
    "lt": "less_than",
    "lte": "less_than_or_equal_to",
    "in": "in",
    "notIn": "not_in",
    "contains": "string_contains",
    "notContains": "string_does_not_contain",
    "containsInsensitive": "string_contains_insensitive",
    "notContainsInsensitive": "string_does_not_contain_insensitive",
    "startsWith": "starts_with",
    "endsWith": "ends_with",
    "match": "matches",
}


class GraphQLFilterRuleBuilder(DSLRuleBuilder):
    """
    Build rules from GraphQL filter objects.

    Example:
        GraphQLFilterRuleBuilder().parse({"age": {"gte": 18}, "country": "US"})
    """

    syntax = "graphql"
    vocabulary = VOCABULARY

    def parse_ast(self, source: Union[str, Dict[str, Any]]) -> Node:
        return GraphQLFilterParser(self.separator).parse(source)
