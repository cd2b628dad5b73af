"""
MongoDB Query Rule Builder
"""

from typing import Any, Dict, Union

from rulekit.dsl.ast import Node
from rulekit.dsl.base import DSLRuleBuilder
from rulekit.dsl.mongo.parser import MongoQueryParser

VOCABULARY = {
    "$and": "logical_and",
    "$or": "logical_or",
    "$nor": "logical_nor",
    "$xor": "logical_xor",
    "$nand": "logical_nand",
    "$eq": "equal_to",
    "$ne": "not_equal_to",
    "$gt": "greater_than",
    "$gte": "greater_than_or_equal_to",
    "$lt": "less_than",
    "$lte": "less_than_or_equal_to",
    "$in": "in",
    "$nin": "not_in",
    "$same": "same_as",
    "$nsame": "not_same_as",
    "$between": "between",
    "$regex": "matches",
    "$notRegex": "does_not_match",
    "$contains": "string_contains",
    "$containsi": "string_contains_insensitive",
    "$notContains": "string_does_not_contain",
    "$notContainsi": "string_does_not_contain_insensitive",
    "$startsWith": "starts_with",
    "$startsWithi": "starts_with_insensitive",
    "$endsWith": "ends_with",
    "$endsWithi": "ends_with_insensitive",
    "$strLength": "string_length",
    "$size": "array_count",
    "$after": "after",
    "$before": "before",
    "$betweenDates": "is_between_dates",
}


class MongoQueryRuleBuilder(DSLRuleBuilder):
    """
    Build rules from MongoDB-style query documents.

    Example:
        MongoQueryRuleBuilder().parse({"age": {"$gte": 18}, "country": "US"})
    """

    syntax = "mongo"
    vocabulary = VOCABULARY

    def parse_ast(self, source: Union[str, Dict[str, Any]]) -> Node:
        return MongoQueryParser().parse(source)
