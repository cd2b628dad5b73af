"""
JMESPath Rule Builder
"""

import logging
from typing import Any

from rulekit.core.proposition import Proposition
from rulekit.dsl.ast import Node
from rulekit.dsl.base import DSLRuleBuilder
from rulekit.dsl.jmespath.parser import JMESPathParser
from rulekit.dsl.jmespath.proposition import JMESPathProposition

logger = logging.getLogger(__name__)

VOCABULARY = {
    "or": "logical_or",
    "and": "logical_and",
    "not": "logical_not",
    "eq": "equal_to",
    "ne": "not_equal_to",
    "lt": "less_than",
    "lte": "less_than_or_equal_to",
    "gt": "greater_than",
    "gte": "greater_than_or_equal_to",
    "contains": "string_contains",
    "starts_with": "starts_with",
    "ends_with": "ends_with",
}


class JMESPathRuleBuilder(DSLRuleBuilder):
    """
    Build rules from JMESPath queries.

    Boolean queries over fields compile to the shared operator tree; any
    other valid query is evaluated by the JMESPath runtime.

    Example:
        JMESPathRuleBuilder().parse("age >= `18` && country == 'US'")
        JMESPathRuleBuilder().parse("length(tags[?active]) > `2`")
    """

    syntax = "jmespath"
    vocabulary = VOCABULARY

    def parse_ast(self, source: str) -> Node:
        return JMESPathParser(self.separator).parse(source)

    def compile(self, source: Any) -> Proposition:
        parser = JMESPathParser(self.separator)
        query = parser.compile_query(source)
        node = parser.lower(query.parsed)

        if node is None:
            parser.check_functions(query.parsed)
            logger.debug(f"[{self.syntax}] evaluating with the JMESPath runtime: {source}")
            return JMESPathProposition(source, query)

        proposition = self.compiler.compile(node)
        logger.debug(f"[{self.syntax}] compiled {proposition!r}")
        return proposition
