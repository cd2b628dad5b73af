"""
LDAP Filter Rule Builder
"""

from rulekit.dsl.ast import Node
from rulekit.dsl.base import DSLRuleBuilder
from rulekit.dsl.ldap.parser import LDAPFilterParser

VOCABULARY = {
    "and": "logical_and",
    "or": "logical_or",
    "not": "logical_not",
    "=": "equal_to",
    "!=": "not_equal_to",
    ">=": "greater_than_or_equal_to",
    "<=": "less_than_or_equal_to",
    ">": "greater_than",
    "<": "less_than",
    "~=": "string_contains_insensitive",
    "like": "matches",
    "is_null": "is_null",
}


class LDAPFilterRuleBuilder(DSLRuleBuilder):
    """
    Build rules from LDAP search filters.

    Presence tests compile to ``not is_null``; wildcard values compile to
    anchored regular expressions.

    Example:
        LDAPFilterRuleBuilder().parse("(&(age>=18)(|(country=US)(country=CA)))")
    """

    syntax = "ldap"
    vocabulary = VOCABULARY

    def parse_ast(self, source: str) -> Node:
        return LDAPFilterParser(self.separator).parse(source)
