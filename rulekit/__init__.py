"""
Rulekit

Rule evaluation engine: compose conditions over a runtime context from
operators, or compile them from infix expressions, JMESPath filters,
controlled English, MongoDB queries, GraphQL filters, SQL WHERE clauses,
LDAP filters and JSON/YAML rule documents.
"""

# core must load before the variables package it depends on
from rulekit.values import Set, Value
from rulekit.core import (
    Context,
    Operator,
    Proposition,
    PropositionOperator,
    Rule,
    RuleSet,
    VariableOperand,
    VariableOperator,
)
from rulekit.variables import Variable, VariableProperty
from rulekit.builder import OperatorRegistry, RuleBuilder, default_registry
from rulekit.core.rule_evaluator import RuleEvaluator
from rulekit.dsl.expression import ExpressionRuleBuilder, ExpressionSerializer
from rulekit.dsl.jmespath import JMESPathRuleBuilder, JMESPathSerializer
from rulekit.dsl.natural import NaturalLanguageRuleBuilder, NaturalLanguageSerializer
from rulekit.dsl.mongo import MongoQueryRuleBuilder, MongoQuerySerializer
from rulekit.dsl.graphql import GraphQLFilterRuleBuilder, GraphQLFilterSerializer
from rulekit.dsl.sql import SQLWhereRuleBuilder, SQLWhereSerializer
from rulekit.dsl.ldap import LDAPFilterRuleBuilder, LDAPFilterSerializer
from rulekit.dsl.validation import ValidationResult
from rulekit.rules_engine import RulesEngine
from rulekit.config import RulekitConfig, load_config
from rulekit.logging_setup import setup_logging
from rulekit.exceptions import RulekitError

__version__ = "1.0.0"

__all__ = [
    "Set",
    "Value",
    "Context",
    "Operator",
    "Proposition",
    "PropositionOperator",
    "Rule",
    "RuleSet",
    "VariableOperand",
    "VariableOperator",
    "Variable",
    "VariableProperty",
    "OperatorRegistry",
    "RuleBuilder",
    "default_registry",
    "RuleEvaluator",
    "ExpressionRuleBuilder",
    "ExpressionSerializer",
    "JMESPathRuleBuilder",
    "JMESPathSerializer",
    "NaturalLanguageRuleBuilder",
    "NaturalLanguageSerializer",
    "MongoQueryRuleBuilder",
    "MongoQuerySerializer",
    "GraphQLFilterRuleBuilder",
    "GraphQLFilterSerializer",
    "SQLWhereRuleBuilder",
    "SQLWhereSerializer",
    "LDAPFilterRuleBuilder",
    "LDAPFilterSerializer",
    "ValidationResult",
    "RulesEngine",
    "RulekitConfig",
    "load_config",
    "setup_logging",
    "RulekitError",
]
