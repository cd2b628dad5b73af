"""
Rules Engine Main Class

Central orchestrator: compiles rules from any supported syntax, keeps them
in a rule set and executes them against a context.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from rulekit.builder.registry import OperatorRegistry, default_registry
from rulekit.builder.rule_builder import RuleBuilder
from rulekit.config import SUPPORTED_SYNTAXES, RulekitConfig
from rulekit.core.context import Context
from rulekit.core.rule import Rule, RuleSet
from rulekit.dsl.base import DSLRuleBuilder
from rulekit.dsl.expression import ExpressionRuleBuilder, ExpressionSerializer
from rulekit.dsl.graphql import GraphQLFilterRuleBuilder, GraphQLFilterSerializer
from rulekit.dsl.jmespath import JMESPathRuleBuilder, JMESPathSerializer
from rulekit.dsl.ldap import LDAPFilterRuleBuilder, LDAPFilterSerializer
from rulekit.dsl.mongo import MongoQueryRuleBuilder, MongoQuerySerializer
from rulekit.dsl.natural import NaturalLanguageRuleBuilder, NaturalLanguageSerializer
from rulekit.dsl.sql import SQLWhereRuleBuilder, SQLWhereSerializer
from rulekit.dsl.validation import ValidationResult
from rulekit.exceptions import ConfigurationError

BUILDERS = {
    "expression": ExpressionRuleBuilder,
    "jmespath": JMESPathRuleBuilder,
    "natural": NaturalLanguageRuleBuilder,
    "mongo": MongoQueryRuleBuilder,
    "graphql": GraphQLFilterRuleBuilder,
    "sql": SQLWhereRuleBuilder,
    "ldap": LDAPFilterRuleBuilder,
}


class RulesEngine:
    """
    Main rules engine orchestrator.

    All front-ends share one operator registry, so a custom operator
    registered on the engine is available in every syntax.

    Example:
        engine = RulesEngine()
        engine.add_rule('age >= 18', name="adult")
        engine.add_rule({"country": "US"}, syntax="mongo", name="domestic")
        engine.execute({"age": 20, "country": "US"})
    """

    def __init__(
        self,
        config: Optional[RulekitConfig] = None,
        registry: Optional[OperatorRegistry] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize rules engine.

        Args:
            config: Engine configuration, defaults to ``RulekitConfig()``
            registry: Operator registry, defaults to the built-in operators
            logger: Optional logger instance
        """
        self.config = config or RulekitConfig()
        self.config.validate()
        self.logger = logger or logging.getLogger(__name__)

        self.registry = registry or default_registry()
        self.rule_builder = RuleBuilder(self.registry)

        self.builders: Dict[str, DSLRuleBuilder] = {
            syntax: builder_class(self.rule_builder, config=self.config.dsl)
            for syntax, builder_class in BUILDERS.items()
        }
        separator = self.config.dsl.field_separator
        self.serializers: Dict[str, Any] = {
            "expression": ExpressionSerializer(),
            "jmespath": JMESPathSerializer(),
            "natural": NaturalLanguageSerializer(),
            "mongo": MongoQuerySerializer(separator),
            "graphql": GraphQLFilterSerializer(separator),
            "sql": SQLWhereSerializer(),
            "ldap": LDAPFilterSerializer(),
        }

        self.rule_set = RuleSet()
        self._named_rules: List[Tuple[str, Rule]] = []

    def builder(self, syntax: Optional[str] = None) -> DSLRuleBuilder:
        """
        Get the rule builder for a syntax.

        Raises:
            ConfigurationError: If the syntax is not supported
        """
        syntax = syntax or self.config.dsl.default_syntax
        if syntax not in self.builders:
            raise ConfigurationError(
                f"Unsupported syntax: {syntax}. Expected one of {', '.join(SUPPORTED_SYNTAXES)}",
                component="RulesEngine"
            )
        return self.builders[syntax]

    def compile(self, source: Any, syntax: Optional[str] = None, action: Optional[Any] = None) -> Rule:
        """
        Compile source into a Rule without registering it.

        Args:
            source: Rule text or document in the given syntax
            syntax: Front-end name, defaults to the configured syntax
            action: Optional callable attached to the rule

        Returns:
            Compiled Rule
        """
        return self.builder(syntax).parse_with_action(source, action)

    def validate(self, source: Any, syntax: Optional[str] = None) -> ValidationResult:
        return self.builder(syntax).validate(source)

    def serialize(self, rule: Any, syntax: Optional[str] = None) -> Any:
        """
        Write a Rule or Proposition in the given syntax.

        Raises:
            ConfigurationError: If the syntax is not supported
            SerializationError: If the tree cannot be expressed in that syntax
        """
        syntax = syntax or self.config.dsl.default_syntax
        if syntax not in self.serializers:
            raise ConfigurationError(f"Unsupported syntax: {syntax}", component="RulesEngine")
        return self.serializers[syntax].serialize(rule)

    def add_rule(
        self,
        source: Union[Rule, Any],
        syntax: Optional[str] = None,
        action: Optional[Any] = None,
        name: Optional[str] = None
    ) -> Rule:
        """
        Add a rule to the engine.

        Args:
            source: A compiled Rule, or source to compile
            syntax: Front-end name for source
            action: Optional callable, ignored when a Rule is given
            name: Name reported in execution summaries

        Returns:
            The registered Rule
        """
        rule = source if isinstance(source, Rule) else self.compile(source, syntax, action)

        if any(existing is rule for _, existing in self._named_rules):
            self.logger.debug(f"Rule already registered: {rule!r}")
            return rule

        name = name or f"rule_{len(self._named_rules) + 1}"
        self.rule_set.add_rule(rule)
        self._named_rules.append((name, rule))
        self.logger.info(f"Added rule '{name}'")
        return rule

    @property
    def rules(self) -> List[Rule]:
        return list(self.rule_set)

    def execute(self, context: Union[Context, Dict[str, Any]]) -> Dict[str, Any]:
        """
        Evaluate every rule and run the actions of those that hold.

        Args:
            context: Context or plain mapping of values

        Returns:
            Summary of evaluation and execution
        """
        if not isinstance(context, Context):
            context = Context(context)

        triggered_rules = []
        for name, rule in self._named_rules:
            matched = rule.execute(context) if rule.action is not None else rule.evaluate(context)
            if matched:
                triggered_rules.append(name)

        if triggered_rules:
            self.logger.info(f"{len(triggered_rules)} rule(s) triggered")
        self.logger.debug(f"Evaluated {len(self._named_rules)} rule(s): {triggered_rules}")

        return {
            'evaluated_count': len(self._named_rules),
            'triggered_count': len(triggered_rules),
            'triggered_rules': triggered_rules
        }
