"""
Base class for the DSL rule builders.

A front-end only implements ``parse_ast`` (source to shared AST) and
supplies its vocabulary; compilation, rule wrapping and validation are
shared.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from rulekit.builder.registry import OperatorRegistry
from rulekit.builder.rule_builder import RuleBuilder
from rulekit.config import DSLConfig
from rulekit.core.proposition import Proposition
from rulekit.core.rule import Rule
from rulekit.dsl.ast import Node
from rulekit.dsl.compiler import RuleCompiler
from rulekit.dsl.field_resolver import FieldResolver
from rulekit.dsl.validation import ValidationIssue, ValidationResult, snippet
from rulekit.exceptions import DSLSyntaxError, RulekitError

logger = logging.getLogger(__name__)


class DSLRuleBuilder(ABC):
    """
    Shared compile pipeline for one surface syntax.

    Args:
        rule_builder: Builder whose variables and registry are used
        registry: Operator registry when no builder is given
        config: DSL settings (field separator, maximum depth)
    """

    syntax: str = ""
    vocabulary: Dict[str, str] = {}

    def __init__(
        self,
        rule_builder: Optional[RuleBuilder] = None,
        registry: Optional[OperatorRegistry] = None,
        config: Optional[DSLConfig] = None
    ):
        self.config = config or DSLConfig()
        self.rule_builder = rule_builder or RuleBuilder(registry)
        self.field_resolver = FieldResolver(self.rule_builder, separator=self.config.field_separator)
        self.compiler = RuleCompiler(
            self.field_resolver,
            registry=self.rule_builder.registry,
            vocabulary=self.vocabulary,
            max_depth=self.config.max_depth,
        )

    @property
    def separator(self) -> str:
        return self.config.field_separator

    @abstractmethod
    def parse_ast(self, source: Any) -> Node:
        """Parse source into the shared AST."""

    def compile(self, source: Any) -> Proposition:
        """
        Compile source into a proposition.

        Raises:
            DSLSyntaxError: If the source cannot be parsed
            CompileError: If the parsed tree cannot be compiled
            UnknownOperatorError: If an operator is not registered
        """
        node = self.parse_ast(source)
        proposition = self.compiler.compile(node)
        logger.debug(f"[{self.syntax}] compiled {proposition!r}")
        return proposition

    def parse(self, source: Any) -> Rule:
        return self.rule_builder.create(self.compile(source))

    def parse_with_action(self, source: Any, action: Optional[Any]) -> Rule:
        """
        Compile source into a Rule carrying an action.

        Args:
            source: Rule text or document
            action: Callable run by ``Rule.execute`` when the rule holds

        Returns:
            Rule wrapping the compiled proposition
        """
        return self.rule_builder.create(self.compile(source), action)

    def validate(self, source: Any) -> ValidationResult:
        """
        Check that source compiles, without raising.

        Returns:
            ValidationResult with one issue per failure
        """
        try:
            self.compile(source)
        except DSLSyntaxError as e:
            return ValidationResult.failure([
                ValidationIssue(
                    message=e.message,
                    position=e.position,
                    context=snippet(source, e.position),
                )
            ])
        except RulekitError as e:
            return ValidationResult.failure([ValidationIssue(message=e.message)])

        return ValidationResult.success()
