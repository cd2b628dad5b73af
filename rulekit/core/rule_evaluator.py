"""
Rule Evaluator

Compiles nested dict/JSON/YAML rule definitions into operator trees and
evaluates them against plain nested data.

Branch nodes look like ``{"combinator": "and", "value": [...]}`` and leaf
nodes like ``{"field": "user.age", "operator": "greaterThan", "value": 18}``.

A string leaf value may refer to the data being evaluated: a value holding
the path separator reads that path (null when absent), and a value naming a
top-level data key reads that key. Any other value is a literal.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, Field, StrictInt, StrictStr, ValidationError

from rulekit.builder.registry import PROPOSITION, OperatorRegistry
from rulekit.builder.rule_builder import RuleBuilder
from rulekit.core.context import Context
from rulekit.core.proposition import Proposition
from rulekit.dsl.field_resolver import FieldResolver
from rulekit.exceptions import RuleEvaluatorError, UnknownOperatorError

logger = logging.getLogger(__name__)

COMBINATORS = {"and": "logical_and", "or": "logical_or", "not": "logical_not"}


class CombinatorNode(BaseModel):
    """Branch node combining child rules."""
    combinator: StrictStr = Field(..., description="One of 'and', 'or', 'not'")
    value: List[Any] = Field(..., description="Child rule nodes")


class ConditionNode(BaseModel):
    """Leaf node comparing a field with a value."""
    field: Union[StrictStr, StrictInt] = Field(..., description="Dotted field path")
    operator: StrictStr = Field(..., description="Registered operator token")
    value: Any = Field(..., description="Comparison value; a list for ternary operators")


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(loc) for loc in item.get("loc", ()))
        parts.append(f"{location}: {item.get('msg')}" if location else item.get("msg", ""))
    return "; ".join(parts)


class RuleEvaluator:
    """
    Interpreter for array-shaped rule definitions.

    The definition is compiled once, at construction, with every value
    taken literally. Definitions whose string values may refer to the data
    are recompiled against each evaluated data set.
    """

    def __init__(
        self,
        rules: Dict[str, Any],
        registry: Optional[OperatorRegistry] = None,
        separator: str = "."
    ):
        """
        Compile a rule definition.

        Args:
            rules: Root rule node
            registry: Operator registry, defaults to the built-in operators
            separator: Field path separator

        Raises:
            RuleEvaluatorError: If the definition is malformed
            UnknownOperatorError: If a leaf names an unregistered operator
        """
        self._rules = rules
        self._separator = separator
        self._builder = RuleBuilder(registry)
        self._resolver = FieldResolver(self._builder, separator=separator)
        self._references = False
        self._proposition = self._compile(rules)
        logger.debug(f"Compiled rule definition: {self._proposition!r}")

    # -- construction ---------------------------------------------------

    @classmethod
    def from_dict(cls, rules: Dict[str, Any], **kwargs) -> "RuleEvaluator":
        return cls(rules, **kwargs)

    @classmethod
    def from_json(cls, text: str, **kwargs) -> "RuleEvaluator":
        return cls(_load_json(text), **kwargs)

    @classmethod
    def from_json_file(cls, file_path: Union[str, Path], **kwargs) -> "RuleEvaluator":
        return cls(_load_json(_read_file(file_path)), **kwargs)

    @classmethod
    def from_yaml(cls, text: str, **kwargs) -> "RuleEvaluator":
        return cls(_load_yaml(text), **kwargs)

    @classmethod
    def from_yaml_file(cls, file_path: Union[str, Path], **kwargs) -> "RuleEvaluator":
        return cls(_load_yaml(_read_file(file_path)), **kwargs)

    @property
    def proposition(self) -> Proposition:
        return self._proposition

    # -- evaluation -----------------------------------------------------

    def evaluate(self, values: Union[Dict[str, Any], Context]) -> bool:
        """
        Evaluate the compiled rule against plain nested data.

        Args:
            values: Mapping of top-level field names to data

        Returns:
            True if the rule holds
        """
        context = values if isinstance(values, Context) else Context(values)
        return self.bind(context).evaluate(context)

    def bind(self, values: Union[Dict[str, Any], Context]) -> Proposition:
        """
        Compile the definition against a data set.

        String values holding the path separator become field references,
        as do string values naming a top-level key of ``values``.

        Args:
            values: Mapping of top-level field names to data

        Returns:
            The operator tree to evaluate against ``values``
        """
        if not self._references:
            return self._proposition
        return self._compile(self._rules, values)

    def evaluate_json(self, text: str) -> bool:
        return self.evaluate(_load_json(text))

    def evaluate_json_file(self, file_path: Union[str, Path]) -> bool:
        return self.evaluate(_load_json(_read_file(file_path)))

    def evaluate_yaml(self, text: str) -> bool:
        return self.evaluate(_load_yaml(text) or {})

    def evaluate_yaml_file(self, file_path: Union[str, Path]) -> bool:
        return self.evaluate(_load_yaml(_read_file(file_path)) or {})

    # -- compilation ----------------------------------------------------

    def _compile(self, node: Any, values: Optional[Mapping[str, Any]] = None) -> Proposition:
        if not isinstance(node, dict):
            raise RuleEvaluatorError.invalid_rule_structure(
                f"expected an object, got {type(node).__name__}"
            )

        if "combinator" in node:
            return self._compile_branch(node, values)
        if "operator" in node or "field" in node:
            return self._compile_leaf(node, values)
        raise RuleEvaluatorError.invalid_rule_structure(
            "node needs either 'combinator' and 'value' or 'field', 'operator' and 'value'"
        )

    def _compile_branch(self, node: Dict[str, Any], values: Optional[Mapping[str, Any]]) -> Proposition:
        try:
            branch = CombinatorNode(**node)
        except ValidationError as e:
            raise RuleEvaluatorError.invalid_rule_structure(_format_validation_error(e))

        combinator = branch.combinator.lower()
        if combinator not in COMBINATORS:
            raise RuleEvaluatorError.invalid_combinator(branch.combinator)
        if combinator == "not" and len(branch.value) != 1:
            raise RuleEvaluatorError.invalid_not_rule()
        if not branch.value:
            raise RuleEvaluatorError.invalid_rule_structure(
                f"combinator '{combinator}' needs at least one rule"
            )

        children = [self._compile(child, values) for child in branch.value]
        return self._builder.registry.create(COMBINATORS[combinator], *children)

    def _compile_leaf(self, node: Dict[str, Any], values: Optional[Mapping[str, Any]]) -> Proposition:
        try:
            leaf = ConditionNode(**node)
        except ValidationError as e:
            raise RuleEvaluatorError.invalid_rule_structure(_format_validation_error(e))

        registry = self._builder.registry
        spec = registry.get(leaf.operator)
        if spec.produces != PROPOSITION or spec.name in COMBINATORS.values():
            raise UnknownOperatorError(
                f"Operator '{leaf.operator}' cannot be used in a condition",
                component="RuleEvaluator",
                context={"operator": leaf.operator}
            )

        field = self._resolver.resolve(str(leaf.field))
        if spec.max_operands == 1:
            operands = [field]
        elif spec.min_operands > 2:
            if not isinstance(leaf.value, (list, tuple)):
                raise RuleEvaluatorError.invalid_rule_structure(
                    f"operator '{leaf.operator}' expects a list value"
                )
            operands = [field, *leaf.value]
        else:
            operands = [field, self._leaf_value(leaf.value, values)]

        return registry.create(spec.name, *operands)

    def _leaf_value(self, value: Any, values: Optional[Mapping[str, Any]]) -> Any:
        if not isinstance(value, str):
            return value

        self._references = True
        if values is None:
            return value
        if self._separator in value:
            return self._resolver.resolve(value)
        if value in values:
            return self._builder[value]
        return value


def _read_file(file_path: Union[str, Path]) -> str:
    path = Path(file_path)
    if not path.exists():
        raise RuleEvaluatorError(
            f"Rule file not found: {file_path}",
            component="RuleEvaluator"
        )
    return path.read_text()


def _load_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise RuleEvaluatorError.invalid_rule_structure(f"invalid JSON: {e}")


def _load_yaml(text: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise RuleEvaluatorError.invalid_rule_structure(f"invalid YAML: {e}")
