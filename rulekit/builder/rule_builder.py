"""
Rule Builder

Fluent construction of operator trees. Builder variables dispatch operator
names through the OperatorRegistry instead of relying on dynamic method
lookup.
"""

from typing import Any, Callable, Dict, Optional

from rulekit.builder.registry import VALUE, OperatorRegistry, default_registry
from rulekit.core.proposition import Proposition
from rulekit.core.rule import Rule
from rulekit.variables import Variable, VariableProperty


class FluentOperatorsMixin:
    """Operator helpers shared by builder variables and their properties."""

    builder: "RuleBuilder"

    def apply(self, name: str, *args: Any):
        """
        Build the registered operator ``name`` with this variable as first operand.

        Value-producing results are wrapped in an anonymous builder variable so
        calls can be chained.
        """
        return self.builder.operator(name, self, *args)

    def equal_to(self, other: Any):
        return self.apply("equal_to", other)

    def not_equal_to(self, other: Any):
        return self.apply("not_equal_to", other)

    def same_as(self, other: Any):
        return self.apply("same_as", other)

    def not_same_as(self, other: Any):
        return self.apply("not_same_as", other)

    def greater_than(self, other: Any):
        return self.apply("greater_than", other)

    def greater_than_or_equal_to(self, other: Any):
        return self.apply("greater_than_or_equal_to", other)

    def less_than(self, other: Any):
        return self.apply("less_than", other)

    def less_than_or_equal_to(self, other: Any):
        return self.apply("less_than_or_equal_to", other)

    def is_in(self, values: Any):
        return self.apply("in", values)

    def not_in(self, values: Any):
        return self.apply("not_in", values)

    def between(self, low: Any, high: Any):
        return self.apply("between", low, high)

    def starts_with(self, prefix: Any):
        return self.apply("starts_with", prefix)

    def ends_with(self, suffix: Any):
        return self.apply("ends_with", suffix)

    def string_contains(self, needle: Any):
        return self.apply("string_contains", needle)

    def matches(self, pattern: Any):
        return self.apply("matches", pattern)

    def is_null(self):
        return self.apply("is_null")

    def is_empty(self):
        return self.apply("is_empty")

    def set_contains(self, value: Any):
        return self.apply("set_contains", value)

    def add(self, other: Any):
        return self.apply("addition", other)

    def subtract(self, other: Any):
        return self.apply("subtraction", other)

    def multiply(self, other: Any):
        return self.apply("multiplication", other)

    def divide(self, other: Any):
        return self.apply("division", other)


class BuilderVariableProperty(FluentOperatorsMixin, VariableProperty):
    repr_name = "VariableProperty"

    def __init__(self, parent: Variable, name: Any = None, value: Any = None):
        super().__init__(parent, name, value)
        self.builder = parent.builder


BuilderVariableProperty.property_class = BuilderVariableProperty


class BuilderVariable(FluentOperatorsMixin, Variable):
    repr_name = "Variable"
    property_class = BuilderVariableProperty

    def __init__(self, builder: "RuleBuilder", name: Optional[str] = None, value: Any = None):
        super().__init__(name, value)
        self.builder = builder


def _unwrap(operand: Any) -> Any:
    # Anonymous builder variables only exist to carry chained results
    if isinstance(operand, BuilderVariable) and operand.name is None and operand.value is not None:
        return operand.value
    return operand


class RuleBuilder:
    """
    Entry point for building rules in code.

    Example:
        rb = RuleBuilder()
        rule = rb.create(rb["age"].greater_than_or_equal_to(18))
    """

    def __init__(self, registry: Optional[OperatorRegistry] = None):
        self.registry = registry or default_registry()
        self._variables: Dict[str, BuilderVariable] = {}

    def __getitem__(self, name: str) -> BuilderVariable:
        if name not in self._variables:
            self._variables[name] = BuilderVariable(self, name)
        return self._variables[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self[name].value = value

    def __contains__(self, name: str) -> bool:
        return name in self._variables

    def create(self, proposition: Proposition, action: Optional[Any] = None) -> Rule:
        return Rule(proposition, action)

    def operator(self, name: str, *operands: Any):
        """
        Build any registered operator.

        Raises:
            UnknownOperatorError: If the token is not registered
            OperandCardinalityError: If the operand count does not fit
        """
        result = self.registry.create(name, *(_unwrap(operand) for operand in operands))
        if self.registry.get(name).produces == VALUE:
            return BuilderVariable(self, None, result)
        return result

    def register_operator(
        self,
        name: str,
        factory: Callable[..., Any],
        min_operands: Optional[int] = None,
        max_operands: Optional[int] = None,
        produces: Optional[str] = None,
        aliases=()
    ):
        return self.registry.register(
            name,
            factory,
            min_operands=min_operands,
            max_operands=max_operands,
            produces=produces,
            aliases=aliases,
        )

    def _logical(self, name: str, propositions):
        # Combinators may start empty and grow through add_proposition
        return self.registry.get(name).factory(*propositions)

    def logical_and(self, *propositions: Proposition):
        return self._logical("logical_and", propositions)

    def logical_or(self, *propositions: Proposition):
        return self._logical("logical_or", propositions)

    def logical_not(self, proposition: Optional[Proposition] = None):
        return self._logical("logical_not", () if proposition is None else (proposition,))

    def logical_xor(self, *propositions: Proposition):
        return self._logical("logical_xor", propositions)

    def logical_nand(self, *propositions: Proposition):
        return self._logical("logical_nand", propositions)

    def logical_nor(self, *propositions: Proposition):
        return self._logical("logical_nor", propositions)
