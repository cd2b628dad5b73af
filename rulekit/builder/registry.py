"""
Operator Registry

Explicit mapping from operator tokens to factories and their expected
operand counts. Builders and DSL compilers create operators through it.
"""

import re
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional

from rulekit.core.operator import Operator
from rulekit.core.proposition import Proposition
from rulekit.exceptions import OperandCardinalityError, UnknownOperatorError
from rulekit import operators as ops

logger = logging.getLogger(__name__)

PROPOSITION = "proposition"
VALUE = "value"

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def normalize_token(name: str) -> str:
    """Normalise ``greaterThanOrEqualTo`` and ``GreaterThanOrEqualTo`` to ``greater_than_or_equal_to``."""
    return _CAMEL_BOUNDARY.sub("_", name.strip()).lower()


@dataclass
class OperatorSpec:
    """Registry entry for one operator."""
    name: str
    factory: Callable[..., Any]
    min_operands: int = 1
    max_operands: Optional[int] = None
    produces: str = PROPOSITION
    aliases: List[str] = field(default_factory=list)

    def accepts(self, count: int) -> bool:
        if count < self.min_operands:
            return False
        return self.max_operands is None or count <= self.max_operands


class OperatorRegistry:
    """
    Token to operator factory mapping.

    Lookups are case-style insensitive: camelCase, PascalCase and
    snake_case spellings of a token resolve to the same entry.
    """

    def __init__(self):
        self._specs: Dict[str, OperatorSpec] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        name: str,
        factory: Callable[..., Any],
        min_operands: Optional[int] = None,
        max_operands: Optional[int] = None,
        produces: Optional[str] = None,
        aliases: Iterable[str] = ()
    ) -> OperatorSpec:
        """
        Register an operator factory.

        Arity and result kind are read from the class when the factory is an
        Operator subclass and they are not given explicitly.

        Args:
            name: Canonical token
            factory: Operator class or any callable taking the operands
            min_operands: Minimum operand count
            max_operands: Maximum operand count, None for unbounded
            produces: "proposition" or "value"
            aliases: Extra tokens resolving to this entry

        Returns:
            The stored OperatorSpec
        """
        if isinstance(factory, type) and issubclass(factory, Operator):
            default_min, default_max = factory.arity()
            if min_operands is None:
                min_operands = default_min
            if max_operands is None:
                max_operands = default_max
        if produces is None:
            is_proposition = isinstance(factory, type) and issubclass(factory, Proposition)
            produces = PROPOSITION if is_proposition else VALUE

        key = normalize_token(name)
        spec = OperatorSpec(
            name=key,
            factory=factory,
            min_operands=min_operands if min_operands is not None else 0,
            max_operands=max_operands,
            produces=produces,
            aliases=[normalize_token(alias) for alias in aliases],
        )
        self._specs[key] = spec
        for alias in spec.aliases:
            self._aliases[alias] = key

        logger.debug(f"Registered operator '{key}' ({spec.min_operands}..{spec.max_operands}, {produces})")
        return spec

    def _resolve(self, name: str) -> Optional[str]:
        key = normalize_token(name)
        if key in self._specs:
            return key
        return self._aliases.get(key)

    def has(self, name: str) -> bool:
        return self._resolve(name) is not None

    def get(self, name: str) -> OperatorSpec:
        """
        Look up an operator.

        Raises:
            UnknownOperatorError: If the token is not registered
        """
        key = self._resolve(name)
        if key is None:
            raise UnknownOperatorError(
                f"Unknown operator: {name}",
                component="OperatorRegistry",
                context={"operator": name}
            )
        return self._specs[key]

    def names(self) -> List[str]:
        return sorted(self._specs)

    def create(self, name: str, *operands: Any) -> Any:
        """
        Build an operator after checking the operand count.

        Raises:
            UnknownOperatorError: If the token is not registered
            OperandCardinalityError: If the operand count is out of range
        """
        spec = self.get(name)
        if not spec.accepts(len(operands)):
            bound = "unbounded" if spec.max_operands is None else spec.max_operands
            raise OperandCardinalityError(
                f"Operator '{spec.name}' takes {spec.min_operands}..{bound} operand(s), got {len(operands)}",
                component="OperatorRegistry",
                context={"operator": spec.name, "count": len(operands)}
            )
        return spec.factory(*operands)


_DEFAULT_ALIASES = {
    "LogicalAnd": ["and"],
    "LogicalOr": ["or"],
    "LogicalXor": ["xor"],
    "LogicalNot": ["not"],
    "LogicalNand": ["nand"],
    "LogicalNor": ["nor"],
    "StringContains": ["contains"],
    "StringContainsInsensitive": ["contains_insensitive"],
    "StringDoesNotContain": ["does_not_contain"],
    "StringDoesNotContainInsensitive": ["does_not_contain_insensitive"],
    "ArrayCount": ["count"],
    "Exponentiate": ["pow", "power"],
    "Negation": ["negate"],
}


def default_registry() -> OperatorRegistry:
    """Return a new registry holding every built-in operator."""
    registry = OperatorRegistry()
    for cls in ops.ALL_OPERATORS:
        registry.register(cls.__name__, cls, aliases=_DEFAULT_ALIASES.get(cls.__name__, ()))
    return registry
