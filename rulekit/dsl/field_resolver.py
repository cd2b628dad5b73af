"""
Field Resolver

Turns dotted field paths into Variable / VariableProperty chains built
through a RuleBuilder.
"""

from typing import Dict, Optional

from rulekit.builder.rule_builder import RuleBuilder
from rulekit.exceptions import CompileError
from rulekit.variables import Variable


class FieldResolver:
    """
    Resolve ``user.address.city`` to ``builder["user"]["address"]["city"]``.

    Resolved chains are cached, so the same path always yields the same
    variable object for this resolver.
    """

    def __init__(self, builder: Optional[RuleBuilder] = None, separator: str = "."):
        self.builder = builder or RuleBuilder()
        self.separator = separator
        self._cache: Dict[str, Variable] = {}

    def resolve(self, path: str) -> Variable:
        """
        Resolve a field path.

        Args:
            path: Field path using the configured separator

        Returns:
            Variable for the root segment, or the innermost VariableProperty

        Raises:
            CompileError: If the path or one of its segments is empty
        """
        if path in self._cache:
            return self._cache[path]

        segments = path.split(self.separator) if path else []
        if not segments or any(not segment for segment in segments):
            raise CompileError(
                f"Invalid field path: {path!r}",
                component="FieldResolver"
            )

        variable = self.builder[segments[0]]
        for segment in segments[1:]:
            variable = variable[segment]

        self._cache[path] = variable
        return variable

    def clear(self) -> None:
        self._cache.clear()
