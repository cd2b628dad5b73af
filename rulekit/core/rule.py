"""
Rule and RuleSet

A Rule pairs a proposition with an optional action; a RuleSet executes a
sequence of rules against one Context.
"""

import inspect
import logging
from typing import Any, Callable, Iterable, Iterator, List, Optional

from rulekit.core.context import Context
from rulekit.core.proposition import Proposition
from rulekit.exceptions import InvalidActionError

logger = logging.getLogger(__name__)


def _accepts_argument(action: Callable) -> bool:
    try:
        signature = inspect.signature(action)
    except (TypeError, ValueError):
        return False

    for parameter in signature.parameters.values():
        if parameter.kind in (parameter.POSITIONAL_ONLY, parameter.POSITIONAL_OR_KEYWORD, parameter.VAR_POSITIONAL):
            return True
    return False


class Rule(Proposition):
    """
    A proposition with an optional action.

    Rules are propositions themselves, so they can be nested inside logical
    operators.
    """

    def __init__(self, proposition: Proposition, action: Optional[Any] = None):
        self.proposition = proposition
        self.action = action

    def evaluate(self, context: Context) -> bool:
        return self.proposition.evaluate(context)

    def execute(self, context: Context) -> bool:
        """
        Evaluate the rule and run its action when it holds.

        The action receives the Context when it accepts a positional
        argument, otherwise it is called with none.

        Args:
            context: Data to evaluate against

        Returns:
            True if the action fired

        Raises:
            InvalidActionError: If the rule holds and the action is not callable
        """
        if not self.evaluate(context) or self.action is None:
            return False

        if not callable(self.action):
            raise InvalidActionError(
                f"Rule actions must be callable, got {type(self.action).__name__}",
                component="Rule"
            )

        if _accepts_argument(self.action):
            self.action(context)
        else:
            self.action()
        return True

    def __repr__(self) -> str:
        return f"Rule({self.proposition!r})"


class RuleSet:
    """Ordered collection of unique rules."""

    def __init__(self, rules: Iterable[Rule] = ()):
        self._rules: List[Rule] = []
        for rule in rules:
            self.add_rule(rule)

    def add_rule(self, rule: Rule) -> None:
        if not any(existing is rule for existing in self._rules):
            self._rules.append(rule)

    def execute_rules(self, context: Context) -> List[Rule]:
        """
        Execute every rule in insertion order.

        Failures propagate; earlier actions are not rolled back.

        Returns:
            Rules whose actions fired
        """
        fired = []
        for index, rule in enumerate(self._rules):
            if rule.execute(context):
                logger.debug(f"Rule {index} fired: {rule!r}")
                fired.append(rule)
        return fired

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)
