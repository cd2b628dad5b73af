from unittest.mock import MagicMock

import pytest

from rulekit.core import Context, Rule, RuleSet
from rulekit.exceptions import InvalidActionError, OperandTypeError
from rulekit.operators import EqualTo, GreaterThan, LogicalAnd
from rulekit.variables import Variable


@pytest.fixture
def adult():
    return GreaterThan(Variable("age"), 17)


def test_rule_evaluates_its_proposition(adult):
    rule = Rule(adult)
    assert rule.evaluate(Context({"age": 20}))
    assert not rule.evaluate(Context({"age": 10}))


def test_execute_runs_action_with_context(adult):
    seen = []
    ctx = Context({"age": 20})
    assert Rule(adult, seen.append).execute(ctx)
    assert seen == [ctx]


def test_execute_supports_zero_argument_actions(adult):
    calls = []
    assert Rule(adult, lambda: calls.append("fired")).execute(Context({"age": 20}))
    assert calls == ["fired"]


def test_execute_skips_action_when_false(adult):
    action = MagicMock()
    assert not Rule(adult, action).execute(Context({"age": 3}))
    action.assert_not_called()


def test_execute_without_action_is_a_no_op(adult):
    assert not Rule(adult).execute(Context({"age": 20}))


def test_non_callable_action_fails_only_on_execute(adult):
    rule = Rule(adult, "not callable")
    assert rule.evaluate(Context({"age": 20}))
    with pytest.raises(InvalidActionError):
        rule.execute(Context({"age": 20}))


def test_rule_nests_inside_combinators(adult):
    inner = Rule(adult)
    combined = LogicalAnd(inner, EqualTo(Variable("country"), "US"))
    assert combined.evaluate(Context({"age": 30, "country": "US"}))
    assert repr(inner) == "Rule(GreaterThan(Variable('age'), Variable(value=17)))"


def test_rule_set_runs_every_true_rule():
    fired = []
    rules = [
        Rule(EqualTo(1, 1), lambda: fired.append(1)),
        Rule(EqualTo(1, 2), lambda: fired.append(2)),
        Rule(EqualTo(2, 2), lambda: fired.append(3)),
    ]
    rule_set = RuleSet(rules)
    result = rule_set.execute_rules(Context())
    assert sorted(fired) == [1, 3]
    assert result == [rules[0], rules[2]]


def test_rule_set_is_ordered_and_unique():
    rule = Rule(EqualTo(1, 1))
    other = Rule(EqualTo(1, 1))
    rule_set = RuleSet([rule])
    rule_set.add_rule(rule)
    rule_set.add_rule(other)
    assert len(rule_set) == 2
    assert list(rule_set) == [rule, other]


def test_rule_set_propagates_failures():
    rule_set = RuleSet([Rule(GreaterThan("a", 1), lambda: None)])
    with pytest.raises(OperandTypeError):
        rule_set.execute_rules(Context())
