import logging
from unittest.mock import MagicMock

import pytest

from rulekit import RulesEngine
from rulekit.builder.registry import PROPOSITION
from rulekit.config import DSLConfig, RulekitConfig
from rulekit.core import Context, Proposition, Rule
from rulekit.exceptions import ConfigurationError, DSLSyntaxError, SerializationError
from rulekit.operators import Matches
from rulekit.variables import Variable


class IsEven(Proposition):
    def __init__(self, operand):
        self.operand = operand

    def evaluate(self, context):
        return self.operand.prepare_value(context).value % 2 == 0


@pytest.fixture
def engine():
    return RulesEngine()


def test_add_rule_from_every_syntax(engine):
    engine.add_rule("age >= 18", name="adult")
    engine.add_rule({"country": "US"}, syntax="mongo", name="domestic")
    engine.add_rule({"country": {"in": ["US", "CA"]}}, syntax="graphql", name="north_america")
    engine.add_rule("name starts with A", syntax="natural")
    engine.add_rule("contains(name, 'li')", syntax="jmespath")
    engine.add_rule("name LIKE 'A%'", syntax="sql")
    engine.add_rule("(age>=18)", syntax="ldap", name="adult_filter")

    result = engine.execute({"age": 20, "country": "US", "name": "Alice"})
    assert result == {
        "evaluated_count": 7,
        "triggered_count": 7,
        "triggered_rules": ["adult", "domestic", "north_america", "rule_4", "rule_5", "rule_6", "adult_filter"],
    }


def test_execute_reports_only_matching_rules(engine):
    engine.add_rule("age >= 18", name="adult")
    engine.add_rule("age < 13", name="child")

    result = engine.execute(Context({"age": 10}))
    assert result["evaluated_count"] == 2
    assert result["triggered_rules"] == ["child"]


def test_actions_run_only_for_matching_rules(engine):
    adult_action = MagicMock()
    child_action = MagicMock()
    engine.add_rule("age >= 18", action=lambda: adult_action())
    engine.add_rule("age < 13", action=lambda: child_action())

    engine.execute({"age": 30})
    adult_action.assert_called_once()
    child_action.assert_not_called()


def test_add_rule_accepts_compiled_rules_once(engine):
    rule = engine.compile("age > 1")
    assert isinstance(rule, Rule)
    engine.add_rule(rule, name="first")
    engine.add_rule(rule, name="again")
    assert engine.rules == [rule]


def test_default_syntax_comes_from_config():
    engine = RulesEngine(RulekitConfig(dsl=DSLConfig(default_syntax="mongo")))
    rule = engine.compile({"age": {"$gt": 1}})
    assert rule.evaluate(Context({"age": 2}))
    assert engine.serialize(rule) == {"age": {"$gt": 1}}


def test_field_separator_applies_to_every_syntax():
    engine = RulesEngine(RulekitConfig(dsl=DSLConfig(field_separator="/")))
    data = Context({"user": {"age": 30}})
    assert engine.compile("user.age > 18").evaluate(data)
    assert engine.compile({"user/age": {"$gt": 18}}, syntax="mongo").evaluate(data)
    assert engine.serialize(engine.compile({"user": {"age": {"gt": 18}}}, syntax="graphql"), "graphql") == {
        "user/age": {"gt": 18}
    }


def test_invalid_config_fails_fast():
    with pytest.raises(ConfigurationError):
        RulesEngine(RulekitConfig(dsl=DSLConfig(default_syntax="xpath")))


def test_unknown_syntax(engine):
    with pytest.raises(ConfigurationError, match="Unsupported syntax"):
        engine.compile("age > 1", syntax="xpath")
    with pytest.raises(ConfigurationError, match="Unsupported syntax"):
        engine.serialize(engine.compile("age > 1"), syntax="xpath")


def test_compile_errors_propagate(engine):
    with pytest.raises(DSLSyntaxError):
        engine.add_rule("age >")
    assert engine.rules == []


def test_validate(engine):
    assert engine.validate("age > 1").valid
    assert not engine.validate({"$and": []}, syntax="mongo").valid


def test_serialize_across_syntaxes(engine):
    rule = engine.compile('age >= 18 and country == "US"')
    assert engine.serialize(rule, "jmespath") == "age >= `18` && country == 'US'"
    assert engine.serialize(rule, "natural") == 'age is at least 18 and country is "US"'
    assert engine.serialize(rule, "mongo") == {"age": {"$gte": 18}, "country": "US"}
    assert engine.serialize(rule, "graphql") == {"age": {"gte": 18}, "country": "US"}
    assert engine.serialize(rule, "sql") == "age >= 18 AND country = 'US'"
    assert engine.serialize(rule, "ldap") == "(&(age>=18)(country=US))"
    with pytest.raises(SerializationError):
        engine.serialize(Matches(Variable("a"), "^x"), "natural")


def test_custom_operator_is_shared_by_every_syntax(engine):
    engine.registry.register("isEven", IsEven, min_operands=1, max_operands=1, produces=PROPOSITION)
    assert engine.compile("isEven(n)").evaluate(Context({"n": 4}))
    assert engine.compile("is_even(n)", syntax="jmespath").evaluate(Context({"n": 4}))


def test_logs_through_given_logger(caplog):
    logger = logging.getLogger("rulekit.test_engine")
    engine = RulesEngine(logger=logger)
    with caplog.at_level(logging.INFO, logger="rulekit.test_engine"):
        engine.add_rule("age > 1", name="positive")
        engine.execute({"age": 5})
    assert "Added rule 'positive'" in caplog.text
    assert "1 rule(s) triggered" in caplog.text
