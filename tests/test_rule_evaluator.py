import json

import pytest

from rulekit import RuleEvaluator
from rulekit.exceptions import (
    OperandCardinalityError,
    RuleEvaluatorError,
    UnknownOperatorError,
)

ADULT_IN_US = {
    "combinator": "and",
    "value": [
        {"field": "age", "operator": "greaterThanOrEqualTo", "value": 18},
        {"field": "country", "operator": "equalTo", "value": "US"},
    ],
}


def test_evaluates_plain_data(sample_contexts):
    evaluator = RuleEvaluator(ADULT_IN_US)
    for data, expected in sample_contexts:
        assert evaluator.evaluate(data) is expected


def test_compiles_to_operator_tree():
    evaluator = RuleEvaluator.from_dict(ADULT_IN_US)
    assert repr(evaluator.proposition) == (
        "LogicalAnd(GreaterThanOrEqualTo(Variable('age'), Variable(value=18)), "
        "EqualTo(Variable('country'), Variable(value='US')))"
    )


def test_nested_fields_and_combinators():
    evaluator = RuleEvaluator({
        "combinator": "or",
        "value": [
            {"field": "user.address.city", "operator": "equalTo", "value": "Paris"},
            {
                "combinator": "not",
                "value": [{"field": "user.tags", "operator": "setContains", "value": "blocked"}],
            },
        ],
    })
    assert evaluator.evaluate({"user": {"address": {"city": "Paris"}, "tags": ["blocked"]}})
    assert evaluator.evaluate({"user": {"address": {"city": "Lyon"}, "tags": []}})
    assert not evaluator.evaluate({"user": {"address": {"city": "Lyon"}, "tags": ["blocked"]}})


def test_list_indices_in_paths():
    evaluator = RuleEvaluator({"field": "items.0.sku", "operator": "equalTo", "value": "A-1"})
    assert evaluator.evaluate({"items": [{"sku": "A-1"}, {"sku": "B-2"}]})
    assert not evaluator.evaluate({"items": []})


def test_missing_fields_resolve_to_null():
    evaluator = RuleEvaluator({"field": "profile.nickname", "operator": "isNull", "value": None})
    assert evaluator.evaluate({})
    assert not RuleEvaluator(ADULT_IN_US).evaluate({})


def test_ternary_operator_takes_list_value():
    evaluator = RuleEvaluator({"field": "score", "operator": "between", "value": [10, 20]})
    assert evaluator.evaluate({"score": 10})
    assert not evaluator.evaluate({"score": 21})


def test_ternary_operator_rejects_scalar_value():
    with pytest.raises(RuleEvaluatorError, match="expects a list value"):
        RuleEvaluator({"field": "score", "operator": "between", "value": 10})


def test_ternary_operator_checks_list_length():
    with pytest.raises(OperandCardinalityError):
        RuleEvaluator({"field": "score", "operator": "between", "value": [1, 2, 3]})


@pytest.mark.parametrize("combinator", ["xor", "nand", "any"])
def test_unsupported_combinator(combinator):
    with pytest.raises(RuleEvaluatorError, match="Invalid combinator"):
        RuleEvaluator({"combinator": combinator, "value": [ADULT_IN_US]})


def test_combinator_is_case_insensitive():
    assert RuleEvaluator({"combinator": "AND", "value": [ADULT_IN_US]}).evaluate({"age": 40, "country": "US"})


def test_not_takes_exactly_one_rule():
    with pytest.raises(RuleEvaluatorError, match="exactly one"):
        RuleEvaluator({"combinator": "not", "value": [ADULT_IN_US, ADULT_IN_US]})


def test_empty_combinator_is_rejected():
    with pytest.raises(RuleEvaluatorError, match="at least one"):
        RuleEvaluator({"combinator": "or", "value": []})


@pytest.mark.parametrize("node", [
    {"field": "age", "value": 3},
    {"field": "age", "operator": "equalTo"},
    {"combinator": "and"},
    {"combinator": "and", "value": "nope"},
    {"something": "else"},
    ["not", "a", "dict"],
])
def test_malformed_nodes(node):
    with pytest.raises(RuleEvaluatorError, match="Invalid rule structure"):
        RuleEvaluator(node)


def test_unknown_operator():
    with pytest.raises(UnknownOperatorError):
        RuleEvaluator({"field": "age", "operator": "teleports", "value": 1})


def test_value_operator_cannot_be_a_condition():
    with pytest.raises(UnknownOperatorError, match="cannot be used in a condition"):
        RuleEvaluator({"field": "age", "operator": "addition", "value": 1})


def test_json_sources(tmp_path):
    rule_file = tmp_path / "rule.json"
    rule_file.write_text(json.dumps(ADULT_IN_US))
    data_file = tmp_path / "data.json"
    data_file.write_text(json.dumps({"age": 30, "country": "US"}))

    evaluator = RuleEvaluator.from_json_file(rule_file)
    assert evaluator.evaluate_json_file(data_file)
    assert not RuleEvaluator.from_json(json.dumps(ADULT_IN_US)).evaluate_json('{"age": 3, "country": "US"}')


def test_yaml_sources(tmp_path):
    rule_text = """
combinator: and
value:
  - field: age
    operator: greaterThanOrEqualTo
    value: 18
  - field: country
    operator: equalTo
    value: US
"""
    rule_file = tmp_path / "rule.yaml"
    rule_file.write_text(rule_text)
    evaluator = RuleEvaluator.from_yaml_file(rule_file)
    assert evaluator.evaluate_yaml("age: 21\ncountry: US\n")
    assert not RuleEvaluator.from_yaml(rule_text).evaluate_yaml("")

    data_file = tmp_path / "data.yaml"
    data_file.write_text("age: 17\ncountry: US\n")
    assert not evaluator.evaluate_yaml_file(data_file)


def test_invalid_sources(tmp_path):
    with pytest.raises(RuleEvaluatorError, match="invalid JSON"):
        RuleEvaluator.from_json("{not json")
    with pytest.raises(RuleEvaluatorError, match="invalid YAML"):
        RuleEvaluator.from_yaml("key: [unclosed")
    with pytest.raises(RuleEvaluatorError, match="not found"):
        RuleEvaluator.from_json_file(tmp_path / "missing.json")


def test_custom_separator():
    evaluator = RuleEvaluator({"field": "user/age", "operator": "lessThan", "value": 30}, separator="/")
    assert evaluator.evaluate({"user": {"age": 29}})


def test_value_naming_a_data_key_reads_that_key():
    evaluator = RuleEvaluator({"field": "a", "operator": "equalTo", "value": "b"})
    assert evaluator.evaluate({"a": 1, "b": 1})
    assert not evaluator.evaluate({"a": 1, "b": 2})
    assert repr(evaluator.proposition) == "EqualTo(Variable('a'), Variable(value='b'))"


def test_value_that_is_not_a_data_key_stays_literal():
    evaluator = RuleEvaluator({"field": "a", "operator": "equalTo", "value": "b"})
    assert evaluator.evaluate({"a": "b"})


def test_dotted_value_reads_a_data_path():
    evaluator = RuleEvaluator({"field": "order.total", "operator": "lessThanOrEqualTo", "value": "limits.max"})
    assert evaluator.evaluate({"order": {"total": 50}, "limits": {"max": 100}})
    assert not evaluator.evaluate({"order": {"total": 150}, "limits": {"max": 100}})


def test_dotted_value_missing_from_data_is_null():
    evaluator = RuleEvaluator({"field": "email", "operator": "equalTo", "value": "example.com"})
    assert not evaluator.evaluate({"email": "example.com"})
    assert evaluator.evaluate({})


def test_value_references_use_configured_separator():
    evaluator = RuleEvaluator(
        {"field": "user/age", "operator": "greaterThan", "value": "limits/age"},
        separator="/",
    )
    assert evaluator.evaluate({"user": {"age": 30}, "limits": {"age": 18}})
    assert RuleEvaluator({"field": "host", "operator": "equalTo", "value": "a.b"}, separator="/").evaluate(
        {"host": "a.b"}
    )


def test_bind_returns_tree_with_references():
    evaluator = RuleEvaluator({"field": "a", "operator": "equalTo", "value": "b"})
    assert repr(evaluator.bind({"a": 1, "b": 2})) == "EqualTo(Variable('a'), Variable('b'))"
    assert evaluator.bind({"a": 1}) is not evaluator.proposition


def test_definitions_without_string_values_compile_once():
    evaluator = RuleEvaluator({"field": "age", "operator": "greaterThan", "value": 18})
    assert evaluator.bind({"age": 3}) is evaluator.proposition
