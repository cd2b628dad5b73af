import pytest

from rulekit.core import Context
from rulekit.dsl.ast import FieldNode, LiteralNode, OperatorNode
from rulekit.dsl.jmespath import JMESPathParser, JMESPathProposition, JMESPathRuleBuilder, JMESPathSerializer
from rulekit.exceptions import (
    CompileError,
    DSLSyntaxError,
    OperandTypeError,
    SerializationError,
    UnknownOperatorError,
)
from rulekit.operators import Addition, GreaterThan, LogicalAnd
from rulekit.variables import Variable


@pytest.fixture
def builder(rb):
    return JMESPathRuleBuilder(rb)


def test_parser_builds_shared_ast():
    node = JMESPathParser().parse("age >= `18` && country == 'US'")
    assert node == OperatorNode("and", (
        OperatorNode("gte", (FieldNode("age"), LiteralNode(18))),
        OperatorNode("eq", (FieldNode("country"), LiteralNode("US"))),
    ))


def test_and_chains_are_flattened():
    node = JMESPathParser().parse("a == `1` && b == `2` && c == `3`")
    assert node.operator == "and"
    assert len(node.operands) == 3


def test_literals_and_paths():
    parse = JMESPathParser().parse
    assert parse("x == `[1, \"a\", null]`").operands[1] == LiteralNode([1, "a", None])
    assert parse("x == `{\"k\": true}`").operands[1] == LiteralNode({"k": True})
    assert parse("x == 'it\\'s'").operands[1] == LiteralNode("it's")
    assert parse('"first name" == \'Bob\'').operands[0] == FieldNode("first name")
    assert parse("user.address.city == 'Paris'").operands[0] == FieldNode("user.address.city")
    assert parse("tags[0] == 'vip'").operands[0] == FieldNode("tags.0")
    assert parse("user.orders[1].items[0].sku == 'A'").operands[0] == FieldNode("user.orders.1.items.0.sku")


def test_paths_use_configured_separator():
    node = JMESPathParser("/").parse("user.tags[0] == 'vip'")
    assert node.operands[0] == FieldNode("user/tags/0")


@pytest.mark.parametrize("source", [
    "length(name) > `3`",
    "tags[?active] == `[]`",
    "!active",
    "a || b",
    "tags[-1] == 'x'",
    "items[*].sku == `[]`",
    "a == b | c",
])
def test_queries_without_operator_equivalent_are_not_lowered(source):
    parser = JMESPathParser()
    assert parser.lower(parser.compile_query(source).parsed) is None
    with pytest.raises(CompileError):
        parser.parse(source)


@pytest.mark.parametrize("source,message,position", [
    ("", "Query is empty", 0),
    ("age >= `18` &&", "Incomplete expression", 14),
    ("(a == `1`", "Incomplete expression", 9),
    ("x == `1", "Unclosed", 5),
])
def test_syntax_errors(source, message, position):
    with pytest.raises(DSLSyntaxError, match=message) as info:
        JMESPathParser().parse(source)
    assert info.value.position == position


def test_unknown_character_is_a_syntax_error():
    with pytest.raises(DSLSyntaxError) as info:
        JMESPathParser().parse("a == #")
    assert info.value.position == 5


def test_compiles_and_evaluates(builder, sample_contexts):
    rule = builder.parse("age >= `18` && country == 'US'")
    for data, expected in sample_contexts:
        assert rule.evaluate(Context(data)) is expected


@pytest.mark.parametrize("source,data,expected", [
    ("a == `1` || b == `1`", {"a": 2, "b": 1}, True),
    ("!(age > `18`)", {"age": 18}, True),
    ("contains(name, 'oo')", {"name": "food"}, True),
    ("starts_with(name, 'f') && ends_with(name, 'd')", {"name": "food"}, True),
    ("in(country, `[\"US\", \"CA\"]`)", {"country": "US"}, True),
    ("is_null(nickname)", {}, True),
    ("\"first name\" == 'Bob'", {"first name": "Bob"}, True),
    ("user.tags == `[\"a\"]`", {"user": {"tags": ["a"]}}, True),
    ("flag == `true`", {"flag": True}, True),
    ("tags[0] == 'vip'", {"tags": ["vip", "beta"]}, True),
    ("tags[1] == 'vip'", {"tags": ["vip", "beta"]}, False),
])
def test_evaluation(builder, source, data, expected):
    assert builder.compile(source).evaluate(Context(data)) is expected


@pytest.mark.parametrize("source,data,expected", [
    ("length(name) > `3`", {"name": "Alice"}, True),
    ("length(name) > `3`", {"name": "Bob"}, False),
    ("length(tags[?active]) >= `2`", {"tags": [{"active": True}, {"active": True}, {"active": False}]}, True),
    ("!active", {"active": False}, True),
    ("!active", {"active": "yes"}, False),
    ("tags[-1] == 'beta'", {"tags": ["vip", "beta"]}, True),
    ("contains(tags, 'vip') || length(tags) == `0`", {"tags": []}, True),
    ("max(scores) > `5`", {"scores": [3, 7]}, True),
    ("count", {"count": 0}, False),
    ("missing", {}, False),
])
def test_runtime_queries(builder, source, data, expected):
    proposition = builder.compile(source)
    assert isinstance(proposition, JMESPathProposition)
    assert proposition.evaluate(Context(data)) is expected


def test_runtime_type_errors_are_operand_errors(builder):
    proposition = builder.compile("length(age) > `1`")
    with pytest.raises(OperandTypeError):
        proposition.evaluate(Context({"age": 5}))


def test_unknown_function_in_runtime_query(builder):
    with pytest.raises(UnknownOperatorError, match="frobnicate"):
        builder.compile("length(frobnicate(name)) > `1`")


def test_unknown_operator_in_lowered_query(builder):
    with pytest.raises(UnknownOperatorError):
        builder.compile("frobnicate(name)")


def test_runtime_query_validates(builder):
    assert builder.validate("length(name) > `3`").valid
    result = builder.validate("age >= `18` &&")
    assert not result.valid
    assert result.errors[0].position == 14


def test_contains_is_a_string_operation(builder):
    proposition = builder.compile("contains(tags, 'vip')")
    with pytest.raises(OperandTypeError):
        proposition.evaluate(Context({"tags": ["vip"]}))


@pytest.mark.parametrize("source", [
    "age >= `18` && country == 'US'",
    "a == `1` || b == `2` && c == `3`",
    "(a == `1` || b == `2`) && c == `3`",
    "!(a == `1`)",
    "!is_null(nickname)",
    "contains(name, 'oo')",
    "starts_with(name, 'f')",
    "in(country, `[\"US\", \"CA\"]`)",
    "\"first name\" == 'Bob'",
    "user.address.city == 'Paris'",
    "tags[0] == 'vip'",
    "user.orders[1].sku == 'A'",
    "x == `null`",
    "x != `2.5`",
    "name == 'it\\'s'",
    "length(name) > `3`",
])
def test_serializer_round_trip(builder, source):
    proposition = builder.compile(source)
    text = JMESPathSerializer().serialize(proposition)
    assert text == source
    assert repr(builder.compile(text)) == repr(proposition)


def test_serializer_wraps_runtime_queries_inside_trees(builder):
    proposition = LogicalAnd(builder.compile("length(name) > `3`"), builder.compile("age > `1`"))
    text = JMESPathSerializer().serialize(proposition)
    assert text == "(length(name) > `3`) && age > `1`"
    assert builder.compile(text).evaluate(Context({"name": "Alice", "age": 2}))


def test_serializer_writes_other_operators_as_functions():
    proposition = GreaterThan(Addition(Variable("a"), 1), 2)
    assert JMESPathSerializer().serialize(proposition) == "addition(a, `1`) > `2`"


def test_serializer_rejects_unwritable_literals():
    with pytest.raises(SerializationError):
        JMESPathSerializer().serialize(GreaterThan(Variable("a"), object()))
