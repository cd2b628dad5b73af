import pytest

from rulekit.core import Context
from rulekit.exceptions import OperandCardinalityError, OperandTypeError
from rulekit.operators import (
    Between,
    EqualTo,
    GreaterThan,
    GreaterThanOrEqualTo,
    In,
    LessThan,
    LessThanOrEqualTo,
    NotEqualTo,
    NotIn,
    NotSameAs,
    SameAs,
)
from rulekit.variables import Variable


@pytest.fixture
def ctx():
    return Context({"age": 25, "name": "Alice", "nothing": None})


@pytest.mark.parametrize("operator,left,right,expected", [
    (EqualTo, 1, 1.0, True),
    (EqualTo, "a", "b", False),
    (NotEqualTo, 1, 2, True),
    (SameAs, 1, 1.0, False),
    (SameAs, "a", "a", True),
    (NotSameAs, 1, True, True),
    (GreaterThan, 3, 2, True),
    (GreaterThan, 2, 2, False),
    (GreaterThanOrEqualTo, 2, 2, True),
    (LessThan, 1, 2, True),
    (LessThanOrEqualTo, 3, 2, False),
    (LessThanOrEqualTo, 2, 2, True),
    (GreaterThan, "b", "a", True),
])
def test_binary_comparisons(operator, left, right, expected):
    assert operator(left, right).evaluate(Context()) is expected


def test_comparison_reads_context(ctx):
    assert GreaterThan(Variable("age"), 18).evaluate(ctx)
    assert EqualTo(Variable("name"), "Alice").evaluate(ctx)
    assert not EqualTo(Variable("missing"), "x").evaluate(ctx)


@pytest.mark.parametrize("operator", [GreaterThan, GreaterThanOrEqualTo, LessThan, LessThanOrEqualTo])
def test_ordering_against_null_is_false(operator, ctx):
    assert not operator(Variable("nothing"), 1).evaluate(ctx)
    assert not operator(1, Variable("nothing")).evaluate(ctx)


def test_ordering_incomparable_types():
    with pytest.raises(OperandTypeError):
        GreaterThan("a", 1).evaluate(Context())


def test_binary_requires_two_operands():
    with pytest.raises(OperandCardinalityError):
        EqualTo(1)
    operator = EqualTo(1, 2)
    with pytest.raises(OperandCardinalityError):
        operator.add_operand(3)


def test_raw_operands_are_wrapped():
    operator = EqualTo(1, Variable("x"))
    first, second = operator.operands
    assert isinstance(first, Variable) and first.name is None
    assert repr(operator) == "EqualTo(Variable(value=1), Variable('x'))"


def test_in_uses_strict_membership():
    assert In(2, [1, 2, 3]).evaluate(Context())
    assert not In("2", [1, 2, 3]).evaluate(Context())
    assert not In(True, [1, 0]).evaluate(Context())
    assert NotIn(4, [1, 2]).evaluate(Context())
    assert In("vip", Variable("tags")).evaluate(Context({"tags": ("vip",)}))


@pytest.mark.parametrize("operator", [In, NotIn])
def test_in_requires_array(operator):
    with pytest.raises(OperandTypeError, match="must be an array"):
        operator(1, "123").evaluate(Context())


@pytest.mark.parametrize("value,expected", [(5, True), (0, False), (10, True), (1, True), (11, False), (5.5, True)])
def test_between_is_inclusive(value, expected):
    assert Between(value, 1, 10).evaluate(Context()) is expected


def test_between_requires_numbers():
    with pytest.raises(OperandTypeError, match="Between"):
        Between("5", 1, 10).evaluate(Context())
    with pytest.raises(OperandTypeError):
        Between(5, None, 10).evaluate(Context())


def test_between_takes_three_operands():
    with pytest.raises(OperandCardinalityError):
        Between(1, 2)
    with pytest.raises(OperandCardinalityError):
        Between(1, 2, 3, 4)
