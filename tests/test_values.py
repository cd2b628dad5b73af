import pytest

from rulekit.exceptions import DivisionByZeroError, OperandTypeError
from rulekit.values import Set, Value, is_numeric, strict_equal


SET_PAIRS = [
    ([1, 2, 3], [3, 4]),
    ([], [1]),
    (["a", "b"], []),
    ([1, "1", None], ["1", 2]),
]


@pytest.mark.parametrize("left,right", SET_PAIRS)
def test_union_contains_both_operands(left, right):
    a, b = Set(left), Set(right)
    union = a.union(b)
    assert union.contains_subset(a)
    assert union.contains_subset(b)


@pytest.mark.parametrize("left,right", SET_PAIRS)
def test_intersect_is_subset_of_left(left, right):
    a, b = Set(left), Set(right)
    assert a.contains_subset(a.intersect(b))


@pytest.mark.parametrize("left,right", SET_PAIRS)
def test_self_difference_is_empty(left, right):
    a = Set(left)
    assert len(a.symmetric_difference(a)) == 0
    assert len(a.complement(a)) == 0


def test_set_operations_keep_left_order():
    a = Set([3, 1, 2])
    b = Set([2, 5, 3])
    assert a.union(b).value == [3, 1, 2, 5]
    assert a.intersect(b).value == [3, 2]
    assert a.complement(b).value == [1]
    assert a.symmetric_difference(b).value == [1, 5]


def test_set_deduplicates_and_ignores_order_for_equality():
    assert Set([1, 1, 2]).value == [1, 2]
    assert Set([1, 2]) == Set([2, 1])
    assert Set([1, 2]) != Set([1, 2, 3])


def test_set_operations_return_new_sets():
    a = Set([1])
    a.union([2])
    assert a.value == [1]


def test_contains_subset_vacuous_cases():
    assert Set([1]).contains_subset(None)
    assert Set([1]).contains_subset([])
    assert Set([]).contains_subset(Set([]))
    assert not Set([1]).contains_subset([1, 2])


def test_set_contains_is_strict():
    s = Set([1, "2"])
    assert s.set_contains(1)
    assert not s.set_contains("1")
    assert not s.set_contains(True)
    assert s.set_contains("2")


def test_set_from_datum_coercion():
    assert Set.from_datum(None).value == []
    assert Set.from_datum(5).value == [5]
    assert Set.from_datum([1, 2]).value == [1, 2]
    assert Set.from_datum({"a": 1}).value == [{"a": 1}]


def test_set_min_max():
    assert Set([4, 2, 9]).min() == 2
    assert Set([4, 2, 9]).max() == 9
    assert Set([]).min() is None
    assert Set([]).max() is None


def test_set_min_max_require_numbers():
    with pytest.raises(OperandTypeError, match="numeric"):
        Set([1, "x"]).max()
    with pytest.raises(OperandTypeError):
        Set(["string"]).min()


def test_is_numeric_and_strict_equal():
    assert is_numeric(1) and is_numeric(1.5)
    assert not is_numeric(True)
    assert not is_numeric("1")
    assert strict_equal(1, 1)
    assert not strict_equal(1, 1.0)
    assert not strict_equal(1, True)


def test_value_returns_raw_datum():
    data = [1, 2]
    value = Value(data)
    assert value.value is data
    assert value.as_set().value == [1, 2]
    assert value.value == [1, 2]


def test_value_as_set_coerces_scalars():
    assert Value(7).as_set().value == [7]
    assert Value(None).as_set().value == []


def test_value_loose_and_strict_equality():
    assert Value(1).equal_to(1.0)
    assert not Value(1).same_as(1.0)
    assert Value("a").same_as(Value("a"))


def test_value_ordering():
    assert Value(3).greater_than(2)
    assert Value("b").greater_than("a")
    assert Value(1).less_than(2)
    assert not Value(None).greater_than(1)
    assert not Value(1).less_than(None)


def test_value_ordering_type_mismatch():
    with pytest.raises(OperandTypeError):
        Value("a").greater_than(1)


def test_value_arithmetic():
    assert Value(2).add(3) == 5
    assert Value(7).modulo(4) == 3
    assert Value(2).exponentiate(10) == 1024
    assert Value(5).negate() == -5
    assert Value(1.2).ceil() == 2
    assert Value(1.8).floor() == 1


def test_division_by_zero_is_distinct_from_type_error():
    with pytest.raises(DivisionByZeroError):
        Value(1).divide(0)
    with pytest.raises(OperandTypeError, match="values must be numeric"):
        Value("x").divide("y")
    assert not issubclass(DivisionByZeroError, OperandTypeError)


def test_value_string_helpers():
    assert Value("Hello").starts_with("He")
    assert Value("Hello").starts_with("he", insensitive=True)
    assert not Value("Hello").starts_with("")
    assert Value("Hello").ends_with("LO", insensitive=True)
    assert Value("Hello").string_contains("ell")
    with pytest.raises(OperandTypeError):
        Value(1).string_contains("1")
