import pytest

from rulekit.exceptions import (
    CompileError,
    DivisionByZeroError,
    DomainError,
    DSLSyntaxError,
    OperandTypeError,
    RuleEvaluatorError,
    RulekitError,
    StructuralError,
    UnknownOperatorError,
)


def test_to_dict():
    error = UnknownOperatorError("Unknown operator 'x'", component="OperatorRegistry", context={"operator": "x"})
    assert error.to_dict() == {
        "error_type": "UnknownOperatorError",
        "message": "Unknown operator 'x'",
        "component": "OperatorRegistry",
        "context": {"operator": "x"},
    }


def test_syntax_error_position():
    error = DSLSyntaxError("Expected a value", position=7, component="ExpressionParser")
    assert error.position == 7
    assert str(error) == "Expected a value at position 7"
    assert DSLSyntaxError("Invalid filter").position is None


@pytest.mark.parametrize("error_class,base", [
    (DSLSyntaxError, CompileError),
    (CompileError, StructuralError),
    (RuleEvaluatorError, StructuralError),
    (DivisionByZeroError, DomainError),
    (OperandTypeError, RulekitError),
    (DomainError, RulekitError),
])
def test_hierarchy(error_class, base):
    assert issubclass(error_class, base)


def test_evaluation_and_structural_errors_are_distinct():
    assert not issubclass(OperandTypeError, StructuralError)
    assert not issubclass(DomainError, OperandTypeError)


def test_rule_evaluator_factories():
    assert RuleEvaluatorError.invalid_combinator("xor").context == {"combinator": "xor"}
    assert str(RuleEvaluatorError.invalid_rule_structure("bad")) == "Invalid rule structure: bad"
    assert str(RuleEvaluatorError.invalid_rule_structure()) == "Invalid rule structure"
    assert "exactly one" in str(RuleEvaluatorError.invalid_not_rule())
