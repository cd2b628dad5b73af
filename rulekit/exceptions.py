"""
Custom Exception Hierarchy for rulekit
Provides structured error handling with context preservation.
"""
from typing import Optional, Dict, Any


class RulekitError(Exception):
    """Base exception for all rulekit errors."""

    def __init__(
        self,
        message: str,
        component: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.component = component
        self.context = context or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "component": self.component,
            "context": self.context
        }


# -------------------------------------------------------------------------
# CONFIGURATION ERRORS
# -------------------------------------------------------------------------

class ConfigurationError(RulekitError):
    """Raised when configuration is invalid or missing."""
    pass


# -------------------------------------------------------------------------
# STRUCTURAL ERRORS
# -------------------------------------------------------------------------

class StructuralError(RulekitError):
    """Raised when a rule tree is malformed."""
    pass


class OperandCardinalityError(StructuralError):
    """Raised when an operator receives the wrong number of operands."""
    pass


class UnknownOperatorError(StructuralError):
    """Raised when an operator token is not registered."""
    pass


class InvalidActionError(StructuralError):
    """Raised when a rule action cannot be invoked."""
    pass


class CompileError(StructuralError):
    """Raised when a DSL tree cannot be compiled into operators."""
    pass


class DSLSyntaxError(CompileError):
    """Raised when rule text cannot be parsed."""

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        component: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        self.position = position
        if position is not None:
            message = f"{message} at position {position}"
        super().__init__(message, component=component, context=context)


class SerializationError(StructuralError):
    """Raised when an operator tree cannot be written in a DSL syntax."""
    pass


class RuleEvaluatorError(StructuralError):
    """Raised when an array/JSON rule definition is malformed."""

    @classmethod
    def invalid_combinator(cls, combinator: Any) -> "RuleEvaluatorError":
        return cls(
            f"Invalid combinator: {combinator}",
            component="RuleEvaluator",
            context={"combinator": combinator}
        )

    @classmethod
    def invalid_rule_structure(cls, detail: Optional[str] = None) -> "RuleEvaluatorError":
        message = "Invalid rule structure"
        if detail:
            message = f"{message}: {detail}"
        return cls(message, component="RuleEvaluator")

    @classmethod
    def invalid_not_rule(cls) -> "RuleEvaluatorError":
        return cls("Logical NOT must have exactly one argument", component="RuleEvaluator")


# -------------------------------------------------------------------------
# EVALUATION ERRORS
# -------------------------------------------------------------------------

class OperandTypeError(RulekitError):
    """Raised when an operator receives a value of the wrong type."""
    pass


class DomainError(RulekitError):
    """Raised when values have the right type but the operation is impossible."""
    pass


class DivisionByZeroError(DomainError):
    """Raised when dividing by zero."""
    pass


class InvalidDateError(DomainError):
    """Raised when a string cannot be parsed into a date."""
    pass


class InvalidPatternError(DomainError):
    """Raised when a regular expression pattern is rejected by the regex engine."""
    pass
