"""
Validation results returned by the DSL validators.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ValidationIssue(BaseModel):
    """A single problem found while validating rule source."""
    message: str
    position: Optional[int] = Field(None, description="Character offset in the source, when known")
    context: Optional[str] = Field(None, description="Source snippet around the position")


class ValidationResult(BaseModel):
    """
    Result of validating rule source.
    """
    valid: bool
    errors: List[ValidationIssue] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    @classmethod
    def success(cls, warnings: Optional[List[str]] = None) -> "ValidationResult":
        return cls(valid=True, warnings=warnings or [])

    @classmethod
    def failure(cls, errors: List[ValidationIssue]) -> "ValidationResult":
        return cls(valid=False, errors=errors)

    @property
    def error_messages(self) -> List[str]:
        return [error.message for error in self.errors]

    @property
    def first_error(self) -> Optional[str]:
        return self.errors[0].message if self.errors else None


def snippet(source: str, position: Optional[int], radius: int = 10) -> Optional[str]:
    """Return the source text around ``position``."""
    if position is None or not isinstance(source, str):
        return None
    start = max(0, position - radius)
    return source[start:position + radius]
