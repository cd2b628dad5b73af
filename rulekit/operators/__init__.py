"""
Operators Package

Built-in comparison, logical, mathematical, string, set, type and date
operators.
"""

from .comparison import (
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
from .logical import (
    LogicalAnd,
    LogicalNand,
    LogicalNor,
    LogicalNot,
    LogicalOperator,
    LogicalOr,
    LogicalXor,
)
from .mathematical import (
    Abs,
    Addition,
    Ceil,
    Division,
    Exponentiate,
    Floor,
    Max,
    Min,
    Modulo,
    Multiplication,
    Negation,
    Round,
    Subtraction,
)
from .string import (
    DoesNotMatch,
    EndsWith,
    EndsWithInsensitive,
    Matches,
    StartsWith,
    StartsWithInsensitive,
    StringContains,
    StringContainsInsensitive,
    StringDoesNotContain,
    StringDoesNotContainInsensitive,
    StringLength,
)
from .set import (
    Complement,
    ContainsSubset,
    DoesNotContainSubset,
    Intersect,
    SetContains,
    SetDoesNotContain,
    SymmetricDifference,
    Union,
)
from .type import ArrayCount, IsArray, IsBoolean, IsEmpty, IsNull, IsNumeric, IsString
from .date import After, Before, IsBetweenDates, to_datetime

COMPARISON_OPERATORS = (
    EqualTo, NotEqualTo, SameAs, NotSameAs, GreaterThan, GreaterThanOrEqualTo,
    LessThan, LessThanOrEqualTo, In, NotIn, Between,
)
LOGICAL_OPERATORS = (LogicalAnd, LogicalOr, LogicalXor, LogicalNot, LogicalNand, LogicalNor)
MATHEMATICAL_OPERATORS = (
    Addition, Subtraction, Multiplication, Division, Modulo, Exponentiate,
    Negation, Abs, Ceil, Floor, Round, Min, Max,
)
STRING_OPERATORS = (
    StartsWith, StartsWithInsensitive, EndsWith, EndsWithInsensitive,
    StringContains, StringContainsInsensitive, StringDoesNotContain,
    StringDoesNotContainInsensitive, Matches, DoesNotMatch, StringLength,
)
SET_OPERATORS = (
    Union, Intersect, Complement, SymmetricDifference, ContainsSubset,
    DoesNotContainSubset, SetContains, SetDoesNotContain,
)
TYPE_OPERATORS = (IsNull, IsBoolean, IsNumeric, IsString, IsArray, IsEmpty, ArrayCount)
DATE_OPERATORS = (Before, After, IsBetweenDates)

ALL_OPERATORS = (
    COMPARISON_OPERATORS + LOGICAL_OPERATORS + MATHEMATICAL_OPERATORS + STRING_OPERATORS
    + SET_OPERATORS + TYPE_OPERATORS + DATE_OPERATORS
)

__all__ = [cls.__name__ for cls in ALL_OPERATORS] + [
    "LogicalOperator",
    "to_datetime",
    "ALL_OPERATORS",
]
