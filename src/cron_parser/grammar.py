"""Format validation for five-field cron expressions.

Every expression is checked against a fixed grammar before any field is
parsed. Each field accepts one of:

    N           a single number in the field's legal range
    N,N,...     a list of such numbers
    N-N         an inclusive range of such numbers
    *           any value
    */N         every N-th value starting from zero

Legal ranges per position:

    Field         Values
    ─────────────────────
    Minute        0-59
    Hour          0-23
    Day of Month  1-31
    Month         1-12
    Day of Week   0-7 (0 and 7 are both Sunday)
"""

from __future__ import annotations

import re

from cron_parser.errors import CronParseError
from cron_parser.fields import FIELD_ORDER, FieldType

# =============================================================================
# Patterns
# =============================================================================

_NUMBER_0_TO_59 = r"([1-5]?[0-9])"
_NUMBER_0_TO_23 = r"([1]?[0-9]|[2][0-3])"
_NUMBER_1_TO_31 = r"([1-9]|[12][0-9]|[3][01])"
_NUMBER_1_TO_12 = r"([1-9]|[1][012])"
_NUMBER_0_TO_7 = r"([0-7])"


def _field_pattern(number: str) -> str:
    return (
        rf"((({number}[,])+{number})"
        rf"|{number}([-]{number})?"
        rf"|[*]([/]{number})?)"
    )


FIELD_PATTERNS: dict[FieldType, re.Pattern[str]] = {
    FieldType.MINUTE: re.compile(_field_pattern(_NUMBER_0_TO_59)),
    FieldType.HOUR: re.compile(_field_pattern(_NUMBER_0_TO_23)),
    FieldType.DAY_OF_MONTH: re.compile(_field_pattern(_NUMBER_1_TO_31)),
    FieldType.MONTH: re.compile(_field_pattern(_NUMBER_1_TO_12)),
    FieldType.DAY_OF_WEEK: re.compile(_field_pattern(_NUMBER_0_TO_7)),
}

CRON_PATTERN: re.Pattern[str] = re.compile(
    r"\s+".join(FIELD_PATTERNS[field_type].pattern for field_type in FIELD_ORDER)
)


# =============================================================================
# Validation Functions
# =============================================================================


def _collect_errors(expression: str) -> tuple[list[str], list[str], str]:
    """Check an expression, returning (fields, errors, first offending fragment)."""
    parts = expression.strip().split()
    if len(parts) != len(FIELD_ORDER):
        return parts, [
            f"Invalid number of fields: {len(parts)}. Expected {len(FIELD_ORDER)} fields."
        ], expression

    errors: list[str] = []
    fragment = ""
    for part, field_type in zip(parts, FIELD_ORDER):
        if FIELD_PATTERNS[field_type].fullmatch(part) is None:
            errors.append(f"Invalid {field_type.label} field: {part!r}")
            fragment = fragment or part

    return parts, errors, fragment


def split_expression(expression: str) -> tuple[str, str, str, str, str]:
    """Validate an expression and split it into its five raw fields.

    Args:
        expression: Cron expression string.

    Returns:
        Raw (minute, hour, day, month, weekday) field strings.

    Raises:
        CronParseError: If the expression does not match the grammar.
    """
    if not expression or not expression.strip():
        raise CronParseError("Cron expression must not be empty", expression)

    parts, errors, fragment = _collect_errors(expression)
    if errors:
        raise CronParseError("; ".join(errors), expression, fragment)

    minute, hour, day, month, weekday = parts
    return minute, hour, day, month, weekday


def validate_expression(expression: str) -> list[str]:
    """Validate a cron expression.

    Args:
        expression: Cron expression to validate.

    Returns:
        List of validation errors (empty if valid).
    """
    if not expression or not expression.strip():
        return ["Cron expression must not be empty"]
    return _collect_errors(expression)[1]


def is_valid_expression(expression: str) -> bool:
    """Check if a cron expression matches the grammar."""
    if not expression:
        return False
    return CRON_PATTERN.fullmatch(expression.strip()) is not None
