"""Field constraints and the field parser.

A field constraint is one of four tagged variants:

    Unconstrained   matches every value (``*``)
    Single          one integer
    Many            an explicit sequence of integers
    Text            raw cron text still to be parsed

``parse_constraint`` resolves any of them to either ``None`` (unconstrained)
or an ascending tuple of integers. Range filtering against a field's legal
values is not done here; that belongs to schedule assembly.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from cron_parser.errors import CronParseError

# Number of slots a ``*/n`` step is generated over, whatever the field.
STEP_WINDOW = 120

_INTEGER = re.compile(r"[+-]?\d+")


# =============================================================================
# Field Types
# =============================================================================


class FieldType(Enum):
    """The five positional cron fields."""

    MINUTE = "minute"
    HOUR = "hour"
    DAY_OF_MONTH = "day-of-month"
    MONTH = "month"
    DAY_OF_WEEK = "weekday"

    @property
    def label(self) -> str:
        return self.value

    @property
    def min_value(self) -> int:
        return FIELD_RANGES[self][0]

    @property
    def max_value(self) -> int:
        return FIELD_RANGES[self][1]


FIELD_ORDER: tuple[FieldType, ...] = (
    FieldType.MINUTE,
    FieldType.HOUR,
    FieldType.DAY_OF_MONTH,
    FieldType.MONTH,
    FieldType.DAY_OF_WEEK,
)

# Inclusive legal bounds. Weekday 0 and 7 are both Sunday.
FIELD_RANGES: dict[FieldType, tuple[int, int]] = {
    FieldType.MINUTE: (0, 59),
    FieldType.HOUR: (0, 23),
    FieldType.DAY_OF_MONTH: (1, 31),
    FieldType.MONTH: (1, 12),
    FieldType.DAY_OF_WEEK: (0, 7),
}


# =============================================================================
# Constraint Variants
# =============================================================================


@dataclass(frozen=True)
class Unconstrained:
    """Matches any value in the field."""


@dataclass(frozen=True)
class Single:
    value: int


@dataclass(frozen=True)
class Many:
    values: tuple[int, ...]


@dataclass(frozen=True)
class Text:
    text: str


Constraint = Union[Unconstrained, Single, Many, Text]

UNCONSTRAINED = Unconstrained()


def to_constraint(raw: Any) -> Constraint:
    """Lift a plain Python value into a constraint variant.

    Args:
        raw: None, an int, a sequence of ints, a string, or a constraint.

    Returns:
        The matching constraint variant.

    Raises:
        CronParseError: If the value has none of the accepted shapes.
    """
    if raw is None:
        return UNCONSTRAINED
    if isinstance(raw, (Unconstrained, Single, Many, Text)):
        return raw
    # bool is an int subclass and bytes a sequence of ints, but neither is a
    # meaningful field value
    if isinstance(raw, (bool, bytes, bytearray)):
        raise CronParseError(f"Unable to parse: {raw!r}", fragment=repr(raw))
    if isinstance(raw, int):
        return Single(raw)
    if isinstance(raw, str):
        return Text(raw)
    if isinstance(raw, Sequence) and all(
        isinstance(v, int) and not isinstance(v, bool) for v in raw
    ):
        return Many(tuple(raw))
    raise CronParseError(f"Unable to parse: {raw!r}", fragment=repr(raw))


# =============================================================================
# Field Parser
# =============================================================================


def _try_int(text: str) -> int | None:
    if _INTEGER.fullmatch(text) is None:
        return None
    return int(text)


def _parse_text(text: str, *, in_list: bool = False) -> tuple[int, ...] | None:
    if text == "*":
        if in_list:
            raise CronParseError(f"Unable to parse: {text}", fragment=text)
        return None

    parts = text.split(",")
    if len(parts) > 1:
        if in_list:
            raise CronParseError(f"Unable to parse: {text}", fragment=text)
        items: set[int] = set()
        for part in parts:
            # in_list rejects wildcards, so the result is never None
            items.update(_parse_text(part, in_list=True) or ())
        return tuple(sorted(items))

    single = _try_int(text)
    if single is not None:
        return (single,)

    if text.startswith("*/"):
        period = _try_int(text[2:])
        if period is not None and period > 0:
            return tuple(i * period for i in range(STEP_WINDOW // period))
        raise CronParseError(f"Unable to parse: {text}", fragment=text)

    if "-" in text:
        bounds = text.split("-")
        if len(bounds) == 2:
            lower = _try_int(bounds[0])
            higher = _try_int(bounds[1])
            if lower is not None and higher is not None and lower <= higher:
                return tuple(range(lower, higher + 1))

    raise CronParseError(f"Unable to parse: {text}", fragment=text)


def parse_constraint(constraint: Any) -> tuple[int, ...] | None:
    """Resolve a field constraint to its values.

    Text is interpreted in order as: ``*``, a comma list, a bare integer,
    ``*/n``, then ``low-high``. ``Single`` and ``Many`` pass through without
    range checks.

    Args:
        constraint: A constraint variant or a plain value accepted by
            ``to_constraint``.

    Returns:
        None when unconstrained, else the values in ascending order for text
        input and in the given order otherwise.

    Raises:
        CronParseError: If the text cannot be interpreted.
    """
    constraint = to_constraint(constraint)

    if isinstance(constraint, Unconstrained):
        return None
    if isinstance(constraint, Single):
        return (constraint.value,)
    if isinstance(constraint, Many):
        return constraint.values
    return _parse_text(constraint.text)
