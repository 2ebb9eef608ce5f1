"""
Composable player filters built from query parameters.

Each recognized parameter becomes one Condition. A PlayerFilter is the
logical AND of its conditions and can either be evaluated against a record
in Python or rendered into a SQL WHERE clause.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Callable, Mapping

from sqlalchemy import and_, true
from sqlalchemy.sql.elements import ColumnElement

from player_backend.errors import BadRequestError
from player_backend.models.player import Player, Profession, Race

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

EPOCH = datetime(1970, 1, 1)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Condition:
    """Single comparison between a Player attribute and a value."""

    field: str
    op: str  # one of: contains, ge, le, eq
    value: Any

    def matches(self, player) -> bool:
        actual = getattr(player, self.field)
        if actual is None:
            return False
        if self.op == "contains":
            return self.value in actual
        if self.op == "ge":
            return actual >= self.value
        if self.op == "le":
            return actual <= self.value
        return actual == self.value

    def to_clause(self) -> ColumnElement[bool]:
        column = getattr(Player, self.field)
        if self.op == "contains":
            return column.contains(self.value, autoescape=True)
        if self.op == "ge":
            return column >= self.value
        if self.op == "le":
            return column <= self.value
        return column == self.value


@dataclass(frozen=True)
class PlayerFilter:
    """
    Conjunction of conditions over a Player.
    An empty filter matches every record.
    """

    conditions: tuple[Condition, ...] = ()

    def __call__(self, player) -> bool:
        return all(condition.matches(player) for condition in self.conditions)

    def __and__(self, other: "PlayerFilter") -> "PlayerFilter":
        return PlayerFilter(self.conditions + other.conditions)

    def to_clause(self) -> ColumnElement[bool]:
        if not self.conditions:
            return true()
        return and_(*(condition.to_clause() for condition in self.conditions))


def parse_int(value: str, key: str, low: int = INT32_MIN, high: int = INT32_MAX) -> int:
    """Parse a signed decimal integer, rejecting anything else."""
    if value is None or not _INTEGER_RE.fullmatch(value):
        raise BadRequestError(f"{key} must be an integer")
    number = int(value)
    if not low <= number <= high:
        raise BadRequestError(f"{key} is out of range")
    return number


def parse_timestamp(value: str, key: str) -> datetime:
    """Parse epoch milliseconds into a naive UTC datetime."""
    millis = parse_int(value, key, INT64_MIN, INT64_MAX)
    try:
        return EPOCH + timedelta(milliseconds=millis)
    except OverflowError:
        raise BadRequestError(f"{key} is out of range") from None


def parse_enum(enum_cls: type[Enum], value: str, key: str) -> Enum:
    try:
        return enum_cls[value]
    except KeyError:
        raise BadRequestError(f"{key} has unknown value {value!r}") from None


def parse_bool(value: str) -> bool:
    """Lenient boolean: only 'true' (any case) is true."""
    return value is not None and value.lower() == "true"


FILTER_BUILDERS: dict[str, Callable[[str], Condition]] = {
    "name": lambda v: Condition("name", "contains", v),
    "title": lambda v: Condition("title", "contains", v),
    "after": lambda v: Condition("birthday", "ge", parse_timestamp(v, "after")),
    "before": lambda v: Condition("birthday", "le", parse_timestamp(v, "before")),
    "minExperience": lambda v: Condition("experience", "ge", parse_int(v, "minExperience")),
    "maxExperience": lambda v: Condition("experience", "le", parse_int(v, "maxExperience")),
    "minLevel": lambda v: Condition("level", "ge", parse_int(v, "minLevel")),
    "maxLevel": lambda v: Condition("level", "le", parse_int(v, "maxLevel")),
    "race": lambda v: Condition("race", "eq", parse_enum(Race, v, "race")),
    "profession": lambda v: Condition("profession", "eq", parse_enum(Profession, v, "profession")),
    "banned": lambda v: Condition("banned", "eq", parse_bool(v)),
}


def build_filter(params: Mapping[str, str] | None) -> PlayerFilter:
    """
    Build the AND of one condition per recognized parameter.
    Unrecognized keys are ignored; malformed values raise BadRequestError.
    """
    if not params:
        return PlayerFilter()
    return PlayerFilter(
        tuple(build(params[key]) for key, build in FILTER_BUILDERS.items() if key in params)
    )
