"""
Field rules applied to a player record before it is persisted.
Checks run in a fixed order and stop at the first violation.
"""

from datetime import date, datetime, timezone

from player_backend.errors import ValidationError
from player_backend.models.player import Profession, Race

MAX_NAME_LENGTH = 12
MAX_TITLE_LENGTH = 30
MAX_EXPERIENCE = 10_000_000
MIN_BIRTHDAY_YEAR = 2000
MAX_BIRTHDAY_YEAR = 3000

EPOCH = datetime(1970, 1, 1)


def validate_player(record) -> None:
    """
    Validate name, title, race, profession, experience and birthday.

    Works on any object exposing those attributes (a Player row or a
    PlayerData). Raises ValidationError on the first violated rule.
    """
    check_name(record.name)
    check_title(record.title)
    check_race(record.race)
    check_profession(record.profession)
    check_experience(record.experience)
    check_birthday(record.birthday)


def check_name(name) -> None:
    if not isinstance(name, str) or not 1 <= len(name) <= MAX_NAME_LENGTH:
        raise ValidationError("name must be 1-12 characters")


def check_title(title) -> None:
    if not isinstance(title, str) or not 1 <= len(title) <= MAX_TITLE_LENGTH:
        raise ValidationError("title must be 1-30 characters")


def check_race(race) -> None:
    if not isinstance(race, Race):
        raise ValidationError("race is required")


def check_profession(profession) -> None:
    if not isinstance(profession, Profession):
        raise ValidationError("profession is required")


def check_experience(experience) -> None:
    # bool is an int subclass but never a valid experience
    if (
        not isinstance(experience, int)
        or isinstance(experience, bool)
        or not 0 <= experience <= MAX_EXPERIENCE
    ):
        raise ValidationError("experience must be within 0-10000000")


def check_birthday(birthday) -> None:
    moment = normalize_birthday(birthday)
    if not MIN_BIRTHDAY_YEAR <= moment.year <= MAX_BIRTHDAY_YEAR or moment < EPOCH:
        raise ValidationError("birthday year must be within 2000-3000")


def normalize_birthday(value) -> datetime:
    """
    Coerce a birthday value (datetime, date or ISO string) to the naive UTC
    datetime that is stored on the row.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            raise ValidationError("birthday is not a valid date") from None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    raise ValidationError("birthday is required")
