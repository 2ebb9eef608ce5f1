"""
Player model for Player Backend.
"""

import enum
from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from player_backend.database import Base


class Race(str, enum.Enum):
    """Closed set of character races."""

    HUMAN = "HUMAN"
    DWARF = "DWARF"
    ELF = "ELF"
    GIANT = "GIANT"
    ORC = "ORC"
    TROLL = "TROLL"
    HOBBIT = "HOBBIT"


class Profession(str, enum.Enum):
    """Closed set of character professions."""

    WARRIOR = "WARRIOR"
    ROGUE = "ROGUE"
    SORCERER = "SORCERER"
    CLERIC = "CLERIC"
    PALADIN = "PALADIN"
    NAZGUL = "NAZGUL"
    WARLOCK = "WARLOCK"
    DRUID = "DRUID"


class Player(Base):
    """
    Game character record.
    level and until_next_level are derived from experience and are
    recomputed by the service on every save.
    """

    __tablename__ = "players"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(
        String(12),
        index=True,
        nullable=False,
    )
    title: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
    )
    race: Mapped[Race] = mapped_column(
        Enum(Race, name="race"),
        nullable=False,
    )
    profession: Mapped[Profession] = mapped_column(
        Enum(Profession, name="profession"),
        nullable=False,
    )
    experience: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    level: Mapped[int] = mapped_column(
        Integer,
        index=True,
        nullable=False,
    )
    until_next_level: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    birthday: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
    )
    banned: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Player(id={self.id}, name={self.name}, level={self.level})>"
