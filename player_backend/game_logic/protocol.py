"""
Plain data types shared by the game rules and the player service.
"""

from dataclasses import dataclass, fields
from datetime import datetime

from player_backend.models.player import Player, Profession, Race


@dataclass
class PlayerData:
    """
    Caller-supplied player fields, decoded from a request body.
    Any field may be None; for updates only non-None fields are applied.
    Derived fields (level, until_next_level) are never part of the input.
    """

    name: str | None = None
    title: str | None = None
    race: Race | None = None
    profession: Profession | None = None
    experience: int | None = None
    birthday: datetime | None = None
    banned: bool | None = None

    @classmethod
    def from_player(cls, player: Player) -> "PlayerData":
        """Snapshot the editable fields of a stored record."""
        return cls(**{f.name: getattr(player, f.name) for f in fields(cls)})

    def merged_with(self, changes: "PlayerData") -> "PlayerData":
        """Return a copy where every non-None field of changes wins."""
        merged = {}
        for f in fields(self):
            value = getattr(changes, f.name)
            merged[f.name] = value if value is not None else getattr(self, f.name)
        return PlayerData(**merged)

    def apply_to(self, player: Player) -> None:
        """Copy the non-None fields onto a record."""
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                setattr(player, f.name, value)
