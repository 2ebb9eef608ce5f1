"""
Player rules: progression, validation and filtering.
"""

from player_backend.game_logic.filters import Condition, PlayerFilter, build_filter
from player_backend.game_logic.progression import (
    apply_progression,
    compute_level,
    compute_until_next_level,
)
from player_backend.game_logic.protocol import PlayerData
from player_backend.game_logic.validation import validate_player

__all__ = [
    "Condition",
    "PlayerFilter",
    "build_filter",
    "apply_progression",
    "compute_level",
    "compute_until_next_level",
    "PlayerData",
    "validate_player",
]
