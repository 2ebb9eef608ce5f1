"""
Level progression derived from experience.
"""

import math


def compute_level(experience: int) -> int:
    """
    Level reached with the given experience.
    Thresholds sit at 50 * L * (L + 1) experience for level L.
    """
    return (math.isqrt(2500 + 200 * experience) - 50) // 100


def compute_until_next_level(experience: int, level: int) -> int:
    """Experience still missing to reach level + 1."""
    return 50 * (level + 1) * (level + 2) - experience


def apply_progression(player) -> None:
    """Recompute level and until_next_level on a record from its experience."""
    level = compute_level(player.experience)
    player.level = level
    player.until_next_level = compute_until_next_level(player.experience, level)
