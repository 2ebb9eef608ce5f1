"""
SQLAlchemy models for Player Backend.
"""

from player_backend.models.player import Player, Profession, Race

__all__ = ["Player", "Profession", "Race"]
