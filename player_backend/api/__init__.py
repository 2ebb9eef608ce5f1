"""
REST API routes for Player Backend.
"""

from fastapi import APIRouter

from player_backend.api.players import router as players_router

api_router = APIRouter()

api_router.include_router(players_router, prefix="/players", tags=["players"])

__all__ = ["api_router"]
