"""
Player API routes for Player Backend.
"""

from datetime import datetime, timedelta, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, field_serializer, field_validator
from pydantic.alias_generators import to_camel
from sqlalchemy.ext.asyncio import AsyncSession

from player_backend.config import Settings, get_settings
from player_backend.database import get_db
from player_backend.game_logic.protocol import PlayerData
from player_backend.models.player import Player, Profession, Race
from player_backend.service import PlayerService
from player_backend.store import SqlPlayerStore

router = APIRouter()

EPOCH = datetime(1970, 1, 1)


def epoch_millis_to_datetime(value):
    """
    Read numeric birthdays as epoch milliseconds.
    pydantic alone would read values up to 2e10 as seconds.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return EPOCH + timedelta(milliseconds=value)
        except OverflowError:
            raise ValueError("birthday is out of range") from None
    return value


# Request/Response schemas
class PlayerRequest(BaseModel):
    """
    Request schema for player create/update.
    Every field is optional here; the service decides what is required.
    id, level and untilNextLevel sent by clients are ignored.
    """

    name: str | None = None
    title: str | None = None
    race: Race | None = None
    profession: Profession | None = None
    experience: int | None = None
    birthday: datetime | None = None
    banned: bool | None = None

    @field_validator("birthday", mode="before")
    @classmethod
    def birthday_from_millis(cls, value):
        return epoch_millis_to_datetime(value)

    @field_validator("birthday")
    @classmethod
    def to_naive_utc(cls, value: datetime | None) -> datetime | None:
        """Epoch numbers parse as aware UTC; rows store naive UTC."""
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    def to_data(self) -> PlayerData:
        return PlayerData(
            name=self.name,
            title=self.title,
            race=self.race,
            profession=self.profession,
            experience=self.experience,
            birthday=self.birthday,
            banned=self.banned,
        )


class PlayerResponse(BaseModel):
    """Response schema for player info. birthday is sent as epoch milliseconds."""

    id: int
    name: str
    title: str
    race: Race
    profession: Profession
    experience: int
    level: int
    until_next_level: int
    birthday: datetime
    banned: bool

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel

    @field_validator("birthday", mode="before")
    @classmethod
    def birthday_from_millis(cls, value):
        return epoch_millis_to_datetime(value)

    @field_serializer("birthday")
    def birthday_millis(self, value: datetime) -> int:
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return (value - EPOCH) // timedelta(milliseconds=1)


def to_response(player: Player) -> PlayerResponse:
    return PlayerResponse(
        id=player.id,
        name=player.name,
        title=player.title,
        race=player.race,
        profession=player.profession,
        experience=player.experience,
        level=player.level,
        until_next_level=player.until_next_level,
        birthday=player.birthday,
        banned=player.banned,
    )


async def get_player_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PlayerService:
    """Dependency building a service bound to the request's session."""
    return PlayerService(SqlPlayerStore(db))


# Routes
@router.get("", response_model=list[PlayerResponse])
async def list_players(
    request: Request,
    service: Annotated[PlayerService, Depends(get_player_service)],
    settings: Annotated[Settings, Depends(get_settings)],
    pageNumber: int = 0,
    pageSize: int | None = None,
    order: str | None = None,
) -> list[PlayerResponse]:
    """
    List one page of players.
    Any filter parameters in the query string narrow the result.
    """
    players = await service.list(
        page_number=pageNumber,
        page_size=pageSize if pageSize is not None else settings.default_page_size,
        sort_field=order or settings.default_order,
        filter_params=dict(request.query_params),
    )
    return [to_response(player) for player in players]


@router.get("/count", response_model=int)
async def count_players(
    request: Request,
    service: Annotated[PlayerService, Depends(get_player_service)],
) -> int:
    """
    Count players matching the filter parameters.
    """
    return await service.count(dict(request.query_params))


@router.get("/{player_id}", response_model=PlayerResponse)
async def get_player(
    player_id: str,
    service: Annotated[PlayerService, Depends(get_player_service)],
) -> PlayerResponse:
    """
    Get player details by ID.
    """
    return to_response(await service.get_by_id(player_id))


@router.post("", response_model=PlayerResponse)
async def create_player(
    request: PlayerRequest,
    service: Annotated[PlayerService, Depends(get_player_service)],
) -> PlayerResponse:
    """
    Create a new player. All fields except banned are required.
    """
    return to_response(await service.create(request.to_data()))


@router.post("/{player_id}", response_model=PlayerResponse)
async def update_player(
    player_id: str,
    request: PlayerRequest,
    service: Annotated[PlayerService, Depends(get_player_service)],
) -> PlayerResponse:
    """
    Update the supplied fields of an existing player.
    """
    return to_response(await service.update(player_id, request.to_data()))


@router.delete("/{player_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_player(
    player_id: str,
    service: Annotated[PlayerService, Depends(get_player_service)],
) -> None:
    """
    Delete a player.
    """
    await service.delete(player_id)
