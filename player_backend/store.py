"""
Player persistence behind a small async store interface.
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from player_backend.game_logic.filters import PlayerFilter
from player_backend.models.player import Player


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page of records sorted ascending by one attribute."""

    page_number: int
    page_size: int
    sort_field: str = "id"

    @property
    def offset(self) -> int:
        return self.page_number * self.page_size


@runtime_checkable
class PlayerStore(Protocol):
    """
    Storage operations the player service relies on.
    Each call is atomic on its own; read-modify-write sequences rely on the
    surrounding session transaction.
    """

    async def find(self, predicate: PlayerFilter, page: PageRequest) -> list[Player]:
        ...

    async def find_all(self, predicate: PlayerFilter) -> list[Player]:
        ...

    async def find_by_id(self, player_id: int) -> Player | None:
        ...

    async def exists_by_id(self, player_id: int) -> bool:
        ...

    async def save(self, player: Player) -> Player:
        ...

    async def delete_by_id(self, player_id: int) -> None:
        ...


class SqlPlayerStore:
    """Store backed by one SQLAlchemy AsyncSession."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def find(self, predicate: PlayerFilter, page: PageRequest) -> list[Player]:
        column = getattr(Player, page.sort_field)
        result = await self._db.execute(
            select(Player)
            .where(predicate.to_clause())
            .order_by(column.asc(), Player.id.asc())
            .offset(page.offset)
            .limit(page.page_size)
        )
        return list(result.scalars().all())

    async def find_all(self, predicate: PlayerFilter) -> list[Player]:
        result = await self._db.execute(
            select(Player).where(predicate.to_clause())
        )
        return list(result.scalars().all())

    async def find_by_id(self, player_id: int) -> Player | None:
        return await self._db.get(Player, player_id)

    async def exists_by_id(self, player_id: int) -> bool:
        result = await self._db.execute(
            select(func.count()).select_from(Player).where(Player.id == player_id)
        )
        return result.scalar_one() > 0

    async def save(self, player: Player) -> Player:
        self._db.add(player)
        await self._db.flush()
        await self._db.refresh(player)
        return player

    async def delete_by_id(self, player_id: int) -> None:
        await self._db.execute(delete(Player).where(Player.id == player_id))


class InMemoryPlayerStore:
    """
    Dict-backed store evaluating filters in Python.
    Ids are assigned from a counter starting at 1.
    """

    def __init__(self) -> None:
        self._players: dict[int, Player] = {}
        self._next_id = 1

    async def find(self, predicate: PlayerFilter, page: PageRequest) -> list[Player]:
        matches = await self.find_all(predicate)
        matches.sort(key=lambda p: (getattr(p, page.sort_field), p.id))
        return matches[page.offset:page.offset + page.page_size]

    async def find_all(self, predicate: PlayerFilter) -> list[Player]:
        return [p for p in self._players.values() if predicate(p)]

    async def find_by_id(self, player_id: int) -> Player | None:
        return self._players.get(player_id)

    async def exists_by_id(self, player_id: int) -> bool:
        return player_id in self._players

    async def save(self, player: Player) -> Player:
        if player.id is None:
            player.id = self._next_id
            self._next_id += 1
        self._players[player.id] = player
        return player

    async def delete_by_id(self, player_id: int) -> None:
        self._players.pop(player_id, None)
