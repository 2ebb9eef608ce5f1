"""
Player service: CRUD orchestration over a PlayerStore.
"""

import logging
import re
from dataclasses import replace
from typing import Mapping

from player_backend.errors import BadRequestError, NotFoundError
from player_backend.game_logic.filters import INT32_MAX, PlayerFilter, build_filter
from player_backend.game_logic.progression import apply_progression
from player_backend.game_logic.protocol import PlayerData
from player_backend.game_logic.validation import normalize_birthday, validate_player
from player_backend.models.player import Player
from player_backend.store import PageRequest, PlayerStore

logger = logging.getLogger(__name__)

MAX_ID = 2**63 - 1

_ID_RE = re.compile(r"[+-]?[0-9]+")

# Lower-cased client names -> Player attributes
SORTABLE_FIELDS = {
    "id": "id",
    "name": "name",
    "title": "title",
    "race": "race",
    "profession": "profession",
    "experience": "experience",
    "level": "level",
    "untilnextlevel": "until_next_level",
    "until_next_level": "until_next_level",
    "birthday": "birthday",
    "banned": "banned",
}


def check_and_get_id(raw_id: str | None) -> int:
    """
    Parse a client-supplied player id.
    None, "", "0", negatives and non-integers are rejected.
    """
    if raw_id is None or raw_id == "" or raw_id == "0":
        raise BadRequestError("Invalid player id")
    if not _ID_RE.fullmatch(raw_id):
        raise BadRequestError("Invalid player id")
    player_id = int(raw_id)
    if player_id < 0 or player_id > MAX_ID:
        raise BadRequestError("Invalid player id")
    return player_id


def resolve_sort_field(order: str) -> str:
    """Map a case-insensitive client sort name to a Player attribute."""
    try:
        return SORTABLE_FIELDS[order.lower()]
    except (KeyError, AttributeError):
        raise BadRequestError(f"Cannot sort by {order!r}") from None


class PlayerService:
    """
    Create, read, update, delete and count players.
    Errors propagate to the caller untouched.
    """

    def __init__(self, store: PlayerStore) -> None:
        self._store = store

    async def list(
        self,
        page_number: int,
        page_size: int,
        sort_field: str,
        filter_params: Mapping[str, str] | None = None,
    ) -> list[Player]:
        """Return one sorted page of the players matching the filters."""
        # both bounded to 32 bits so the SQL offset always fits a signed 64-bit integer
        if not 0 <= page_number <= INT32_MAX or not 1 <= page_size <= INT32_MAX:
            raise BadRequestError("Invalid page request")
        predicate = build_filter(filter_params)
        page = PageRequest(
            page_number=page_number,
            page_size=page_size,
            sort_field=resolve_sort_field(sort_field),
        )
        return await self._store.find(predicate, page)

    async def count(self, filter_params: Mapping[str, str] | None = None) -> int:
        """Count the players matching the filters."""
        predicate: PlayerFilter = build_filter(filter_params)
        return len(await self._store.find_all(predicate))

    async def get_by_id(self, raw_id: str | None) -> Player:
        player_id = check_and_get_id(raw_id)
        player = await self._store.find_by_id(player_id)
        if player is None:
            raise NotFoundError(f"Player {player_id} not found")
        return player

    async def create(self, data: PlayerData) -> Player:
        """
        Validate the supplied fields as-is, derive level data, default banned
        to False and persist.
        """
        validate_player(data)
        data = replace(data, birthday=normalize_birthday(data.birthday))
        player = Player()
        data.apply_to(player)
        if player.banned is None:
            player.banned = False
        apply_progression(player)
        saved = await self._store.save(player)
        logger.info(f"Created player {saved.id} ({saved.name})")
        return saved

    async def update(self, raw_id: str | None, changes: PlayerData) -> Player:
        """
        Overwrite the supplied fields of an existing player, then re-derive
        and re-validate the whole record before persisting it.
        The stored record is left untouched when validation fails.
        """
        player_id = check_and_get_id(raw_id)
        await self._check_exists(player_id)
        player = await self._store.find_by_id(player_id)
        if player is None:
            raise NotFoundError(f"Player {player_id} not found")

        merged = PlayerData.from_player(player).merged_with(changes)
        validate_player(merged)
        merged.birthday = normalize_birthday(merged.birthday)
        merged.apply_to(player)
        apply_progression(player)

        saved = await self._store.save(player)
        logger.info(f"Updated player {saved.id}")
        return saved

    async def delete(self, raw_id: str | None) -> None:
        player_id = check_and_get_id(raw_id)
        await self._check_exists(player_id)
        await self._store.delete_by_id(player_id)
        logger.info(f"Deleted player {player_id}")

    async def _check_exists(self, player_id: int) -> None:
        if not await self._store.exists_by_id(player_id):
            raise NotFoundError(f"Player {player_id} not found")
