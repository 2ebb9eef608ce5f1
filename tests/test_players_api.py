"""
Tests for player endpoints.
"""

from datetime import datetime

import pytest
from httpx import AsyncClient

from factories import millis

BASE = "/rest/players"


def player_body(**overrides) -> dict:
    body = {
        "name": "Aria",
        "title": "Knight",
        "race": "HUMAN",
        "profession": "WARRIOR",
        "experience": 100,
        "birthday": millis(datetime(2020, 1, 1)),
    }
    body.update(overrides)
    return body


async def create(client: AsyncClient, **overrides) -> dict:
    response = await client.post(BASE, json=player_body(**overrides))
    assert response.status_code == 200, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_player(client: AsyncClient):
    """Create returns the stored record with derived fields."""
    response = await client.post(BASE, json=player_body(level=99, untilNextLevel=5))
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == 1
    assert data["name"] == "Aria"
    assert data["race"] == "HUMAN"
    assert data["level"] == 1
    assert data["untilNextLevel"] == 200
    assert data["banned"] is False
    assert data["birthday"] == millis(datetime(2020, 1, 1))


@pytest.mark.asyncio
async def test_create_accepts_iso_birthday(client: AsyncClient):
    data = await create(client, birthday="2020-01-01T00:00:00")
    assert data["birthday"] == millis(datetime(2020, 1, 1))


@pytest.mark.asyncio
@pytest.mark.parametrize("overrides", [
    {"name": ""},
    {"name": "ThirteenChars"},
    {"title": None},
    {"experience": 10_000_001},
    {"birthday": millis(datetime(1999, 12, 31))},
    {"birthday": millis(datetime(3001, 1, 1))},
])
async def test_create_invalid_player(client: AsyncClient, overrides):
    response = await client.post(BASE, json=player_body(**overrides))
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_malformed_body_is_bad_request(client: AsyncClient):
    response = await client.post(BASE, json=player_body(race="CENTAUR"))
    assert response.status_code == 400
    response = await client.post(BASE, json=player_body(experience="many"))
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_get_player(client: AsyncClient):
    created = await create(client)

    response = await client.get(f"{BASE}/{created['id']}")
    assert response.status_code == 200
    assert response.json() == created


@pytest.mark.asyncio
@pytest.mark.parametrize("raw_id, status_code", [
    ("0", 400),
    ("-1", 400),
    ("abc", 400),
    ("999", 404),
])
async def test_get_player_bad_ids(client: AsyncClient, raw_id, status_code):
    response = await client.get(f"{BASE}/{raw_id}")
    assert response.status_code == status_code


@pytest.mark.asyncio
async def test_update_player(client: AsyncClient):
    """Partial update recomputes level data and keeps other fields."""
    created = await create(client, experience=5000)

    response = await client.post(f"{BASE}/{created['id']}", json={"experience": 600_000})
    assert response.status_code == 200
    data = response.json()
    assert data["experience"] == 600_000
    assert data["level"] == 109
    assert data["untilNextLevel"] == 10_500
    for key in ("id", "name", "title", "race", "profession", "birthday", "banned"):
        assert data[key] == created[key]


@pytest.mark.asyncio
async def test_update_invalid_keeps_record(client: AsyncClient):
    created = await create(client)

    response = await client.post(f"{BASE}/{created['id']}", json={"experience": -1})
    assert response.status_code == 400

    response = await client.get(f"{BASE}/{created['id']}")
    assert response.json() == created


@pytest.mark.asyncio
async def test_update_missing_player(client: AsyncClient):
    response = await client.post(f"{BASE}/999", json={"name": "Ghost"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_player(client: AsyncClient):
    created = await create(client)

    response = await client.delete(f"{BASE}/{created['id']}")
    assert response.status_code == 204

    response = await client.get(f"{BASE}/{created['id']}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_missing_player(client: AsyncClient):
    await create(client)

    response = await client.delete(f"{BASE}/999")
    assert response.status_code == 404

    response = await client.get(f"{BASE}/count")
    assert response.json() == 1


@pytest.mark.asyncio
async def test_list_defaults_to_first_page_of_three(client: AsyncClient):
    for name in ["Dax", "Cara", "Bo", "Abe"]:
        await create(client, name=name)

    response = await client.get(BASE)
    assert response.status_code == 200
    assert [p["name"] for p in response.json()] == ["Dax", "Cara", "Bo"]


@pytest.mark.asyncio
async def test_list_order_and_paging(client: AsyncClient):
    for name in ["Dax", "Cara", "Bo", "Abe"]:
        await create(client, name=name)

    response = await client.get(BASE, params={"order": "NAME", "pageSize": 2, "pageNumber": 1})
    assert [p["name"] for p in response.json()] == ["Cara", "Dax"]


@pytest.mark.asyncio
async def test_list_with_filters(client: AsyncClient):
    await create(client, name="Aria", experience=5500)
    await create(client, name="aria", experience=6000, banned=True)
    await create(client, name="Borin", race="DWARF", experience=100)

    response = await client.get(BASE, params={"name": "ria", "minLevel": 10, "maxLevel": 10})
    assert [p["name"] for p in response.json()] == ["Aria", "aria"]

    response = await client.get(BASE, params={"name": "Ar"})
    assert [p["name"] for p in response.json()] == ["Aria"]

    response = await client.get(BASE, params={"race": "DWARF"})
    assert [p["name"] for p in response.json()] == ["Borin"]


@pytest.mark.asyncio
async def test_list_birthday_window(client: AsyncClient):
    await create(client, name="Old", birthday=millis(datetime(2001, 1, 1)))
    await create(client, name="New", birthday=millis(datetime(2050, 1, 1)))

    response = await client.get(BASE, params={"after": millis(datetime(2010, 1, 1))})
    assert [p["name"] for p in response.json()] == ["New"]

    response = await client.get(BASE, params={"before": millis(datetime(2001, 1, 1))})
    assert [p["name"] for p in response.json()] == ["Old"]


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [
    {"minLevel": "x"},
    {"race": "CENTAUR"},
    {"order": "shoeSize"},
    {"pageNumber": "first"},
])
async def test_list_malformed_parameters(client: AsyncClient, params):
    response = await client.get(BASE, params=params)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_count_players(client: AsyncClient):
    await create(client, banned=True)
    await create(client)
    await create(client, profession="DRUID")

    response = await client.get(f"{BASE}/count")
    assert response.status_code == 200
    assert response.json() == 3

    response = await client.get(f"{BASE}/count", params={"banned": "false"})
    assert response.json() == 2

    response = await client.get(f"{BASE}/count", params={"profession": "DRUID"})
    assert response.json() == 1


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_numeric_birthday_is_always_milliseconds(client: AsyncClient):
    """15_000_000_000 ms is mid-1970 and outside the allowed years."""
    response = await client.post(BASE, json=player_body(birthday=15_000_000_000))
    assert response.status_code == 400

    data = await create(client, birthday=millis(datetime(2000, 1, 1)))
    assert data["birthday"] == millis(datetime(2000, 1, 1))


@pytest.mark.asyncio
async def test_update_with_iso_birthday_stays_filterable(client: AsyncClient):
    created = await create(client)

    response = await client.post(f"{BASE}/{created['id']}", json={"birthday": "2100-05-05"})
    assert response.status_code == 200
    assert response.json()["birthday"] == millis(datetime(2100, 5, 5))

    response = await client.get(f"{BASE}/count", params={"after": millis(datetime(2100, 1, 1))})
    assert response.json() == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [
    {"pageNumber": 10**20},
    {"pageNumber": 2**31},
    {"pageSize": 10**20},
])
async def test_list_oversized_paging_is_bad_request(client: AsyncClient, params):
    response = await client.get(BASE, params=params)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_large_id_is_not_found(client: AsyncClient):
    """Ids beyond 32 bits are valid lookups, not server errors."""
    response = await client.get(f"{BASE}/3000000000")
    assert response.status_code == 404
