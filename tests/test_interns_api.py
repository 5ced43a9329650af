import pytest
from httpx import AsyncClient

from conftest import at


@pytest.mark.asyncio
async def test_create_and_list_interns(client: AsyncClient) -> None:
    resp = await client.post("/api/interns", json={"name": "Ani", "school": "SMKN 2"})
    assert resp.status_code == 201
    data = resp.json()
    assert data["name"] == "Ani"
    assert data["school"] == "SMKN 2"
    assert data["status"] == "Aktif"
    assert isinstance(data["id"], int)

    await client.post("/api/interns", json={"name": "Budi", "school": "SMAN 1"})

    resp = await client.get("/api/interns")
    assert resp.status_code == 200
    names = [i["name"] for i in resp.json()]
    assert names == ["Budi", "Ani"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [{"name": "Ani"}, {"school": "SMKN 2"}, {"name": "", "school": "SMKN 2"}, {"name": "   ", "school": "X"}],
)
async def test_create_intern_missing_fields(client: AsyncClient, payload: dict) -> None:
    resp = await client.post("/api/interns", json=payload)
    assert resp.status_code == 400
    assert resp.json()["detail"]


@pytest.mark.asyncio
async def test_delete_intern_is_soft(client: AsyncClient) -> None:
    intern_id = (await client.post("/api/interns", json={"name": "Ani", "school": "SMKN 2"})).json()["id"]

    resp = await client.delete(f"/api/interns/{intern_id}")
    assert resp.status_code == 200
    assert resp.json()["message"] == "Peserta berhasil dihapus"

    detail = await client.get(f"/api/interns/{intern_id}")
    assert detail.status_code == 200
    assert detail.json()["status"] == "Nonaktif"

    active = await client.get("/api/interns", params={"active_only": True})
    assert active.json() == []


@pytest.mark.asyncio
async def test_deleted_intern_cannot_check_in(client: AsyncClient) -> None:
    intern_id = (await client.post("/api/interns", json={"name": "Ani", "school": "SMKN 2"})).json()["id"]
    await client.delete(f"/api/interns/{intern_id}")

    resp = await client.post("/api/attendance/checkin", json={"intern_id": intern_id, "shift": "shift1"})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_unknown_intern_404(client: AsyncClient) -> None:
    assert (await client.get("/api/interns/404")).status_code == 404
    assert (await client.delete("/api/interns/404")).status_code == 404


@pytest.mark.asyncio
async def test_intern_detail_counts(client: AsyncClient, clock) -> None:
    intern_id = (await client.post("/api/interns", json={"name": "Ani", "school": "SMKN 2"})).json()["id"]

    for day, body in (
        (1, {"intern_id": intern_id, "shift": "shift1"}),
        (2, {"intern_id": intern_id, "shift": "piket"}),
        (3, {"intern_id": intern_id, "shift": "shift2"}),
    ):
        clock.now = at(7, 30, day=clock.now.date().replace(day=day))
        assert (await client.post("/api/attendance/checkin", json=body)).status_code == 201
    clock.now = at(7, 30, day=clock.now.date().replace(day=4))
    assert (await client.post("/api/attendance/izin", json={"intern_id": intern_id})).status_code == 201

    resp = await client.get(f"/api/interns/{intern_id}")
    assert resp.status_code == 200
    data = resp.json()
    assert (data["hadir"], data["izin"], data["alpa"], data["total"]) == (3, 1, 0, 4)
    assert data["percentage"] == 75.0
