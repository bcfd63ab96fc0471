import asyncio
from datetime import datetime, timezone

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from classroom.api.classes import service as classes_service
from classroom.api.classes.schemas import ClassCreate
from classroom.api.recordings import service
from classroom.api.recordings.schemas import RecordingCreate

from conftest import login_as


async def _create_class(db: AsyncSession, lecturer_id):
    payload = ClassCreate(
        title="Neuroanatomy",
        scheduled_at=datetime(2030, 7, 1, 10, 0, tzinfo=timezone.utc),
    )
    return await classes_service.create_class(db, payload, lecturer_id)


@pytest.mark.asyncio
async def test_all_recordings_newest_first_and_search(db_session: AsyncSession, users) -> None:
    live_class = await _create_class(db_session, users["lecturer"].id)
    older = await service.create_recording(
        db_session, RecordingCreate(class_id=live_class.id, title="Cranial Nerves", url="https://m.example/1")
    )
    await asyncio.sleep(0.01)
    newer = await service.create_recording(
        db_session, RecordingCreate(class_id=live_class.id, title="Spinal Cord 100%", url="https://m.example/2")
    )

    everything = await service.get_all_recordings(db_session)
    assert [r.id for r in everything] == [newer.id, older.id]

    assert [r.id for r in await service.get_all_recordings(db_session, search="cranial")] == [older.id]
    assert [r.id for r in await service.get_all_recordings(db_session, search="100%")] == [newer.id]
    assert await service.get_all_recordings(db_session, search="cardio") == []


@pytest.mark.asyncio
async def test_recordings_api(client: AsyncClient, db_session: AsyncSession, users) -> None:
    live_class = await _create_class(db_session, users["lecturer"].id)
    body = {
        "class_id": str(live_class.id),
        "title": "Neuroanatomy, session 1",
        "url": "https://media.example.com/neuro-1.mp4",
        "duration": 3600,
    }

    await login_as(client, users["student"])
    assert (await client.post("/api/recordings", json=body)).status_code == 403

    await login_as(client, users["lecturer"])
    created = await client.post("/api/recordings", json=body)
    assert created.status_code == 201
    assert created.json()["duration"] == 3600

    await client.post("/api/auth/logout")
    by_class = await client.get(f"/api/recordings/class/{live_class.id}")
    assert [r["id"] for r in by_class.json()] == [created.json()["id"]]

    searched = await client.get("/api/recordings", params={"search": "NEURO"})
    assert len(searched.json()) == 1


@pytest.mark.asyncio
async def test_recording_requires_title_and_url(client: AsyncClient, db_session: AsyncSession, users) -> None:
    live_class = await _create_class(db_session, users["lecturer"].id)
    await login_as(client, users["lecturer"])
    response = await client.post("/api/recordings", json={"class_id": str(live_class.id), "title": "No url"})
    assert response.status_code == 400
