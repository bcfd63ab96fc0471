import uuid
from datetime import datetime, timezone

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from classroom.api.chat import service
from classroom.api.classes import service as classes_service
from classroom.api.classes.schemas import ClassCreate
from classroom.core.exceptions import NotFoundError, ValidationError
from classroom.core.models import ChatMessage

from conftest import login_as


async def _create_class(db: AsyncSession, lecturer_id):
    payload = ClassCreate(
        title="Histology",
        scheduled_at=datetime(2030, 6, 1, 10, 0, tzinfo=timezone.utc),
    )
    return await classes_service.create_class(db, payload, lecturer_id)


@pytest.mark.asyncio
async def test_messages_come_back_in_insertion_order(db_session: AsyncSession, users) -> None:
    live_class = await _create_class(db_session, users["lecturer"].id)
    other_class = await _create_class(db_session, users["lecturer"].id)

    for text in ("A", "B", "C"):
        await service.create_chat_message(db_session, live_class.id, users["student"].id, text)
    await service.create_chat_message(db_session, other_class.id, users["student"].id, "elsewhere")

    messages = await service.get_chat_messages_by_class(db_session, live_class.id)
    assert [m.message for m in messages] == ["A", "B", "C"]


@pytest.mark.asyncio
async def test_since_returns_only_newer_messages(db_session: AsyncSession, users) -> None:
    live_class = await _create_class(db_session, users["lecturer"].id)
    first = await service.create_chat_message(db_session, live_class.id, users["student"].id, "first")
    await service.create_chat_message(db_session, live_class.id, users["lecturer"].id, "second")

    newer = await service.get_chat_messages_by_class(db_session, live_class.id, since=first.created_at)
    assert [m.message for m in newer] == ["second"]


@pytest.mark.asyncio
async def test_messages_sharing_a_timestamp_have_a_stable_order(db_session: AsyncSession, users) -> None:
    live_class = await _create_class(db_session, users["lecturer"].id)
    stamp = datetime(2030, 6, 1, 10, 5, tzinfo=timezone.utc)
    rows = [
        ChatMessage(class_id=live_class.id, user_id=users["student"].id, message=text, created_at=stamp)
        for text in ("x", "y", "z")
    ]
    db_session.add_all(rows)
    await db_session.commit()

    first = await service.get_chat_messages_by_class(db_session, live_class.id)
    second = await service.get_chat_messages_by_class(db_session, live_class.id)
    assert [m.id for m in first] == sorted(r.id for r in rows)
    assert [m.id for m in second] == [m.id for m in first]


@pytest.mark.asyncio
async def test_blank_message_rejected(db_session: AsyncSession, users) -> None:
    live_class = await _create_class(db_session, users["lecturer"].id)
    with pytest.raises(ValidationError):
        await service.create_chat_message(db_session, live_class.id, users["student"].id, "   ")


@pytest.mark.asyncio
async def test_message_to_unknown_class(db_session: AsyncSession, users) -> None:
    with pytest.raises(NotFoundError):
        await service.create_chat_message(db_session, uuid.uuid4(), users["student"].id, "hello")


@pytest.mark.asyncio
async def test_chat_api(client: AsyncClient, db_session: AsyncSession, users) -> None:
    live_class = await _create_class(db_session, users["lecturer"].id)

    anonymous = await client.get(f"/api/chat/{live_class.id}")
    assert anonymous.status_code == 401

    await login_as(client, users["student"])
    sent = await client.post("/api/chat", json={"class_id": str(live_class.id), "message": "  Hello class  "})
    assert sent.status_code == 201
    assert sent.json()["message"] == "Hello class"
    assert sent.json()["user_id"] == str(users["student"].id)

    blank = await client.post("/api/chat", json={"class_id": str(live_class.id), "message": "   "})
    assert blank.status_code == 400
    assert blank.json() == {"message": "Message cannot be empty"}

    listing = await client.get(f"/api/chat/{live_class.id}")
    assert listing.status_code == 200
    assert [m["message"] for m in listing.json()] == ["Hello class"]
