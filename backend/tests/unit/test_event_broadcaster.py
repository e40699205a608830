"""Unit tests for the KnowledgeEventBroadcaster."""

import asyncio
import json

import pytest

from app.application.schemas import ArticleCreate, CategoryCreate
from app.application.services import (
    KnowledgeArticleService,
    KnowledgeCategoryService,
    KnowledgeEventBroadcaster,
    PendingEvents,
)
from app.infrastructure.memory import InMemoryKnowledgeRepository


async def _collect(stream, count: int) -> list[str]:
    messages = []
    async for message in stream:
        messages.append(message)
        if len(messages) == count:
            break
    return messages


@pytest.mark.asyncio
async def test_subscriber_receives_formatted_events():
    broadcaster = KnowledgeEventBroadcaster()
    stream = broadcaster.subscribe()
    reader = asyncio.create_task(_collect(stream, 1))
    await asyncio.sleep(0)

    assert broadcaster.client_count == 1
    await broadcaster.broadcast("article_created", {"id": 1, "title": "Hello"})
    (message,) = await asyncio.wait_for(reader, timeout=1)

    event_line, data_line, *_ = message.split("\n")
    assert event_line == "event: article_created"
    assert json.loads(data_line.removeprefix("data: ")) == {"id": 1, "title": "Hello"}
    await stream.aclose()


@pytest.mark.asyncio
async def test_shutdown_ends_subscriptions():
    broadcaster = KnowledgeEventBroadcaster()
    reader = asyncio.create_task(_collect(broadcaster.subscribe(), 5))
    await asyncio.sleep(0)

    await broadcaster.shutdown()
    assert await asyncio.wait_for(reader, timeout=1) == []
    assert broadcaster.client_count == 0


@pytest.mark.asyncio
async def test_full_queue_disconnects_subscriber():
    broadcaster = KnowledgeEventBroadcaster(queue_size=1)
    reader = asyncio.create_task(_collect(broadcaster.subscribe(), 5))
    await asyncio.sleep(0)

    await broadcaster.broadcast("a", {})
    await broadcaster.broadcast("b", {})

    assert broadcaster.client_count == 0
    assert await asyncio.wait_for(reader, timeout=1) == []


@pytest.mark.asyncio
async def test_service_publishes_article_events():
    broadcaster = KnowledgeEventBroadcaster()
    reader = asyncio.create_task(_collect(broadcaster.subscribe(), 2))
    await asyncio.sleep(0)

    service = KnowledgeArticleService(InMemoryKnowledgeRepository(), broadcaster=broadcaster)
    article = await service.create_article(ArticleCreate(title="News", content="C"), "1")
    await service.delete_article(article.id)

    messages = await asyncio.wait_for(reader, timeout=1)
    assert [m.split("\n")[0] for m in messages] == [
        "event: article_created",
        "event: article_deleted",
    ]


@pytest.mark.asyncio
async def test_pending_events_wait_for_publish():
    broadcaster = KnowledgeEventBroadcaster()
    reader = asyncio.create_task(_collect(broadcaster.subscribe(), 1))
    await asyncio.sleep(0)

    pending = PendingEvents(broadcaster)
    service = KnowledgeCategoryService(InMemoryKnowledgeRepository(), broadcaster=pending)
    await service.create_category(CategoryCreate(name="Policies"))
    await asyncio.sleep(0)

    assert len(pending) == 1
    assert not reader.done()

    await pending.publish()
    (message,) = await asyncio.wait_for(reader, timeout=1)
    assert message.startswith("event: category_created\n")
    assert len(pending) == 0
