from __future__ import annotations

import pytest

from chat_hub.infrastructure.ws.registry import ConnectionRegistry
from tests.conftest import FakeConnection


@pytest.mark.asyncio
async def test_admit_accepts_and_tracks():
    registry = ConnectionRegistry()
    ws = FakeConnection()

    await registry.admit(ws)

    assert ws.accepted is True
    assert ws in registry
    assert len(registry) == 1


@pytest.mark.asyncio
async def test_remove_is_idempotent():
    registry = ConnectionRegistry()
    ws = FakeConnection()
    await registry.admit(ws)

    registry.remove(ws)
    registry.remove(ws)

    assert ws not in registry
    assert len(registry) == 0


@pytest.mark.asyncio
async def test_open_connections_skips_closing_ones():
    registry = ConnectionRegistry()
    alive, closing = FakeConnection("alive"), FakeConnection("closing")
    await registry.admit(alive)
    await registry.admit(closing)
    closing.close()

    assert registry.open_connections() == [alive]
    # still tracked until the read loop removes it
    assert len(registry) == 2


@pytest.mark.asyncio
async def test_open_connections_excludes():
    registry = ConnectionRegistry()
    a, b = FakeConnection("a"), FakeConnection("b")
    await registry.admit(a)
    await registry.admit(b)

    assert registry.open_connections(exclude=(a,)) == [b]
