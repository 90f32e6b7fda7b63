from __future__ import annotations

from typing import Any

import pytest

from chat_hub.client.call_session import CallSession, CallState, CallStateError


class FakeStream:
    def __init__(self) -> None:
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True


class FakeMedia:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.requests: list[dict[str, bool]] = []
        self.streams: list[FakeStream] = []

    async def get_user_media(self, *, audio: bool, video: bool) -> FakeStream:
        self.requests.append({"audio": audio, "video": video})
        if self.fail:
            raise PermissionError("camera blocked")
        stream = FakeStream()
        self.streams.append(stream)
        return stream


class FakePeer:
    def __init__(self) -> None:
        self.streams: list[FakeStream] = []
        self.remote_answer: Any = None
        self.candidates: list[Any] = []
        self.closed = False

    async def add_stream(self, stream: FakeStream) -> None:
        self.streams.append(stream)

    async def create_offer(self) -> Any:
        return {"type": "offer", "sdp": "v=0 offer"}

    async def create_answer(self, offer: Any) -> Any:
        return {"type": "answer", "sdp": "v=0 answer", "for": offer}

    async def set_remote_answer(self, answer: Any) -> None:
        self.remote_answer = answer

    async def add_ice_candidate(self, candidate: Any) -> None:
        self.candidates.append(candidate)

    async def close(self) -> None:
        self.closed = True


class FakeRinger:
    def __init__(self) -> None:
        self.ringing = False

    def start(self) -> None:
        self.ringing = True

    def stop(self) -> None:
        self.ringing = False


class Client:
    def __init__(self, *, media_fail: bool = False, send_fail: bool = False) -> None:
        self.send_fail = send_fail
        self.outbox: list[dict[str, Any]] = []
        self.media = FakeMedia(fail=media_fail)
        self.peers: list[FakePeer] = []
        self.ringer = FakeRinger()
        self.session = CallSession(self._send, self.media, self._peer, self.ringer)

    async def _send(self, frame: dict[str, Any]) -> None:
        if self.send_fail:
            raise ConnectionError("socket closed")
        self.outbox.append(frame)

    def _peer(self) -> FakePeer:
        peer = FakePeer()
        self.peers.append(peer)
        return peer


async def _deliver(frames: list[dict[str, Any]], *clients: Client) -> None:
    """Relay every frame to the other clients, the way the hub does."""
    for frame in list(frames):
        for client in clients:
            await client.session.handle_frame(frame)
    frames.clear()


@pytest.mark.asyncio
async def test_offer_answer_handshake():
    alice, bob = Client(), Client()

    await alice.session.start_call("room-1", video=True)

    assert alice.session.state is CallState.OFFERING
    assert alice.ringer.ringing is True
    assert alice.media.requests == [{"audio": True, "video": True}]
    assert alice.outbox == [
        {"type": "call_offer", "roomId": "room-1", "offer": {"type": "offer", "sdp": "v=0 offer"}}
    ]

    await _deliver(alice.outbox, bob)
    assert bob.session.state is CallState.ANSWERING
    assert bob.session.room_id == "room-1"
    assert bob.outbox[0]["type"] == "call_answer"

    await _deliver(bob.outbox, alice)
    assert alice.session.state is CallState.CONNECTED
    assert alice.peers[0].remote_answer["type"] == "answer"

    await alice.session.on_remote_track()
    await bob.session.on_remote_track()
    assert alice.ringer.ringing is False
    assert bob.session.state is CallState.CONNECTED


@pytest.mark.asyncio
async def test_ice_candidates_applied_only_for_bound_room():
    alice, bob = Client(), Client()
    await alice.session.start_call("room-1")
    await _deliver(alice.outbox, bob)

    await bob.session.handle_frame({"type": "ice_candidate", "roomId": "room-1", "candidate": "c1"})
    await bob.session.handle_frame({"type": "ice_candidate", "roomId": "room-2", "candidate": "c2"})

    assert bob.peers[0].candidates == ["c1"]

    await alice.session.on_local_candidate("a1")
    assert alice.outbox[-1] == {"type": "ice_candidate", "roomId": "room-1", "candidate": "a1"}


@pytest.mark.asyncio
async def test_hang_up_returns_both_sides_to_idle():
    alice, bob = Client(), Client()
    await alice.session.start_call("room-1")
    await _deliver(alice.outbox, bob)
    await _deliver(bob.outbox, alice)

    await alice.session.hang_up()

    assert alice.session.state is CallState.IDLE
    assert alice.outbox == [{"type": "call_end", "roomId": "room-1"}]
    assert alice.peers[0].closed is True
    assert alice.media.streams[0].stopped is True

    await _deliver(alice.outbox, bob)
    assert bob.session.state is CallState.IDLE
    # no echo back
    assert bob.outbox == []


@pytest.mark.asyncio
async def test_two_calls_in_different_rooms_do_not_interfere():
    # A calls B in r1 while C calls D in r2; every frame reaches everyone.
    a, b, c, d = Client(), Client(), Client(), Client()
    everyone = (a, b, c, d)

    await a.session.start_call("r1")
    await _deliver(a.outbox, b, c, d)
    # C and D were idle, so they also picked up the r1 offer; C now hangs up its copy
    await c.session.hang_up()
    await d.session.hang_up()
    c.outbox.clear()
    d.outbox.clear()
    await _deliver(b.outbox, a, c, d)
    assert a.session.state is CallState.CONNECTED

    await c.session.start_call("r2")
    await _deliver(c.outbox, *everyone)
    await _deliver(d.outbox, *everyone)

    assert c.session.state is CallState.CONNECTED
    assert a.session.room_id == "r1"
    assert b.session.room_id == "r1"
    assert a.peers[0].remote_answer is not None
    assert len(a.peers) == 1

    await c.session.hang_up()
    await _deliver(c.outbox, *everyone)

    assert c.session.state is CallState.IDLE
    assert d.session.state is CallState.IDLE
    assert a.session.state is CallState.CONNECTED
    assert b.session.room_id == "r1"


@pytest.mark.asyncio
async def test_answer_for_other_room_is_ignored():
    alice = Client()
    await alice.session.start_call("room-1")

    await alice.session.handle_frame({"type": "call_answer", "roomId": "room-9", "answer": {}})

    assert alice.session.state is CallState.OFFERING


@pytest.mark.asyncio
async def test_second_call_rejected_while_active():
    alice = Client()
    await alice.session.start_call("room-1")

    with pytest.raises(CallStateError):
        await alice.session.start_call("room-2")


@pytest.mark.asyncio
async def test_capture_failure_leaves_session_idle():
    alice = Client(media_fail=True)

    with pytest.raises(PermissionError):
        await alice.session.start_call("room-1")

    assert alice.session.state is CallState.IDLE
    assert alice.outbox == []


@pytest.mark.asyncio
async def test_offer_send_failure_releases_media():
    alice = Client(send_fail=True)

    with pytest.raises(ConnectionError):
        await alice.session.start_call("room-1")

    assert alice.session.state is CallState.IDLE
    assert alice.session.active is False
    assert alice.media.streams[0].stopped is True
    assert alice.peers[0].closed is True
    assert alice.ringer.ringing is False


@pytest.mark.asyncio
async def test_answer_send_failure_releases_media():
    bob = Client(send_fail=True)

    await bob.session.handle_frame({"type": "call_offer", "roomId": "room-1", "offer": {}})

    assert bob.session.state is CallState.IDLE
    assert bob.media.streams[0].stopped is True
    assert bob.peers[0].closed is True

@pytest.mark.asyncio
async def test_hang_up_when_idle_sends_nothing():
    alice = Client()
    await alice.session.hang_up()
    assert alice.outbox == []
