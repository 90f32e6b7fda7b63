"""Client side of peer-to-peer call setup.

The server keeps no call record and relays ``call_offer``, ``call_answer``,
``ice_candidate`` and ``call_end`` frames to every connection. Each client
therefore tracks at most one bound room and drops every frame addressed to
another room. Two calls in different rooms share the same channel and are
separated only by that check.

Media capture, the peer connection and the ringtone are injected so the state
machine can run against a real WebRTC stack or test doubles.
"""
from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any, Awaitable, Callable, Mapping, Protocol

from chat_hub.domain.value_objects.enums import FrameType

logger = logging.getLogger(__name__)


class CallState(StrEnum):
    IDLE = "idle"
    OFFERING = "offering"
    ANSWERING = "answering"
    CONNECTED = "connected"


class CallStateError(RuntimeError):
    pass


class MediaStream(Protocol):
    def stop(self) -> None:
        """Stop every capture track."""
        ...


class MediaDevices(Protocol):
    async def get_user_media(self, *, audio: bool, video: bool) -> MediaStream: ...


class PeerConnection(Protocol):
    async def add_stream(self, stream: MediaStream) -> None: ...

    async def create_offer(self) -> Any:
        """Create and set the local offer description."""
        ...

    async def create_answer(self, offer: Any) -> Any:
        """Apply the remote offer, then create and set the local answer."""
        ...

    async def set_remote_answer(self, answer: Any) -> None: ...

    async def add_ice_candidate(self, candidate: Any) -> None: ...

    async def close(self) -> None: ...


class Ringer(Protocol):
    def start(self) -> None: ...

    def stop(self) -> None: ...


SendFrame = Callable[[dict[str, Any]], Awaitable[None]]
PeerFactory = Callable[[], PeerConnection]


class CallSession:
    def __init__(
        self,
        send: SendFrame,
        media: MediaDevices,
        peer_factory: PeerFactory,
        ringer: Ringer,
    ) -> None:
        self._send = send
        self._media = media
        self._peer_factory = peer_factory
        self._ringer = ringer

        self._state = CallState.IDLE
        self._room_id: str | None = None
        self._stream: MediaStream | None = None
        self._peer: PeerConnection | None = None

    @property
    def state(self) -> CallState:
        return self._state

    @property
    def room_id(self) -> str | None:
        return self._room_id

    @property
    def active(self) -> bool:
        return self._room_id is not None

    def _is_bound_to(self, frame: Mapping[str, Any]) -> bool:
        room_id = frame.get("roomId")
        return self.active and room_id is not None and str(room_id) == self._room_id

    async def start_call(self, room_id: Any, *, video: bool = False) -> None:
        if self.active:
            raise CallStateError(f"Already in a call in room {self._room_id}")

        self._bind(room_id, CallState.OFFERING)
        try:
            peer = await self._open_peer(video=video)
            offer = await peer.create_offer()
            await self._send(
                {"type": FrameType.CALL_OFFER.value, "roomId": room_id, "offer": offer}
            )
        except Exception:
            await self._teardown()
            raise
        self._ringer.start()

    async def handle_frame(self, frame: Mapping[str, Any]) -> None:
        kind = frame.get("type")

        if kind == FrameType.CALL_OFFER:
            if self.active or frame.get("roomId") is None:
                return
            await self._answer(frame)

        elif kind == FrameType.CALL_ANSWER:
            if self._state is CallState.OFFERING and self._is_bound_to(frame):
                assert self._peer is not None
                await self._peer.set_remote_answer(frame.get("answer"))
                self._state = CallState.CONNECTED

        elif kind == FrameType.ICE_CANDIDATE:
            if self._is_bound_to(frame) and self._peer is not None:
                await self._peer.add_ice_candidate(frame.get("candidate"))

        elif kind == FrameType.CALL_END:
            if self._is_bound_to(frame):
                await self._teardown()

    async def on_remote_track(self) -> None:
        """First inbound media: the remote side picked up."""
        self._ringer.stop()
        if self._state is CallState.ANSWERING:
            self._state = CallState.CONNECTED

    async def on_local_candidate(self, candidate: Any) -> None:
        if not self.active:
            return
        await self._send(
            {
                "type": FrameType.ICE_CANDIDATE.value,
                "roomId": self._room_id,
                "candidate": candidate,
            }
        )

    async def hang_up(self) -> None:
        if not self.active:
            return
        room_id = self._room_id
        await self._teardown()
        await self._send({"type": FrameType.CALL_END.value, "roomId": room_id})

    async def _answer(self, frame: Mapping[str, Any]) -> None:
        room_id = frame["roomId"]
        self._bind(room_id, CallState.ANSWERING)
        try:
            peer = await self._open_peer(video=bool(frame.get("video", False)))
            answer = await peer.create_answer(frame.get("offer"))
            await self._send(
                {"type": FrameType.CALL_ANSWER.value, "roomId": room_id, "answer": answer}
            )
        except Exception:
            logger.exception("Could not answer call in room %s", room_id)
            await self._teardown()

    def _bind(self, room_id: Any, state: CallState) -> None:
        self._room_id = str(room_id)
        self._state = state

    async def _open_peer(self, *, video: bool) -> PeerConnection:
        self._stream = await self._media.get_user_media(audio=True, video=video)
        self._peer = self._peer_factory()
        await self._peer.add_stream(self._stream)
        return self._peer

    async def _teardown(self) -> None:
        if self._stream is not None:
            self._stream.stop()
        if self._peer is not None:
            await self._peer.close()
        self._stream = None
        self._peer = None
        self._room_id = None
        self._state = CallState.IDLE
        self._ringer.stop()
