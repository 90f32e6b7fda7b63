"""Realtime frame models.

Inbound frames are a tagged union on ``type``. Signaling frames only require
``roomId``; every other field (``offer``, ``answer``, ``candidate``...) is kept
as-is because the server relays those frames without looking inside.
"""
from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _Frame(BaseModel):
    model_config = ConfigDict(extra="allow")


class SubscribeFrame(_Frame):
    type: Literal["subscribe"]


class AuxUpdateFrame(_Frame):
    type: Literal["aux_update"]
    payload: Any = None


class _SignalingFrame(_Frame):
    room_id: Annotated[Any, Field(alias="roomId")]


class CallOfferFrame(_SignalingFrame):
    type: Literal["call_offer"]


class CallAnswerFrame(_SignalingFrame):
    type: Literal["call_answer"]


class IceCandidateFrame(_SignalingFrame):
    type: Literal["ice_candidate"]


class CallEndFrame(_SignalingFrame):
    type: Literal["call_end"]


InboundFrame = Annotated[
    Union[
        SubscribeFrame,
        AuxUpdateFrame,
        CallOfferFrame,
        CallAnswerFrame,
        IceCandidateFrame,
        CallEndFrame,
    ],
    Field(discriminator="type"),
]

inbound_frame_adapter: TypeAdapter[InboundFrame] = TypeAdapter(InboundFrame)


class WsOutbound(BaseModel):
    """Server → Client."""

    type: str
    data: Any = None
