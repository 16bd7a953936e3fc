"""Pydantic models for the chat webhook."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ChatCommand(BaseModel):
    """Text of a chat message addressed to the bot, e.g. `board acme/widgets`."""

    text: str = Field(min_length=1)


class ChatMessage(BaseModel):
    text: str
