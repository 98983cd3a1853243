"""Configuration Pydantic models — pure schema, no infrastructure defaults."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ChatConfig(BaseModel):
    model: str
    timeout: float = Field(ge=0, description='Per-request deadline in seconds; 0 means the default')
    max_tokens: int = 0  # 0 = service default
    temperature: float | None = None


class AppConfig(BaseModel):
    chat: ChatConfig
