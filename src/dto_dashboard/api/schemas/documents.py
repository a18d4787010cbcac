"""Catalog view schemas."""

from datetime import datetime

from pydantic import BaseModel

from dto_dashboard.rows import CatalogStats, DisplayRow


class DocumentListResponse(BaseModel):
    rows: list[DisplayRow]
    stats: CatalogStats
    loading: bool
    error: str | None = None
    loaded_at: datetime | None = None


class ChatRequest(BaseModel):
    query: str


class ChatMessageOut(BaseModel):
    sender: str
    message: str


class ChatResponse(BaseModel):
    answer: str
    display_text: str
    messages: list[ChatMessageOut]
