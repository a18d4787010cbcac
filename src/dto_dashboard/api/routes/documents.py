"""Catalog browsing, document detail and chat endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from dto_dashboard.api.deps import get_dashboard, require_assistant
from dto_dashboard.api.schemas.documents import (
    ChatMessageOut,
    ChatRequest,
    ChatResponse,
    DocumentListResponse,
)
from dto_dashboard.assistant import AssistantClient, clean_text
from dto_dashboard.dashboard import Dashboard
from dto_dashboard.details import DocumentDetail, build_detail
from dto_dashboard.errors import RemoteFetchError
from dto_dashboard.models import CatalogRecord
from dto_dashboard.rows import map_rows, summarize

logger = logging.getLogger(__name__)
router = APIRouter(tags=["documents"])


def _listing(dashboard: Dashboard) -> DocumentListResponse:
    cache = dashboard.cache
    rows = map_rows(cache.records.values())
    return DocumentListResponse(
        rows=rows,
        stats=summarize(rows),
        loading=cache.loading,
        error=str(cache.error) if cache.error else None,
        loaded_at=cache.loaded_at,
    )


def _get_record(dashboard: Dashboard, doc_id: str) -> CatalogRecord:
    record = dashboard.cache.get(doc_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="DTO not found")
    return record


@router.get("/documents", response_model=DocumentListResponse)
async def list_documents(dashboard: Dashboard = Depends(get_dashboard)):
    return _listing(dashboard)


@router.get("/documents/raw")
async def raw_documents(dashboard: Dashboard = Depends(get_dashboard)):
    """Catalog snapshot as a list of single-key {id: record} objects."""
    return [
        {record_id: record.model_dump(mode="json")}
        for entry in dashboard.cache.data
        for record_id, record in entry.items()
    ]


@router.post("/documents/refresh", response_model=DocumentListResponse)
async def refresh_documents(dashboard: Dashboard = Depends(get_dashboard)):
    await dashboard.cache.refetch()
    return _listing(dashboard)


@router.get("/documents/{doc_id}", response_model=DocumentDetail)
async def get_document(doc_id: str, dashboard: Dashboard = Depends(get_dashboard)):
    return build_detail(_get_record(dashboard, doc_id))


@router.get("/documents/{doc_id}/chat", response_model=list[ChatMessageOut])
async def get_chat(doc_id: str, dashboard: Dashboard = Depends(get_dashboard)):
    _get_record(dashboard, doc_id)
    return [
        ChatMessageOut(sender=m.sender, message=m.message)
        for m in dashboard.transcript(doc_id).messages
    ]


@router.post("/documents/{doc_id}/chat", response_model=ChatResponse)
async def chat(
    doc_id: str,
    body: ChatRequest,
    dashboard: Dashboard = Depends(get_dashboard),
    assistant: AssistantClient = Depends(require_assistant),
):
    query = body.query.strip()
    if not query:
        raise HTTPException(status_code=422, detail="query must not be blank")
    record = _get_record(dashboard, doc_id)

    transcript = dashboard.transcript(doc_id)
    try:
        answer = await transcript.send(assistant, query, record)
    except RemoteFetchError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))

    return ChatResponse(
        answer=answer,
        display_text=clean_text(answer),
        messages=[
            ChatMessageOut(sender=m.sender, message=m.message)
            for m in transcript.messages
        ],
    )
