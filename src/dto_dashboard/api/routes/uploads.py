"""Upload endpoint: send a document to blob storage and start the pipeline estimate."""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from dto_dashboard.api.deps import get_dashboard, require_uploader
from dto_dashboard.api.schemas.pipeline import UploadResponse
from dto_dashboard.config import get_settings
from dto_dashboard.dashboard import Dashboard
from dto_dashboard.errors import UploadError
from dto_dashboard.uploads import UploadedFile, UploadTrigger

logger = logging.getLogger(__name__)
router = APIRouter(tags=["uploads"])


@router.post("/uploads", response_model=UploadResponse)
async def upload_file(
    file: UploadFile = File(...),
    uploader: UploadTrigger = Depends(require_uploader),
    dashboard: Dashboard = Depends(get_dashboard),
):
    settings = get_settings()
    max_file_bytes = settings.max_upload_size_mb * 1024 * 1024

    chunks: list[bytes] = []
    total_size = 0
    while True:
        chunk = await file.read(64 * 1024)
        if not chunk:
            break
        chunks.append(chunk)
        total_size += len(chunk)
        if total_size > max_file_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File '{file.filename}' exceeds {settings.max_upload_size_mb}MB limit",
            )

    uploaded = UploadedFile(
        name=file.filename or "file",
        content=b"".join(chunks),
        content_type=file.content_type,
    )
    try:
        await uploader.upload(uploaded)
    except UploadError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))

    return UploadResponse(
        filename=uploaded.name,
        size_bytes=uploaded.size_bytes,
        mime_type=uploaded.content_type,
        status=dashboard.simulator.status,
    )
