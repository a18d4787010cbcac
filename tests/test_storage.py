"""Tests for storage.py — SAS uploads to blob storage."""

from __future__ import annotations

import httpx
import pytest

from dto_dashboard.config import StorageConfig
from dto_dashboard.errors import UploadError
from dto_dashboard.storage import BlobStorageClient


def _config(sas: str = "sv=2024&sig=abc") -> StorageConfig:
    return StorageConfig(storage_account="acct", storage_container="intake", storage_sas_token=sas)


class TestUploadUrl:
    def test_builds_sas_url(self):
        client = BlobStorageClient(_config())
        assert client.upload_url("drawing.pdf") == (
            "https://acct.blob.core.windows.net/intake/drawing.pdf?sv=2024&sig=abc"
        )

    def test_keeps_existing_question_mark(self):
        client = BlobStorageClient(_config("?sv=2024"))
        assert client.upload_url("a.pdf").endswith("/a.pdf?sv=2024")

    def test_encodes_file_name(self):
        client = BlobStorageClient(_config())
        assert "/intake/my%20drawing%20%231%2Fv2.pdf?" in client.upload_url("my drawing #1/v2.pdf")
        assert "/intake/(rev)_a-b.c!~*'.pdf?" in client.upload_url("(rev)_a-b.c!~*'.pdf")


class TestUploadFile:
    @pytest.mark.asyncio
    async def test_puts_block_blob(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201)

        client = BlobStorageClient(_config(), transport=httpx.MockTransport(handler))
        await client.upload_file("a.pdf", b"%PDF-1.7", "application/pdf")

        request = seen[0]
        assert request.method == "PUT"
        assert request.headers["x-ms-blob-type"] == "BlockBlob"
        assert request.headers["content-type"] == "application/pdf"
        assert request.content == b"%PDF-1.7"

    @pytest.mark.asyncio
    async def test_default_content_type(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201)

        client = BlobStorageClient(_config(), transport=httpx.MockTransport(handler))
        await client.upload_file("a.bin", b"\x00")
        assert seen[0].headers["content-type"] == "application/octet-stream"

    @pytest.mark.asyncio
    async def test_rejected_upload(self):
        client = BlobStorageClient(
            _config(),
            transport=httpx.MockTransport(lambda r: httpx.Response(403, text="AuthenticationFailed")),
        )
        with pytest.raises(UploadError) as exc_info:
            await client.upload_file("a.pdf", b"x")
        assert exc_info.value.status_code == 403
        assert "403 Forbidden - AuthenticationFailed" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_transport_error_wrapped(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        client = BlobStorageClient(_config(), transport=httpx.MockTransport(handler))
        with pytest.raises(UploadError, match="Failed to upload file") as exc_info:
            await client.upload_file("a.pdf", b"x")
        assert isinstance(exc_info.value.__cause__, httpx.ConnectTimeout)
