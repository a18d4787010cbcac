"""Blob storage client: direct SAS uploads into the intake container."""

import logging
from urllib.parse import quote

import httpx

from dto_dashboard.config import StorageConfig
from dto_dashboard.errors import UploadError

logger = logging.getLogger(__name__)

# Same unreserved set as the browser's encodeURIComponent
_NAME_SAFE = "-_.!~*'()"


class BlobStorageClient:
    def __init__(
        self,
        config: StorageConfig,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._timeout = timeout
        self._transport = transport

    def upload_url(self, file_name: str) -> str:
        """Build the SAS URL for one blob."""
        base = (
            f"https://{self._config.storage_account}.blob.core.windows.net"
            f"/{self._config.storage_container}"
        )
        sas = self._config.storage_sas_token
        if not sas.startswith("?"):
            sas = f"?{sas}"
        return f"{base}/{quote(file_name, safe=_NAME_SAFE)}{sas}"

    async def upload_file(
        self, file_name: str, content: bytes, content_type: str | None = None,
    ) -> None:
        """Upload a file as a block blob, overwriting any blob of the same name."""
        url = self.upload_url(file_name)
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport,
            ) as client:
                resp = await client.put(
                    url,
                    content=content,
                    headers={
                        "x-ms-blob-type": "BlockBlob",
                        "Content-Type": content_type or "application/octet-stream",
                    },
                )
        except httpx.HTTPError as exc:
            raise UploadError(f"Failed to upload file: {exc}") from exc

        if resp.is_error:
            raise UploadError(
                f"File upload failed: {resp.status_code} {resp.reason_phrase} - {resp.text}",
                status_code=resp.status_code,
            )
        logger.info("Uploaded %s (%d bytes)", file_name, len(content))
