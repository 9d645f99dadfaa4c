"""Resumable upload session: metadata request followed by ordered chunk delivery."""

import logging
from enum import Enum
from typing import Any

from filestore.client import FilestoreClient
from filestore.core.config import settings
from filestore.core.exceptions import (
    FilestoreException,
    TransportError,
    UploadSessionError,
    ValidationError,
)
from filestore.models.upload import UploadMetadata, UploadTarget
from filestore.upload.planner import plan_chunks
from filestore.upload.range_uploader import RangeUploader


class SessionState(str, Enum):
    """Lifecycle of a single upload session."""

    IDLE = "idle"
    METADATA_SENT = "metadata_sent"
    TRANSFERRING = "transferring"
    COMPLETE = "complete"
    FAILED = "failed"


def _extract_file_id(response: Any) -> str | None:
    """Read ``fileId`` from a metadata response, also when wrapped in ``data``."""
    if not isinstance(response, dict):
        return None
    if response.get("fileId"):
        return str(response["fileId"])
    data = response.get("data")
    if isinstance(data, dict) and data.get("fileId"):
        return str(data["fileId"])
    return None


class ResumableUploadSession:
    """Drives one create or update upload against the Filestore API.

    The session is single use: ``initiate`` obtains the file identifier
    exactly once, then ``transfer`` sends the buffer chunk by chunk, each
    request awaited before the next one is built. Any failure moves the
    session to ``FAILED``; nothing is retried.
    """

    def __init__(
        self,
        client: FilestoreClient,
        target: UploadTarget,
        chunk_size: int | None = None,
        uploader: RangeUploader | None = None,
        logger: logging.Logger | None = None,
    ):
        self.client = client
        self.target = target
        self.chunk_size = chunk_size if chunk_size is not None else settings.chunk_size_bytes
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")
        self.logger = logger or logging.getLogger(__name__)
        self.uploader = uploader or RangeUploader(client, logger=self.logger)

        self.state = SessionState.IDLE
        self.file_id: str | None = None

    @property
    def is_update(self) -> bool:
        return self.target.file_id is not None

    async def initiate(self, metadata: UploadMetadata) -> str:
        """Send the initial metadata request and return the file identifier.

        Creates the file with ``POST /api/v2/file`` or, when the target names
        an existing file, updates it with ``PATCH /api/v2/file/{fileId}``.

        Raises:
            UploadSessionError: If the session was already initiated
            TransportError: If the request fails; names the endpoint
        """
        if self.state is not SessionState.IDLE:
            raise UploadSessionError(
                f"Upload session already initiated (state={self.state.value})"
            )

        if self.is_update:
            method, url = "PATCH", self.target.file_url(self.target.file_id)
        else:
            method, url = "POST", self.target.collection_url

        self.logger.info(
            "Sending initial resumable upload request",
            extra={"method": method, "url": url, "access": metadata.access},
        )

        try:
            response = await self.client.make_request(
                method,
                url,
                headers={**self.target.auth_headers(), "content-type": "application/json"},
                json=metadata.to_request_body(),
            )
        except TransportError as e:
            self.state = SessionState.FAILED
            raise TransportError(
                f"Initial upload request to {url} failed: {e}",
                url=url,
                status_code=e.status_code,
            ) from e

        file_id = _extract_file_id(response) or self.target.file_id
        if not file_id:
            self.state = SessionState.FAILED
            raise UploadSessionError(f"Response from {url} did not contain a fileId")

        self.file_id = file_id
        self.state = SessionState.METADATA_SENT
        self.logger.info("Resumable upload initiated", extra={"file_id": file_id})
        return file_id

    async def transfer(self, file_id: str, buffer: bytes) -> None:
        """Send ``buffer`` in ascending chunks; the first failure aborts the transfer.

        Raises:
            UploadSessionError: If called before ``initiate``
            ChunkUploadError: If any chunk fails
        """
        if self.state is not SessionState.METADATA_SENT:
            raise UploadSessionError(
                f"Cannot transfer content in state {self.state.value}; call initiate first"
            )

        file_size = len(buffer)
        chunks = plan_chunks(file_size, self.chunk_size)
        self.state = SessionState.TRANSFERRING

        self.logger.info(
            f"Transferring {file_size} bytes in {len(chunks)} chunks",
            extra={"file_id": file_id, "file_size": file_size, "chunk_size": self.chunk_size},
        )

        try:
            for index, chunk_range in enumerate(chunks, start=1):
                await self.uploader.send_chunk(
                    self.target,
                    file_id,
                    buffer[chunk_range.start:chunk_range.end],
                    chunk_range,
                    total_size=file_size,
                    index=index,
                    total_chunks=len(chunks),
                )
        except FilestoreException:
            self.state = SessionState.FAILED
            raise

        self.state = SessionState.COMPLETE

    async def run(self, metadata: UploadMetadata, buffer: bytes) -> str:
        """Initiate the upload, transfer the whole buffer and return the file identifier.

        Raises:
            ValidationError: If the buffer is empty; raised before any request
            UploadSessionError: Wrapping any failure of the metadata request or a chunk
        """
        if not buffer:
            raise ValidationError("Cannot upload an empty file: the source buffer has 0 bytes")

        try:
            file_id = await self.initiate(metadata)
            await self.transfer(file_id, buffer)
        except FilestoreException as e:
            self.state = SessionState.FAILED
            if isinstance(e, UploadSessionError):
                raise
            raise UploadSessionError(f"Resumable upload failed: {e}") from e

        self.logger.info(
            "Resumable upload complete",
            extra={"file_id": file_id, "file_size": len(buffer), "update": self.is_update},
        )
        return file_id
