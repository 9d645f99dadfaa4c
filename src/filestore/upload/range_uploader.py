"""Content-Range chunk delivery to the Filestore API."""

import logging

from filestore.client import FilestoreClient
from filestore.core.exceptions import ChunkUploadError, TransportError
from filestore.models.upload import ChunkRange, UploadTarget


class RangeUploader:
    """Sends one chunk of a resumable upload as a ``PATCH`` with ``Content-Range``.

    Chunks go to ``target.file_url(file_id)`` with the target's credentials.
    Stateless between calls; every ``send_chunk`` issues exactly one request.
    """

    def __init__(self, client: FilestoreClient, logger: logging.Logger | None = None):
        self.client = client
        self.logger = logger or logging.getLogger(__name__)

    async def send_chunk(
        self,
        target: UploadTarget,
        file_id: str,
        chunk: bytes,
        chunk_range: ChunkRange,
        total_size: int,
        index: int,
        total_chunks: int,
    ) -> None:
        """Upload the bytes of one chunk.

        Args:
            target: Endpoint and credentials of the upload
            file_id: Identifier returned by the initial metadata request
            chunk: Exact bytes of the range
            chunk_range: Position of the chunk in the payload
            total_size: Size of the whole payload in bytes
            index: 1-based position of the chunk in the plan
            total_chunks: Number of chunks in the plan

        Raises:
            ChunkUploadError: If the request fails or returns non-2xx
        """
        url = target.file_url(file_id)
        headers = {
            **target.auth_headers(),
            "content-type": "application/octet-stream",
            "content-range": chunk_range.content_range(total_size),
            "content-length": str(len(chunk)),
        }

        self.logger.info(
            f"Uploading chunk {index}/{total_chunks}",
            extra={
                "file_id": file_id,
                "chunk_index": index,
                "total_chunks": total_chunks,
                "content_range": headers["content-range"],
            },
        )

        try:
            await self.client.request("PATCH", url, headers=headers, content=chunk)
        except TransportError as e:
            self.logger.error(
                f"Failed to upload chunk {index}/{total_chunks}",
                extra={
                    "file_id": file_id,
                    "chunk_index": index,
                    "total_chunks": total_chunks,
                    "error": str(e),
                },
            )
            raise ChunkUploadError(
                f"Failed to upload chunk {index}/{total_chunks}: {e}",
                chunk_index=index,
                total_chunks=total_chunks,
                url=e.url,
                status_code=e.status_code,
            ) from e
