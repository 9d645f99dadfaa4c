"""Materialization of workflow attachments into in-memory buffers."""

import logging
from typing import Optional

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from filestore.core.config import settings
from filestore.core.exceptions import AttachmentError, ValidationError
from filestore.models.message import Message


def resolve_attachment_url(
    msg: Message,
    attachment_name: Optional[str] = None,
    file_path: Optional[str] = None,
) -> str:
    """Pick the attachment URL to upload from an incoming message.

    Lookup order: the explicitly named attachment, the attachment keyed by
    ``file_path`` (full path, then base name), then the only attachment.

    Raises:
        ValidationError: If no attachment can be selected
    """
    attachments = msg.attachments

    if attachment_name:
        if attachment_name not in attachments:
            raise ValidationError(
                f"msg.attachments.{attachment_name} is required, available attachments: {sorted(attachments)}"
            )
        return attachments[attachment_name].url

    if file_path:
        for key in (file_path, file_path.rsplit("/", 1)[-1]):
            if key in attachments:
                return attachments[key].url

    if len(attachments) == 1:
        return next(iter(attachments.values())).url

    if not attachments:
        raise ValidationError("msg.attachments is required: the message carries no attachment to upload")
    raise ValidationError(
        f"msg.body.attachmentName is required when the message carries {len(attachments)} attachments"
    )


class AttachmentFetcher:
    """Downloads an attachment URL fully into memory.

    Transient network errors are retried with exponential backoff; HTTP error
    statuses are not. The whole payload is buffered before returning.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        max_bytes: int | None = None,
        attempts: int | None = None,
        wait=None,
        logger: logging.Logger | None = None,
    ):
        self.http_client = http_client
        self.max_bytes = max_bytes if max_bytes is not None else settings.max_attachment_bytes
        self.attempts = attempts or settings.ATTACHMENT_FETCH_ATTEMPTS
        self.wait = wait if wait is not None else wait_exponential(multiplier=1, min=1, max=10)
        self.logger = logger or logging.getLogger(__name__)

    async def fetch(self, url: str) -> bytes:
        """Fetch ``url`` and return its complete body.

        Raises:
            AttachmentError: If the attachment is unreachable, returns an error
                status or exceeds the size limit
        """
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.attempts),
                wait=self.wait,
                retry=retry_if_exception_type(httpx.TransportError),
                reraise=True,
            ):
                with attempt:
                    if attempt.retry_state.attempt_number > 1:
                        self.logger.warning(
                            f"Retrying attachment download (attempt {attempt.retry_state.attempt_number}/{self.attempts})",
                            extra={"url": url},
                        )
                    return await self._download(url)
        except httpx.HTTPStatusError as e:
            raise AttachmentError(
                f'URL - "{url}" unreachable: HTTP {e.response.status_code}'
            ) from e
        except httpx.HTTPError as e:
            raise AttachmentError(f'URL - "{url}" unreachable: {type(e).__name__}: {e}') from e

    async def _download(self, url: str) -> bytes:
        if self.http_client is not None:
            return await self._read_body(self.http_client, url)
        async with httpx.AsyncClient(timeout=settings.REQUEST_TIMEOUT, follow_redirects=True) as client:
            return await self._read_body(client, url)

    async def _read_body(self, client: httpx.AsyncClient, url: str) -> bytes:
        buffer = bytearray()
        async with client.stream("GET", url) as response:
            response.raise_for_status()
            async for part in response.aiter_bytes():
                buffer.extend(part)
                if len(buffer) > self.max_bytes:
                    raise AttachmentError(
                        f'URL - "{url}" exceeds the attachment size limit of {self.max_bytes} bytes'
                    )

        self.logger.info(
            "Attachment buffered",
            extra={"url": url, "size_bytes": len(buffer)},
        )
        return bytes(buffer)
