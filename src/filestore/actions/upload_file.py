"""Upload File action: create a new Filestore file with a resumable upload."""

import json
import logging
from typing import Any, Dict

import httpx

from filestore.actions.common import (
    fail_component,
    fetch_attachment,
    require_string,
    validate_access,
    validate_config,
)
from filestore.attachments import resolve_attachment_url
from filestore.client import FilestoreClient
from filestore.core.exceptions import FilestoreException, ValidationError
from filestore.emitter import Emitter
from filestore.models.message import ActionConfig, Message, new_message_with_body
from filestore.models.upload import UploadMetadata, UploadResult, UploadTarget
from filestore.upload.session import ResumableUploadSession

default_logger = logging.getLogger(__name__)


def inline_payload(data: Any) -> bytes:
    """Encode inline ``msg.body.data`` the way it is stored remotely."""
    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        return data.encode("utf-8")
    return json.dumps(data).encode("utf-8")


async def perform_resumable_upload(
    cfg: ActionConfig,
    metadata: UploadMetadata,
    buffer: bytes,
    file_id: str | None,
    logger: logging.Logger,
    http_client: httpx.AsyncClient | None = None,
) -> str:
    """Run one resumable upload session and return the resulting file identifier."""
    target = UploadTarget(
        resource_server_url=cfg.resource_server_url,
        api_key=cfg.api_key,
        tenant_id=cfg.tenant_id,
        file_id=file_id,
    )
    async with FilestoreClient.from_config(cfg, http_client=http_client, logger=logger) as client:
        session = ResumableUploadSession(client, target, logger=logger)
        return await session.run(metadata, buffer)


async def process(
    msg: Message,
    cfg: ActionConfig | Dict[str, Any],
    emitter: Emitter,
    logger: logging.Logger | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> None:
    """Create a file from inline ``data`` or a message attachment.

    Emits ``{"message": "successfully uploaded file <id>", "fileId": <id>}``.
    """
    logger = logger or default_logger
    config = validate_config(cfg)
    body = msg.body

    access = validate_access(body)
    source_path = body.get("filePath") or body.get("source")
    if not isinstance(source_path, str) or not source_path:
        raise ValidationError(
            f"msg.body.filePath is required and needs to be a string, "
            f"the {source_path!r} was received in the filestore Component"
        )
    metadata = UploadMetadata(access=access, source_path=source_path)

    data = body.get("data")
    if data is not None and data != "":
        buffer = inline_payload(data)
        if not buffer:
            raise ValidationError("Cannot upload an empty file: msg.body.data has 0 bytes")
    else:
        attachment_name = body.get("attachmentName")
        if attachment_name is not None:
            attachment_name = require_string(body, "attachmentName")
        url = resolve_attachment_url(msg, attachment_name, source_path)
        buffer = await fetch_attachment(url, emitter, logger, http_client=http_client)

    logger.info(
        "Uploading new file",
        extra={"source_path": source_path, "access": access, "size_bytes": len(buffer)},
    )

    try:
        file_id = await perform_resumable_upload(
            config, metadata, buffer, None, logger, http_client=http_client
        )
    except FilestoreException as e:
        raise await fail_component(emitter, logger, e, "upload the file") from e

    result = UploadResult(message=f"successfully uploaded file {file_id}", fileId=file_id)
    await emitter.emit("data", new_message_with_body(result.model_dump()))
