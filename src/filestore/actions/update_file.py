"""Update File action: replace the content of an existing Filestore file."""

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
from filestore.actions.upload_file import perform_resumable_upload
from filestore.attachments import resolve_attachment_url
from filestore.core.exceptions import FilestoreException
from filestore.emitter import Emitter
from filestore.models.message import ActionConfig, Message, new_message_with_body
from filestore.models.upload import UploadMetadata, UploadResult

default_logger = logging.getLogger(__name__)


async def process(
    msg: Message,
    cfg: ActionConfig | Dict[str, Any],
    emitter: Emitter,
    logger: logging.Logger | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> None:
    """Upload an attachment over ``msg.body.fileToUpdate``.

    The metadata request is a ``PATCH`` on the existing file and every chunk
    targets the same file ID.
    """
    logger = logger or default_logger
    config = validate_config(cfg)
    body = msg.body

    file_to_update = require_string(body, "fileToUpdate")
    file_path = require_string(body, "filePath")
    access = validate_access(body)
    metadata = UploadMetadata(access=access, source_path=file_path)

    attachment_name = body.get("attachmentName")
    if attachment_name is not None:
        attachment_name = require_string(body, "attachmentName")
    url = resolve_attachment_url(msg, attachment_name, file_path)

    buffer = await fetch_attachment(url, emitter, logger, http_client=http_client)

    logger.info(
        "Updating file",
        extra={"file_id": file_to_update, "access": access, "size_bytes": len(buffer)},
    )

    try:
        file_id = await perform_resumable_upload(
            config, metadata, buffer, file_to_update, logger, http_client=http_client
        )
    except FilestoreException as e:
        raise await fail_component(emitter, logger, e, f"update file {file_to_update}") from e

    result = UploadResult(message=f"successfully updated file {file_id}", fileId=file_id)
    await emitter.emit("data", new_message_with_body(result.model_dump()))
