"""Get File trigger: poll the metadata of a configured Filestore file."""

import logging
from typing import Any, Dict

import httpx

from filestore.actions.common import request_and_emit, validate_config
from filestore.core.exceptions import ValidationError
from filestore.emitter import Emitter
from filestore.models.message import ActionConfig, Message

default_logger = logging.getLogger(__name__)


async def process(
    msg: Message,
    cfg: ActionConfig | Dict[str, Any],
    emitter: Emitter,
    logger: logging.Logger | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> None:
    """Emit the metadata of ``cfg.fileId``; the incoming message is ignored."""
    logger = logger or default_logger
    config = validate_config(cfg)

    file_id = (config.model_extra or {}).get("fileId")
    if not isinstance(file_id, str) or not file_id:
        raise ValidationError(f"cfg.fileId is required and needs to be a string, the {file_id!r} was received")

    await request_and_emit(
        config, emitter, logger, "GET", f"api/v2/file/{file_id}", http_client=http_client
    )
