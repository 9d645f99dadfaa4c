"""Get File Data action: download the content of a Filestore file."""

import logging
from typing import Any, Dict

import httpx

from filestore.actions.common import request_and_emit, require_string, validate_config
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
    """Download ``msg.body.fileId`` through the ``/download`` endpoint and emit the body."""
    logger = logger or default_logger
    config = validate_config(cfg)
    file_id = require_string(msg.body, "fileId")

    await request_and_emit(
        config, emitter, logger, "GET", f"api/v2/file/{file_id}/download", http_client=http_client
    )
