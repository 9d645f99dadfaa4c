"""Raw Request action: pass an arbitrary request through to the Filestore API."""

import logging
from typing import Any, Dict

import httpx

from filestore.actions.common import request_and_emit, require_string, validate_config
from filestore.core.exceptions import ValidationError
from filestore.emitter import Emitter
from filestore.models.message import ActionConfig, Message

default_logger = logging.getLogger(__name__)

# Methods whose requests carry no body
BODYLESS_METHODS = {"GET", "HEAD", "DELETE", "OPTIONS"}


async def process(
    msg: Message,
    cfg: ActionConfig | Dict[str, Any],
    emitter: Emitter,
    logger: logging.Logger | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> None:
    """Send ``requestType`` to ``{resourceServerUrl}/{url}``.

    ``customHeaders`` are merged over the auth headers and ``requestBody``
    is sent as JSON.
    """
    logger = logger or default_logger
    config = validate_config(cfg)
    body = msg.body

    request_type = require_string(body, "requestType").upper()
    url = require_string(body, "url")

    custom_headers = body.get("customHeaders") or {}
    if not isinstance(custom_headers, dict):
        raise ValidationError(
            f"msg.body.customHeaders needs to be an object, the {custom_headers!r} was received"
        )
    request_body = body.get("requestBody")
    if request_body is not None and not isinstance(request_body, (dict, list)):
        raise ValidationError(
            f"msg.body.requestBody needs to be an object or array, the {request_body!r} was received"
        )

    json_body = None if request_type in BODYLESS_METHODS and not request_body else request_body

    logger.info("Sending raw request", extra={"method": request_type, "path": url})
    await request_and_emit(
        config,
        emitter,
        logger,
        request_type,
        f"{config.resource_server_url}/{url.lstrip('/')}",
        http_client=http_client,
        headers={str(k): str(v) for k, v in custom_headers.items()},
        json=json_body,
    )
