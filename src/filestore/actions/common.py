"""Input validation and failure reporting shared by Filestore actions."""

import logging
from typing import Any, Dict

import httpx

from filestore.attachments import AttachmentFetcher
from filestore.client import FilestoreClient
from filestore.core.exceptions import ComponentError, FilestoreException, ValidationError
from filestore.emitter import Emitter
from filestore.models.message import ActionConfig, new_message_with_body
from filestore.models.upload import ACCESS_LEVELS


def validate_config(cfg: ActionConfig | Dict[str, Any], require_url: bool = True) -> ActionConfig:
    """Check the credentials every action needs before any request is made.

    Raises:
        ValidationError: Naming the first missing or non-string field
    """
    config = ActionConfig.from_raw(cfg)

    fields = [("apiKey", config.api_key), ("tenantId", config.tenant_id)]
    if require_url:
        fields.append(("resourceServerUrl", config.resource_server_url))

    for name, value in fields:
        if not isinstance(value, str) or not value:
            raise ValidationError(
                f"Error occurred in the Filestore component - cfg.{name} is required "
                f"and needs to be a string, the {value!r} was received"
            )

    if require_url:
        config.resource_server_url = config.resource_server_url.rstrip("/")
    return config


def require_string(body: Dict[str, Any], field: str) -> str:
    """Return ``body[field]`` if it is a non-empty string.

    Raises:
        ValidationError: If the field is missing or not a string
    """
    value = body.get(field)
    if not isinstance(value, str) or not value:
        raise ValidationError(
            f"msg.body.{field} is required and needs to be a string, "
            f"the {value!r} was received in the filestore Component"
        )
    return value


def validate_access(body: Dict[str, Any]) -> str:
    """Return ``body['access']`` if it is one of the recognized access levels."""
    access = body.get("access")
    if access not in ACCESS_LEVELS:
        raise ValidationError(
            "Error occurred in the Filestore component - msg.body.access is required and "
            f'needs to be one of "private", "public", the {access!r} was received'
        )
    return access


async def fail_component(
    emitter: Emitter,
    logger: logging.Logger,
    error: Exception,
    operation: str,
) -> ComponentError:
    """Report a failed operation to the workflow and build the error to raise.

    Emits ``error`` followed by ``end`` so the platform closes the stream,
    then returns a ``ComponentError`` for the caller to raise.
    """
    message = f"Error occurred in the Filestore component while trying to {operation}: {error}"
    logger.error(
        message,
        extra={"operation": operation, "error_type": type(error).__name__},
    )
    await emitter.emit("error", message)
    await emitter.emit("end")
    return ComponentError(message)


async def request_and_emit(
    config: ActionConfig,
    emitter: Emitter,
    logger: logging.Logger,
    method: str,
    path: str,
    http_client: httpx.AsyncClient | None = None,
    **request_kwargs: Any,
) -> Any:
    """Issue one Filestore request and emit its decoded response as a message."""
    async with FilestoreClient.from_config(config, http_client=http_client, logger=logger) as client:
        try:
            result = await client.make_request(method, path, **request_kwargs)
        except FilestoreException as e:
            raise await fail_component(emitter, logger, e, f"{method.upper()} {client.build_url(path)}") from e

    await emitter.emit("data", new_message_with_body(result))
    return result


async def fetch_attachment(
    url: str,
    emitter: Emitter,
    logger: logging.Logger,
    http_client: httpx.AsyncClient | None = None,
) -> bytes:
    """Buffer the attachment at ``url``; an unreachable or empty attachment fails the component.

    Raises:
        ComponentError: After emitting ``error`` and ``end``
    """
    try:
        buffer = await AttachmentFetcher(http_client=http_client, logger=logger).fetch(url)
        if not buffer:
            raise ValidationError(f'The attachment at "{url}" is empty')
    except FilestoreException as e:
        raise await fail_component(emitter, logger, e, f"fetch the attachment {url}") from e
    return buffer
