"""Credential verification against the Filestore API."""

import logging
from typing import Any, Dict

import httpx

from filestore.actions.common import validate_config
from filestore.client import FilestoreClient
from filestore.core.exceptions import TransportError, VerificationError
from filestore.models.message import ActionConfig

default_logger = logging.getLogger(__name__)


async def verify(
    credentials: ActionConfig | Dict[str, Any],
    logger: logging.Logger | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> bool:
    """Check the API key and tenant with ``GET /api/v2/file/``.

    The endpoint answers 400 to valid credentials because no file ID is
    given, so 400 counts as valid alongside any 2xx.

    Returns:
        True for valid credentials, False otherwise

    Raises:
        ValidationError: If apiKey, tenantId or resourceServerUrl is missing
        VerificationError: If the server answers 5xx
    """
    logger = logger or default_logger
    config = validate_config(credentials)

    async with FilestoreClient.from_config(config, http_client=http_client, logger=logger) as client:
        try:
            await client.request("GET", "api/v2/file/")
        except TransportError as e:
            if e.status_code == 400:
                logger.info("Credentials are valid", extra={"status_code": 400})
                return True
            if e.status_code is not None and e.status_code >= 500:
                logger.error(
                    "Filestore server error during credential verification",
                    extra={"status_code": e.status_code},
                )
                raise VerificationError(
                    f"Filestore server error (HTTP {e.status_code}) while verifying credentials, try again later"
                ) from e
            logger.info(
                "Credentials are invalid",
                extra={"status_code": e.status_code, "error": str(e)},
            )
            return False

    logger.info("Credentials are valid")
    return True
