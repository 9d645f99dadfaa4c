"""Authenticated HTTP client for the Filestore API."""

import logging
from typing import Any, Dict, Optional

import httpx

from filestore.core.config import settings
from filestore.core.exceptions import TransportError
from filestore.models.message import ActionConfig


def get_user_agent() -> str:
    """Build the User-Agent sent with every Filestore request."""
    return f"{settings.SERVICE_NAME}/{settings.SERVICE_VERSION} httpx/{httpx.__version__}"


class FilestoreClient:
    """Thin wrapper over ``httpx.AsyncClient`` that adds Filestore auth headers.

    Every request carries ``x-api-key`` and ``x-dxp-tenant``. Failures
    (network errors and non-2xx responses) are raised as ``TransportError``
    with the target URL, so callers can report which endpoint failed.

    An ``http_client`` can be injected; it is then owned by the caller and
    not closed by ``aclose()``.
    """

    def __init__(
        self,
        resource_server_url: str,
        api_key: str,
        tenant_id: str,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
        logger: logging.Logger | None = None,
    ):
        self.resource_server_url = resource_server_url.rstrip("/")
        self.api_key = api_key
        self.tenant_id = tenant_id
        self.logger = logger or logging.getLogger(__name__)

        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.REQUEST_TIMEOUT,
        )

    @classmethod
    def from_config(
        cls,
        cfg: ActionConfig,
        http_client: httpx.AsyncClient | None = None,
        logger: logging.Logger | None = None,
    ) -> "FilestoreClient":
        """Create a client from validated action configuration."""
        return cls(
            resource_server_url=cfg.resource_server_url,
            api_key=cfg.api_key,
            tenant_id=cfg.tenant_id,
            http_client=http_client,
            logger=logger,
        )

    @property
    def auth_headers(self) -> Dict[str, str]:
        return {"x-api-key": self.api_key, "x-dxp-tenant": self.tenant_id}

    def build_url(self, path: str) -> str:
        """Resolve ``path`` against the resource server unless it is absolute."""
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.resource_server_url}/{path.lstrip('/')}"

    async def request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        json: Any = None,
        content: bytes | None = None,
    ) -> httpx.Response:
        """Send one request and return the successful response.

        Args:
            method: HTTP method
            url: Absolute URL or path relative to the resource server
            headers: Extra headers, merged over the auth headers
            json: JSON body
            content: Raw body bytes

        Returns:
            The 2xx response

        Raises:
            TransportError: On network failure or non-2xx status
        """
        full_url = self.build_url(url)
        request_headers = {"User-Agent": get_user_agent(), **self.auth_headers, **(headers or {})}

        self.logger.debug(f"{method.upper()} {full_url}")

        try:
            response = await self._http.request(
                method.upper(),
                full_url,
                headers=request_headers,
                json=json,
                content=content,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            self.logger.warning(
                f"Filestore responded with HTTP {status_code}",
                extra={"url": full_url, "method": method.upper(), "status_code": status_code},
            )
            raise TransportError(
                f"Error occurred while trying to hit {full_url} url: HTTP {status_code} {e.response.text}".rstrip(),
                url=full_url,
                status_code=status_code,
            ) from e
        except httpx.HTTPError as e:
            self.logger.warning(
                "Filestore request failed",
                extra={"url": full_url, "method": method.upper(), "error": str(e)},
            )
            raise TransportError(
                f"Error occurred while trying to hit {full_url} url: {type(e).__name__}: {e}",
                url=full_url,
            ) from e

        return response

    async def make_request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        json: Any = None,
        content: bytes | None = None,
    ) -> Any:
        """Send one request and decode the response body.

        Returns:
            Parsed JSON, the raw text for non-JSON bodies, or ``{}`` when empty
        """
        response = await self.request(method, url, headers=headers, json=json, content=content)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return response.text

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> "FilestoreClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
