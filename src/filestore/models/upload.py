"""Resumable upload data models."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

AccessLevel = Literal["private", "public"]
ACCESS_LEVELS: tuple[str, ...] = ("private", "public")


class UploadTarget(BaseModel):
    """Remote endpoint and authentication for one upload.

    A present ``file_id`` switches the session from create to update.
    """

    model_config = ConfigDict(frozen=True)

    resource_server_url: str
    api_key: str
    tenant_id: str
    file_id: Optional[str] = None

    @field_validator("resource_server_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def collection_url(self) -> str:
        return f"{self.resource_server_url}/api/v2/file"

    def file_url(self, file_id: str) -> str:
        return f"{self.collection_url}/{file_id}"

    def auth_headers(self) -> dict[str, str]:
        return {"x-api-key": self.api_key, "x-dxp-tenant": self.tenant_id}


class UploadMetadata(BaseModel):
    """Descriptive fields sent once with the initial metadata request."""

    model_config = ConfigDict(frozen=True)

    access: AccessLevel
    source_path: str

    def to_request_body(self) -> dict[str, str]:
        return {
            "access": self.access,
            "source": self.source_path,
            "uploadType": "resumable",
        }


class ChunkRange(BaseModel):
    """Byte range of one chunk; ``end`` is exclusive."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)

    @property
    def length(self) -> int:
        return self.end - self.start

    def content_range(self, total_size: int) -> str:
        """Render the Content-Range header value (inclusive last byte)."""
        return f"bytes {self.start}-{self.end - 1}/{total_size}"


class UploadResult(BaseModel):
    """Outgoing message body for upload and update actions."""

    message: str
    fileId: str
