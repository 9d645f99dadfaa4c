"""Workflow message envelope and action configuration models."""

import uuid
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Attachment(BaseModel):
    """Reference to a binary payload stored by the workflow platform."""

    model_config = ConfigDict(extra="allow")

    url: str
    size: Optional[int] = None
    content_type: Optional[str] = Field(default=None, alias="content-type")


class Message(BaseModel):
    """Incoming or outgoing workflow message."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    body: Dict[str, Any] = Field(default_factory=dict)
    attachments: Dict[str, Attachment] = Field(default_factory=dict)


def new_message_with_body(body: Any) -> Message:
    """Wrap an API result as an outgoing message.

    Non-dict results (lists, plain text) are placed under ``result``.
    """
    if not isinstance(body, dict):
        body = {"result": body}
    return Message(body=body)


class ActionConfig(BaseModel):
    """Credentials and endpoint shared by every action.

    Fields are untyped here; actions validate them and raise
    ``ValidationError`` naming the offending field.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    api_key: Any = Field(default=None, alias="apiKey")
    tenant_id: Any = Field(default=None, alias="tenantId")
    resource_server_url: Any = Field(default=None, alias="resourceServerUrl")

    @classmethod
    def from_raw(cls, cfg: "ActionConfig | Dict[str, Any]") -> "ActionConfig":
        if isinstance(cfg, ActionConfig):
            return cfg
        return cls.model_validate(cfg or {})
