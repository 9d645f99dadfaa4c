"""HTTP routes that run connector actions, triggers and credential checks."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from filestore.core.exceptions import FilestoreException, ValidationError, VerificationError
from filestore.core.logging import message_id_context
from filestore.emitter import CollectingEmitter
from filestore.models.message import Message
from filestore.runner import get_handler, handler_names
from filestore.verify_credentials import verify

router = APIRouter()
logger = logging.getLogger(__name__)


class ActionRequest(BaseModel):
    """Incoming message plus the configuration to run it with."""

    message: Message = Field(default_factory=Message)
    cfg: Dict[str, Any] = Field(default_factory=dict)


@router.post("/actions/{name}")
async def run_action(name: str, request: ActionRequest) -> Any:
    """Run one action or trigger and return every event it emitted.

    Returns:
        200: ``{"action", "events"}``
        400: Invalid configuration or input
        404: Unknown action
        502: The Filestore API call failed; emitted events are included
    """
    handler = get_handler(name)
    if handler is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown action: {name}, available: {handler_names()}")

    emitter = CollectingEmitter()
    token = message_id_context.set(request.message.id)
    try:
        await handler(request.message, request.cfg, emitter)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except FilestoreException as e:
        logger.error(
            "Action failed",
            extra={"action": name, "error": str(e), "error_type": type(e).__name__},
        )
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={
                "action": name,
                "detail": str(e),
                "events": [event.to_dict() for event in emitter.events],
            },
        )
    finally:
        message_id_context.reset(token)

    return {"action": name, "events": [event.to_dict() for event in emitter.events]}


@router.post("/verify")
async def verify_credentials(cfg: Dict[str, Any]) -> dict:
    """Verify credentials; ``{"verified": bool}``, or 503 when the server errors."""
    try:
        verified = await verify(cfg)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except VerificationError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return {"verified": verified}
