"""Emitter interface for delivering action output to the workflow platform."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List

from filestore.models.message import Message


class Emitter(ABC):
    """Abstract sink for action events.

    Events follow the platform convention: ``data`` carries a ``Message``,
    ``error`` carries an error description, ``end`` closes the stream.
    """

    @abstractmethod
    async def emit(self, event: str, payload: Any = None) -> None:
        """Deliver one event."""
        pass


@dataclass
class EmittedEvent:
    """One event recorded by ``CollectingEmitter``."""

    event: str
    payload: Any = None

    def to_dict(self) -> dict:
        payload = self.payload
        if isinstance(payload, Message):
            payload = payload.model_dump()
        return {"event": self.event, "payload": payload}


class CollectingEmitter(Emitter):
    """Emitter that records events in order, used by the HTTP host and tests."""

    def __init__(self):
        self.events: List[EmittedEvent] = []

    async def emit(self, event: str, payload: Any = None) -> None:
        self.events.append(EmittedEvent(event=event, payload=payload))

    def of_type(self, event: str) -> List[Any]:
        """Return the payloads of all events with the given name."""
        return [e.payload for e in self.events if e.event == event]
