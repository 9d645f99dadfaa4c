"""Lookup of action and trigger entry points by their platform name."""

from typing import Awaitable, Callable, Optional

from filestore.actions import ACTIONS
from filestore.triggers import TRIGGERS

Handler = Callable[..., Awaitable[None]]


def get_handler(name: str) -> Optional[Handler]:
    """Return the ``process`` coroutine registered under ``name``, if any."""
    return ACTIONS.get(name) or TRIGGERS.get(name)


def handler_names() -> list[str]:
    return sorted([*ACTIONS, *TRIGGERS])
