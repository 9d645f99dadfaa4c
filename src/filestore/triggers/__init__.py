"""Filestore polling triggers."""

from filestore.triggers import get_file

TRIGGERS = {
    "getFile": get_file.process,
}

__all__ = ["TRIGGERS"]
