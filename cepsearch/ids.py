"""Identifier generation."""

from __future__ import annotations

import uuid


def new_uuid() -> str:
    """Return a new random UUID in its canonical text form."""
    return str(uuid.uuid4())