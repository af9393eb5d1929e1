# src/quoteboard/models/ids.py
"""Identifier helpers shared by the ORM models."""

import uuid


def new_id() -> str:
    """Return a fresh opaque record identifier."""
    return str(uuid.uuid4())
