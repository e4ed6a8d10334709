"""Shared base for domain entities"""

import uuid
from sqlmodel import SQLModel


def generate_uuid() -> str:
    """Generate an opaque unique identifier"""
    return str(uuid.uuid4())


class BaseModel(SQLModel):
    """Base class for persisted domain entities"""
    pass
