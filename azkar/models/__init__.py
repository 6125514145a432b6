"""
Pydantic models shared by the client and the bundled command handlers
"""

from .base import BaseModel, EntityModel
from .entities import (
    UNIT_FACTORS,
    CanonicalState,
    EditSession,
    IntervalDisplay,
    Phrase,
    Unit,
)
from .requests import (
    AddZekrRequest,
    RemoveZekrRequest,
    SetAutostartRequest,
    SetIntervalRequest,
    UpdateZekrRequest,
)

__all__ = [
    "BaseModel",
    "EntityModel",
    "UNIT_FACTORS",
    "Unit",
    "Phrase",
    "CanonicalState",
    "IntervalDisplay",
    "EditSession",
    "AddZekrRequest",
    "RemoveZekrRequest",
    "UpdateZekrRequest",
    "SetIntervalRequest",
    "SetAutostartRequest",
]
