"""
Phrase list and interval command handlers
Every mutating command answers with the full canonical state
"""

from typing import Any, Dict

from azkar.core.events import emit_data_updated
from azkar.core.logger import get_logger
from azkar.core.store import get_store
from azkar.models.requests import (
    AddZekrRequest,
    RemoveZekrRequest,
    SetIntervalRequest,
    UpdateZekrRequest,
)

from . import api_handler

logger = get_logger(__name__)


@api_handler()
async def get_data() -> Dict[str, Any]:
    """Get the canonical state"""
    return get_store().get_data().model_dump(mode="json")


@api_handler(body=AddZekrRequest)
async def add_zekr(body: AddZekrRequest) -> Dict[str, Any]:
    """Append a phrase

    @param body Contains the phrase text
    @returns Canonical state after the append
    """
    state = get_store().add(body.text)
    logger.info(f"Phrase added, total: {len(state.items)}")
    await emit_data_updated()
    return state.model_dump(mode="json")


@api_handler(body=RemoveZekrRequest)
async def remove_zekr(body: RemoveZekrRequest) -> Dict[str, Any]:
    """Remove a phrase by id"""
    state = get_store().remove(body.id)
    logger.info(f"Phrase removed: {body.id}")
    await emit_data_updated()
    return state.model_dump(mode="json")


@api_handler(body=UpdateZekrRequest)
async def update_zekr(body: UpdateZekrRequest) -> Dict[str, Any]:
    """Replace a phrase's text"""
    state = get_store().update(body.id, body.text)
    logger.info(f"Phrase updated: {body.id}")
    await emit_data_updated()
    return state.model_dump(mode="json")


@api_handler(body=SetIntervalRequest)
async def set_interval(body: SetIntervalRequest) -> Dict[str, Any]:
    """Set the notification interval in seconds"""
    state = get_store().set_interval(body.seconds)
    logger.info(f"Interval set to {body.seconds}s")
    await emit_data_updated()
    return state.model_dump(mode="json")


@api_handler()
async def toggle_pause() -> Dict[str, Any]:
    """Pause or resume notifications"""
    state = get_store().toggle_pause()
    logger.info(f"Notifications {'paused' if state.is_paused else 'resumed'}")
    await emit_data_updated()
    return state.model_dump(mode="json")
