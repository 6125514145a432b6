"""
Event sending manager
Used to notify subscribed views that the canonical state changed out of band
"""

from typing import Any, Dict, Optional

from azkar.core._event_state import EmitSink, event_state
from azkar.core.logger import get_logger

logger = get_logger(__name__)

EVENT_DATA_UPDATED = "data-updated"


def register_emit_handler(sink: EmitSink) -> None:
    """Register a sink that delivers events to subscribers (WebSocket, in-process)."""
    if sink not in event_state.sinks:
        event_state.sinks.append(sink)
        logger.debug(f"[events] Registered emit sink, total: {len(event_state.sinks)}")


def unregister_emit_handler(sink: EmitSink) -> None:
    if sink in event_state.sinks:
        event_state.sinks.remove(sink)
        logger.debug(f"[events] Unregistered emit sink, total: {len(event_state.sinks)}")


async def _emit(event_name: str, payload: Dict[str, Any]) -> bool:
    """Send an event to every registered sink.

    Returns:
        True if at least one sink accepted the event, False otherwise
    """
    if not event_state.sinks:
        logger.debug(f"[events] No sink registered, skipping event: {event_name}")
        return False

    delivered = False
    for sink in list(event_state.sinks):
        try:
            await sink(event_name, payload)
            delivered = True
        except Exception:
            logger.error(f"❌ [events] Event sending failed: {event_name}", exc_info=True)
    return delivered


async def emit_data_updated(payload: Optional[Dict[str, Any]] = None) -> bool:
    """
    Send "data updated" event

    The event carries no meaningful payload; receivers refetch the full state.

    Returns:
        True if sent successfully, False otherwise
    """
    success = await _emit(EVENT_DATA_UPDATED, payload or {})
    if success:
        logger.debug("✅ Data updated event sent")
    return success
