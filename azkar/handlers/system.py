"""
System command handlers
"""

from azkar.config.loader import get_config
from azkar.core.logger import get_logger
from azkar.models.requests import SetAutostartRequest

from . import api_handler

logger = get_logger(__name__)


@api_handler()
async def get_autostart() -> bool:
    """Whether the app launches at login

    Only the preference is kept here; registering with the OS belongs to the host.
    """
    return bool(get_config().get("autostart.enabled", False))


@api_handler(body=SetAutostartRequest)
async def set_autostart(body: SetAutostartRequest) -> None:
    """Enable or disable launch at login

    @param body Contains the desired state
    """
    if not get_config().set("autostart.enabled", body.enable):
        raise RuntimeError("Failed to persist autostart preference")
    logger.info(f"Autostart {'enabled' if body.enable else 'disabled'}")
