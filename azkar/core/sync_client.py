"""
Sync client
The single I/O boundary between the local view and the canonical store
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from azkar.core.bridge import CommandError
from azkar.core.events import EVENT_DATA_UPDATED
from azkar.core.logger import get_logger
from azkar.core.protocols import CommandBridgeProtocol, StateListener, Unlisten
from azkar.models.entities import CanonicalState

logger = get_logger(__name__)


class SyncClient:
    """Issues store commands and keeps the latest canonical snapshot

    Every accepted response replaces the snapshot wholesale and is pushed to
    subscribers. Concurrent commands are not ordered: whichever response arrives
    last wins. Responses arriving after ``close()`` are dropped.
    """

    def __init__(self, bridge: CommandBridgeProtocol):
        self.bridge = bridge
        self.state: Optional[CanonicalState] = None
        self.autostart = False
        self.closed = False
        self._listeners: List[StateListener] = []
        self._unlisten: Optional[Unlisten] = None

    async def __aenter__(self) -> "SyncClient":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def subscribe(self, listener: StateListener) -> None:
        """Call ``listener`` with every accepted snapshot (and the current one, if any)"""
        self._listeners.append(listener)
        if self.state is not None:
            listener(self.state)

    # ============ Lifecycle ============

    async def start(self) -> None:
        """Fetch initial state and autostart flag, then follow change notifications"""
        await self.fetch_state()
        await self.fetch_autostart()
        self._unlisten = await self.bridge.listen(EVENT_DATA_UPDATED, self._on_data_updated)
        logger.info("✓ Sync client started")

    async def close(self) -> None:
        """Cancel the notification subscription; in-flight commands still complete"""
        if self.closed:
            return
        self.closed = True
        if self._unlisten is not None:
            unlisten, self._unlisten = self._unlisten, None
            await unlisten()
        logger.info("Sync client closed")

    async def _on_data_updated(self) -> None:
        logger.debug("Data updated notification received, refetching")
        await self.fetch_state()

    # ============ Commands ============

    async def _call(
        self, command: str, args: Optional[Dict[str, Any]] = None
    ) -> Tuple[bool, Any]:
        """Invoke a command; failures are logged and reported as (False, None)"""
        try:
            return True, await self.bridge.invoke(command, args)
        except CommandError as e:
            logger.error(f"Command failed: {e}")
            return False, None

    async def _call_for_state(
        self, command: str, args: Optional[Dict[str, Any]] = None
    ) -> Optional[CanonicalState]:
        ok, payload = await self._call(command, args)
        if not ok:
            return None
        try:
            state = CanonicalState.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Command {command} returned an invalid state: {e}")
            return None
        return state if self._accept(state) else None

    def _accept(self, state: CanonicalState) -> bool:
        if self.closed:
            logger.debug("Dropping response received after close")
            return False
        self.state = state
        for listener in list(self._listeners):
            listener(state)
        return True

    async def fetch_state(self) -> Optional[CanonicalState]:
        return await self._call_for_state("get_data")

    async def fetch_autostart(self) -> Optional[bool]:
        ok, payload = await self._call("get_autostart")
        if not ok:
            return None
        if not self.closed:
            self.autostart = bool(payload)
        return bool(payload)

    async def add_item(self, text: str) -> Optional[CanonicalState]:
        return await self._call_for_state("add_zekr", {"text": text})

    async def update_item(self, phrase_id: str, text: str) -> Optional[CanonicalState]:
        return await self._call_for_state("update_zekr", {"id": phrase_id, "text": text})

    async def remove_item(self, phrase_id: str) -> Optional[CanonicalState]:
        return await self._call_for_state("remove_zekr", {"id": phrase_id})

    async def set_interval(self, seconds: int) -> Optional[CanonicalState]:
        return await self._call_for_state("set_interval", {"seconds": seconds})

    async def toggle_pause(self) -> Optional[CanonicalState]:
        return await self._call_for_state("toggle_pause")

    async def set_autostart(self, enable: bool) -> bool:
        """Returns True when the store accepted the new flag"""
        ok, _ = await self._call("set_autostart", {"enable": enable})
        if ok and not self.closed:
            self.autostart = enable
        return ok
