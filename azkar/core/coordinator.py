"""
View coordinator
Owns the sync client and both state machines for one settings view
"""

from dataclasses import dataclass, field
from typing import List, Optional

from azkar.core.interval_sync import IntervalSyncEngine
from azkar.core.item_editor import ItemListEditor
from azkar.core.logger import get_logger
from azkar.core.protocols import CommandBridgeProtocol
from azkar.core.sync_client import SyncClient
from azkar.models.entities import CanonicalState

logger = get_logger(__name__)


@dataclass
class PhraseRow:
    id: str
    text: str
    editing: bool = False
    draft_text: Optional[str] = None


@dataclass
class ViewSnapshot:
    """Everything a renderer needs, derived from canonical and local state"""

    loaded: bool
    daily_count: int = 0
    is_paused: bool = False
    autostart: bool = False
    interval_value: str = ""
    interval_unit: str = "seconds"
    interval_seconds: Optional[int] = None
    rows: List[PhraseRow] = field(default_factory=list)
    new_item_text: str = ""


class ViewCoordinator:
    """Settings view lifecycle

    Usage::

        async with ViewCoordinator(bridge) as view:
            await view.items.add()

    The notification subscription is released on every exit path.
    """

    def __init__(self, bridge: CommandBridgeProtocol):
        self.client = SyncClient(bridge)
        self.interval = IntervalSyncEngine(self.client)
        self.items = ItemListEditor(self.client)

    async def __aenter__(self) -> "ViewCoordinator":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    async def start(self) -> None:
        await self.client.start()
        if self.client.state is None:
            logger.warning("Initial state unavailable, waiting for the next refresh")

    async def stop(self) -> None:
        await self.client.close()

    @property
    def state(self) -> Optional[CanonicalState]:
        return self.client.state

    async def toggle_autostart(self) -> bool:
        """Flip launch-at-login; the local flag changes only once the store accepts"""
        return await self.client.set_autostart(not self.client.autostart)

    async def toggle_pause(self) -> Optional[CanonicalState]:
        return await self.client.toggle_pause()

    def snapshot(self) -> ViewSnapshot:
        state = self.client.state
        if state is None:
            return ViewSnapshot(loaded=False, autostart=self.client.autostart)

        session = self.items.session
        rows = [
            PhraseRow(
                id=phrase.id,
                text=phrase.text,
                editing=self.items.is_editing(phrase.id),
                draft_text=session.draft_text if self.items.is_editing(phrase.id) else None,
            )
            for phrase in self.items.items
        ]
        return ViewSnapshot(
            loaded=True,
            daily_count=state.daily_count,
            is_paused=state.is_paused,
            autostart=self.client.autostart,
            interval_value=self.interval.raw_input,
            interval_unit=self.interval.unit.value,
            interval_seconds=state.interval_seconds,
            rows=rows,
            new_item_text=self.items.new_item_text,
        )
