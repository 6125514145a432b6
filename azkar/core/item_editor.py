"""
Phrase list editor
Add, inline edit and remove phrases through confirmed round trips
"""

from typing import List, Optional

from azkar.core.logger import get_logger
from azkar.core.sync_client import SyncClient
from azkar.models.entities import CanonicalState, EditSession, Phrase

logger = get_logger(__name__)


class ItemListEditor:
    """Editor over the canonical phrase list

    The list itself is never modified locally; only the new-item text and the
    single optional edit session are local state.
    """

    def __init__(self, client: SyncClient):
        self.client = client
        self.items: List[Phrase] = []
        self.session: Optional[EditSession] = None
        self.new_item_text = ""
        client.subscribe(self.reconcile)

    def reconcile(self, state: CanonicalState) -> None:
        """Adopt a new snapshot; drop the edit session if its target is gone"""
        self.items = list(state.items)
        if self.session is not None and state.find(self.session.target_id) is None:
            logger.debug(f"Edit target {self.session.target_id} no longer exists")
            self.session = None

    def is_editing(self, phrase_id: str) -> bool:
        return self.session is not None and self.session.target_id == phrase_id

    # ============ Edit session ============

    def begin_edit(self, phrase_id: str) -> bool:
        """Start editing a phrase, replacing any other session and its draft"""
        phrase = next((p for p in self.items if p.id == phrase_id), None)
        if phrase is None:
            logger.debug(f"Cannot edit unknown phrase: {phrase_id}")
            return False
        self.session = EditSession(target_id=phrase.id, draft_text=phrase.text)
        return True

    def update_draft(self, text: str) -> None:
        if self.session is not None:
            self.session.draft_text = text

    def cancel(self) -> None:
        self.session = None

    async def save(self) -> bool:
        """Commit the draft; the session stays open unless the store confirms"""
        session = self.session
        if session is None or not session.draft_text.strip():
            return False

        state = await self.client.update_item(session.target_id, session.draft_text)
        if state is None:
            return False

        # the user may have moved on to another phrase while this was in flight
        if self.session is session:
            self.session = None
        return True

    # ============ List commands ============

    def set_new_item_text(self, text: str) -> None:
        self.new_item_text = text

    async def add(self) -> bool:
        """Send the new-item text as typed; it is cleared only on success"""
        text = self.new_item_text
        if not text.strip():
            return False

        state = await self.client.add_item(text)
        if state is None:
            return False

        self.new_item_text = ""
        return True

    async def remove(self, phrase_id: str) -> bool:
        """Remove immediately; an open session on this phrase is closed with it"""
        state = await self.client.remove_item(phrase_id)
        if state is None:
            return False

        if self.is_editing(phrase_id):
            self.session = None
        return True
