"""
Data entity model definitions
Canonical state owned by the store, plus the client's transient view state
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from pydantic import Field

from .base import EntityModel


class Unit(str, Enum):
    """Display unit of the notification interval"""

    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"


UNIT_FACTORS = {
    Unit.SECONDS: 1,
    Unit.MINUTES: 60,
    Unit.HOURS: 3600,
}


# ============ Store Models ============


class Phrase(EntityModel):
    """A single remembrance phrase (zekr)"""

    id: str
    text: str


class CanonicalState(EntityModel):
    """Authoritative application data, replaced wholesale on every response"""

    items: List[Phrase] = Field(default_factory=list, alias="azkar")
    interval_seconds: int = Field(ge=1)
    daily_count: int = Field(default=0, ge=0)
    last_reset_date: str = ""
    last_notification_time: int = 0
    is_paused: bool = False
    last_zekr_id: Optional[str] = None

    def find(self, phrase_id: str) -> Optional[Phrase]:
        """Return the phrase with the given id, if present"""
        for phrase in self.items:
            if phrase.id == phrase_id:
                return phrase
        return None


# ============ Local View Models ============


@dataclass(frozen=True)
class IntervalDisplay:
    """What the interval input currently shows"""

    raw_input: str = ""
    unit: Unit = Unit.SECONDS


@dataclass
class EditSession:
    """The single phrase currently being edited and its draft"""

    target_id: str
    draft_text: str
