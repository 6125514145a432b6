"""
Interval synchronization
Keeps the typed (value, unit) pair consistent with the canonical interval seconds
without clobbering input the user is still typing.
"""

import math
from typing import Optional

from azkar.core.logger import get_logger
from azkar.core.sync_client import SyncClient
from azkar.core.units import (
    choose_unit,
    format_number,
    from_seconds,
    parse_number,
    to_seconds,
)
from azkar.models.entities import UNIT_FACTORS, CanonicalState, IntervalDisplay, Unit

logger = get_logger(__name__)

DRIFT_TOLERANCE = 0.5


def display_seconds(display: IntervalDisplay) -> Optional[float]:
    """Seconds the display currently represents

    None while the text is unparseable or too large to scale to a finite number.
    """
    value = parse_number(display.raw_input)
    if value is None:
        return None
    seconds = value * UNIT_FACTORS[display.unit]
    return seconds if math.isfinite(seconds) else None


def derive_display(canonical_seconds: int) -> IntervalDisplay:
    """Display for ``canonical_seconds`` in the largest exact unit"""
    unit = choose_unit(canonical_seconds)
    return IntervalDisplay(
        raw_input=format_number(from_seconds(canonical_seconds, unit)),
        unit=unit,
    )


def reconcile_display(display: IntervalDisplay, canonical_seconds: int) -> IntervalDisplay:
    """Next display state after a canonical change.

    The current display is kept while it is within DRIFT_TOLERANCE of the canonical
    value; otherwise it is re-derived. Unparseable input never matches.
    """
    shown = display_seconds(display)
    if shown is not None and abs(shown - canonical_seconds) <= DRIFT_TOLERANCE:
        return display
    return derive_display(canonical_seconds)


class IntervalSyncEngine:
    """State machine behind the interval input

    State is the current ``IntervalDisplay``; ``canonical_seconds`` mirrors the last
    snapshot accepted by the client.
    """

    def __init__(self, client: SyncClient):
        self.client = client
        self.display = IntervalDisplay()
        self.canonical_seconds: Optional[int] = None
        client.subscribe(self.reconcile)

    @property
    def raw_input(self) -> str:
        return self.display.raw_input

    @property
    def unit(self) -> Unit:
        return self.display.unit

    def reconcile(self, state: CanonicalState) -> None:
        self.canonical_seconds = state.interval_seconds
        updated = reconcile_display(self.display, state.interval_seconds)
        if updated is not self.display:
            logger.debug(
                f"Interval display re-derived: {updated.raw_input} {updated.unit.value}"
            )
        self.display = updated

    async def type_value(self, raw: str) -> Optional[CanonicalState]:
        """Handle a keystroke in the value field.

        The raw text is always kept. A parseable value of at least one second is
        sent to the store; anything else stays local.
        """
        self.display = IntervalDisplay(raw_input=raw, unit=self.display.unit)

        value = parse_number(raw)
        if value is None or display_seconds(self.display) is None:
            return None

        seconds = to_seconds(value, self.display.unit)
        if seconds < 1:
            logger.debug(f"Interval below one second not sent: {raw!r} {self.unit.value}")
            return None

        return await self.client.set_interval(seconds)

    def set_unit(self, unit: Unit) -> None:
        """Switch the display unit without touching the store"""
        if unit == self.display.unit:
            return

        shown = display_seconds(self.display)
        if shown is None:
            self.display = IntervalDisplay(raw_input=self.display.raw_input, unit=unit)
            return

        if (
            self.canonical_seconds is not None
            and abs(shown - self.canonical_seconds) <= DRIFT_TOLERANCE
        ):
            # snap so repeated switches never accumulate rounding error
            shown = self.canonical_seconds

        self.display = IntervalDisplay(
            raw_input=format_number(from_seconds(shown, unit)),
            unit=unit,
        )
