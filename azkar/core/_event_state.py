"""
Shared event emission state, so every importer sees the same registered sinks.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List

EmitSink = Callable[[str, Dict[str, Any]], Awaitable[None]]


@dataclass
class EventState:
    sinks: List[EmitSink] = field(default_factory=list)


event_state = EventState()
