"""
Type protocols for the host bridge

The state machines talk to the store only through these interfaces, so any
transport (in-process, HTTP, test doubles) can sit behind them.
"""

from typing import Any, Awaitable, Callable, Dict, Optional, Protocol

from azkar.models.entities import CanonicalState

EventHandler = Callable[[], Awaitable[None]]
Unlisten = Callable[[], Awaitable[None]]
StateListener = Callable[[CanonicalState], None]


class CommandBridgeProtocol(Protocol):
    """Generic request/response bridge plus a named event channel"""

    async def invoke(self, command: str, args: Optional[Dict[str, Any]] = None) -> Any:
        """Run a command and return its JSON-compatible response.

        Raises CommandError when the command fails.
        """
        ...

    async def listen(self, event: str, handler: EventHandler) -> Unlisten:
        """Subscribe to an event; await the returned callable to unsubscribe"""
        ...
