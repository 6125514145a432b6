"""
Command bridges
Carry commands to the store and events back from it
"""

import asyncio
import contextlib
import json
from collections import defaultdict
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Set

import httpx
import websockets
from websockets.exceptions import WebSocketException
from pydantic import BaseModel as PydanticBaseModel
from pydantic import ValidationError

from azkar.core.events import register_emit_handler, unregister_emit_handler
from azkar.core.logger import get_logger
from azkar.core.protocols import EventHandler, Unlisten

if TYPE_CHECKING:
    from azkar.handlers import CommandHandler

logger = get_logger(__name__)


class CommandError(Exception):
    """A command was rejected or could not be delivered"""

    def __init__(self, command: str, message: str):
        super().__init__(f"{command}: {message}")
        self.command = command
        self.message = message


def _to_wire(result: Any) -> Any:
    if isinstance(result, PydanticBaseModel):
        return result.model_dump(mode="json")
    return result


class InProcessBridge:
    """Dispatches commands straight to the @api_handler registry

    Events emitted by the handlers are delivered to this bridge's listeners
    while at least one listener is subscribed.
    """

    def __init__(self, handlers: Optional[Dict[str, "CommandHandler"]] = None):
        if handlers is None:
            from azkar.handlers import get_registered_handlers

            handlers = get_registered_handlers()
        self._handlers = handlers
        self._listeners: Dict[str, List[EventHandler]] = defaultdict(list)

    async def invoke(self, command: str, args: Optional[Dict[str, Any]] = None) -> Any:
        handler = self._handlers.get(command)
        if handler is None:
            raise CommandError(command, "unknown command")

        func = handler.func
        body = handler.body
        try:
            if body is not None:
                result = await func(body.model_validate(args or {}))
            else:
                result = await func()
        except ValidationError as e:
            raise CommandError(command, f"invalid request: {e}") from e
        except Exception as e:
            raise CommandError(command, str(e)) from e

        return _to_wire(result)

    async def listen(self, event: str, handler: EventHandler) -> Unlisten:
        if not self._has_listeners():
            register_emit_handler(self.dispatch)
        self._listeners[event].append(handler)

        async def unlisten() -> None:
            if handler in self._listeners[event]:
                self._listeners[event].remove(handler)
            if not self._has_listeners():
                unregister_emit_handler(self.dispatch)

        return unlisten

    def _has_listeners(self) -> bool:
        return any(self._listeners.values())

    async def dispatch(self, event_name: str, payload: Dict[str, Any]) -> None:
        """Emit sink: run every listener subscribed to ``event_name``"""
        for handler in list(self._listeners.get(event_name, [])):
            try:
                await handler()
            except Exception:
                logger.error(f"Event listener failed: {event_name}", exc_info=True)


class HttpBridge:
    """Talks to the dev server: POST /api/<command>, events over WebSocket"""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        prefix: str = "/api",
        reconnect_delay: float = 2.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.prefix = prefix
        self.reconnect_delay = reconnect_delay
        self.ws_url = self._convert_to_ws_url(self.base_url) + f"{prefix}/events/stream"
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)
        self._listen_tasks: Set[asyncio.Task] = set()

    def _convert_to_ws_url(self, http_url: str) -> str:
        """Convert HTTP URL to WebSocket URL."""
        return http_url.replace("http://", "ws://").replace("https://", "wss://")

    async def invoke(self, command: str, args: Optional[Dict[str, Any]] = None) -> Any:
        try:
            response = await self._client.post(f"{self.prefix}/{command}", json=args or {})
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            raise CommandError(command, str(e)) from e
        except ValueError as e:
            raise CommandError(command, f"malformed response: {e}") from e

    async def listen(self, event: str, handler: EventHandler) -> Unlisten:
        task = asyncio.create_task(self._stream_events(event, handler))
        self._listen_tasks.add(task)

        async def unlisten() -> None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
            self._listen_tasks.discard(task)

        return unlisten

    async def _stream_events(self, event: str, handler: EventHandler) -> None:
        """Read the event stream until cancelled, reconnecting after failures"""
        while True:
            try:
                async with websockets.connect(self.ws_url) as websocket:
                    logger.info(f"✓ Subscribed to event stream: {self.ws_url}")
                    async for message in websocket:
                        try:
                            data = json.loads(message)
                        except json.JSONDecodeError:
                            logger.debug("Ignored invalid event payload")
                            continue
                        if isinstance(data, dict) and data.get("event") == event:
                            try:
                                await handler()
                            except Exception:
                                logger.error(f"Event listener failed: {event}", exc_info=True)
            except (OSError, WebSocketException) as e:
                logger.warning(
                    f"Event stream unavailable ({e}), retrying in {self.reconnect_delay}s"
                )
            await asyncio.sleep(self.reconnect_delay)

    async def aclose(self) -> None:
        """Stop event streams and close the HTTP client"""
        for task in list(self._listen_tasks):
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._listen_tasks.clear()
        await self._client.aclose()
