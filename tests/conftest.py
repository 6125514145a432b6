"""
Shared fixtures

Configuration and logs point at a throwaway directory before any azkar module
is imported, so the suite never touches ~/.config/azkar.
"""

import copy
import os
import tempfile
from collections import defaultdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

_TEST_HOME = Path(tempfile.mkdtemp(prefix="azkar-tests-"))
os.environ["AZKAR_CONFIG_FILE"] = str(_TEST_HOME / "config.toml")

import anyio  # noqa: E402
import pytest  # noqa: E402

from azkar.config.loader import get_config  # noqa: E402
from azkar.core._event_state import event_state  # noqa: E402
from azkar.core.bridge import CommandError  # noqa: E402
from azkar.core.store import get_store  # noqa: E402


def make_state(interval_seconds: int = 60, items: Optional[List[Dict[str, str]]] = None):
    """Wire-format canonical state"""
    return {
        "azkar": items
        if items is not None
        else [{"id": "1", "text": "سبحان الله"}, {"id": "2", "text": "الحمد لله"}],
        "interval_seconds": interval_seconds,
        "daily_count": 3,
        "last_reset_date": "2026-10-16",
        "last_notification_time": 0,
        "is_paused": False,
        "last_zekr_id": None,
    }


class ScriptedBridge:
    """Store double speaking the command contract

    ``failing`` makes commands raise CommandError; ``hold`` parks the next call of a
    command until the returned event is set.
    """

    def __init__(self, state: Optional[Dict[str, Any]] = None, autostart: bool = False):
        self.state = copy.deepcopy(state or make_state())
        self.autostart = autostart
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.failing: set = set()
        self._holds: Dict[str, List[anyio.Event]] = defaultdict(list)
        self._listeners: Dict[str, list] = defaultdict(list)
        self._next_id = 100

    def hold(self, command: str) -> anyio.Event:
        gate = anyio.Event()
        self._holds[command].append(gate)
        return gate

    def commands(self, name: Optional[str] = None) -> List[str]:
        return [command for command, _ in self.calls if name is None or command == name]

    def listener_count(self, event: str = "data-updated") -> int:
        return len(self._listeners[event])

    async def invoke(self, command: str, args: Optional[Dict[str, Any]] = None) -> Any:
        args = args or {}
        self.calls.append((command, args))
        if self._holds[command]:
            await self._holds[command].pop(0).wait()
        if command in self.failing:
            raise CommandError(command, "scripted failure")

        items = self.state["azkar"]
        if command == "get_autostart":
            return self.autostart
        elif command == "set_autostart":
            self.autostart = args["enable"]
            return None
        elif command == "add_zekr":
            self._next_id += 1
            items.append({"id": str(self._next_id), "text": args["text"]})
        elif command == "remove_zekr":
            self.state["azkar"] = [item for item in items if item["id"] != args["id"]]
        elif command == "update_zekr":
            for item in items:
                if item["id"] == args["id"]:
                    item["text"] = args["text"]
        elif command == "set_interval":
            self.state["interval_seconds"] = args["seconds"]
        elif command == "toggle_pause":
            self.state["is_paused"] = not self.state["is_paused"]
        elif command != "get_data":
            raise CommandError(command, "unknown command")

        return copy.deepcopy(self.state)

    async def listen(self, event, handler):
        self._listeners[event].append(handler)

        async def unlisten():
            self._listeners[event].remove(handler)

        return unlisten

    async def notify(self, event: str = "data-updated") -> None:
        for handler in list(self._listeners[event]):
            await handler()


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def bridge():
    return ScriptedBridge()


@pytest.fixture
def make_bridge():
    """Factory: ScriptedBridge over make_state(**kwargs)"""

    def factory(autostart: bool = False, **kwargs) -> ScriptedBridge:
        return ScriptedBridge(make_state(**kwargs), autostart=autostart)

    return factory


@pytest.fixture(autouse=True)
def isolated_config(tmp_path):
    """Fresh config file per test; event sinks never leak between tests"""
    config = get_config(str(tmp_path / "config.toml"))
    event_state.sinks.clear()
    yield config
    event_state.sinks.clear()


@pytest.fixture
def store(tmp_path):
    return get_store(str(tmp_path / "azkar_data.json"))
