"""
Reference phrase store
JSON-file persisted canonical state used by the bundled command handlers
"""

import json
import threading
import time
from datetime import date
from pathlib import Path
from typing import Callable, Optional

from pydantic import ValidationError

from azkar.core.logger import get_logger
from azkar.models.entities import CanonicalState, Phrase

logger = get_logger(__name__)

DEFAULT_INTERVAL_SECONDS = 60

DEFAULT_PHRASES = [
    "سبحان الله",
    "الحمد لله",
    "الله أكبر",
    "لا إله إلا الله",
    "أستغفر الله",
    "لا حول ولا قوة إلا بالله",
]


def default_state() -> CanonicalState:
    """Fresh state: the six default phrases and a one minute interval"""
    return CanonicalState(
        items=[
            Phrase(id=str(index), text=text)
            for index, text in enumerate(DEFAULT_PHRASES, start=1)
        ],
        interval_seconds=DEFAULT_INTERVAL_SECONDS,
        daily_count=0,
        last_reset_date=date.today().isoformat(),
        last_notification_time=0,
    )


class PhraseStore:
    """Owner of the canonical state

    Every mutation runs under a lock, is written to disk, and returns a full copy
    of the new state.
    """

    def __init__(self, data_path: str):
        self.data_path = data_path
        self._lock = threading.Lock()
        self._data = self._load()

    def _load(self) -> CanonicalState:
        """Read persisted state, falling back to defaults"""
        path = Path(self.data_path)
        if not path.exists():
            logger.info(f"Data file doesn't exist, using defaults: {path}")
            return default_state()

        try:
            return CanonicalState.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.warning(f"Failed to read data file {path}, using defaults: {e}")
            return default_state()

    def _save(self) -> None:
        path = Path(self.data_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(
                json.dumps(self._data.model_dump(mode="json"), ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
        except OSError as e:
            logger.error(f"Failed to persist data to {path}: {e}")

    def _mutate(self, change: Callable[[CanonicalState], None]) -> CanonicalState:
        with self._lock:
            data = self._data.model_copy(deep=True)
            change(data)
            self._data = data
            self._save()
            return self._data.model_copy(deep=True)

    def get_data(self) -> CanonicalState:
        """Current canonical state"""
        with self._lock:
            return self._data.model_copy(deep=True)

    def add(self, text: str) -> CanonicalState:
        """Append a phrase; the id is a nanosecond timestamp"""

        def change(data: CanonicalState) -> None:
            existing = {p.id for p in data.items}
            candidate = time.time_ns()
            while str(candidate) in existing:
                candidate += 1
            data.items.append(Phrase(id=str(candidate), text=text))

        return self._mutate(change)

    def remove(self, phrase_id: str) -> CanonicalState:
        """Remove a phrase; unknown ids leave the list unchanged"""

        def change(data: CanonicalState) -> None:
            data.items = [p for p in data.items if p.id != phrase_id]

        return self._mutate(change)

    def update(self, phrase_id: str, text: str) -> CanonicalState:
        """Replace a phrase's text; unknown ids leave the list unchanged"""

        def change(data: CanonicalState) -> None:
            for phrase in data.items:
                if phrase.id == phrase_id:
                    phrase.text = text

        return self._mutate(change)

    def set_interval(self, seconds: int) -> CanonicalState:
        if seconds < 1:
            raise ValueError(f"Interval must be at least 1 second, got {seconds}")

        def change(data: CanonicalState) -> None:
            data.interval_seconds = seconds

        return self._mutate(change)

    def toggle_pause(self) -> CanonicalState:
        def change(data: CanonicalState) -> None:
            data.is_paused = not data.is_paused

        return self._mutate(change)


# Global store instance
_store: Optional[PhraseStore] = None


def get_store(data_path: Optional[str] = None) -> PhraseStore:
    """Get store instance

    Read the data file path from store.path in config.toml; passing ``data_path``
    replaces the current instance.
    """
    global _store
    if data_path is not None:
        _store = PhraseStore(data_path)
        logger.info(f"✓ Store switched to: {data_path}")
    elif _store is None:
        from azkar.config.loader import get_config

        configured_path = get_config().get("store.path", "")
        if not configured_path or not str(configured_path).strip():
            configured_path = str(Path.home() / ".config" / "azkar" / "azkar_data.json")

        _store = PhraseStore(configured_path)
        logger.info(f"✓ Store initialized, path: {configured_path}")

    return _store
