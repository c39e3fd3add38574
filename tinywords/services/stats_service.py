"""
Stats Service

Persists the per-player win/loss ledger and derives daily wins and the
consecutive-day streak from it.
"""

import json
import os
import threading
import uuid
from datetime import date, timedelta
from pathlib import Path
from typing import Callable, Dict, List, Optional

from ..models.stats import GameRecord, Stats
from ..utils.game_logger import game_logger

STATS_KEY = "tlw-stats"
ANON_ID_KEY = "tlw-anon-id"
ANON_ID_PREFIX = "tlw_anon_"


class MemoryStore:
    """Process-local key/value store."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """
    Durable key/value store keeping one file per key inside a directory.

    Writes go to a temporary file first and are moved into place so a crash
    never leaves a half-written ledger behind.
    """

    def __init__(self, directory):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix('.tmp')
        with open(tmp_path, 'w', encoding='utf-8') as f:
            f.write(value)
        os.replace(tmp_path, path)


def get_or_create_anon_id(store) -> str:
    """Returns the stable anonymous id for this store, creating it on first use."""
    anon_id = store.get(ANON_ID_KEY)
    if not anon_id:
        anon_id = f"{ANON_ID_PREFIX}{uuid.uuid4()}"
        store.set(ANON_ID_KEY, anon_id)
    return anon_id


class StatsLedger:
    """
    Append-only game ledger.

    The stored payload is {"anonId": str, "games": [{"date": "YYYY-MM-DD", "win": bool}]}.
    Records are never changed or removed.
    """

    def __init__(self, store, clock: Callable[[], date] = date.today):
        self.store = store
        self.clock = clock
        self._lock = threading.Lock()

    @property
    def anon_id(self) -> str:
        return get_or_create_anon_id(self.store)

    def _load(self) -> Optional[dict]:
        raw = self.store.get(STATS_KEY)
        if not raw:
            return None
        try:
            parsed = json.loads(raw)
        except ValueError:
            game_logger.logger.warning("Ignoring unreadable stats payload")
            return None

        if (isinstance(parsed, dict) and parsed.get("anonId")
                and isinstance(parsed.get("games"), list)):
            return parsed
        return None

    def _save(self, data: dict) -> None:
        self.store.set(STATS_KEY, json.dumps(data))

    def _set_aside(self, raw: str) -> str:
        """Keeps an unusable payload under a backup key before it is replaced."""
        base_key = f"{STATS_KEY}.corrupt-{self.clock().isoformat()}"
        backup_key = base_key
        attempt = 1
        while self.store.get(backup_key) is not None:
            attempt += 1
            backup_key = f"{base_key}-{attempt}"
        self.store.set(backup_key, raw)
        game_logger.logger.warning(f"Stats payload was unusable; kept a copy as {backup_key}")
        return backup_key

    def _ensure(self) -> dict:
        existing = self._load()
        if existing is not None:
            return existing

        raw = self.store.get(STATS_KEY)
        if raw:
            self._set_aside(raw)

        data = {"anonId": self.anon_id, "games": []}
        self._save(data)
        return data

    def records(self) -> List[GameRecord]:
        with self._lock:
            data = self._load() or {"games": []}
        return [
            GameRecord(date=str(game.get("date")), win=bool(game.get("win")))
            for game in data["games"] if isinstance(game, dict)
        ]

    def record_game(self, win: bool) -> GameRecord:
        """Appends a record dated today."""
        record = GameRecord(date=self.clock().isoformat(), win=bool(win))
        with self._lock:
            data = self._ensure()
            data["games"].append(record.to_dict())
            self._save(data)
        return record

    def get_stats(self) -> Stats:
        """
        Derives wins today, the consecutive-day win streak ending today and
        the total number of games.
        """
        today = self.clock()
        records = self.records()

        today_str = today.isoformat()
        wins_today = sum(1 for record in records if record.win and record.date == today_str)
        win_dates = {record.date for record in records if record.win}

        streak = 0
        day = today
        while day.isoformat() in win_dates:
            streak += 1
            day -= timedelta(days=1)

        return Stats(wins_today=wins_today, streak=streak, total_games=len(records))
