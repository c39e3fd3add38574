"""
Game Service

Ties the word source, validity checker, round state machine and stats ledger
together into one engine per player.
"""

import functools
import random
import re
import threading
from collections import OrderedDict
from datetime import date
from pathlib import Path
from typing import Callable, List, Optional

from ..config import Config, WORD_LENGTHS
from ..models.game import GuessOutcome, Pack, RoundState
from ..models.stats import Stats
from ..utils.game_logger import game_logger
from .dictionary_service import DictionaryClient, WordValidityChecker
from .round_service import RoundStateMachine
from .stats_service import JsonFileStore, MemoryStore, StatsLedger, get_or_create_anon_id
from .word_source import MongoWordCatalog, WordSourceError, WordSourceResolver

PLAYER_ID_PATTERN = re.compile(r'^[A-Za-z0-9_-]{1,64}$')


class NoActiveRoundError(Exception):
    """The player has not started a round yet."""


class StaleLoadError(Exception):
    """A word pool load finished after a newer round was requested."""


class PuzzleEngine:
    """
    One player's puzzle engine.

    Owns the player's validity stores, word source, stats ledger and the
    active round. A new RoundStateMachine is built for every new puzzle.
    """

    def __init__(self, player_id: str, resolver: WordSourceResolver, ledger: StatsLedger):
        self.player_id = player_id
        self.resolver = resolver
        self.checker = resolver.checker
        self.ledger = ledger
        self.round: Optional[RoundStateMachine] = None
        self._generation = 0
        self._lock = threading.Lock()

    def _record_result(self, machine: RoundStateMachine, win: bool) -> None:
        self.ledger.record_game(win)
        game_logger.log_game_event(
            self.player_id, 'game_won' if win else 'game_lost',
            target_word=machine.target,
            guesses_used=len(machine.guesses)
        )

    def _require_round(self) -> RoundStateMachine:
        if self.round is None:
            raise NoActiveRoundError("No round in progress")
        return self.round

    def start_round(self, length: int, pack_id: Optional[str] = None,
                    pack_name: Optional[str] = None) -> RoundState:
        """
        Draws a new puzzle and starts a fresh round.

        Leaving a round that ran out of tries records its loss. Without a
        pack id a random "surprise" pack is resolved first.

        Raises:
            ValueError: If the length is not supported
            StaleLoadError: If a newer start_round superseded this one
            WordSourceError: If no puzzle could be drawn at all
        """
        if length not in WORD_LENGTHS:
            raise ValueError(f"Word length must be one of {', '.join(str(n) for n in WORD_LENGTHS)}")

        with self._lock:
            self._generation += 1
            generation = self._generation
            if self.round is not None:
                self.round.abandon()

        if pack_id:
            pack = Pack(id=pack_id, name=(pack_name or '').strip() or pack_id)
        else:
            pack = self.resolver.resolve_surprise_pack()

        pool = self.resolver.load_words(length, pack.id or None)

        with self._lock:
            if generation != self._generation:
                raise StaleLoadError("A newer round was requested while words were loading")

            puzzle = self.resolver.choose_puzzle(pool)
            if puzzle is None:
                raise WordSourceError(f"No puzzles available for length {length}")

            machine = RoundStateMachine(puzzle, self.checker, pool=pool, pack=pack)
            machine.on_complete = functools.partial(self._record_result, machine)
            self.round = machine

        game_logger.log_game_event(self.player_id, 'round_started', word_length=length,
                                   pack_id=pack.id or None, word_source=pool.source.value)
        return self.round.snapshot()

    def get_round_state(self) -> RoundState:
        return self._require_round().snapshot()

    def submit_guess(self, text: str) -> GuessOutcome:
        return self._require_round().submit_guess(text)

    def reveal_hint(self, index: int) -> RoundState:
        state = self._require_round().reveal_hint(index)
        game_logger.log_game_event(self.player_id, 'hint_revealed', hint_index=index)
        return state

    def accept_bonus_retry(self) -> RoundState:
        state = self._require_round().accept_bonus_retry()
        game_logger.log_game_event(self.player_id, 'bonus_retry')
        return state

    def decline_bonus_retry(self) -> RoundState:
        return self._require_round().decline_bonus_retry()

    def get_stats(self) -> Stats:
        return self.ledger.get_stats()

    def close(self) -> None:
        """Drops the active round, recording its loss if it ran out of tries."""
        with self._lock:
            self._generation += 1
            if self.round is not None:
                self.round.abandon()
            self.round = None


class GameService:
    """
    Core game service managing one puzzle engine per player.

    This class handles:
    - Engine creation with per-player validity stores and stats ledgers
    - Routing round operations to the right engine
    - Resolving the installation's anonymous player id

    At most max_engines engines are kept; the least recently used one is
    dropped when a new player arrives. Its stats stay in the player's store.
    """

    def __init__(self,
                 catalog: Optional[MongoWordCatalog] = None,
                 dictionary_client: Optional[DictionaryClient] = None,
                 stats_dir: Optional[str] = None,
                 clock: Callable[[], date] = date.today,
                 rng: Optional[random.Random] = None,
                 max_engines: int = Config.MAX_ENGINES):
        self.catalog = catalog
        self.dictionary_client = dictionary_client or DictionaryClient()
        self.stats_dir = Path(stats_dir) if stats_dir else None
        self.clock = clock
        self.rng = rng or random.Random()
        self.max_engines = max(1, max_engines)
        self.engines: OrderedDict = OrderedDict()
        self._lock = threading.Lock()
        self._default_player_id: Optional[str] = None
        self.pack_resolver = WordSourceResolver(catalog, WordValidityChecker(client=self.dictionary_client),
                                                rng=self.rng)

    def _make_store(self, player_id: Optional[str] = None):
        if self.stats_dir is None:
            return MemoryStore()
        directory = self.stats_dir / player_id if player_id else self.stats_dir
        return JsonFileStore(directory)

    @property
    def default_player_id(self) -> str:
        """The installation-wide anonymous id used when a client sends none."""
        if self._default_player_id is None:
            self._default_player_id = get_or_create_anon_id(self._make_store())
        return self._default_player_id

    def get_engine(self, player_id: Optional[str] = None) -> PuzzleEngine:
        """
        Returns the player's engine, creating it on first use.

        Raises:
            ValueError: If the player id contains unsupported characters
        """
        player_id = player_id or self.default_player_id
        if not PLAYER_ID_PATTERN.match(player_id):
            raise ValueError("Invalid player id")

        with self._lock:
            engine = self.engines.get(player_id)
            if engine is not None:
                self.engines.move_to_end(player_id)
                return engine

            checker = WordValidityChecker(client=self.dictionary_client)
            resolver = WordSourceResolver(self.catalog, checker, rng=self.rng)
            ledger = StatsLedger(self._make_store(player_id), clock=self.clock)
            engine = PuzzleEngine(player_id, resolver, ledger)
            self.engines[player_id] = engine
            while len(self.engines) > self.max_engines:
                evicted_id, evicted = self.engines.popitem(last=False)
                evicted.close()
                game_logger.log_game_event(evicted_id, 'engine_evicted')
        return engine

    def list_packs(self) -> List[Pack]:
        """
        Raises:
            WordSourceError: If the catalog is unavailable
        """
        return self.pack_resolver.list_packs()


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(config_class=Config) -> GameService:
    """Initialize the global game service instance."""
    global _game_service

    catalog = None
    if config_class.MONGO_URI:
        try:
            catalog = MongoWordCatalog(config_class.MONGO_URI, config_class.MONGO_DB_NAME,
                                       config_class.MONGO_TIMEOUT_MS)
        except Exception as e:
            game_logger.logger.error(f"Word catalog unavailable, using fallback words: {e}")

    _game_service = GameService(
        catalog=catalog,
        dictionary_client=DictionaryClient(config_class.DICTIONARY_API_BASE,
                                           config_class.DICTIONARY_TIMEOUT_SECONDS),
        stats_dir=config_class.STATS_DIR,
        max_engines=config_class.MAX_ENGINES
    )
    return _game_service


def set_game_service(service: Optional[GameService]) -> None:
    """Swap the global game service, e.g. for tests."""
    global _game_service
    _game_service = service
