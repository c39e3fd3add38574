"""
Word Source Service

Builds puzzle pools from the MongoDB word catalog, falling back to the
bundled word list whenever the catalog is unavailable or has nothing to offer.
"""

import random
from typing import Dict, Iterable, List, Optional, Set

from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi
from pymongo.errors import PyMongoError

from ..config import Config, WORD_LENGTHS, FALLBACK_PUZZLES
from ..models.game import Pack, Puzzle, WordPool, WordSource
from ..utils.game_logger import game_logger
from .dictionary_service import WordValidityChecker

SURPRISE_PACK = Pack(id='', name='Random')


class WordSourceError(Exception):
    """The word catalog could not be queried."""


def build_hints(word: str) -> List[str]:
    """First-letter and last-letter hints, plus a middle-letter hint for longer words."""
    upper = word.upper()
    hints = [
        f'It starts with "{upper[0]}".',
        f'It ends with "{upper[-1]}".',
    ]
    if len(upper) >= 5:
        hints.append(f'Watch for the letter "{upper[len(upper) // 2]}" in the middle.')
    return hints


def get_fallback_puzzles(length: int) -> List[Puzzle]:
    """Bundled puzzles: letter hints first, then the curated clues."""
    return [
        Puzzle(word=entry['word'], hints=tuple(build_hints(entry['word']) + entry['hints']))
        for entry in FALLBACK_PUZZLES.get(length, [])
    ]


def is_playable_row(row: Dict) -> bool:
    """A catalog row is usable when its text is all ASCII letters and matches its length."""
    text, length = row.get("text"), row.get("length")
    if not isinstance(text, str) or not isinstance(length, int) or isinstance(length, bool):
        return False
    return length in WORD_LENGTHS and len(text) == length and text.isascii() and text.isalpha()


class MongoWordCatalog:
    """
    Read-only view over the word catalog collections.

    Collections:
    - words: {text, length, difficulty, enabled}
    - packs: {_id, name, enabled}
    - pack_words: {pack_id, word}
    """

    def __init__(self, mongo_uri: str, db_name: str = Config.MONGO_DB_NAME,
                 timeout_ms: int = Config.MONGO_TIMEOUT_MS):
        self.client = MongoClient(mongo_uri, server_api=ServerApi('1'),
                                  serverSelectionTimeoutMS=timeout_ms)
        self.db = self.client[db_name]
        self.words_collection = self.db.words
        self.packs_collection = self.db.packs
        self.pack_words_collection = self.db.pack_words

    def fetch_words(self, lengths: Iterable[int]) -> List[Dict]:
        try:
            cursor = self.words_collection.find(
                {"enabled": True, "length": {"$in": list(lengths)}},
                {"_id": 0, "text": 1, "length": 1, "difficulty": 1}
            )
            return list(cursor)
        except PyMongoError as e:
            raise WordSourceError(f"Word query failed: {e}") from e

    def fetch_pack_words(self, pack_id: str) -> Set[str]:
        try:
            cursor = self.pack_words_collection.find({"pack_id": pack_id}, {"_id": 0, "word": 1})
            return {
                row["word"].upper() for row in cursor
                if isinstance(row.get("word"), str) and row["word"]
            }
        except PyMongoError as e:
            raise WordSourceError(f"Pack word query failed: {e}") from e

    def fetch_packs(self) -> List[Dict]:
        try:
            return list(self.packs_collection.find({"enabled": True}, {"_id": 1, "name": 1}))
        except PyMongoError as e:
            raise WordSourceError(f"Pack query failed: {e}") from e


class WordSourceResolver:
    """
    Resolves word pools for a (length, pack) pair.

    Every word that lands in a pool is registered with the validity checker
    so the target word is always an accepted guess.
    """

    def __init__(self, catalog: Optional[MongoWordCatalog], checker: WordValidityChecker,
                 rng: Optional[random.Random] = None):
        self.catalog = catalog
        self.checker = checker
        self.rng = rng or random.Random()

    def _require_catalog(self):
        if self.catalog is None:
            raise WordSourceError("Word catalog unavailable")
        return self.catalog

    def list_packs(self) -> List[Pack]:
        """
        Returns enabled packs from the catalog.

        Raises:
            WordSourceError: If the catalog is unavailable or the query fails
        """
        rows = self._require_catalog().fetch_packs()
        packs = []
        for row in rows:
            pack_id = row.get("_id", row.get("id"))
            name = row.get("name")
            if not pack_id or not isinstance(name, str) or not name.strip():
                continue
            packs.append(Pack(id=str(pack_id), name=name.strip()))
        return packs

    def resolve_surprise_pack(self) -> Pack:
        """
        Picks a random enabled pack for a "surprise me" round.

        Falls back to the unfiltered Random pack when packs cannot be listed.
        """
        try:
            packs = self.list_packs()
        except Exception as e:
            game_logger.logger.warning(f"Surprise pack resolution failed: {e}")
            return SURPRISE_PACK

        if not packs:
            return SURPRISE_PACK
        return self.rng.choice(packs)

    def _fetch_remote_puzzles(self, length: int, pack_id: Optional[str]) -> List[Puzzle]:
        catalog = self._require_catalog()
        rows = [row for row in catalog.fetch_words(WORD_LENGTHS) if is_playable_row(row)]

        if pack_id:
            allowed_texts = catalog.fetch_pack_words(pack_id)
            rows = [row for row in rows if row["text"].upper() in allowed_texts]

        puzzles = []
        for row in rows:
            if row["length"] != length:
                continue
            upper = row["text"].upper()
            puzzles.append(Puzzle(word=upper, hints=tuple(build_hints(upper))))
        return puzzles

    def load_words(self, length: int, pack_id: Optional[str] = None) -> WordPool:
        """
        Builds the word pool for a round. Never raises.

        Args:
            length: Word length (3, 4 or 5)
            pack_id: Optional pack to restrict words to

        Returns:
            WordPool tagged remote or fallback; fallback pools carry the reason in error
        """
        pack_id = pack_id or None
        error: Optional[str] = None

        try:
            puzzles = self._fetch_remote_puzzles(length, pack_id)
            if puzzles:
                for puzzle in puzzles:
                    self.checker.add_word(length, puzzle.word)
                return WordPool(length=length, puzzles=puzzles, source=WordSource.REMOTE, pack_id=pack_id)
        except Exception as e:
            error = f"{e} (using fallback list)"

        if error is None:
            error = ("No words available for this pack right now." if pack_id
                     else "No words returned from the word catalog.")

        fallback = get_fallback_puzzles(length)
        for puzzle in fallback:
            self.checker.add_word(length, puzzle.word)

        game_logger.log_game_event(None, 'word_source_fallback', word_length=length,
                                   pack_id=pack_id, reason=error)
        return WordPool(length=length, puzzles=fallback, source=WordSource.FALLBACK, error=error)

    def choose_puzzle(self, pool: WordPool) -> Optional[Puzzle]:
        """Draws a random puzzle from the pool, or None for an empty pool."""
        if not pool.puzzles:
            return None
        return self.rng.choice(pool.puzzles)
