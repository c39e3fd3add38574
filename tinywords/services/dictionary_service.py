"""
Dictionary Service

Decides whether a typed guess is a real word. Known words (the seed
dictionary plus every word placed in a pool) are accepted locally; anything
else goes through a remote dictionary lookup whose answer is memoized.
"""

import threading
from typing import Dict, Iterable, Mapping, Optional, Set

import requests

from ..config import Config, SEED_WORDS
from ..utils.game_logger import game_logger


class DictionaryLookupError(Exception):
    """The dictionary could not give a definitive answer."""


def normalize_word(word: str) -> str:
    return (word or '').strip().upper()


class DictionaryClient:
    """Thin HTTP client for the free dictionary API."""

    def __init__(self,
                 api_base: str = Config.DICTIONARY_API_BASE,
                 timeout: float = Config.DICTIONARY_TIMEOUT_SECONDS,
                 session: Optional[requests.Session] = None):
        self.api_base = api_base.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def lookup(self, word: str) -> bool:
        """
        Ask the dictionary whether a word exists.

        Returns:
            True if the dictionary has an entry, False on a definitive 404

        Raises:
            DictionaryLookupError: On transport failures, unexpected statuses or bad payloads
        """
        url = f"{self.api_base}/{word.lower()}"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise DictionaryLookupError(f"Dictionary request failed: {e}") from e

        if response.status_code == 404:
            return False
        if not response.ok:
            raise DictionaryLookupError(f"Dictionary API responded with status {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise DictionaryLookupError(f"Dictionary API returned invalid JSON: {e}") from e

        return isinstance(payload, list) and len(payload) > 0


class WordValidityChecker:
    """
    Word validity checks with a per-length known-word set and a lookup cache.

    Both stores are owned by this instance and only ever grow.
    """

    def __init__(self,
                 client: Optional[DictionaryClient] = None,
                 seed_words: Optional[Mapping[int, Iterable[str]]] = None,
                 cache: Optional[Dict[str, bool]] = None):
        self.client = client or DictionaryClient()
        self.known_words: Dict[int, Set[str]] = {}
        self.cache: Dict[str, bool] = cache if cache is not None else {}
        self._lock = threading.Lock()

        seeds = SEED_WORDS if seed_words is None else seed_words
        for length, words in seeds.items():
            self._word_set(int(length)).update(normalize_word(word) for word in words)

    def _word_set(self, length: int) -> Set[str]:
        if length not in self.known_words:
            self.known_words[length] = set()
        return self.known_words[length]

    def add_word(self, length: int, word: str) -> None:
        """Register a word as known valid, e.g. because it is in a puzzle pool."""
        normalized = normalize_word(word)
        if not normalized:
            return
        with self._lock:
            self._word_set(length).add(normalized)
            self.cache[normalized] = True

    def is_known(self, length: int, word: str) -> bool:
        return normalize_word(word) in self.known_words.get(length, set())

    def is_valid_word(self, length: int, guess: str) -> bool:
        """
        Checks whether a guess is an acceptable word.

        Known words and cached answers never touch the network. When the
        dictionary cannot be reached the guess is accepted so play is never
        blocked; only a definitive "not found" rejects it.
        """
        normalized = normalize_word(guess)
        if not normalized:
            return False

        with self._lock:
            word_set = self._word_set(length)
            if normalized in word_set:
                return True

            if normalized in self.cache:
                cached = self.cache[normalized]
                if cached:
                    word_set.add(normalized)
                return cached

        try:
            found = self.client.lookup(normalized)
        except DictionaryLookupError as e:
            game_logger.logger.warning(f"[Dictionary] Failed to verify \"{normalized}\": {e}")
            return True

        with self._lock:
            self.cache[normalized] = found
            if found:
                self._word_set(length).add(normalized)

        return found
