"""
Services Package

Contains all business logic and service classes.
"""

from .evaluator import evaluate_guess, merge_keyboard_status
from .dictionary_service import DictionaryClient, DictionaryLookupError, WordValidityChecker
from .word_source import MongoWordCatalog, WordSourceError, WordSourceResolver, build_hints
from .round_service import RoundStateError, RoundStateMachine
from .stats_service import JsonFileStore, MemoryStore, StatsLedger
from .game_service import (
    GameService, PuzzleEngine, NoActiveRoundError, StaleLoadError,
    get_game_service, initialize_game_service
)

__all__ = [
    'evaluate_guess', 'merge_keyboard_status',
    'DictionaryClient', 'DictionaryLookupError', 'WordValidityChecker',
    'MongoWordCatalog', 'WordSourceError', 'WordSourceResolver', 'build_hints',
    'RoundStateError', 'RoundStateMachine',
    'JsonFileStore', 'MemoryStore', 'StatsLedger',
    'GameService', 'PuzzleEngine', 'NoActiveRoundError', 'StaleLoadError',
    'get_game_service', 'initialize_game_service'
]
