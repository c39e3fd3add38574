"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import (
    LetterStatus, RoundPhase, WordSource, Puzzle, Pack, GuessRecord,
    WordPool, RoundState, GuessOutcome
)
from .stats import GameRecord, Stats

__all__ = [
    'LetterStatus', 'RoundPhase', 'WordSource', 'Puzzle', 'Pack', 'GuessRecord',
    'WordPool', 'RoundState', 'GuessOutcome', 'GameRecord', 'Stats'
]
