"""
Stats Data Models

Contains the win/loss ledger data structures.
"""

from dataclasses import dataclass, asdict
from typing import Dict


@dataclass(frozen=True)
class GameRecord:
    """One finished round. Never mutated once written."""
    date: str  # calendar day, YYYY-MM-DD
    win: bool

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class Stats:
    """Derived player statistics."""
    wins_today: int = 0
    streak: int = 0
    total_games: int = 0

    def to_dict(self) -> Dict:
        return asdict(self)
