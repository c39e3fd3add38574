"""
Game Data Models

Contains all round-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class LetterStatus(Enum):
    """Per-letter classification of one guess against the target word."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"


# Keyboard letters only ever move up this ladder
STATUS_PRIORITY: Dict[LetterStatus, int] = {
    LetterStatus.ABSENT: 1,
    LetterStatus.PRESENT: 2,
    LetterStatus.CORRECT: 3,
}


class RoundPhase(Enum):
    """Where a round currently sits in its lifecycle."""
    GUESSING = "guessing"
    SOLVED = "solved"
    BONUS_OFFERED = "bonus_offered"
    OUT_OF_TRIES = "out_of_tries"


class WordSource(Enum):
    """Where a word pool came from."""
    REMOTE = "remote"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class Puzzle:
    """The secret word plus its ordered hint list. Immutable once drawn."""
    word: str
    hints: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Pack:
    """A named topic subset of the word catalog."""
    id: str
    name: str


@dataclass(frozen=True)
class GuessRecord:
    """One submitted guess and its evaluation."""
    guess: str
    statuses: Tuple[LetterStatus, ...]

    def to_dict(self) -> Dict:
        return {
            'guess': self.guess,
            'statuses': [status.value for status in self.statuses]
        }


@dataclass
class WordPool:
    """Candidate puzzles for one (length, pack) combination."""
    length: int
    puzzles: List[Puzzle]
    source: WordSource
    pack_id: Optional[str] = None
    error: Optional[str] = None

    def __len__(self) -> int:
        return len(self.puzzles)

    @property
    def words(self) -> List[str]:
        return [puzzle.word for puzzle in self.puzzles]


@dataclass
class RoundState:
    """Snapshot of a round, safe to hand to clients."""
    word_length: int
    phase: RoundPhase
    guesses: List[GuessRecord]
    keyboard_status: Dict[str, LetterStatus]
    has_used_bonus_retry: bool
    revealed_hints: List[bool]
    allowed_guesses: int
    hints: List[Optional[str]] = field(default_factory=list)  # None while hidden
    highlight_hints: bool = False
    answer: Optional[str] = None  # Only included once the round is over or bonus offered
    pack_id: Optional[str] = None
    pack_name: Optional[str] = None
    word_source: Optional[WordSource] = None
    word_error: Optional[str] = None
    message: Optional[str] = None
    tone: Optional[str] = None  # "info", "error", "success" or "warning"

    @property
    def tries_left(self) -> int:
        return max(0, self.allowed_guesses - len(self.guesses))

    @property
    def hints_left(self) -> int:
        return self.revealed_hints.count(False)

    @property
    def is_terminal(self) -> bool:
        return self.phase in (RoundPhase.SOLVED, RoundPhase.OUT_OF_TRIES)

    def to_dict(self) -> Dict:
        """JSON-friendly representation."""
        return {
            'word_length': self.word_length,
            'phase': self.phase.value,
            'guesses': [record.to_dict() for record in self.guesses],
            'keyboard_status': {letter: status.value for letter, status in self.keyboard_status.items()},
            'has_used_bonus_retry': self.has_used_bonus_retry,
            'revealed_hints': list(self.revealed_hints),
            'hints': list(self.hints),
            'allowed_guesses': self.allowed_guesses,
            'tries_left': self.tries_left,
            'hints_left': self.hints_left,
            'highlight_hints': self.highlight_hints,
            'game_over': self.is_terminal,
            'won': self.phase == RoundPhase.SOLVED,
            'answer': self.answer,
            'pack_id': self.pack_id,
            'pack_name': self.pack_name,
            'word_source': self.word_source.value if self.word_source else None,
            'word_error': self.word_error,
            'message': self.message,
            'tone': self.tone
        }


@dataclass
class GuessOutcome:
    """Result of submitting one guess."""
    accepted: bool
    state: RoundState
    evaluation: Optional[List[LetterStatus]] = None
    message: Optional[str] = None
    tone: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            'accepted': self.accepted,
            'evaluation': [status.value for status in self.evaluation] if self.evaluation is not None else None,
            'message': self.message,
            'tone': self.tone,
            'state': self.state.to_dict()
        }
