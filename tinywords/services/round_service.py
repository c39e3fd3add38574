"""
Round Service

Drives a single round from the first guess to a solved or out-of-tries
finish, including the one-time bonus retry and hint reveals.
"""

import threading
from typing import Callable, Dict, List, Optional, Tuple

from ..config import MAX_GUESSES, BONUS_GUESSES
from ..models.game import (
    GuessOutcome, GuessRecord, LetterStatus, Pack, Puzzle, RoundPhase, RoundState, WordPool
)
from .dictionary_service import WordValidityChecker, normalize_word
from .evaluator import evaluate_guess, merge_keyboard_status


class RoundStateError(Exception):
    """An action was requested that the round's current phase does not allow."""


class RoundStateMachine:
    """
    State machine for one round of one puzzle.

    Phases:
    - guessing: guesses are accepted
    - bonus_offered: the normal limit ran out; the player may take one more try
    - solved / out_of_tries: terminal

    The completion callback receives True for a win and False for a loss and
    fires at most once per round.
    """

    def __init__(self,
                 puzzle: Puzzle,
                 checker: WordValidityChecker,
                 on_complete: Optional[Callable[[bool], None]] = None,
                 pool: Optional[WordPool] = None,
                 pack: Optional[Pack] = None,
                 max_guesses: int = MAX_GUESSES,
                 bonus_guesses: int = BONUS_GUESSES):
        self.puzzle = puzzle
        self.checker = checker
        self.on_complete = on_complete
        self.pool = pool
        self.pack = pack
        self.max_guesses = max_guesses
        self.bonus_guesses = bonus_guesses

        self.guesses: List[GuessRecord] = []
        self.keyboard_status: Dict[str, LetterStatus] = {}
        self.has_used_bonus_retry = False
        self.revealed_hints: List[bool] = [False] * len(puzzle.hints)
        self.status_message: Optional[Tuple[str, str]] = None

        self._bonus_declined = False
        self._recorded = False
        self._submit_lock = threading.Lock()
        self._record_lock = threading.Lock()

    @property
    def target(self) -> str:
        return self.puzzle.word

    @property
    def word_length(self) -> int:
        return len(self.puzzle.word)

    @property
    def allowed_guesses(self) -> int:
        return self.max_guesses + (self.bonus_guesses if self.has_used_bonus_retry else 0)

    @property
    def is_solved(self) -> bool:
        return any(record.guess == self.target for record in self.guesses)

    @property
    def is_out_of_tries(self) -> bool:
        return len(self.guesses) >= self.allowed_guesses and not self.is_solved

    @property
    def phase(self) -> RoundPhase:
        if self.is_solved:
            return RoundPhase.SOLVED
        if self.is_out_of_tries:
            if self.has_used_bonus_retry or self._bonus_declined:
                return RoundPhase.OUT_OF_TRIES
            return RoundPhase.BONUS_OFFERED
        return RoundPhase.GUESSING

    @property
    def recorded(self) -> bool:
        return self._recorded

    @property
    def hints_left(self) -> int:
        return self.revealed_hints.count(False)

    @property
    def highlight_hints(self) -> bool:
        """Advisory: nudge the player toward a hint before the round ends."""
        if self.hints_left == 0 or self.is_solved:
            return False
        tries_left = max(0, self.allowed_guesses - len(self.guesses))
        return tries_left == 1 or self.phase == RoundPhase.BONUS_OFFERED

    def _record(self, win: bool) -> bool:
        with self._record_lock:
            if self._recorded:
                return False
            self._recorded = True
        if self.on_complete is not None:
            self.on_complete(win)
        return True

    def _set_status(self, text: str, tone: str) -> None:
        self.status_message = (text, tone)

    def snapshot(self) -> RoundState:
        phase = self.phase
        return RoundState(
            word_length=self.word_length,
            phase=phase,
            guesses=list(self.guesses),
            keyboard_status=dict(self.keyboard_status),
            has_used_bonus_retry=self.has_used_bonus_retry,
            revealed_hints=list(self.revealed_hints),
            allowed_guesses=self.allowed_guesses,
            hints=[hint if revealed else None
                   for hint, revealed in zip(self.puzzle.hints, self.revealed_hints)],
            highlight_hints=self.highlight_hints,
            answer=self.target if phase != RoundPhase.GUESSING else None,
            pack_id=(self.pack.id or None) if self.pack else None,
            pack_name=self.pack.name if self.pack else None,
            word_source=self.pool.source if self.pool else None,
            word_error=self.pool.error if self.pool else None,
            message=self.status_message[0] if self.status_message else None,
            tone=self.status_message[1] if self.status_message else None
        )

    def _reject(self, text: str, tone: str) -> GuessOutcome:
        self._set_status(text, tone)
        return GuessOutcome(accepted=False, state=self.snapshot(), message=text, tone=tone)

    def submit_guess(self, text: str) -> GuessOutcome:
        """
        Validates, evaluates and applies one guess.

        Rejected guesses leave the guess list untouched. Only one submission
        is processed at a time; overlapping submissions are rejected.
        """
        if not self._submit_lock.acquire(blocking=False):
            return GuessOutcome(accepted=False, state=self.snapshot(),
                                message="Still checking your last word…", tone="info")
        try:
            return self._submit_guess(text)
        finally:
            self._submit_lock.release()

    def _submit_guess(self, text: str) -> GuessOutcome:
        phase = self.phase
        if phase == RoundPhase.SOLVED:
            return self._reject("Nice! Head home to try a new word.", "success")
        if phase == RoundPhase.OUT_OF_TRIES:
            return self._reject(f"The word was {self.target}. Head home to try a new word.", "warning")
        if phase == RoundPhase.BONUS_OFFERED:
            return self._reject("Take your bonus chance or pick a new word!", "warning")

        guess = normalize_word(text)
        if len(guess) != self.word_length:
            return self._reject("Finish the word first!", "warning")

        is_letters = guess.isascii() and guess.isalpha()
        if not is_letters or not self.checker.is_valid_word(self.word_length, guess):
            return self._reject("Not a word—try again!", "error")

        evaluation = evaluate_guess(guess, self.target)
        self.guesses.append(GuessRecord(guess=guess, statuses=tuple(evaluation)))
        self.keyboard_status = merge_keyboard_status(self.keyboard_status, guess, evaluation)

        if guess == self.target:
            self._record(True)
            self._set_status("You did it!", "success")
        elif len(self.guesses) >= self.allowed_guesses:
            if self.has_used_bonus_retry:
                self._record(False)
            hint_reminder = (" You still have a hint for another try!"
                             if not self.has_used_bonus_retry and self.hints_left > 0 else "")
            self._set_status(f"The word was {self.target}.{hint_reminder}", "warning")
        else:
            self.status_message = None

        state = self.snapshot()
        return GuessOutcome(accepted=True, state=state, evaluation=evaluation,
                            message=state.message, tone=state.tone)

    def accept_bonus_retry(self) -> RoundState:
        """
        Grants the one-time extra guess.

        Raises:
            RoundStateError: Unless the bonus is currently on offer
        """
        if self.phase != RoundPhase.BONUS_OFFERED:
            raise RoundStateError("No bonus retry is available for this round")

        self.has_used_bonus_retry = True
        if self.hints_left > 0:
            self._set_status("Final guess unlocked! Peek at your hint if you need a boost.", "info")
        else:
            self._set_status("Final guess unlocked! You can do this!", "info")
        return self.snapshot()

    def decline_bonus_retry(self) -> RoundState:
        """
        Turns down the bonus and finishes the round as a loss.

        Raises:
            RoundStateError: If the round still has tries left or was solved
        """
        phase = self.phase
        if phase not in (RoundPhase.BONUS_OFFERED, RoundPhase.OUT_OF_TRIES):
            raise RoundStateError("There is no bonus retry to decline")

        self._bonus_declined = True
        self._record(False)
        return self.snapshot()

    def abandon(self) -> bool:
        """
        Called when the player leaves the round for a new one.

        Records a loss if the round had run out of tries and nothing was
        recorded yet. Returns True if a loss was recorded.
        """
        if self.is_out_of_tries:
            self._bonus_declined = True
            return self._record(False)
        return False

    def reveal_hint(self, index: int) -> RoundState:
        """
        Reveals one hint. Revealed hints stay revealed.

        Raises:
            RoundStateError: If the index is out of range
        """
        if not 0 <= index < len(self.revealed_hints):
            raise RoundStateError(f"Hint {index} does not exist")

        self.revealed_hints[index] = True
        return self.snapshot()
