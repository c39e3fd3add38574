"""
Guess Evaluator

Scores one guess against one target word.
"""

from typing import Dict, List, Optional, Sequence
from ..models.game import LetterStatus, STATUS_PRIORITY


def evaluate_guess(guess: str, target: str) -> List[LetterStatus]:
    """
    Two-pass letter evaluation that handles repeated letters.

    Exact matches are marked and consumed first, so a letter is never marked
    correct or present more times than it occurs in the target.

    Args:
        guess: Uppercase guess
        target: Uppercase target of the same length

    Returns:
        List of LetterStatus, one per position

    Raises:
        ValueError: If guess and target differ in length
    """
    if len(guess) != len(target):
        raise ValueError(f"Guess length {len(guess)} does not match target length {len(target)}")

    result: List[Optional[LetterStatus]] = [None] * len(target)
    remaining: List[Optional[str]] = list(target)

    # First pass: exact position matches
    for i, letter in enumerate(guess):
        if letter == target[i]:
            result[i] = LetterStatus.CORRECT
            remaining[i] = None

    # Second pass: present letters consume one remaining occurrence each
    for i, letter in enumerate(guess):
        if result[i] is not None:
            continue
        if letter in remaining:
            result[i] = LetterStatus.PRESENT
            remaining[remaining.index(letter)] = None
        else:
            result[i] = LetterStatus.ABSENT

    return [status for status in result if status is not None]


def merge_keyboard_status(keyboard_status: Dict[str, LetterStatus],
                          guess: str,
                          statuses: Sequence[LetterStatus]) -> Dict[str, LetterStatus]:
    """
    Folds one evaluation into the keyboard letter map.

    Status can only progress in priority order correct > present > absent.
    Returns a new dict; the input map is left untouched.
    """
    merged = dict(keyboard_status)
    for letter, new_status in zip(guess, statuses):
        current_status = merged.get(letter)
        if current_status is None or STATUS_PRIORITY[new_status] > STATUS_PRIORITY[current_status]:
            merged[letter] = new_status
    return merged
