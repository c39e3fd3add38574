"""
Game Configuration Constants Module

This module defines all game configuration constants for the puzzle round
engine. The bundled fallback puzzles and the seed dictionary are loaded from
fallback_words.json so the game stays playable without the word catalog.

"""

import json
import os
from typing import Dict, Final, List, Tuple

# Core Game Configuration Constants
WORD_LENGTHS: Final[Tuple[int, ...]] = (3, 4, 5)
"""
Word lengths a round can be played with.
"""

MAX_GUESSES: Final[int] = 6
"""
Number of guesses allowed per round before the bonus retry is offered.
"""

BONUS_GUESSES: Final[int] = 1
"""
Extra guesses granted by the one-time bonus retry.
"""


def _validate_word(word: str, length: int) -> None:
    if len(word) != length:
        raise ValueError(f"Word '{word}' is not {length} characters long")
    if not word.isalpha():
        raise ValueError(f"Word '{word}' contains non-alphabetic characters")


# Load bundled words from JSON file
def _load_bundled_words() -> Tuple[Dict[int, List[dict]], Dict[int, List[str]]]:
    """
    Load fallback puzzles and seed words from fallback_words.json.

    Returns:
        Tuple of (puzzles by length, seed words by length), words uppercased

    Raises:
        FileNotFoundError: If fallback_words.json file is not found
        ValueError: If the file is malformed or contains invalid words
    """
    config_dir = os.path.dirname(os.path.abspath(__file__))
    json_file_path = os.path.join(config_dir, 'fallback_words.json')

    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            payload = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Fallback word file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in fallback_words.json: {e}")

    if not isinstance(payload, dict) or 'puzzles' not in payload or 'seed_words' not in payload:
        raise ValueError("JSON file must contain 'puzzles' and 'seed_words' objects")

    puzzles: Dict[int, List[dict]] = {}
    for length_key, entries in payload['puzzles'].items():
        length = int(length_key)
        puzzles[length] = []
        for entry in entries:
            word = entry['word'].upper()
            _validate_word(word, length)
            puzzles[length].append({'word': word, 'hints': list(entry.get('hints', []))})

    seed_words: Dict[int, List[str]] = {}
    for length_key, words in payload['seed_words'].items():
        length = int(length_key)
        seed_words[length] = []
        for word in words:
            word = word.upper()
            _validate_word(word, length)
            seed_words[length].append(word)

    return puzzles, seed_words


# Curated fallback puzzles and seed dictionary loaded from JSON file
FALLBACK_PUZZLES, SEED_WORDS = _load_bundled_words()


def validate_word_list_integrity() -> bool:
    """
    Validates the integrity and consistency of the bundled word data.

    This function performs validation to ensure:
    1. Coverage: every supported length has at least one fallback puzzle
    2. Hints: every fallback puzzle carries at least one hint
    3. Uniqueness: no duplicate fallback words within a length

    Returns:
        bool: True if the bundled data passes all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    for length in WORD_LENGTHS:
        entries = FALLBACK_PUZZLES.get(length)
        if not entries:
            raise ValueError(f"No fallback puzzles for length {length}")

        words = [entry['word'] for entry in entries]
        if len(words) != len(set(words)):
            duplicates = sorted({word for word in words if words.count(word) > 1})
            raise ValueError(f"Duplicate fallback words for length {length}: {duplicates}")

        for entry in entries:
            if not entry['hints']:
                raise ValueError(f"Fallback puzzle '{entry['word']}' has no hints")

    return True


def get_word_statistics() -> dict:
    """
    Summarizes the bundled word data.

    Returns:
        dict: fallback puzzle and seed word counts per length
    """
    return {
        "fallback_puzzles": {length: len(entries) for length, entries in FALLBACK_PUZZLES.items()},
        "seed_words": {length: len(words) for length, words in SEED_WORDS.items()},
        "total_fallback_words": sum(len(entries) for entries in FALLBACK_PUZZLES.values())
    }


# Module initialization: Validate configuration on import
if __name__ == "__main__":

    try:
        validate_word_list_integrity()
        print(" Word list validation passed")

        stats = get_word_statistics()
        print(f" Word statistics: {stats}")

        print(" All configuration validation checks passed")
    except ValueError as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)
