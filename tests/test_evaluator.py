from collections import Counter
from itertools import product

import pytest

from tinywords.models.game import LetterStatus
from tinywords.services.evaluator import evaluate_guess, merge_keyboard_status

C, P, A = LetterStatus.CORRECT, LetterStatus.PRESENT, LetterStatus.ABSENT


def test_pleat_against_apple_has_no_correct_letters():
    assert evaluate_guess('PLEAT', 'APPLE') == [P, P, P, P, A]


def test_room_against_book_matches_both_os_exactly():
    assert evaluate_guess('ROOM', 'BOOK') == [A, C, C, A]


def test_exact_guess_is_all_correct():
    assert evaluate_guess('CAT', 'CAT') == [C, C, C]


def test_repeated_guess_letters_never_exceed_target_count():
    assert evaluate_guess('BBBBB', 'ABBEY') == [A, C, C, A, A]
    assert evaluate_guess('LLLLL', 'HELLO') == [A, A, C, C, A]


def test_correct_match_consumed_before_present():
    # One E is matched in place, so only one of the other two E's can be present
    assert evaluate_guess('EERIE', 'THREE') == [P, A, C, A, C]


def test_length_mismatch_is_a_programmer_error():
    with pytest.raises(ValueError):
        evaluate_guess('CATS', 'CAT')


@pytest.mark.parametrize('guess,target', list(product(
    ['APPLE', 'PLEAT', 'EERIE', 'LLAMA', 'SPEED', 'ABBEY'],
    ['APPLE', 'THREE', 'LLAMA', 'ERASE', 'PAPAL', 'BOBBY'],
)))
def test_evaluation_invariants(guess, target):
    statuses = evaluate_guess(guess, target)

    assert len(statuses) == len(target)
    for i, status in enumerate(statuses):
        assert (status == C) == (guess[i] == target[i])

    marked = Counter(letter for letter, status in zip(guess, statuses) if status != A)
    target_counts = Counter(target)
    for letter, count in marked.items():
        assert count <= target_counts[letter]

    assert evaluate_guess(guess, target) == statuses


def test_keyboard_status_never_downgrades():
    keyboard = merge_keyboard_status({}, 'PLANT', [P, P, P, A, A])
    assert keyboard == {'P': P, 'L': P, 'A': P, 'N': A, 'T': A}

    keyboard = merge_keyboard_status(keyboard, 'APPLE', [C, C, C, C, C])
    assert keyboard['A'] == C
    assert keyboard['P'] == C

    keyboard = merge_keyboard_status(keyboard, 'PANTS', [P, P, A, A, A])
    assert keyboard['A'] == C
    assert keyboard['P'] == C
    assert keyboard['S'] == A


def test_keyboard_merge_returns_new_map():
    original = {'A': A}
    merged = merge_keyboard_status(original, 'A', [P])
    assert original == {'A': A}
    assert merged == {'A': P}
