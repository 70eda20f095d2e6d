from __future__ import annotations

import random

from .models import Challenge
from .words import EXAMPLE_WORDS, words_matching


# Relative frequency of each letter as a word boundary.
LETTER_WEIGHTS: dict[str, int] = {
    "A": 10, "E": 10, "I": 9, "O": 9, "S": 10, "T": 10, "N": 9, "R": 9,
    "L": 8, "D": 8, "C": 7, "H": 7, "M": 7, "U": 7, "P": 7, "G": 7,
    "B": 6, "F": 5, "W": 5, "Y": 5, "V": 4,
    "K": 3, "J": 2, "X": 2,
    "Q": 1, "Z": 1,
}

GOOD_START_LETTERS = frozenset("ABCDEFGHILMNOPRSTUW")
GOOD_END_LETTERS = frozenset("ADEGHKLNRSTY")

# Never asked as a last letter.
EXCLUDED_END_LETTERS = frozenset("Q")

FAVOURED_BOOST = 1.5
FAVOURED_CAP = 12


def weighted_letter(
    weights: dict[str, int],
    favoured: frozenset[str] | None = None,
    rng: random.Random | None = None,
) -> str:
    rng = rng or random
    letters = list(weights.keys())
    boosted = []
    for letter in letters:
        weight = float(weights[letter])
        if favoured and letter in favoured:
            weight = min(weight * FAVOURED_BOOST, FAVOURED_CAP)
        boosted.append(weight)
    return rng.choices(letters, weights=boosted, k=1)[0]


def difficulty_level(letter: str) -> int:
    weight = LETTER_WEIGHTS.get(letter, 0)
    if weight >= 9:
        return 0
    if weight >= 7:
        return 1
    if weight >= 4:
        return 2
    return 3


def generate(rng: random.Random | None = None) -> Challenge:
    first = weighted_letter(LETTER_WEIGHTS, GOOD_START_LETTERS, rng=rng)

    end_weights = {k: v for k, v in LETTER_WEIGHTS.items() if k not in EXCLUDED_END_LETTERS}
    last = weighted_letter(end_weights, GOOD_END_LETTERS, rng=rng)

    return Challenge(
        first_letter=first,
        last_letter=last,
        difficulty_bonus=difficulty_level(first) + difficulty_level(last),
    )


def find_example(first_letter: str, last_letter: str, rng: random.Random | None = None) -> str | None:
    """Pick a fallback answer for the letter pair, or None when the corpus has none."""
    matches = words_matching(first_letter, last_letter, EXAMPLE_WORDS)
    if not matches:
        return None
    return (rng or random).choice(matches)
