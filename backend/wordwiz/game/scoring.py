"""Scoring for correct answers.

Points depend on how much of the round timer was left when the answer
landed, scaled to ``max_score``, then multiplied by a word length bonus.
"""
from __future__ import annotations

import math
from dataclasses import dataclass


# (minimum length, multiplier), longest first
LENGTH_MULTIPLIERS: tuple[tuple[int, int], ...] = ((10, 4), (8, 3), (5, 2))


@dataclass(frozen=True)
class ScoreBreakdown:
    remaining_ms: int
    multiplier: int
    base_points: int
    points: int


def length_multiplier(word_length: int) -> int:
    for min_len, mult in LENGTH_MULTIPLIERS:
        if word_length >= min_len:
            return mult
    return 1


def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; clients expect 0.5 -> 1.
    return int(math.floor(value + 0.5))


def remaining_time_ms(timer_duration: int, round_start_ms: int, answer_ms: int) -> int:
    window_ms = timer_duration * 1000
    elapsed = answer_ms - round_start_ms
    return int(min(window_ms, max(0, window_ms - elapsed)))


def score_answer(word_length: int, remaining_ms: int, timer_duration: int, max_score: int = 1000) -> ScoreBreakdown:
    window_ms = timer_duration * 1000
    fraction = remaining_ms / window_ms if window_ms > 0 else 0.0
    base_points = max(1, round_half_up(fraction * max_score))
    multiplier = length_multiplier(word_length)
    return ScoreBreakdown(
        remaining_ms=remaining_ms,
        multiplier=multiplier,
        base_points=base_points,
        points=base_points * multiplier,
    )
