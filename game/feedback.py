"""
Mastermind feedback for a single (secret, guess) pair.

Conventions:
  - exact      (black peg): same color at the same position
  - color_only (white peg): color present in both codes but misplaced,
                            counted only over the non-exact positions

The evaluation is symmetric: swapping secret and guess yields the same pair.
"""

from __future__ import annotations

from collections import Counter
from typing import NamedTuple, Sequence

from .ruleset import DEFAULT_RULES


class Feedback(NamedTuple):
    exact: int
    color_only: int

    def is_solved(self, rules=None) -> bool:
        rules = rules or DEFAULT_RULES
        return self.exact == rules["code_length"]

    def __str__(self):
        return f"({self.exact}, {self.color_only})"


def evaluate(secret: Sequence[str], guess: Sequence[str]) -> Feedback:
    """
    Compute the feedback for `guess` against `secret`.

    Preconditions:
      - len(secret) == len(guess)

    Examples:
      evaluate("rrgg", "rgby") -> Feedback(exact=1, color_only=1)
      evaluate("rgby", "ybgr") -> Feedback(exact=0, color_only=4)
    """
    exact = 0

    # Pass 1: count exact matches and tally the leftover colors on both sides.
    secret_tally: Counter = Counter()
    guess_tally: Counter = Counter()
    for s, g in zip(secret, guess):
        if s == g:
            exact += 1
        else:
            secret_tally[s] += 1
            guess_tally[g] += 1

    # Pass 2: the multiset intersection of the leftovers is the color-only count.
    color_only = sum((secret_tally & guess_tally).values())

    return Feedback(exact, color_only)


def all_feedbacks(rules=None) -> list[Feedback]:
    """
    Every reachable feedback value, ordered by (exact, color_only).

    (L - 1, 1) is impossible: a single misplaced peg cannot be the only
    mismatch.
    """
    rules = rules or DEFAULT_RULES
    n = rules["code_length"]
    return [
        Feedback(b, w)
        for b in range(n + 1)
        for w in range(n + 1 - b)
        if not (b == n - 1 and w == 1)
    ]
