from __future__ import annotations

from functools import lru_cache
from itertools import product

import numpy as np

from game.feedback import Feedback, all_feedbacks
from game.ruleset import DEFAULT_RULES
from game.secret_code import Code


class InconsistentFeedbackError(RuntimeError):
    """
    No code is consistent with the feedback observed so far.

    Only reachable when feedback was reported that no real secret could
    have produced.
    """

    def __init__(self, message: str, guess: Code | None = None,
                 feedback: Feedback | None = None):
        super().__init__(message)
        self.guess = guess
        self.feedback = feedback


@lru_cache(maxsize=None)
def _enumerate(colors: tuple[str, ...], code_length: int) -> np.ndarray:
    """All codes as color indices, shape (num_colors**code_length, code_length).

    Row order is lexicographic in the color order, so row index order and
    code order coincide.
    """
    return np.array(
        list(product(range(len(colors)), repeat=code_length)), dtype=np.int8
    )


@lru_cache(maxsize=None)
def _feedback_table(colors: tuple[str, ...], code_length: int) -> np.ndarray:
    """
    Feedback of every code against every code, encoded as
    exact * (code_length + 1) + color_only.

    color_only equals the multiset overlap of the whole codes minus the
    exact matches, which lets both terms come out of broadcasting.
    """
    codes = _enumerate(colors, code_length)
    num_colors = len(colors)

    exact = (codes[:, None, :] == codes[None, :, :]).sum(axis=2, dtype=np.int8)

    counts = np.stack(
        [(codes == c).sum(axis=1, dtype=np.int8) for c in range(num_colors)],
        axis=1,
    )
    overlap = np.minimum(counts[:, None, :], counts[None, :, :]).sum(
        axis=2, dtype=np.int8
    )

    table = exact * (code_length + 1) + (overlap - exact)
    table.setflags(write=False)
    return table


class CandidateSpace:
    """
    A subset of all codes, stored as a boolean mask over the fixed
    lexicographic enumeration.

    Instances are not mutated: `filter` returns a new space.

    Attributes:
        rules: The ruleset defining colors and code length.
        mask: Boolean numpy array, True where the code is still live.
    """

    def __init__(self, mask: np.ndarray | None = None, rules=None):
        self.rules = rules or DEFAULT_RULES
        self._colors = tuple(self.rules["colors"])
        self._length = self.rules["code_length"]
        self._base = self._length + 1

        size = len(self._colors) ** self._length
        if mask is None:
            mask = np.ones(size, dtype=bool)
        elif mask.shape != (size,):
            raise ValueError(
                f"Mask must have shape ({size},), got {mask.shape}."
            )
        self.mask = mask

    @classmethod
    def full(cls, rules=None) -> "CandidateSpace":
        """Return the space holding every code."""
        return cls(rules=rules)

    @property
    def table(self) -> np.ndarray:
        return _feedback_table(self._colors, self._length)

    @property
    def size(self) -> int:
        """Number of codes in the full enumeration."""
        return self.mask.shape[0]

    def encode_feedback(self, feedback: tuple[int, int]) -> int:
        return feedback[0] * self._base + feedback[1]

    def decode_feedback(self, value: int) -> Feedback:
        return Feedback(int(value) // self._base, int(value) % self._base)

    def index_of(self, code) -> int:
        """Position of `code` in the lexicographic enumeration."""
        index = 0
        for color in code:
            index = index * len(self._colors) + self._colors.index(color)
        return index

    def code_at(self, index: int) -> Code:
        row = _enumerate(self._colors, self._length)[index]
        return Code([self._colors[c] for c in row], rules=self.rules)

    def indices(self) -> np.ndarray:
        return np.flatnonzero(self.mask)

    def codes(self) -> list[Code]:
        return [self.code_at(i) for i in self.indices()]

    def filter(self, guess, feedback: tuple[int, int]) -> "CandidateSpace":
        """
        Keep only the codes that would have produced `feedback` for `guess`.

        Args:
            guess: The code that was played.
            feedback: The (exact, color_only) pair it received.

        Returns:
            CandidateSpace: A subset of this space; may be empty.
        """
        row = self.table[self.index_of(guess)]
        consistent = row == self.encode_feedback(feedback)
        return CandidateSpace(self.mask & consistent, rules=self.rules)

    def partition(self, guess) -> dict[Feedback, int]:
        """
        Sizes of the groups the live codes fall into when scored against
        `guess`. Feedbacks that select no code are omitted.
        """
        row = self.table[self.index_of(guess)][self.mask]
        counts = np.bincount(row, minlength=self._base * self._base)
        return {
            fb: int(counts[self.encode_feedback(fb)])
            for fb in all_feedbacks(self.rules)
            if counts[self.encode_feedback(fb)]
        }

    def worst_cases(self, guess_mask: np.ndarray | None = None) -> np.ndarray:
        """
        Largest partition size of the live codes for every guess.

        Args:
            guess_mask: Guesses to score (defaults to all codes). Entries
            outside the mask are reported as -1.

        Returns:
            np.ndarray: int array of shape (size,).
        """
        live = self.indices()
        buckets = self._base * self._base
        sub = self.table[:, live].astype(np.int64)
        sub += np.arange(self.size, dtype=np.int64)[:, None] * buckets
        counts = np.bincount(sub.ravel(), minlength=self.size * buckets)
        worst = counts.reshape(self.size, buckets).max(axis=1)
        if guess_mask is not None:
            worst = np.where(guess_mask, worst, -1)
        return worst

    def __len__(self):
        return int(self.mask.sum())

    def __bool__(self):
        return bool(self.mask.any())

    def __contains__(self, code):
        return bool(self.mask[self.index_of(code)])

    def __iter__(self):
        return iter(self.codes())

    def __eq__(self, other):
        if not isinstance(other, CandidateSpace):
            return NotImplemented
        return np.array_equal(self.mask, other.mask)

    __hash__ = None

    def __repr__(self):
        return f"CandidateSpace({len(self)}/{self.size})"
