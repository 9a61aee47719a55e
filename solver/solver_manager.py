from __future__ import annotations

import time
from dataclasses import dataclass

import numpy as np

from game.feedback import Feedback
from game.secret_code import Code
from solver.candidate_space import CandidateSpace, InconsistentFeedbackError


# drop-in helper for progress and log line
def progress_print(msg: str) -> None:
    # overwrite same line, no newline
    print(f"\r\033[K{msg}", end="", flush=True)


def log_print(msg: str) -> None:
    # first terminate the progress line, then print normally
    print("\r\033[K", end="", flush=True)
    print(msg, flush=True)


@dataclass(frozen=True)
class MinimaxConfig:
    # color indices of the fixed first guess, e.g. (0, 0, 1, 1) -> rrgg
    opening: tuple[int, ...] = (0, 0, 1, 1)
    # among equal worst cases, prefer a guess that can still win
    prefer_candidates: bool = True
    # reuse decisions for a candidate set that was already searched
    memoize: bool = True
    progress: bool = False


class MinimaxSolver:
    """
    Minimax Guess Selection:
    - turn 1: fixed opening, no search
    - afterwards: for every guess in the full space, partition the remaining
      candidates by feedback and take the largest partition as its worst case
    - best_guess = min over worst case; ties go to a remaining candidate,
      then to the lexicographically smallest code

    Attributes:
        cfg: MinimaxConfig

    Methods:
        next_guess(...): Opening on turn 1, minimax search afterwards.
        choose_guess(...): Selects the best guess using the minimax strategy.
    """

    def __init__(self, config: MinimaxConfig | None = None):
        self.cfg = config or MinimaxConfig()
        self._memo: dict[tuple[bytes, bytes], tuple[int, int, int]] = {}

    def opening_guess(self, rules) -> Code:
        colors = rules["colors"]
        return Code([colors[i] for i in self.cfg.opening], rules=rules)

    def next_guess(
        self,
        turn_number: int,
        candidates: CandidateSpace,
        full_space: CandidateSpace | None = None,
    ) -> Code:
        """
        Produce the guess for `turn_number` (1-based).

        Args:
            turn_number: Turn about to be played.
            candidates: Codes still consistent with all feedback.
            full_space: Codes allowed as guesses (defaults to all codes).
        Returns:
            The code to play.
        """
        if not candidates:
            raise InconsistentFeedbackError(
                "No candidate code is consistent with the feedback received."
            )
        if turn_number <= 1:
            return self.opening_guess(candidates.rules)

        best_guess, _, _ = self.choose_guess(candidates, full_space)
        return best_guess

    def choose_guess(
        self,
        candidates: CandidateSpace,
        full_space: CandidateSpace | None = None,
    ) -> tuple[Code, int, Feedback]:
        """
        Choose the best guess using the minimax strategy.
        Args:
            candidates: Codes still consistent with all feedback.
            full_space: Codes allowed as guesses (defaults to all codes).
        Returns:
          best_guess, best_worst_case, best_worst_fb
        """
        if not candidates:
            raise InconsistentFeedbackError(
                "No candidate code is consistent with the feedback received."
            )
        if full_space is None:
            full_space = CandidateSpace.full(rules=candidates.rules)

        key = (candidates.mask.tobytes(), full_space.mask.tobytes())
        if self.cfg.memoize and key in self._memo:
            best, worst_case, worst_fb = self._memo[key]
        else:
            best, worst_case, worst_fb = self._search(candidates, full_space)
            if self.cfg.memoize:
                self._memo[key] = (best, worst_case, worst_fb)

        return (
            candidates.code_at(best),
            worst_case,
            candidates.decode_feedback(worst_fb),
        )

    def _search(
        self, candidates: CandidateSpace, full_space: CandidateSpace
    ) -> tuple[int, int, int]:
        start = time.perf_counter()
        if self.cfg.progress:
            progress_print(
                f"Searching {len(full_space)} guesses "
                f"against {len(candidates)} candidates ..."
            )

        # only one code left: play it
        if len(candidates) == 1:
            best = int(candidates.indices()[0])
            worst_case = 1
        else:
            worst = candidates.worst_cases(guess_mask=full_space.mask)
            worst = np.where(worst < 0, np.iinfo(worst.dtype).max, worst)
            worst_case = int(worst.min())
            minimizers = worst == worst_case

            consistent = minimizers & candidates.mask
            if self.cfg.prefer_candidates and consistent.any():
                best = int(np.argmax(consistent))
            else:
                best = int(np.argmax(minimizers))

        # feedback that leaves the largest partition
        row = candidates.table[best][candidates.mask]
        worst_fb = int(np.argmax(np.bincount(row)))

        if self.cfg.progress:
            log_print(
                f"Best guess : {candidates.code_at(best)}\n"
                f"with fb    : {candidates.decode_feedback(worst_fb)}\n"
                f"min max    : {worst_case}\n"
                f"time       : {time.perf_counter() - start:.3f}s\n"
            )
        return best, worst_case, worst_fb
