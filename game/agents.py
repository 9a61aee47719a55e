"""
The two roles a Board drives.

A Codemaker holds the secret and scores guesses; a Codebreaker guesses and
learns from feedback. Computer and human players implement the same
interface, so either role can be swapped without touching the Board.
"""

from __future__ import annotations

import abc
import random

from .feedback import Feedback, evaluate
from .guess import Guess
from .ruleset import DEFAULT_RULES
from .secret_code import Code
from solver.candidate_space import CandidateSpace, InconsistentFeedbackError
from solver.solver_manager import MinimaxSolver


class Codemaker(abc.ABC):
    @abc.abstractmethod
    def provide_code(self) -> Code:
        pass

    def evaluate_feedback(self, secret: Code, guess: Code) -> Feedback:
        return evaluate(secret, guess)


class Codebreaker(abc.ABC):
    @abc.abstractmethod
    def produce_guess(self) -> Code:
        pass

    @abc.abstractmethod
    def receive_feedback(self, feedback: Feedback) -> None:
        pass


class ComputerCodemaker(Codemaker):
    """Picks a random secret, or plays a fixed one when given."""

    def __init__(
        self,
        rng: random.Random | None = None,
        secret: Code | None = None,
        rules=None,
    ):
        self.rules = rules or DEFAULT_RULES
        self.rng = rng or random.Random()
        self.secret = secret

    def provide_code(self) -> Code:
        if self.secret is None:
            self.secret = Code.random(self.rng, rules=self.rules)
        return self.secret


class ComputerCodebreaker(Codebreaker):
    """
    Minimax codebreaker.

    Keeps a private candidate space, narrowed after every feedback. The
    size of the space after each filter is recorded in `space_sizes`
    (first entry: the full space).
    """

    def __init__(self, solver: MinimaxSolver | None = None, rules=None):
        self.rules = rules or DEFAULT_RULES
        self.solver = solver or MinimaxSolver()
        self.full_space = CandidateSpace.full(rules=self.rules)
        self.candidates = self.full_space
        self.history: list[Guess] = []
        self.space_sizes = [len(self.candidates)]
        self._pending: Code | None = None

    def produce_guess(self) -> Code:
        turn_number = len(self.history) + 1
        self._pending = self.solver.next_guess(
            turn_number, self.candidates, self.full_space
        )
        return self._pending

    def receive_feedback(self, feedback: Feedback) -> None:
        if self._pending is None:
            raise RuntimeError("Feedback received before any guess was made.")

        guess, self._pending = self._pending, None
        self.history.append(Guess(guess, Feedback(*feedback)))
        self.candidates = self.candidates.filter(guess, feedback)
        self.space_sizes.append(len(self.candidates))

        if not self.candidates:
            raise InconsistentFeedbackError(
                f"Feedback {tuple(feedback)} for {guess} leaves no "
                f"consistent code.",
                guess=guess,
                feedback=Feedback(*feedback),
            )
