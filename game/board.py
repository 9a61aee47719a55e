from __future__ import annotations

from typing import Literal

from .agents import Codebreaker, Codemaker
from .guess import Guess
from .ruleset import DEFAULT_RULES
from .secret_code import Code
from state.game_state import GameState


Status = Literal["not_started", "in_progress", "won_codebreaker", "won_codemaker"]


class Board:
    """Game engine: drives one match between a codemaker and a codebreaker.

    The board never loops by itself. Call `start()` once, then `play_turn()`
    until `is_over` is set.
    """

    def __init__(self, codemaker: Codemaker, codebreaker: Codebreaker, rules=None):
        """Initialize the board with two players and a given ruleset."""
        self.rules = rules or DEFAULT_RULES
        self.codemaker = codemaker
        self.codebreaker = codebreaker
        self.max_attempts = self.rules.get("max_attempts", 12)
        self.secret_code: Code | None = None
        self.guesses: list[Guess] = []
        self.current_attempt = 0
        self.status: Status = "not_started"
        self.winner: Codemaker | Codebreaker | None = None

    @property
    def is_over(self) -> bool:
        return self.status in ("won_codebreaker", "won_codemaker")

    @property
    def is_won(self) -> bool:
        """True once the codebreaker has cracked the code."""
        return self.status == "won_codebreaker"

    def start(self):
        """Set up the match: ask the codemaker for the secret and reset state."""
        if self.status != "not_started":
            raise RuntimeError(f"Cannot start a match that is {self.status}.")

        self.secret_code = self.codemaker.provide_code()
        self.guesses = []
        self.current_attempt = 0
        self.status = "in_progress"

    def play_turn(self) -> Guess | None:
        """Play one guess/feedback exchange and update the match status.

        Returns the turn record, or None if the match is already over.

        If the codebreaker rejects the feedback (InconsistentFeedbackError),
        the error propagates after the turn was recorded: it stays in
        `guesses`, counts towards `current_attempt`, and the status stays
        "in_progress" with no winner.
        """
        if self.status == "not_started":
            raise RuntimeError("Call start() before playing a turn.")
        if self.is_over:
            return None

        # Ask for a guess and have it scored
        code = self.codebreaker.produce_guess()
        feedback = self.codemaker.evaluate_feedback(self.secret_code, code)
        turn = Guess(code, feedback)

        # Save the turn before the codebreaker learns from it
        self.guesses.append(turn)
        self.current_attempt += 1
        self.codebreaker.receive_feedback(feedback)

        # Validate win/lose
        self.check_game_over(code)
        return turn

    def check_game_over(self, last_code: Code):
        """Set the winner on an exact match or when all attempts are used."""
        if last_code == self.secret_code:
            self.status = "won_codebreaker"
            self.winner = self.codebreaker
        elif self.remaining_attempts() <= 0:
            self.status = "won_codemaker"
            self.winner = self.codemaker

    def get_feedback_history(self):
        """Return the full history of guesses and feedback."""
        return [guess.as_pair() for guess in self.guesses]

    def remaining_attempts(self):
        """Return how many guesses are left."""
        return max(0, self.max_attempts - self.current_attempt)

    def reveal_code(self, force: bool = False) -> str:
        """Return the secret code once the match is over."""
        if not (self.is_over or force):
            raise RuntimeError("The secret code is hidden until the match ends.")
        return self.secret_code.as_string() if self.secret_code else "EMPTY"

    def winner_role(self) -> str | None:
        if self.status == "won_codebreaker":
            return "codebreaker"
        if self.status == "won_codemaker":
            return "codemaker"
        return None

    def get_current_state(self) -> GameState:
        """Return a GameState snapshot for display or analysis."""
        return GameState(
            rules=self.rules,
            guesses=list(self.guesses),
            current_attempts=self.current_attempt,
            status=self.status,
            winner=self.winner_role(),
            code=self.secret_code.as_string() if self.secret_code else None,
        )
