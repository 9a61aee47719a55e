# state/game_state.py


class GameState:
    """Read-only snapshot of a Mastermind match"""

    def __init__(
        self, rules, guesses, current_attempts, status, winner=None, code=None
    ):
        self.rules = rules
        self.guesses = tuple(guesses)
        self.current_attempts = current_attempts
        self.status = status
        self.winner = winner
        self.secret_code = code

    @property
    def is_over(self):
        return self.winner is not None

    @property
    def is_won(self):
        return self.winner == "codebreaker"

    def to_dict(self, reveal_code=False):
        # Return the gamestate as dictionary for i.e. json
        return {
            "rules": self.rules["name"],
            "guesses": [
                {
                    "guess": g.as_string(),
                    "feedback": list(g.get_feedback()),
                }
                for g in self.guesses
            ],
            "current_attempts": self.current_attempts,
            "status": self.status,
            "winner": self.winner,
            "secret_code": self.secret_code
            if reveal_code or self.is_over
            else None,
        }
