from .feedback import Feedback
from .secret_code import Code


class Guess:
    """
        One turn of a match: the guessed code and the feedback it received.
    Attributes:
        code (Code): The guessed code.
        feedback (Feedback | None): (exact, color_only), None until scored."""

    def __init__(self, code: Code, feedback: Feedback | None = None):
        self.code = code
        self.feedback = feedback

    def get_feedback(self):
        return self.feedback

    def get_guess(self):
        return self.code

    def as_string(self):
        return self.code.as_string()

    def as_pair(self) -> tuple[Code, Feedback]:
        return (self.code, self.feedback)

    def __repr__(self):
        return f"Guess({self.code.as_string()!r}, {self.feedback!r})"

    def __str__(self):
        return f"{self.as_string()} {self.feedback}"
