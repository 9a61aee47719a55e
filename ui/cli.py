# # Command-line interface (text-based play)

from game.agents import (
    Codebreaker,
    Codemaker,
    ComputerCodebreaker,
    ComputerCodemaker,
)
from game.board import Board
from game.feedback import Feedback, evaluate
from game.ruleset import DEFAULT_RULES
from game.secret_code import Code
from solver.candidate_space import InconsistentFeedbackError


def render(board, width=8):
    """Render a text-based representation of the board."""

    rules = board.rules
    colors = rules["display"]["emoji_map"]
    length = rules["code_length"]
    title = "| +++++++++++++ Mastermind ++++++++++++ |"
    colums = "| ++++ Guesses ++++ | ++++ Feedback +++ |"
    line = "+----" * width + "+"

    # build the gameboard
    print(line)
    print(title)
    print(line)
    print(colums)
    print(line)
    for guess in board.guesses:
        attempt_line = ""
        for c in guess.get_guess():
            attempt_line += "| " + colors[c] + " "
        exact, color_only = guess.get_feedback()
        for _ in range(exact):
            attempt_line += "| " + colors["BK"] + " "
        for _ in range(color_only):
            attempt_line += "| " + colors["W"] + " "
        for _ in range(max(0, length - exact - color_only)):
            attempt_line += "|    "
        print(attempt_line + "|")
        print(line)
    print(f"Attempts left: {board.remaining_attempts()}")


def ask_code(prompt, rules=None):
    """Prompt until the user types a well-formed code."""
    rules = rules or DEFAULT_RULES
    while True:
        user_input = input(prompt).strip()
        code = Code(user_input, rules=rules)
        try:
            code.validate(strict=True)
        except ValueError as e:
            print(f"Invalid input: {e}")
            continue
        return code


def ask_feedback(prompt):
    """Prompt until the user types two non-negative integers."""
    while True:
        parts = input(prompt).replace(",", " ").split()
        if len(parts) == 2 and all(p.isdigit() for p in parts):
            return Feedback(int(parts[0]), int(parts[1]))
        print("Invalid input: type two numbers, e.g. '1 2'.")


class HumanCodebreaker(Codebreaker):
    """Codebreaker backed by console input."""

    def __init__(self, rules=None):
        self.rules = rules or DEFAULT_RULES

    def produce_guess(self):
        colors = "/".join(self.rules["colors"])
        return ask_code(f"Enter a guess ({colors}): ", rules=self.rules)

    def receive_feedback(self, feedback):
        exact, color_only = feedback
        print(f"Exact: {exact}  Color only: {color_only}")


class HumanCodemaker(Codemaker):
    """Codemaker backed by console input.

    The typed feedback is checked against the evaluator and re-asked until
    it is correct.
    """

    def __init__(self, rules=None):
        self.rules = rules or DEFAULT_RULES

    def provide_code(self):
        colors = "/".join(self.rules["colors"])
        return ask_code(f"Choose a secret code ({colors}): ", rules=self.rules)

    def evaluate_feedback(self, secret, guess):
        expected = evaluate(secret, guess)
        print(f"\nComputer guesses: {guess}")
        while True:
            reported = ask_feedback("Feedback (exact color_only): ")
            if reported == expected:
                return reported
            print(f"That is not right for {secret}. Try again.")


def gameloop(mode="breaker", rules=None, rng=None):
    """Play one match on the console.

    Args:
        mode: "breaker" to guess the computer's code, "maker" to let the
            computer guess yours.
    """
    rules = rules or DEFAULT_RULES
    print("=== Mastermind CLI ===")

    if mode == "breaker":
        print("Type colors as letters (e.g. rgby).\n")
        codemaker = ComputerCodemaker(rng=rng, rules=rules)
        codebreaker = HumanCodebreaker(rules=rules)
    elif mode == "maker":
        codemaker = HumanCodemaker(rules=rules)
        codebreaker = ComputerCodebreaker(rules=rules)
    else:
        raise ValueError(f"Unknown mode: {mode}")

    b = Board(codemaker, codebreaker, rules=rules)
    b.start()

    while not b.is_over:
        try:
            b.play_turn()
        except InconsistentFeedbackError as e:
            print(f"\nNo code fits the feedback given: {e}")
            return b

        # Render current board
        render(b)

    # Check win/loss
    if b.is_won and mode == "breaker":
        print("\nCongratulations, you cracked the code!")
    elif b.is_won:
        print(f"\nThe computer cracked your code in {b.current_attempt} turns.")
    else:
        print("\nNo more attempts left.")
    print(f"The secret code was: {b.reveal_code()}")

    print("\n=== Game Over ===")
    return b
