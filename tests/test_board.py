import random

import pytest

from game.agents import (
    Codebreaker,
    Codemaker,
    ComputerCodebreaker,
    ComputerCodemaker,
)
from game.board import Board
from game.feedback import Feedback
from game.secret_code import Code
from solver.candidate_space import InconsistentFeedbackError


class ScriptedCodebreaker(Codebreaker):
    """Plays a fixed list of guesses, cycling."""

    def __init__(self, guesses):
        self.guesses = [Code(g) for g in guesses]
        self.received = []

    def produce_guess(self):
        return self.guesses[len(self.received) % len(self.guesses)]

    def receive_feedback(self, feedback):
        self.received.append(feedback)


class LyingCodemaker(ComputerCodemaker):
    """Always claims nothing matched."""

    def evaluate_feedback(self, secret, guess):
        return Feedback(0, 0)


def _drive(board):
    board.start()
    while not board.is_over:
        board.play_turn()
    return board


def test_computer_codebreaker_wins_with_shrinking_space():
    codemaker = ComputerCodemaker(secret=Code("mybo"))
    codebreaker = ComputerCodebreaker()
    board = _drive(Board(codemaker, codebreaker))

    assert board.status == "won_codebreaker"
    assert board.is_won and board.winner is codebreaker
    assert board.current_attempt <= 12
    assert board.guesses[0].code == Code("rrgg")
    assert board.guesses[-1].code == Code("mybo")
    assert board.guesses[-1].feedback == (4, 0)

    sizes = codebreaker.space_sizes
    assert sizes[0] == 1296 and sizes[-1] == 1
    assert len(sizes) == board.current_attempt + 1
    for before, after in zip(sizes, sizes[1:]):
        assert after < before or before == 1


def test_history_matches_codebreaker_view():
    codebreaker = ComputerCodebreaker()
    board = _drive(Board(ComputerCodemaker(secret=Code("ggbr")), codebreaker))
    assert [g.as_pair() for g in codebreaker.history] == board.get_feedback_history()


def test_states_and_transitions():
    codebreaker = ScriptedCodebreaker(["rgby"])
    board = Board(ComputerCodemaker(secret=Code("rgby")), codebreaker)
    assert board.status == "not_started"
    with pytest.raises(RuntimeError):
        board.play_turn()

    board.start()
    assert board.status == "in_progress" and board.current_attempt == 0
    with pytest.raises(RuntimeError):
        board.start()

    turn = board.play_turn()
    assert turn.feedback == (4, 0)
    assert board.status == "won_codebreaker"

    # terminal: further turns are ignored
    assert board.play_turn() is None
    assert board.current_attempt == 1
    assert codebreaker.received == [(4, 0)]


def test_codemaker_wins_after_twelve_turns():
    codemaker = ComputerCodemaker(secret=Code("oooo"))
    board = _drive(Board(codemaker, ScriptedCodebreaker(["rgby", "rrgg"])))
    assert board.status == "won_codemaker"
    assert board.winner is codemaker
    assert not board.is_won
    assert board.current_attempt == 12
    assert len(board.guesses) == 12
    assert board.remaining_attempts() == 0


def test_win_on_last_turn_goes_to_codebreaker():
    guesses = ["rrrr"] * 11 + ["bmoy"]
    board = _drive(Board(ComputerCodemaker(secret=Code("bmoy")),
                         ScriptedCodebreaker(guesses)))
    assert board.current_attempt == 12
    assert board.status == "won_codebreaker"


def test_secret_is_requested_once_and_hidden_until_over():
    class CountingCodemaker(ComputerCodemaker):
        calls = 0

        def provide_code(self):
            self.calls += 1
            return super().provide_code()

    codemaker = CountingCodemaker(rng=random.Random(5))
    board = Board(codemaker, ComputerCodebreaker())
    board.start()
    with pytest.raises(RuntimeError):
        board.reveal_code()
    assert board.reveal_code(force=True) == codemaker.secret.as_string()
    while not board.is_over:
        board.play_turn()
    assert codemaker.calls == 1
    assert board.reveal_code() == codemaker.secret.as_string()


def test_random_secret_is_reproducible_with_seeded_rng():
    a = ComputerCodemaker(rng=random.Random(42)).provide_code()
    b = ComputerCodemaker(rng=random.Random(42)).provide_code()
    assert a == b
    assert a.is_valid


def test_inconsistent_feedback_is_reported():
    board = Board(LyingCodemaker(secret=Code("rrrr")), ComputerCodebreaker())
    board.start()
    # rrgg scored (0, 0) rules out every code with r or g ...
    board.play_turn()
    # ... and the next guess reported (0, 0) as well eventually empties it
    with pytest.raises(InconsistentFeedbackError) as excinfo:
        while not board.is_over:
            board.play_turn()
    assert excinfo.value.feedback == (0, 0)

    # the rejected turn is kept and the match is left running
    assert board.guesses[-1].code == excinfo.value.guess
    assert board.current_attempt == len(board.guesses)
    assert board.status == "in_progress"
    assert board.winner is None


def test_feedback_before_guess_is_rejected():
    with pytest.raises(RuntimeError):
        ComputerCodebreaker().receive_feedback(Feedback(0, 0))


def test_agents_are_abstract():
    with pytest.raises(TypeError):
        Codemaker()
    with pytest.raises(TypeError):
        Codebreaker()


def test_snapshot():
    board = Board(ComputerCodemaker(secret=Code("rgby")), ScriptedCodebreaker(["rrgg", "rgby"]))
    board.start()
    board.play_turn()
    state = board.get_current_state()
    data = state.to_dict()
    assert data["status"] == "in_progress"
    assert data["secret_code"] is None
    assert data["guesses"] == [{"guess": "rrgg", "feedback": [1, 1]}]
    assert state.to_dict(reveal_code=True)["secret_code"] == "rgby"

    board.play_turn()
    data = board.get_current_state().to_dict()
    assert data["winner"] == "codebreaker"
    assert data["secret_code"] == "rgby"
