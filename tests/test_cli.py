import random

from game.board import Board
from game.agents import ComputerCodebreaker, ComputerCodemaker
from game.feedback import evaluate
from game.secret_code import Code
from ui.cli import HumanCodebreaker, HumanCodemaker, gameloop, render


def _feed(monkeypatch, answers):
    answers = iter(answers)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))


def test_human_codebreaker_reprompts_on_bad_guess(monkeypatch, capsys):
    _feed(monkeypatch, ["rgb", "rgbx", "R G B Y"])
    guess = HumanCodebreaker().produce_guess()
    assert guess == Code("rgby")
    out = capsys.readouterr().out
    assert out.count("Invalid input") == 2


def test_human_codemaker_rejects_wrong_feedback(monkeypatch, capsys):
    secret, guess = Code("rrgg"), Code("rgby")
    _feed(monkeypatch, ["one two", "2 0", "1,1"])
    fb = HumanCodemaker().evaluate_feedback(secret, guess)
    assert fb == evaluate(secret, guess) == (1, 1)
    out = capsys.readouterr().out
    assert "Invalid input" in out
    assert "Try again" in out


def test_computer_breaks_human_code(monkeypatch):
    secret = Code("ybbm")
    codebreaker = ComputerCodebreaker()

    def answer(prompt=""):
        if "secret" in prompt:
            return "ybbm"
        fb = evaluate(secret, codebreaker.last_guess)
        return f"{fb.exact} {fb.color_only}"

    # remember each guess as it is produced
    produce = codebreaker.produce_guess

    def remembering():
        codebreaker.last_guess = produce()
        return codebreaker.last_guess

    codebreaker.produce_guess = remembering
    monkeypatch.setattr("builtins.input", answer)

    board = Board(HumanCodemaker(), codebreaker)
    board.start()
    while not board.is_over:
        board.play_turn()
    assert board.is_won
    assert board.guesses[-1].code == secret


def test_gameloop_breaker_mode(monkeypatch, capsys):
    secret = ComputerCodemaker(rng=random.Random(1)).provide_code()
    _feed(monkeypatch, ["rrgg", secret.as_string()])
    board = gameloop("breaker", rng=random.Random(1))
    assert board.is_won
    out = capsys.readouterr().out
    assert "cracked the code" in out
    assert f"The secret code was: {secret}" in out


def test_render_lists_every_turn(capsys):
    board = Board(ComputerCodemaker(secret=Code("rgby")), ComputerCodebreaker())
    board.start()
    board.play_turn()
    board.play_turn()
    capsys.readouterr()
    render(board)
    out = capsys.readouterr().out
    assert "Mastermind" in out
    assert f"Attempts left: {board.remaining_attempts()}" in out
