from __future__ import annotations

import argparse
import random
import time

from game.agents import ComputerCodebreaker, ComputerCodemaker
from game.board import Board
from game.ruleset import DEFAULT_RULES
from game.secret_code import Code
from solver.candidate_space import CandidateSpace
from solver.solver_manager import MinimaxConfig, MinimaxSolver
from state.serializer import write_report
from ui.cli import gameloop, render


def play_match(
    *,
    solver: MinimaxSolver,
    secret: Code | None = None,
    rng: random.Random | None = None,
    rules=None,
    verbose: bool = False,
) -> dict:
    """
    Play one computer-vs-computer match and record how it went.

    Returns:
        dict with keys: secret, won, turns, total_time_s,
        turn_times_s (per turn), space_sizes (candidates left after each turn)
    """
    rules = rules or DEFAULT_RULES
    codemaker = ComputerCodemaker(rng=rng, secret=secret, rules=rules)
    codebreaker = ComputerCodebreaker(solver=solver, rules=rules)
    board = Board(codemaker, codebreaker, rules=rules)

    start_time = time.perf_counter()
    board.start()

    # Game loop
    turn_times = []
    while not board.is_over:
        turn_start = time.perf_counter()
        board.play_turn()
        turn_times.append(time.perf_counter() - turn_start)

        if verbose:
            print(f"\n--- Iteration {board.current_attempt} ---\n")
            render(board)

    end_time = time.perf_counter()
    return {
        "secret": board.reveal_code(),
        "won": board.is_won,
        "turns": board.current_attempt,
        "total_time_s": end_time - start_time,
        "turn_times_s": turn_times,
        "space_sizes": codebreaker.space_sizes[1:],
    }


def run_benchmark(secrets, *, solver: MinimaxSolver, rules=None,
                  verbose: bool = False) -> dict:
    """
    Play one match per secret and collect the results column-wise.

    Args:
        secrets: iterable of (secret, rng) pairs; secret None draws a
            random one from rng
        solver: shared between matches so memoized decisions are reused
    Returns:
        report dict with "rules", "games" and "summary"
    """
    rules = rules or DEFAULT_RULES
    games = {
        "secret": [],
        "won": [],
        "turns": [],
        "total_time_s": [],
        "turn_headers": [],
        "turn_time_s_columns": {},
        "space_size_columns": {},
    }

    records = []
    for secret, rng in secrets:
        records.append(
            play_match(solver=solver, secret=secret, rng=rng, rules=rules,
                       verbose=verbose)
        )

    max_turns = max((r["turns"] for r in records), default=0)
    games["turn_headers"] = [f"turn {i}" for i in range(1, max_turns + 1)]
    for i, header in enumerate(games["turn_headers"]):
        games["turn_time_s_columns"][header] = [
            r["turn_times_s"][i] if i < r["turns"] else None for r in records
        ]
        games["space_size_columns"][header] = [
            r["space_sizes"][i] if i < r["turns"] else None for r in records
        ]
    for r in records:
        games["secret"].append(r["secret"])
        games["won"].append(r["won"])
        games["turns"].append(r["turns"])
        games["total_time_s"].append(r["total_time_s"])

    return {"rules": rules["name"], "games": games, "summary": summarize(records)}


def summarize(records: list[dict]) -> dict:
    if not records:
        return {"games": 0}
    times = [r["total_time_s"] for r in records]
    attempts = [r["turns"] for r in records]
    return {
        "games": len(records),
        "won": sum(1 for r in records if r["won"]),
        "avg_time_s": sum(times) / len(times),
        "max_time_s": max(times),
        "min_time_s": min(times),
        "avg_attempts": sum(attempts) / len(attempts),
        "max_attempts": max(attempts),
        "min_attempts": min(attempts),
    }


def print_summary(summary: dict) -> None:
    n = summary["games"]
    if n == 0:
        print("No games played.")
        return
    print(f"\nGames won: {summary['won']}/{n}")
    print(f"Average time over {n} games: {summary['avg_time_s']:.2f} seconds.")
    print(f"Max time over {n} games: {summary['max_time_s']:.2f} seconds.")
    print(f"Min time over {n} games: {summary['min_time_s']:.2f} seconds.")
    print(f"Average attempts over {n} games: {summary['avg_attempts']:.2f} attempts.")
    print(f"Max attempts over {n} games: {summary['max_attempts']} attempts.")
    print(f"Min attempts over {n} games: {summary['min_attempts']} attempts.")


def run(argv=None) -> dict | None:
    """Parse the command line and play; returns the benchmark report."""
    ap = argparse.ArgumentParser(description="Mastermind minimax codebreaker")
    ap.add_argument("--play", choices=["breaker", "maker"], default=None,
                    help="Play interactively: 'breaker' guesses the computer's "
                         "code, 'maker' lets the computer guess yours.")
    ap.add_argument("--games", type=int, default=10,
                    help="Number of random auto-play games")
    ap.add_argument("--exhaustive", action="store_true",
                    help="Play one game for every possible secret")
    ap.add_argument("--seed", type=int, default=None,
                    help="Seed for the secret code generator")
    ap.add_argument("--out", default=None, help="Write a JSON benchmark report")
    ap.add_argument("--verbose", action="store_true",
                    help="Render the board and show solver progress")
    args = ap.parse_args(argv)

    rng = random.Random(args.seed)

    if args.play:
        gameloop(args.play, rng=rng)
        return None

    solver = MinimaxSolver(MinimaxConfig(progress=args.verbose))
    if args.exhaustive:
        secrets = [(code, None) for code in CandidateSpace.full().codes()]
    else:
        secrets = [(None, rng) for _ in range(args.games)]

    report = run_benchmark(secrets, solver=solver, verbose=args.verbose)
    print_summary(report["summary"])

    if args.out:
        write_report(report, args.out)
        print(f"Report written to {args.out}")
    return report


def main(argv=None):
    run(argv)


if __name__ == "__main__":
    main()
