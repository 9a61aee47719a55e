import argparse
import re
from pathlib import Path

import numpy as np
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from state.serializer import read_report


def _natural_turn_sort_key(s: str):
    m = re.search(r"(\d+)", str(s))
    return int(m.group(1)) if m else s


def _annotate_points(ax, xs, ys, *, fmt="{:.2f}", dx=0, dy=6, fontsize=8):
    """
    Annotate points (x, y) on ax with formatted y values.

    Args:
        ax: matplotlib Axes
        xs: list of x coordinates
        ys: list of y coordinates
        fmt: format string for y values
        dx: x offset in points
        dy: y offset in points
        fontsize: font size for annotations
    """

    for x, y in zip(xs, ys):
        if y is None or np.isnan(y):
            continue
        ax.annotate(
            fmt.format(y),
            (x, y),
            textcoords="offset points",
            xytext=(dx, dy),
            ha="center",
            va="center",
            fontsize=fontsize,
        )


def _column_stats(columns: dict, headers: list, won: np.ndarray):
    """avg/min/max per turn column, won games only."""
    avg, lo, hi = [], [], []
    for th in headers:
        col = columns.get(th, [])
        vals = [
            float(v)
            for v, w in zip(col[: len(won)], won)
            if w and v is not None
        ]
        avg.append(float(np.mean(vals)) if vals else np.nan)
        lo.append(float(np.min(vals)) if vals else np.nan)
        hi.append(float(np.max(vals)) if vals else np.nan)
    return avg, lo, hi


def compute_run_stats(games: dict) -> dict:
    """
    Returns a dict with:
      turns_hist (dict[int, int]) number of won games per turn count
      avg/min/max_total_time (float, np.nan if no won games)
      avg/min/max_turn_times (list[float]) per turn index, won games only
      avg/min/max_space_sizes (list[float]) candidates left per turn index
      n_won, n_games (int)
    """
    won = np.array(games.get("won", []), dtype=bool)
    total_time = np.array(games.get("total_time_s", []), dtype=np.float32)
    turns = np.array(games.get("turns", []), dtype=np.int32)

    # Guard against length mismatches
    n = min(len(won), len(total_time), len(turns))
    won, total_time, turns = won[:n], total_time[:n], turns[:n]

    won_total_times = total_time[won]
    stats = {
        "n_games": int(n),
        "n_won": int(won.sum()),
        "avg_total_time": float(np.mean(won_total_times)) if won_total_times.size else np.nan,
        "min_total_time": float(np.min(won_total_times)) if won_total_times.size else np.nan,
        "max_total_time": float(np.max(won_total_times)) if won_total_times.size else np.nan,
    }

    values, counts = np.unique(turns[won], return_counts=True)
    stats["turns_hist"] = {int(v): int(c) for v, c in zip(values, counts)}

    turn_headers = sorted(games.get("turn_headers", []), key=_natural_turn_sort_key)
    stats["turn_headers"] = turn_headers
    (
        stats["avg_turn_times"],
        stats["min_turn_times"],
        stats["max_turn_times"],
    ) = _column_stats(games.get("turn_time_s_columns", {}) or {}, turn_headers, won)
    (
        stats["avg_space_sizes"],
        stats["min_space_sizes"],
        stats["max_space_sizes"],
    ) = _column_stats(games.get("space_size_columns", {}) or {}, turn_headers, won)

    return stats


def plot_report(report: dict, outdir: Path) -> list[Path]:
    """Write the benchmark plots as PNGs into outdir and return their paths."""
    outdir.mkdir(parents=True, exist_ok=True)
    stats = compute_run_stats(report.get("games", {}))
    if stats["n_won"] == 0:
        raise ValueError("Report holds no won games to plot.")

    rules = report.get("rules", "classic")
    written = []

    # Plot configuration:
    plt.rcParams["lines.solid_capstyle"] = "round"
    plt.rcParams["lines.solid_joinstyle"] = "round"
    plt.rcParams["lines.linewidth"] = 1.0

    # Plot 1: distribution of turns needed
    hist = stats["turns_hist"]
    xs = sorted(hist)
    plt.figure(figsize=(10, 6))
    plt.bar(xs, [hist[x] for x in xs])
    _annotate_points(plt.gca(), xs, [hist[x] for x in xs], fmt="{:.0f}", dy=6)
    plt.title(
        f"Turns to solve ({rules})\n"
        f"Games won: {stats['n_won']}/{stats['n_games']}, "
        f"average: {np.average(xs, weights=[hist[x] for x in xs]):.3f}"
    )
    plt.xlabel("Turns")
    plt.ylabel("Games")
    plt.xticks(xs)
    plt.grid(True, axis="y")
    out1 = outdir / f"{rules}_turns_hist.png"
    plt.savefig(out1, dpi=200, bbox_inches="tight")
    plt.close()
    written.append(out1)

    x = np.arange(1, len(stats["turn_headers"]) + 1)

    # Plot 2: turn time vs turn number
    plt.figure(figsize=(12, 8))
    plt.plot(x, stats["avg_turn_times"], marker="o", label="Average Turn Time")
    plt.scatter(x, stats["max_turn_times"], marker="^", s=20, label="Max Turn Time")
    plt.scatter(x, stats["min_turn_times"], marker="v", s=20, label="Min Turn Time")
    plt.fill_between(x, stats["min_turn_times"], stats["max_turn_times"],
                     alpha=0.2, label="Min–Max range")
    _annotate_points(plt.gca(), x, stats["avg_turn_times"], fmt="{:.3f}s", dy=8)
    plt.title(f"Average Turn Time ({rules})")
    plt.xlabel("Turn Number")
    plt.ylabel("Turn Time (s) [won games]")
    plt.xticks(x)
    plt.grid(True)
    plt.legend()
    out2 = outdir / f"{rules}_turn_time.png"
    plt.savefig(out2, dpi=200, bbox_inches="tight")
    plt.close()
    written.append(out2)

    # Plot 3: candidates left after each turn
    plt.figure(figsize=(12, 8))
    plt.plot(x, stats["avg_space_sizes"], marker="o", label="Average Candidates Left")
    plt.fill_between(x, stats["min_space_sizes"], stats["max_space_sizes"],
                     alpha=0.2, label="Min–Max range")
    _annotate_points(plt.gca(), x, stats["avg_space_sizes"], fmt="{:.1f}", dy=8)
    plt.yscale("log")
    plt.title(f"Candidate Space Size per Turn ({rules})")
    plt.xlabel("Turn Number")
    plt.ylabel("Candidates Left [won games]")
    plt.xticks(x)
    plt.grid(True)
    plt.legend()
    out3 = outdir / f"{rules}_space_size.png"
    plt.savefig(out3, dpi=200, bbox_inches="tight")
    plt.close()
    written.append(out3)

    return written


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--file", default="benchmark.json", help="Path to benchmark JSON")
    ap.add_argument("--outdir", default="./results", help="Output directory for PNGs")
    args = ap.parse_args(argv)

    report = read_report(args.file)
    for path in plot_report(report, Path(args.outdir)):
        print(f"Wrote {path}")


if __name__ == "__main__":
    main()
