"""Pick-distribution reports for the seeded generator and the used-name history.

CLI usage:
    python -m namesmith.analysis.distribution --seed abc --draws 20000
    python -m namesmith.analysis.distribution --history data/used_names.json
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd

from namesmith.src.generator import WordLists, pick
from namesmith.src.rng import create_rng
from namesmith.src.wordlists import DEFAULT_ADJECTIVES, DEFAULT_NOUNS, read_word_list


# ── Data collection ──────────────────────────────────────────────


def sample_picks(word_lists: WordLists, seed: str | None, draws: int) -> pd.DataFrame:
    """Draw `draws` adjective/noun pairs the way adj-noun mode does."""
    rng = create_rng(seed)
    rows = []
    for _ in range(draws):
        adjective = pick(word_lists.adjectives, rng, "adjective")
        noun = pick(word_lists.nouns, rng, "noun")
        rows.append({"adjective": adjective, "noun": noun})
    return pd.DataFrame(rows, columns=["adjective", "noun"])


def history_frame(history_path: Path, separator: str = "-") -> pd.DataFrame:
    """Load a persisted used-name file, one row per name.

    Names are split on the first separator into `first` / `second`; names
    without it keep an empty `second`.
    """
    if not history_path.exists():
        return pd.DataFrame(columns=["name", "first", "second"])

    names = json.loads(history_path.read_text())
    df = pd.DataFrame({"name": [n for n in names if isinstance(n, str)]})
    if df.empty:
        return pd.DataFrame(columns=["name", "first", "second"])
    if separator:
        parts = df["name"].str.split(separator, n=1, expand=True, regex=False)
        df["first"] = parts[0]
        df["second"] = parts[1].fillna("") if 1 in parts.columns else ""
    else:
        df["first"] = df["name"]
        df["second"] = ""
    return df


# ── Statistics ───────────────────────────────────────────────────


def pick_frequencies(df: pd.DataFrame, column: str) -> pd.Series:
    """Count of each word in `column`, most frequent first."""
    return df[column].value_counts()


def uniformity_report(df: pd.DataFrame, column: str, population: int) -> dict:
    """How far the observed picks are from a uniform draw over `population` words.

    Words never drawn count as zero observations in the chi-square sum.
    """
    counts = pick_frequencies(df, column)
    total = int(counts.sum())
    expected = total / population if population else 0.0

    observed = counts.tolist() + [0] * max(population - len(counts), 0)
    chi_square = (
        sum((o - expected) ** 2 / expected for o in observed) if expected else 0.0
    )

    return {
        "draws": total,
        "population": population,
        "distinct": int(len(counts)),
        "expected": expected,
        "min": int(min(observed)) if observed else 0,
        "max": int(max(observed)) if observed else 0,
        "chi_square": chi_square,
        "degrees_of_freedom": max(population - 1, 0),
    }


# ── Plotting ─────────────────────────────────────────────────────


def plot_pick_frequencies(df: pd.DataFrame, column: str, output_path: Path | None = None) -> None:
    """Bar chart of per-word pick counts with the uniform expectation marked."""
    counts = pick_frequencies(df, column).sort_index()

    fig, ax = plt.subplots(figsize=(14, 5))
    ax.bar(counts.index, counts.values, color="#4c72b0")
    if len(counts):
        ax.axhline(counts.sum() / len(counts), color="#c44e52", linestyle="--", label="uniform")
        ax.legend()
    ax.set_xlabel(column.capitalize())
    ax.set_ylabel("Picks")
    ax.set_title(f"{column.capitalize()} pick frequency ({int(counts.sum())} draws)")
    ax.tick_params(axis="x", labelrotation=90, labelsize=6)
    ax.grid(True, axis="y", alpha=0.3)

    if output_path:
        fig.savefig(output_path, dpi=150, bbox_inches="tight")
        plt.close(fig)
    else:
        plt.show()


# ── CLI ──────────────────────────────────────────────────────────


def _print_report(label: str, report: dict) -> None:
    print(f"{label}:")
    for key, value in report.items():
        if isinstance(value, float):
            print(f"  {key:<20} {value:.2f}")
        else:
            print(f"  {key:<20} {value}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Word pick distribution reports")
    parser.add_argument("--seed", type=str, default=None, help="Seed string (default: unseeded)")
    parser.add_argument("--draws", type=int, default=10000)
    parser.add_argument("--adjectives", type=Path, default=DEFAULT_ADJECTIVES)
    parser.add_argument("--nouns", type=Path, default=DEFAULT_NOUNS)
    parser.add_argument("--history", type=Path, help="Summarize a used-names JSON file instead")
    parser.add_argument("--separator", type=str, default="-", help="Separator used in --history names")
    parser.add_argument("--plot", type=Path, help="Write an adjective frequency chart here")
    args = parser.parse_args(argv)

    if args.history:
        df = history_frame(args.history, args.separator)
        print(f"{len(df)} used names in {args.history}")
        if not df.empty:
            print("Most used first words:")
            print(pick_frequencies(df, "first").head(10).to_string())
        return 0

    word_lists = WordLists(read_word_list(args.adjectives), read_word_list(args.nouns))
    df = sample_picks(word_lists, args.seed, args.draws)
    _print_report("adjectives", uniformity_report(df, "adjective", len(word_lists.adjectives)))
    _print_report("nouns", uniformity_report(df, "noun", len(word_lists.nouns)))

    if args.plot:
        plot_pick_frequencies(df, "adjective", args.plot)
        print(f"Wrote {args.plot}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
