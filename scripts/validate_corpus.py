#!/usr/bin/env python3
"""Check every reference board of a corpus file: shape, symbols and Sudoku validity."""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))
from sudoku_shuffle.data import SUPPORTED_BASES, is_valid_grid, load_corpus, parse_reference
from sudoku_shuffle.errors import SudokuError


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--corpus", type=str, default=None, help="Corpus JSON file (default: bundled corpus)")
    args = parser.parse_args()

    try:
        corpus = load_corpus(args.corpus)
    except (SudokuError, FileNotFoundError) as e:
        print(f"Error loading corpus: {e}")
        sys.exit(1)

    failures = 0
    print(f"{'Base':<6} | {'Boards':<6} | {'Givens':<16} | Status")
    print("-" * 44)
    for base in sorted(set(corpus) | set(SUPPORTED_BASES)):
        instances = corpus.get(base, [])
        givens = []
        problems = []
        for i, instance in enumerate(instances):
            try:
                raw = parse_reference(instance, base)
            except SudokuError as e:
                problems.append(f"#{i}: {e}")
                continue
            if not is_valid_grid(raw.cells, base):
                problems.append(f"#{i}: not a valid Sudoku solution")
            givens.append(str(int(raw.mask.sum())))
        if base not in SUPPORTED_BASES:
            problems.append("unsupported base")
        elif not instances:
            problems.append("no reference boards")

        status = "ok" if not problems else "FAILED"
        print(f"{base:<6} | {len(instances):<6} | {', '.join(givens) or '-':<16} | {status}")
        for problem in problems:
            print(f"    {problem}")
        failures += len(problems)

    print("-" * 44)
    if failures:
        print(f"{failures} problem(s) found")
        sys.exit(1)
    print("Corpus is valid")


if __name__ == "__main__":
    main()
