"""
Demo driver: factorize a generated test matrix and print the pieces.

Usage:
    python -m pyhouseholder [-m M] [-n N]

Dimensions missing from the command line are prompted for. The test
matrix has A[r, c] = r - c + 1 on and below the diagonal and 0 above it.
"""

import argparse
import sys
from typing import Sequence, TextIO

import numpy as np
from numpy.typing import NDArray

from pyhouseholder.core.exceptions import ZeroNormError
from pyhouseholder.householder.reflectors import ReflectorStorage
from pyhouseholder.householder.solvers import factorize_inplace

NORMS_PER_LINE = 5


def build_test_matrix(m: int, n: int) -> NDArray[np.float64]:
    """Column-major m x n matrix with A[r, c] = r - c + 1 for r >= c, else 0."""
    rows = np.arange(m, dtype=np.float64).reshape(-1, 1)
    cols = np.arange(n, dtype=np.float64).reshape(1, -1)
    A = np.where(rows >= cols, rows - cols + 1.0, 0.0)
    return np.asfortranarray(A)


def format_matrix(A: NDArray[np.float64]) -> str:
    return "\n".join(
        " ".join(f"{x:9.6g}" for x in row) + " " for row in A
    )


def format_norm_check(reflectors: ReflectorStorage) -> str:
    """vᵢᵗvᵢ for every vector, NORMS_PER_LINE per line, 1-based labels."""
    entries = [
        f"||v[{i + 1}]|| = {sq:g}"
        for i, sq in enumerate(reflectors.squared_norms())
    ]
    lines = [
        ", ".join(entries[k:k + NORMS_PER_LINE])
        for k in range(0, len(entries), NORMS_PER_LINE)
    ]
    return ",\n".join(lines) + "."


def _read_dimension(
    value: int | None,
    label: str,
    stdin: TextIO,
    stdout: TextIO,
) -> int:
    if value is not None:
        return value
    stdout.write(f"Enter the dimension {label} (where A is a m by n matrix): ")
    stdout.flush()
    line = stdin.readline()
    try:
        return int(line.strip())
    except ValueError:
        raise ValueError(f"{label} must be an integer, got {line.strip()!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pyhouseholder',
        description='Householder QR factorization of a generated m x n test matrix',
    )
    parser.add_argument('-m', type=int, default=None, help='number of rows')
    parser.add_argument('-n', type=int, default=None, help='number of columns (n <= m)')
    return parser


def main(
    argv: Sequence[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    args = build_parser().parse_args(argv)

    try:
        m = _read_dimension(args.m, 'm', stdin, stdout)
        n = _read_dimension(args.n, 'n', stdin, stdout)
    except ValueError as e:
        stdout.write(f"\nERROR: {e}\n")
        return 2

    if m < n:
        stdout.write(
            "For a successful factorization, this implementation "
            "requires n <= m.\nTerminating program.\n"
        )
        return 0
    if n < 1:
        stdout.write(f"ERROR: dimensions must be positive, got m={m}, n={n}\n")
        return 2

    A = build_test_matrix(m, n)
    reflectors = ReflectorStorage.allocate(m, n)

    stdout.write("A = \n" + format_matrix(A) + "\n\n")

    try:
        solution = factorize_inplace(A, reflectors)
    except ZeroNormError as e:
        stdout.write(f"ERROR: {e}\n")
        return 1

    stdout.write("R = \n" + format_matrix(A) + "\n\n")

    for i, v in enumerate(reflectors):
        stdout.write(f"v[{i}] = " + " ".join(f"{x:9.6g}" for x in v) + " \n")
    stdout.write("\n")

    stdout.write(
        f"Numerical verification that v_1, ..., v_{n} are normalized:\n"
    )
    stdout.write(format_norm_check(reflectors) + "\n")
    verdict = "all unit norm" if solution.check_normalized() else "NOT all unit norm"
    stdout.write(f"Reflection vectors: {verdict}\n")
    return 0


if __name__ == '__main__':
    sys.exit(main())
