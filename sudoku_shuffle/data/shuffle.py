"""Random composition of validity-preserving permutations."""

import logging

import numpy as np

from .base import RawBoard, swap_bands, swap_cols, swap_rows, swap_stacks

logger = logging.getLogger(__name__)

NUM_SHUFFLES: int = 500  # permutations applied per generated board


def _draw_other(rng: np.random.Generator, upper: int, taken: int, offset: int = 0) -> int:
    """Draw uniformly from [offset, offset + upper) until the value differs from `taken`."""
    value = offset + int(rng.integers(upper))
    while value == taken:
        value = offset + int(rng.integers(upper))
    return value


def random_shuffle(board: RawBoard, rng: np.random.Generator) -> RawBoard:
    """
    Apply one randomly chosen permutation to a board.

    With equal probability the move is coarse (swap two bands or two stacks)
    or fine (swap two rows inside one band, or two columns inside one stack);
    the axis is chosen independently with equal probability. Index pairs are
    always distinct. For base 2 a fine move swaps the only two members of the
    chosen group.

    Args:
        board: The board to permute. It is not modified.
        rng: Source of randomness.

    Returns:
        A new permuted RawBoard.
    """
    n = board.n
    if n < 2:
        raise ValueError(f"boards of base {n} cannot be shuffled")

    coarse = bool(rng.random() < 0.5)
    row_axis = bool(rng.random() < 0.5)

    if coarse:
        ind1 = int(rng.integers(n))
        ind2 = _draw_other(rng, n, ind1)
        return swap_bands(board, ind1, ind2) if row_axis else swap_stacks(board, ind1, ind2)

    group = int(rng.integers(n)) * n
    if n == 2:
        ind1, ind2 = group, group + 1
    else:
        ind1 = group + int(rng.integers(n))
        ind2 = _draw_other(rng, n, ind1, offset=group)
    return swap_rows(board, ind1, ind2) if row_axis else swap_cols(board, ind1, ind2)


def shuffle(
    board: RawBoard,
    rng: np.random.Generator,
    num_shuffles: int = NUM_SHUFFLES,
) -> RawBoard:
    """Apply `num_shuffles` random permutations and return the resulting board."""
    if num_shuffles < 0:
        raise ValueError(f"num_shuffles must be non-negative, got {num_shuffles}")
    for _ in range(num_shuffles):
        board = random_shuffle(board, rng)
    logger.debug("Applied %d permutations to base-%d board", num_shuffles, board.n)
    return board
