from dataclasses import dataclass
from typing import Sequence

import numpy as np

ALPHABET: str = "123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ0"


def _require_base(n: int) -> int:
    """Validate that n is a usable Sudoku base and return the side length n^2."""
    if n <= 0:
        raise ValueError(f"n must be positive, got {n}")
    side = n * n
    if side > len(ALPHABET):
        raise ValueError(f"n={n} needs {side} symbols; only {len(ALPHABET)} are available")
    return side


def get_possible(n: int) -> str:
    """Return the symbol alphabet for base n (the first n^2 characters of ALPHABET)."""
    return ALPHABET[: _require_base(n)]


@dataclass(frozen=True, eq=False)
class RawBoard:
    """A solved board and its given/hidden mask as aligned (n^2, n^2) arrays.

    Instances are never modified in place: every permutation returns a new
    RawBoard whose cells and mask were reordered by the same index arrays.
    """

    n: int
    cells: np.ndarray
    mask: np.ndarray

    def __post_init__(self) -> None:
        side = _require_base(self.n)
        if self.cells.shape != (side, side):
            raise ValueError(f"cells must have shape ({side}, {side}); got {self.cells.shape}")
        if self.mask.shape != self.cells.shape:
            raise ValueError(f"mask shape {self.mask.shape} does not match cells {self.cells.shape}")

    @classmethod
    def from_flat(cls, n: int, cells: Sequence[str], mask: Sequence[bool]) -> "RawBoard":
        """Build a RawBoard from row-major flat sequences of length n^4."""
        side = _require_base(n)
        if len(cells) != side * side or len(mask) != side * side:
            raise ValueError(
                f"expected {side * side} cells and mask flags; got {len(cells)} and {len(mask)}"
            )
        return cls(
            n=n,
            cells=np.array([str(c) for c in cells], dtype="<U1").reshape(side, side),
            mask=np.array([bool(m) for m in mask], dtype=bool).reshape(side, side),
        )

    @property
    def side(self) -> int:
        return self.n * self.n

    def flat_cells(self) -> list[str]:
        return [str(c) for c in self.cells.ravel()]

    def flat_mask(self) -> list[bool]:
        return [bool(m) for m in self.mask.ravel()]

    def reorder(
        self,
        rows: np.ndarray | None = None,
        cols: np.ndarray | None = None,
    ) -> "RawBoard":
        """Return a new RawBoard with rows and/or columns taken in the given order."""
        cells, mask = self.cells, self.mask
        if rows is not None:
            cells, mask = cells[rows, :], mask[rows, :]
        if cols is not None:
            cells, mask = cells[:, cols], mask[:, cols]
        # Fancy indexing already copies; the explicit copy covers the no-op case.
        return RawBoard(n=self.n, cells=cells.copy(), mask=mask.copy())

    def equals(self, other: "RawBoard") -> bool:
        return (
            self.n == other.n
            and np.array_equal(self.cells, other.cells)
            and np.array_equal(self.mask, other.mask)
        )


def _check_index(value: int, upper: int, what: str) -> None:
    if not 0 <= value < upper:
        raise ValueError(f"{what} index must be in [0, {upper}); got {value}")


def _swapped_order(size: int, first: Sequence[int], second: Sequence[int]) -> np.ndarray:
    """Identity ordering of `size` indices with the index runs `first` and `second` exchanged."""
    order = np.arange(size)
    order[list(first)] = list(second)
    order[list(second)] = list(first)
    return order


def swap_rows(board: RawBoard, row1: int, row2: int) -> RawBoard:
    """Swap two rows of the same band."""
    _check_index(row1, board.side, "row")
    _check_index(row2, board.side, "row")
    if row1 // board.n != row2 // board.n:
        raise ValueError(f"rows {row1} and {row2} lie in different bands")
    return board.reorder(rows=_swapped_order(board.side, [row1], [row2]))


def swap_cols(board: RawBoard, col1: int, col2: int) -> RawBoard:
    """Swap two columns of the same stack."""
    _check_index(col1, board.side, "column")
    _check_index(col2, board.side, "column")
    if col1 // board.n != col2 // board.n:
        raise ValueError(f"columns {col1} and {col2} lie in different stacks")
    return board.reorder(cols=_swapped_order(board.side, [col1], [col2]))


def swap_bands(board: RawBoard, band1: int, band2: int) -> RawBoard:
    """Swap two bands (groups of n rows), keeping the row order inside each."""
    _check_index(band1, board.n, "band")
    _check_index(band2, board.n, "band")
    if band1 == band2:
        return board.reorder()
    n = board.n
    first = range(band1 * n, band1 * n + n)
    second = range(band2 * n, band2 * n + n)
    return board.reorder(rows=_swapped_order(board.side, first, second))


def swap_stacks(board: RawBoard, stack1: int, stack2: int) -> RawBoard:
    """Swap two stacks (groups of n columns), keeping the column order inside each."""
    _check_index(stack1, board.n, "stack")
    _check_index(stack2, board.n, "stack")
    if stack1 == stack2:
        return board.reorder()
    n = board.n
    first = range(stack1 * n, stack1 * n + n)
    second = range(stack2 * n, stack2 * n + n)
    return board.reorder(cols=_swapped_order(board.side, first, second))


def is_valid_grid(cells: np.ndarray | Sequence[str], n: int) -> bool:
    """Check that every row, column and box holds each symbol of base n exactly once.

    Args:
        cells: A (n^2, n^2) array or a flat row-major sequence of n^4 symbols.
        n: Base of the board.
    """
    side = _require_base(n)
    grid = np.asarray(cells, dtype="<U1")
    if grid.size != side * side:
        return False
    grid = grid.reshape(side, side)
    symbols = set(get_possible(n))

    for i in range(side):
        if set(grid[i, :]) != symbols or set(grid[:, i]) != symbols:
            return False
    for band in range(n):
        for stack in range(n):
            box = grid[band * n:(band + 1) * n, stack * n:(stack + 1) * n]
            if set(box.ravel()) != symbols:
                return False
    return True
