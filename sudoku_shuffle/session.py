"""Headless game session: selection, entries, candidates, hints and timing.

All interaction state lives on a `GameSession`; `handle_key` applies one key
press to it. Nothing here renders anything.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable

from sudoku_shuffle.data import NUM_SHUFFLES, Board, generate_board
from sudoku_shuffle.data.corpus import Corpus

logger = logging.getLogger(__name__)

MOVES: dict[str, tuple[int, int]] = {
    "ArrowUp": (-1, 0),
    "ArrowDown": (1, 0),
    "ArrowLeft": (0, -1),
    "ArrowRight": (0, 1),
}
CLEAR_KEYS: tuple[str, ...] = ("Backspace", "Delete")


@dataclass
class GameSession:
    """
    State of one game in progress.

    Candidates are kept per cell as a string of length n^2 with the symbol at
    its alphabet position when marked and a space otherwise.
    """

    board: Board
    row: int = 0
    col: int = 0
    candidate_mode: bool = False
    error_mode: bool = False
    candidates: list[str] = field(default_factory=list)
    elapsed_offset: float = 0.0  # seconds played before the current run
    clock: Callable[[], float] = field(default=time.monotonic, repr=False, compare=False)
    _started_at: float | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        size = len(self.board.board)
        if not self.candidates:
            self.candidates = [" " * self.board.side] * size
        if len(self.candidates) != size:
            raise ValueError(f"expected {size} candidate strings, got {len(self.candidates)}")
        if not self.is_solved:
            self.resume()

    # Timer
    @property
    def elapsed(self) -> float:
        """Seconds played so far."""
        if self._started_at is None:
            return self.elapsed_offset
        return self.elapsed_offset + (self.clock() - self._started_at)

    @property
    def running(self) -> bool:
        return self._started_at is not None

    def pause(self) -> None:
        if self._started_at is not None:
            self.elapsed_offset = self.elapsed
            self._started_at = None

    def resume(self) -> None:
        if self._started_at is None and not self.is_solved:
            self._started_at = self.clock()

    # Board state
    @property
    def selected(self) -> int:
        return self.row * self.board.side + self.col

    @property
    def is_solved(self) -> bool:
        """True when every non-given cell holds its solution value."""
        return all(
            given or entered == solution
            for given, entered, solution in zip(self.board.mask, self.board.entered_vals, self.board.board)
        )

    def value_at(self, index: int) -> str | None:
        """The value shown at a cell: its clue if given, otherwise the player's entry."""
        default = self.board.default_vals[index]
        return default if default is not None else self.board.entered_vals[index]

    def normalize_symbol(self, key: str) -> str | None:
        symbol = key.upper() if len(key) == 1 else key
        return symbol if symbol in self.board.possible else None

    def move(self, drow: int, dcol: int) -> bool:
        """Move the selection, clamped to the board edges."""
        last = self.board.side - 1
        row = min(max(self.row + drow, 0), last)
        col = min(max(self.col + dcol, 0), last)
        changed = (row, col) != (self.row, self.col)
        self.row, self.col = row, col
        return changed

    def enter(self, symbol: str) -> bool:
        """Enter a value (or toggle a candidate in candidate mode) at the selected cell."""
        index = self.selected
        if self.board.is_given(index):
            return False
        if self.candidate_mode:
            return self.toggle_candidate(symbol)
        if self.board.entered_vals[index] == symbol:
            return False
        self.board.entered_vals[index] = symbol
        self._sync_timer()
        return True

    def clear(self) -> bool:
        """Remove the player's entry from the selected cell."""
        index = self.selected
        if self.board.is_given(index) or self.board.entered_vals[index] is None:
            return False
        self.board.entered_vals[index] = None
        self._sync_timer()
        return True

    def toggle_candidate(self, symbol: str) -> bool:
        index = self.selected
        if self.board.is_given(index):
            return False
        position = self.board.possible.index(symbol)
        marks = list(self.candidates[index])
        marks[position] = " " if marks[position] == symbol else symbol
        self.candidates[index] = "".join(marks)
        return True

    def toggle_candidate_mode(self) -> bool:
        self.candidate_mode = not self.candidate_mode
        return True

    def toggle_error_mode(self) -> bool:
        self.error_mode = not self.error_mode
        return True

    def hint(self) -> bool:
        """Fill the selected cell with its solution value."""
        index = self.selected
        solution = self.board.board[index]
        if self.board.is_given(index) or self.board.entered_vals[index] == solution:
            return False
        self.board.entered_vals[index] = solution
        self.candidates[index] = " " * self.board.side
        logger.debug("Hint revealed cell %d", index)
        self._sync_timer()
        return True

    def wrong_cells(self) -> list[int]:
        """Indices of entered values that differ from the solution (only in error mode)."""
        if not self.error_mode:
            return []
        return [
            i
            for i, (entered, solution) in enumerate(zip(self.board.entered_vals, self.board.board))
            if entered is not None and not self.board.is_given(i) and entered != solution
        ]

    def _sync_timer(self) -> None:
        """Stop the timer on a solved board and restart it once the board is unsolved again."""
        if not self.is_solved:
            self.resume()
        elif self.running:
            self.pause()
            logger.info("Board solved in %.1f seconds", self.elapsed)


def handle_key(session: GameSession, key: str) -> bool:
    """
    Apply one key press to a session.

    Args:
        session: The session to update.
        key: Key name ("ArrowUp", "Backspace", ...) or a single symbol.

    Returns:
        Whether the session state changed. Unknown keys are ignored.
    """
    if key in MOVES:
        return session.move(*MOVES[key])
    if key in CLEAR_KEYS:
        return session.clear()
    symbol = session.normalize_symbol(key)
    if symbol is not None:
        return session.enter(symbol)
    return False


def new_game(
    base: int,
    seed: int | None = None,
    num_shuffles: int = NUM_SHUFFLES,
    corpus: Corpus | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> GameSession:
    """Start a session on a freshly generated board."""
    board = generate_board(base, seed=seed, num_shuffles=num_shuffles, corpus=corpus)
    return GameSession(board=board, clock=clock)
