"""
sudoku-shuffle: randomized Sudoku boards from a corpus of reference puzzles.

Boards of base 2 to 5 are produced by applying validity-preserving row,
column, band and stack swaps to pre-solved, pre-masked reference boards.
"""

from sudoku_shuffle.config import Config, load_config, merge_configs
from sudoku_shuffle.data import (
    Board,
    BoardGenerator,
    RawBoard,
    generate_board,
    get_possible,
    is_valid_grid,
)
from sudoku_shuffle.errors import (
    CorpusExhaustedError,
    MalformedReferenceError,
    SessionStateError,
    SudokuError,
    UnsupportedBaseError,
)
from sudoku_shuffle.logging_utils import get_logger
from sudoku_shuffle.session import GameSession, handle_key, new_game
from sudoku_shuffle.storage import SessionStore

__version__ = "0.1.0"
__all__ = [
    # Generation
    "Board",
    "BoardGenerator",
    "RawBoard",
    "generate_board",
    "get_possible",
    "is_valid_grid",
    # Sessions
    "GameSession",
    "SessionStore",
    "handle_key",
    "new_game",
    # Errors
    "SudokuError",
    "UnsupportedBaseError",
    "CorpusExhaustedError",
    "MalformedReferenceError",
    "SessionStateError",
    # Configuration and logging
    "Config",
    "load_config",
    "merge_configs",
    "get_logger",
]
