"""Board generation: reference corpus, permutations, shuffling and assembly."""

from .base import (
    ALPHABET,
    RawBoard,
    get_possible,
    is_valid_grid,
    swap_bands,
    swap_cols,
    swap_rows,
    swap_stacks,
)
from .corpus import SUPPORTED_BASES, load_corpus, parse_reference, pick_reference
from .shuffle import NUM_SHUFFLES, random_shuffle, shuffle
from .sudoku import (
    Board,
    BoardGenerator,
    assemble_board,
    format_grid,
    generate_board,
    make_defaults,
    make_entered,
)

__all__ = [
    # Permutation engine
    "ALPHABET",
    "RawBoard",
    "get_possible",
    "is_valid_grid",
    "swap_rows",
    "swap_cols",
    "swap_bands",
    "swap_stacks",
    # Shuffling
    "NUM_SHUFFLES",
    "random_shuffle",
    "shuffle",
    # Corpus
    "SUPPORTED_BASES",
    "load_corpus",
    "pick_reference",
    "parse_reference",
    # Public boards
    "Board",
    "BoardGenerator",
    "assemble_board",
    "format_grid",
    "generate_board",
    "make_defaults",
    "make_entered",
]
