import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

import numpy as np

from ..errors import SessionStateError
from .base import RawBoard, get_possible
from .corpus import Corpus, load_corpus, parse_reference, pick_reference
from .shuffle import NUM_SHUFFLES, shuffle

logger = logging.getLogger(__name__)


@dataclass
class Board:
    """
    A playable board.

    `board` and `mask` are the solution and the given/hidden flags and never
    change after generation. `default_vals` holds the clues shown to the
    player and `entered_vals` the player's answers; both are independent lists
    owned by whoever plays the board.
    """

    n: int
    board: tuple[str, ...]
    mask: tuple[bool, ...]
    possible: tuple[str, ...]
    default_vals: list[str | None] = field(default_factory=list)
    entered_vals: list[str | None] = field(default_factory=list)

    @property
    def side(self) -> int:
        return self.n * self.n

    def is_given(self, index: int) -> bool:
        return self.mask[index]

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the public field names."""
        return {
            "n": self.n,
            "board": list(self.board),
            "mask": list(self.mask),
            "possible": list(self.possible),
            "defaultVals": list(self.default_vals),
            "enteredVals": list(self.entered_vals),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Board":
        """Rebuild a board serialized with `to_dict`."""
        try:
            n = int(data["n"])
            board = cls(
                n=n,
                board=tuple(data["board"]),
                mask=tuple(data["mask"]),
                possible=tuple(data.get("possible", get_possible(n))),
                default_vals=list(data["defaultVals"]),
                entered_vals=list(data.get("enteredVals") or [None] * len(data["board"])),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise SessionStateError(f"invalid serialized board: {e}") from e

        board.validate()
        return board

    def validate(self) -> None:
        """
        Check that the fields of a rebuilt board agree with each other.

        Raises:
            SessionStateError: If sizes, symbols or the clue/mask alignment
                are inconsistent.
        """
        n = self.n
        size = n**4
        lengths = {len(self.board), len(self.mask), len(self.default_vals), len(self.entered_vals)}
        if lengths != {size}:
            raise SessionStateError(f"serialized board for base {n} must have {size} cells everywhere")

        if self.possible != tuple(get_possible(n)):
            raise SessionStateError(f"symbols {self.possible!r} do not match base {n}")
        symbols = set(self.possible)

        if not all(isinstance(flag, bool) for flag in self.mask):
            raise SessionStateError("mask flags must be booleans")
        if not all(isinstance(v, str) and v in symbols for v in self.board):
            raise SessionStateError(f"solution uses symbols outside {''.join(self.possible)!r}")
        if self.default_vals != make_defaults(self.board, self.mask):
            raise SessionStateError("clues do not match the solution and mask")
        if not all(v is None or (isinstance(v, str) and v in symbols) for v in self.entered_vals):
            raise SessionStateError(f"entered values use symbols outside {''.join(self.possible)!r}")


def make_defaults(cells: Sequence[str], mask: Sequence[bool]) -> list[str | None]:
    """Clues shown to the player: the solution value where the mask marks a given, else None."""
    return [value if given else None for value, given in zip(cells, mask)]


def make_entered(cells: Sequence[str]) -> list[str | None]:
    """Empty answer slots aligned with the board."""
    return [None] * len(cells)


def assemble_board(raw: RawBoard) -> Board:
    """Convert a shuffled RawBoard into a public Board."""
    cells = raw.flat_cells()
    mask = raw.flat_mask()
    return Board(
        n=raw.n,
        board=tuple(cells),
        mask=tuple(mask),
        possible=tuple(get_possible(raw.n)),
        default_vals=make_defaults(cells, mask),
        entered_vals=make_entered(cells),
    )


class BoardGenerator:
    """
    Produces boards by shuffling reference boards from a corpus.

    The corpus is loaded once and only read afterwards. Each call to
    `generate` works on its own copy of the chosen reference board.
    """

    def __init__(
        self,
        corpus: Corpus | None = None,
        corpus_path: str | Path | None = None,
        num_shuffles: int = NUM_SHUFFLES,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ):
        """
        Initialize the generator.

        Args:
            corpus: Reference corpus. Loaded from `corpus_path` if None.
            corpus_path: Corpus JSON file. The bundled corpus is used if None.
            num_shuffles: Permutations applied to each board.
            seed: Seed for a fresh random generator (ignored if `rng` is given).
            rng: Random generator to draw from.
        """
        if num_shuffles < 0:
            raise ValueError(f"num_shuffles must be non-negative, got {num_shuffles}")
        self.corpus = corpus if corpus is not None else load_corpus(corpus_path)
        self.num_shuffles = num_shuffles
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def generate(self, base: int) -> Board:
        """Generate a fresh board of the given base."""
        instance = pick_reference(self.corpus, base, self.rng)
        raw = parse_reference(instance, base)
        raw = shuffle(raw, self.rng, self.num_shuffles)
        board = assemble_board(raw)
        logger.debug(
            "Generated base-%d board with %d givens",
            base,
            sum(board.mask),
        )
        return board


def generate_board(
    base: int,
    seed: int | None = None,
    num_shuffles: int = NUM_SHUFFLES,
    corpus: Corpus | None = None,
    rng: np.random.Generator | None = None,
) -> Board:
    """
    Generate a random playable board.

    Args:
        base: Board base n (the board is n^2 x n^2). Must be 2, 3, 4 or 5.
        seed: Seed for reproducible boards.
        num_shuffles: Number of random permutations to apply.
        corpus: Reference corpus; the bundled one if None.
        rng: Random generator; overrides `seed`.

    Returns:
        A new Board.
    """
    generator = BoardGenerator(corpus=corpus, num_shuffles=num_shuffles, seed=seed, rng=rng)
    return generator.generate(base)


def format_grid(values: Sequence[str | None], n: int, empty: str = ".") -> str:
    """Render a flat row-major sequence as text with box separators."""
    side = n * n
    if len(values) != side * side:
        raise ValueError(f"expected {side * side} values for base {n}, got {len(values)}")

    separator = "+".join(["-" * (2 * n + 1)] * n)
    lines = []
    for row in range(side):
        if row and row % n == 0:
            lines.append(separator)
        chunks = []
        for stack in range(n):
            start = row * side + stack * n
            cells = [v if v is not None else empty for v in values[start:start + n]]
            chunks.append(" " + " ".join(cells) + " ")
        lines.append("|".join(chunks))
    return "\n".join(lines)
