"""Tests for board assembly and the public generation API."""

import json

import numpy as np
import pytest

from sudoku_shuffle.data import (
    Board,
    BoardGenerator,
    assemble_board,
    format_grid,
    generate_board,
    get_possible,
    make_defaults,
    make_entered,
)
from sudoku_shuffle.errors import (
    CorpusExhaustedError,
    MalformedReferenceError,
    SessionStateError,
    UnsupportedBaseError,
)

SCENARIO_DEFAULTS = [
    "1", "2", None, None,
    None, None, "1", "2",
    "2", None, None, "3",
    None, "3", "2", None,
]


def rows_cols_boxes(board: Board):
    """Yield the symbol sets of every row, column and box."""
    n, side = board.n, board.side
    grid = np.array(board.board).reshape(side, side)
    for i in range(side):
        yield set(grid[i, :])
        yield set(grid[:, i])
    for band in range(n):
        for stack in range(n):
            yield set(grid[band * n:(band + 1) * n, stack * n:(stack + 1) * n].ravel())


class TestAssembler:
    """Tests for turning raw boards into public boards."""

    def test_make_defaults(self):
        assert make_defaults(["1", "2"], [True, False]) == ["1", None]

    def test_make_entered(self):
        assert make_entered(["1", "2", "3"]) == [None, None, None]

    def test_assemble_scenario(self, scenario_raw):
        board = assemble_board(scenario_raw)
        assert board.n == 2
        assert board.possible == ("1", "2", "3", "4")
        assert board.default_vals == SCENARIO_DEFAULTS
        assert board.entered_vals == [None] * 16

    def test_entries_do_not_alias_solution(self, scenario_raw):
        """Writing player entries never changes the stored solution."""
        board = assemble_board(scenario_raw)
        solution = board.board
        board.entered_vals[2] = "1"
        board.default_vals[0] = "4"
        assert board.board == solution
        assert board.board[0] == "1"
        assert board.entered_vals is not board.default_vals

    def test_solution_and_mask_immutable(self, scenario_raw):
        board = assemble_board(scenario_raw)
        assert isinstance(board.board, tuple)
        assert isinstance(board.mask, tuple)

    def test_raw_board_untouched(self, scenario_raw):
        board = assemble_board(scenario_raw)
        board.entered_vals[3] = "4"
        assert scenario_raw.flat_cells()[3] == "4"
        assert scenario_raw.cells.flags.writeable


class TestGenerateBoard:
    """Tests for generate_board."""

    def test_scenario_without_shuffles(self, scenario_corpus):
        """With no shuffles the reference board comes back unchanged."""
        board = generate_board(2, num_shuffles=0, corpus=scenario_corpus)
        assert board.board == tuple("1234341221434321")
        assert board.default_vals == SCENARIO_DEFAULTS
        assert board.entered_vals == [None] * 16

    @pytest.mark.parametrize("seed", range(5))
    def test_scenario_with_shuffles(self, scenario_corpus, seed):
        """Rows, columns and 2x2 boxes all hold {1, 2, 3, 4} after shuffling."""
        board = generate_board(2, seed=seed, corpus=scenario_corpus)
        for group in rows_cols_boxes(board):
            assert group == {"1", "2", "3", "4"}

    @pytest.mark.parametrize("base", [2, 3, 4, 5])
    @pytest.mark.parametrize("seed", [0, 1])
    def test_validity(self, base, seed):
        """Generated boards are valid Sudoku solutions."""
        board = generate_board(base, seed=seed)
        symbols = set(get_possible(base))
        for group in rows_cols_boxes(board):
            assert group == symbols

    @pytest.mark.parametrize("base", [2, 3, 4, 5])
    def test_mask_alignment(self, base):
        """Clues appear exactly where the mask marks a given."""
        board = generate_board(base, seed=11)
        for value, given, default in zip(board.board, board.mask, board.default_vals):
            if given:
                assert default == value
            else:
                assert default is None

    @pytest.mark.parametrize("base", [2, 3, 4, 5])
    def test_sizing(self, base):
        board = generate_board(base, seed=5)
        size = base**4
        assert len(board.board) == size
        assert len(board.mask) == size
        assert len(board.default_vals) == size
        assert len(board.entered_vals) == size
        assert all(v is None for v in board.entered_vals)
        assert len(board.possible) == base * base

    @pytest.mark.parametrize("base", [1, 6, 0])
    def test_unsupported_base(self, base):
        with pytest.raises(UnsupportedBaseError):
            generate_board(base)

    def test_empty_corpus(self):
        with pytest.raises(CorpusExhaustedError):
            generate_board(3, corpus={3: []})

    def test_malformed_reference(self):
        """Broken reference data is reported, never repaired."""
        with pytest.raises(MalformedReferenceError):
            generate_board(2, corpus={2: ['{"board": {"n": 2, "board": [], "mask": []}}']})

    def test_seed_reproducible(self):
        first = generate_board(4, seed=123)
        second = generate_board(4, seed=123)
        assert first == second

    def test_fresh_board_each_call(self):
        """Successive generations are independent objects."""
        generator = BoardGenerator(seed=0)
        first = generator.generate(3)
        second = generator.generate(3)
        assert first is not second
        first.entered_vals[0] = "9"
        assert second.entered_vals[0] is None

    def test_corpus_not_mutated(self):
        generator = BoardGenerator(seed=0)
        snapshot = json.dumps(generator.corpus, sort_keys=True)
        for base in (2, 3, 4, 5):
            generator.generate(base)
        assert json.dumps(generator.corpus, sort_keys=True) == snapshot

    def test_negative_shuffles_rejected(self):
        with pytest.raises(ValueError):
            BoardGenerator(num_shuffles=-5)

    def test_injected_rng(self, scenario_corpus):
        board = generate_board(2, corpus=scenario_corpus, rng=np.random.default_rng(3))
        assert board.n == 2


class TestBoardSerialization:
    """Tests for Board.to_dict / Board.from_dict."""

    def test_to_dict_keys(self, scenario_raw):
        data = assemble_board(scenario_raw).to_dict()
        assert set(data) == {"n", "board", "mask", "possible", "defaultVals", "enteredVals"}
        assert data["defaultVals"] == SCENARIO_DEFAULTS

    def test_from_dict(self, scenario_raw):
        board = assemble_board(scenario_raw)
        board.entered_vals[2] = "3"
        restored = Board.from_dict(json.loads(json.dumps(board.to_dict())))
        assert restored == board

    def test_from_dict_missing_field(self, scenario_raw):
        data = assemble_board(scenario_raw).to_dict()
        del data["board"]
        with pytest.raises(SessionStateError):
            Board.from_dict(data)

    def test_from_dict_wrong_length(self, scenario_raw):
        data = assemble_board(scenario_raw).to_dict()
        data["defaultVals"] = data["defaultVals"][:-1]
        with pytest.raises(SessionStateError):
            Board.from_dict(data)


class TestFormatGrid:
    """Tests for text rendering."""

    def test_format_scenario_puzzle(self):
        text = format_grid(SCENARIO_DEFAULTS, 2)
        assert text.splitlines() == [
            " 1 2 | . . ",
            " . . | 1 2 ",
            "-----+-----",
            " 2 . | . 3 ",
            " . 3 | 2 . ",
        ]

    def test_format_wrong_length(self):
        with pytest.raises(ValueError):
            format_grid(["1"] * 15, 2)
