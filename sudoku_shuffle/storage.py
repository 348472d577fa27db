"""Persist game sessions as JSON blobs stored under fixed keys."""

import json
import logging
import time
from pathlib import Path
from typing import Any, Callable

from sudoku_shuffle.data import Board
from sudoku_shuffle.errors import SessionStateError
from sudoku_shuffle.session import GameSession

logger = logging.getLogger(__name__)

BOARD_KEY = "board"
ENTERED_KEY = "enteredVals"
CANDIDATES_KEY = "candidates"
TIME_KEY = "time"
KEYS: tuple[str, ...] = (BOARD_KEY, ENTERED_KEY, CANDIDATES_KEY, TIME_KEY)


class SessionStore:
    """
    Directory-backed key/value store for one game session.

    Each key is written to `<directory>/<key>.json`, so the board, the
    player's entries, the candidate marks and the elapsed time can be read
    back independently.
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def write(self, key: str, value: Any) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        with open(self._path(key), "w") as f:
            json.dump(value, f)

    def read(self, key: str) -> Any | None:
        """Return the decoded blob for `key`, or None if nothing is stored."""
        path = self._path(key)
        if not path.exists():
            return None
        with open(path) as f:
            try:
                return json.load(f)
            except json.JSONDecodeError as e:
                raise SessionStateError(f"{path}: {e}") from e

    def save(self, session: GameSession) -> None:
        """Write every part of a session."""
        self.write(BOARD_KEY, session.board.to_dict())
        self.write(ENTERED_KEY, list(session.board.entered_vals))
        self.write(CANDIDATES_KEY, list(session.candidates))
        self.write(TIME_KEY, session.elapsed)
        logger.debug("Saved session to %s", self.directory)

    def load(self, clock: Callable[[], float] = time.monotonic) -> GameSession | None:
        """
        Rebuild the stored session.

        Returns:
            The session, or None if no board has been stored.
        """
        data = self.read(BOARD_KEY)
        if data is None:
            return None
        if not isinstance(data, dict):
            raise SessionStateError(f"{self._path(BOARD_KEY)}: expected a JSON object")
        board = Board.from_dict(data)
        size = len(board.board)

        entered = self.read(ENTERED_KEY)
        if entered is not None:
            if not isinstance(entered, list) or len(entered) != size:
                raise SessionStateError(f"stored entries must be a list of {size} values")
            board.entered_vals = list(entered)
            board.validate()

        candidates = self.read(CANDIDATES_KEY)
        if candidates is None:
            candidates = []
        elif (
            not isinstance(candidates, list)
            or len(candidates) != size
            or any(not isinstance(c, str) or len(c) != board.side for c in candidates)
        ):
            raise SessionStateError(f"stored candidates must be {size} strings of length {board.side}")

        elapsed = self.read(TIME_KEY) or 0.0
        if not isinstance(elapsed, (int, float)):
            raise SessionStateError(f"stored time must be a number, got {elapsed!r}")

        logger.debug("Loaded session from %s", self.directory)
        return GameSession(
            board=board,
            candidates=list(candidates),
            elapsed_offset=float(elapsed),
            clock=clock,
        )

    def clear(self) -> None:
        """Delete every stored blob."""
        for key in KEYS:
            self._path(key).unlink(missing_ok=True)
