"""Exceptions raised by board generation and game sessions."""


class SudokuError(ValueError):
    """Base class for all sudoku-shuffle errors."""


class UnsupportedBaseError(SudokuError):
    """Requested base has no place in the supported set."""

    def __init__(self, base: object, supported: tuple[int, ...]):
        self.base = base
        self.supported = supported
        super().__init__(
            f"Unsupported base {base!r}; expected one of {', '.join(map(str, supported))}"
        )


class CorpusExhaustedError(SudokuError):
    """The corpus holds no reference instances for a supported base."""

    def __init__(self, base: int):
        self.base = base
        super().__init__(f"No reference boards available for base {base}")


class MalformedReferenceError(SudokuError):
    """A reference instance could not be parsed or does not match its base."""


class SessionStateError(SudokuError):
    """Persisted session state could not be decoded."""
