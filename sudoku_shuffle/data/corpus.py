"""Loading and selecting reference boards.

The corpus maps each supported base to a list of reference instances. An
instance is either a JSON string or an already decoded mapping of the form::

    {"board": {"n": 3, "board": ["1", "2", ...], "mask": [true, false, ...]}}

Mask flags may be JSON booleans or the strings "true"/"false". Sudoku
correctness of an instance is trusted; only its shape is checked.
"""

import json
import logging
from collections.abc import Mapping, Sequence
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import numpy as np

from ..errors import CorpusExhaustedError, MalformedReferenceError, UnsupportedBaseError
from .base import RawBoard, get_possible

logger = logging.getLogger(__name__)

SUPPORTED_BASES: tuple[int, ...] = (2, 3, 4, 5)

Corpus = Mapping[int, Sequence[Any]]


def _decode_corpus(raw: Any, source: str) -> dict[int, list[Any]]:
    if not isinstance(raw, Mapping):
        raise MalformedReferenceError(f"{source}: corpus must be a mapping of base to instances")
    corpus: dict[int, list[Any]] = {}
    for key, instances in raw.items():
        try:
            base = int(key)
        except (TypeError, ValueError) as e:
            raise MalformedReferenceError(f"{source}: invalid base key {key!r}") from e
        if not isinstance(instances, list):
            raise MalformedReferenceError(f"{source}: instances for base {base} must be a list")
        corpus[base] = instances
    return corpus


def load_corpus(path: str | Path | None = None) -> dict[int, list[Any]]:
    """
    Load a reference corpus from a JSON file.

    Args:
        path: Corpus file. If None, the corpus bundled with the package is used.

    Returns:
        Mapping from base to its list of serialized reference instances.
    """
    if path is None:
        return _bundled_corpus()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Corpus file not found: {path}")
    with open(path) as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise MalformedReferenceError(f"{path}: {e}") from e
    corpus = _decode_corpus(raw, str(path))
    logger.debug("Loaded corpus from %s with bases %s", path, sorted(corpus))
    return corpus


@lru_cache(maxsize=1)
def _bundled_corpus() -> dict[int, list[Any]]:
    text = resources.files(__package__).joinpath("reference").joinpath("corpus.json").read_text()
    corpus = _decode_corpus(json.loads(text), "bundled corpus")
    logger.debug("Loaded bundled corpus with bases %s", sorted(corpus))
    return corpus


def pick_reference(corpus: Corpus, base: int, rng: np.random.Generator) -> Any:
    """Choose one reference instance for `base` uniformly at random."""
    if base not in SUPPORTED_BASES:
        raise UnsupportedBaseError(base, SUPPORTED_BASES)
    instances = corpus.get(base) or []
    if len(instances) == 0:
        raise CorpusExhaustedError(base)
    index = int(rng.integers(len(instances)))
    logger.debug("Picked reference %d of %d for base %d", index, len(instances), base)
    return instances[index]


def _parse_flag(value: Any, index: int) -> bool:
    if isinstance(value, bool):
        return value
    if value in ("true", "false"):
        return value == "true"
    raise MalformedReferenceError(f"mask entry {index} is not boolean-like: {value!r}")


def parse_reference(instance: Any, base: int) -> RawBoard:
    """
    Parse a serialized reference instance into a RawBoard.

    Args:
        instance: JSON string or decoded mapping.
        base: The base the instance is expected to have.

    Returns:
        The reference board and mask.
    """
    if isinstance(instance, (str, bytes)):
        try:
            instance = json.loads(instance)
        except json.JSONDecodeError as e:
            raise MalformedReferenceError(f"reference instance is not valid JSON: {e}") from e

    try:
        payload = instance["board"]
        n = payload["n"]
        cells = payload["board"]
        flags = payload["mask"]
    except (KeyError, TypeError) as e:
        raise MalformedReferenceError(f"reference instance is missing field {e}") from e

    if n != base:
        raise MalformedReferenceError(f"reference instance has base {n!r}, expected {base}")

    size = base**4
    if not isinstance(cells, list) or len(cells) != size:
        raise MalformedReferenceError(f"board must be a list of {size} symbols for base {base}")
    if not isinstance(flags, list) or len(flags) != size:
        raise MalformedReferenceError(f"mask must be a list of {size} flags for base {base}")

    possible = get_possible(base)
    symbols = [str(c) for c in cells]
    unknown = sorted(set(symbols) - set(possible))
    if unknown:
        raise MalformedReferenceError(f"board uses symbols outside {possible!r}: {unknown}")

    mask = [_parse_flag(flag, i) for i, flag in enumerate(flags)]
    return RawBoard.from_flat(base, symbols, mask)
