"""
Puzzle source capability and deterministic item generation.

A puzzle source is any callable ``source(difficulty, rng)`` returning a
mapping with 'puzzle' and 'solution' grids. Sources are injected by the
caller or resolved from a "module:function" reference.
"""

import hashlib
import importlib
import random
import time
from typing import Callable, List, Mapping, Optional, Sequence

from .config import GENERATOR_SIZE
from .exceptions import InvalidGrid, MissingCapability
from .models import PuzzleItem
from .validators import GridValidator

PuzzleSource = Callable[[str, 'SeededRandom'], Mapping[str, Sequence[int]]]


class SeededRandom:
    """
    Deterministic pseudo-random source seeded from an arbitrary string.

    The seed string is hashed with SHA-256, so the same seed yields the same
    sequence on every platform and Python version.
    """

    def __init__(self, seed: str):
        self.seed = seed
        digest = hashlib.sha256(seed.encode('utf-8')).digest()
        self.random = random.Random(int.from_bytes(digest[:8], 'big'))

    @classmethod
    def from_seed_string(cls, seed: Optional[str] = None) -> 'SeededRandom':
        """Create a source from a seed string, or from the current time if empty."""
        if seed is None or not seed.strip():
            seed = str(int(time.time() * 1000))
        return cls(seed.strip())

    def next(self) -> int:
        """Return the next 32-bit value."""
        return self.random.getrandbits(32)

    def shuffle(self, values: list):
        self.random.shuffle(values)

    def __repr__(self):
        return f"SeededRandom(seed='{self.seed}')"


def load_puzzle_source(reference: str) -> PuzzleSource:
    """
    Resolve a puzzle source from a "module:function" reference.

    Raises:
        MissingCapability: If the module or attribute cannot be found, or the
            attribute is not callable
    """
    if not reference or ':' not in reference:
        raise MissingCapability(reference or "", "expected 'module:function'")

    module_name, _, attr = reference.partition(':')
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise MissingCapability(reference, str(e)) from e

    source = getattr(module, attr, None)
    if source is None:
        raise MissingCapability(reference, f"module '{module_name}' has no attribute '{attr}'")
    if not callable(source):
        raise MissingCapability(reference, f"'{attr}' is not callable")
    return source


def generate_items(
    source: Optional[PuzzleSource],
    count: int,
    difficulty: str,
    seed: Optional[str] = None,
    size: int = GENERATOR_SIZE
) -> List[PuzzleItem]:
    """
    Generate puzzle items from a puzzle source.

    Each item gets its own generator seeded from the next value of the base
    generator and the item index, so one seed reproduces a whole booklet.

    Args:
        source: Puzzle source callable
        count: Number of items to generate
        difficulty: Difficulty label passed to the source
        seed: Seed string (current time if empty)
        size: Board size every generated grid must match

    Returns:
        List of PuzzleItem in generation order

    Raises:
        MissingCapability: If no source was provided
        InvalidGrid: If the source returns something other than a valid item
    """
    if source is None or not callable(source):
        raise MissingCapability(repr(source), "no puzzle source provided")

    base = SeededRandom.from_seed_string(seed)
    items = []
    for i in range(count):
        rng = SeededRandom(f"{base.next()}:{i}")
        generated = source(difficulty, rng)
        try:
            item = PuzzleItem(given=generated['puzzle'], solution=generated['solution'])
        except (TypeError, KeyError) as e:
            raise InvalidGrid(f"Puzzle source returned an invalid item #{i + 1}: {e!r}") from e

        validation = GridValidator.validate_item(item, size)
        if not validation.is_valid:
            raise InvalidGrid(
                f"Puzzle source returned an invalid item #{i + 1}: {validation.errors[0]}",
                validation.errors
            )
        items.append(item)
    return items
