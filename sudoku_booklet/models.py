"""
Data models for the Sudoku booklet maker.

This module defines typed dataclasses for puzzles, booklet options and
validation results used throughout the codebase.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .config import (
    DEFAULT_PUZZLE_FOOTER,
    DEFAULT_SOLUTION_FOOTER,
    DEFAULT_COUNT,
    DEFAULT_DIFFICULTY,
    GENERATOR_SIZE,
)
from .exceptions import UnsupportedSize


class BoardSize(Enum):
    """Board sizes with a defined block shape."""
    FOUR = 4
    SIX = 6
    NINE = 9

    @classmethod
    def from_value(cls, size: int) -> 'BoardSize':
        """Look up a board size, raising UnsupportedSize for unknown values."""
        try:
            return cls(size)
        except ValueError:
            raise UnsupportedSize(size) from None


class Difficulty(Enum):
    """Difficulty labels understood by puzzle sources."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


Grid = Tuple[int, ...]


@dataclass(frozen=True)
class PuzzleItem:
    """
    One puzzle of the booklet.

    Pairs the grid printed on the puzzle page (zeros are blanks) with its
    fully filled solution. Items are never modified after creation.
    """
    given: Grid
    solution: Grid

    def __post_init__(self):
        """Store grids as tuples; cell values are checked by GridValidator."""
        object.__setattr__(self, 'given', tuple(self.given))
        object.__setattr__(self, 'solution', tuple(self.solution))

    @classmethod
    def from_dict(cls, data: dict) -> 'PuzzleItem':
        """Create from a dictionary with 'given' (or 'puzzle') and 'solution' keys."""
        given = data.get('given', data.get('puzzle'))
        if given is None:
            raise ValueError("puzzle item needs a 'given' grid")
        return cls(given=given, solution=data.get('solution', given))

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {'given': list(self.given), 'solution': list(self.solution)}


@dataclass
class BookletOptions:
    """
    Presentation options for one booklet.

    These options control the captions and the solutions section.
    """
    title: str
    subtitle: str = ""
    size: int = GENERATOR_SIZE
    include_solutions: bool = True
    puzzle_footer: str = DEFAULT_PUZZLE_FOOTER
    solution_footer: str = DEFAULT_SOLUTION_FOOTER

    def __post_init__(self):
        """Validate options."""
        BoardSize.from_value(self.size)
        if not self.title or not self.title.strip():
            raise ValueError("title cannot be empty")


@dataclass
class GenerationRequest:
    """
    A normalized request for generated puzzles.

    Produced by RequestValidator.normalize_request, which clamps the count
    and coerces the board size before any puzzle is generated.
    """
    count: int = DEFAULT_COUNT
    difficulty: Difficulty = Difficulty(DEFAULT_DIFFICULTY)
    seed: str = ""
    size: int = GENERATOR_SIZE

    def __repr__(self):
        return (f"GenerationRequest(count={self.count}, difficulty='{self.difficulty.value}', "
                f"seed='{self.seed}', size={self.size})")


@dataclass
class ValidationResult:
    """
    Result of validation checks.

    Contains validation status, errors, and warnings that can be
    displayed to the user.
    """
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str):
        """Add an error message and mark as invalid."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str):
        """Add a warning message."""
        self.warnings.append(message)

    def merge(self, other: 'ValidationResult', prefix: str = ""):
        """Fold another result into this one, optionally prefixing its messages."""
        for message in other.errors:
            self.add_error(f"{prefix}{message}")
        for message in other.warnings:
            self.add_warning(f"{prefix}{message}")

    def has_issues(self) -> bool:
        """Check if there are any errors or warnings."""
        return len(self.errors) > 0 or len(self.warnings) > 0

    def get_summary(self) -> str:
        """Get a human-readable summary of validation results."""
        if self.is_valid and not self.warnings:
            return "Validation passed with no issues"

        parts = []
        if self.errors:
            parts.append(f"{len(self.errors)} error(s)")
        if self.warnings:
            parts.append(f"{len(self.warnings)} warning(s)")

        return ", ".join(parts)

    def __repr__(self):
        return f"ValidationResult(is_valid={self.is_valid}, {self.get_summary()})"


@dataclass
class BookletResult:
    """Outcome of writing a booklet to disk."""
    output_path: Path
    page_count: int
    items: Sequence[PuzzleItem] = ()
    warnings: List[str] = field(default_factory=list)
    seed: Optional[str] = None

    def __repr__(self):
        return f"BookletResult(path='{self.output_path}', pages={self.page_count})"
