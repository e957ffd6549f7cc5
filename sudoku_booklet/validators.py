"""
Validators for puzzle grids and booklet requests.

Grids are checked eagerly before any page is drawn, so a mismatched board
size or an out-of-range digit fails with a descriptive message instead of
producing a corrupted layout.
"""

from typing import Optional, Sequence, Tuple

from .config import BLOCK_SHAPES, DEFAULT_DIFFICULTY, GENERATOR_SIZE, MAX_COUNT, MIN_COUNT
from .models import Difficulty, GenerationRequest, PuzzleItem, ValidationResult


class GridValidator:
    """Validates grids and puzzle items against a board size."""

    @staticmethod
    def validate_grid(grid: Sequence[int], size: int, solved: bool = False) -> ValidationResult:
        """
        Validate one flat grid.

        Args:
            grid: Flat sequence of size*size digits (0 = blank)
            size: Board size the grid must match
            solved: If True, blanks are reported as errors

        Returns:
            ValidationResult with any errors
        """
        result = ValidationResult(is_valid=True)

        if size not in BLOCK_SHAPES:
            result.add_error(f"Unsupported board size: {size}")
            return result

        expected = size * size
        if len(grid) != expected:
            result.add_error(
                f"Grid has {len(grid)} cells, expected {expected} for a {size}x{size} board"
            )
            return result

        for i, value in enumerate(grid):
            row, col = divmod(i, size)
            if isinstance(value, bool) or not isinstance(value, int):
                result.add_error(f"Cell ({row + 1},{col + 1}) is not an integer: {value!r}")
            elif not 0 <= value <= size:
                result.add_error(f"Cell ({row + 1},{col + 1}) out of range 0-{size}: {value}")
            elif solved and value == 0:
                result.add_error(f"Cell ({row + 1},{col + 1}) is blank in a solution grid")

        return result

    @staticmethod
    def validate_item(item: PuzzleItem, size: int) -> ValidationResult:
        """
        Validate both grids of a puzzle item.

        Besides shape and range checks, every given digit must agree with the
        solution in the same cell.
        """
        result = ValidationResult(is_valid=True)
        result.merge(GridValidator.validate_grid(item.given, size), prefix="given: ")
        result.merge(GridValidator.validate_grid(item.solution, size, solved=True), prefix="solution: ")

        if result.is_valid:
            mismatches = [
                i for i, (g, s) in enumerate(zip(item.given, item.solution))
                if g and g != s
            ]
            if mismatches:
                row, col = divmod(mismatches[0], size)
                result.add_error(
                    f"{len(mismatches)} given digit(s) disagree with the solution, "
                    f"first at cell ({row + 1},{col + 1})"
                )

        return result


class RequestValidator:
    """Normalizes user requests for generated booklets."""

    @staticmethod
    def clamp_count(count: Optional[int]) -> int:
        """Clamp a requested puzzle count to the supported range."""
        if count is None:
            return MIN_COUNT
        return max(MIN_COUNT, min(MAX_COUNT, int(count)))

    @staticmethod
    def normalize_request(
        size: int,
        count: Optional[int],
        difficulty: Optional[str],
        seed: Optional[str] = None
    ) -> Tuple[GenerationRequest, ValidationResult]:
        """
        Normalize a generation request.

        The count is clamped to the supported range and any board size other
        than the generator's is coerced to it. Both produce warnings, never
        errors. An unknown difficulty is an error.

        Args:
            size: Requested board size
            count: Requested number of puzzles
            difficulty: 'easy', 'medium' or 'hard' (case-insensitive)
            seed: Optional seed string

        Returns:
            Tuple of (normalized request, validation result)

        Example:
            >>> request, result = RequestValidator.normalize_request(6, 0, "Easy")
            >>> request.size, request.count, request.difficulty
            (9, 1, <Difficulty.EASY: 'easy'>)
        """
        result = ValidationResult(is_valid=True)

        clamped = RequestValidator.clamp_count(count)
        if count is not None and clamped != count:
            result.add_warning(
                f"Puzzle count {count} adjusted to {clamped} (allowed range {MIN_COUNT}-{MAX_COUNT})"
            )

        try:
            normalized_difficulty = Difficulty((difficulty or DEFAULT_DIFFICULTY).strip().lower())
        except ValueError:
            normalized_difficulty = Difficulty(DEFAULT_DIFFICULTY)
            result.add_error(
                f"Invalid difficulty: '{difficulty}'. Must be one of: "
                f"{', '.join(d.value for d in Difficulty)}"
            )

        if size != GENERATOR_SIZE:
            result.add_warning(
                f"The generator currently produces {GENERATOR_SIZE}×{GENERATOR_SIZE} puzzles; "
                f"using {GENERATOR_SIZE}×{GENERATOR_SIZE} for this booklet."
            )

        request = GenerationRequest(
            count=clamped,
            difficulty=normalized_difficulty,
            seed=(seed or "").strip(),
            size=GENERATOR_SIZE
        )
        return request, result
