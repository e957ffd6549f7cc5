"""
Centralized configuration and constants for the Sudoku booklet maker.

This module contains every layout value used when drawing pages, making it
easy to adjust sizes, fonts and captions in one place.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from reportlab.lib.pagesizes import A4

from .exceptions import UnsupportedSize


# Page geometry in points (72 points per inch), A4 portrait
PAGE_SIZE: Tuple[float, float] = A4
PAGE_WIDTH, PAGE_HEIGHT = PAGE_SIZE

# Positions are measured from the top-left corner of the page
MARGIN_X = 56
COVER_TITLE_Y = 120
COVER_SUBTITLE_Y = 152
DIVIDER_Y = 120
HEADER_Y = 70
GRID_TOP = 100
FOOTER_Y = 820

# Fonts (standard PDF fonts, no embedding needed)
FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"

COVER_TITLE_FONT_SIZE = 30
COVER_SUBTITLE_FONT_SIZE = 16
HEADER_FONT_SIZE = 16
DIVIDER_FONT_SIZE = 22
FOOTER_FONT_SIZE = 12

# Line weights in points (slightly heavier than usual for large-print booklets)
THIN_LINE = 1.2
THICK_LINE = 2.4

# Baseline offset for vertically centering digits, as a fraction of the font size
DIGIT_BASELINE_RATIO = 0.35

# Block shape (rows, columns) per supported board size
BLOCK_SHAPES: Dict[int, Tuple[int, int]] = {
    4: (2, 2),
    6: (2, 3),
    9: (3, 3),
}

# Cell size and digit font size (points) per supported board size
SIZE_LAYOUTS: Dict[int, Tuple[float, float]] = {
    4: (72, 28),
    6: (52, 26),
    9: (40, 24),
}

# The bundled puzzle source only produces 9x9 boards
GENERATOR_SIZE = 9

# Booklet request limits
MIN_COUNT = 1
MAX_COUNT = 30
DEFAULT_COUNT = 6

DEFAULT_DIFFICULTY = 'easy'

# Clues left on the board per difficulty by the bundled puzzle source
CLUES_BY_DIFFICULTY: Dict[str, int] = {
    'easy': 40,
    'medium': 32,
    'hard': 26,
}

DEFAULT_GENERATOR = 'sudoku_booklet.puzzles:generate_puzzle'

# Captions
DEFAULT_TITLE = "Sudoku {size}×{size} – Large Print"
DEFAULT_SUBTITLE = "High contrast · Large font · A4 · Difficulty: {difficulty}"
DEFAULT_PUZZLE_FOOTER = "Printable large-print puzzles"
DEFAULT_SOLUTION_FOOTER = "Solutions"
DIVIDER_LABEL = "Solutions"
PUZZLE_HEADER = "Puzzle #{index}"
SOLUTION_HEADER = "Solution – Puzzle #{index}"

OUTPUT_NAME_PATTERN = "booklet-sudoku-{size}x{size}-{difficulty}"
ITEMS_OUTPUT_NAME_PATTERN = "booklet-sudoku-{size}x{size}"


@dataclass(frozen=True)
class GridStyle:
    """
    Immutable drawing style for one board size.

    Every drawing operation receives its style explicitly, so no stroke
    width, color or font is carried over from one call to the next.
    """
    block_rows: int
    block_cols: int
    cell_size: float
    font_size: float
    thin: float = THIN_LINE
    thick: float = THICK_LINE
    ink: Tuple[float, float, float] = (0, 0, 0)
    font_name: str = FONT_REGULAR

    def __post_init__(self):
        """Validate dimensions."""
        if self.block_rows < 1 or self.block_cols < 1:
            raise ValueError("block dimensions must be >= 1")
        if self.cell_size <= 0 or self.font_size <= 0:
            raise ValueError("cell_size and font_size must be positive")
        if self.thin <= 0 or self.thick < self.thin:
            raise ValueError("line weights must be positive with thick >= thin")
        if len(self.ink) != 3 or not all(0 <= v <= 1 for v in self.ink):
            raise ValueError("ink must be an RGB triple with components in 0..1")


def block_shape(size: int) -> Tuple[int, int]:
    """Return (rows, columns) of a block for a supported board size."""
    try:
        return BLOCK_SHAPES[size]
    except KeyError:
        raise UnsupportedSize(size) from None


def style_for_size(size: int) -> GridStyle:
    """
    Build the grid style for a board size.

    Raises:
        UnsupportedSize: If the size is not one of 4, 6 or 9
    """
    rows, cols = block_shape(size)
    cell_size, font_size = SIZE_LAYOUTS[size]
    return GridStyle(block_rows=rows, block_cols=cols, cell_size=cell_size, font_size=font_size)
