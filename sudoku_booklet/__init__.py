"""
Sudoku booklet maker modules.

This package renders printable A4 booklets of Sudoku puzzles: a cover page,
one page per puzzle and an optional solutions section.
"""

__version__ = "1.0.0"
