"""
Booklet Service - High-level booklet generation operations.

This service normalizes requests, loads the puzzle source, renders the
booklet and writes the finished PDF to disk.
"""

import json
from pathlib import Path
from typing import List, Optional, Sequence

from pypdf import PdfReader

from ..config import (
    DEFAULT_GENERATOR,
    DEFAULT_PUZZLE_FOOTER,
    DEFAULT_SOLUTION_FOOTER,
    DEFAULT_SUBTITLE,
    DEFAULT_TITLE,
    ITEMS_OUTPUT_NAME_PATTERN,
    OUTPUT_NAME_PATTERN,
)
from ..exceptions import BookletError, InvalidGrid
from ..generator import PuzzleSource, SeededRandom, generate_items, load_puzzle_source
from ..models import BookletOptions, BookletResult, PuzzleItem
from ..renderer import build_booklet
from ..validators import RequestValidator


class BookletService:
    """
    High-level service for booklet operations.

    Coordinates request normalization, puzzle generation and rendering, and
    writes the output only once the whole document has been built.
    """

    def __init__(self, puzzle_source: Optional[PuzzleSource] = None,
                 generator_reference: str = DEFAULT_GENERATOR):
        """
        Initialize the service.

        Args:
            puzzle_source: Puzzle source callable. If None, it is resolved
                          from generator_reference on first use.
            generator_reference: "module:function" reference of the source
        """
        self._puzzle_source = puzzle_source
        self.generator_reference = generator_reference

    def get_puzzle_source(self) -> PuzzleSource:
        """
        Return the puzzle source, loading it if needed.

        Raises:
            MissingCapability: If the source cannot be resolved
        """
        if self._puzzle_source is None:
            self._puzzle_source = load_puzzle_source(self.generator_reference)
        return self._puzzle_source

    def generate_booklet(
        self,
        count: int,
        difficulty: str,
        seed: Optional[str] = None,
        size: int = 9,
        include_solutions: bool = True,
        output_name: Optional[str] = None,
        output_folder: str = "",
        title: Optional[str] = None,
        subtitle: Optional[str] = None,
        puzzle_footer: str = DEFAULT_PUZZLE_FOOTER,
        solution_footer: str = DEFAULT_SOLUTION_FOOTER
    ) -> BookletResult:
        """
        Generate puzzles and write a booklet PDF.

        Args:
            count: Number of puzzles (clamped to 1-30)
            difficulty: 'easy', 'medium' or 'hard'
            seed: Optional seed string for reproducible booklets
            size: Requested board size (coerced to 9 with a warning)
            include_solutions: Append the solutions section
            output_name: File name without extension
                        (default: booklet-sudoku-9x9-<difficulty>)
            output_folder: Output directory (default: current directory)

        Returns:
            BookletResult with the output path, page count and warnings

        Raises:
            ValueError: If the difficulty is unknown
            MissingCapability: If the puzzle source is not available
        """
        request, validation = RequestValidator.normalize_request(size, count, difficulty, seed)
        if not validation.is_valid:
            raise ValueError("; ".join(validation.errors))

        # Resolve the source before drawing anything
        source = self.get_puzzle_source()

        # Resolve a time-based seed here so it can be reported for reprints
        seed = SeededRandom.from_seed_string(request.seed).seed
        items = generate_items(source, request.count, request.difficulty.value, seed)

        options = BookletOptions(
            title=title or DEFAULT_TITLE.format(size=request.size),
            subtitle=subtitle if subtitle is not None else DEFAULT_SUBTITLE.format(difficulty=request.difficulty.value),
            size=request.size,
            include_solutions=include_solutions,
            puzzle_footer=puzzle_footer,
            solution_footer=solution_footer
        )

        name = output_name or OUTPUT_NAME_PATTERN.format(size=request.size, difficulty=request.difficulty.value)
        result = self.write_booklet(items, options, self._output_path(output_folder, name))
        result.warnings.extend(validation.warnings)
        result.seed = seed
        return result

    def render_items_file(
        self,
        items_path: Path,
        include_solutions: bool = True,
        output_name: Optional[str] = None,
        output_folder: str = "",
        title: Optional[str] = None,
        subtitle: str = "",
        puzzle_footer: str = DEFAULT_PUZZLE_FOOTER,
        solution_footer: str = DEFAULT_SOLUTION_FOOTER
    ) -> BookletResult:
        """
        Render pre-made puzzles stored in a JSON file.

        Unlike generated booklets, these may use any supported board size.

        Raises:
            ValueError: If the file doesn't exist or is not valid JSON
            InvalidGrid: If any puzzle does not match the board size
        """
        size, items = self.load_items(items_path)
        options = BookletOptions(
            title=title or DEFAULT_TITLE.format(size=size),
            subtitle=subtitle,
            size=size,
            include_solutions=include_solutions,
            puzzle_footer=puzzle_footer,
            solution_footer=solution_footer
        )
        name = output_name or ITEMS_OUTPUT_NAME_PATTERN.format(size=size)
        return self.write_booklet(items, options, self._output_path(output_folder, name))

    @staticmethod
    def load_items(items_path: Path):
        """
        Load a puzzle file.

        The file holds {"size": 6, "items": [{"given": [...], "solution": [...]}]};
        size defaults to 9.

        Returns:
            Tuple of (board size, list of PuzzleItem)
        """
        if not items_path.exists():
            raise ValueError(f"Puzzle file not found: {items_path}")

        try:
            with open(items_path, encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid puzzle file {items_path}: {e}") from e

        if isinstance(data, list):
            data = {'items': data}

        try:
            size = int(data.get('size', 9))
            items = [PuzzleItem.from_dict(entry) for entry in data.get('items', [])]
        except (TypeError, ValueError, AttributeError) as e:
            raise InvalidGrid(f"Invalid puzzle file {items_path}: {e}") from e

        return size, items

    def write_booklet(self, items: Sequence[PuzzleItem], options: BookletOptions, output_path: Path) -> BookletResult:
        """
        Render a booklet and write it to output_path.

        The file is only written after the document has been finalized, so a
        failure never leaves a partial PDF behind.
        """
        try:
            data = build_booklet(items, options)
        except BookletError:
            raise
        except Exception as e:
            raise RuntimeError(f"Booklet rendering failed: {str(e)}") from e

        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'wb') as f:
            f.write(data)

        return BookletResult(
            output_path=output_path,
            page_count=self.count_pages(output_path),
            items=list(items)
        )

    @staticmethod
    def count_pages(pdf_path: Path) -> int:
        """Count the pages of a written PDF."""
        if not pdf_path.exists():
            raise ValueError(f"PDF file not found: {pdf_path}")
        return len(PdfReader(str(pdf_path)).pages)

    @staticmethod
    def page_texts(pdf_path: Path) -> List[str]:
        """Extract the text of every page of a written PDF."""
        if not pdf_path.exists():
            raise ValueError(f"PDF file not found: {pdf_path}")
        return [page.extract_text() or "" for page in PdfReader(str(pdf_path)).pages]

    @staticmethod
    def _output_path(output_folder: str, name: str) -> Path:
        if not name.lower().endswith('.pdf'):
            name = f"{name}.pdf"
        return Path(output_folder or ".") / name
