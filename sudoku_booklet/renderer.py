"""
Booklet renderer - draws Sudoku pages with reportlab.

Positions passed to the drawing functions are measured from the top-left
corner of the page, the way page layouts are usually described. They are
converted to reportlab's bottom-left origin right before drawing.
"""

import io
from typing import List, Sequence

from reportlab.pdfgen import canvas

from .config import (
    COVER_SUBTITLE_FONT_SIZE,
    COVER_SUBTITLE_Y,
    COVER_TITLE_FONT_SIZE,
    COVER_TITLE_Y,
    DIGIT_BASELINE_RATIO,
    DIVIDER_FONT_SIZE,
    DIVIDER_LABEL,
    DIVIDER_Y,
    FONT_BOLD,
    FONT_REGULAR,
    FOOTER_FONT_SIZE,
    FOOTER_Y,
    GRID_TOP,
    HEADER_FONT_SIZE,
    HEADER_Y,
    MARGIN_X,
    PAGE_HEIGHT,
    PAGE_SIZE,
    PUZZLE_HEADER,
    SOLUTION_HEADER,
    GridStyle,
    style_for_size,
)
from .exceptions import DocumentFinalized, InvalidGrid
from .models import BookletOptions, PuzzleItem, ValidationResult
from .validators import GridValidator


class BookletDocument:
    """
    Append-only paginated document backed by a reportlab canvas.

    The document is Open until finalize() is called, after which it is
    Finalized and no further pages can be added.
    """

    def __init__(self, title: str = "", author: str = ""):
        self._buffer = io.BytesIO()
        self.surface = canvas.Canvas(self._buffer, pagesize=PAGE_SIZE)
        if title:
            self.surface.setTitle(title)
        if author:
            self.surface.setAuthor(author)
        self._pages: List[str] = []
        self._data = None

    @property
    def is_finalized(self) -> bool:
        return self._data is not None

    @property
    def page_count(self) -> int:
        return len(self._pages)

    @property
    def page_labels(self) -> List[str]:
        """Labels of the pages appended so far, in order."""
        return list(self._pages)

    def begin_page(self, label: str):
        """
        Start a new page.

        The canvas already holds an empty first page, so only pages after
        the first one close the previous page.
        """
        if self.is_finalized:
            raise DocumentFinalized(f"Cannot add page '{label}': document is finalized")
        if self._pages:
            self.surface.showPage()
        self._pages.append(label)

    def finalize(self) -> bytes:
        """Close the last page and return the PDF bytes."""
        if self.is_finalized:
            raise DocumentFinalized("Document was already finalized")
        if self._pages:
            self.surface.showPage()
        self.surface.save()
        self._data = self._buffer.getvalue()
        return self._data

    def getvalue(self) -> bytes:
        if not self.is_finalized:
            raise RuntimeError("Document is still open; call finalize() first")
        return self._data


def _to_pdf_y(top: float) -> float:
    """Convert a distance from the top of the page to a reportlab y coordinate."""
    return PAGE_HEIGHT - top


def draw_grid(surface, x: float, top: float, size: int, cell_size: float, style: GridStyle):
    """
    Draw a size x size grid whose top-left corner is at (x, top).

    Draws size+1 horizontal and size+1 vertical lines. Lines on a block
    boundary use the thick weight, the remaining inner lines the thin one.
    The outer border is always thick.
    """
    width = cell_size * size
    y0 = _to_pdf_y(top)

    surface.setStrokeColorRGB(*style.ink)

    for i in range(size + 1):
        border = i == 0 or i == size
        row_weight = style.thick if border or i % style.block_rows == 0 else style.thin
        col_weight = style.thick if border or i % style.block_cols == 0 else style.thin

        surface.setLineWidth(row_weight)
        surface.line(x, y0 - i * cell_size, x + width, y0 - i * cell_size)

        surface.setLineWidth(col_weight)
        surface.line(x + i * cell_size, y0, x + i * cell_size, y0 - width)


def place_numbers(surface, x: float, top: float, size: int, cell_size: float,
                  grid: Sequence[int], style: GridStyle):
    """
    Draw every non-blank digit of the grid centered in its cell.

    Blank cells (0) are skipped.
    """
    surface.setFont(style.font_name, style.font_size)
    surface.setFillColorRGB(*style.ink)

    for r in range(size):
        for c in range(size):
            value = grid[r * size + c]
            if not value:
                continue
            cx = x + c * cell_size + cell_size / 2
            cy = _to_pdf_y(top + r * cell_size + cell_size / 2) - style.font_size * DIGIT_BASELINE_RATIO
            surface.drawCentredString(cx, cy, str(value))


def _draw_text(surface, text: str, top: float, font: str, font_size: float):
    surface.setFont(font, font_size)
    surface.setFillColorRGB(0, 0, 0)
    surface.drawString(MARGIN_X, _to_pdf_y(top), text)


def add_cover_page(document: BookletDocument, title: str, subtitle: str):
    """Append the cover page with a large bold title and a smaller subtitle."""
    document.begin_page("cover")
    surface = document.surface
    _draw_text(surface, title, COVER_TITLE_Y, FONT_BOLD, COVER_TITLE_FONT_SIZE)
    if subtitle:
        _draw_text(surface, subtitle, COVER_SUBTITLE_Y, FONT_REGULAR, COVER_SUBTITLE_FONT_SIZE)


def _add_grid_page(document: BookletDocument, header: str, size: int, grid: Sequence[int], footer: str):
    style = style_for_size(size)
    document.begin_page(header)
    surface = document.surface

    _draw_text(surface, header, HEADER_Y, FONT_BOLD, HEADER_FONT_SIZE)
    draw_grid(surface, MARGIN_X, GRID_TOP, size, style.cell_size, style)
    place_numbers(surface, MARGIN_X, GRID_TOP, size, style.cell_size, grid, style)
    if footer:
        _draw_text(surface, footer, FOOTER_Y, FONT_REGULAR, FOOTER_FONT_SIZE)


def add_puzzle_page(document: BookletDocument, size: int, given: Sequence[int], index: int, footer: str = ""):
    """Append a page with the 'Puzzle #N' header, the grid and its given digits."""
    _add_grid_page(document, PUZZLE_HEADER.format(index=index), size, given, footer)


def add_solution_page(document: BookletDocument, size: int, solution: Sequence[int], index: int, footer: str = ""):
    """Append a page with the 'Solution – Puzzle #N' header and the solved grid."""
    _add_grid_page(document, SOLUTION_HEADER.format(index=index), size, solution, footer)


def add_divider_page(document: BookletDocument, label: str = DIVIDER_LABEL):
    """Append the page that opens the solutions section."""
    document.begin_page(label)
    _draw_text(document.surface, label, DIVIDER_Y, FONT_BOLD, DIVIDER_FONT_SIZE)


def validate_items(items: Sequence[PuzzleItem], size: int) -> ValidationResult:
    """
    Check every item against the booklet's board size.

    Returns:
        ValidationResult collecting the errors of all items, prefixed with
        the puzzle number
    """
    result = ValidationResult(is_valid=True)
    if not items:
        result.add_error("At least one puzzle is required")
        return result

    for index, item in enumerate(items, start=1):
        result.merge(GridValidator.validate_item(item, size), prefix=f"Puzzle #{index} ")
    return result


def render_booklet(items: Sequence[PuzzleItem], options: BookletOptions) -> BookletDocument:
    """
    Render every page of a booklet into a finalized document.

    Pages are: cover, one page per puzzle in input order and, when
    options.include_solutions is set, one divider page followed by one
    solution page per puzzle in the same order.

    Raises:
        InvalidGrid: If items is empty or any grid does not match options.size
        UnsupportedSize: If options.size has no block shape
    """
    style_for_size(options.size)
    validation = validate_items(items, options.size)
    if not validation.is_valid:
        raise InvalidGrid(
            f"Cannot build booklet: {validation.get_summary()}; {validation.errors[0]}",
            validation.errors
        )

    document = BookletDocument(title=options.title)
    add_cover_page(document, options.title, options.subtitle)

    for index, item in enumerate(items, start=1):
        add_puzzle_page(document, options.size, item.given, index, options.puzzle_footer)

    if options.include_solutions:
        add_divider_page(document)
        for index, item in enumerate(items, start=1):
            add_solution_page(document, options.size, item.solution, index, options.solution_footer)

    document.finalize()
    return document


def build_booklet(items: Sequence[PuzzleItem], options: BookletOptions) -> bytes:
    """
    Build a complete booklet and return the PDF bytes.

    Nothing is returned until the whole document is finalized; if any step
    fails the partially drawn document is discarded.
    """
    return render_booklet(items, options).getvalue()
