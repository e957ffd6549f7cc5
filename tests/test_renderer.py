"""
Tests for the renderer module.
"""

import io

import pytest
from pypdf import PdfReader

from sudoku_booklet.config import DEFAULT_PUZZLE_FOOTER, FOOTER_Y, PAGE_HEIGHT, style_for_size
from sudoku_booklet.exceptions import DocumentFinalized, InvalidGrid, UnsupportedSize
from sudoku_booklet.models import BookletOptions, PuzzleItem
from sudoku_booklet.renderer import (
    BookletDocument,
    add_cover_page,
    add_puzzle_page,
    add_solution_page,
    build_booklet,
    draw_grid,
    place_numbers,
    render_booklet,
)


def _pages(data):
    return PdfReader(io.BytesIO(data)).pages


class TestDrawGrid:
    """Tests for draw_grid."""

    @pytest.mark.parametrize("size", [4, 6, 9])
    def test_draws_size_plus_one_lines_per_axis(self, surface, size):
        """Test that each axis gets exactly size+1 lines."""
        style = style_for_size(size)

        draw_grid(surface, 56, 100, size, style.cell_size, style)

        assert len(surface.horizontal_lines()) == size + 1
        assert len(surface.vertical_lines()) == size + 1

    @pytest.mark.parametrize("size", [4, 6, 9])
    def test_block_boundaries_are_thick(self, surface, size):
        """Test that lines on block boundaries use the thick weight."""
        style = style_for_size(size)
        cell = style.cell_size
        top = PAGE_HEIGHT - 100

        draw_grid(surface, 56, 100, size, cell, style)

        for x1, y1, x2, y2, width in surface.horizontal_lines():
            index = round((top - y1) / cell)
            expected = style.thick if index % style.block_rows == 0 else style.thin
            assert width == expected, f"row line {index}"

        for x1, y1, x2, y2, width in surface.vertical_lines():
            index = round((x1 - 56) / cell)
            expected = style.thick if index % style.block_cols == 0 else style.thin
            assert width == expected, f"column line {index}"

    def test_six_by_six_uses_different_row_and_column_blocks(self, surface):
        """Test that 6x6 boards split rows every 2 and columns every 3."""
        style = style_for_size(6)

        draw_grid(surface, 0, 0, 6, style.cell_size, style)

        row_weights = [line[4] for line in surface.horizontal_lines()]
        col_weights = [line[4] for line in surface.vertical_lines()]
        thick, thin = style.thick, style.thin
        assert row_weights == [thick, thin, thick, thin, thick, thin, thick]
        assert col_weights == [thick, thin, thin, thick, thin, thin, thick]

    def test_outer_border_always_thick(self, surface):
        """Test that the border is thick even when size is not a multiple of the block."""
        style = style_for_size(9)

        draw_grid(surface, 0, 0, 5, 40, style)

        horizontal = surface.horizontal_lines()
        vertical = surface.vertical_lines()
        assert horizontal[0][4] == style.thick
        assert horizontal[-1][4] == style.thick
        assert vertical[0][4] == style.thick
        assert vertical[-1][4] == style.thick

    def test_grid_spans_size_cells(self, surface):
        """Test that lines cover the full grid width."""
        style = style_for_size(9)

        draw_grid(surface, 56, 100, 9, 40, style)

        x1, y1, x2, y2, _ = surface.horizontal_lines()[0]
        assert x1 == 56
        assert x2 == 56 + 9 * 40
        assert y1 == PAGE_HEIGHT - 100


class TestPlaceNumbers:
    """Tests for place_numbers."""

    def test_one_glyph_per_non_blank_cell(self, surface, given_9):
        """Test that blanks are skipped and every digit is drawn once."""
        style = style_for_size(9)

        place_numbers(surface, 56, 100, 9, 40, given_9, style)

        assert len(surface.glyphs) == sum(1 for v in given_9 if v)
        assert len(surface.glyphs) == 81 - 30

    def test_empty_grid_draws_nothing(self, surface):
        """Test that an all-blank grid draws no glyphs."""
        style = style_for_size(4)

        place_numbers(surface, 0, 0, 4, 72, [0] * 16, style)

        assert surface.glyphs == []

    def test_digits_centered_in_cell(self, surface):
        """Test that a digit is centered horizontally and vertically."""
        style = style_for_size(4)
        grid = [0] * 16
        grid[5] = 3  # row 1, column 1

        place_numbers(surface, 10, 20, 4, 72, grid, style)

        x, y, text, font = surface.glyphs[0]
        assert text == "3"
        assert x == 10 + 72 + 36
        expected_center = PAGE_HEIGHT - (20 + 72 + 36)
        assert y == pytest.approx(expected_center - style.font_size * 0.35)
        assert font == (style.font_name, style.font_size)


class TestPageContent:
    """Tests for the captions and digits drawn on each kind of page."""

    def test_solution_page_draws_every_digit(self, surface, solution_9):
        """Test that a solution page draws all 81 digits of the solved grid."""
        document = BookletDocument()
        document.surface = surface

        add_solution_page(document, 9, solution_9, 1)

        assert len(surface.glyphs) == 81
        assert [glyph[2] for glyph in surface.glyphs] == [str(v) for v in solution_9]

    def test_footer_drawn_at_page_bottom(self, surface, given_9):
        """Test that a page footer is drawn on the footer line."""
        document = BookletDocument()
        document.surface = surface

        add_puzzle_page(document, 9, given_9, 1, footer="Weekly puzzles")

        footers = [text for text in surface.texts if text[2] == "Weekly puzzles"]
        assert len(footers) == 1
        assert footers[0][1] == PAGE_HEIGHT - FOOTER_Y

    def test_no_footer_when_empty(self, surface, given_9):
        """Test that an empty footer draws only the header."""
        document = BookletDocument()
        document.surface = surface

        add_puzzle_page(document, 9, given_9, 1)

        assert [text[2] for text in surface.texts] == ["Puzzle #1"]

    def test_cover_draws_title_and_subtitle(self, surface):
        """Test that the cover draws the title above the subtitle."""
        document = BookletDocument()
        document.surface = surface

        add_cover_page(document, "Garden Club", "Difficulty: medium")

        (_, title_y, title, _), (_, subtitle_y, subtitle, _) = surface.texts
        assert (title, subtitle) == ("Garden Club", "Difficulty: medium")
        assert title_y > subtitle_y

    def test_footers_in_rendered_booklet(self, item_9):
        """Test that puzzle and solution pages carry their own footers."""
        options = BookletOptions(
            title="Test",
            subtitle="Difficulty: medium",
            puzzle_footer="Weekly puzzles",
            solution_footer="Answer key"
        )

        texts = [page.extract_text() for page in _pages(build_booklet([item_9], options))]

        assert "Difficulty: medium" in texts[0]
        assert "Weekly puzzles" in texts[1] and "Answer key" not in texts[1]
        assert "Answer key" in texts[3] and "Weekly puzzles" not in texts[3]

    def test_default_puzzle_footer(self, item_9):
        """Test that the default footer is printed on puzzle pages."""
        options = BookletOptions(title="Test", include_solutions=False)

        texts = [page.extract_text() for page in _pages(build_booklet([item_9], options))]

        assert DEFAULT_PUZZLE_FOOTER in texts[1]


class TestBookletDocument:
    """Tests for BookletDocument state handling."""

    def test_pages_are_appended_in_order(self):
        """Test that page labels follow insertion order."""
        document = BookletDocument()

        add_cover_page(document, "Title", "Subtitle")
        add_puzzle_page(document, 4, [0] * 16, 1)

        assert document.page_labels == ["cover", "Puzzle #1"]
        assert document.page_count == 2

    def test_finalize_returns_pdf(self):
        """Test that finalize produces a PDF with every page."""
        document = BookletDocument()
        add_cover_page(document, "Title", "")

        data = document.finalize()

        assert data.startswith(b"%PDF")
        assert document.is_finalized
        assert len(_pages(data)) == 1

    def test_no_pages_after_finalize(self):
        """Test that finalized documents reject new pages."""
        document = BookletDocument()
        add_cover_page(document, "Title", "")
        document.finalize()

        with pytest.raises(DocumentFinalized):
            add_puzzle_page(document, 4, [0] * 16, 1)
        assert document.page_count == 1

    def test_finalize_only_once(self):
        """Test that finalizing twice is an error."""
        document = BookletDocument()
        add_cover_page(document, "Title", "")
        document.finalize()

        with pytest.raises(DocumentFinalized):
            document.finalize()

    def test_getvalue_requires_finalize(self):
        """Test that bytes are not available while the document is open."""
        with pytest.raises(RuntimeError, match="still open"):
            BookletDocument().getvalue()


class TestBuildBooklet:
    """Tests for build_booklet page sequencing."""

    def test_without_solutions(self, item_9):
        """Test that cover plus one page per puzzle is produced."""
        options = BookletOptions(title="Test", include_solutions=False)

        data = build_booklet([item_9, item_9, item_9], options)

        assert len(_pages(data)) == 1 + 3

    def test_with_solutions(self, item_9):
        """Test cover, puzzles, divider and solutions."""
        options = BookletOptions(title="Test", include_solutions=True)

        data = build_booklet([item_9, item_9, item_9], options)

        assert len(_pages(data)) == 1 + 3 + 1 + 3

    def test_single_item_with_solutions_page_order(self, item_9):
        """Test the four pages of a one-puzzle booklet."""
        options = BookletOptions(title="Large Print Sudoku", subtitle="Easy")

        document = render_booklet([item_9], options)

        assert document.page_labels == [
            "cover", "Puzzle #1", "Solutions", "Solution – Puzzle #1"
        ]
        texts = [page.extract_text() for page in _pages(document.getvalue())]
        assert "Large Print Sudoku" in texts[0]
        assert "Puzzle #1" in texts[1]
        assert "Solutions" in texts[2]
        assert "Solution" in texts[3] and "Puzzle #1" in texts[3]

    def test_puzzles_keep_input_order(self, item_9, solution_9):
        """Test that puzzle and solution pages are numbered in input order."""
        other = PuzzleItem(given=[0] * 81, solution=solution_9)
        options = BookletOptions(title="Test")

        document = render_booklet([item_9, other], options)

        assert document.page_labels == [
            "cover", "Puzzle #1", "Puzzle #2",
            "Solutions", "Solution – Puzzle #1", "Solution – Puzzle #2"
        ]

    @pytest.mark.parametrize("fixture_name, size", [("item_4", 4), ("item_6", 6), ("item_9", 9)])
    def test_supported_sizes(self, request, fixture_name, size):
        """Test that every supported board size renders."""
        item = request.getfixturevalue(fixture_name)
        options = BookletOptions(title="Test", size=size)

        data = build_booklet([item], options)

        assert len(_pages(data)) == 4

    def test_empty_items_rejected(self):
        """Test that a booklet needs at least one puzzle."""
        with pytest.raises(InvalidGrid, match="At least one puzzle"):
            build_booklet([], BookletOptions(title="Test"))

    def test_mismatched_size_rejected(self, item_4):
        """Test that grids must match the booklet's board size."""
        with pytest.raises(InvalidGrid) as exc_info:
            build_booklet([item_4], BookletOptions(title="Test", size=9))

        assert "expected 81" in str(exc_info.value)
        assert exc_info.value.errors

    def test_out_of_range_digit_rejected(self, solution_9):
        """Test that digits above the board size are rejected."""
        given = [0] * 81
        given[10] = 12
        item = PuzzleItem(given=given, solution=solution_9)

        with pytest.raises(InvalidGrid, match="out of range"):
            build_booklet([item], BookletOptions(title="Test"))

    def test_unsupported_size_rejected(self, item_9):
        """Test that options reject sizes without a block shape."""
        with pytest.raises(UnsupportedSize):
            BookletOptions(title="Test", size=5)

    def test_float_cell_rejected(self, solution_9):
        """Test that a non-integer digit fails validation instead of being truncated."""
        given = [0] * 81
        given[0] = 1.7
        item = PuzzleItem(given=given, solution=solution_9)

        with pytest.raises(InvalidGrid, match="not an integer"):
            build_booklet([item], BookletOptions(title="Test"))

    def test_float_solution_cell_rejected(self, given_9, solution_9):
        """Test that a float in the solution grid is reported as well."""
        solution = list(solution_9)
        solution[80] = float(solution[80])
        item = PuzzleItem(given=given_9, solution=solution)

        with pytest.raises(InvalidGrid) as exc_info:
            build_booklet([item], BookletOptions(title="Test"))

        assert any("solution: " in error and "not an integer" in error
                   for error in exc_info.value.errors)
