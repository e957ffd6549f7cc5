"""
Pytest configuration and fixtures.
"""

import pytest

from sudoku_booklet.models import PuzzleItem


def _pattern_solution(size, rows, cols):
    """Build a valid solved grid for a board with rows x cols blocks."""
    return [
        (r * cols + r // rows + c) % size + 1
        for r in range(size)
        for c in range(size)
    ]


SOLUTION_9 = _pattern_solution(9, 3, 3)
SOLUTION_6 = _pattern_solution(6, 2, 3)
SOLUTION_4 = _pattern_solution(4, 2, 2)


class RecordingSurface:
    """Stand-in for a reportlab canvas that records drawing calls."""

    def __init__(self):
        self.lines = []
        self.glyphs = []
        self.texts = []
        self.pages = 0
        self.line_width = None
        self.font = None

    def setStrokeColorRGB(self, r, g, b):
        self.stroke = (r, g, b)

    def setFillColorRGB(self, r, g, b):
        self.fill = (r, g, b)

    def setLineWidth(self, width):
        self.line_width = width

    def setFont(self, name, size):
        self.font = (name, size)

    def line(self, x1, y1, x2, y2):
        self.lines.append((x1, y1, x2, y2, self.line_width))

    def drawCentredString(self, x, y, text):
        self.glyphs.append((x, y, text, self.font))

    def drawString(self, x, y, text):
        self.texts.append((x, y, text, self.font))

    def showPage(self):
        self.pages += 1

    def horizontal_lines(self):
        return [line for line in self.lines if line[1] == line[3]]

    def vertical_lines(self):
        return [line for line in self.lines if line[0] == line[2]]


@pytest.fixture
def surface():
    """Recording drawing surface."""
    return RecordingSurface()


@pytest.fixture
def solution_9():
    return list(SOLUTION_9)


@pytest.fixture
def given_9():
    """9x9 given grid with 30 blanks."""
    return [
        0 if i % 3 == 0 or i in (1, 4, 7) else v
        for i, v in enumerate(SOLUTION_9)
    ]


@pytest.fixture
def item_9(given_9, solution_9):
    return PuzzleItem(given=given_9, solution=solution_9)


@pytest.fixture
def item_6():
    given = [0 if i % 2 == 0 else v for i, v in enumerate(SOLUTION_6)]
    return PuzzleItem(given=given, solution=SOLUTION_6)


@pytest.fixture
def item_4():
    given = [0 if i % 3 == 0 else v for i, v in enumerate(SOLUTION_4)]
    return PuzzleItem(given=given, solution=SOLUTION_4)


@pytest.fixture
def stub_source():
    """
    Deterministic puzzle source.

    Relabels the digits of a fixed solution with a permutation drawn from
    the generator it receives, and blanks every third cell.
    """
    calls = []

    def source(difficulty, rng):
        calls.append(difficulty)
        digits = list(range(1, 10))
        rng.shuffle(digits)
        solution = [digits[v - 1] for v in SOLUTION_9]
        puzzle = [0 if i % 3 == 0 else v for i, v in enumerate(solution)]
        return {'puzzle': puzzle, 'solution': solution}

    source.calls = calls
    return source
