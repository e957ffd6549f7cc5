"""
Bundled 9x9 puzzle source.

Fills a board by randomized backtracking, then blanks cells in random order
while the puzzle keeps a unique solution, until the clue target for the
requested difficulty is reached.
"""

from typing import Dict, List, Optional

from .config import CLUES_BY_DIFFICULTY, DEFAULT_DIFFICULTY

SIZE = 9
BOX = 3
FULL = (1 << SIZE) - 1


def _box_index(r: int, c: int) -> int:
    return (r // BOX) * BOX + c // BOX


def _digits(mask: int) -> List[int]:
    return [d for d in range(1, SIZE + 1) if mask & (1 << (d - 1))]


class _Board:
    """Flat 9x9 board with bitmasks of the digits used per row, column and box."""

    def __init__(self, grid: Optional[List[int]] = None):
        self.cells = list(grid) if grid else [0] * (SIZE * SIZE)
        self.rows = [0] * SIZE
        self.cols = [0] * SIZE
        self.boxes = [0] * SIZE
        for i, d in enumerate(self.cells):
            if d:
                self._mark(i, d)

    def _mark(self, i: int, d: int):
        r, c = divmod(i, SIZE)
        bit = 1 << (d - 1)
        self.rows[r] |= bit
        self.cols[c] |= bit
        self.boxes[_box_index(r, c)] |= bit

    def place(self, i: int, d: int):
        self.cells[i] = d
        self._mark(i, d)

    def clear(self, i: int):
        d = self.cells[i]
        r, c = divmod(i, SIZE)
        bit = ~(1 << (d - 1))
        self.rows[r] &= bit
        self.cols[c] &= bit
        self.boxes[_box_index(r, c)] &= bit
        self.cells[i] = 0

    def candidates(self, i: int) -> int:
        r, c = divmod(i, SIZE)
        return FULL & ~(self.rows[r] | self.cols[c] | self.boxes[_box_index(r, c)])

    def most_constrained(self):
        """Return (index, mask) of the empty cell with fewest candidates, or None when full."""
        best = None
        best_count = SIZE + 1
        for i, d in enumerate(self.cells):
            if d:
                continue
            mask = self.candidates(i)
            count = bin(mask).count('1')
            if count < best_count:
                best, best_count = (i, mask), count
                if count <= 1:
                    break
        return best


def _fill(board: _Board, rng) -> bool:
    cell = board.most_constrained()
    if cell is None:
        return True
    i, mask = cell
    digits = _digits(mask)
    rng.shuffle(digits)
    for d in digits:
        board.place(i, d)
        if _fill(board, rng):
            return True
        board.clear(i)
    return False


def count_solutions(grid: List[int], limit: int = 2) -> int:
    """Count solutions of a 9x9 grid, stopping once limit is reached."""
    board = _Board(grid)
    found = 0

    def search() -> bool:
        nonlocal found
        cell = board.most_constrained()
        if cell is None:
            found += 1
            return found >= limit
        i, mask = cell
        for d in _digits(mask):
            board.place(i, d)
            stop = search()
            board.clear(i)
            if stop:
                return True
        return False

    search()
    return found


def generate_solution(rng) -> List[int]:
    """Generate a random, fully filled 9x9 grid."""
    board = _Board()
    _fill(board, rng)
    return board.cells


def generate_puzzle(difficulty: str, rng) -> Dict[str, List[int]]:
    """
    Generate one 9x9 puzzle with a unique solution.

    Args:
        difficulty: 'easy', 'medium' or 'hard'
        rng: SeededRandom (or anything with a shuffle(list) method)

    Returns:
        Dictionary with 'puzzle' (0 = blank) and 'solution' flat grids
    """
    target_clues = CLUES_BY_DIFFICULTY.get(difficulty, CLUES_BY_DIFFICULTY[DEFAULT_DIFFICULTY])
    solution = generate_solution(rng)
    puzzle = list(solution)

    order = list(range(SIZE * SIZE))
    rng.shuffle(order)
    clues = len(puzzle)
    for i in order:
        if clues <= target_clues:
            break
        digit = puzzle[i]
        puzzle[i] = 0
        if count_solutions(puzzle) != 1:
            puzzle[i] = digit
        else:
            clues -= 1

    return {'puzzle': puzzle, 'solution': solution}
