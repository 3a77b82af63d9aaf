"""Letter grid: cell state, adjacency rules, generation and rendering."""

import logging
import random
import string
from typing import Iterable, Iterator, List, Optional

from pydantic import BaseModel, Field

from .errors import OutOfBounds, WordTooLong
from .models import Adjacency, Cell, Position

logger = logging.getLogger(__name__)


DEFAULT_GRID_SIZE = 6
MAX_PLACEMENT_ATTEMPTS = 100

# Up, right, down, left
_SNAKE_STEPS = [(-1, 0), (0, 1), (1, 0), (0, -1)]


def is_adjacent(a: Position, b: Position, adjacency: Adjacency = "8-way") -> bool:
    """Check whether two distinct positions touch under the adjacency policy."""
    dr = abs(a[0] - b[0])
    dc = abs(a[1] - b[1])
    if (dr, dc) == (0, 0):
        return False
    if adjacency == "4-way":
        return dr + dc == 1
    return dr <= 1 and dc <= 1


def _snake_path(
    length: int,
    size: int,
    rng: random.Random
) -> Optional[List[Position]]:
    """Try once to walk a random self-avoiding 4-directional path."""
    path = [Position(rng.randrange(size), rng.randrange(size))]

    while len(path) < length:
        row, col = path[-1]
        moves = [
            Position(row + dr, col + dc)
            for dr, dc in _SNAKE_STEPS
            if 0 <= row + dr < size and 0 <= col + dc < size
            and Position(row + dr, col + dc) not in path
        ]
        if not moves:
            return None
        path.append(rng.choice(moves))

    return path


class Grid(BaseModel):
    """
    Square or rectangular grid of letter cells.

    Cells are only mutated through `set_selected` and `mark_solved`, which the
    engine issues. A solved cell stays solved until a new grid is generated.

    Attributes:
        cells: Row-major cell matrix
        answer_path: Positions the target word was placed along, if generated
    """

    cells: List[List[Cell]]
    answer_path: List[Position] = Field(default_factory=list)

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> "Grid":
        """Build a grid from equal-length strings, one per row."""
        rows = [row.strip() for row in rows]
        if not rows or not rows[0]:
            raise ValueError("Grid must have at least one row and one column")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("All grid rows must have the same length")

        cells = [
            [Cell(letter=letter, position=Position(r, c)) for c, letter in enumerate(row)]
            for r, row in enumerate(rows)
        ]
        return cls(cells=cells)

    @classmethod
    def generate(
        cls,
        word: str,
        size: int = DEFAULT_GRID_SIZE,
        seed: Optional[int] = None,
        alphabet: str = string.ascii_uppercase,
        rng: Optional[random.Random] = None,
    ) -> "Grid":
        """
        Generate a grid hiding `word` along a random snake path.

        Remaining cells are filled with random letters from `alphabet`.

        Raises:
            WordTooLong: If the word cannot fit in a size x size grid
        """
        word = word.upper()
        if not word:
            raise ValueError("Cannot generate a grid for an empty word")
        if len(word) > size * size:
            raise WordTooLong(word, size)

        rng = rng or random.Random(seed)

        path = None
        for _ in range(MAX_PLACEMENT_ATTEMPTS):
            path = _snake_path(len(word), size, rng)
            if path is not None:
                break

        if path is None:
            logger.warning(
                "Failed to place word %s in snake pattern after %d attempts",
                word, MAX_PLACEMENT_ATTEMPTS,
            )
            # Boustrophedon walk always fits and stays 4-way contiguous
            path = []
            for r in range(size):
                cols = range(size) if r % 2 == 0 else range(size - 1, -1, -1)
                path.extend(Position(r, c) for c in cols)
            path = path[:len(word)]

        letters = [[rng.choice(alphabet).upper() for _ in range(size)] for _ in range(size)]
        for letter, (r, c) in zip(word, path):
            letters[r][c] = letter

        grid = cls.from_rows("".join(row) for row in letters)
        grid.answer_path = path
        logger.debug("Generated %dx%d grid for %s along %s", size, size, word, path)
        return grid

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    def in_bounds(self, position: Position) -> bool:
        row, col = position
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, position: Position) -> Cell:
        """
        Get the cell at a position.

        Raises:
            OutOfBounds: If the position is outside the grid
        """
        if not self.in_bounds(position):
            raise OutOfBounds(f"Position {tuple(position)} is outside the {self.rows}x{self.cols} grid")
        row, col = position
        return self.cells[row][col]

    def iter_cells(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def letters(self, positions: Iterable[Position]) -> str:
        return "".join(self.cell(pos).letter for pos in positions)

    def set_selected(self, position: Position, selected: bool) -> None:
        self.cell(position).selected = selected

    def mark_solved(self, positions: Iterable[Position]) -> None:
        for pos in positions:
            cell = self.cell(pos)
            cell.solved = True
            cell.selected = False

    def solved_positions(self) -> List[Position]:
        return [cell.position for cell in self.iter_cells() if cell.solved]

    def selected_positions(self) -> List[Position]:
        return [cell.position for cell in self.iter_cells() if cell.selected]

    def positions_of(self, letter: str, include_solved: bool = False) -> List[Position]:
        """Positions holding `letter`, skipping solved cells unless asked."""
        letter = letter.upper()
        return [
            cell.position for cell in self.iter_cells()
            if cell.letter == letter and (include_solved or not cell.solved)
        ]

    def render(self) -> str:
        """
        Render the grid as text.

        Solved cells are lowercase, selected cells are wrapped in brackets.
        """
        lines = []
        for row in self.cells:
            tokens = []
            for cell in row:
                letter = cell.letter.lower() if cell.solved else cell.letter
                tokens.append(f"[{letter}]" if cell.selected else f" {letter} ")
            lines.append("".join(tokens))
        return "\n".join(lines)
