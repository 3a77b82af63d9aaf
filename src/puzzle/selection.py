"""In-progress tile selection traced across the grid."""

import logging
from typing import List, Optional, Tuple

from pydantic import BaseModel, PrivateAttr

from .errors import OutOfBounds
from .grid import Grid, is_adjacent
from .models import Adjacency, Position

logger = logging.getLogger(__name__)


class SelectionPath(BaseModel):
    """
    Ordered path of grid positions being traced by the player.

    Consecutive positions are always adjacent under `adjacency`, no position
    repeats, and solved cells are never part of the path.

    Attributes:
        grid: Grid the path is traced on
        adjacency: "8-way" (diagonals allowed) or "4-way"
    """

    grid: Grid
    adjacency: Adjacency = "8-way"
    _positions: List[Position] = PrivateAttr(default_factory=list)

    @property
    def positions(self) -> List[Position]:
        return list(self._positions)

    @property
    def letters(self) -> str:
        return self.grid.letters(self._positions).upper()

    @property
    def last(self) -> Optional[Position]:
        return self._positions[-1] if self._positions else None

    def is_empty(self) -> bool:
        return not self._positions

    def __len__(self) -> int:
        return len(self._positions)

    def _clear(self) -> None:
        for pos in self._positions:
            if not self.grid.cell(pos).solved:
                self.grid.set_selected(pos, False)
        self._positions = []

    def start(self, position: Position) -> None:
        """
        Begin a new path at `position`, discarding any current one.

        Raises:
            OutOfBounds: If the position is off the grid or the cell is solved
        """
        position = Position(*position)
        cell = self.grid.cell(position)
        if cell.solved:
            raise OutOfBounds(f"Cell {tuple(position)} is already solved")

        self._clear()
        self._positions = [position]
        self.grid.set_selected(position, True)

    def extend(self, position: Position) -> bool:
        """
        Extend the path to `position`.

        Re-entering the previous tile removes the last one instead. Illegal
        moves are ignored.

        Returns:
            True if the path changed, False if the move was ignored
        """
        if not self._positions:
            return False

        position = Position(*position)

        if len(self._positions) >= 2 and position == self._positions[-2]:
            removed = self._positions.pop()
            self.grid.set_selected(removed, False)
            return True

        if not self.grid.in_bounds(position):
            return False
        if position in self._positions:
            return False
        if not is_adjacent(self._positions[-1], position, self.adjacency):
            return False
        if self.grid.cell(position).solved:
            return False

        self._positions.append(position)
        self.grid.set_selected(position, True)
        return True

    def finalize(self) -> Tuple[str, List[Position]]:
        """
        Consume the path.

        Returns:
            The uppercased word along the path and its positions in order.
            An empty path yields ("", []).
        """
        positions = list(self._positions)
        word = self.letters
        self._clear()
        return word, positions

    def cancel(self) -> None:
        """Drop the path without producing a word."""
        if self._positions:
            logger.debug("Selection of %d tiles cancelled", len(self._positions))
        self._clear()
