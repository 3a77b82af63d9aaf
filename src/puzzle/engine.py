"""
Selection/validation engine.

Drives the Idle -> Selecting -> (Evaluating) -> Idle state machine:

1. `start` / `extend` grow a SelectionPath on the grid
2. `submit` finalizes the path into a word and judges it against the single
   current progression target
3. A correct word is committed in one step: cells solved, score added,
   progression advanced
"""

import enum
import logging
import random
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, PrivateAttr

from .grid import Grid
from .models import Adjacency, Correct, Incorrect, Position, TooShort, Verdict, fill_blank
from .progress import CATEGORY_COMPLETE, ProgressTracker, points_for
from .selection import SelectionPath

logger = logging.getLogger(__name__)


# Shortest word a submission can be judged on
MIN_WORD_LENGTH = 3


class EngineState(str, enum.Enum):
    IDLE = "idle"
    SELECTING = "selecting"
    EVALUATING = "evaluating"


class ValidationEngine(BaseModel):
    """
    Orchestrates tile selection and word validation for one session.

    Attributes:
        grid: Grid currently being played
        progress: Progression and score for the session
        adjacency: Adjacency policy for traced paths
        seed: Optional seed for sentence selection
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    grid: Grid
    progress: ProgressTracker
    adjacency: Adjacency = "8-way"
    seed: Optional[int] = None
    _selection: SelectionPath = PrivateAttr()
    _rng: random.Random = PrivateAttr()
    _evaluating: bool = PrivateAttr(default=False)

    def model_post_init(self, __context) -> None:
        self._selection = SelectionPath(grid=self.grid, adjacency=self.adjacency)
        self._rng = random.Random(self.seed)

    @property
    def state(self) -> EngineState:
        if self._evaluating:
            return EngineState.EVALUATING
        if self._selection.is_empty():
            return EngineState.IDLE
        return EngineState.SELECTING

    @property
    def selection(self) -> SelectionPath:
        return self._selection

    @property
    def score(self) -> int:
        return self.progress.score

    @property
    def category_complete(self) -> bool:
        return self.progress.is_complete

    def load_grid(self, grid: Grid) -> None:
        """Swap in a new grid, dropping any selection on the old one."""
        self._selection.cancel()
        self.grid = grid
        self._selection = SelectionPath(grid=grid, adjacency=self.adjacency)

    def start(self, position: Position) -> None:
        """
        Begin tracing at `position`.

        Raises:
            OutOfBounds: If the position is off the grid or already solved
        """
        self._selection.start(position)

    def extend(self, position: Position) -> bool:
        """Extend the trace; returns False if the move was ignored."""
        return self._selection.extend(position)

    def cancel(self) -> None:
        self._selection.cancel()

    def submit(self) -> Verdict:
        """
        Finalize the current trace and judge it.

        Only the current progression target counts as correct; any other word,
        including other words of the category, is Incorrect.
        """
        self._evaluating = True
        try:
            word, positions = self._selection.finalize()
            return self._judge(word, positions)
        finally:
            self._evaluating = False

    def _judge(self, word: str, positions: List[Position]) -> Verdict:
        if len(word) < MIN_WORD_LENGTH:
            logger.debug("'%s' too short", word)
            return TooShort(word=word)

        target = self.progress.current_target()
        if target is CATEGORY_COMPLETE:
            logger.debug("'%s' submitted after category complete", word)
            return Incorrect(word=word)

        if word.upper() != target.upper():
            logger.debug("'%s' does not match target", word)
            return Incorrect(word=word)

        category = self.progress.category
        sentence = self.progress.word_bank.sentence_for(target, category, rng=self._rng)
        points = points_for(target)

        self.grid.mark_solved(positions)
        self.progress.add_score(points)
        self.progress.advance()

        logger.info("Solved '%s' in '%s' for %d points (score %d)",
                    target, category, points, self.progress.score)
        return Correct(word=target, points=points, sentence=sentence, positions=positions)

    def display_sentence(self, template: str, target: Optional[str] = None) -> str:
        """
        Fill a sentence template for display.

        The blank shows the live selection padded with underscores up to the
        target length, "..." while nothing is selected, or the whole word once
        it has been solved.
        """
        if target is None:
            current = self.progress.current_target()
            if current is CATEGORY_COMPLETE:
                return template
            target = current

        if self.progress.is_solved(target):
            return fill_blank(template, target)

        letters = self._selection.letters
        if not letters:
            return fill_blank(template, "...")
        return fill_blank(template, letters.ljust(len(target), "_"))
