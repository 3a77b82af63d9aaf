import logging
import random
from collections import deque
from typing import Deque, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from ..puzzle.engine import ValidationEngine
from ..puzzle.errors import CategoryLocked, PuzzleError, WordTooLong
from ..puzzle.grid import Grid
from ..puzzle.models import Correct, Position, Verdict, fill_blank
from ..puzzle.progress import CATEGORY_COMPLETE, ProgressTracker
from ..puzzle.wordbank import WordBank, load_default_word_bank, load_word_bank
from .models import (
    CancelSelection,
    EventOutcome,
    ExtendSelection,
    HintResult,
    InputEvent,
    RequestHint,
    SelectCategory,
    SessionConfig,
    SessionSnapshot,
    StartSelection,
    SubmitSelection,
)

logger = logging.getLogger(__name__)


# Cost of the first and second hint on a target word
HINT_COSTS: Dict[int, int] = {1: 50, 2: 100}


class PuzzleSession(BaseModel):
    """
    One play-through: owns the progression, the grids and the engine.

    Input events are queued and handled strictly one at a time. Each target
    word gets its own generated grid; when a correct word advances the
    progression, the next word's grid is loaded into the engine.

    Attributes:
        config: Session configuration
        word_bank: Shared read-only word bank
        progress: Category progression and score
        engine: Validation engine, created once a category is selected
        grids: Generated grid per target word
        history: Outcome of every handled event
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: SessionConfig = Field(default_factory=SessionConfig)
    word_bank: WordBank
    progress: ProgressTracker
    engine: Optional[ValidationEngine] = None
    grids: Dict[str, Grid] = Field(default_factory=dict)
    history: List[EventOutcome] = Field(default_factory=list)
    template: Optional[str] = None
    _queue: Deque[InputEvent] = PrivateAttr(default_factory=deque)
    _rng: random.Random = PrivateAttr()

    def model_post_init(self, __context) -> None:
        self._rng = random.Random(self.config.seed)

    @classmethod
    def create(
        cls,
        config: Optional[SessionConfig] = None,
        word_bank: Optional[WordBank] = None,
    ) -> "PuzzleSession":
        """
        Factory method to create a session from configuration.

        Args:
            config: Optional SessionConfig (defaults are used otherwise)
            word_bank: Shared word bank; loaded from config.words_path if omitted

        Returns:
            A new PuzzleSession, already in config.category if one is set
        """
        config = config or SessionConfig()
        if word_bank is None:
            if config.words_path:
                word_bank = load_word_bank(config.words_path)
            else:
                word_bank = load_default_word_bank()

        progress = ProgressTracker.create(word_bank, score=config.starting_score)
        session = cls(config=config, word_bank=word_bank, progress=progress)

        if config.category is not None:
            session.select_category(config.category)
        return session

    @property
    def score(self) -> int:
        return self.progress.score

    @property
    def grid(self) -> Optional[Grid]:
        return self.engine.grid if self.engine else None

    def _require_engine(self) -> ValidationEngine:
        if self.engine is None:
            if self.progress.category is None:
                raise PuzzleError("No category selected")
            raise PuzzleError(f"Category '{self.progress.category}' has no words")
        return self.engine

    def price_of(self, category: str) -> int:
        """Score needed to enter a category; unpriced categories are free."""
        return self.config.era_prices.get(category, 0)

    def is_unlocked(self, category: str) -> bool:
        return self.progress.score >= self.price_of(category)

    def unlocked_categories(self) -> List[str]:
        return [c for c in self.word_bank.categories if self.is_unlocked(c)]

    def _grid_for(self, word: str) -> Grid:
        if word not in self.grids:
            self.grids[word] = Grid.generate(
                word,
                size=self.config.grid_size,
                alphabet=self.config.alphabet,
                rng=self._rng,
            )
        return self.grids[word]

    def _load_target(self) -> None:
        """Point the engine at the grid and sentence for the current target."""
        target = self.progress.current_target()
        if target is CATEGORY_COMPLETE:
            self.template = None
            return

        grid = self._grid_for(target)
        self.template = self.word_bank.sentence_for(target, self.progress.category, rng=self._rng)

        if self.engine is None:
            self.engine = ValidationEngine(
                grid=grid,
                progress=self.progress,
                adjacency=self.config.adjacency,
                seed=self.config.seed,
            )
        else:
            self.engine.load_grid(grid)
        logger.debug("Loaded target %d/%d", self.progress.target_index + 1, self.progress.total_words)

    def select_category(self, category: str) -> None:
        """
        Start (or restart) a category.

        Every word of the category is checked against the grid size before
        anything changes, so a rejected selection leaves the session as it was.

        Raises:
            UnknownCategory: If the word bank has no such category
            CategoryLocked: If the score is below the category's price
            WordTooLong: If a word of the category cannot fit in the grid
        """
        words = self.word_bank.words_for(category)

        price = self.price_of(category)
        if self.progress.score < price:
            raise CategoryLocked(category, price, self.progress.score)

        size = self.config.grid_size
        for word in words:
            if len(word) > size * size:
                raise WordTooLong(word, size)

        self.progress.select_category(category)
        for word in words:
            self.grids.pop(word, None)

        if not words:
            # Nothing to play: drop the previous category's grid
            if self.engine is not None:
                self.engine.cancel()
            self.engine = None
            self.template = None
            return
        self._load_target()

    def start(self, position: Position) -> None:
        self._require_engine().start(position)

    def extend(self, position: Position) -> bool:
        return self._require_engine().extend(position)

    def cancel(self) -> None:
        if self.engine is not None:
            self.engine.cancel()

    def submit(self) -> Verdict:
        verdict = self._require_engine().submit()
        if isinstance(verdict, Correct):
            self._load_target()
        return verdict

    def use_hint(self) -> HintResult:
        """
        Buy the next hint for the current target.

        Level 1 reveals where the first letter sits; level 2 reveals the
        length of the word.

        Raises:
            PuzzleError: If there is no target or both hints are used
            InsufficientScore: If the score cannot cover the hint
        """
        engine = self._require_engine()
        target = self.progress.current_target()
        if target is CATEGORY_COMPLETE:
            raise PuzzleError("Category complete, nothing to hint")

        level = self.progress.hint_level + 1
        if level not in HINT_COSTS:
            raise PuzzleError("No hints left for this word")

        cost = HINT_COSTS[level]
        self.progress.spend(cost)
        self.progress.hint_level = level
        logger.info("Hint %d bought for %d points", level, cost)

        if level == 1:
            return HintResult(level=level, cost=cost, positions=engine.grid.positions_of(target[0]))
        return HintResult(level=level, cost=cost, pattern="_" * len(target))

    def sentence(self) -> Optional[str]:
        """Current sentence with the blank showing live selection progress."""
        if self.engine is None or self.template is None:
            return None
        if self.progress.hint_level >= 2 and self.engine.selection.is_empty():
            target = self.progress.current_target()
            return fill_blank(self.template, "_" * len(target))
        return self.engine.display_sentence(self.template)

    def dispatch(self, event: InputEvent) -> EventOutcome:
        """
        Handle a single input event.

        Recoverable errors are reported on the outcome instead of raised.
        """
        outcome = EventOutcome(event=event)

        try:
            if isinstance(event, SelectCategory):
                self.select_category(event.category)
                outcome.changed = True
            elif isinstance(event, StartSelection):
                self.start(event.position)
                outcome.changed = True
            elif isinstance(event, ExtendSelection):
                outcome.changed = self.extend(event.position)
            elif isinstance(event, CancelSelection):
                self.cancel()
                outcome.changed = True
            elif isinstance(event, SubmitSelection):
                outcome.verdict = self.submit()
                outcome.changed = True
            elif isinstance(event, RequestHint):
                outcome.hint = self.use_hint()
                outcome.changed = True
            else:
                raise PuzzleError(f"Unsupported event: {event!r}")
        except PuzzleError as e:
            logger.info("Rejected %s event: %s", event.kind, e)
            outcome.error = str(e)

        outcome.score = self.progress.score
        self.history.append(outcome)
        return outcome

    def post(self, event: InputEvent) -> None:
        """Queue an event for the next `drain`."""
        self._queue.append(event)

    def drain(self) -> List[EventOutcome]:
        """Handle queued events in arrival order."""
        outcomes = []
        while self._queue:
            outcomes.append(self.dispatch(self._queue.popleft()))
        return outcomes

    def snapshot(self) -> SessionSnapshot:
        grid = self.grid
        return SessionSnapshot(
            category=self.progress.category,
            score=self.progress.score,
            target_index=self.progress.target_index,
            total_words=self.progress.total_words,
            category_complete=self.progress.category is not None and self.progress.is_complete,
            sentence=self.sentence(),
            selection=self.engine.selection.positions if self.engine else [],
            solved_positions=grid.solved_positions() if grid else [],
            hint_level=self.progress.hint_level,
            grid=grid.render() if grid else None,
            unlocked=self.unlocked_categories(),
        )
