import enum
import logging
from typing import List, Literal, Optional, Set, Union

from pydantic import BaseModel, ConfigDict, Field

from .errors import InsufficientScore, UnknownCategory
from .wordbank import WordBank

logger = logging.getLogger(__name__)


# Points awarded per letter of a correctly spelled target word
POINTS_PER_LETTER = 100


class _Sentinel(enum.Enum):
    CATEGORY_COMPLETE = "category_complete"


CATEGORY_COMPLETE = _Sentinel.CATEGORY_COMPLETE

Target = Union[str, Literal[_Sentinel.CATEGORY_COMPLETE]]


def points_for(word: str) -> int:
    """Score for a correct word: purely a function of its length."""
    return len(word) * POINTS_PER_LETTER


class ProgressTracker(BaseModel):
    """
    Tracks a player's progression through one category's words.

    The target index is always a valid index into the category's word list, or
    equal to its length once every word has been solved.

    Attributes:
        word_bank: Shared read-only word bank
        category: Currently selected category (era), if any
        target_index: Index of the word the player must spell next
        score: Accumulated points, never negative
        solved_indices: Indices of words solved in the current category
        hint_level: Hints already bought for the current target (0-2)
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    word_bank: WordBank
    category: Optional[str] = None
    target_index: int = Field(default=0, ge=0)
    score: int = Field(default=0, ge=0)
    solved_indices: Set[int] = Field(default_factory=set)
    hint_level: int = Field(default=0, ge=0)

    @classmethod
    def create(
        cls,
        word_bank: WordBank,
        category: Optional[str] = None,
        score: int = 0,
    ) -> "ProgressTracker":
        """Create a tracker, optionally starting in a category."""
        tracker = cls(word_bank=word_bank, score=score)
        if category is not None:
            tracker.select_category(category)
        return tracker

    def _words(self) -> List[str]:
        if self.category is None:
            return []
        return self.word_bank.words_for(self.category)

    @property
    def total_words(self) -> int:
        return len(self._words())

    @property
    def solved_count(self) -> int:
        return len(self.solved_indices)

    @property
    def is_complete(self) -> bool:
        return self.target_index >= self.total_words

    def select_category(self, category: str) -> None:
        """
        Switch to a category and restart its progression.

        Raises:
            UnknownCategory: If the word bank has no such category
        """
        if not self.word_bank.has_category(category):
            raise UnknownCategory(category)

        self.category = category
        self.target_index = 0
        self.solved_indices = set()
        self.hint_level = 0
        logger.info("Selected category '%s' (%d words)", category, self.total_words)

    def current_target(self) -> Target:
        """The word to spell next, or CATEGORY_COMPLETE."""
        words = self._words()
        if self.target_index >= len(words):
            return CATEGORY_COMPLETE
        return words[self.target_index]

    def is_solved(self, word: str) -> bool:
        words = self._words()
        word = word.upper()
        return word in words and words.index(word) in self.solved_indices

    def advance(self) -> bool:
        """
        Move on to the next target word.

        Returns:
            False if the category was already complete, True otherwise
        """
        if self.is_complete:
            return False

        self.solved_indices.add(self.target_index)
        self.target_index += 1
        self.hint_level = 0

        if self.is_complete:
            logger.info("Category '%s' complete", self.category)
        return True

    def add_score(self, points: int) -> None:
        if points < 0:
            raise ValueError(f"Points must be non-negative, got {points}")
        self.score += points

    def spend(self, points: int) -> None:
        """
        Deduct points for a hint.

        Raises:
            InsufficientScore: If the score cannot cover the cost
        """
        if points < 0:
            raise ValueError(f"Points must be non-negative, got {points}")
        if points > self.score:
            raise InsufficientScore(f"Need {points} points, have {self.score}")
        self.score -= points
