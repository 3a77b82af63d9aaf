"""Word trail puzzle engine."""

from .engine import ValidationEngine, EngineState, MIN_WORD_LENGTH
from .errors import (
    PuzzleError,
    UnknownCategory,
    WordNotFound,
    OutOfBounds,
    InsufficientScore,
    CategoryLocked,
    WordTooLong,
)
from .grid import Grid, is_adjacent
from .models import (
    BLANK,
    Adjacency,
    Cell,
    Correct,
    Incorrect,
    Position,
    TooShort,
    Verdict,
    WordEntry,
    WordSet,
    WordSetList,
    fill_blank,
)
from .progress import ProgressTracker, CATEGORY_COMPLETE, POINTS_PER_LETTER, points_for
from .selection import SelectionPath
from .wordbank import WordBank, load_word_bank, load_default_word_bank

__all__ = [
    # Engine
    "ValidationEngine",
    "EngineState",
    "MIN_WORD_LENGTH",
    # Errors
    "PuzzleError",
    "UnknownCategory",
    "WordNotFound",
    "OutOfBounds",
    "InsufficientScore",
    "CategoryLocked",
    "WordTooLong",
    # Grid and selection
    "Grid",
    "is_adjacent",
    "SelectionPath",
    # Models
    "BLANK",
    "Adjacency",
    "Cell",
    "Correct",
    "Incorrect",
    "Position",
    "TooShort",
    "Verdict",
    "WordEntry",
    "WordSet",
    "WordSetList",
    "fill_blank",
    # Progression
    "ProgressTracker",
    "CATEGORY_COMPLETE",
    "POINTS_PER_LETTER",
    "points_for",
    # Word bank
    "WordBank",
    "load_word_bank",
    "load_default_word_bank",
]
