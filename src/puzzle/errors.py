"""Exception hierarchy for the puzzle engine."""


class PuzzleError(Exception):
    """Base class for recoverable puzzle errors."""


class UnknownCategory(PuzzleError, KeyError):
    """Raised when a category (era) is not present in the word bank."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"Unknown category: '{category}'")

    def __str__(self) -> str:
        return self.args[0]


class WordNotFound(PuzzleError, KeyError):
    """Raised when a word is not part of the given category."""

    def __init__(self, word: str, category: str):
        self.word = word
        self.category = category
        super().__init__(f"Word '{word}' not found in category '{category}'")

    def __str__(self) -> str:
        return self.args[0]


class OutOfBounds(PuzzleError, IndexError):
    """Raised when a position is outside the grid or refers to a locked cell."""


class InsufficientScore(PuzzleError, ValueError):
    """Raised when the score cannot cover a hint."""


class CategoryLocked(PuzzleError):
    """Raised when the score has not reached a category's unlock price."""

    def __init__(self, category: str, price: int, score: int):
        self.category = category
        self.price = price
        self.score = score
        super().__init__(f"Category '{category}' unlocks at {price} points, have {score}")


class WordTooLong(PuzzleError, ValueError):
    """Raised when a word cannot fit in the configured grid."""

    def __init__(self, word: str, size: int):
        self.word = word
        self.size = size
        super().__init__(f"Word {word} is too long for grid size {size}")
