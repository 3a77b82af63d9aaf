"""Shared fixtures for puzzle tests."""

import pytest

from src.puzzle import Grid, ProgressTracker, ValidationEngine, WordBank


EGYPT = "Ancient Egypt"
GREECE = "Ancient Greece"

# PYRAMID runs along row 0 then turns down and back into row 1:
#   (0,0) (0,1) (0,2) (0,3) (0,4) (1,4) (1,3)
# PHARAOH runs along row 2 then turns down and back into row 3:
#   (2,0) (2,1) (2,2) (2,3) (2,4) (3,4) (3,3)
GRID_ROWS = [
    "PYRAM",
    "XXXDI",
    "PHARA",
    "ZZZHO",
]

PYRAMID_PATH = [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4), (1, 4), (1, 3)]
PHARAOH_PATH = [(2, 0), (2, 1), (2, 2), (2, 3), (2, 4), (3, 4), (3, 3)]


WORD_DOCUMENT = {
    "sets": [
        {
            "era": EGYPT,
            "words": [
                {
                    "word": "pyramid",
                    "sentences": [
                        "The Great _____ of Giza was a tomb.",
                        "Each _____ pointed to the sky.",
                    ],
                },
                {
                    "word": "PHARAOH",
                    "sentences": ["The _____ ruled Egypt."],
                },
            ],
        },
        {
            "era": GREECE,
            "words": [
                {
                    "word": "ATHENS",
                    "sentences": ["Democracy began in _____."],
                },
            ],
        },
    ]
}


@pytest.fixture
def word_bank() -> WordBank:
    """Two eras, three words. No file I/O."""
    return WordBank.model_validate(WORD_DOCUMENT)


@pytest.fixture
def grid() -> Grid:
    return Grid.from_rows(GRID_ROWS)


@pytest.fixture
def progress(word_bank) -> ProgressTracker:
    return ProgressTracker.create(word_bank, category=EGYPT)


@pytest.fixture
def engine(grid, progress) -> ValidationEngine:
    return ValidationEngine(grid=grid, progress=progress, seed=0)


def trace(target, path):
    """Start at the first position of `path` and extend through the rest."""
    target.start(path[0])
    for pos in path[1:]:
        target.extend(pos)
