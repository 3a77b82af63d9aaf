"""Data models for the puzzle engine."""

from typing import Annotated, List, Literal, NamedTuple, Union

from pydantic import BaseModel, Field, field_validator, model_validator


# Blank placeholder inside sentence templates
BLANK = "_____"

Adjacency = Literal["8-way", "4-way"]


class Position(NamedTuple):
    """A cell's (row, col) coordinate on the grid."""
    row: int
    col: int


class Cell(BaseModel):
    """A single letter tile on the grid."""
    letter: str = Field(..., min_length=1, max_length=1, frozen=True)
    position: Position = Field(..., frozen=True)
    selected: bool = False
    solved: bool = False

    @field_validator("letter")
    @classmethod
    def _uppercase_letter(cls, value: str) -> str:
        return value.upper()


class WordEntry(BaseModel):
    """A progression word and the sentence templates that hint at it."""
    word: str = Field(..., min_length=1)
    sentences: List[str] = Field(..., min_length=1)

    @field_validator("word")
    @classmethod
    def _canonical_word(cls, value: str) -> str:
        value = value.strip().upper()
        if not value.isalpha():
            raise ValueError(f"Word '{value}' must contain letters only")
        return value

    @field_validator("sentences")
    @classmethod
    def _one_blank_each(cls, value: List[str]) -> List[str]:
        for sentence in value:
            if sentence.count(BLANK) != 1:
                raise ValueError(
                    f"Sentence must contain exactly one '{BLANK}' marker: '{sentence}'"
                )
        return value


class WordSet(BaseModel):
    """An era (category) with its words in progression order."""
    era: str = Field(..., min_length=1)
    words: List[WordEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_words(self) -> "WordSet":
        seen = set()
        for entry in self.words:
            if entry.word in seen:
                raise ValueError(f"Duplicate word '{entry.word}' in era '{self.era}'")
            seen.add(entry.word)
        return self


class WordSetList(BaseModel):
    """Top-level shape of a dictionary document."""
    sets: List[WordSet] = Field(default_factory=list)


class TooShort(BaseModel):
    """Submitted path had fewer letters than the minimum word length."""
    kind: Literal["too_short"] = "too_short"
    word: str = ""


class Incorrect(BaseModel):
    """Submitted word is not the current target."""
    kind: Literal["incorrect"] = "incorrect"
    word: str = ""


class Correct(BaseModel):
    """Submitted word matched the current target."""
    kind: Literal["correct"] = "correct"
    word: str
    points: int = Field(..., ge=0)
    sentence: str
    positions: List[Position] = Field(default_factory=list)


Verdict = Annotated[Union[TooShort, Incorrect, Correct], Field(discriminator="kind")]


def fill_blank(template: str, text: str) -> str:
    """Replace the blank marker in a sentence template with `text`."""
    return template.replace(BLANK, text, 1)
