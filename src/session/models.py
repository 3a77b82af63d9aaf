"""
Pydantic models for the session layer.

Configuration, input events, per-event outcomes and the presentation snapshot.
The session logic itself lives in session.py.
"""

import string
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from ..puzzle.models import Adjacency, Position, Verdict


class SessionConfig(BaseModel):
    """Configuration for a play session."""
    words_path: Optional[str] = None  # None uses the bundled word list
    grid_size: int = Field(default=6, ge=3, le=12)
    adjacency: Adjacency = "8-way"
    seed: Optional[int] = None
    alphabet: str = Field(default=string.ascii_uppercase, min_length=1)
    starting_score: int = Field(default=0, ge=0)
    category: Optional[str] = None
    era_prices: Dict[str, int] = Field(default_factory=dict)  # score needed to enter a category


class SelectCategory(BaseModel):
    kind: Literal["select_category"] = "select_category"
    category: str


class StartSelection(BaseModel):
    kind: Literal["start"] = "start"
    position: Position


class ExtendSelection(BaseModel):
    kind: Literal["extend"] = "extend"
    position: Position


class CancelSelection(BaseModel):
    kind: Literal["cancel"] = "cancel"


class SubmitSelection(BaseModel):
    kind: Literal["submit"] = "submit"


class RequestHint(BaseModel):
    kind: Literal["hint"] = "hint"


InputEvent = Annotated[
    Union[SelectCategory, StartSelection, ExtendSelection, CancelSelection, SubmitSelection, RequestHint],
    Field(discriminator="kind"),
]


class HintResult(BaseModel):
    """What a bought hint reveals."""
    level: int = Field(..., ge=1, le=2)
    cost: int
    positions: List[Position] = Field(default_factory=list)  # level 1: first-letter tiles
    pattern: Optional[str] = None  # level 2: underscores for each letter


class EventOutcome(BaseModel):
    """Result of handling a single input event."""
    event: InputEvent
    verdict: Optional[Verdict] = None
    hint: Optional[HintResult] = None
    changed: bool = False
    error: Optional[str] = None
    score: int = 0


class SessionSnapshot(BaseModel):
    """Everything the presentation layer needs to draw the current state."""
    category: Optional[str] = None
    score: int = 0
    target_index: int = 0
    total_words: int = 0
    category_complete: bool = False
    sentence: Optional[str] = None
    selection: List[Position] = Field(default_factory=list)
    solved_positions: List[Position] = Field(default_factory=list)
    hint_level: int = 0
    grid: Optional[str] = None
    unlocked: List[str] = Field(default_factory=list)  # categories the score can enter
