"""Play session layer for the word trail puzzle."""

from .models import (
    SessionConfig,
    SelectCategory,
    StartSelection,
    ExtendSelection,
    CancelSelection,
    SubmitSelection,
    RequestHint,
    InputEvent,
    HintResult,
    EventOutcome,
    SessionSnapshot,
)
from .session import PuzzleSession, HINT_COSTS

__all__ = [
    "SessionConfig",
    "SelectCategory",
    "StartSelection",
    "ExtendSelection",
    "CancelSelection",
    "SubmitSelection",
    "RequestHint",
    "InputEvent",
    "HintResult",
    "EventOutcome",
    "SessionSnapshot",
    "PuzzleSession",
    "HINT_COSTS",
]
