"""
Era word bank: an immutable index of (category, word) -> hint sentences.

The bank is built once from a dictionary document and shared read-only by every
session. Keys are validated here so nothing downstream has to guard lookups.
"""

import json
import logging
import random
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError, model_validator

from .errors import UnknownCategory, WordNotFound
from .models import WordEntry, WordSet, WordSetList

logger = logging.getLogger(__name__)

DEFAULT_WORDS_PATH = Path(__file__).resolve().parent / "data" / "words.json"


class WordBank(BaseModel):
    """
    Read-only index of era word sets.

    Attributes:
        sets: Word sets in authoring order. Word order inside a set is the
            progression order players solve them in.
    """

    model_config = ConfigDict(frozen=True)

    sets: Tuple[WordSet, ...] = Field(default_factory=tuple)
    _index: Dict[str, Dict[str, WordEntry]] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def _unique_eras(self) -> "WordBank":
        eras = [word_set.era for word_set in self.sets]
        duplicates = {era for era in eras if eras.count(era) > 1}
        if duplicates:
            raise ValueError(f"Duplicate eras: {sorted(duplicates)}")
        return self

    def model_post_init(self, __context) -> None:
        """Build the category/word lookup once."""
        for word_set in self.sets:
            self._index[word_set.era] = {entry.word: entry for entry in word_set.words}

    @classmethod
    def from_document(cls, document: WordSetList) -> "WordBank":
        return cls(sets=tuple(document.sets))

    @property
    def categories(self) -> List[str]:
        """Category names in authoring order."""
        return [word_set.era for word_set in self.sets]

    def is_empty(self) -> bool:
        return not self.sets

    def has_category(self, category: str) -> bool:
        return category in self._index

    def _words(self, category: str) -> Dict[str, WordEntry]:
        try:
            return self._index[category]
        except KeyError:
            raise UnknownCategory(category) from None

    def _entry(self, word: str, category: str) -> WordEntry:
        words = self._words(category)
        try:
            return words[word.upper()]
        except KeyError:
            raise WordNotFound(word, category) from None

    def contains(self, category: str, word: str) -> bool:
        """Case-insensitive membership test within a category."""
        return word.upper() in self._words(category)

    def words_for(self, category: str) -> List[str]:
        """Words of a category in progression order."""
        return list(self._words(category))

    def sentences_for(self, word: str, category: str) -> List[str]:
        return list(self._entry(word, category).sentences)

    def sentence_for(
        self,
        word: str,
        category: str,
        rng: Optional[random.Random] = None,
    ) -> str:
        """
        Pick one sentence template for a word uniformly at random.

        The blank marker is left in place for the caller to fill.

        Raises:
            UnknownCategory: If the category does not exist
            WordNotFound: If the word is not part of the category
        """
        sentences = self._entry(word, category).sentences
        return (rng or random).choice(sentences)


def _read_document(path: Path) -> dict:
    with open(path, encoding="utf-8") as f:
        if path.suffix.lower() in (".yaml", ".yml"):
            return yaml.safe_load(f)
        return json.load(f)


def load_word_bank(path: str | Path) -> WordBank:
    """
    Load a word bank from a JSON (or YAML) dictionary document.

    A missing or malformed document never raises: the error is logged and an
    empty bank is returned, so every later lookup reports UnknownCategory.
    """
    path = Path(path)

    try:
        data = _read_document(path)
        bank = WordBank.from_document(WordSetList.model_validate(data))
    except FileNotFoundError:
        logger.error("Word file not found: %s", path)
        return WordBank()
    except (OSError, ValueError, yaml.YAMLError) as e:
        # pydantic's ValidationError and json's JSONDecodeError are ValueErrors
        if isinstance(e, ValidationError):
            logger.error("Malformed word file %s: %d errors", path, e.error_count())
        else:
            logger.error("Error reading word file %s: %s", path, e)
        return WordBank()

    logger.info(
        "Loaded %d eras (%d words) from %s",
        len(bank.sets),
        sum(len(word_set.words) for word_set in bank.sets),
        path,
    )
    return bank


def load_default_word_bank() -> WordBank:
    """Load the word bank bundled with the package."""
    return load_word_bank(DEFAULT_WORDS_PATH)
