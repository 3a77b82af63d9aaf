"""
Tests for the era word bank.

Covers lookups (membership, progression order, sentences), the error
taxonomy for unknown keys, and loading with graceful fallback.
"""

import json
import logging
import random

import pytest
import yaml
from pydantic import ValidationError

from src.puzzle import (
    BLANK,
    UnknownCategory,
    WordBank,
    WordNotFound,
    WordSet,
    WordSetList,
    load_default_word_bank,
    load_word_bank,
)

from .conftest import EGYPT, GREECE, WORD_DOCUMENT


class TestLookups:
    """Membership, ordering and sentence lookups."""

    def test_categories_in_authoring_order(self, word_bank):
        assert word_bank.categories == [EGYPT, GREECE]

    def test_contains_is_case_insensitive(self, word_bank):
        assert word_bank.contains(EGYPT, "PYRAMID")
        assert word_bank.contains(EGYPT, "pyramid")
        assert word_bank.contains(EGYPT, "PhArAoH")

    def test_contains_false_for_other_category_word(self, word_bank):
        """Words are scoped to their category."""
        assert not word_bank.contains(EGYPT, "ATHENS")

    def test_contains_unknown_category(self, word_bank):
        with pytest.raises(UnknownCategory):
            word_bank.contains("Atlantis", "PYRAMID")

    def test_words_are_uppercased(self, word_bank):
        assert word_bank.words_for(EGYPT) == ["PYRAMID", "PHARAOH"]

    def test_words_for_keeps_progression_order(self):
        """Order is the authoring order, not alphabetical."""
        bank = WordBank.model_validate({
            "sets": [{
                "era": "Order",
                "words": [
                    {"word": "ZEBRA", "sentences": ["A _____."]},
                    {"word": "APPLE", "sentences": ["An _____."]},
                    {"word": "MANGO", "sentences": ["A _____."]},
                ],
            }]
        })
        assert bank.words_for("Order") == ["ZEBRA", "APPLE", "MANGO"]

    def test_words_for_returns_a_copy(self, word_bank):
        words = word_bank.words_for(EGYPT)
        words.append("SPHINX")
        assert word_bank.words_for(EGYPT) == ["PYRAMID", "PHARAOH"]

    def test_words_for_unknown_category(self, word_bank):
        with pytest.raises(UnknownCategory) as exc_info:
            word_bank.words_for("Atlantis")
        assert exc_info.value.category == "Atlantis"
        assert "Atlantis" in str(exc_info.value)

    def test_unknown_category_is_a_key_error(self, word_bank):
        with pytest.raises(KeyError):
            word_bank.words_for("Atlantis")

    def test_sentence_for_keeps_blank(self, word_bank):
        sentence = word_bank.sentence_for("pyramid", EGYPT)
        assert BLANK in sentence
        assert sentence in word_bank.sentences_for("PYRAMID", EGYPT)

    def test_sentence_for_uses_rng(self, word_bank):
        """The same seed picks the same sentence."""
        first = [word_bank.sentence_for("PYRAMID", EGYPT, rng=random.Random(3)) for _ in range(5)]
        second = [word_bank.sentence_for("PYRAMID", EGYPT, rng=random.Random(3)) for _ in range(5)]
        assert first == second

    def test_sentence_for_covers_all_sentences(self, word_bank):
        rng = random.Random(0)
        seen = {word_bank.sentence_for("PYRAMID", EGYPT, rng=rng) for _ in range(50)}
        assert seen == set(word_bank.sentences_for("PYRAMID", EGYPT))

    def test_sentence_for_unknown_word(self, word_bank):
        with pytest.raises(WordNotFound) as exc_info:
            word_bank.sentence_for("SPHINX", EGYPT)
        assert exc_info.value.word == "SPHINX"
        assert exc_info.value.category == EGYPT

    def test_sentence_for_unknown_category(self, word_bank):
        with pytest.raises(UnknownCategory):
            word_bank.sentence_for("PYRAMID", "Atlantis")


class TestImmutability:
    """The bank is read-only once built."""

    def test_cannot_reassign_sets(self, word_bank):
        with pytest.raises(ValidationError):
            word_bank.sets = ()

    def test_sets_are_a_tuple(self, word_bank):
        assert isinstance(word_bank.sets, tuple)


class TestDocumentValidation:
    """Key validation happens at the word bank boundary."""

    def test_duplicate_word_in_era_rejected(self):
        with pytest.raises(ValidationError):
            WordSet.model_validate({
                "era": EGYPT,
                "words": [
                    {"word": "NILE", "sentences": ["The _____ flooded."]},
                    {"word": "nile", "sentences": ["The _____ again."]},
                ],
            })

    def test_same_word_in_two_eras_allowed(self):
        document = WordSetList.model_validate({
            "sets": [
                {"era": "A", "words": [{"word": "RIVER", "sentences": ["A _____."]}]},
                {"era": "B", "words": [{"word": "RIVER", "sentences": ["A _____."]}]},
            ]
        })
        assert len(document.sets) == 2

    def test_duplicate_era_rejected(self):
        """Checked on the bank itself, however it is built."""
        with pytest.raises(ValidationError):
            WordBank.model_validate({
                "sets": [
                    {"era": EGYPT, "words": []},
                    {"era": EGYPT, "words": []},
                ]
            })

    def test_duplicate_era_rejected_from_document(self):
        document = WordSetList.model_validate({
            "sets": [
                {"era": EGYPT, "words": []},
                {"era": EGYPT, "words": []},
            ]
        })

        with pytest.raises(ValidationError):
            WordBank.from_document(document)

    def test_sentence_without_blank_rejected(self):
        with pytest.raises(ValidationError):
            WordSet.model_validate({
                "era": EGYPT,
                "words": [{"word": "NILE", "sentences": ["No marker here."]}],
            })

    def test_sentence_with_two_blanks_rejected(self):
        with pytest.raises(ValidationError):
            WordSet.model_validate({
                "era": EGYPT,
                "words": [{"word": "NILE", "sentences": ["_____ and _____."]}],
            })

    def test_empty_sentences_rejected(self):
        with pytest.raises(ValidationError):
            WordSet.model_validate({
                "era": EGYPT,
                "words": [{"word": "NILE", "sentences": []}],
            })

    def test_non_letter_word_rejected(self):
        with pytest.raises(ValidationError):
            WordSet.model_validate({
                "era": EGYPT,
                "words": [{"word": "NILE2", "sentences": ["The _____."]}],
            })


class TestLoading:
    """Loading from files, with fallback to an empty bank."""

    def test_load_json(self, tmp_path):
        path = tmp_path / "words.json"
        path.write_text(json.dumps(WORD_DOCUMENT), encoding="utf-8")

        bank = load_word_bank(path)

        assert bank.categories == [EGYPT, GREECE]
        assert bank.words_for(EGYPT) == ["PYRAMID", "PHARAOH"]

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "words.yaml"
        path.write_text(yaml.safe_dump(WORD_DOCUMENT), encoding="utf-8")

        bank = load_word_bank(str(path))

        assert bank.words_for(GREECE) == ["ATHENS"]

    def test_missing_file_gives_empty_bank(self, tmp_path, caplog):
        with caplog.at_level(logging.ERROR):
            bank = load_word_bank(tmp_path / "missing.json")

        assert bank.is_empty()
        assert bank.categories == []
        assert "not found" in caplog.text

    def test_empty_bank_lookups_raise_domain_errors(self, tmp_path):
        bank = load_word_bank(tmp_path / "missing.json")

        with pytest.raises(UnknownCategory):
            bank.words_for(EGYPT)
        with pytest.raises(UnknownCategory):
            bank.contains(EGYPT, "PYRAMID")
        with pytest.raises(UnknownCategory):
            bank.sentence_for("PYRAMID", EGYPT)

    def test_invalid_json_gives_empty_bank(self, tmp_path, caplog):
        path = tmp_path / "words.json"
        path.write_text("{ not json", encoding="utf-8")

        with caplog.at_level(logging.ERROR):
            bank = load_word_bank(path)

        assert bank.is_empty()
        assert caplog.records

    def test_malformed_structure_gives_empty_bank(self, tmp_path):
        path = tmp_path / "words.json"
        path.write_text(json.dumps({"sets": [{"era": EGYPT, "words": [{"word": "NILE"}]}]}))

        assert load_word_bank(path).is_empty()

    def test_duplicate_era_file_gives_empty_bank(self, tmp_path, caplog):
        document = {"sets": [WORD_DOCUMENT["sets"][0], WORD_DOCUMENT["sets"][0]]}
        path = tmp_path / "words.json"
        path.write_text(json.dumps(document))

        with caplog.at_level(logging.ERROR):
            bank = load_word_bank(path)

        assert bank.is_empty()
        assert "Malformed word file" in caplog.text

    def test_wrong_top_level_type_gives_empty_bank(self, tmp_path):
        path = tmp_path / "words.json"
        path.write_text(json.dumps(["PYRAMID", "PHARAOH"]))

        assert load_word_bank(path).is_empty()

    def test_empty_yaml_gives_empty_bank(self, tmp_path):
        path = tmp_path / "words.yml"
        path.write_text("")

        assert load_word_bank(path).is_empty()

    def test_default_word_bank(self):
        bank = load_default_word_bank()

        assert len(bank.categories) == 5
        assert bank.words_for("Ancient Egypt")[:2] == ["PYRAMID", "PHARAOH"]
        for era in bank.categories:
            for word in bank.words_for(era):
                assert len(word) >= 3
                assert len(word) <= 36
