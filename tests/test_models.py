"""
Tests for the data model – record parsing, catalog access, level checks.
"""

import random

import pytest

from core.loader import sentence_from_dict, vocabulary_from_dict
from core.models import LEVELS, Catalog, SessionState, Mode, VocabularyItem, check_level


class TestLevels:
    def test_three_tiers(self):
        assert LEVELS == (1, 2, 3)

    @pytest.mark.parametrize("level", [0, 4, "1", None])
    def test_invalid_level_raises(self, level):
        with pytest.raises(ValueError):
            check_level(level)


class TestRecordParsing:
    def test_short_keys(self):
        item = vocabulary_from_dict({"char": "水", "pinyin": "shuǐ", "meaning": "water"})
        assert item == VocabularyItem("水", "shuǐ", "water")

    def test_long_keys(self):
        item = vocabulary_from_dict(
            {"character": "水", "pronunciation": "shuǐ", "meaning": "water"})
        assert item.character == "水"
        assert item.pronunciation == "shuǐ"

    def test_values_are_stripped(self):
        item = vocabulary_from_dict({"char": " 水 ", "pinyin": "shuǐ ", "meaning": " water"})
        assert (item.character, item.pronunciation, item.meaning) == ("水", "shuǐ", "water")

    def test_missing_character_raises(self):
        with pytest.raises(ValueError, match="no character"):
            vocabulary_from_dict({"pinyin": "shuǐ", "meaning": "water"})

    def test_non_object_raises(self):
        with pytest.raises(ValueError):
            vocabulary_from_dict(["水", "shuǐ", "water"])

    def test_sentence_record(self):
        item = sentence_from_dict({"chinese": "你好！", "english": "Hello!"})
        assert item.source == "你好！"
        assert item.translation == "Hello!"

    def test_sentence_without_text_raises(self):
        with pytest.raises(ValueError):
            sentence_from_dict({"english": "Hello!"})

    def test_items_are_immutable(self):
        item = VocabularyItem("水", "shuǐ", "water")
        with pytest.raises(AttributeError):
            item.meaning = "fire"


class TestCatalog:
    def test_word_count(self, catalog):
        assert catalog.word_count(1) == 4
        assert catalog.word_count(3) == 6

    def test_missing_level_is_empty(self):
        assert Catalog().words(2) == []
        assert Catalog().sentences_for(2) == []

    def test_reshuffle_sentences_only_touches_one_level(self, catalog):
        before_one = list(catalog.sentences_for(1))
        before_three = list(catalog.sentences_for(3))
        catalog.reshuffle_sentences(1, random.Random(7))
        assert sorted(catalog.sentences_for(1), key=lambda s: s.source) == \
            sorted(before_one, key=lambda s: s.source)
        assert catalog.sentences_for(3) == before_three


class TestSessionStateDefaults:
    def test_fresh_state(self):
        state = SessionState()
        assert state.level == 1
        assert state.mode is Mode.MENU
        assert state.position == 0
        assert state.quiz_log == ()
        assert state.correct_count == 0
        assert not state.answer_revealed
