"""
Tests for the study session state machine.
"""

import random
from collections import Counter

import pytest

from core.errors import InvalidTransition, SpeechUnsupported
from core.models import Mode, SentenceItem
from core.session import StudySession


@pytest.fixture
def session(catalog, rng):
    return StudySession(catalog, rng=rng)


def _right_option(session):
    prompt = session.current_item
    return next(o for o in session.state.options if o.meaning == prompt.meaning)


def _wrong_option(session):
    prompt = session.current_item
    return next(o for o in session.state.options if o.meaning != prompt.meaning)


class FakeSpeaker:
    def __init__(self):
        self.spoken = []
        self.cancelled = 0

    def speak(self, text):
        self.spoken.append(text)

    def cancel(self):
        self.cancelled += 1


# ---------------------------------------------------------------------------
# Menu
# ---------------------------------------------------------------------------
class TestMenu:
    def test_starts_at_menu_level_one(self, session, catalog):
        assert session.mode is Mode.MENU
        assert session.level == 1
        assert Counter(session.state.working_set) == Counter(catalog.words(1))

    def test_select_level_reshuffles_that_level(self, session, catalog):
        session.select_level(3)
        assert session.level == 3
        assert session.mode is Mode.MENU
        assert Counter(session.state.working_set) == Counter(catalog.words(3))

    def test_select_invalid_level(self, session):
        with pytest.raises(ValueError):
            session.select_level(4)
        assert session.level == 1

    def test_level_word_counts(self, session):
        assert session.level_word_counts() == {1: 4, 2: 5, 3: 6}

    def test_cannot_select_level_mid_session(self, session):
        session.start_flashcards()
        with pytest.raises(InvalidTransition):
            session.select_level(2)

    def test_actions_without_a_mode_raise(self, session):
        for action in (session.reveal, session.next, session.previous,
                       session.shuffle, session.back, session.retry):
            with pytest.raises(InvalidTransition):
                action()

    def test_start_with_empty_vocabulary(self, catalog, rng):
        catalog.vocabulary[2] = []
        session = StudySession(catalog, rng=rng)
        session.select_level(2)
        assert session.start_flashcards() is False
        assert session.start_quiz() is False
        assert session.mode is Mode.MENU


# ---------------------------------------------------------------------------
# Flashcards
# ---------------------------------------------------------------------------
class TestFlashcards:
    def test_start(self, session, catalog):
        assert session.start_flashcards() is True
        state = session.state
        assert state.mode is Mode.FLASHCARD
        assert state.position == 0
        assert not state.answer_revealed
        assert Counter(state.working_set) == Counter(catalog.words(1))

    def test_reveal_then_next_hides(self, session):
        session.start_flashcards()
        session.reveal()
        assert session.state.answer_revealed
        session.reveal()                       # already revealed: no-op
        assert session.state.answer_revealed
        session.next()
        assert session.state.position == 1
        assert not session.state.answer_revealed

    def test_previous_at_start_is_noop(self, session):
        session.start_flashcards()
        session.previous()
        assert session.state.position == 0

    def test_previous_hides_answer(self, session):
        session.start_flashcards()
        session.next()
        session.reveal()
        session.previous()
        assert session.state.position == 0
        assert not session.state.answer_revealed

    def test_next_past_last_returns_to_menu(self, session):
        session.start_flashcards()
        for _ in range(3):
            session.next()
        assert session.is_last
        assert session.progress == (4, 4)
        session.next()
        assert session.mode is Mode.MENU

    def test_shuffle_resets_position(self, session, catalog):
        session.start_flashcards()
        session.next()
        session.reveal()
        session.shuffle()
        assert session.state.position == 0
        assert not session.state.answer_revealed
        assert Counter(session.state.working_set) == Counter(catalog.words(1))

    def test_back(self, session):
        session.start_flashcards()
        session.next()
        session.back()
        assert session.mode is Mode.MENU
        assert session.state.position == 0

    def test_quiz_actions_rejected(self, session, catalog):
        session.start_flashcards()
        with pytest.raises(InvalidTransition):
            session.answer(catalog.words(1)[0])

    def test_back_and_reenter_same_composition(self, session, catalog):
        session.start_flashcards()
        first = session.state.working_set
        session.back()
        session.start_flashcards()
        second = session.state.working_set
        assert Counter(first) == Counter(second) == Counter(catalog.words(1))


class TestPermutationInvariant:
    @pytest.mark.parametrize("level", [1, 2, 3])
    def test_every_shuffle_is_a_permutation(self, catalog, level):
        session = StudySession(catalog, rng=random.Random(level))
        session.select_level(level)
        expected = Counter(catalog.words(level))
        session.start_flashcards()
        for _ in range(25):
            session.shuffle()
            ws = session.state.working_set
            assert Counter(ws) == expected
            assert len(ws) == len(catalog.words(level))


# ---------------------------------------------------------------------------
# Quiz
# ---------------------------------------------------------------------------
class TestQuiz:
    def test_start(self, session):
        assert session.start_quiz() is True
        state = session.state
        assert state.mode is Mode.QUIZ
        assert state.quiz_log == ()
        assert state.correct_count == 0
        assert len(state.options) == 4

    def test_all_correct_scenario(self, session):
        session.start_quiz()
        for _ in range(4):
            assert session.answer(_right_option(session)) is True
        assert session.mode is Mode.RESULTS
        assert session.state.correct_count == 4
        result = session.result()
        assert result.percentage == 100
        assert result.band == "excellent"
        assert result.incorrect == ()

    def test_first_answer_wrong(self, session):
        session.start_quiz()
        prompt = session.current_item
        distractor = _wrong_option(session)
        assert session.answer(distractor) is False

        state = session.state
        assert state.quiz_log[0].prompt == prompt
        assert state.quiz_log[0].chosen == distractor
        assert state.quiz_log[0].was_correct is False
        assert state.correct_count == 0
        assert state.position == 1
        assert session.quiz_score == (0, 1)

    def test_log_tracks_position(self, session):
        session.start_quiz()
        for i in range(3):
            assert len(session.state.quiz_log) == session.state.position == i
            session.answer(_wrong_option(session) if i % 2 else _right_option(session))
        assert len(session.state.quiz_log) == session.state.position == 3

    def test_correct_count_matches_log(self, catalog):
        session = StudySession(catalog, rng=random.Random(99))
        session.select_level(3)
        session.start_quiz()
        pick = random.Random(5)
        while session.mode is Mode.QUIZ:
            session.answer(pick.choice(session.state.options))
        state = session.state
        assert len(state.quiz_log) == len(state.working_set) == 6
        assert state.correct_count == sum(a.was_correct for a in state.quiz_log)
        assert session.result().correct == state.correct_count

    def test_options_follow_prompt(self, session):
        session.start_quiz()
        for _ in range(3):
            prompt = session.current_item
            meanings = [o.meaning for o in session.state.options]
            assert meanings.count(prompt.meaning) == 1
            assert len(set(meanings)) == len(meanings)
            session.answer(_right_option(session))

    def test_distractors_come_from_whole_level(self, catalog, rng):
        session = StudySession(catalog, rng=rng)
        session.select_level(3)
        session.start_quiz()
        level_words = set(catalog.words(3))
        assert set(session.state.options) <= level_words

    def test_results_missed_review(self, session):
        session.start_quiz()
        session.answer(_wrong_option(session))
        while session.mode is Mode.QUIZ:
            session.answer(_right_option(session))
        result = session.result()
        assert result.correct == 3
        assert result.percentage == 75
        assert result.band == "good"
        assert len(result.incorrect) == 1

    def test_result_only_in_results(self, session):
        session.start_quiz()
        with pytest.raises(InvalidTransition):
            session.result()

    def test_retry_starts_fresh(self, session):
        session.start_quiz()
        while session.mode is Mode.QUIZ:
            session.answer(_wrong_option(session))
        assert session.retry() is True
        state = session.state
        assert state.mode is Mode.QUIZ
        assert state.quiz_log == ()
        assert state.correct_count == 0
        assert state.position == 0

    def test_exit_quiz_discards_log(self, session):
        session.start_quiz()
        session.answer(_right_option(session))
        session.back()
        assert session.mode is Mode.MENU
        assert session.state.quiz_log == ()
        assert session.state.correct_count == 0

    def test_results_back_to_menu(self, session):
        session.start_quiz()
        while session.mode is Mode.QUIZ:
            session.answer(_right_option(session))
        session.back()
        assert session.mode is Mode.MENU
        assert session.state.quiz_log == ()

    def test_navigation_rejected_in_quiz(self, session):
        session.start_quiz()
        for action in (session.next, session.previous, session.reveal, session.shuffle):
            with pytest.raises(InvalidTransition):
                action()


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------
class TestReading:
    def test_start(self, session, catalog):
        session.start_reading()
        state = session.state
        assert state.mode is Mode.READING
        assert not session.is_reading_empty
        assert Counter(state.working_set) == Counter(catalog.sentences_for(1))
        assert all(isinstance(item, SentenceItem) for item in state.working_set)

    def test_empty_level_gives_empty_state(self, session):
        session.select_level(2)
        session.start_reading()
        assert session.mode is Mode.READING
        assert session.is_reading_empty
        assert session.current_item is None

    def test_empty_state_only_allows_back(self, session):
        session.select_level(2)
        session.start_reading()
        for action in (session.reveal, session.next, session.previous, session.shuffle):
            with pytest.raises(InvalidTransition):
                action()
        session.back()
        assert session.mode is Mode.MENU

    def test_reveal_next_previous(self, session):
        session.start_reading()
        session.reveal()
        assert session.state.answer_revealed
        session.next()
        assert session.state.position == 1
        assert not session.state.answer_revealed
        session.previous()
        assert session.state.position == 0

    def test_next_past_last_returns_to_menu(self, session):
        session.start_reading()
        session.next()
        session.next()
        session.next()
        assert session.mode is Mode.MENU

    def test_shuffle_reorders_catalog_in_place(self, catalog):
        session = StudySession(catalog, rng=random.Random(3))
        session.start_reading()
        session.next()
        session.reveal()
        original = list(catalog.sentences_for(1))
        untouched = list(catalog.sentences_for(3))

        session.shuffle()
        assert session.state.position == 0
        assert not session.state.answer_revealed
        assert list(session.state.working_set) == catalog.sentences_for(1)
        assert Counter(catalog.sentences_for(1)) == Counter(original)
        assert catalog.sentences_for(3) == untouched

    def test_missing_sentence_file(self, catalog, rng):
        catalog.sentences = {1: [], 2: [], 3: []}
        catalog.sentences_available = False
        session = StudySession(catalog, rng=rng)
        for level in (1, 2, 3):
            session.select_level(level)
            session.start_reading()
            assert session.is_reading_empty
            session.back()
        assert session.start_flashcards() is True


# ---------------------------------------------------------------------------
# Speech
# ---------------------------------------------------------------------------
class TestSpeech:
    def test_speaks_flashcard_character(self, catalog, rng):
        speaker = FakeSpeaker()
        session = StudySession(catalog, rng=rng, speaker=speaker)
        session.start_flashcards()
        session.speak_current()
        assert speaker.spoken == [session.current_item.character]
        assert session.state.position == 0

    def test_speaks_reading_sentence(self, catalog, rng):
        speaker = FakeSpeaker()
        session = StudySession(catalog, rng=rng, speaker=speaker)
        session.start_reading()
        session.speak_current()
        assert speaker.spoken == [session.current_item.source]

    def test_menu_says_nothing(self, catalog, rng):
        speaker = FakeSpeaker()
        StudySession(catalog, rng=rng, speaker=speaker).speak_current()
        assert speaker.spoken == []

    def test_without_speaker(self, session):
        session.start_flashcards()
        with pytest.raises(SpeechUnsupported):
            session.speak_current()
        assert session.mode is Mode.FLASHCARD

    def test_speaker_error_propagates(self, catalog, rng):
        class NoAudio:
            def speak(self, text):
                raise SpeechUnsupported("no player")

        session = StudySession(catalog, rng=rng, speaker=NoAudio())
        session.start_flashcards()
        with pytest.raises(SpeechUnsupported):
            session.speak_current()

    def test_leaving_a_card_screen_stops_audio(self, catalog, rng):
        speaker = FakeSpeaker()
        session = StudySession(catalog, rng=rng, speaker=speaker)
        session.start_reading()
        session.speak_current()
        session.back()
        assert speaker.cancelled == 1

    def test_finishing_the_deck_stops_audio(self, catalog, rng):
        speaker = FakeSpeaker()
        session = StudySession(catalog, rng=rng, speaker=speaker)
        session.start_flashcards()
        while session.mode is Mode.FLASHCARD:
            session.next()
        assert speaker.cancelled == 1

    def test_card_navigation_keeps_audio(self, catalog, rng):
        speaker = FakeSpeaker()
        session = StudySession(catalog, rng=rng, speaker=speaker)
        session.start_flashcards()
        session.speak_current()
        session.next()
        assert speaker.cancelled == 0
