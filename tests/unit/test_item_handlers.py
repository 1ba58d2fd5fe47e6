"""
Unit tests for item handlers.

Tests the correctness rules and response normalization of each item kind.
"""

import pytest

from src.stepwise.errors import OutOfRangeResponse
from src.stepwise.items import HANDLERS, Exercise, ItemKind, Question, get_handler


class TestHandlerRegistry:
    """Test the handler registry."""

    def test_all_handlers_registered(self):
        """Every item kind should have a handler."""
        assert set(HANDLERS) == set(ItemKind)

    def test_get_handler_by_string(self):
        assert get_handler("multi_select") is HANDLERS[ItemKind.MULTI_SELECT]

    def test_get_handler_accepts_hyphenated_names(self):
        assert get_handler("true-false") is HANDLERS[ItemKind.TRUE_FALSE]

    def test_get_handler_by_enum(self):
        assert get_handler(ItemKind.EXERCISE) is not None

    def test_get_handler_invalid_kind(self):
        assert get_handler("essay") is None


class TestSingleChoiceHandler:
    """Test the single-choice handler."""

    @pytest.fixture
    def handler(self):
        return get_handler(ItemKind.SINGLE_CHOICE)

    def test_correct_index(self, handler, single_choice_question):
        assert handler.is_correct(single_choice_question, 2) is True

    def test_wrong_index(self, handler, single_choice_question):
        assert handler.is_correct(single_choice_question, 1) is False

    def test_missing_response_is_incorrect(self, handler, single_choice_question):
        assert handler.is_correct(single_choice_question, None) is False

    def test_normalize_rejects_out_of_range(self, handler, single_choice_question):
        with pytest.raises(OutOfRangeResponse):
            handler.normalize(single_choice_question, 4)
        with pytest.raises(OutOfRangeResponse):
            handler.normalize(single_choice_question, -1)

    def test_normalize_rejects_bool_and_str(self, handler, single_choice_question):
        with pytest.raises(OutOfRangeResponse):
            handler.normalize(single_choice_question, True)
        with pytest.raises(OutOfRangeResponse):
            handler.normalize(single_choice_question, "2")

    def test_validate_requires_correct_in_range(self, handler):
        item = Question(
            id="q", prompt="?", kind=ItemKind.SINGLE_CHOICE, options=("a", "b"), correct=5
        )
        assert handler.validate(item) is False

    def test_format_response(self, handler, single_choice_question):
        assert handler.format_response(single_choice_question, 2) == "4-6 liters"
        assert handler.format_response(single_choice_question, None) == "-"


class TestMultiSelectHandler:
    """Test the multi-select handler: exact set match, no partial credit."""

    @pytest.fixture
    def handler(self):
        return get_handler(ItemKind.MULTI_SELECT)

    def test_exact_set_is_correct(self, handler, multi_select_question):
        assert handler.is_correct(multi_select_question, frozenset({0, 1, 2, 4})) is True

    def test_order_is_irrelevant(self, handler, multi_select_question):
        response = handler.normalize(multi_select_question, [4, 2, 1, 0])
        assert handler.is_correct(multi_select_question, response) is True

    def test_subset_is_incorrect(self, handler, multi_select_question):
        assert handler.is_correct(multi_select_question, frozenset({0, 1, 2})) is False

    def test_superset_is_incorrect(self, handler, multi_select_question):
        assert handler.is_correct(multi_select_question, frozenset({0, 1, 2, 3, 4})) is False

    def test_empty_set_is_incorrect(self, handler, multi_select_question):
        assert handler.is_correct(multi_select_question, frozenset()) is False

    def test_toggle_adds_then_removes(self, handler, multi_select_question):
        selected = handler.toggle(multi_select_question, None, 3)
        assert selected == frozenset({3})
        assert handler.toggle(multi_select_question, selected, 3) == frozenset()

    def test_normalize_rejects_bad_shapes(self, handler, multi_select_question):
        with pytest.raises(OutOfRangeResponse):
            handler.normalize(multi_select_question, 1)
        with pytest.raises(OutOfRangeResponse):
            handler.normalize(multi_select_question, "0,1")
        with pytest.raises(OutOfRangeResponse):
            handler.normalize(multi_select_question, [0, 9])

    def test_question_freezes_correct_list(self):
        item = Question(
            id="q", prompt="?", kind="multi_select", options=["a", "b", "c"], correct=[0, 2]
        )
        assert item.correct == frozenset({0, 2})
        assert item.options == ("a", "b", "c")

    def test_question_rejects_single_index_for_multi_select(self):
        with pytest.raises(ValueError):
            Question(id="q", prompt="?", kind="multi_select", options=("a", "b"), correct=1)

    def test_format_response(self, handler, multi_select_question):
        assert handler.format_response(multi_select_question, frozenset({2, 0})) == "Confidence, Resilience"
        assert handler.format_response(multi_select_question, frozenset()) == "(none)"


class TestTrueFalseHandler:
    """Test the true/false handler."""

    @pytest.fixture
    def handler(self):
        return get_handler(ItemKind.TRUE_FALSE)

    def test_true_is_correct(self, handler, true_false_question):
        assert handler.is_correct(true_false_question, True) is True

    def test_false_is_incorrect(self, handler, true_false_question):
        assert handler.is_correct(true_false_question, False) is False

    def test_normalize_rejects_non_bool(self, handler, true_false_question):
        with pytest.raises(OutOfRangeResponse):
            handler.normalize(true_false_question, 1)
        with pytest.raises(OutOfRangeResponse):
            handler.normalize(true_false_question, "true")


class TestExerciseHandler:
    """Test the exercise handler."""

    @pytest.fixture
    def handler(self):
        return get_handler(ItemKind.EXERCISE)

    @pytest.fixture
    def exercise(self):
        return Exercise(id="bear-crawl", name="Bear Crawl", duration_seconds=20, points=12)

    def test_exercise_kind(self, exercise):
        assert exercise.kind == ItemKind.EXERCISE

    def test_completion_acknowledgement(self, handler, exercise):
        assert handler.normalize(exercise, None) is True
        assert handler.is_correct(exercise, True) is True
        assert handler.is_correct(exercise, None) is False

    def test_rejects_answers(self, handler, exercise):
        with pytest.raises(OutOfRangeResponse):
            handler.normalize(exercise, 2)

    def test_validate_requires_positive_duration(self, handler):
        assert handler.validate(Exercise(id="x", name="X", duration_seconds=0)) is False
