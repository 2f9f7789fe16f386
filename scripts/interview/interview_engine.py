"""
Interview Engine
Depth-first traversal of a question tree shared by every presentation backend
"""

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Sequence, Union

from .errors import BackendError, TypeMismatch, ValidationError, ValidationExhausted
from .models import (
    AllOfQuestion,
    AnyOfQuestion,
    ConfirmQuestion,
    FloatQuestion,
    IntQuestion,
    LeafKind,
    ListQuestion,
    MaskedQuestion,
    OneOfQuestion,
    Question,
    QuestionKind,
    SurveyDefinition,
    Variant,
    variant_segment,
)
from .response_path import SELECTED_VARIANT_KEY, SELECTED_VARIANTS_KEY, ResponsePath
from .responses import DefaultValue, ResponseValue, Responses, ValueKind

logger = logging.getLogger(__name__)

# validate(value, responses_so_far, path) -> None, or raise ValidationError
Validator = Callable[[ResponseValue, Responses, ResponsePath], None]


def accept_all(value: ResponseValue, responses: Responses, path: ResponsePath) -> None:
    """Validator that accepts every value."""
    return None


@dataclass
class AskRequest:
    """Everything a backend needs to present one question."""
    path: ResponsePath
    prompt: str
    kind: QuestionKind
    prefill: Optional[ResponseValue] = None
    attempt: int = 1
    error: Optional[str] = None   # message from the previous rejected attempt


class InterviewBackend(ABC):
    """
    Presentation backend.

    A backend only supplies the primitives for asking one leaf and one
    selection; the traversal itself lives in InterviewEngine so that every
    backend walks the tree identically. Primitives raise SurveyCancelled
    when the user aborts and BackendError on I/O failure.
    """

    @abstractmethod
    def ask_leaf(self, request: AskRequest) -> ResponseValue:
        """Obtain one raw answer for a leaf question."""

    @abstractmethod
    def ask_select(self, request: AskRequest, options: List[str],
                   default: Optional[int]) -> int:
        """Obtain exactly one option index."""

    @abstractmethod
    def ask_multi_select(self, request: AskRequest, options: List[str],
                         defaults: List[int]) -> List[int]:
        """Obtain an ordered list of option indices; repeats are allowed."""

    def show_message(self, text: str) -> None:
        """Show a prelude or epilogue message."""

    def show_error(self, path: ResponsePath, message: str) -> None:
        """Tell the user why an answer was rejected."""

    def collect(self, definition: Union[SurveyDefinition, Sequence[Question]],
                validate: Optional[Validator] = None,
                max_attempts: Optional[int] = None) -> Responses:
        """Run the full interview and return the collected responses."""
        engine = InterviewEngine(self, validate=validate, max_attempts=max_attempts)
        return engine.collect(definition)


class InterviewEngine:
    """Walks a question tree, asking each question through a backend."""

    def __init__(
        self,
        backend: InterviewBackend,
        validate: Optional[Validator] = None,
        max_attempts: Optional[int] = None
    ):
        """
        Initialize the engine.

        Args:
            backend: Supplies the ask primitives
            validate: Field validator; raises ValidationError to reject
            max_attempts: Give up with ValidationExhausted after this many
                          rejected attempts on one question (None = never)
        """
        if max_attempts is not None and max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.backend = backend
        self.validate = validate or accept_all
        self.max_attempts = max_attempts

    # ===================
    # Entry point
    # ===================

    def collect(self, definition: Union[SurveyDefinition, Sequence[Question]]) -> Responses:
        """
        Ask every question and return the responses.

        Cancellation propagates as SurveyCancelled and no partial responses
        are returned.
        """
        if isinstance(definition, SurveyDefinition):
            questions = definition.questions
            prelude, epilogue = definition.prelude, definition.epilogue
        else:
            questions = list(definition)
            prelude = epilogue = None

        logger.info("collect_start questions=%d backend=%s",
                    len(questions), type(self.backend).__name__)
        responses = Responses()

        if prelude:
            self.backend.show_message(prelude)

        for question in questions:
            self._ask_question(question, responses, ResponsePath.empty())

        if epilogue:
            self.backend.show_message(epilogue)

        logger.info("collect_done responses=%d", len(responses))
        return responses

    # ===================
    # Dispatch
    # ===================

    def _ask_question(self, question: Question, responses: Responses,
                      prefix: ResponsePath) -> None:
        full_path = prefix.child(question.path)

        if question.default.is_assumed():
            self._apply_assumption(question, full_path, responses)
            return

        prompt = question.display_prompt(full_path)
        kind = question.kind

        if kind.is_unit():
            return
        if isinstance(kind, LeafKind):
            self._ask_leaf(question, kind, full_path, prompt, responses)
        elif isinstance(kind, AllOfQuestion):
            for nested in kind.questions:
                self._ask_question(nested, responses, full_path)
        elif isinstance(kind, OneOfQuestion):
            index = self._ask_one_of(question, kind, full_path, prompt)
            self._commit_one_of(kind, full_path, index, responses)
        elif isinstance(kind, AnyOfQuestion):
            selection = self._ask_any_of(question, kind, full_path, prompt, responses)
            self._commit_any_of(kind, full_path, selection, responses)
        else:
            raise TypeError(f"Unsupported question kind: {type(kind).__name__}")

    def _apply_assumption(self, question: Question, full_path: ResponsePath,
                          responses: Responses) -> None:
        """
        Write an assumed value without any backend I/O.

        For selection kinds the assumed index (or indices) replaces the
        menu only; the chosen variants' follow-up questions are still asked.
        """
        value = question.default.value
        kind = question.kind
        logger.debug("assumed_applied path=%s", full_path)

        if isinstance(kind, OneOfQuestion):
            index = _as_index(value, full_path)
            self._check_range([index], kind.variants, full_path)
            self._commit_one_of(kind, full_path, index, responses)
        elif isinstance(kind, AnyOfQuestion):
            selection = _as_indices(value, full_path)
            self._check_range(selection, kind.variants, full_path)
            self._commit_any_of(kind, full_path, selection, responses)
        elif isinstance(kind, LeafKind):
            responses.insert(full_path, _conform(value, kind, full_path))
        else:
            responses.insert(full_path, value)

    # ===================
    # Leaves
    # ===================

    def _ask_leaf(self, question: Question, kind: LeafKind, full_path: ResponsePath,
                  prompt: str, responses: Responses) -> None:
        request = AskRequest(
            path=full_path,
            prompt=prompt,
            kind=kind,
            prefill=_prefill(question.default, kind, full_path),
        )

        while True:
            value = _conform(self.backend.ask_leaf(request), kind, full_path)

            if isinstance(kind, ConfirmQuestion):
                responses.insert(full_path, value)
                logger.debug("answer_committed path=%s kind=%s", full_path, value.type_name)
                return

            # Drop a stale value so cross-field rules never count this field twice
            responses.remove(full_path)

            error = check_bounds(kind, value)
            if error is None:
                error = self._run_validator(value, responses, full_path)
            if error is None:
                responses.insert(full_path, value)
                logger.debug("answer_committed path=%s kind=%s", full_path, value.type_name)
                return

            self._reject(full_path, error, request.attempt)
            request = replace(request, attempt=request.attempt + 1, error=error)

    # ===================
    # Selections
    # ===================

    def _ask_one_of(self, question: Question, kind: OneOfQuestion,
                    full_path: ResponsePath, prompt: str) -> int:
        default = kind.default
        if question.default.is_suggested():
            default = _as_index(question.default.value, full_path)

        request = AskRequest(path=full_path, prompt=prompt, kind=kind,
                             prefill=_index_value(default))
        index = self.backend.ask_select(request, kind.variant_names(), default)
        self._check_range([index], kind.variants, full_path)
        return index

    def _commit_one_of(self, kind: OneOfQuestion, full_path: ResponsePath,
                       index: int, responses: Responses) -> None:
        responses.insert(full_path.child(SELECTED_VARIANT_KEY),
                         ResponseValue.chosen_variant(index))
        self._ask_follow_up(kind.variants[index], full_path, responses)

    def _ask_any_of(self, question: Question, kind: AnyOfQuestion,
                    full_path: ResponsePath, prompt: str,
                    responses: Responses) -> List[int]:
        defaults = list(kind.defaults)
        if question.default.is_suggested():
            defaults = _as_indices(question.default.value, full_path)

        request = AskRequest(path=full_path, prompt=prompt, kind=kind,
                             prefill=ResponseValue.chosen_variants(defaults))
        selection_path = full_path.child(SELECTED_VARIANTS_KEY)

        while True:
            selection = list(self.backend.ask_multi_select(
                request, kind.variant_names(), defaults))
            self._check_range(selection, kind.variants, full_path)

            # The selection itself goes through the validator (budgets, cardinality)
            responses.remove(selection_path)
            error = self._run_validator(
                ResponseValue.chosen_variants(selection), responses, full_path)
            if error is None:
                return selection

            self._reject(full_path, error, request.attempt)
            request = replace(request, attempt=request.attempt + 1, error=error)

    def _commit_any_of(self, kind: AnyOfQuestion, full_path: ResponsePath,
                       selection: List[int], responses: Responses) -> None:
        responses.insert(full_path.child(SELECTED_VARIANTS_KEY),
                         ResponseValue.chosen_variants(selection))

        # Item index, not variant index, keys each follow-up sub-tree
        for item_index, variant_index in enumerate(selection):
            item_path = full_path.child(str(item_index))
            responses.insert(item_path.child(SELECTED_VARIANT_KEY),
                             ResponseValue.chosen_variant(variant_index))
            self._ask_follow_up(kind.variants[variant_index], item_path, responses)

    def _ask_follow_up(self, variant: Variant, prefix: ResponsePath,
                       responses: Responses) -> None:
        kind = variant.kind
        if kind.is_unit():
            return
        if isinstance(kind, AllOfQuestion):
            for nested in kind.questions:
                self._ask_question(nested, responses, prefix)
            return
        follow_up = Question(ResponsePath(variant_segment(variant.name)), "", kind)
        self._ask_question(follow_up, responses, prefix)

    # ===================
    # Helpers
    # ===================

    def _run_validator(self, value: ResponseValue, responses: Responses,
                       path: ResponsePath) -> Optional[str]:
        try:
            self.validate(value, responses, path)
        except ValidationError as e:
            return e.message
        return None

    def _reject(self, path: ResponsePath, message: str, attempt: int) -> None:
        logger.info("answer_rejected path=%s attempt=%d reason=%s", path, attempt, message)
        self.backend.show_error(path, message)
        if self.max_attempts is not None and attempt >= self.max_attempts:
            raise ValidationExhausted(path.as_str(), attempt, message)

    @staticmethod
    def _check_range(indices: List[int], variants: List[Variant],
                     path: ResponsePath) -> None:
        for index in indices:
            if not 0 <= index < len(variants):
                raise BackendError(
                    f"Selection {index} out of range for '{path}' "
                    f"({len(variants)} options)"
                )


def collect(definition: Union[SurveyDefinition, Sequence[Question]],
            backend: InterviewBackend,
            validate: Optional[Validator] = None,
            max_attempts: Optional[int] = None) -> Responses:
    """Convenience wrapper around InterviewEngine.collect."""
    return InterviewEngine(backend, validate, max_attempts).collect(definition)


def check_bounds(kind: QuestionKind, value: ResponseValue) -> Optional[str]:
    """Static min/max and item-count checks; returns an error message or None."""
    if isinstance(kind, (IntQuestion, FloatQuestion)):
        return _check_number(value.value, kind.min, kind.max)

    if isinstance(kind, ListQuestion):
        items = value.value
        if kind.min_items is not None and len(items) < kind.min_items:
            return f"Enter at least {kind.min_items} item(s)"
        if kind.max_items is not None and len(items) > kind.max_items:
            return f"Enter at most {kind.max_items} item(s)"
        if value.kind in (ValueKind.INT_LIST, ValueKind.FLOAT_LIST):
            for position, item in enumerate(items, 1):
                error = _check_number(item, kind.min, kind.max)
                if error:
                    return f"Item {position}: {error}"
    return None


def _check_number(number, minimum, maximum) -> Optional[str]:
    # NaN compares false against every bound
    if isinstance(number, float) and not math.isfinite(number):
        return "Value must be a finite number"
    if minimum is not None and number < minimum:
        return f"Value must be at least {minimum}"
    if maximum is not None and number > maximum:
        return f"Value must be at most {maximum}"
    return None


def _conform(value: ResponseValue, kind: LeafKind, path: ResponsePath) -> ResponseValue:
    """Widen ints to floats where the question wants floats; reject other mismatches."""
    value = ResponseValue.from_python(value)
    expected = kind.value_kind()
    if value.kind is expected:
        return value
    if expected is ValueKind.FLOAT and value.kind is ValueKind.INT:
        return ResponseValue.floating(value.value)
    if expected is ValueKind.FLOAT_LIST and value.kind is ValueKind.INT_LIST:
        return ResponseValue.float_list(value.value)
    if value.kind is ValueKind.STRING_LIST and not value.value and expected in (
            ValueKind.INT_LIST, ValueKind.FLOAT_LIST):
        return ResponseValue(expected, ())
    raise TypeMismatch(path, expected.value, value.type_name)


def _prefill(default: DefaultValue, kind: LeafKind,
             path: ResponsePath) -> Optional[ResponseValue]:
    if default.is_suggested():
        return _conform(default.value, kind, path)
    if isinstance(kind, MaskedQuestion):
        return None
    static = kind.static_default()
    if static is None:
        return None
    return _conform(ResponseValue.from_python(static), kind, path)


def _as_index(value: ResponseValue, path: ResponsePath) -> int:
    if value.kind in (ValueKind.CHOSEN_VARIANT, ValueKind.INT):
        return value.value
    raise TypeMismatch(path, ValueKind.CHOSEN_VARIANT.value, value.type_name)


def _as_indices(value: ResponseValue, path: ResponsePath) -> List[int]:
    if value.kind in (ValueKind.CHOSEN_VARIANTS, ValueKind.INT_LIST):
        return list(value.value)
    if value.kind is ValueKind.STRING_LIST and not value.value:
        return []
    raise TypeMismatch(path, ValueKind.CHOSEN_VARIANTS.value, value.type_name)


def _index_value(index: Optional[int]) -> Optional[ResponseValue]:
    return None if index is None else ResponseValue.chosen_variant(index)
