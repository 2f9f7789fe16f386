"""
Scripted Backend
Zero-interaction backend answering from a path -> answer script
"""

from collections import deque
from typing import Any, Deque, Dict, List, Optional, Sequence, Set, Tuple

from ..errors import BackendError, MissingResponse, SurveyCancelled
from ..interview_engine import AskRequest, InterviewBackend
from ..response_path import PathLike, ResponsePath, as_path
from ..responses import ResponseValue


class ScriptedBackend(InterviewBackend):
    """
    Answers questions from a prepared script.

    Each path holds a queue of answers; the first ask consumes the first
    answer, a re-ask after a rejected answer consumes the next one.
    Selections may be scripted as indices or as variant names.

    Usage:
        backend = (ScriptedBackend()
                   .with_response("name", "Ada")
                   .with_response("role", "admin"))
        responses = backend.collect(definition)
    """

    def __init__(self, responses: Optional[Dict[PathLike, Any]] = None,
                 accept_defaults: bool = False):
        """
        Initialize the backend.

        Args:
            responses: One answer per path
            accept_defaults: Echo the pre-filled value (or default selection)
                             when a path has no scripted answer
        """
        self.accept_defaults = accept_defaults
        self._script: Dict[ResponsePath, Deque[Any]] = {}
        self._cancel_paths: Set[ResponsePath] = set()

        self.asked: List[ResponsePath] = []
        self.errors: List[Tuple[ResponsePath, str]] = []
        self.messages: List[str] = []

        for path, value in (responses or {}).items():
            self.with_response(path, value)

    def with_response(self, path: PathLike, value: Any) -> "ScriptedBackend":
        """Queue an answer for path; repeat to script re-asks."""
        self._script.setdefault(as_path(path), deque()).append(value)
        return self

    def cancel_at(self, path: PathLike) -> "ScriptedBackend":
        """Cancel the interview when path is asked."""
        self._cancel_paths.add(as_path(path))
        return self

    def remaining(self) -> Dict[str, List[Any]]:
        """Scripted answers that were never consumed."""
        return {path.as_str(): list(queue) for path, queue in self._script.items() if queue}

    # ===================
    # Primitives
    # ===================

    def ask_leaf(self, request: AskRequest) -> ResponseValue:
        fallback = request.prefill if request.attempt == 1 else None
        return ResponseValue.from_python(self._next(request, fallback))

    def ask_select(self, request: AskRequest, options: List[str],
                   default: Optional[int]) -> int:
        fallback = default if request.attempt == 1 else None
        return _option_index(self._next(request, fallback), options)

    def ask_multi_select(self, request: AskRequest, options: List[str],
                         defaults: List[int]) -> List[int]:
        fallback = list(defaults) if request.attempt == 1 else None
        answer = self._next(request, fallback)
        if isinstance(answer, ResponseValue):
            answer = answer.to_python()
        return [_option_index(choice, options) for choice in answer]

    def show_message(self, text: str) -> None:
        self.messages.append(text)

    def show_error(self, path: ResponsePath, message: str) -> None:
        self.errors.append((path, message))

    def _next(self, request: AskRequest, fallback: Any) -> Any:
        path = request.path
        self.asked.append(path)

        if path in self._cancel_paths:
            raise SurveyCancelled()

        queue = self._script.get(path)
        if queue:
            return queue.popleft()
        if self.accept_defaults and fallback is not None:
            return fallback
        raise MissingResponse(path.as_str())


def _option_index(choice: Any, options: Sequence[str]) -> int:
    """Accept an index, a variant name or a chosen-variant value."""
    if isinstance(choice, ResponseValue):
        choice = choice.value
    if isinstance(choice, str):
        if choice not in options:
            raise BackendError(f"Unknown option {choice!r}; expected one of {list(options)}")
        return list(options).index(choice)
    return int(choice)
