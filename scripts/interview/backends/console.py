"""
Console Backend
Line-mode terminal prompts through injectable input/output callbacks
"""

import getpass
import logging
from typing import Callable, List, Optional

from ..config import InterviewConfig
from ..errors import BackendError, SurveyCancelled
from ..interview_engine import AskRequest, InterviewBackend
from ..models import (
    ConfirmQuestion,
    FloatQuestion,
    IntQuestion,
    ListElementKind,
    ListQuestion,
    MaskedQuestion,
    MultilineQuestion,
)
from ..response_path import ResponsePath
from ..responses import ResponseValue

logger = logging.getLogger(__name__)

MULTILINE_END = "."

_YES = ("y", "yes", "true")
_NO = ("n", "no", "false")


class ConsoleBackend(InterviewBackend):
    """
    Interactive terminal backend.

    Unparseable input is re-prompted here; validation failures are
    re-asked by the engine. EOF, Ctrl-C or a cancel word end the interview
    with SurveyCancelled.
    """

    def __init__(
        self,
        input_callback: Callable[[str], str] = None,
        output_callback: Callable[[str], None] = None,
        secret_callback: Callable[[str], str] = None,
        config: InterviewConfig = None
    ):
        """
        Initialize the backend.

        Args:
            input_callback: Callback for user input (prompt -> response)
            output_callback: Callback for output (message -> None)
            secret_callback: Callback for masked input (defaults to getpass)
            config: Cancel words and list separator
        """
        self.config = config or InterviewConfig()
        self.input_callback = input_callback or self._default_input
        self.output_callback = output_callback or self._default_output
        self.secret_callback = secret_callback or getpass.getpass

    def _default_input(self, prompt: str) -> str:
        """Default input using stdin."""
        return input(prompt)

    def _default_output(self, message: str):
        """Default output using stdout."""
        print(message)

    # ===================
    # Primitives
    # ===================

    def ask_leaf(self, request: AskRequest) -> ResponseValue:
        kind = request.kind

        if isinstance(kind, ConfirmQuestion):
            return self._ask_confirm(request)
        if isinstance(kind, MultilineQuestion):
            return self._ask_multiline(request)
        if isinstance(kind, MaskedQuestion):
            return ResponseValue.string(self._read(f"{request.prompt}: ", secret=True))
        if isinstance(kind, IntQuestion):
            return self._ask_number(request, int, "Please enter a whole number.")
        if isinstance(kind, FloatQuestion):
            return self._ask_number(request, float, "Please enter a number.")
        if isinstance(kind, ListQuestion):
            return self._ask_list(request, kind)

        text = self._read(f"{request.prompt}{_prefill_hint(request)}: ")
        if not text.strip() and request.prefill is not None:
            return request.prefill
        return ResponseValue.string(text.strip())

    def ask_select(self, request: AskRequest, options: List[str],
                   default: Optional[int]) -> int:
        self._show_options(request.prompt, options, [] if default is None else [default])
        hint = f" [{default + 1}]" if default is not None else ""

        while True:
            text = self._read(f"Choose 1-{len(options)}{hint}: ").strip()
            if not text and default is not None:
                return default
            index = _parse_option(text, options)
            if index is not None:
                return index
            self.output_callback(f"Please enter a number between 1 and {len(options)}.")

    def ask_multi_select(self, request: AskRequest, options: List[str],
                         defaults: List[int]) -> List[int]:
        self._show_options(request.prompt, options, defaults)
        hint = f" [{','.join(str(i + 1) for i in defaults)}]" if defaults else ""

        while True:
            text = self._read(
                f"Choose any, separated by commas (repeat a number to pick it twice){hint}: "
            ).strip()
            if not text:
                return list(defaults)
            indices = [_parse_option(token, options)
                       for token in text.replace(",", " ").split()]
            if None not in indices:
                return indices
            self.output_callback(f"Please enter numbers between 1 and {len(options)}.")

    def show_message(self, text: str) -> None:
        self.output_callback(f"\n{text}\n")

    def show_error(self, path: ResponsePath, message: str) -> None:
        self.output_callback(f"  ! {message}")

    # ===================
    # Leaf helpers
    # ===================

    def _ask_confirm(self, request: AskRequest) -> ResponseValue:
        default = request.prefill.value if request.prefill is not None else False
        hint = " (Y/n)" if default else " (y/N)"

        while True:
            text = self._read(f"{request.prompt}{hint}: ").strip().lower()
            if not text:
                return ResponseValue.boolean(default)
            if text in _YES:
                return ResponseValue.boolean(True)
            if text in _NO:
                return ResponseValue.boolean(False)
            self.output_callback("Please answer yes or no.")

    def _ask_multiline(self, request: AskRequest) -> ResponseValue:
        self.output_callback(f"{request.prompt}{_prefill_hint(request)} "
                             f"(finish with a line containing only '{MULTILINE_END}')")
        lines = []
        while True:
            line = self._read("> ", literal=True)
            if line.strip() == MULTILINE_END:
                break
            lines.append(line)

        if not lines and request.prefill is not None:
            return request.prefill
        return ResponseValue.string("\n".join(lines))

    def _ask_number(self, request: AskRequest, parse, error: str) -> ResponseValue:
        while True:
            text = self._read(f"{request.prompt}{_prefill_hint(request)}: ").strip()
            if not text and request.prefill is not None:
                return request.prefill
            try:
                return ResponseValue.from_python(parse(text))
            except ValueError:
                self.output_callback(error)

    def _ask_list(self, request: AskRequest, kind: ListQuestion) -> ResponseValue:
        parsers = {
            ListElementKind.STRING: (str, ResponseValue.string_list),
            ListElementKind.INT: (int, ResponseValue.int_list),
            ListElementKind.FLOAT: (float, ResponseValue.float_list),
        }
        parse, build = parsers[kind.element_kind]
        separator = self.config.list_separator

        while True:
            text = self._read(
                f"{request.prompt} (separate items with '{separator}'){_prefill_hint(request)}: "
            ).strip()
            if not text and request.prefill is not None:
                return request.prefill
            items = [item.strip() for item in text.split(separator) if item.strip()]
            try:
                return build([parse(item) for item in items])
            except ValueError:
                self.output_callback("Please enter valid list items.")

    # ===================
    # I/O
    # ===================

    def _read(self, prompt: str, secret: bool = False, literal: bool = False) -> str:
        reader = self.secret_callback if secret else self.input_callback
        try:
            text = reader(prompt)
        except (EOFError, KeyboardInterrupt):
            logger.info("console_cancelled reason=interrupt")
            raise SurveyCancelled() from None
        except OSError as e:
            raise BackendError(f"Console input failed: {e}") from e

        # Secrets and multi-line text are taken as typed
        if not (secret or literal) and text.strip().lower() in self.config.cancel_words:
            logger.info("console_cancelled reason=cancel_word")
            raise SurveyCancelled()
        return text

    def _show_options(self, prompt: str, options: List[str], marked: List[int]) -> None:
        self.output_callback(prompt)
        for number, option in enumerate(options, 1):
            marker = "*" if number - 1 in marked else " "
            self.output_callback(f"  {marker} {number}. {option}")


def _prefill_hint(request: AskRequest) -> str:
    if request.prefill is None:
        return ""
    value = request.prefill.to_python()
    if isinstance(value, list):
        value = ", ".join(str(item) for item in value)
    return f" [{value}]"


def _parse_option(text: str, options: List[str]) -> Optional[int]:
    """1-based number or exact option name (case-insensitive) -> index."""
    if text.isdigit():
        index = int(text) - 1
        return index if 0 <= index < len(options) else None
    lowered = [option.lower() for option in options]
    if text.lower() in lowered:
        return lowered.index(text.lower())
    return None
