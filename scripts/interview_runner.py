#!/usr/bin/env python3
"""
Interview Runner
CLI for running, listing and exporting the example surveys
"""

import argparse
import dataclasses
import json
import sys
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from interview import (
    BackendError,
    InterviewConfig,
    SurveyBuilder,
    SurveyCancelled,
    ValidationExhausted,
    builder,
    load_config,
)
from interview.backends import ConsoleBackend, render_html, render_markdown
from interview.config import load_env_files
from interview.logging_setup import configure_logging

from example_surveys import EXAMPLE_SURVEYS

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_BACKEND = 2
EXIT_CANCELLED = 130


class InterviewRunner:
    """
    CLI runner for the example surveys.

    Supports:
    - run: Interview the user and print the answers
    - list: Show available surveys
    - export: Write a survey as Markdown or HTML
    """

    def __init__(
        self,
        config: InterviewConfig = None,
        input_callback: Callable[[str], str] = None,
        output_callback: Callable[[str], None] = None,
        secret_callback: Callable[[str], str] = None
    ):
        """
        Initialize the runner.

        Args:
            config: Runtime settings (read from the environment if None)
            input_callback: Callback for user input (prompt -> response)
            output_callback: Callback for output (message -> None)
            secret_callback: Callback for masked input
        """
        self.config = config or load_config()
        self.output_callback = output_callback or self._default_output
        self.backend = ConsoleBackend(
            input_callback=input_callback,
            output_callback=self.output_callback,
            secret_callback=secret_callback,
            config=self.config
        )

    def _default_output(self, message: str):
        """Default output using stdout."""
        print(message)

    # ===================
    # Sub-commands
    # ===================

    def run_list(self) -> List[str]:
        """List available surveys."""
        self.output_callback("\nAvailable surveys:\n")
        for name, cls in EXAMPLE_SURVEYS.items():
            summary = (cls.__doc__ or "").strip().splitlines()
            self.output_callback(f"  {name:<15} {summary[0] if summary else cls.__name__}")
        return list(EXAMPLE_SURVEYS)

    def run_survey(
        self,
        name: str,
        suggestions: List[str] = None,
        assumptions: List[str] = None,
        as_json: bool = False
    ) -> int:
        """
        Interview the user for one survey.

        Args:
            name: Survey name from the registry
            suggestions: PATH=VALUE pre-filled answers
            assumptions: PATH=VALUE answers that skip their question
            as_json: Print the raw response map instead of the rebuilt value

        Returns:
            Process exit code
        """
        survey_builder = self._builder(name, suggestions, assumptions)
        if survey_builder is None:
            return EXIT_USAGE

        schema = survey_builder.schema
        try:
            responses = self.backend.collect(
                survey_builder.build(),
                schema.validate_field,
                max_attempts=self.config.max_attempts
            )
        except SurveyCancelled:
            self.output_callback("\nSurvey cancelled.")
            return EXIT_CANCELLED
        except ValidationExhausted as e:
            self.output_callback(f"\n{e}")
            return EXIT_BACKEND
        except BackendError as e:
            self.output_callback(f"\nInput failed: {e}")
            return EXIT_BACKEND

        # Assumed answers skip validation while asking; report them here
        for path, message in schema.validate_all(responses).items():
            self.output_callback(f"Warning: {path}: {message}")

        if as_json:
            self.output_callback(json.dumps(responses.to_dict(), indent=2))
        else:
            result = schema.from_responses(responses)
            self.output_callback(json.dumps(_plain(result), indent=2, default=str))
        return EXIT_OK

    def run_export(self, name: str, output_path: str, fmt: str = "markdown",
                   suggestions: List[str] = None, assumptions: List[str] = None) -> int:
        """Write a survey as a static Markdown or HTML document."""
        survey_builder = self._builder(name, suggestions, assumptions)
        if survey_builder is None:
            return EXIT_USAGE

        definition = survey_builder.build()
        title = survey_builder.schema.cls.__name__
        if fmt == "html":
            content = render_html(definition, title=title)
        else:
            content = render_markdown(definition, title=title)

        Path(output_path).write_text(content, encoding="utf-8")
        self.output_callback(f"Exported to: {output_path}")
        return EXIT_OK

    def _builder(self, name: str, suggestions: Optional[List[str]],
                 assumptions: Optional[List[str]]) -> Optional[SurveyBuilder]:
        cls = EXAMPLE_SURVEYS.get(name)
        if cls is None:
            self.output_callback(f"Unknown survey: {name}. Use --list to see available surveys.")
            return None

        survey_builder = builder(cls)
        try:
            for item in suggestions or []:
                survey_builder.suggest(*parse_assignment(item))
            for item in assumptions or []:
                survey_builder.assume(*parse_assignment(item))
        except (KeyError, TypeError, ValueError) as e:
            self.output_callback(f"Invalid default: {e}")
            return None
        return survey_builder


def parse_assignment(text: str):
    """``PATH=VALUE`` with VALUE parsed as JSON when possible."""
    path, sep, raw = text.partition("=")
    if not sep or not path.strip():
        raise ValueError(f"Expected PATH=VALUE, got {text!r}")
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        value = raw
    return path.strip(), value


def _plain(value):
    """Dataclasses, enums and paths as JSON-friendly data."""
    if dataclasses.is_dataclass(value):
        fields = {f.name: _plain(getattr(value, f.name)) for f in dataclasses.fields(value)}
        return fields if fields else type(value).__name__
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, list):
        return [_plain(item) for item in value]
    if isinstance(value, Path):
        return str(value)
    return value


def main(argv: List[str] = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Interview Runner - run example surveys in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --list                                  List surveys
  %(prog)s user-profile                            Run a survey
  %(prog)s sandwich --suggest name='"Ada"'         Pre-fill an answer
  %(prog)s character --assume stats.strength=10    Skip a question
  %(prog)s sandwich --markdown sandwich.md         Export as Markdown
  %(prog)s sandwich --json                         Print raw responses
        """
    )

    parser.add_argument(
        'survey',
        nargs='?',
        help="Survey to run"
    )

    parser.add_argument(
        '--list', '-l',
        action='store_true',
        help="List available surveys"
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help="Print the raw response map as JSON"
    )

    parser.add_argument(
        '--suggest', '-s',
        action='append',
        metavar='PATH=VALUE',
        help="Pre-fill an answer (repeatable)"
    )

    parser.add_argument(
        '--assume', '-a',
        action='append',
        metavar='PATH=VALUE',
        help="Answer a question without asking it (repeatable)"
    )

    parser.add_argument(
        '--markdown',
        metavar='FILE',
        help="Write the survey as Markdown instead of running it"
    )

    parser.add_argument(
        '--html',
        metavar='FILE',
        help="Write the survey as HTML instead of running it"
    )

    parser.add_argument(
        '--max-attempts',
        type=int,
        metavar='N',
        help="Give up after N rejected answers to one question"
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help="Log engine activity to stderr"
    )

    args = parser.parse_args(argv)

    load_env_files()
    try:
        config = load_config()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_USAGE

    if args.max_attempts is not None:
        if args.max_attempts < 1:
            print("--max-attempts must be at least 1", file=sys.stderr)
            return EXIT_USAGE
        config.max_attempts = args.max_attempts
    configure_logging("DEBUG" if args.verbose else config.log_level)

    runner = InterviewRunner(config=config)

    # Dispatch to appropriate command
    if args.list:
        runner.run_list()
        return EXIT_OK

    if not args.survey:
        parser.print_help()
        return EXIT_USAGE

    if args.markdown:
        return runner.run_export(args.survey, args.markdown, "markdown",
                                 args.suggest, args.assume)
    if args.html:
        return runner.run_export(args.survey, args.html, "html",
                                 args.suggest, args.assume)

    return runner.run_survey(args.survey, args.suggest, args.assume, as_json=args.json)


if __name__ == "__main__":
    sys.exit(main())
