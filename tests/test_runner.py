"""
Unit Tests for the CLI Runner, Configuration and Logging
Tests environment configuration, logging setup and the interview-runner CLI
"""

import json
import logging
import os
import pytest
import sys
from pathlib import Path

# Add scripts directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from interview import InterviewConfig, load_config
from interview.logging_setup import configure_logging
from interview_runner import (
    EXIT_BACKEND,
    EXIT_CANCELLED,
    EXIT_OK,
    EXIT_USAGE,
    InterviewRunner,
    _plain,
    main,
    parse_assignment
)

from example_surveys import Bread, Combo, FillingType, Turkey


# ===================
# Fixtures
# ===================

@pytest.fixture
def restore_root_level():
    root = logging.getLogger()
    level = root.level
    yield root
    root.setLevel(level)


@pytest.fixture
def clean_env(monkeypatch, tmp_path, restore_root_level):
    """No INTERVIEW_* variables and no stray .env files."""
    for name in ("INTERVIEW_MAX_ATTEMPTS", "INTERVIEW_CANCEL_WORDS",
                 "INTERVIEW_LIST_SEPARATOR", "INTERVIEW_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    return tmp_path


def make_runner(*lines, config: InterviewConfig = None):
    """Runner fed from queued lines; returns (runner, output)."""
    queue = list(lines)
    output = []

    def read(prompt):
        if not queue:
            raise EOFError
        return queue.pop(0)

    runner = InterviewRunner(
        config=config or InterviewConfig(),
        input_callback=read,
        output_callback=output.append,
        secret_callback=read
    )
    return runner, output


PROFILE_ANSWERS = ("Ada", "36", "ada@example.com", "y", "")


# ===================
# Configuration Tests
# ===================

class TestLoadConfig:
    """Tests for load_config()."""

    def test_defaults(self):
        """Test an empty environment keeps every default."""
        config = load_config({})
        assert config.max_attempts is None
        assert config.cancel_words == ["quit", "exit"]
        assert config.list_separator == ","
        assert config.log_level == "WARNING"

    def test_reads_variables(self):
        """Test each variable is parsed."""
        config = load_config({
            "INTERVIEW_MAX_ATTEMPTS": "3",
            "INTERVIEW_CANCEL_WORDS": "Stop, Abort",
            "INTERVIEW_LIST_SEPARATOR": ";",
            "INTERVIEW_LOG_LEVEL": "debug",
        })
        assert config.max_attempts == 3
        assert config.cancel_words == ["stop", "abort"]
        assert config.list_separator == ";"
        assert config.log_level == "DEBUG"

    def test_blank_values_ignored(self):
        """Test blank variables fall back to defaults."""
        config = load_config({"INTERVIEW_MAX_ATTEMPTS": "  ", "INTERVIEW_CANCEL_WORDS": ""})
        assert config.max_attempts is None
        assert config.cancel_words == ["quit", "exit"]

    def test_invalid_max_attempts(self):
        """Test the error names the offending variable."""
        with pytest.raises(ValueError) as exc:
            load_config({"INTERVIEW_MAX_ATTEMPTS": "many"})
        assert "INTERVIEW_MAX_ATTEMPTS" in str(exc.value)

    def test_non_positive_max_attempts(self):
        """Test zero attempts is rejected."""
        with pytest.raises(ValueError):
            load_config({"INTERVIEW_MAX_ATTEMPTS": "0"})

    def test_env_file(self, clean_env):
        """Test main() picks up a .env file in the working directory."""
        (clean_env / ".env").write_text("INTERVIEW_MAX_ATTEMPTS=oops\n")
        try:
            assert main(["--list"]) == EXIT_USAGE
        finally:
            # load_dotenv writes straight into os.environ
            os.environ.pop("INTERVIEW_MAX_ATTEMPTS", None)


# ===================
# Logging Tests
# ===================

class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_installs_single_handler(self, monkeypatch, restore_root_level):
        """Test a bare root logger gets exactly one handler, even when called twice."""
        root = restore_root_level
        monkeypatch.setattr(root, "handlers", [])

        configure_logging("INFO")
        configure_logging("INFO")

        assert len(root.handlers) == 1
        assert root.level == logging.INFO

    def test_keeps_existing_handlers(self, monkeypatch, restore_root_level):
        """Test an embedding application's handlers are left alone."""
        root = restore_root_level
        before = [logging.NullHandler()]
        monkeypatch.setattr(root, "handlers", list(before))

        configure_logging("debug")

        assert root.handlers == before
        assert root.level == logging.DEBUG


# ===================
# Runner Tests
# ===================

class TestParseAssignment:
    """Tests for PATH=VALUE parsing."""

    def test_json_value(self):
        """Test values are decoded as JSON when possible."""
        assert parse_assignment("age=36") == ("age", 36)
        assert parse_assignment("toppings=[0, 2]") == ("toppings", [0, 2])
        assert parse_assignment("newsletter=true") == ("newsletter", True)

    def test_raw_text(self):
        """Test non-JSON values stay as text."""
        assert parse_assignment("name=Ada Lovelace") == ("name", "Ada Lovelace")
        assert parse_assignment("bread=WHEAT") == ("bread", "WHEAT")

    def test_missing_separator(self):
        """Test malformed assignments are rejected."""
        with pytest.raises(ValueError):
            parse_assignment("age")


class TestPlain:
    """Tests for JSON-friendly conversion of survey results."""

    def test_plain(self):
        """Test enums, unit variants and nested dataclasses."""
        assert _plain(Bread.WHEAT) == "WHEAT"
        assert _plain(Turkey()) == "Turkey"
        assert _plain(Combo(FillingType.HAM, FillingType.BACON)) == {
            "first": "HAM", "second": "BACON"}
        assert _plain([Path("a.txt")]) == ["a.txt"]


class TestInterviewRunner:
    """Tests for InterviewRunner."""

    def test_run_list(self):
        """Test every registered survey is listed."""
        runner, output = make_runner()
        names = runner.run_list()
        assert names == ["user-profile", "sandwich", "character"]
        assert any("A simple user profile." in line for line in output)

    def test_run_survey(self):
        """Test a console run prints the rebuilt value."""
        runner, output = make_runner(*PROFILE_ANSWERS)

        assert runner.run_survey("user-profile") == EXIT_OK
        assert json.loads(output[-1]) == {
            "name": "Ada",
            "age": 36,
            "email": "ada@example.com",
            "newsletter": True,
            "nickname": None,
        }

    def test_run_survey_json(self):
        """Test --json prints the raw response map."""
        runner, output = make_runner(*PROFILE_ANSWERS)

        assert runner.run_survey("user-profile", as_json=True) == EXIT_OK
        raw = json.loads(output[-1])
        assert raw["age"] == 36
        assert raw["nickname"] == ""

    def test_assumptions_skip_questions(self):
        """Test assumed answers are not asked."""
        runner, output = make_runner("ada@example.com", "n", "")

        code = runner.run_survey("user-profile", assumptions=['name="Ada"', "age=36"])

        assert code == EXIT_OK
        assert json.loads(output[-1])["age"] == 36

    def test_invalid_assumption_warned(self):
        """Test an assumed answer its validator rejects is reported after the run."""
        runner, output = make_runner("n", "")

        code = runner.run_survey("user-profile",
                                 assumptions=['name="Ada"', "age=36", 'email="nope"'])

        assert code == EXIT_OK
        assert "Warning: email: Please enter a valid email address" in output
        assert json.loads(output[-1])["email"] == "nope"

    def test_invalid_default(self):
        """Test a badly typed default is a usage error."""
        runner, output = make_runner()
        assert runner.run_survey("user-profile", assumptions=["age=old"]) == EXIT_USAGE
        assert output[-1].startswith("Invalid default")

    def test_unknown_survey(self):
        """Test unknown survey names are usage errors."""
        runner, output = make_runner()
        assert runner.run_survey("pizza") == EXIT_USAGE
        assert "Unknown survey" in output[-1]

    def test_cancelled(self):
        """Test a cancel word exits with the interrupt code."""
        runner, output = make_runner("Ada", "quit")
        assert runner.run_survey("user-profile") == EXIT_CANCELLED
        assert output[-1] == "\nSurvey cancelled."

    def test_attempts_exhausted(self):
        """Test running out of attempts is a backend failure."""
        runner, output = make_runner("Ada", "500", config=InterviewConfig(max_attempts=1))
        assert runner.run_survey("user-profile") == EXIT_BACKEND

    def test_export_markdown(self, tmp_path):
        """Test Markdown export writes the form."""
        runner, output = make_runner()
        target = tmp_path / "sandwich.md"

        assert runner.run_export("sandwich", str(target)) == EXIT_OK
        text = target.read_text(encoding="utf-8")
        assert text.startswith("# SandwichOrder")
        assert "( ) WHEAT" in text

    def test_export_html_omits_assumed(self, tmp_path):
        """Test assumed answers are left out of exported forms."""
        runner, output = make_runner()
        target = tmp_path / "profile.html"

        code = runner.run_export("user-profile", str(target), "html", assumptions=["age=30"])

        assert code == EXIT_OK
        page = target.read_text(encoding="utf-8")
        assert "name=\"name\"" in page
        assert "name=\"age\"" not in page


class TestMain:
    """Tests for the CLI entry point."""

    def test_list(self, clean_env, capsys):
        """Test --list exits cleanly."""
        assert main(["--list"]) == EXIT_OK
        assert "user-profile" in capsys.readouterr().out

    def test_no_survey(self, clean_env):
        """Test a missing survey name is a usage error."""
        assert main([]) == EXIT_USAGE

    def test_unknown_survey(self, clean_env):
        """Test an unknown survey name is a usage error."""
        assert main(["pizza"]) == EXIT_USAGE

    def test_markdown_export(self, clean_env):
        """Test --markdown writes a file instead of running."""
        target = clean_env / "out.md"
        assert main(["character", "--markdown", str(target)]) == EXIT_OK
        assert "# CharacterSheet" in target.read_text(encoding="utf-8")

    def test_bad_max_attempts(self, clean_env):
        """Test --max-attempts must be positive."""
        assert main(["user-profile", "--max-attempts", "0"]) == EXIT_USAGE

    def test_bad_environment(self, clean_env, monkeypatch, capsys):
        """Test configuration errors are reported on stderr."""
        monkeypatch.setenv("INTERVIEW_MAX_ATTEMPTS", "lots")
        assert main(["--list"]) == EXIT_USAGE
        assert "INTERVIEW_MAX_ATTEMPTS" in capsys.readouterr().err
