"""
Unit tests for command-line parsing.

Run with:
    pytest tests/test_args.py -v
"""

import pytest

from aicommit.cli.args import ParseError, ParsedArgs, build_parser, parse_args


# ---------------------------------------------------------------------------
# Provider flags
# ---------------------------------------------------------------------------

class TestProviderFlags:
    """--local / --cloud / --anthropic / --openai."""

    def test_no_flags(self):
        assert parse_args([]) == ParsedArgs()

    @pytest.mark.parametrize("flag, provider, mode", [
        ("--local", "ollama", "local"),
        ("--cloud", "ollama", "cloud"),
        ("--anthropic", "anthropic", None),
        ("--openai", "openai", None),
    ])
    def test_flag_sets_provider(self, flag, provider, mode):
        args = parse_args([flag])
        assert args.provider == provider
        assert args.ollama_mode == mode

    def test_provider_flags_are_exclusive(self):
        with pytest.raises(ParseError, match="not allowed with"):
            parse_args(["--local", "--openai"])


# ---------------------------------------------------------------------------
# Model and command flags
# ---------------------------------------------------------------------------

class TestModelFlag:

    @pytest.mark.parametrize("argv", [
        ["--model", "mistral"],
        ["-m", "mistral"],
        ["--model=mistral"],
    ])
    def test_model_forms(self, argv):
        assert parse_args(argv).model == "mistral"

    def test_model_is_trimmed(self):
        assert parse_args(["--model", "  llama3.2 "]).model == "llama3.2"

    def test_missing_value(self):
        with pytest.raises(ParseError):
            parse_args(["--model"])

    def test_blank_value(self):
        with pytest.raises(ParseError, match="requires a model name"):
            parse_args(["--model", "   "])

    def test_combined_with_provider(self):
        args = parse_args(["--anthropic", "--model", "claude-haiku-4-5-20251001"])
        assert args.provider == "anthropic"
        assert args.model == "claude-haiku-4-5-20251001"


class TestCommandFlags:

    @pytest.mark.parametrize("argv, field", [
        (["-h"], "help"),
        (["--help"], "help"),
        (["-v"], "version"),
        (["--version"], "version"),
        (["--setup"], "setup"),
        (["--reset"], "reset"),
        (["--reset", "-y"], "yes"),
        (["--reset", "--yes"], "yes"),
    ])
    def test_boolean_flags(self, argv, field):
        assert getattr(parse_args(argv), field) is True

    def test_unknown_flag(self):
        with pytest.raises(ParseError, match="unrecognized arguments"):
            parse_args(["--bogus"])

    @pytest.mark.parametrize("argv", [
        ["--loc"],
        ["--mod", "mistral"],
        ["--set"],
        ["--anth"],
        ["--re"],
    ])
    def test_abbreviated_flags_rejected(self, argv):
        with pytest.raises(ParseError, match="unrecognized arguments"):
            parse_args(argv)

    def test_positional_rejected(self):
        with pytest.raises(ParseError):
            parse_args(["extra"])


class TestHelpText:

    def test_lists_flags_and_environment(self):
        text = build_parser().format_help()
        for needle in ("--local", "--cloud", "--anthropic", "--openai", "--model",
                       "--setup", "--reset", "--yes", "ANTHROPIC_API_KEY",
                       "OPENAI_API_KEY", "OLLAMA_API_KEY", "OLLAMA_HOST", "DEBUG=1"):
            assert needle in text
