"""CLI Argument Parsing"""

import argparse
from dataclasses import dataclass

import argcomplete

# Flag -> (provider, ollama mode)
PROVIDER_FLAGS = {
    'local': ('ollama', 'local'),
    'cloud': ('ollama', 'cloud'),
    'anthropic': ('anthropic', None),
    'openai': ('openai', None),
}

EPILOG = """\
Environment variables:
  ANTHROPIC_API_KEY    Use Anthropic (sets provider to anthropic automatically)
  OPENAI_API_KEY       Use OpenAI (sets provider to openai automatically)
  OLLAMA_API_KEY       Use Ollama Cloud (sets provider to cloud automatically)
  OLLAMA_HOST          Custom local Ollama host (default: localhost:11434)
  DEBUG=1              Print request/response debug info

Examples:
  aicommit
  aicommit --model mistral
  aicommit --anthropic --model claude-haiku-4-5-20251001
  aicommit --cloud --model devstral-small-2:24b
  aicommit --setup
  aicommit --reset --yes"""


class ParseError(Exception):
    """Raised for unknown flags or flags missing their value."""
    pass


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting with status 2."""

    def error(self, message):
        raise ParseError(message)


@dataclass(frozen=True)
class ParsedArgs:
    provider: str | None = None
    ollama_mode: str | None = None
    model: str | None = None
    help: bool = False
    version: bool = False
    setup: bool = False
    reset: bool = False
    yes: bool = False


def _model_name(value: str) -> str:
    if not value.strip() or value.startswith('-'):
        raise argparse.ArgumentTypeError(f"requires a model name (e.g. --model mistral), got '{value}'")
    return value.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog='aicommit',
        description='AI-powered git commit message generator',
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
    )

    parser.add_argument('-h', '--help', action='store_true', help='Show this help')
    parser.add_argument('-v', '--version', action='store_true', help='Print version')

    # Provider for this run only
    providers = parser.add_mutually_exclusive_group()
    providers.add_argument('--local', dest='provider_flag', action='store_const', const='local', help='Use local Ollama for this run')
    providers.add_argument('--cloud', dest='provider_flag', action='store_const', const='cloud', help='Use Ollama Cloud for this run')
    providers.add_argument('--anthropic', dest='provider_flag', action='store_const', const='anthropic', help='Use Anthropic (Claude) for this run')
    providers.add_argument('--openai', dest='provider_flag', action='store_const', const='openai', help='Use OpenAI for this run')

    parser.add_argument('-m', '--model', type=_model_name, metavar='NAME', help='Model to use (overrides saved default for this run)')

    # Saved settings
    parser.add_argument('--setup', action='store_true', help='Re-run the setup prompts to change saved defaults')
    parser.add_argument('--reset', action='store_true', help='Delete saved settings')
    parser.add_argument('-y', '--yes', action='store_true', help='Skip the confirmation for --reset')

    argcomplete.autocomplete(parser)
    return parser


def parse_args(argv: list[str] | None = None) -> ParsedArgs:
    """Parse argv (defaults to sys.argv[1:]). Raises ParseError on bad input."""
    ns = build_parser().parse_args(argv)
    provider, ollama_mode = PROVIDER_FLAGS.get(ns.provider_flag, (None, None))
    return ParsedArgs(
        provider=provider,
        ollama_mode=ollama_mode,
        model=ns.model,
        help=ns.help,
        version=ns.version,
        setup=ns.setup,
        reset=ns.reset,
        yes=ns.yes,
    )
