"""CLI Main Entry Point"""

import logging
import os
import sys
from typing import Mapping

from aicommit import __version__, provider_label
from aicommit.config import ConfigurationError, PreferenceStore, get_user_config_path
from aicommit.git import GitAnalyzer, GitError
from aicommit.llm import ProviderError, get_client, list_local_models
from aicommit.output import info, print_error, print_warning
from aicommit.resolve import resolve_settings

from aicommit.cli.args import ParseError, build_parser, parse_args
from aicommit.cli.commands import run_reset
from aicommit.cli.loop import run_interaction_loop
from aicommit.cli.tui import TerminalUI, UserCancelled

log = logging.getLogger("aicommit")


def _configure_logging(env: Mapping[str, str]) -> None:
    """Library warnings always; DEBUG=1 turns on debug output for aicommit only."""
    logging.basicConfig(format="%(name)s %(levelname)s: %(message)s")
    log.setLevel(logging.DEBUG if env.get("DEBUG") == "1" else logging.WARNING)


def _save_settings(store: PreferenceStore, resolution) -> None:
    """Remember interactive answers; a failed write only warns."""
    try:
        path = store.write(resolution.to_user_config())
    except OSError as e:
        print_warning(f"Could not save settings to {store.path}: {e}")
        return
    log.debug("settings saved to %s", path)


def _read_staged_diff(git: GitAnalyzer) -> str:
    diff = git.get_staged_diff()
    if not diff.strip():
        raise ConfigurationError('No staged changes found. Stage your changes with "git add" first.')
    return diff


def _generate_commit_flow(args, env: Mapping[str, str], ui: TerminalUI, store: PreferenceStore) -> int:
    """Resolve settings, read the diff and run the review loop.

    Returns:
        int: Exit code
    """
    saved = store.read()
    resolution = resolve_settings(args, saved, env, ui, list_models=list_local_models)
    if resolution.should_persist:
        _save_settings(store, resolution)

    config = resolution.run_config
    label = provider_label(config.provider, config.ollama_mode)
    ui.write_line(f"Provider: {info(label)} - Model: {info(config.model)}")

    git = GitAnalyzer()
    diff = _read_staged_diff(git)
    client = get_client(config)
    return run_interaction_loop(diff, config, client, ui, git)


def main(argv: list[str] | None = None, env: Mapping[str, str] | None = None) -> int:
    """Main entry point for the CLI."""
    env = os.environ if env is None else env

    try:
        args = parse_args(argv)
    except ParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.help:
        print(build_parser().format_help())
        return 0
    if args.version:
        print(__version__)
        return 0

    _configure_logging(env)
    ui = TerminalUI()
    store = PreferenceStore(get_user_config_path(env))

    try:
        if args.reset:
            return run_reset(store, ui, assume_yes=args.yes)
        return _generate_commit_flow(args, env, ui, store)
    except (UserCancelled, KeyboardInterrupt):
        ui.write_line("Cancelled.")
        return 0
    except (ConfigurationError, GitError, ProviderError) as e:
        print_error(str(e))
        return 1
    except Exception as e:
        log.debug("unexpected error", exc_info=True)
        print_error(str(e) or type(e).__name__)
        return 1


def entrypoint() -> None:
    """Console script entrypoint."""
    raise SystemExit(main())
