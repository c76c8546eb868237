"""Review loop: generate a message, then accept, regenerate or edit it."""

import logging

from aicommit.config import RunConfig
from aicommit.llm import LLMClient, ProviderError
from aicommit.output import Spinner, bold, colorize_commit_type, dim, print_error

log = logging.getLogger(__name__)

ACCEPT = "accept"
REGENERATE = "regenerate"
EDIT = "edit"


def _generate(client: LLMClient, diff: str, config: RunConfig, ui) -> str:
    """Run generation behind a spinner."""
    log.debug("generating with %s", client.name)
    with Spinner("Generating commit message", stream=ui.stdout):
        return client.generate(diff, config)


def _present(ui, message: str) -> None:
    ui.write_line()
    ui.write_line(bold("Generated commit message:"))
    ui.write_line()
    ui.write_line(f"  {colorize_commit_type(message)}")
    ui.write_line()


def run_interaction_loop(diff: str, config: RunConfig, client: LLMClient, ui, git) -> int:
    """Drive generate -> review until the message is committed.

    Returns the exit code for the process: 1 if generation failed, otherwise
    git's own commit status. Cancelling a prompt raises ``UserCancelled``
    before anything is committed. Failed requests are never retried; the user
    can ask for a new message instead.
    """
    while True:
        try:
            message = _generate(client, diff, config, ui)
        except ProviderError as e:
            print_error(str(e))
            return 1
        except Exception as e:
            log.debug("generation failed", exc_info=True)
            print_error(str(e))
            return 1

        _present(ui, message)
        action = ui.prompt_action()

        if action == REGENERATE:
            ui.write_line(dim("Regenerating..."))
            continue

        if action == EDIT:
            # Committed as typed, without another review round
            message = ui.edit(message)

        status = git.run_commit(message)
        if status != 0:
            log.debug("git commit exited with %s", status)
        return status
