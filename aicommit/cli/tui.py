"""Terminal prompts: menus, single-key answers and line input.

Menus are questionary selects; single-key answers and free text are
prompt_toolkit sessions. Every prompt raises ``UserCancelled`` on Escape or
Ctrl+C so the caller can stop the run without committing.

Without a terminal, menus pick their first item and every other prompt reads
plain lines from stdin: the first character of a line is the key, an empty
line is Enter and end of input cancels.
"""

import sys
from dataclasses import dataclass
from typing import Any, Generic, Mapping, TextIO, TypeVar

import questionary
from prompt_toolkit import PromptSession
from prompt_toolkit.input import Input
from prompt_toolkit.key_binding import KeyBindings, merge_key_bindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.output import Output

T = TypeVar("T")

ENTER = "enter"
# Escape, Ctrl+C, Ctrl+D read from a plain stream
CANCEL_CHARS = ("\x1b", "\x03", "\x04")

ACTION_PROMPT = "Accept (a), Regenerate (r), Edit (e), Esc/Ctrl+C to cancel: "
ACTION_KEYS = {
    "a": "accept",
    ENTER: "accept",
    "r": "regenerate",
    "e": "edit",
}
CONFIRM_KEYS = {
    "y": True,
    "n": False,
    ENTER: False,
}


class UserCancelled(Exception):
    """Escape or Ctrl+C at a prompt."""
    pass


@dataclass(frozen=True)
class MenuItem(Generic[T]):
    label: str
    value: T
    hint: str | None = None


def _cancel_bindings() -> KeyBindings:
    bindings = KeyBindings()

    @bindings.add(Keys.Escape, eager=True)
    def _cancel(event):
        event.app.exit(exception=UserCancelled())

    return bindings


def _exit_with(value):
    def _answer(event):
        event.app.exit(result=value)
    return _answer


def _answer_bindings(answers: Mapping[str, Any]) -> KeyBindings:
    """End the prompt on one of ``answers`` (either case); swallow other keys."""
    bindings = _cancel_bindings()

    @bindings.add(Keys.Any)
    def _ignore(event):
        pass

    for key, value in answers.items():
        for variant in {key} if key == ENTER else {key.lower(), key.upper()}:
            bindings.add(variant, eager=True)(_exit_with(value))
    return bindings


class TerminalUI:
    """Interactive prompts used by setup, the review loop and ``--reset``.

    ``interactive`` defaults to whether stdin is a terminal. ``pt_input`` and
    ``pt_output`` are handed to every prompt_toolkit application; leave them
    unset to use the real terminal.
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None,
                 interactive: bool | None = None,
                 pt_input: Input | None = None, pt_output: Output | None = None):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        if interactive is None:
            interactive = hasattr(self.stdin, "isatty") and self.stdin.isatty()
        self.interactive = interactive
        self._app_kwargs = {}
        if pt_input is not None:
            self._app_kwargs["input"] = pt_input
        if pt_output is not None:
            self._app_kwargs["output"] = pt_output

    def write(self, text: str = "") -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def write_line(self, text: str = "") -> None:
        self.write(f"{text}\n")

    @staticmethod
    def _run(prompt):
        try:
            return prompt()
        except (KeyboardInterrupt, EOFError):
            raise UserCancelled() from None

    def _read_line_answer(self, answers: Mapping[str, T]) -> T:
        while True:
            line = self.stdin.readline()
            if not line:
                self.write_line()
                raise UserCancelled()
            line = line.rstrip("\r\n")
            key = line[:1].lower() or ENTER
            if key in CANCEL_CHARS:
                self.write_line()
                raise UserCancelled()
            if key in answers:
                self.write_line(line[:1])
                return answers[key]

    def _key_prompt(self, message: str, answers: Mapping[str, T]) -> T:
        if not self.interactive:
            self.write(message)
            return self._read_line_answer(answers)
        session = PromptSession(key_bindings=_answer_bindings(answers), **self._app_kwargs)
        return self._run(lambda: session.prompt(message))

    # -- menus ------------------------------------------------------------

    def select(self, title: str, items: list[MenuItem[T]]) -> T:
        """Pick one item with the arrow keys (or j/k) and Enter."""
        if not items:
            raise ValueError("select() needs at least one item")
        if not self.interactive:
            self.write_line(f"{title} {items[0].label}")
            return items[0].value

        question = questionary.select(
            title,
            choices=[questionary.Choice(item.label, value=item.value, description=item.hint) for item in items],
            **self._app_kwargs,
        )
        app = question.application
        app.key_bindings = merge_key_bindings([app.key_bindings, _cancel_bindings()])
        return self._run(question.unsafe_ask)

    # -- single keys ------------------------------------------------------

    def prompt_action(self, prompt: str = ACTION_PROMPT) -> str:
        """Wait for accept / regenerate / edit. Other keys are ignored."""
        return self._key_prompt(prompt, ACTION_KEYS)

    def confirm(self, question: str) -> bool:
        """Yes/no question; ``n`` or Enter means no."""
        return self._key_prompt(f"{question} [y/N] ", CONFIRM_KEYS)

    # -- text -------------------------------------------------------------

    def prompt_input(self, message: str, default: str = "", secret: bool = False) -> str:
        """Read one line of text, pre-filled with ``default``. Returns it trimmed."""
        if self.interactive:
            session = PromptSession(key_bindings=_cancel_bindings(), **self._app_kwargs)
            return self._run(lambda: session.prompt(message, default=default, is_password=secret)).strip()

        self.write(message)
        line = self.stdin.readline()
        if not line.endswith("\n"):
            self.write_line()
        return (line.strip() or default).strip()

    def edit(self, original: str) -> str:
        """Let the user edit the message in place. Blank input keeps the original."""
        if self.interactive:
            edited = self.prompt_input("Edit commit message (Esc to cancel):\n> ", default=original)
        else:
            self.write_line("Edit commit message (empty line keeps it):")
            edited = self.prompt_input("> ")
        return edited or original


__all__ = [
    "MenuItem",
    "TerminalUI",
    "UserCancelled",
    "ACTION_KEYS",
    "CONFIRM_KEYS",
]
