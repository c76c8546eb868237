"""Shared fixtures: a scripted UI and a fake git for flow tests."""

import io

import pytest


class FakeUI:
    """Answers prompts from scripted lists and records what was asked.

    ``selections`` holds menu values to pick (``None`` picks the first item),
    ``inputs`` holds text answers, ``actions`` holds review actions.
    """

    def __init__(self, selections=(), inputs=(), actions=(), edits=(), confirms=(), interactive=True):
        self.selections = list(selections)
        self.inputs = list(inputs)
        self.actions = list(actions)
        self.edits = list(edits)
        self.confirms = list(confirms)
        self.interactive = interactive
        self.stdout = io.StringIO()
        self.menus = []
        self.prompts = []

    def write(self, text=""):
        self.stdout.write(text)

    def write_line(self, text=""):
        self.write(f"{text}\n")

    def select(self, title, items):
        self.menus.append((title, [item.value for item in items]))
        value = self.selections.pop(0)
        return items[0].value if value is None else value

    def prompt_input(self, message, default="", secret=False):
        self.prompts.append((message, secret))
        return self.inputs.pop(0) or default

    def prompt_action(self):
        return self.actions.pop(0)

    def edit(self, original):
        return self.edits.pop(0) or original

    def confirm(self, question):
        self.prompts.append((question, False))
        return self.confirms.pop(0)


class FakeGit:
    """Records commits instead of running git."""

    def __init__(self, diff="diff --git a/app.py b/app.py\n+x = 1\n", status=0):
        self.diff = diff
        self.status = status
        self.commits = []

    def get_staged_diff(self):
        return self.diff

    def run_commit(self, message):
        self.commits.append(message)
        return self.status


class FakeClient:
    """Returns scripted messages (or raises scripted exceptions) in order."""

    name = "fake"

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    def generate(self, diff, config):
        self.calls += 1
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def fake_ui():
    return FakeUI


@pytest.fixture
def fake_git():
    return FakeGit


@pytest.fixture
def fake_client():
    return FakeClient
