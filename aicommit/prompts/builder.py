"""Prompt Builder - Construct LLM prompts for commit message generation."""

# Conventional commit types the model may choose from
COMMIT_TYPES = ('feat', 'fix', 'chore', 'refactor', 'docs', 'style', 'test', 'perf', 'ci', 'build')

SYSTEM_PROMPT = (
    "You are a git commit message generator. Output ONLY the commit message line "
    "- no explanation, no description, no bullet points, no markdown, no preamble."
)

_USER_TEMPLATE = """\
Write a single git commit message for the diff below using conventional commits format ({types}, etc).

Rules:
- Output ONLY the commit message, nothing else
- One line, no period at the end
- No explanation, no bullet points, no numbering
- Example output: feat: add user authentication

<diff>
{diff}
</diff>"""


def build_user_prompt(diff: str) -> str:
    """Wrap the staged diff in the instruction block sent as the user turn."""
    return _USER_TEMPLATE.format(types=', '.join(COMMIT_TYPES), diff=diff)
