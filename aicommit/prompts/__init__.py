"""Prompt Construction Package"""

from aicommit.prompts.builder import COMMIT_TYPES, SYSTEM_PROMPT, build_user_prompt

__all__ = [
    "COMMIT_TYPES",
    "SYSTEM_PROMPT",
    "build_user_prompt",
]
