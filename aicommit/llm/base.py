"""LLM Base Classes and Shared Code"""

import json
import logging
from abc import ABC, abstractmethod

from aicommit.config import RunConfig

log = logging.getLogger(__name__)


class ProviderError(Exception):
    """Raised when a provider request fails. The message is shown to the user as-is."""
    pass


class LLMClient(ABC):
    """Abstract base for provider clients.

    One instance serves every generation of a run; ``generate`` may be called
    again when the user asks for a new message.
    """

    @abstractmethod
    def generate(self, diff: str, config: RunConfig) -> str:
        """Return a trimmed commit message for ``diff``."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass


def log_payload(config: RunConfig, title: str, payload) -> None:
    """Echo a request or response body when DEBUG=1."""
    if config.debug:
        log.debug("%s:\n%s", title, json.dumps(payload, indent=2, default=str))
