"""Configuration Management Package

Two kinds of configuration live here:

- ``UserConfig``: the saved defaults (provider, Ollama mode, model, API key)
  persisted as JSON in the per-user config directory.
- ``RunConfig``: the immutable settings for a single invocation, produced by
  ``aicommit.resolve`` and handed to the provider clients.
"""

import json
import logging
import os
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Mapping, Optional
from urllib.parse import urlsplit

from aicommit import OLLAMA_MODES, PROVIDERS

log = logging.getLogger(__name__)

APP_NAME = "aicommit"
CONFIG_FILENAME = "config.json"

OLLAMA_CHAT_PATH = "/api/chat"
OLLAMA_TAGS_PATH = "/api/tags"
LOCAL_OLLAMA_URL = f"http://localhost:11434{OLLAMA_CHAT_PATH}"
CLOUD_OLLAMA_URL = f"https://ollama.com{OLLAMA_CHAT_PATH}"
ANTHROPIC_API_URL = "https://api.anthropic.com/v1/messages"
OPENAI_API_URL = "https://api.openai.com/v1/responses"


class ConfigurationError(Exception):
    """Raised when a run cannot be configured (missing key, no models, ...)."""
    pass


@dataclass
class UserConfig:
    """Saved defaults. Every field is optional."""
    provider: Optional[str] = None
    ollama_mode: Optional[str] = None
    model: Optional[str] = None
    api_key: Optional[str] = None

    # Field name -> JSON key in the settings file
    JSON_KEYS = {
        "provider": "provider",
        "ollama_mode": "ollamaMode",
        "model": "model",
        "api_key": "apiKey",
    }

    def to_dict(self) -> dict:
        return {
            self.JSON_KEYS[f.name]: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def validate(self) -> list[str]:
        """Validate values and return a list of warnings.

        Invalid values are dropped after warning.
        """
        warnings = []

        if self.provider is not None and self.provider not in PROVIDERS:
            warnings.append(f"Ignoring unknown provider '{self.provider}'")
            self.provider = None

        if self.ollama_mode is not None and self.ollama_mode not in OLLAMA_MODES:
            warnings.append(f"Ignoring unknown ollamaMode '{self.ollama_mode}'")
            self.ollama_mode = None

        for name in ("model", "api_key"):
            value = getattr(self, name)
            if value is not None and (not isinstance(value, str) or not value.strip()):
                warnings.append(f"Ignoring invalid {self.JSON_KEYS[name]}")
                setattr(self, name, None)

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'UserConfig':
        by_json_key = {v: k for k, v in cls.JSON_KEYS.items()}
        filtered = {by_json_key[k]: v for k, v in data.items() if k in by_json_key}
        config = cls(**filtered)
        for warning in config.validate():
            log.warning("Config warning: %s", warning)
        return config


def get_user_config_path(env: Mapping[str, str] | None = None, platform: str | None = None) -> Path:
    """Per-OS location of the settings file.

    Windows: %APPDATA%/aicommit/config.json (fallback ~/AppData/Roaming).
    Everything else: $XDG_CONFIG_HOME/aicommit/config.json (fallback ~/.config).
    """
    env = os.environ if env is None else env
    platform = sys.platform if platform is None else platform

    if platform == "win32":
        base = env.get("APPDATA") or str(Path.home() / "AppData" / "Roaming")
    else:
        base = env.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / APP_NAME / CONFIG_FILENAME


class PreferenceStore:
    """Reads, writes and deletes the saved defaults file."""

    def __init__(self, path: Path | None = None):
        self.path = path or get_user_config_path()

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> UserConfig:
        """Best-effort read; a missing or unreadable file yields empty settings."""
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            return UserConfig()
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            log.warning("Could not load %s: %s", self.path, e)
            return UserConfig()

        if not isinstance(data, dict):
            log.warning("Could not load %s: expected a JSON object", self.path)
            return UserConfig()
        return UserConfig.from_dict(data)

    def write(self, config: UserConfig) -> Path:
        """Replace the whole file. The file may hold an API key, so it is 0600."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(config.to_dict(), f, indent=2)
            f.write('\n')
        log.debug("saved settings to %s", self.path)
        return self.path

    def delete(self) -> bool:
        """Remove the file. Returns False when there was nothing to delete."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        log.debug("deleted %s", self.path)
        return True


@dataclass(frozen=True)
class RunConfig:
    """Everything a provider client needs for one run."""
    provider: str
    url: str
    model: str
    ollama_mode: Optional[str] = None
    api_key: Optional[str] = None
    debug: bool = False

    def __post_init__(self):
        if self.provider not in PROVIDERS:
            raise ValueError(f"Unknown provider: {self.provider}")
        if (self.provider == "ollama") != (self.ollama_mode is not None):
            raise ValueError("ollama_mode must be set for ollama and only for ollama")
        needs_key = self.provider != "ollama" or self.ollama_mode == "cloud"
        if needs_key != bool(self.api_key):
            raise ValueError(f"api_key {'required' if needs_key else 'not allowed'} for {self.provider}")


def build_ollama_chat_url(mode: str, env: Mapping[str, str]) -> str:
    """Chat endpoint for the given Ollama mode.

    OLLAMA_HOST only applies to local mode. A bare ``host:port`` gets an
    ``http://`` scheme; a URL without a path gets the chat path appended;
    a URL with a path is used as-is.
    """
    if mode == "cloud":
        return CLOUD_OLLAMA_URL

    host = (env.get("OLLAMA_HOST") or "").strip()
    if not host:
        return LOCAL_OLLAMA_URL

    base = host if "://" in host else f"http://{host}"
    try:
        path = urlsplit(base).path
    except ValueError as e:
        raise ConfigurationError(f"Invalid OLLAMA_HOST '{host}': {e}")
    if path not in ("", "/"):
        return base.rstrip("/")
    return f"{base.rstrip('/')}{OLLAMA_CHAT_PATH}"


def build_ollama_tags_url(chat_url: str) -> str:
    """Model inventory endpoint on the same host as ``chat_url``."""
    if chat_url.endswith(OLLAMA_CHAT_PATH):
        return chat_url[: -len(OLLAMA_CHAT_PATH)] + OLLAMA_TAGS_PATH
    parts = urlsplit(chat_url)
    return f"{parts.scheme}://{parts.netloc}{OLLAMA_TAGS_PATH}"


def build_run_config(
    provider: str,
    model: str,
    env: Mapping[str, str],
    ollama_mode: str | None = None,
    api_key: str | None = None,
) -> RunConfig:
    if provider == "anthropic":
        url = ANTHROPIC_API_URL
    elif provider == "openai":
        url = OPENAI_API_URL
    else:
        url = build_ollama_chat_url(ollama_mode or "local", env)

    return RunConfig(
        provider=provider,
        url=url,
        model=model,
        ollama_mode=(ollama_mode or "local") if provider == "ollama" else None,
        api_key=api_key,
        debug=env.get("DEBUG") == "1",
    )


__all__ = [
    "ConfigurationError",
    "UserConfig",
    "PreferenceStore",
    "RunConfig",
    "get_user_config_path",
    "build_ollama_chat_url",
    "build_ollama_tags_url",
    "build_run_config",
    "LOCAL_OLLAMA_URL",
    "CLOUD_OLLAMA_URL",
    "OLLAMA_CHAT_PATH",
    "OLLAMA_TAGS_PATH",
]
