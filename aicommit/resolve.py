"""Decide which provider, credential and model a run uses.

Precedence for every decision: CLI flag > environment > saved settings >
interactive prompt. Each step reports whether the user was asked
(``from_interactive``), which decides what gets saved at the end of the run:
answers the user gave are remembered, one-off flags and env vars are not.

The functions here never read process-wide state; the saved settings, the
environment and the UI are passed in.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Mapping, TypeVar

from aicommit.cli.args import ParsedArgs
from aicommit.cli.tui import MenuItem
from aicommit.config import (
    ConfigurationError,
    RunConfig,
    UserConfig,
    build_ollama_chat_url,
    build_ollama_tags_url,
    build_run_config,
)
from aicommit.llm import ANTHROPIC_MODELS, DEFAULT_CLOUD_MODEL, OPENAI_MODELS, list_local_models

log = logging.getLogger(__name__)

T = TypeVar("T")

CUSTOM_MODEL = "__custom__"

# Checked in this order when no provider flag is given
ENV_PROVIDERS = [
    ("ANTHROPIC_API_KEY", "anthropic", None),
    ("OPENAI_API_KEY", "openai", None),
    ("OLLAMA_API_KEY", "ollama", "cloud"),
]

PROVIDER_MENU = [
    MenuItem("Local", ("ollama", "local"), "private, uses your Ollama instance"),
    MenuItem("Cloud", ("ollama", "cloud"), "Ollama Cloud, requires OLLAMA_API_KEY"),
    MenuItem("Anthropic", ("anthropic", None), "Claude models, requires ANTHROPIC_API_KEY"),
    MenuItem("OpenAI", ("openai", None), "Codex & GPT models, requires OPENAI_API_KEY"),
]

NO_LOCAL_MODELS_MESSAGE = "No local models found. Install one with:\n  ollama pull llama3.2"


@dataclass(frozen=True)
class ResolvedChoice(Generic[T]):
    value: T
    from_interactive: bool


@dataclass(frozen=True)
class ProviderChoice:
    provider: str
    ollama_mode: str | None
    from_interactive: bool


@dataclass(frozen=True)
class KeySpec:
    """Which credential a provider needs and how to ask for it."""
    label: str
    env_var: str


API_KEYS = {
    ("anthropic", None): KeySpec("Anthropic", "ANTHROPIC_API_KEY"),
    ("openai", None): KeySpec("OpenAI", "OPENAI_API_KEY"),
    ("ollama", "cloud"): KeySpec("Ollama Cloud", "OLLAMA_API_KEY"),
}


def resolve_provider(args: ParsedArgs, saved: UserConfig, env: Mapping[str, str], ui) -> ProviderChoice:
    if args.provider:
        log.debug("provider %s/%s from command line", args.provider, args.ollama_mode)
        return ProviderChoice(args.provider, args.ollama_mode, from_interactive=False)

    for env_var, provider, mode in ENV_PROVIDERS:
        if (env.get(env_var) or "").strip():
            log.debug("provider %s from %s", provider, env_var)
            return ProviderChoice(provider, mode, from_interactive=False)

    if saved.provider and not args.setup:
        mode = (saved.ollama_mode or "local") if saved.provider == "ollama" else None
        log.debug("provider %s/%s from saved settings", saved.provider, mode)
        return ProviderChoice(saved.provider, mode, from_interactive=False)

    provider, mode = ui.select("Provider:", PROVIDER_MENU)
    return ProviderChoice(provider, mode, from_interactive=True)


def resolve_api_key(env_key: str | None, saved_key: str | None, spec: KeySpec, ui) -> str:
    """Environment key, else saved key, else ask (terminal only)."""
    key = (env_key or "").strip() or (saved_key or "").strip()
    if key:
        return key

    if not ui.interactive:
        raise ConfigurationError(
            f"{spec.label} provider requires {spec.env_var}.\n"
            f"Set it with: {spec.env_var}=... aicommit"
        )

    entered = ui.prompt_input(f"{spec.label} API key: ", secret=True)
    if not entered:
        raise ConfigurationError(f"API key is required for {spec.label} provider.")
    return entered


def _saved_key_for(choice: ProviderChoice, saved: UserConfig) -> str | None:
    """A saved key only counts for the provider it was saved with."""
    if choice.provider == "ollama":
        return saved.api_key if saved.ollama_mode == "cloud" else None
    return saved.api_key if saved.provider == choice.provider else None


def _resolve_hosted_model(args: ParsedArgs, saved: UserConfig, provider: str,
                          models: list[tuple[str, str]], ui) -> ResolvedChoice[str]:
    if args.model:
        return ResolvedChoice(args.model, from_interactive=False)
    if not args.setup and saved.provider == provider and saved.model:
        return ResolvedChoice(saved.model, from_interactive=False)

    items = [MenuItem(name, name, hint) for name, hint in models]
    items.append(MenuItem("Enter model name...", CUSTOM_MODEL))
    selected = ui.select("Model:", items)

    if selected == CUSTOM_MODEL:
        model = ui.prompt_input("Model name: ")
        if not model:
            raise ConfigurationError("Model name is required.")
        return ResolvedChoice(model, from_interactive=True)
    return ResolvedChoice(selected, from_interactive=True)


def resolve_anthropic_model(args: ParsedArgs, saved: UserConfig, ui) -> ResolvedChoice[str]:
    return _resolve_hosted_model(args, saved, "anthropic", ANTHROPIC_MODELS, ui)


def resolve_openai_model(args: ParsedArgs, saved: UserConfig, ui) -> ResolvedChoice[str]:
    return _resolve_hosted_model(args, saved, "openai", OPENAI_MODELS, ui)


def resolve_ollama_model(
    args: ParsedArgs,
    saved: UserConfig,
    mode: str,
    tags_url: str,
    ui,
    list_models: Callable[[str], list[str]] = list_local_models,
) -> ResolvedChoice[str]:
    """Model for Ollama.

    Local mode lists the installed models first. When a provider flag picked
    local mode for this run only, the first model as listed by the server is
    used without asking; the server's order is taken as-is.
    """
    if args.model:
        return ResolvedChoice(args.model, from_interactive=False)

    if mode == "cloud":
        saved_model = saved.model if saved.ollama_mode == "cloud" else None
        if saved_model and not args.setup:
            return ResolvedChoice(saved_model, from_interactive=False)
        entered = ui.prompt_input(f"Cloud model [{DEFAULT_CLOUD_MODEL}]: ")
        return ResolvedChoice(entered or DEFAULT_CLOUD_MODEL, from_interactive=True)

    models = list_models(tags_url)
    log.debug("installed models: %s", models)
    if not models:
        raise ConfigurationError(NO_LOCAL_MODELS_MESSAGE)

    if (
        not args.setup
        and saved.provider == "ollama"
        and saved.ollama_mode in (None, "local")
        and saved.model
        and saved.model in models
    ):
        return ResolvedChoice(saved.model, from_interactive=False)

    if args.provider and not args.setup:
        return ResolvedChoice(models[0], from_interactive=False)

    model = ui.select("Model:", [MenuItem(m, m) for m in models])
    return ResolvedChoice(model, from_interactive=True)


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving a run, plus what (if anything) to save."""
    run_config: RunConfig
    provider_choice: ProviderChoice
    model_choice: ResolvedChoice[str]
    api_key_is_new: bool

    @property
    def should_persist(self) -> bool:
        return (
            self.provider_choice.from_interactive
            or self.model_choice.from_interactive
            or self.api_key_is_new
        )

    def to_user_config(self) -> UserConfig:
        config = self.run_config
        return UserConfig(
            provider=config.provider,
            ollama_mode=config.ollama_mode,
            model=config.model,
            api_key=config.api_key,
        )


def resolve_settings(
    args: ParsedArgs,
    saved: UserConfig,
    env: Mapping[str, str],
    ui,
    list_models: Callable[[str], list[str]] = list_local_models,
) -> Resolution:
    """Provider, then credential, then model. Later steps depend on earlier ones."""
    choice = resolve_provider(args, saved, env, ui)

    api_key = None
    spec = API_KEYS.get((choice.provider, choice.ollama_mode))
    if spec:
        api_key = resolve_api_key(env.get(spec.env_var), _saved_key_for(choice, saved), spec, ui)

    if choice.provider == "anthropic":
        model_choice = resolve_anthropic_model(args, saved, ui)
    elif choice.provider == "openai":
        model_choice = resolve_openai_model(args, saved, ui)
    else:
        tags_url = build_ollama_tags_url(build_ollama_chat_url(choice.ollama_mode, env))
        model_choice = resolve_ollama_model(args, saved, choice.ollama_mode, tags_url, ui, list_models)

    run_config = build_run_config(
        choice.provider,
        model_choice.value,
        env,
        ollama_mode=choice.ollama_mode,
        api_key=api_key,
    )
    return Resolution(
        run_config=run_config,
        provider_choice=choice,
        model_choice=model_choice,
        api_key_is_new=api_key is not None and not saved.api_key,
    )
