"""Application configuration loaded from config.yaml and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from recruit_copilot.errors import ConfigurationError

DEFAULT_PROVIDER = "openrouter"
DEFAULT_MODEL = "google/gemini-3-flash-preview"

API_KEY_ENV = {
    "openai": "OPENAI_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
    "google": "GOOGLE_API_KEY",
    "gemini": "GOOGLE_API_KEY",
    "kimi": "KIMI_API_KEY",
    "moonshot": "KIMI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


@dataclass(frozen=True)
class LLMConfig:
    provider: str = DEFAULT_PROVIDER
    model: str = DEFAULT_MODEL
    temperature: float = 0.7
    timeout: int = 120
    api_keys: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not 0.0 <= self.temperature <= 2.0:
            raise ValueError(f"temperature must be between 0 and 2, got {self.temperature}")
        if self.timeout < 1:
            raise ValueError(f"timeout must be >= 1 second, got {self.timeout}")

    def api_key_for(self, provider: str) -> str:
        """Key for *provider*: explicit config first, then its env variable."""
        name = provider.lower()
        if self.api_keys.get(name):
            return self.api_keys[name]
        env_var = API_KEY_ENV.get(name)
        return os.environ.get(env_var, "") if env_var else ""


@dataclass(frozen=True)
class InvitationConfig:
    api_url: str = ""
    api_key: str = ""
    timeout: int = 30

    def __post_init__(self) -> None:
        if self.timeout < 1:
            raise ValueError(f"timeout must be >= 1 second, got {self.timeout}")


@dataclass(frozen=True)
class ConsultantConfig:
    max_history_messages: int = 16
    max_job_description_chars: int = 6000

    def __post_init__(self) -> None:
        if self.max_history_messages < 1:
            raise ValueError(f"max_history_messages must be >= 1, got {self.max_history_messages}")


@dataclass(frozen=True)
class TelemetryConfig:
    usage_db_path: str = ""  # empty disables SQLite persistence

    @property
    def resolved_db_path(self) -> Path | None:
        return Path(self.usage_db_path).expanduser() if self.usage_db_path else None


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    invitation: InvitationConfig = field(default_factory=InvitationConfig)
    consultant: ConsultantConfig = field(default_factory=ConsultantConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)


def _env_overrides() -> tuple[dict, dict]:
    llm: dict = {}
    if os.environ.get("LLM_PROVIDER"):
        llm["provider"] = os.environ["LLM_PROVIDER"]
    if os.environ.get("LLM_MODEL"):
        llm["model"] = os.environ["LLM_MODEL"]
    try:
        if os.environ.get("LLM_TEMPERATURE"):
            llm["temperature"] = float(os.environ["LLM_TEMPERATURE"])
        if os.environ.get("LLM_TIMEOUT"):
            llm["timeout"] = int(os.environ["LLM_TIMEOUT"])
    except ValueError as exc:
        raise ConfigurationError(f"Invalid numeric LLM setting in environment: {exc}") from exc

    invitation: dict = {}
    if os.environ.get("INVITATION_API_URL"):
        invitation["api_url"] = os.environ["INVITATION_API_URL"]
    if os.environ.get("INVITATION_API_KEY"):
        invitation["api_key"] = os.environ["INVITATION_API_KEY"]
    return llm, invitation


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, then apply environment overrides."""
    if path is None:
        candidate = Path.cwd() / "config.yaml"
        if candidate.exists():
            path = candidate

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    if not isinstance(raw, dict):
        raise ConfigurationError(f"{path}: expected a mapping at the top level")

    llm_env, invitation_env = _env_overrides()
    try:
        return AppConfig(
            llm=LLMConfig(**{**raw.get("llm", {}), **llm_env}),
            invitation=InvitationConfig(**{**raw.get("invitation", {}), **invitation_env}),
            consultant=ConsultantConfig(**raw.get("consultant", {})),
            telemetry=TelemetryConfig(**raw.get("telemetry", {})),
        )
    except TypeError as exc:
        # unknown keys, or a section that is not a mapping
        raise ConfigurationError(f"Invalid config section in {path}: {exc}") from exc
