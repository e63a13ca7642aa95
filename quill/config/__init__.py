"""Configuration Management Package"""

import json
import os
import sys
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

from quill import CONFIG_DIR
from quill.errors import QuillError
from quill.git.version import DEFAULT_MANIFEST
from quill.prompts.templates import DEFAULT_COMMIT_PROMPT, DEFAULT_CHANGELOG_PROMPT

DEFAULT_PROVIDER = "ollama"
DEFAULT_MODEL = "mistral:7b"

CONFIG_FILES = {
    "config": "config.json",
    "commit_prompt": "commit.md",
    "changelog_prompt": "changelog.md",
    "history": "changelog.history.json",
}

MODEL_ENV_VARS = {
    "commit": "QUILL_COMMIT_MODEL",
    "changelog": "QUILL_CHANGELOG_MODEL",
}


class ConfigError(QuillError):
    """Raised for malformed configuration input."""
    pass


def valid_providers() -> set[str]:
    """Provider names the LLM registry can build clients for."""
    # quill.llm imports this module, so the registry is looked up late
    from quill.llm.providers import PROVIDERS
    return set(PROVIDERS)


@dataclass(frozen=True)
class ModelSpec:
    """A provider/model pair, e.g. anthropic/claude-sonnet-4-20250514."""
    provider: str = DEFAULT_PROVIDER
    model: str = DEFAULT_MODEL

    def __str__(self) -> str:
        return f"{self.provider}/{self.model}"

    @classmethod
    def parse(cls, value: str) -> 'ModelSpec':
        """Parse 'provider/model'. Everything after the first '/' is the model."""
        provider, sep, model = value.strip().partition("/")
        if not sep or not provider or not model:
            raise ConfigError(
                f'Invalid model format: "{value}"\n'
                "Expected format: provider/model (e.g., anthropic/claude-sonnet-4-20250514)"
            )
        return cls(provider=provider, model=model)

    def require_known_provider(self) -> 'ModelSpec':
        providers = valid_providers()
        if self.provider not in providers:
            raise ConfigError(
                f'Unknown provider "{self.provider}" in "{self}"\n'
                f"Use one of: {', '.join(sorted(providers))}"
            )
        return self

    def to_dict(self) -> dict:
        return {"provider": self.provider, "model": self.model}


@dataclass
class Config:
    """Models per generation purpose and the manifest consulted for versions."""
    commit_model: ModelSpec = field(default_factory=ModelSpec)
    changelog_model: ModelSpec = field(default_factory=ModelSpec)
    manifest: str = DEFAULT_MANIFEST

    def to_dict(self) -> dict:
        return {
            "models": {
                "commit": self.commit_model.to_dict(),
                "changelog": self.changelog_model.to_dict(),
            },
            "manifest": self.manifest,
        }

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        for purpose in ("commit", "changelog"):
            attr = f"{purpose}_model"
            spec = getattr(self, attr)
            if spec.provider not in valid_providers() or not spec.model:
                default = getattr(defaults, attr)
                warnings.append(f"Invalid {purpose} model '{spec}', using '{default}'")
                setattr(self, attr, default)

        if not isinstance(self.manifest, str) or not self.manifest.strip():
            warnings.append(f"Invalid manifest '{self.manifest}', using '{defaults.manifest}'")
            self.manifest = defaults.manifest

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        models = data.get("models")
        if not isinstance(models, dict):
            models = {}
        config = cls()
        for purpose in ("commit", "changelog"):
            entry = models.get(purpose)
            if isinstance(entry, dict):
                spec = ModelSpec(provider=str(entry.get("provider", "")), model=str(entry.get("model", "")))
                setattr(config, f"{purpose}_model", spec)
        if "manifest" in data:
            config.manifest = data["manifest"]
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config

    def with_env_overrides(self) -> 'Config':
        """Copy of this config with QUILL_*_MODEL environment overrides applied.

        Precedence: environment variables > config file
        """
        config = replace(self)
        for purpose, env_var in MODEL_ENV_VARS.items():
            value = os.environ.get(env_var)
            if value:
                setattr(config, f"{purpose}_model", ModelSpec.parse(value))
        return config


class ConfigManager:
    """Owns the .quill directory: config, prompt templates and history path."""

    def __init__(self, base_dir: Path | None = None):
        self.base_dir = Path(base_dir) if base_dir else Path.cwd()
        self._config: Optional[Config] = None

    @property
    def config_dir(self) -> Path:
        return self.base_dir / CONFIG_DIR

    def path_for(self, name: str) -> Path:
        return self.config_dir / CONFIG_FILES[name]

    @property
    def config_path(self) -> Path:
        return self.path_for("config")

    @property
    def history_path(self) -> Path:
        return self.path_for("history")

    def ensure_dir(self) -> None:
        self.config_dir.mkdir(parents=True, exist_ok=True)

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        if not self.config_path.exists():
            self._config = Config()
            self.save(self._config)
            return self._config

        self._config = self._load_from_file(self.config_path)
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError):
            return Config()
        if not isinstance(data, dict):
            return Config()
        return Config.from_dict(data)

    def save(self, config: Config) -> Path:
        self.ensure_dir()
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(config.to_dict(), f, indent=2)
        self._config = config
        return self.config_path

    def _read_prompt(self, name: str, default: str) -> str:
        path = self.path_for(name)
        if not path.exists():
            self.ensure_dir()
            path.write_text(default, encoding='utf-8')
            return default
        return path.read_text(encoding='utf-8')

    def commit_prompt(self) -> str:
        return self._read_prompt("commit_prompt", DEFAULT_COMMIT_PROMPT)

    def changelog_prompt(self) -> str:
        return self._read_prompt("changelog_prompt", DEFAULT_CHANGELOG_PROMPT)


__all__ = [
    "Config",
    "ConfigError",
    "ConfigManager",
    "ModelSpec",
    "CONFIG_FILES",
    "valid_providers",
]
