"""Configuration management for ghtimecard."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

GHTIMECARD_HOME = Path(os.environ.get("GHTIMECARD_HOME", Path.home() / ".ghtimecard"))
CONFIG_FILE = GHTIMECARD_HOME / "ghtimecard.conf"

SUMMARIZERS = ("openai", "claude")

# Environment variables that win over the config file
ENV_OVERRIDES = {
    "GITHUB_USER": "github_user",
    "GITHUB_TOKEN": "github_token",
    "OPENAI_TOKEN": "openai_token",
}


@dataclass
class Config:
    """ghtimecard configuration."""

    github_user: str = ""
    github_token: str = ""
    openai_token: str = ""
    summarizer: str = "openai"
    openai_model: str = "gpt-4"
    temperature: float = 0.2
    max_tokens: int = 180
    request_timeout: int = 60
    default_style: str = "executive"


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def _number(key: str, value: str, cast, default):
    try:
        return cast(value)
    except ValueError:
        logger.warning(f"Ignoring invalid {key.upper()} value: {value!r}")
        return default


def parse_config(text: str, config: Config | None = None) -> Config:
    """Parse KEY=value lines into a Config."""
    config = config or Config()

    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "github_user":
                config.github_user = value
            case "github_token":
                config.github_token = value
            case "openai_token":
                config.openai_token = value
            case "summarizer":
                if value.lower() in SUMMARIZERS:
                    config.summarizer = value.lower()
                else:
                    logger.warning(f"Unknown SUMMARIZER {value!r}, using {config.summarizer}")
            case "openai_model":
                config.openai_model = value
            case "temperature":
                config.temperature = _number(key, value, float, config.temperature)
            case "max_tokens":
                config.max_tokens = _number(key, value, int, config.max_tokens)
            case "request_timeout":
                config.request_timeout = _number(key, value, int, config.request_timeout)
            case "default_style":
                config.default_style = value.lower()

    return config


def load_config(config_file: Path | None = None, environ: dict | None = None) -> Config:
    """Load configuration from ghtimecard.conf, then apply environment overrides."""
    config_file = config_file or CONFIG_FILE
    environ = os.environ if environ is None else environ
    config = Config()

    if config_file.exists():
        config = parse_config(config_file.read_text(), config)

    for env_key, attr in ENV_OVERRIDES.items():
        if environ.get(env_key):
            setattr(config, attr, environ[env_key])

    return config
