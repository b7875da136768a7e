"""Configuration loaded from the environment once per invocation."""

import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

from gitsumbot.errors import ConfigurationError
from gitsumbot.summarization.domain.value_objects import LLMProvider, ModelVersion

DEFAULT_MODEL = ModelVersion.GPT_3_5_TURBO
DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_LOOKBACK_HOURS = 24
DEFAULT_TIMEOUT_SECONDS = 120.0

_LLM_KEY_VARIABLES = {
    LLMProvider.OPENAI: "OPENAI_API_KEY",
    LLMProvider.ANTHROPIC: "ANTHROPIC_API_KEY",
}


def _load_env_file() -> None:
    """Load environment variables from .env file."""
    # Try to find .env file in project root (parent of gitsumbot package)
    project_root = Path(__file__).parent.parent
    env_file = project_root / ".env"
    if env_file.exists():
        load_dotenv(env_file)
    else:
        # Fallback: try current directory
        load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Everything one bot invocation needs to know."""

    github_owner: str
    github_repo: str
    github_token: str
    llm_api_key: str
    model_version: ModelVersion
    slack_token: str
    slack_channel: str
    github_api_url: str = DEFAULT_GITHUB_API_URL
    lookback: timedelta = timedelta(hours=DEFAULT_LOOKBACK_HOURS)
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read instead of os.environ (a .env file is only
                     loaded when this is omitted)

        Returns:
            Validated settings

        Raises:
            ConfigurationError: If a required value is missing or invalid
        """
        if environ is None:
            _load_env_file()
            environ = dict(os.environ)

        problems: list[str] = []

        def required(name: str) -> str:
            value = environ.get(name, "").strip()
            if not value:
                problems.append(f"{name} is not set")
            return value

        owner = required("GITHUB_OWNER")
        repo = required("GITHUB_REPO")
        github_token = required("GITHUB_TOKEN")
        slack_token = required("SLACK_TOKEN")
        slack_channel = required("SLACK_CHANNEL")

        model_version = DEFAULT_MODEL
        raw_model = environ.get("LLM_MODEL", "").strip()
        if raw_model:
            try:
                model_version = ModelVersion.parse(raw_model)
            except ValueError as e:
                raise ConfigurationError(str(e)) from e

        llm_api_key = required(_LLM_KEY_VARIABLES[model_version.provider])

        lookback_hours = _positive_number(
            environ, "LOOKBACK_HOURS", DEFAULT_LOOKBACK_HOURS, problems
        )
        timeout_seconds = _positive_number(
            environ, "DIGEST_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS, problems
        )

        if problems:
            raise ConfigurationError(
                "Invalid configuration: " + "; ".join(problems) + ". "
                "Set these in a .env file or as environment variables."
            )

        return cls(
            github_owner=owner,
            github_repo=repo,
            github_token=github_token,
            llm_api_key=llm_api_key,
            model_version=model_version,
            slack_token=slack_token,
            slack_channel=slack_channel.lstrip("#"),
            github_api_url=environ.get("GITHUB_API_URL", "").strip()
            or DEFAULT_GITHUB_API_URL,
            lookback=timedelta(hours=lookback_hours),
            timeout_seconds=timeout_seconds,
        )


def _positive_number(
    environ: dict[str, str], name: str, default: float, problems: list[str]
) -> float:
    """Read an optional positive number, recording a problem if it is malformed."""
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        problems.append(f"{name} must be a number, got '{raw}'")
        return default
    if value <= 0:
        problems.append(f"{name} must be positive, got '{raw}'")
        return default
    return value
