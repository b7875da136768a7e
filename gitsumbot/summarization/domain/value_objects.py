"""Value objects for Summarization domain."""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum


class LLMProvider(str, Enum):
    """Backend serving a chat model."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"


class ModelVersion(str, Enum):
    """Supported chat models."""

    GPT_3_5_TURBO = "gpt-3.5-turbo"
    GPT_4 = "gpt-4"
    GPT_4_TURBO = "gpt-4-turbo"
    GPT_4O = "gpt-4o"
    GPT_4O_MINI = "gpt-4o-mini"
    CLAUDE_3_5_SONNET = "claude-3-5-sonnet-20241022"
    CLAUDE_3_5_HAIKU = "claude-3-5-haiku-20241022"

    @property
    def provider(self) -> LLMProvider:
        """Return the backend that serves this model."""
        if self.value.startswith("claude"):
            return LLMProvider.ANTHROPIC
        return LLMProvider.OPENAI

    @classmethod
    def parse(cls, value: str) -> "ModelVersion":
        """
        Look up a model version by its API name.

        Args:
            value: Model name as written in configuration

        Returns:
            The matching ModelVersion

        Raises:
            ValueError: If the name is not in the allow-list
        """
        try:
            return cls(value.strip())
        except ValueError:
            supported = ", ".join(member.value for member in cls)
            raise ValueError(
                f"Unsupported model version '{value}'. Supported values: {supported}"
            ) from None


@dataclass(frozen=True)
class ChangeDigest:
    """Summary and categorized listing generated for one change set."""

    summary: str
    categorized: str


@dataclass(frozen=True)
class NoChanges:
    """Outcome of a lookback window that contained no commits."""

    owner: str
    repo: str
    lookback: timedelta


DigestResult = ChangeDigest | NoChanges
