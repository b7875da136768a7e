"""Repository interfaces for LLM digest generation."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from gitsumbot.summarization.domain.value_objects import ModelVersion


class LLMAgentRepository(ABC):
    """Interface for LLM-based generation of commit digests."""

    @property
    @abstractmethod
    def model_version(self) -> ModelVersion:
        """Model every request of this agent targets."""
        ...

    @abstractmethod
    async def summarize(self, messages: Sequence[str]) -> str:
        """
        Generate a prose summary of a set of commit messages.

        Args:
            messages: Commit messages, newest first

        Returns:
            A narrative paragraph describing the changes
        """
        ...

    @abstractmethod
    async def categorize(self, messages: Sequence[str]) -> str:
        """
        Group related commit messages into categories.

        Args:
            messages: Commit messages, newest first

        Returns:
            A markdown listing of the messages grouped by category
        """
        ...
