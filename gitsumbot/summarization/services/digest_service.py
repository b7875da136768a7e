"""Change digest service: fetch commit messages, then summarize and categorize them."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import timedelta

from gitsumbot.errors import GenerationError
from gitsumbot.git.services.git_service import GitService
from gitsumbot.summarization.domain.value_objects import (
    ChangeDigest,
    DigestResult,
    ModelVersion,
    NoChanges,
)
from gitsumbot.summarization.repositories.interfaces import LLMAgentRepository

logger = logging.getLogger(__name__)

SUMMARY_STAGE = "summary"
CATEGORIZED_STAGE = "categorized"


class ChangeDigestService:
    """Service orchestrating one digest: a fetch, then two concurrent generations."""

    def __init__(self, git_service: GitService, llm_agent: LLMAgentRepository) -> None:
        """
        Initialize ChangeDigestService.

        Args:
            git_service: Service fetching commit messages from the hosting API
            llm_agent: Repository generating the summary and categorized texts
        """
        self._git_service = git_service
        self._llm_agent = llm_agent

    @property
    def model_version(self) -> ModelVersion:
        return self._llm_agent.model_version

    async def change_digest(self, owner: str, repo: str, lookback: timedelta) -> DigestResult:
        """
        Build the digest of a repository's default branch over a lookback window.

        Args:
            owner: Repository owner
            repo: Repository name
            lookback: How far back the window reaches

        Returns:
            ChangeDigest with both texts, or NoChanges when the window is empty

        Raises:
            FetchError: If the commit messages cannot be fetched
            GenerationError: If either generation fails; no partial digest is returned
        """
        # The hosting SDK is blocking, keep it off the event loop
        messages = await asyncio.to_thread(
            self._git_service.fetch_messages, owner, repo, lookback
        )

        if not messages:
            logger.info("No commits in %s/%s over the last %s", owner, repo, lookback)
            return NoChanges(owner=owner, repo=repo, lookback=lookback)

        return await self.generate(messages)

    async def generate(self, messages: Sequence[str]) -> ChangeDigest:
        """
        Generate the summary and the categorized listing concurrently.

        The first failure cancels the other call.

        Args:
            messages: Non-empty list of commit messages

        Returns:
            ChangeDigest holding both texts

        Raises:
            ValueError: If messages is empty
            GenerationError: If either call fails
        """
        if not messages:
            raise ValueError("Cannot generate a digest from an empty change set")

        messages = tuple(messages)
        logger.info(
            "Generating digest of %d commit message(s) with %s",
            len(messages),
            self.model_version.value,
        )

        try:
            async with asyncio.TaskGroup() as group:
                summary_task = group.create_task(
                    self._run_stage(SUMMARY_STAGE, self._llm_agent.summarize, messages)
                )
                categorized_task = group.create_task(
                    self._run_stage(CATEGORIZED_STAGE, self._llm_agent.categorize, messages)
                )
        except ExceptionGroup as group_error:
            # Errors are recorded in the order the tasks failed
            raise group_error.exceptions[0]

        logger.info("Digest generated")
        return ChangeDigest(
            summary=summary_task.result(),
            categorized=categorized_task.result(),
        )

    @staticmethod
    async def _run_stage(
        stage: str,
        generate: Callable[[Sequence[str]], Awaitable[str]],
        messages: Sequence[str],
    ) -> str:
        try:
            return await generate(messages)
        except Exception as e:
            logger.error("Generation of the %s failed: %s", stage, e)
            raise GenerationError(stage, str(e)) from e
