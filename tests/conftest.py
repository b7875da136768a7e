"""Shared fakes for the hosting, LLM and chat repositories."""

import asyncio
from collections.abc import Sequence
from datetime import datetime, timezone

import pytest

from gitsumbot.git.domain.entities import Commit
from gitsumbot.git.domain.value_objects import CommitWindow
from gitsumbot.git.repositories.interfaces import GitHostRepository
from gitsumbot.notifications.domain.value_objects import ChannelInfo, SlackMessage
from gitsumbot.notifications.repositories.interfaces import ChatRepository
from gitsumbot.summarization.domain.value_objects import ModelVersion
from gitsumbot.summarization.repositories.interfaces import LLMAgentRepository

FIXED_NOW = datetime(2024, 3, 15, 9, 0, tzinfo=timezone.utc)


def make_commit(message: str, sha: str = "abc123") -> Commit:
    return Commit(sha=sha, author="Jane Doe", date=FIXED_NOW, message=message)


class FakeGitHostRepository(GitHostRepository):
    def __init__(
        self,
        commits: Sequence[Commit] = (),
        branch: str = "main",
        error: Exception | None = None,
    ) -> None:
        self.commits = tuple(commits)
        self.branch = branch
        self.error = error
        self.windows: list[CommitWindow] = []

    def get_default_branch(self, owner: str, repo: str) -> str:
        if self.error is not None:
            raise self.error
        return self.branch

    def list_commits(self, window: CommitWindow) -> tuple[Commit, ...]:
        self.windows.append(window)
        return self.commits


class FakeLLMAgent(LLMAgentRepository):
    """Records every call; each stage can return text, raise, or wait on an event."""

    def __init__(
        self,
        summary: str = "A summary.",
        categorized: str = "feat:\n- a change",
        summary_error: Exception | None = None,
        categorize_error: Exception | None = None,
    ) -> None:
        self.summary = summary
        self.categorized = categorized
        self.summary_error = summary_error
        self.categorize_error = categorize_error
        self.summarize_calls: list[tuple[str, ...]] = []
        self.categorize_calls: list[tuple[str, ...]] = []
        self.summarize_gate: asyncio.Event | None = None
        self.categorize_gate: asyncio.Event | None = None
        self.cancelled: list[str] = []

    @property
    def model_version(self) -> ModelVersion:
        return ModelVersion.GPT_3_5_TURBO

    @property
    def calls(self) -> int:
        return len(self.summarize_calls) + len(self.categorize_calls)

    async def summarize(self, messages: Sequence[str]) -> str:
        self.summarize_calls.append(tuple(messages))
        await self._wait("summary", self.summarize_gate)
        if self.summary_error is not None:
            raise self.summary_error
        return self.summary

    async def categorize(self, messages: Sequence[str]) -> str:
        self.categorize_calls.append(tuple(messages))
        await self._wait("categorized", self.categorize_gate)
        if self.categorize_error is not None:
            raise self.categorize_error
        return self.categorized

    async def _wait(self, stage: str, gate: asyncio.Event | None) -> None:
        if gate is None:
            return
        try:
            await gate.wait()
        except asyncio.CancelledError:
            self.cancelled.append(stage)
            raise


class FakeChatRepository(ChatRepository):
    def __init__(self, channels: Sequence[ChannelInfo] = (), ok: bool = True) -> None:
        self.channels = tuple(channels)
        self.ok = ok
        self.posts: list[tuple[str, SlackMessage]] = []
        self.list_limits: list[int] = []

    def list_channels(self, limit: int) -> tuple[ChannelInfo, ...]:
        self.list_limits.append(limit)
        return self.channels

    def post_message(self, channel_id: str, message: SlackMessage) -> bool:
        self.posts.append((channel_id, message))
        return self.ok


@pytest.fixture
def env() -> dict[str, str]:
    return {
        "GITHUB_OWNER": "acme",
        "GITHUB_REPO": "widgets",
        "GITHUB_TOKEN": "ghp_test",
        "OPENAI_API_KEY": "sk-test",
        "SLACK_TOKEN": "xoxb-test",
        "SLACK_CHANNEL": "dev-digest",
    }
