"""Wiring of one bot invocation: build the services, run the digest, deliver it."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, timedelta

from gitsumbot.config import Settings
from gitsumbot.errors import ConfigurationError, GitSumBotError
from gitsumbot.git.repositories.implementations import GitHubRepositoryImpl
from gitsumbot.git.services.git_service import GitService
from gitsumbot.notifications.repositories.implementations import (
    SlackNotificationRepositoryImpl,
)
from gitsumbot.notifications.services.notification_service import (
    NotificationService,
    format_digest,
    format_no_changes,
)
from gitsumbot.summarization.domain.value_objects import ChangeDigest, DigestResult
from gitsumbot.summarization.repositories.factory import create_llm_agent
from gitsumbot.summarization.services.digest_service import ChangeDigestService


def configure_logging(level: int = logging.INFO) -> None:
    """Send log records to stderr, where the function runtime collects them."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@dataclass(frozen=True)
class RunReport:
    """What one invocation produced."""

    text: str
    has_changes: bool


def build_bot(settings: Settings) -> ChangeDigestService:
    """Create the digest service with fresh API clients."""
    try:
        git_repository = GitHubRepositoryImpl(
            token=settings.github_token,
            base_url=settings.github_api_url,
            timeout=settings.timeout_seconds,
        )
        llm_agent = create_llm_agent(settings.llm_api_key, settings.model_version)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e
    return ChangeDigestService(GitService(git_repository), llm_agent)


def build_notifier(settings: Settings) -> NotificationService:
    """Create the notification service with a fresh Slack client."""
    try:
        return NotificationService(SlackNotificationRepositoryImpl(token=settings.slack_token))
    except ValueError as e:
        raise ConfigurationError(str(e)) from e


async def compute_digest(
    bot: ChangeDigestService,
    owner: str,
    repo: str,
    lookback: timedelta,
    timeout_seconds: float,
) -> DigestResult:
    """
    Run the digest pipeline under a timeout.

    Raises:
        GitSumBotError: If the pipeline fails or does not finish in time
    """
    try:
        async with asyncio.timeout(timeout_seconds):
            return await bot.change_digest(owner, repo, lookback)
    except TimeoutError as e:
        raise GitSumBotError(
            f"Digest of {owner}/{repo} did not finish within {timeout_seconds:g}s"
        ) from e


def run(
    settings: Settings,
    bot: ChangeDigestService,
    notifier: NotificationService | None,
    today: date,
) -> RunReport:
    """
    Compute the digest and deliver it.

    Args:
        settings: Invocation settings
        bot: Digest service
        notifier: Notification service, None to skip delivery (dry run)
        today: Date shown in the posted message

    Returns:
        RunReport with the composed text

    Raises:
        GitSumBotError: If any step fails
    """
    owner, repo = settings.github_owner, settings.github_repo
    result = asyncio.run(
        compute_digest(bot, owner, repo, settings.lookback, settings.timeout_seconds)
    )

    if isinstance(result, ChangeDigest):
        if notifier is None:
            return RunReport(text=format_digest(result, owner, repo, today), has_changes=True)
        text = notifier.send_digest(result, owner, repo, settings.slack_channel, today)
        return RunReport(text=text, has_changes=True)

    if notifier is None:
        return RunReport(text=format_no_changes(owner, repo, today), has_changes=False)
    text = notifier.send_no_changes(owner, repo, settings.slack_channel, today)
    return RunReport(text=text, has_changes=False)
