"""Git service for fetching commit messages over a lookback window."""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from gitsumbot.errors import FetchError
from gitsumbot.git.domain.value_objects import CommitWindow, truncate_message
from gitsumbot.git.repositories.interfaces import GitHostRepository

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GitService:
    """Service for Git hosting operations."""

    def __init__(
        self,
        git_repository: GitHostRepository,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """
        Initialize GitService.

        Args:
            git_repository: Repository implementation for the hosting API
            clock: Returns the current time, the end of every window
        """
        self._git_repository = git_repository
        self._clock = clock

    def build_window(self, owner: str, repo: str, lookback: timedelta) -> CommitWindow:
        """
        Build the window [now - lookback, now] on the default branch.

        Args:
            owner: Repository owner
            repo: Repository name
            lookback: How far back the window reaches

        Returns:
            CommitWindow on the repository's default branch

        Raises:
            ValueError: If lookback is not positive
            FetchError: If the default branch cannot be resolved
        """
        if lookback <= timedelta(0):
            raise ValueError(f"Lookback must be positive, got {lookback}")

        branch = self._git_repository.get_default_branch(owner, repo)
        until = self._clock()
        return CommitWindow(
            owner=owner,
            repo=repo,
            branch=branch,
            since=until - lookback,
            until=until,
        )

    def fetch_messages(self, owner: str, repo: str, lookback: timedelta) -> tuple[str, ...]:
        """
        Fetch the commit messages of the default branch over the lookback window.

        Messages keep the API order and are truncated to MAX_MESSAGE_SIZE.

        Args:
            owner: Repository owner
            repo: Repository name
            lookback: How far back the window reaches

        Returns:
            Tuple of (possibly truncated) commit messages, newest first

        Raises:
            ValueError: If lookback is not positive
            FetchError: If the hosting API fails
        """
        try:
            window = self.build_window(owner, repo, lookback)
            commits = self._git_repository.list_commits(window)
        except (FetchError, ValueError):
            raise
        except Exception as e:
            raise FetchError(f"Failed to fetch commits of {owner}/{repo}: {e}") from e

        logger.info(
            "Fetched %d commit(s) from %s@%s since %s",
            len(commits),
            window.full_name,
            window.branch,
            window.since.isoformat(),
        )
        return tuple(truncate_message(commit.message) for commit in commits)
