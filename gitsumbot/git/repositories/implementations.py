"""Concrete implementation of Git hosting operations backed by PyGithub."""

import math

from github import Auth, Github, GithubException

from gitsumbot.errors import FetchError
from gitsumbot.git.domain.entities import Commit
from gitsumbot.git.domain.value_objects import CommitWindow
from gitsumbot.git.repositories.interfaces import GitHostRepository

GITHUB_API_URL = "https://api.github.com"
# GitHub caps a page at 100 items
DEFAULT_PAGE_SIZE = 100
DEFAULT_TIMEOUT_SECONDS = 15


class GitHubRepositoryImpl(GitHostRepository):
    """GitHub implementation of the hosting repository.

    Raw PyGithub objects never leave this class.
    """

    def __init__(
        self,
        token: str,
        base_url: str = GITHUB_API_URL,
        per_page: int = DEFAULT_PAGE_SIZE,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: Github | None = None,
    ) -> None:
        """
        Initialize the GitHub client.

        Args:
            token: GitHub access token
            base_url: API base URL, override for GitHub Enterprise
            per_page: Number of commits requested in the single page fetched
            timeout: Seconds a single HTTP read may take before it is abandoned
            client: Pre-built PyGithub client, mostly for tests

        Raises:
            ValueError: If no token and no client are given
        """
        if client is None:
            if not token:
                raise ValueError(
                    "GitHub token is required. "
                    "Create one at https://github.com/settings/tokens"
                )
            client = Github(
                auth=Auth.Token(token),
                base_url=base_url,
                per_page=per_page,
                timeout=math.ceil(timeout),
            )
        self._gh = client

    def get_default_branch(self, owner: str, repo: str) -> str:
        """
        Resolve the default branch of a repository.

        Args:
            owner: Repository owner (user or organization)
            repo: Repository name

        Returns:
            Name of the default branch

        Raises:
            FetchError: If the repository is unknown or the API call fails
        """
        try:
            return self._gh.get_repo(f"{owner}/{repo}").default_branch
        except GithubException as e:
            if e.status == 404:
                raise FetchError(
                    f"Repository '{owner}/{repo}' not found or no access"
                ) from e
            raise FetchError(f"Failed to get repository '{owner}/{repo}': {e}") from e

    def list_commits(self, window: CommitWindow) -> tuple[Commit, ...]:
        """
        List the commits of a branch inside a time window.

        Only the first page is requested; commits beyond it are not reported.

        Args:
            window: Repository, branch and time bounds to query

        Returns:
            Tuple of commits newest first, as GitHub returns them

        Raises:
            FetchError: If the API call fails
        """
        try:
            gh_repo = self._gh.get_repo(window.full_name)
            page = gh_repo.get_commits(
                sha=window.branch,
                since=window.since,
                until=window.until,
            ).get_page(0)
            return tuple(self._normalise_commit(raw) for raw in page)
        except GithubException as e:
            raise FetchError(
                f"Failed to list commits of {window.full_name}@{window.branch}: {e}"
            ) from e

    @staticmethod
    def _normalise_commit(raw) -> Commit:
        """Convert a PyGithub commit object to a Commit entity."""
        git_commit = raw.commit
        author = ""
        date = None
        if git_commit.author is not None:
            author = git_commit.author.name or ""
            date = git_commit.author.date
        return Commit(
            sha=raw.sha,
            author=author,
            date=date,
            message=git_commit.message or "",
        )
