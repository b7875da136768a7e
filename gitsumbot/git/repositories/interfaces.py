"""Repository interfaces for Git hosting operations."""

from abc import ABC, abstractmethod

from gitsumbot.git.domain.entities import Commit
from gitsumbot.git.domain.value_objects import CommitWindow


class GitHostRepository(ABC):
    """Interface for a source-control hosting API."""

    @abstractmethod
    def get_default_branch(self, owner: str, repo: str) -> str:
        """
        Resolve the default branch of a repository.

        Args:
            owner: Repository owner (user or organization)
            repo: Repository name

        Returns:
            Name of the default branch
        """
        ...

    @abstractmethod
    def list_commits(self, window: CommitWindow) -> tuple[Commit, ...]:
        """
        List the commits of a branch inside a time window.

        Only the first page of results is returned.

        Args:
            window: Repository, branch and time bounds to query

        Returns:
            Tuple of commits in the order the API returns them (newest first)
        """
        ...
