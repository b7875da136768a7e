"""Value objects for Git domain."""

from dataclasses import dataclass
from datetime import datetime

# Commit messages longer than this are cut before being sent to the LLM
MAX_MESSAGE_SIZE = 500


@dataclass(frozen=True)
class CommitWindow:
    """Commits of one branch between two instants."""

    owner: str
    repo: str
    branch: str
    since: datetime
    until: datetime

    def __post_init__(self) -> None:
        """Validate the window bounds."""
        if self.since > self.until:
            raise ValueError(
                f"Window start {self.since.isoformat()} is after its end "
                f"{self.until.isoformat()}"
            )

    @property
    def full_name(self) -> str:
        """Repository name in owner/repo form."""
        return f"{self.owner}/{self.repo}"


def truncate_message(message: str, max_size: int = MAX_MESSAGE_SIZE) -> str:
    """Return the first max_size characters of a commit message."""
    if len(message) > max_size:
        return message[:max_size]
    return message
