"""Git domain entities."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Commit:
    """Commit entity as reported by the hosting API."""

    sha: str
    author: str
    date: datetime | None
    message: str
