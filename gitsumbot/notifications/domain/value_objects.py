"""Value objects for the notifications domain."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SlackChannel:
    """Value object representing a Slack channel.

    Attributes:
        name: The channel name without the # prefix
    """

    name: str

    def __post_init__(self) -> None:
        """Validate the channel name."""
        if not self.name:
            raise ValueError("Channel name cannot be empty")

        if self.name.startswith("#"):
            raise ValueError(
                "Channel name should not include the # prefix. "
                f"Use '{self.name[1:]}' instead of '{self.name}'"
            )

        if any(c.isspace() for c in self.name):
            raise ValueError(f"Invalid channel name '{self.name}': no whitespace allowed")


@dataclass(frozen=True)
class SlackMessage:
    """Value object representing a message to send to Slack.

    Attributes:
        text: The message text in markdown format
        title: Optional title for the message
    """

    text: str
    title: str | None = None

    def __post_init__(self) -> None:
        """Validate the message."""
        if not self.text:
            raise ValueError("Message text cannot be empty")


@dataclass(frozen=True)
class ChannelInfo:
    """A channel visible to the bot.

    Attributes:
        id: Slack's internal channel identifier (e.g. C0123456789)
        name: The channel name without the # prefix
    """

    id: str
    name: str
