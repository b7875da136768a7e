"""Error hierarchy for the digest pipeline."""


class GitSumBotError(RuntimeError):
    """Base class for every failure surfaced to the invocation caller."""


class ConfigurationError(GitSumBotError, ValueError):
    """A required setting is missing or holds an unsupported value."""


class FetchError(GitSumBotError):
    """The source-control API could not deliver the commit list."""


class GenerationError(GitSumBotError):
    """One of the concurrent completion calls failed.

    Attributes:
        stage: Which artifact was being generated ("summary" or "categorized")
    """

    def __init__(self, stage: str, message: str) -> None:
        super().__init__(f"Failed to generate {stage}: {message}")
        self.stage = stage


class DeliveryError(GitSumBotError):
    """The digest could not be posted to the chat channel."""


class ChannelNotFoundError(DeliveryError):
    """No channel with the requested name is visible to the bot."""

    def __init__(self, channel_name: str) -> None:
        super().__init__(f"channel not found: {channel_name!r}")
        self.channel_name = channel_name
