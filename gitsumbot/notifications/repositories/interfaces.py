"""Repository interfaces for chat notification operations."""

from abc import ABC, abstractmethod

from gitsumbot.notifications.domain.value_objects import ChannelInfo, SlackMessage


class ChatRepository(ABC):
    """Interface for a chat service the digest is posted to."""

    @abstractmethod
    def list_channels(self, limit: int) -> tuple[ChannelInfo, ...]:
        """
        List the channels visible to the bot.

        Args:
            limit: Maximum number of channels to request

        Returns:
            Tuple of channels in the order the API returns them
        """
        ...

    @abstractmethod
    def post_message(self, channel_id: str, message: SlackMessage) -> bool:
        """
        Post a message to a channel.

        Args:
            channel_id: Internal identifier of the channel
            message: The message to send

        Returns:
            True if the service accepted the message, False otherwise
        """
        ...
