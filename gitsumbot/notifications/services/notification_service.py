"""Service for composing digests and delivering them to a chat channel."""

import logging
from collections.abc import Sequence
from datetime import date

from gitsumbot.errors import ChannelNotFoundError, DeliveryError
from gitsumbot.notifications.domain.value_objects import (
    ChannelInfo,
    SlackChannel,
    SlackMessage,
)
from gitsumbot.notifications.repositories.interfaces import ChatRepository
from gitsumbot.summarization.domain.value_objects import ChangeDigest

logger = logging.getLogger(__name__)

CHANNEL_LIST_LIMIT = 1000
DATE_FORMAT = "%d-%m-%Y"


def find_channel_id(channels: Sequence[ChannelInfo], name: str) -> str:
    """
    Return the identifier of the channel named exactly ``name``.

    Args:
        channels: Channels visible to the bot
        name: Channel name without the # prefix (case-sensitive)

    Returns:
        The channel identifier

    Raises:
        ChannelNotFoundError: If no channel carries that name
    """
    for channel in channels:
        if channel.name == name:
            return channel.id
    raise ChannelNotFoundError(name)


def format_digest(digest: ChangeDigest, owner: str, repo: str, day: date) -> str:
    """Compose the message body of a digest."""
    return (
        f"Summary of the change in the repository {owner}/{repo} "
        f"for the date {day.strftime(DATE_FORMAT)}\n\n"
        f"{digest.summary}\n\n\n"
        "Detailed list of changes\n\n"
        f"{digest.categorized}\n"
    )


def format_no_changes(owner: str, repo: str, day: date) -> str:
    """Compose the notice sent when the window held no commits."""
    return f"No new changes in the repository {owner}/{repo} for the date {day.strftime(DATE_FORMAT)}"


class NotificationService:
    """Service for orchestrating notification operations."""

    def __init__(self, chat_repository: ChatRepository) -> None:
        """Initialize the notification service.

        Args:
            chat_repository: Repository for sending chat notifications
        """
        self._chat_repository = chat_repository

    def send_digest(
        self, digest: ChangeDigest, owner: str, repo: str, channel_name: str, day: date
    ) -> str:
        """Send a change digest to a channel.

        Args:
            digest: The generated digest
            owner: Repository owner, shown in the heading
            repo: Repository name, shown in the heading
            channel_name: The name of the channel (without # prefix)
            day: Date the digest covers

        Returns:
            The text that was posted

        Raises:
            DeliveryError: If the channel cannot be resolved or the post fails
        """
        text = format_digest(digest, owner, repo, day)
        self.send_text(text, channel_name)
        return text

    def send_no_changes(self, owner: str, repo: str, channel_name: str, day: date) -> str:
        """Send the fixed "no new changes" notice to a channel.

        Returns:
            The text that was posted

        Raises:
            DeliveryError: If the channel cannot be resolved or the post fails
        """
        text = format_no_changes(owner, repo, day)
        self.send_text(text, channel_name)
        return text

    def send_text(self, text: str, channel_name: str) -> None:
        """Resolve a channel by name and post text to it.

        Args:
            text: The markdown text to send
            channel_name: The name of the channel (without # prefix)

        Raises:
            DeliveryError: If the channel name or text is invalid, the channel
                is not found, or the chat service rejects the message
        """
        try:
            channel = SlackChannel(name=channel_name)
            message = SlackMessage(text=text)
        except ValueError as e:
            raise DeliveryError(str(e)) from e

        channels = self._chat_repository.list_channels(CHANNEL_LIST_LIMIT)
        channel_id = find_channel_id(channels, channel.name)

        success = self._chat_repository.post_message(channel_id, message)
        if not success:
            raise DeliveryError("Failed to send message to Slack (API returned failure)")

        logger.info("Posted %d characters to #%s (%s)", len(text), channel.name, channel_id)
