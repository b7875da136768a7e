"""Concrete implementations of notification repositories."""

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from gitsumbot.errors import DeliveryError
from gitsumbot.notifications.domain.value_objects import ChannelInfo, SlackMessage
from gitsumbot.notifications.repositories.interfaces import ChatRepository

# Slack has a 3000 char limit per block, leave some margin
MAX_BLOCK_SIZE = 2900


class SlackNotificationRepositoryImpl(ChatRepository):
    """Implementation of the chat repository using Slack SDK."""

    def __init__(self, token: str, client: WebClient | None = None) -> None:
        """Initialize the Slack client with token.

        Args:
            token: The Slack Bot User OAuth Token
            client: Pre-built WebClient, mostly for tests

        Raises:
            ValueError: If token is empty and no client is given
        """
        if client is None:
            if not token:
                raise ValueError(
                    "Slack token is required. "
                    "Get your token from https://api.slack.com/apps"
                )
            client = WebClient(token=token)

        self._client = client

    def list_channels(self, limit: int = 1000) -> tuple[ChannelInfo, ...]:
        """List the channels visible to the bot (first page only).

        Args:
            limit: Maximum number of channels to request

        Returns:
            Tuple of channels in the order Slack returns them

        Raises:
            DeliveryError: If there's an error communicating with Slack
        """
        try:
            response = self._client.conversations_list(limit=limit)
        except SlackApiError as e:
            raise self._delivery_error(e, channel_label=None) from e
        except Exception as e:
            raise DeliveryError(
                f"Failed to reach Slack while listing channels: {e}"
            ) from e

        channels = response.get("channels") or []
        return tuple(
            ChannelInfo(id=channel["id"], name=channel.get("name", ""))
            for channel in channels
        )

    def post_message(self, channel_id: str, message: SlackMessage) -> bool:
        """Send a message to a Slack channel.

        Args:
            channel_id: Identifier of the channel to send the message to
            message: The message to send

        Returns:
            True if the message was sent successfully, False otherwise

        Raises:
            DeliveryError: If there's an error communicating with Slack
        """
        blocks = []

        if message.title:
            blocks.append(
                {
                    "type": "header",
                    "text": {"type": "plain_text", "text": message.title, "emoji": True},
                }
            )

        for chunk in self._split_text(message.text, MAX_BLOCK_SIZE):
            blocks.append({"type": "section", "text": {"type": "mrkdwn", "text": chunk}})

        try:
            response = self._client.chat_postMessage(
                channel=channel_id,
                blocks=blocks,
                # Fallback for notifications
                text=message.title or message.text[:MAX_BLOCK_SIZE],
            )
        except SlackApiError as e:
            raise self._delivery_error(e, channel_label=channel_id) from e
        except Exception as e:
            raise DeliveryError(f"Failed to reach Slack: {e}") from e

        # Extract the 'ok' field from response and ensure it's a boolean
        return bool(response.get("ok", False))

    @staticmethod
    def _delivery_error(error: SlackApiError, channel_label: str | None) -> DeliveryError:
        """Translate a Slack API error into a DeliveryError with a readable hint.

        channel_label is None for calls that do not target a channel.
        """
        error_msg = error.response.get("error", "unknown error")
        if channel_label is None:
            if error_msg == "invalid_auth":
                return DeliveryError(
                    "Invalid Slack token. Please check your token configuration."
                )
            return DeliveryError(f"Failed to list Slack channels: {error_msg}")
        if error_msg == "channel_not_found":
            return DeliveryError(
                f"Channel '{channel_label}' not found. "
                "Make sure the bot is invited to the channel."
            )
        elif error_msg == "not_in_channel":
            return DeliveryError(
                f"Bot is not a member of channel '{channel_label}'. "
                "Please invite the bot to the channel first."
            )
        elif error_msg == "invalid_auth":
            return DeliveryError("Invalid Slack token. Please check your token configuration.")
        else:
            return DeliveryError(f"Slack API error: {error_msg}")

    @staticmethod
    def _split_text(text: str, max_size: int) -> list[str]:
        """Split text into chunks that fit within Slack's block size limit.

        Args:
            text: Text to split
            max_size: Maximum size per chunk

        Returns:
            List of text chunks
        """
        if len(text) <= max_size:
            return [text]

        chunks = []
        current_chunk = ""

        # Split by lines to avoid breaking in the middle of a line
        for line in text.split("\n"):
            if len(current_chunk) + len(line) + 1 <= max_size:
                current_chunk += "\n" + line if current_chunk else line
                continue

            if current_chunk:
                chunks.append(current_chunk)
                current_chunk = ""

            if len(line) <= max_size:
                current_chunk = line
                continue

            # Line too long on its own: split it by words
            for word in line.split(" "):
                if len(current_chunk) + len(word) + 1 <= max_size:
                    current_chunk += " " + word if current_chunk else word
                    continue

                if current_chunk:
                    chunks.append(current_chunk)
                # Word longer than a block: cut it into block-sized slices
                pieces = [
                    word[i : i + max_size] for i in range(0, len(word), max_size)
                ] or [""]
                chunks.extend(pieces[:-1])
                current_chunk = pieces[-1]

        if current_chunk:
            chunks.append(current_chunk)

        return chunks
