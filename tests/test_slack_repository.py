from unittest.mock import MagicMock
from urllib.error import URLError

import pytest
from slack_sdk.errors import SlackApiError

from gitsumbot.errors import DeliveryError
from gitsumbot.notifications.domain.value_objects import ChannelInfo, SlackMessage
from gitsumbot.notifications.repositories.implementations import (
    MAX_BLOCK_SIZE,
    SlackNotificationRepositoryImpl,
)


def slack_error(code: str) -> SlackApiError:
    return SlackApiError(message=code, response={"ok": False, "error": code})


def test_list_channels_maps_response():
    client = MagicMock()
    client.conversations_list.return_value = {
        "ok": True,
        "channels": [{"id": "C1", "name": "general"}, {"id": "C2", "name": "dev-digest"}],
    }

    channels = SlackNotificationRepositoryImpl(token="", client=client).list_channels(1000)

    client.conversations_list.assert_called_once_with(limit=1000)
    assert channels == (ChannelInfo(id="C1", name="general"), ChannelInfo(id="C2", name="dev-digest"))


def test_list_channels_error_is_a_delivery_error():
    client = MagicMock()
    client.conversations_list.side_effect = slack_error("invalid_auth")

    with pytest.raises(DeliveryError, match="Invalid Slack token"):
        SlackNotificationRepositoryImpl(token="", client=client).list_channels(1000)


def test_list_channels_api_error_does_not_name_a_channel():
    client = MagicMock()
    client.conversations_list.side_effect = slack_error("ratelimited")

    with pytest.raises(DeliveryError) as excinfo:
        SlackNotificationRepositoryImpl(token="", client=client).list_channels(1000)

    assert str(excinfo.value) == "Failed to list Slack channels: ratelimited"
    assert "Channel ''" not in str(excinfo.value)


def test_list_channels_transport_error_is_a_delivery_error():
    client = MagicMock()
    client.conversations_list.side_effect = URLError("connection refused")

    with pytest.raises(DeliveryError, match="Failed to reach Slack") as excinfo:
        SlackNotificationRepositoryImpl(token="", client=client).list_channels(1000)

    assert isinstance(excinfo.value.__cause__, URLError)


def test_post_message_sends_section_blocks():
    client = MagicMock()
    client.chat_postMessage.return_value = {"ok": True}

    sent = SlackNotificationRepositoryImpl(token="", client=client).post_message(
        "C42", SlackMessage(text="digest body")
    )

    assert sent is True
    kwargs = client.chat_postMessage.call_args.kwargs
    assert kwargs["channel"] == "C42"
    assert kwargs["text"] == "digest body"
    assert kwargs["blocks"] == [
        {"type": "section", "text": {"type": "mrkdwn", "text": "digest body"}}
    ]


def test_post_message_with_title_adds_header():
    client = MagicMock()
    client.chat_postMessage.return_value = {"ok": True}

    SlackNotificationRepositoryImpl(token="", client=client).post_message(
        "C42", SlackMessage(text="body", title="Digest")
    )

    kwargs = client.chat_postMessage.call_args.kwargs
    assert kwargs["blocks"][0]["type"] == "header"
    assert kwargs["text"] == "Digest"


def test_post_message_reports_api_failure():
    client = MagicMock()
    client.chat_postMessage.return_value = {"ok": False}

    sent = SlackNotificationRepositoryImpl(token="", client=client).post_message(
        "C42", SlackMessage(text="body")
    )

    assert sent is False


@pytest.mark.parametrize(
    ("code", "hint"),
    [
        ("channel_not_found", "not found"),
        ("not_in_channel", "invite the bot"),
        ("ratelimited", "Slack API error: ratelimited"),
    ],
)
def test_post_message_errors_are_translated(code, hint):
    client = MagicMock()
    client.chat_postMessage.side_effect = slack_error(code)

    with pytest.raises(DeliveryError, match=hint):
        SlackNotificationRepositoryImpl(token="", client=client).post_message(
            "C42", SlackMessage(text="body")
        )


def test_post_message_transport_error_is_a_delivery_error():
    client = MagicMock()
    client.chat_postMessage.side_effect = ConnectionError("reset by peer")

    with pytest.raises(DeliveryError, match="Failed to reach Slack: reset by peer"):
        SlackNotificationRepositoryImpl(token="", client=client).post_message(
            "C42", SlackMessage(text="body")
        )


def test_long_text_is_split_on_lines():
    line = "x" * 1000
    text = "\n".join([line] * 7)

    chunks = SlackNotificationRepositoryImpl._split_text(text, MAX_BLOCK_SIZE)

    assert all(len(chunk) <= MAX_BLOCK_SIZE for chunk in chunks)
    assert "\n".join(chunks) == text


def test_word_longer_than_a_block_is_sliced_not_truncated():
    text = "a" * 7000

    chunks = SlackNotificationRepositoryImpl._split_text(text, MAX_BLOCK_SIZE)

    assert chunks == ["a" * 2900, "a" * 2900, "a" * 1200]
    assert "".join(chunks) == text


def test_long_word_after_short_words_keeps_every_character():
    word = "b" * 4000
    text = "see " + word + " end"

    chunks = SlackNotificationRepositoryImpl._split_text(text, MAX_BLOCK_SIZE)

    assert all(len(chunk) <= MAX_BLOCK_SIZE for chunk in chunks)
    assert chunks[0] == "see"
    assert "".join(chunks[1:]).replace(" ", "") == word + "end"


def test_token_is_required_without_client():
    with pytest.raises(ValueError, match="Slack token is required"):
        SlackNotificationRepositoryImpl(token="")
