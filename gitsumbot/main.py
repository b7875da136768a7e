"""HTTP entry point, deployed as a Cloud Function and usually hit by a scheduler."""

import logging
from datetime import date

import flask
import functions_framework

from gitsumbot import app
from gitsumbot.config import Settings
from gitsumbot.errors import GitSumBotError

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ("GET", "POST")


def _today() -> date:
    return date.today()


@functions_framework.http
def handle_digest(request: flask.Request):
    """Build the commit digest of the configured repository and post it to Slack.

    No request body is needed. Responds 200 with the posted text, or 500 with
    the error text.
    """
    app.configure_logging()
    if request.method not in ALLOWED_METHODS:
        return f"Method {request.method} not allowed", 405

    try:
        settings = Settings.from_env()
        bot = app.build_bot(settings)
        notifier = app.build_notifier(settings)
        report = app.run(settings, bot, notifier, _today())
    except GitSumBotError as e:
        logger.exception("Digest invocation failed")
        return str(e), 500

    logger.info(
        "Digest delivered for %s/%s (changes: %s)",
        settings.github_owner,
        settings.github_repo,
        report.has_changes,
    )
    return report.text, 200

