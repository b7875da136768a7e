"""
Command-line entry point running the same digest pipeline as the HTTP handler.

Settings come from the environment (or a .env file); the options below
override them for a single run:
- --owner / --repo: repository to digest
- --lookback-hours: size of the window ending now
- --channel: Slack channel name (without #)
- --dry-run: print the digest instead of posting it
"""

import argparse
import dataclasses
import logging
import sys
from datetime import date, timedelta

from gitsumbot import app
from gitsumbot.config import Settings
from gitsumbot.errors import ConfigurationError, GitSumBotError


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="gitsumbot",
        description=(
            "Summarize the recent commits of a GitHub repository with an LLM "
            "and post the digest to Slack"
        ),
    )
    parser.add_argument("--owner", type=str, default=None, help="Repository owner")
    parser.add_argument("--repo", type=str, default=None, help="Repository name")
    parser.add_argument(
        "--lookback-hours",
        type=float,
        default=None,
        help="Lookback window in hours (default: LOOKBACK_HOURS or 24)",
    )
    parser.add_argument(
        "--channel",
        type=str,
        default=None,
        help="Slack channel name without # (default: SLACK_CHANNEL)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the digest instead of sending it to Slack",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log at DEBUG level",
    )
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Return settings with the command-line overrides applied."""
    overrides: dict[str, object] = {}
    if args.owner:
        overrides["github_owner"] = args.owner
    if args.repo:
        overrides["github_repo"] = args.repo
    if args.channel:
        overrides["slack_channel"] = args.channel.lstrip("#")
    if args.lookback_hours is not None:
        if args.lookback_hours <= 0:
            raise ConfigurationError("--lookback-hours must be positive")
        overrides["lookback"] = timedelta(hours=args.lookback_hours)
    return dataclasses.replace(settings, **overrides)


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, run the digest and report the outcome."""
    args = build_parser().parse_args(argv)
    app.configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        settings = apply_overrides(Settings.from_env(), args)
        bot = app.build_bot(settings)
        notifier = None if args.dry_run else app.build_notifier(settings)
    except ConfigurationError as e:
        print(f"✗ Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    print(
        f"📝 Building digest of {settings.github_owner}/{settings.github_repo} "
        f"over the last {settings.lookback} with {settings.model_version.value}..."
    )

    try:
        report = app.run(settings, bot, notifier, date.today())
    except GitSumBotError as e:
        print(f"✗ Failed to build the digest: {e}", file=sys.stderr)
        sys.exit(1)

    print("=" * 80)
    print(report.text)
    print("=" * 80)

    if args.dry_run:
        print("✓ Dry run, nothing was sent")
    else:
        print(f"✓ Digest sent to #{settings.slack_channel}")
    sys.exit(0)


if __name__ == "__main__":
    main()
