"""Command-line interface for the Slack accessor.

WHY: When wiring a script to a channel it helps to poke the same
operations by hand: post a test message, look at the latest history page,
check reactions on a message, resolve a user id. The CLI exposes the five
library operations without writing any Python.

HOW: Uses argparse with one subcommand per operation. Credentials come
from --token/--channel or from SLACK_BOT_TOKEN/SLACK_CHANNEL_ID (loaded
from .env by config). Results are printed to stdout as JSON; logging goes
to stderr.

RULES:
- Subcommands: post, blocks, history, reactions, user
- Missing credentials exit with status 1 before any API call
- post/blocks exit with status 1 when the envelope is not ok
- Status output goes to stderr (not stdout)
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from slack_accessor import config
from slack_accessor.api.client import SlackAccessor
from slack_accessor.errors import MissingCredentialsError
from slack_accessor.factory import create

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _emit(value: Any) -> None:
    """Write a result to stdout as JSON."""
    print(json.dumps(value, ensure_ascii=False, indent=2))


def _build_accessor(args: argparse.Namespace) -> SlackAccessor:
    """Create the accessor from CLI flags, falling back to the environment.

    RULES:
    - --token/--channel win over SLACK_BOT_TOKEN/SLACK_CHANNEL_ID
    - Exits with status 1 when either value is missing
    """
    try:
        token = args.token or config.load_bot_token()
        channel = args.channel or config.load_channel_id()
    except MissingCredentialsError as exc:
        _status("Error: {}".format(exc))
        sys.exit(1)
    return create(token, channel)


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


def _cmd_post(accessor: SlackAccessor, args: argparse.Namespace) -> None:
    result = accessor.send_text_message(args.text, thread_ts=args.thread_ts)
    _emit(result)
    if not result.get("ok"):
        sys.exit(1)


def _cmd_blocks(accessor: SlackAccessor, args: argparse.Namespace) -> None:
    """Send a Block Kit payload read from a JSON file ("-" for stdin)."""
    if args.file == "-":
        raw = sys.stdin.read()
    else:
        try:
            raw = Path(args.file).read_text(encoding="utf-8")
        except OSError as exc:
            _status("Error: could not read {}: {}".format(args.file, exc))
            sys.exit(1)
    try:
        blocks = json.loads(raw)
    except ValueError as exc:
        _status("Error: {} is not valid JSON: {}".format(args.file, exc))
        sys.exit(1)

    result = accessor.send_block_message(
        blocks, fallback_text=args.fallback_text, thread_ts=args.thread_ts
    )
    _emit(result)
    if not result.get("ok"):
        sys.exit(1)


def _cmd_history(accessor: SlackAccessor, args: argparse.Namespace) -> None:
    page = accessor.get_messages(limit=args.limit, cursor=args.cursor, oldest=args.oldest)
    if not page.messages:
        _status("No messages returned.")
    _emit(dataclasses.asdict(page))


def _cmd_reactions(accessor: SlackAccessor, args: argparse.Namespace) -> None:
    reactions = accessor.get_reactions(args.timestamp)
    if reactions is None:
        _status("Could not fetch reactions for {}.".format(args.timestamp))
    _emit(reactions)


def _cmd_user(accessor: SlackAccessor, args: argparse.Namespace) -> None:
    name = accessor.get_user_name(args.user_id)
    if not name:
        _status("Could not resolve user {}.".format(args.user_id))
    print(name)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable — tests can inspect the parser without calling Slack.

    HOW: Global credential/verbosity flags, then one subparser per
    operation with its handler stored in ``func``.
    """
    parser = argparse.ArgumentParser(
        prog="slack_accessor",
        description="Post to and read from a single Slack channel.",
    )
    parser.add_argument(
        "--token",
        default=None,
        help="Slack bot token (default: SLACK_BOT_TOKEN).",
    )
    parser.add_argument(
        "--channel",
        default=None,
        help="Target channel id (default: SLACK_CHANNEL_ID).",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    post = subparsers.add_parser("post", help="Send a plain text message.")
    post.add_argument("text", help="Message text.")
    post.add_argument("--thread-ts", default=None, help="Reply in this thread.")
    post.set_defaults(func=_cmd_post)

    blocks = subparsers.add_parser("blocks", help="Send a Block Kit message from a JSON file.")
    blocks.add_argument("file", help="Path to a JSON file with blocks, or '-' for stdin.")
    blocks.add_argument(
        "--fallback-text",
        default=None,
        help="Notification text (default: %s)." % config.DEFAULT_FALLBACK_TEXT,
    )
    blocks.add_argument("--thread-ts", default=None, help="Reply in this thread.")
    blocks.set_defaults(func=_cmd_blocks)

    history = subparsers.add_parser("history", help="Fetch one page of channel history.")
    history.add_argument("--limit", type=int, default=None, help="Maximum messages to return.")
    history.add_argument("--cursor", default=None, help="Cursor from a previous page.")
    history.add_argument("--oldest", default=None, help="Only messages after this ts.")
    history.set_defaults(func=_cmd_history)

    reactions = subparsers.add_parser("reactions", help="List reactions on a message.")
    reactions.add_argument("timestamp", help="Message ts, e.g. 1712345678.123456.")
    reactions.set_defaults(func=_cmd_reactions)

    user = subparsers.add_parser("user", help="Resolve a user id to a display name.")
    user.add_argument("user_id", help="Slack user id, e.g. U0123456789.")
    user.set_defaults(func=_cmd_user)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    accessor = _build_accessor(args)
    logger.debug("Running %s against channel %s", args.command, accessor.channel_id)
    args.func(accessor, args)


if __name__ == "__main__":
    main()
