"""Configuration constants and .env loading.

WHY: The accessor needs a handful of defaults (API prefix, timeout,
fallback notification text, placeholder user name). Keeping them here as
plain module constants makes them easy to find and override without
touching the request logic.

HOW: python-dotenv loads the .env file on import. Constants are read from
the environment with hardcoded fallbacks. load_bot_token() and
load_channel_id() give the CLI a clear error when credentials are missing.

RULES:
- The library never reads credentials on its own; only the CLI calls the loaders
- All defaults can be overridden via environment variables
- Tokens are never hardcoded
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

from slack_accessor.errors import MissingCredentialsError

# Load .env from the directory the process is started in
load_dotenv()

# ---------------------------------------------------------------------------
# API configuration defaults
# ---------------------------------------------------------------------------

SLACK_API_BASE_URL = os.getenv("SLACK_API_BASE_URL", "https://slack.com/api/")
SLACK_TIMEOUT_S = float(os.getenv("SLACK_TIMEOUT_S", "30"))

DEFAULT_FALLBACK_TEXT = os.getenv("SLACK_FALLBACK_TEXT", "アプリからの通知")
"""Plain-text fallback sent with Block Kit messages (used in notifications)."""

UNKNOWN_USER_NAME = "Unknown User"
"""Returned by get_user_name when the profile has neither name field."""


# ---------------------------------------------------------------------------
# Credential loaders
# ---------------------------------------------------------------------------


def load_bot_token() -> str:
    """Load the Slack bot token from the environment.

    WHY: The CLI needs a token without the user pasting it on the command
    line every time. Loading it from .env keeps it out of shell history.

    HOW: Reads SLACK_BOT_TOKEN from os.environ (populated by python-dotenv).

    RULES:
    - Raises MissingCredentialsError if the token is missing or empty
    - Never returns a default/placeholder value
    """
    token = os.getenv("SLACK_BOT_TOKEN", "").strip()
    if not token:
        raise MissingCredentialsError(
            "Slack bot token not configured. "
            "Pass --token or add SLACK_BOT_TOKEN to the .env file."
        )
    return token


def load_channel_id() -> str:
    """Load the target channel id from SLACK_CHANNEL_ID."""
    channel_id = os.getenv("SLACK_CHANNEL_ID", "").strip()
    if not channel_id:
        raise MissingCredentialsError(
            "Slack channel not configured. "
            "Pass --channel or add SLACK_CHANNEL_ID to the .env file."
        )
    return channel_id
