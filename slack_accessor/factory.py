"""Factory entry point for external callers.

WHY: Code that uses this library as a dependency should not be coupled to
the accessor's class name or module path. create() is the stable way in.

RULES:
- No validation and no side effects; arguments go straight to SlackAccessor
"""

from __future__ import annotations

from slack_accessor.api.client import SlackAccessor


def create(token: str, channel_id: str) -> SlackAccessor:
    """Create a SlackAccessor for one channel.

    Args:
        token: Slack bot OAuth token (xoxb-...).
        channel_id: Target channel id, e.g. "C0123456789".

    Returns:
        A ready-to-use SlackAccessor.
    """
    return SlackAccessor(token, channel_id)
