"""Slack Accessor — a minimal synchronous client for a few Slack Web API methods.

WHY: Small automation scripts need to post to a channel, read its
history, check reactions, and resolve user names. They do not need a full
SDK, event handling, or retry machinery.

HOW: create(token, channel_id) returns a SlackAccessor. Every operation
is one blocking HTTP round trip; failures come back as data rather than
exceptions.

RULES:
- create() is the public entry point; SlackAccessor is exported for typing
- Only UnsupportedMethodError is ever raised by the request adapter
"""

from slack_accessor.api.client import SlackAccessor
from slack_accessor.factory import create

__version__ = "0.1.0"

__all__ = ["SlackAccessor", "create"]
