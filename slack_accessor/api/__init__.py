"""Slack Web API access — the accessor class and its typed models.

WHY: Callers need a handful of Slack operations without touching HTTP.
This package holds the accessor, its request/response adapter, and the
small dataclasses used for inputs and decoded results.

HOW: SlackAccessor in client.py does all HTTP via httpx. models.py holds
the block variants, MessagePage, and failure envelope helpers.

RULES:
- All HTTP calls go through SlackAccessor._request (no direct httpx usage elsewhere)
- Authentication is a Bearer token supplied by the caller
"""

from slack_accessor.api.client import SlackAccessor
from slack_accessor.api.models import (
    BlockList,
    BlockWrapper,
    MessagePage,
    SingleBlock,
)

__all__ = [
    "BlockList",
    "BlockWrapper",
    "MessagePage",
    "SingleBlock",
    "SlackAccessor",
]
