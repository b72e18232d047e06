"""Slack Web API request shapes, response helpers, and error envelopes.

WHY: The accessor accepts a loosely-shaped "blocks" argument and returns
narrower values than the raw JSON envelopes Slack sends back. Typed
dataclasses make both sides explicit: the three accepted block shapes are
distinct variants, and a history page is a real object instead of an
ad-hoc dict.

HOW: BlockList, BlockWrapper and SingleBlock form a tagged union.
to_block_source() is the only place raw caller input is inspected;
normalize_blocks() flattens any variant into a list. MessagePage and
resolve_user_name() decode success envelopes. The *_envelope() helpers
build the uniform failure envelopes returned by the request adapter.

RULES:
- Failure envelopes always carry ok=False and an error code from this module
- normalize_blocks() always returns a new list
- A wrapper whose "blocks" value is None is treated as a single block
- MessagePage.next_cursor is None when Slack sends no cursor or an empty one
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

# ---------------------------------------------------------------------------
# Error codes produced locally (Slack's own codes pass through untouched)
# ---------------------------------------------------------------------------

ERROR_RATE_LIMITED = "rate_limited"
ERROR_INVALID_JSON = "invalid_json_response"
ERROR_REQUEST_FAILED = "request_failed"


def rate_limited_envelope(retry_after: str | None) -> dict[str, Any]:
    """Envelope for an HTTP 429 response. retry_after is the raw header value."""
    return {"ok": False, "error": ERROR_RATE_LIMITED, "retry_after": retry_after}


def invalid_json_envelope(detail: str) -> dict[str, Any]:
    """Envelope for a response body that is not a JSON object."""
    return {"ok": False, "error": ERROR_INVALID_JSON, "detail": detail}


def request_failed_envelope(message: str) -> dict[str, Any]:
    """Envelope for a transport-level failure (connect, timeout, DNS...)."""
    return {"ok": False, "error": ERROR_REQUEST_FAILED, "message": message}


def is_ok(envelope: dict[str, Any]) -> bool:
    return bool(envelope.get("ok"))


# ---------------------------------------------------------------------------
# Block Kit input variants
# ---------------------------------------------------------------------------


@dataclass
class BlockList:
    """A bare list of Block Kit elements."""

    blocks: list[Any]


@dataclass
class BlockWrapper:
    """A payload object carrying its blocks under a ``blocks`` key.

    WHY: Block Kit Builder exports whole payloads ({"blocks": [...]}).
    Callers paste those directly, so the wrapper form is accepted as-is.

    RULES:
    - blocks is the wrapper's list; a non-list value is wrapped in a list
    """

    blocks: Any


@dataclass
class SingleBlock:
    """One block element given without a surrounding list."""

    block: Any


BlockSource = Union[BlockList, BlockWrapper, SingleBlock]


def to_block_source(value: Any) -> BlockSource:
    """Classify raw caller input into one of the three block variants.

    WHY: send_block_message accepts whatever shape the caller has at hand.
    Doing the shape inspection once here keeps normalize_blocks() a plain
    match over known variants.

    HOW: Explicit variants pass through unchanged. A list becomes a
    BlockList. A mapping with a non-None "blocks" value becomes a
    BlockWrapper. Anything else is a SingleBlock.

    RULES:
    - Already-classified values are returned as-is
    - {"blocks": None} and mappings without "blocks" are SingleBlock
    """
    if isinstance(value, (BlockList, BlockWrapper, SingleBlock)):
        return value
    if isinstance(value, list):
        return BlockList(value)
    if isinstance(value, dict) and value.get("blocks") is not None:
        return BlockWrapper(value["blocks"])
    return SingleBlock(value)


def normalize_blocks(source: BlockSource) -> list[Any]:
    """Flatten any block variant into the list sent as ``blocks``."""
    if isinstance(source, BlockList):
        return list(source.blocks)
    if isinstance(source, BlockWrapper):
        if isinstance(source.blocks, list):
            return list(source.blocks)
        return [source.blocks]
    if isinstance(source, SingleBlock):
        return [source.block]
    raise TypeError(f"Not a block source: {type(source).__name__}")


# ---------------------------------------------------------------------------
# Decoded results
# ---------------------------------------------------------------------------


@dataclass
class MessagePage:
    """One page of conversations.history.

    WHY: Callers page through history by re-invoking get_messages with the
    returned cursor. The page object carries exactly what they need for
    that and nothing else.

    HOW: Built from a success envelope via from_envelope(), or as the
    empty() fallback when the request failed.

    RULES:
    - messages is [] when Slack omits the field
    - next_cursor is None when there is no further page
    - A failed request and an empty channel produce equal pages
    """

    messages: list[dict[str, Any]] = field(default_factory=list)
    next_cursor: str | None = None

    @classmethod
    def from_envelope(cls, envelope: dict[str, Any]) -> MessagePage:
        metadata = _as_dict(envelope.get("response_metadata"))
        return cls(
            messages=envelope.get("messages") or [],
            next_cursor=metadata.get("next_cursor") or None,
        )

    @classmethod
    def empty(cls) -> MessagePage:
        return cls(messages=[], next_cursor=None)


def extract_reactions(envelope: dict[str, Any]) -> list[dict[str, Any]]:
    """Return message.reactions from a reactions.get success envelope, or []."""
    message = _as_dict(envelope.get("message"))
    return message.get("reactions") or []


def resolve_user_name(user: Any, default: str) -> str:
    """Pick a user's name from a users.info ``user`` object.

    WHY: Slack profiles may leave display_name blank and rely on
    real_name, and some bot or deleted users have neither.

    HOW: display_name first, then real_name, then ``default``. Empty
    strings count as unset.

    RULES:
    - A missing profile returns ``default``
    - A user or profile that is not an object returns ``default``
    """
    profile = _as_dict(_as_dict(user).get("profile"))
    return profile.get("display_name") or profile.get("real_name") or default


def _as_dict(value: Any) -> dict[str, Any]:
    """Return value if it is a JSON object, else an empty dict."""
    return value if isinstance(value, dict) else {}
