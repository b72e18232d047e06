"""Synchronous Slack Web API accessor.

WHY: Scripts that only need to post to one channel, read its history,
check reactions, or look up a user's name should not have to deal with
HTTP details, envelope parsing, or the many ways a request can fail.
This module hides all of that behind one small class.

HOW: Uses a short-lived httpx.Client per call with Bearer token auth.
Every public operation builds a parameter dict and goes through
SlackAccessor._request, the single place where requests are encoded and
responses are classified. Failures come back as {"ok": False, ...}
envelopes so callers branch on one shape.

RULES:
- Only GET and POST are accepted; anything else raises UnsupportedMethodError
- None-valued parameters are never sent
- GET parameters go in the query string, POST parameters in a JSON body
- Non-2xx statuses never raise; 429 becomes a rate_limited envelope
- httpx errors, and URL or header encoding errors raised while building
  the request, become a request_failed envelope and are never raised
- No retries, no pagination loops, no caching
- Caller options never override channel or the operation's own content
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from slack_accessor.api.models import (
    MessagePage,
    extract_reactions,
    invalid_json_envelope,
    is_ok,
    normalize_blocks,
    rate_limited_envelope,
    request_failed_envelope,
    resolve_user_name,
    to_block_source,
)
from slack_accessor.config import (
    DEFAULT_FALLBACK_TEXT,
    SLACK_API_BASE_URL,
    SLACK_TIMEOUT_S,
    UNKNOWN_USER_NAME,
)
from slack_accessor.errors import UnsupportedMethodError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_SUPPORTED_METHODS = frozenset({"GET", "POST"})
_JSON_CONTENT_TYPE = "application/json; charset=utf-8"

CHAT_POST_MESSAGE = "chat.postMessage"
CONVERSATIONS_HISTORY = "conversations.history"
REACTIONS_GET = "reactions.get"
USERS_INFO = "users.info"


class SlackAccessor:
    """Accessor for a single Slack channel.

    WHY: Gives callers five ergonomic operations (send text, send blocks,
    read history, read reactions, resolve a user name) with friendly
    return values instead of raw envelopes where that makes sense.

    HOW: Stores the token and channel id verbatim. The keyword-only
    arguments exist so tests and unusual deployments can swap the base
    URL, timeout, transport and logger (``log``) without subclassing.

    RULES:
    - token and channel_id are not validated; Slack rejects bad ones
    - send_* return the raw envelope; callers check "ok" themselves
    - get_messages/get_reactions/get_user_name collapse failures to sentinels
    - log defaults to this module's logger
    """

    def __init__(
        self,
        token: str,
        channel_id: str,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self.token = token
        self.channel_id = channel_id
        base = base_url or SLACK_API_BASE_URL
        self._base_url = base if base.endswith("/") else base + "/"
        self._timeout = SLACK_TIMEOUT_S if timeout is None else timeout
        self._transport = transport
        self._logger = log or logger

    # ------------------------------------------------------------------
    # Messaging
    # ------------------------------------------------------------------

    def send_text_message(self, text: str, **options: Any) -> dict[str, Any]:
        """Post a plain text message to the channel.

        Args:
            text: Message body (Slack mrkdwn).
            **options: Extra chat.postMessage fields, e.g. thread_ts.

        Returns:
            The raw response envelope.
        """
        params = _merge_params(options, channel=self.channel_id, text=text)
        return self._request(CHAT_POST_MESSAGE, "POST", params)

    def send_block_message(
        self,
        blocks: Any,
        fallback_text: str | None = None,
        **options: Any,
    ) -> dict[str, Any]:
        """Post a Block Kit message to the channel.

        WHY: Rich messages need blocks, but notifications and clients
        without Block Kit support still render the plain ``text`` field.

        HOW: Classifies ``blocks`` with to_block_source(), flattens it with
        normalize_blocks(), and always sends a fallback ``text``.

        RULES:
        - blocks may be a list, {"blocks": [...]}, a single block, or an
          explicit BlockList/BlockWrapper/SingleBlock
        - fallback_text=None uses DEFAULT_FALLBACK_TEXT

        Args:
            blocks: Block Kit content in any accepted shape.
            fallback_text: Plain text for notifications.
            **options: Extra chat.postMessage fields, e.g. thread_ts.

        Returns:
            The raw response envelope.
        """
        if fallback_text is None:
            fallback_text = DEFAULT_FALLBACK_TEXT
        params = _merge_params(
            options,
            channel=self.channel_id,
            blocks=normalize_blocks(to_block_source(blocks)),
            text=fallback_text,
        )
        return self._request(CHAT_POST_MESSAGE, "POST", params)

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def get_messages(self, **options: Any) -> MessagePage:
        """Fetch one page of channel history.

        WHY: Callers page through history themselves; the accessor never
        loops over cursors on their behalf.

        HOW: GETs conversations.history with the channel and any paging
        options (cursor, limit, oldest, latest, inclusive).

        RULES:
        - Any failure returns MessagePage.empty()
        - next_cursor is None on the last page

        Returns:
            MessagePage with the messages and the cursor for the next page.
        """
        params = _merge_params(options, channel=self.channel_id)
        content = self._request(CONVERSATIONS_HISTORY, "GET", params)
        if not is_ok(content):
            return MessagePage.empty()
        return MessagePage.from_envelope(content)

    def get_reactions(self, timestamp: Any) -> list[dict[str, Any]] | None:
        """Fetch the reactions on one message of the channel.

        Args:
            timestamp: The message ts, e.g. "1712345678.123456". Converted
                with str().

        Returns:
            None if the request failed, [] if the message has no
            reactions, otherwise the list of reaction objects.
        """
        params = {"channel": self.channel_id, "timestamp": str(timestamp)}
        content = self._request(REACTIONS_GET, "GET", params)
        if not is_ok(content):
            return None
        return extract_reactions(content)

    def get_user_name(self, user_id: str) -> str:
        """Resolve a user id to a display name.

        RULES:
        - "" when the request fails or the envelope has no user
        - display_name, then real_name, then UNKNOWN_USER_NAME
        """
        content = self._request(USERS_INFO, "GET", {"user": user_id})
        user = content.get("user")
        if not is_ok(content) or not user:
            return ""
        return resolve_user_name(user, UNKNOWN_USER_NAME)

    # ------------------------------------------------------------------
    # Request adapter
    # ------------------------------------------------------------------

    def _request(
        self,
        endpoint: str,
        method: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send one request to the Slack Web API and classify the outcome.

        WHY: Every operation needs the same auth header, None-stripping,
        encoding and failure handling. Doing it once keeps the public
        methods to a few lines each.

        HOW: Drops None values, encodes GET params as a query string and
        POST params as a JSON body, sends with a fresh httpx.Client, then
        hands the response to _classify_response().

        RULES:
        - Raises UnsupportedMethodError for anything but GET/POST, before
          any network activity
        - An empty GET sends no query string; an empty POST sends no body
        - httpx.HTTPError, httpx.InvalidURL and UnicodeError (e.g. a
          non-ASCII token in the Authorization header) are logged and
          returned as request_failed

        Args:
            endpoint: Web API method name, e.g. "chat.postMessage".
            method: "GET" or "POST".
            params: Request parameters; None values are dropped.

        Returns:
            The response envelope (parsed body or a failure envelope).
        """
        if method not in _SUPPORTED_METHODS:
            raise UnsupportedMethodError(method)

        clean = {k: v for k, v in (params or {}).items() if v is not None}
        url = self._base_url + endpoint
        headers = {"Authorization": f"Bearer {self.token}"}
        query: dict[str, str] | None = None
        body: bytes | None = None

        if method == "GET":
            if clean:
                query = {k: _encode_query_value(v) for k, v in clean.items()}
        else:
            headers["Content-Type"] = _JSON_CONTENT_TYPE
            if clean:
                body = json.dumps(clean, ensure_ascii=False).encode("utf-8")

        self._logger.debug("Slack %s %s (%d params)", method, endpoint, len(clean))

        try:
            with httpx.Client(transport=self._transport, timeout=self._timeout) as http:
                resp = http.request(method, url, params=query, headers=headers, content=body)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as exc:
            self._logger.error("Network error [%s]: %s", endpoint, exc)
            return request_failed_envelope(str(exc))

        return self._classify_response(endpoint, resp)

    def _classify_response(self, endpoint: str, resp: httpx.Response) -> dict[str, Any]:
        """Turn an HTTP response into an envelope, logging failures."""
        if resp.status_code == 429:
            retry_after = resp.headers.get("Retry-After")
            self._logger.error("Rate limited by Slack. Retry-After: %s", retry_after)
            return rate_limited_envelope(retry_after)

        text = resp.text
        try:
            content = json.loads(text or "{}")
        except ValueError:
            return invalid_json_envelope(text)
        if not isinstance(content, dict):
            return invalid_json_envelope(text)

        if not content.get("ok"):
            self._logger.warning(
                "Slack API Error [%s]: %s", endpoint, content.get("error") or "Unknown error"
            )
        return content


# ---------------------------------------------------------------------------
# Helpers (module-private)
# ---------------------------------------------------------------------------


def _merge_params(options: dict[str, Any], **fixed: Any) -> dict[str, Any]:
    """Overlay caller options with the fields they are not allowed to change."""
    params = dict(options)
    params.update(fixed)
    return params


def _encode_query_value(value: Any) -> str:
    """Render one parameter value as a query-string scalar.

    RULES:
    - bool -> "true"/"false"
    - list/tuple -> comma-joined
    - dict -> compact JSON
    - anything else -> str()
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_encode_query_value(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)
