"""Exception types raised by the accessor.

WHY: Almost every failure the accessor sees is returned as an error
envelope, not raised. The few conditions that are raised are programmer
or setup mistakes, and callers need typed exceptions to tell them apart
from anything httpx might raise.

HOW: A small hierarchy rooted at SlackAccessorError. Concrete errors also
subclass ValueError, since both describe a bad argument or bad setup.

RULES:
- Runtime API conditions (rate limits, API errors, bad JSON, network
  failures) are never raised; see api/client.py
- UnsupportedMethodError is raised before any network activity
"""


class SlackAccessorError(Exception):
    """Base class for errors raised by slack_accessor."""


class UnsupportedMethodError(SlackAccessorError, ValueError):
    """Raised when the request adapter is asked for a verb other than GET or POST.

    WHY: Only GET and POST are meaningful for the Slack Web API methods
    this library calls. Any other verb is a bug in the calling code.

    HOW: Raised by SlackAccessor._request before parameters are encoded.

    RULES:
    - method is kept on the exception for diagnostics
    """

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Unsupported method: {method}")


class MissingCredentialsError(SlackAccessorError, ValueError):
    """Raised by the config loaders when a token or channel id is not set."""
