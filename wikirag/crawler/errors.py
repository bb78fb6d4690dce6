"""Fatal error types raised when the wiki breaks the session/fetch contract."""

from __future__ import annotations


class SessionError(RuntimeError):
    """The wiki session is unusable; the crawl cannot continue."""


class AuthenticationError(SessionError):
    """Login did not answer with a redirect carrying a session cookie."""


class UnexpectedStatusError(SessionError):
    """A page export returned something other than HTTP 200."""

    def __init__(self, identifier: str, status_code: int) -> None:
        super().__init__(f"Unexpected HTTP status {status_code} for '{identifier}'")
        self.identifier = identifier
        self.status_code = status_code


__all__ = [
    "AuthenticationError",
    "SessionError",
    "UnexpectedStatusError",
]
