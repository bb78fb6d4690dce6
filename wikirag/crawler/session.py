"""Authenticated DokuWiki session: one login, then page exports by identifier."""

from __future__ import annotations

import logging
import time

import requests

from .config import CrawlConfig
from .errors import AuthenticationError, SessionError, UnexpectedStatusError
from .types import PageIdentifier, RawPage


LOGGER = logging.getLogger(__name__)


class WikiSession:
    """Fetch wiki page exports through one cookie-carrying `requests.Session`.

    Redirects are never followed so the login redirect can be inspected.
    Any broken session/fetch contract raises a `SessionError` subclass; the
    crawl has no way to recover from those.
    """

    def __init__(self, config: CrawlConfig, *, session: requests.Session | None = None) -> None:
        self.config = config

        self._session = session or requests.Session()
        self._session.headers.setdefault("User-Agent", config.user_agent)
        self._owns_session = session is None

        self._logged_in = False

    @property
    def logged_in(self) -> bool:
        return self._logged_in

    def login(self, secret: str) -> None:
        """Authenticate once; the session cookie is reused by every later fetch."""

        LOGGER.info("Logging in to %s as %s", self.config.base_url, self.config.username)
        form = {
            "sectok": "",
            "id": self.config.entry_id,
            "do": "login",
            "u": self.config.username,
            "p": secret,
        }

        try:
            response = self._session.post(
                self.config.script_url,
                params={"id": self.config.entry_id},
                data=form,
                timeout=self.config.timeout_seconds,
                allow_redirects=False,
            )
        except requests.RequestException as exc:
            raise SessionError(f"Login request failed: {exc.__class__.__name__}: {exc}") from exc

        if not response.is_redirect:
            raise AuthenticationError(
                f"Login did not redirect (HTTP {response.status_code}); check username and secret"
            )
        if "Set-Cookie" not in response.headers:
            raise AuthenticationError("Login redirect did not set a session cookie")

        self._logged_in = True
        LOGGER.debug("Login succeeded, cookies=%s", sorted(self._session.cookies.keys()))

    def fetch(self, identifier: PageIdentifier) -> RawPage | None:
        """Export one page as XHTML.

        Returns None when the wiki renders its "page does not exist" placeholder.
        """

        LOGGER.info("Getting %s", identifier)
        started = time.perf_counter()

        try:
            response = self._session.get(
                self.config.script_url,
                params={"id": identifier, "do": self.config.export_format},
                timeout=self.config.timeout_seconds,
                allow_redirects=False,
            )
        except requests.RequestException as exc:
            raise SessionError(
                f"Fetching '{identifier}' failed: {exc.__class__.__name__}: {exc}"
            ) from exc

        elapsed_ms = int((time.perf_counter() - started) * 1000)

        if response.status_code != requests.codes.ok:
            raise UnexpectedStatusError(identifier, response.status_code)

        html = response.text
        if self.is_not_found(html):
            LOGGER.debug("Page %s does not exist", identifier)
            return None

        LOGGER.debug("Fetched %s: %d chars in %d ms", identifier, len(html), elapsed_ms)
        return RawPage(
            identifier=identifier,
            html=html,
            elapsed_ms=elapsed_ms,
        )

    def is_not_found(self, html: str) -> bool:
        return any(marker in html for marker in self.config.not_found_markers)

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "WikiSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["WikiSession"]
