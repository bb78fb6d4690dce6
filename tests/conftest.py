"""Shared fixtures: fake HTTP session, fake wiki, and page builders."""

from __future__ import annotations

import pytest
import requests

from wikirag.crawler import CrawlConfig, RawPage


BASE_URL = "https://wiki.example.org/"


class FakeHTTPSession:
    """Stands in for requests.Session, replaying queued responses."""

    def __init__(self, responses):
        self.headers = {}
        self.cookies = requests.cookies.RequestsCookieJar()
        self.calls = []
        self.closed = False
        self._responses = list(responses)

    def post(self, url, **kwargs):
        self.calls.append(("POST", url, kwargs))
        return self._next()

    def get(self, url, **kwargs):
        self.calls.append(("GET", url, kwargs))
        return self._next()

    def close(self):
        self.closed = True

    def _next(self):
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class FakeWiki:
    """Stands in for WikiSession: identifier -> html, or None for missing pages."""

    def __init__(self, pages):
        self.pages = dict(pages)
        self.fetched = []
        self.logged_in_with = None
        self.closed = False

    def login(self, secret):
        self.logged_in_with = secret

    def fetch(self, identifier):
        self.fetched.append(identifier)
        html = self.pages.get(identifier)
        if html is None:
            return None
        return RawPage(identifier=identifier, html=html, elapsed_ms=5)

    def close(self):
        self.closed = True


def _make_response(status_code, text="", headers=None):
    response = requests.Response()
    response.status_code = status_code
    response._content = text.encode("utf-8")
    response.encoding = "utf-8"
    response.headers.update(headers or {})
    response.url = BASE_URL + "doku.php"
    return response


def _make_page(title, *links, body=""):
    anchors = "".join(
        '<li><a href="/doku.php?id=%s" class="wikilink1">%s</a></li>' % (link, link)
        for link in links
    )
    return (
        "<!DOCTYPE html><html><head><title>%s</title>"
        '<link rel="stylesheet" href="/lib/exe/css.php"/></head>'
        '<body><div class="dokuwiki export"><div id="dw__toc"><h3>Table of Contents</h3></div>'
        '<h1 class="sectionedit1" id="top">%s</h1>'
        "<!-- EDIT1 SECTION -->"
        '<div class="level1"><p>%s</p><ul>%s</ul></div>'
        "</div></body></html>"
    ) % (title, title, body or "Content of %s." % title, anchors)


@pytest.fixture
def make_response():
    return _make_response


@pytest.fixture
def make_page():
    return _make_page


@pytest.fixture
def fake_http_session():
    return FakeHTTPSession


@pytest.fixture
def fake_wiki():
    return FakeWiki


@pytest.fixture
def config(tmp_path):
    return CrawlConfig(base_url=BASE_URL, username="tester", output_dir=str(tmp_path / "out"))
