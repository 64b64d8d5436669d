"""Chord sheets fetched from a web page."""

import logging

import httpx

from ..exceptions import ExtractionError, FetchError
from .base import Extractor
from .html import html_to_text

logger = logging.getLogger(__name__)

FETCH_TIMEOUT = 15

_FETCH_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept-Language": "en-US,en;q=0.9",
    "Accept": "text/html,application/xhtml+xml,text/plain;q=0.9,*/*;q=0.8",
}


class WebExtractor(Extractor):
    @classmethod
    def can_handle(cls, source: str) -> bool:
        return source.startswith(("http://", "https://"))

    def fetch(self, url: str) -> httpx.Response:
        try:
            resp = httpx.get(url, headers=_FETCH_HEADERS, follow_redirects=True, timeout=FETCH_TIMEOUT)
        except httpx.RequestError as exc:
            raise FetchError(url, 0) from exc
        if resp.status_code != 200:
            raise FetchError(url, resp.status_code)
        return resp

    def extract(self, source: str) -> str:
        resp = self.fetch(source)
        content_type = resp.headers.get("content-type", "")
        if content_type.startswith("text/plain"):
            text = resp.text
        else:
            text = html_to_text(resp.text)
        if not text.strip():
            raise ExtractionError(source, "no text found in page")
        logger.info("Fetched %d chars from %s", len(text), source)
        return text
