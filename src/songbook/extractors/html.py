"""HTML pages and saved chord sheets.

Chord sites put the sheet in one or more ``<pre>`` blocks, where spacing lines
chords up with lyrics.  When a page has ``<pre>`` content only that is kept;
otherwise the visible text of ``<body>`` is used.
"""

import logging
from pathlib import Path

from bs4 import BeautifulSoup

from ..exceptions import ExtractionError
from .base import Extractor

logger = logging.getLogger(__name__)


def html_to_text(html: str) -> str:
    """Return the song text from an HTML document (see module docstring)."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()

    blocks = [pre.get_text() for pre in soup.find_all("pre")]
    blocks = [b.strip("\n") for b in blocks if b.strip()]
    if blocks:
        return "\n\n".join(blocks)

    root = soup.body or soup
    lines = [line.rstrip() for line in root.get_text("\n").splitlines()]
    return "\n".join(line for line in lines if line.strip())


class HtmlExtractor(Extractor):
    suffixes = (".html", ".htm")

    def extract(self, source: str) -> str:
        try:
            html = Path(source).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ExtractionError(source, str(exc)) from exc
        text = html_to_text(html)
        if not text.strip():
            raise ExtractionError(source, "no text found in page")
        logger.debug("Extracted %d chars of HTML text from %s", len(text), source)
        return text
