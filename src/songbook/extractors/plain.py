"""Plain text and ChordPro files, read as-is."""

import logging
from pathlib import Path

from ..exceptions import ExtractionError
from .base import Extractor

logger = logging.getLogger(__name__)


class PlainTextExtractor(Extractor):
    suffixes = (".txt", ".text", ".cho", ".chordpro")

    def extract(self, source: str) -> str:
        try:
            text = Path(source).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ExtractionError(source, str(exc)) from exc
        logger.debug("Read %d chars from %s", len(text), source)
        return text
