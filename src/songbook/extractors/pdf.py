import logging

import pdfplumber

from ..exceptions import ExtractionError
from .base import Extractor

logger = logging.getLogger(__name__)


class PdfExtractor(Extractor):
    """Text layer of a PDF, one blank line between pages.

    Scanned PDFs without a text layer come back empty and are rejected.
    """

    suffixes = (".pdf",)

    def extract(self, source: str) -> str:
        try:
            with pdfplumber.open(source) as pdf:
                pages = [page.extract_text(layout=True) or "" for page in pdf.pages]
        except Exception as exc:  # pdfminer error types vary by version
            raise ExtractionError(source, str(exc)) from exc

        pages = [_trim_page(p) for p in pages]
        text = "\n\n".join(p for p in pages if p)
        if not text:
            raise ExtractionError(source, "PDF has no text layer")
        logger.debug("Extracted %d chars from %d PDF page(s) in %s", len(text), len(pages), source)
        return text


def _trim_page(page: str) -> str:
    # layout=True pads every line to the page width
    lines = [line.rstrip() for line in page.splitlines()]
    return "\n".join(lines).strip("\n")
