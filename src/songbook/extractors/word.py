import logging
import zipfile

import docx
from docx.opc.exceptions import PackageNotFoundError

from ..exceptions import ExtractionError
from .base import Extractor

logger = logging.getLogger(__name__)


class DocxExtractor(Extractor):
    """Word documents: one paragraph per line, empty paragraphs kept."""

    suffixes = (".docx",)

    def extract(self, source: str) -> str:
        try:
            document = docx.Document(source)
        except (PackageNotFoundError, zipfile.BadZipFile, KeyError, OSError, ValueError) as exc:
            raise ExtractionError(source, str(exc)) from exc
        text = "\n".join(p.text for p in document.paragraphs).strip("\n")
        if not text.strip():
            raise ExtractionError(source, "document is empty")
        logger.debug("Extracted %d chars from %s", len(text), source)
        return text
