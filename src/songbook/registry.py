from .exceptions import UnsupportedFileError
from .extractors.base import Extractor
from .extractors.html import HtmlExtractor
from .extractors.pdf import PdfExtractor
from .extractors.plain import PlainTextExtractor
from .extractors.web import WebExtractor
from .extractors.word import DocxExtractor

_EXTRACTORS: list[type[Extractor]] = [
    WebExtractor,
    PlainTextExtractor,
    HtmlExtractor,
    PdfExtractor,
    DocxExtractor,
]


def get_extractor(source: str) -> Extractor:
    """Return an instantiated extractor for the given file path or URL.

    Raises UnsupportedFileError if no extractor matches.
    """
    for cls in _EXTRACTORS:
        if cls.can_handle(source):
            return cls()
    raise UnsupportedFileError(source)


def extract_text(source: str) -> str:
    """Convenience: pick an extractor for *source* and run it."""
    return get_extractor(source).extract(source)
