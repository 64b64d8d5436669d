class SongbookError(Exception):
    """Base exception for songbook."""


class ExtractionError(SongbookError):
    """Raised when text cannot be read out of a file or page."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Could not extract text from {source}: {reason}")


class UnsupportedFileError(SongbookError):
    """Raised when no extractor handles the given source."""

    def __init__(self, source: str):
        self.source = source
        super().__init__(f"Unsupported file type: {source}")


class FetchError(SongbookError):
    """Raised when an HTTP request fails."""

    def __init__(self, url: str, status_code: int):
        self.url = url
        self.status_code = status_code
        super().__init__(f"HTTP {status_code} fetching {url}")


class SongNotFoundError(SongbookError):
    """Raised when no stored song has the requested id."""

    def __init__(self, song_id: str):
        self.song_id = song_id
        super().__init__(f"Song not found: {song_id}")


class ValidationError(SongbookError):
    """Raised when a song record is missing a required value."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")
