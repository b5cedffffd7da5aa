class RemarkableError(Exception):
    """Base class for failures surfaced to the user as a status line."""


class TransportError(RemarkableError):
    """Network failure, non-success status or malformed response body."""


class DestinationNotFound(RemarkableError):
    """A download destination or its required parent directory is missing."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Destination not found: {path}")
        self.path = path


class LocalIOError(RemarkableError):
    """Local filesystem failure while creating directories or writing files."""


class InvalidInput(RemarkableError):
    """User-supplied path or name that cannot be acted on."""
