"""Error taxonomy shared by the endpoint and the client."""


class SnakeDetectorError(Exception):
    """Base class for every failure raised by this package."""


class InputError(SnakeDetectorError):
    """The request body did not carry an image (HTTP 400)."""


class UpstreamError(SnakeDetectorError):
    """The external vision model call failed (HTTP 500)."""


class NetworkError(SnakeDetectorError):
    """Transport failure or non-2xx status on the client round trip."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(SnakeDetectorError):
    """The reply claimed to hold JSON but could not be parsed into a result."""


class SchemaMismatchError(ParseError):
    """Client and server disagree on the active result schema."""


class InvalidFileType(SnakeDetectorError):
    """The captured file is not an image."""


class ReadError(SnakeDetectorError):
    """The captured file could not be read."""
