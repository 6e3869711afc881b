"""Exceptions raised by the planner, fetcher and proxy."""


class InvalidInputError(ValueError):
    """Raised when a video duration or the daily capacity is malformed."""

    pass


class InvalidPlaylistError(Exception):
    """Raised when a playlist id is missing or has an invalid format."""

    pass


class PlaylistNotFoundError(Exception):
    """Raised when a playlist does not exist or is private."""

    pass


class EmptyPlaylistError(Exception):
    """Raised when a playlist has no videos."""

    pass


class RateLimitExceededError(Exception):
    """Raised when a client has used up its request budget."""

    pass


class ConfigurationError(Exception):
    """Raised when the server is missing required configuration."""

    pass


class UpstreamError(Exception):
    """Raised when YouTube or the planner backend returns an error."""

    def __init__(self, message: str, status_code: int = 502):
        super().__init__(message)
        self.status_code = status_code


# Mapping of custom exceptions to HTTP status codes
CUSTOM_ERRORS = {
    InvalidInputError: 400,
    InvalidPlaylistError: 400,
    PlaylistNotFoundError: 404,
    EmptyPlaylistError: 400,
    RateLimitExceededError: 429,
    ConfigurationError: 500,
    UpstreamError: 502,
}


def status_code_for(error: Exception) -> int:
    """Return the HTTP status code for a planner exception."""
    if isinstance(error, UpstreamError):
        return error.status_code
    return CUSTOM_ERRORS.get(type(error), 500)
