"""Exception types shared across the MyGourmet layers."""


class GourmetError(Exception):
    """Base class for application errors."""


class ValidationError(GourmetError, ValueError):
    """Input rejected before any I/O happened."""


class NotFoundError(GourmetError, LookupError):
    pass


class BackendUnavailable(GourmetError):
    """The persistence backend could not be reached or answered with an error."""


class ExtractionError(GourmetError):
    """A recipe page could not be turned into a recipe candidate.

    kind is one of: invalid_url, blocked, fetch_failed, unparseable.
    """

    INVALID_URL = "invalid_url"
    BLOCKED = "blocked"
    FETCH_FAILED = "fetch_failed"
    UNPARSEABLE = "unparseable"

    def __init__(self, kind: str, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message
