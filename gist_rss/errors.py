"""Error kinds raised while turning a gist into a feed."""


class GistRssError(Exception):
    """Base class for every failure that aborts a run."""


class RemoteRequestError(GistRssError):
    """The gist API answered with a non-success status or was unreachable."""

    def __init__(self, url: str, status_code: int | None, reason: str = ""):
        self.url = url
        self.status_code = status_code
        if status_code is None:
            message = f"Request to {url} failed: {reason}"
        else:
            message = f"Request to {url} failed with status {status_code}"
        super().__init__(message)


class DecodingError(GistRssError):
    """A response body was not JSON of the expected shape."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Could not decode response from {url}: {reason}")


class TimestampFormatError(GistRssError):
    """A timestamp was not an RFC3339 date-time."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid RFC3339 timestamp: {value!r}")


class SerializationError(GistRssError):
    """The feed model could not be written as a feed document."""


class PaginationError(GistRssError):
    """The comment cursor did not terminate."""
