"""Custom exceptions for scxdata."""


class ScxDataError(Exception):
    """Base exception for scxdata operations."""


class FetchError(ScxDataError):
    """Error during remote content fetching."""


class NotFoundError(FetchError):
    """Resource does not exist upstream."""


class MalformedResponseError(FetchError):
    """Upstream returned a body that is not valid JSON."""
