"""
Error taxonomy for the HN search pipeline.

Every error carries a short machine-readable ``code`` and a human ``message``.
Per-item fetch failures inside a scan are caught by the aggregator and
downgraded to warnings; everything else propagates to the caller of
``DiscussionAggregator.search``.
"""

from typing import Optional


class HNSearchError(Exception):
    code = "hn_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class TransportError(HNSearchError):
    """Network/connectivity failure reaching the API (incl. timeouts and non-2xx)."""

    code = "transport_error"

    def __init__(self, message: str, *, url: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class DecodeError(HNSearchError):
    """A response body did not have the expected shape."""

    code = "decode_error"

    def __init__(self, message: str, *, url: str = ""):
        super().__init__(message)
        self.url = url


class InvalidCategory(HNSearchError):
    code = "invalid_category"

    def __init__(self, token: str):
        super().__init__(
            f"Invalid story type {token!r}; expected one of: top, best, new, ask, show, job"
        )
        self.token = token


class InvalidRequest(HNSearchError):
    code = "invalid_request"


class NoResults(HNSearchError):
    code = "no_results"

    def __init__(self, message: str = ""):
        super().__init__(
            message
            or "No matching stories found. Try broadening your search terms or "
            "searching different story types (top, new, best, etc.)"
        )


class SearchTimeout(HNSearchError):
    code = "search_timeout"

    def __init__(self, seconds: float):
        super().__init__(f"Search did not finish within {seconds:g}s")
        self.seconds = seconds
