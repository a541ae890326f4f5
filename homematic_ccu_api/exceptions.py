from typing import Optional


class CCUError(Exception):
    """Base exception for Homematic CCU client errors."""

    pass


class CCUConnectionError(CCUError):
    """Raised when a request to the CCU fails or returns a non-success status."""

    def __init__(self, message: str, url: Optional[str] = None,
                 status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class CCUDataError(CCUError):
    """Raised when there is an error parsing data returned by the CCU."""

    pass


class CCUCacheError(CCUError):
    """Raised when the local cache cannot be read or written."""

    pass


class CCUInvalidArgumentError(CCUError, ValueError):
    """Raised when a cache key or an identifier is malformed."""

    pass
