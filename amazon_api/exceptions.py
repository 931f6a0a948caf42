"""
Product Advertising API Errors

Every failure raised by this package derives from ProductAPIError so callers
can catch the whole family, or a single kind:

- ConfigurationError: host/path cannot form a request URL
- SigningError: the keyed hash could not be computed locally
- TransportError: the remote service could not be reached, or answered with
  an HTTP error status
- DecodeError: the response body is not well-formed XML
- RemoteValidationError: the response parsed, but the service rejected the
  request parameters
"""
from typing import Dict, List, Optional


class ProductAPIError(Exception):
    """Base class for all Product Advertising API errors."""
    pass


class ConfigurationError(ProductAPIError):
    """Host, path or locale cannot be turned into a request URL."""
    pass


class SigningError(ProductAPIError):
    """Raised when the request signature cannot be computed."""
    pass


class TransportError(ProductAPIError):
    """Raised when the request did not produce a usable HTTP response."""
    def __init__(self, message: str, status_code: int = None, body: str = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DecodeError(ProductAPIError):
    """Raised when a response body is not well-formed XML."""
    def __init__(self, message: str, body: str = ""):
        super().__init__(message)
        self.body = body


class RemoteValidationError(ProductAPIError):
    """
    The service parsed the request but rejected its parameters.

    Attributes:
        errors: RemoteError records (code + message) reported by the service
        arguments: Request arguments echoed back by the service
        status_code: HTTP status, if the rejection came with an error status
    """
    def __init__(
        self,
        message: str,
        errors: Optional[List] = None,
        arguments: Optional[Dict[str, str]] = None,
        status_code: int = None,
    ):
        super().__init__(message)
        self.errors = list(errors or [])
        self.arguments = dict(arguments or {})
        self.status_code = status_code

    @property
    def codes(self) -> List[str]:
        return [e.code for e in self.errors]
