"""Exception hierarchy for the Buda API client."""


class BudaError(Exception):
    """Base class for all client errors."""


class AuthenticationError(BudaError):
    """A private endpoint was requested without credentials."""


class TransportError(BudaError):
    """The HTTP exchange itself failed."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class ConnectionFailedError(TransportError):
    """Could not connect to the server or send the request."""


class ResponseReadError(TransportError):
    """The response arrived but its body could not be read."""


class APIError(BudaError):
    """The server answered with a non-success HTTP status."""

    def __init__(
        self,
        status: int,
        message: str,
        code: str | None = None,
        body: bytes = b"",
    ):
        super().__init__(f"API error {status}: {message}")
        self.status = status
        self.message = message
        self.code = code
        self.body = body


class DecodeError(BudaError):
    """The response body is not valid JSON or does not match the expected shape."""


class AggregateFetchError(BudaError):
    """A page of a paginated collection failed; no partial result is returned.

    ``error`` is the first page-level failure observed and is also set as
    ``__cause__`` when raised.
    """

    def __init__(self, page: int, error: BaseException):
        super().__init__(f"Failed to fetch page {page}: {error}")
        self.page = page
        self.error = error
