"""Client modules for REST communication and request signing."""

from .auth import Authenticator, Credentials, NonceGenerator, sign
from .pagination import PaginatedFetcher
from .rest import RestClient

__all__ = [
    "Authenticator",
    "Credentials",
    "NonceGenerator",
    "PaginatedFetcher",
    "RestClient",
    "sign",
]
