"""
Async client for the Buda.com REST trading API.
"""

__version__ = "0.1.0"

from .client.auth import Credentials  # noqa: E402
from .client.rest import RestClient  # noqa: E402
from .utils.config import ClientConfig, Config  # noqa: E402

__all__ = ["RestClient", "Credentials", "ClientConfig", "Config"]
