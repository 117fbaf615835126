"""REST API client for Buda.com."""

import asyncio
import json
from collections.abc import Callable
from typing import Any, TypeVar
from urllib.parse import urlencode, urlsplit

import aiohttp
from yarl import URL

from .. import __version__
from ..errors import APIError, ConnectionFailedError, ResponseReadError
from ..models.balance import Balance, Fee, ReceiveAddress
from ..models.envelope import Envelope, decode_envelope, decode_single
from ..models.market import Market, OrderBook, Ticker, Trades, Volume
from ..models.order import Order
from ..models.transfer import Deposit, Withdrawal
from ..utils.config import ClientConfig
from ..utils.logger import logger
from . import endpoints
from .auth import Authenticator, Credentials
from .pagination import PaginatedFetcher

T = TypeVar("T")

USER_AGENT = f"budaclient/{__version__}"


class RestClient:
    """Async REST client for the Buda.com API."""

    def __init__(
        self,
        credentials: Credentials | None = None,
        config: ClientConfig | None = None,
    ):
        self.config = config or ClientConfig.from_env()
        self.config.validate()

        parts = urlsplit(self.config.base_url)
        self.base_url = self.config.base_url.rstrip("/")
        self._origin = f"{parts.scheme}://{parts.netloc}"
        self._base_path = parts.path.rstrip("/")

        self.authenticator = Authenticator(credentials or Credentials.from_env())
        self.paginator: PaginatedFetcher = PaginatedFetcher(
            self._fetch_page,
            page_size=self.config.page_size,
            max_concurrency=self.config.max_concurrent_pages,
        )
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self):
        """Context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        await self.close()

    async def connect(self) -> None:
        """Create aiohttp session."""
        if self.session is None or self.session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout)
            self.session = aiohttp.ClientSession(
                timeout=timeout,
                headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            )
            logger.info(f"REST client connected to {self.base_url}")

    async def close(self) -> None:
        """Close aiohttp session."""
        if self.session and not self.session.closed:
            await self.session.close()
            logger.info("REST client closed")

    def request_uri(self, path: str, params: dict[str, Any] | None = None) -> str:
        """Path and query string exactly as sent and signed."""
        uri = f"{self._base_path}{path}"
        if params:
            uri += "?" + urlencode(params)
        return uri

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        authenticated: bool = False,
    ) -> bytes:
        """
        Make an HTTP request and return the raw response body.

        Args:
            method: HTTP method
            path: API path relative to the base URL
            params: Query parameters
            data: JSON request body
            authenticated: Whether to sign the request

        Returns:
            Response body bytes

        Raises:
            ConnectionFailedError: If the request could not be sent
            ResponseReadError: If the response body could not be read
            APIError: On HTTP status >= 400 when raise_for_status is enabled
        """
        if self.session is None or self.session.closed:
            await self.connect()

        method = method.upper()
        request_uri = self.request_uri(path, params)
        # encoded=True keeps yarl from re-quoting what was signed
        url = URL(f"{self._origin}{request_uri}", encoded=True)

        headers = {}
        body = None
        if data is not None:
            body = json.dumps(data).encode("utf-8")
            headers["Content-Type"] = "application/json"

        if authenticated:
            headers.update(self.authenticator.authenticate(method, request_uri, body))

        logger.debug(f"REST request -> {method} {request_uri} (authenticated={authenticated})")

        try:
            response = await self.session.request(method, url, data=body, headers=headers)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"REST request failed: {method} {request_uri} - {e!r}")
            raise ConnectionFailedError(
                f"Request failed: {method} {request_uri}: {e!r}", url=str(url)
            ) from e

        async with response:
            try:
                raw = await response.read()
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                logger.error(f"Failed to read response: {method} {request_uri} - {e!r}")
                raise ResponseReadError(
                    f"Failed to read response body: {method} {request_uri}: {e!r}",
                    url=str(url),
                ) from e

            if response.status >= 400 and self.config.raise_for_status:
                error = self._api_error(response.status, raw)
                logger.error(f"REST API error: {method} {request_uri} - {error}")
                raise error

        return raw

    @staticmethod
    def _api_error(status: int, raw: bytes) -> APIError:
        """Build an APIError from a Buda error envelope or plain text body."""
        try:
            payload = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError):
            payload = None

        if isinstance(payload, dict) and "message" in payload:
            return APIError(status, str(payload["message"]), payload.get("code"), raw)

        text = raw.decode("utf-8", errors="replace")
        return APIError(status, text[:100] or "Unknown error", None, raw)

    async def get_raw(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        authenticated: bool = False,
    ) -> bytes:
        """GET a resource and return the body unparsed."""
        return await self._request("GET", path, params=params, authenticated=authenticated)

    async def _fetch_page(
        self, path: str, params: dict[str, Any], authenticated: bool
    ) -> bytes:
        return await self.get_raw(path, params=params, authenticated=authenticated)

    async def _get_one(
        self,
        path: str,
        key: str,
        item_factory: Callable[[dict], T],
        authenticated: bool = False,
        params: dict[str, Any] | None = None,
    ) -> T:
        raw = await self.get_raw(path, params=params, authenticated=authenticated)
        return decode_single(raw, key, item_factory)

    async def _get_list(
        self,
        path: str,
        key: str,
        item_factory: Callable[[dict], T],
        authenticated: bool = False,
    ) -> list[T]:
        raw = await self.get_raw(path, authenticated=authenticated)
        return decode_envelope(raw, key, item_factory).items

    async def _get_all_pages(
        self,
        path: str,
        key: str,
        item_factory: Callable[[dict], T],
        state: str | None = None,
    ) -> list[T]:
        items = await self.paginator.fetch_all(
            path, key, item_factory, params={"state": state}, authenticated=True
        )
        logger.info(f"Fetched {len(items)} {key} from {path}")
        return items

    # Public endpoints

    async def get_markets(self) -> list[Market]:
        """Get all markets."""
        return await self._get_list(endpoints.MARKETS, "markets", Market.from_api)

    async def get_market(self, market_id: str) -> Market:
        """Get a single market (e.g., "BTC-CLP")."""
        path = endpoints.build_path(endpoints.MARKET, market_id=market_id)
        return await self._get_one(path, "market", Market.from_api)

    async def get_volume(self, market_id: str) -> Volume:
        """Get 24h and 7d traded volume of a market."""
        path = endpoints.build_path(endpoints.MARKET_VOLUME, market_id=market_id)
        return await self._get_one(path, "volume", Volume.from_api)

    async def get_ticker(self, market_id: str) -> Ticker:
        """Get the ticker of a market."""
        path = endpoints.build_path(endpoints.MARKET_TICKER, market_id=market_id)
        return await self._get_one(path, "ticker", Ticker.from_api)

    async def get_order_book(self, market_id: str) -> OrderBook:
        """Get the order book of a market."""
        path = endpoints.build_path(endpoints.MARKET_ORDER_BOOK, market_id=market_id)
        return await self._get_one(path, "order_book", OrderBook.from_api)

    async def get_trades(self, market_id: str, timestamp: int | str | None = None) -> Trades:
        """
        Get recent trades of a market.

        Args:
            market_id: Market ID
            timestamp: Only trades older than this (ms); pass a previous
                batch's ``last_timestamp`` to walk back in time

        Returns:
            Trades batch
        """
        path = endpoints.build_path(endpoints.MARKET_TRADES, market_id=market_id)
        params = {"timestamp": timestamp} if timestamp is not None else None
        return await self._get_one(path, "trades", Trades.from_api, params=params)

    # Private endpoints

    async def get_balances(self) -> list[Balance]:
        """Get balances of every currency in the account."""
        return await self._get_list(
            endpoints.BALANCES, "balances", Balance.from_api, authenticated=True
        )

    async def get_balance(self, currency: str) -> Balance:
        """Get the balance of one currency."""
        path = endpoints.build_path(endpoints.BALANCE, currency=currency)
        return await self._get_one(path, "balance", Balance.from_api, authenticated=True)

    async def get_order(self, order_id: int) -> Order:
        """Get order details."""
        path = endpoints.build_path(endpoints.ORDER, order_id=order_id)
        return await self._get_one(path, "order", Order.from_api, authenticated=True)

    async def get_orders(self, market_id: str, state: str | None = None) -> list[Order]:
        """
        Get every order of a market, across all pages.

        Args:
            market_id: Market ID
            state: Optional state filter (e.g., "traded", "pending")

        Returns:
            List of Order objects
        """
        path = endpoints.build_path(endpoints.MARKET_ORDERS, market_id=market_id)
        return await self._get_all_pages(path, "orders", Order.from_api, state)

    async def get_orders_page(
        self, market_id: str, page: int = 1, state: str | None = None
    ) -> Envelope[Order]:
        """Get one page of a market's orders, with its page metadata."""
        path = endpoints.build_path(endpoints.MARKET_ORDERS, market_id=market_id)
        return await self.paginator.fetch_page(
            path, "orders", Order.from_api, page, params={"state": state}
        )

    async def get_deposits(self, currency: str, state: str | None = None) -> list[Deposit]:
        """Get every deposit of a currency, across all pages."""
        path = endpoints.build_path(endpoints.DEPOSITS, currency=currency)
        return await self._get_all_pages(path, "deposits", Deposit.from_api, state)

    async def get_withdrawals(
        self, currency: str, state: str | None = None
    ) -> list[Withdrawal]:
        """Get every withdrawal of a currency, across all pages."""
        path = endpoints.build_path(endpoints.WITHDRAWALS, currency=currency)
        return await self._get_all_pages(path, "withdrawals", Withdrawal.from_api, state)

    async def get_deposit_fee(self, currency: str) -> Fee:
        """Get the deposit fee of a currency."""
        path = endpoints.build_path(endpoints.DEPOSIT_FEE, currency=currency)
        return await self._get_one(path, "fee", Fee.from_api, authenticated=True)

    async def get_withdrawal_fee(self, currency: str) -> Fee:
        """Get the withdrawal fee of a currency."""
        path = endpoints.build_path(endpoints.WITHDRAWAL_FEE, currency=currency)
        return await self._get_one(path, "fee", Fee.from_api, authenticated=True)

    async def get_receive_address(self, currency: str, address_id: int) -> ReceiveAddress:
        """Get a deposit address of a currency."""
        path = endpoints.build_path(
            endpoints.RECEIVE_ADDRESS, currency=currency, address_id=address_id
        )
        return await self._get_one(
            path, "receive_address", ReceiveAddress.from_api, authenticated=True
        )
