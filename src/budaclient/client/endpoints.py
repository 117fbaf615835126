"""REST endpoint templates, relative to the API base URL."""

from urllib.parse import quote

MARKETS = "/markets"
MARKET = "/markets/{market_id}"
MARKET_VOLUME = "/markets/{market_id}/volume"
MARKET_TICKER = "/markets/{market_id}/ticker"
MARKET_ORDER_BOOK = "/markets/{market_id}/order_book"
MARKET_TRADES = "/markets/{market_id}/trades"
MARKET_ORDERS = "/markets/{market_id}/orders"
BALANCES = "/balances"
BALANCE = "/balances/{currency}"
ORDER = "/orders/{order_id}"
WITHDRAWALS = "/currencies/{currency}/withdrawals"
DEPOSITS = "/currencies/{currency}/deposits"
DEPOSIT_FEE = "/currencies/{currency}/fees/deposit"
WITHDRAWAL_FEE = "/currencies/{currency}/fees/withdrawal"
RECEIVE_ADDRESS = "/currencies/{currency}/receive_addresses/{address_id}"


def build_path(template: str, **segments: str | int) -> str:
    """Fill a template, percent-encoding each path segment."""
    return template.format(
        **{name: quote(str(value), safe="") for name, value in segments.items()}
    )
