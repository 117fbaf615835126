"""Data models."""

from .amount import Amount
from .balance import Balance, Fee, ReceiveAddress
from .envelope import Envelope, PageMeta, decode_envelope, decode_single
from .market import Market, OrderBook, Ticker, Trades, Volume
from .order import Order, OrderState, OrderType
from .transfer import Deposit, Withdrawal

__all__ = [
    "Amount",
    "Balance",
    "Deposit",
    "Envelope",
    "Fee",
    "Market",
    "Order",
    "OrderBook",
    "OrderState",
    "OrderType",
    "PageMeta",
    "ReceiveAddress",
    "Ticker",
    "Trades",
    "Volume",
    "Withdrawal",
    "decode_envelope",
    "decode_single",
]
