"""Token price table and conversion arithmetic.

Prices are quoted in USD. The table ships with a static snapshot and can be
replaced by a JSON feed (``PRICE_FEED_URL``) returning a list of
``{"currency": ..., "price": ...}`` entries.
"""
from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

import requests

from resource_service.errors import PriceFeedError, ValidationError
from resource_service.utils.settings import get_settings

logger = logging.getLogger(__name__)

OUTPUT_DECIMALS = 4

DEFAULT_PRICES: List[Dict[str, Any]] = [
    {"currency": "BLUR", "price": 0.20811525423728813},
    {"currency": "bNEO", "price": 7.1282679},
    {"currency": "BUSD", "price": 0.9998782611186441},
    {"currency": "USD", "price": 1},
    {"currency": "ETH", "price": 1645.9337373737374},
    {"currency": "GMX", "price": 36.345114372881355},
    {"currency": "STEVMOS", "price": 0.07276706779661017},
    {"currency": "LUNA", "price": 0.40955638983050846},
    {"currency": "RATOM", "price": 10.250918915254237},
    {"currency": "STRD", "price": 0.7386553389830508},
    {"currency": "EVMOS", "price": 0.06246181355932203},
    {"currency": "IBCX", "price": 41.26811355932203},
    {"currency": "IRIS", "price": 0.0177095593220339},
    {"currency": "ampLUNA", "price": 0.49548589830508477},
    {"currency": "KUJI", "price": 0.675},
    {"currency": "STOSMO", "price": 0.431318},
    {"currency": "USDC", "price": 0.9998782611186441},
    {"currency": "axlUSDC", "price": 0.989832},
    {"currency": "ATOM", "price": 7.186657333333334},
    {"currency": "STATOM", "price": 8.512162050847458},
    {"currency": "OSMO", "price": 0.3772974333333333},
    {"currency": "rSWTH", "price": 0.00408771},
    {"currency": "STLUNA", "price": 0.44232210169491526},
    {"currency": "LSI", "price": 67.69661525423729},
    {"currency": "OKB", "price": 42.97562059322034},
    {"currency": "OKT", "price": 13.561577966101694},
    {"currency": "SWTH", "price": 0.004039850455012084},
    {"currency": "USC", "price": 0.994},
    {"currency": "WBTC", "price": 26002.82202020202},
    {"currency": "wstETH", "price": 1872.2579742372882},
    {"currency": "YieldUSD", "price": 1.0290847966101695},
    {"currency": "ZIL", "price": 0.01651813559322034},
]


def _as_price(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(price) or price <= 0:
        return None
    return price


class PriceTable:
    """Currency symbol -> USD price. Symbols are case-sensitive."""

    def __init__(self, prices: Mapping[str, float]) -> None:
        self._prices: Dict[str, float] = dict(prices)

    @classmethod
    def from_entries(cls, entries: Iterable[Mapping[str, Any]]) -> "PriceTable":
        """Build a table from feed entries; a repeated symbol keeps its last price."""
        prices: Dict[str, float] = {}
        for entry in entries:
            currency = entry.get("currency") if isinstance(entry, Mapping) else None
            price = _as_price(entry.get("price")) if isinstance(entry, Mapping) else None
            if not isinstance(currency, str) or not currency or price is None:
                logger.debug("Skipping malformed price entry: %r", entry)
                continue
            prices[currency] = price
        return cls(prices)

    @property
    def currencies(self) -> List[str]:
        return list(self._prices)

    def get(self, currency: str) -> Optional[float]:
        return self._prices.get(currency)

    def entries(self) -> List[Dict[str, Any]]:
        return [{"currency": currency, "price": price} for currency, price in self._prices.items()]

    def __contains__(self, currency: object) -> bool:
        return currency in self._prices

    def __len__(self) -> int:
        return len(self._prices)


@dataclass(frozen=True)
class ConversionResult:
    from_token: str
    to_token: str
    amount: float
    rate: float
    output: float


def convert(table: PriceTable, from_token: str, to_token: str, amount: Any) -> ConversionResult:
    """Convert ``amount`` of ``from_token`` into ``to_token``.

    The output is rounded to four decimals, the precision the conversion
    form displays.
    """
    value = _as_price(amount)
    if value is None:
        raise ValidationError("Enter a valid amount.")
    if from_token == to_token:
        return ConversionResult(from_token, to_token, value, 1.0, round(value, OUTPUT_DECIMALS))
    from_price = table.get(from_token)
    to_price = table.get(to_token)
    if from_price is None or to_price is None:
        raise ValidationError("Price data not available for selected tokens.")
    rate = from_price / to_price
    output = value * rate
    if not math.isfinite(output):
        raise ValidationError("Enter a valid amount.")
    return ConversionResult(from_token, to_token, value, rate, round(output, OUTPUT_DECIMALS))


def fetch_price_table(url: str, timeout: float) -> PriceTable:
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as exc:
        logger.error("price_feed_failed: url=%s error=%s", url, exc)
        raise PriceFeedError("Failed to load price data", detail=str(exc)) from exc
    if not isinstance(payload, list):
        logger.error("price_feed_failed: url=%s error=unexpected payload type %s", url, type(payload).__name__)
        raise PriceFeedError("Failed to load price data", detail="Price feed must return a JSON list")
    table = PriceTable.from_entries(payload)
    logger.info("price_feed_loaded: url=%s currencies=%s", url, len(table))
    return table


_TABLE: Optional[PriceTable] = None
_TABLE_LOCK = threading.Lock()


def get_price_table() -> PriceTable:
    """Return the process-wide price table, loading it on first use.

    A failed feed fetch is not cached, so the next call retries.
    """
    global _TABLE
    if _TABLE is not None:
        return _TABLE
    with _TABLE_LOCK:
        if _TABLE is None:
            settings = get_settings()
            if settings.price_feed_url:
                _TABLE = fetch_price_table(settings.price_feed_url, settings.price_feed_timeout)
            else:
                _TABLE = PriceTable.from_entries(DEFAULT_PRICES)
        return _TABLE


def reset_price_table_for_tests() -> None:
    global _TABLE
    with _TABLE_LOCK:
        _TABLE = None
