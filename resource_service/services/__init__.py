"""Business logic services package with public service helpers."""

from .price_service import (
    DEFAULT_PRICES,
    ConversionResult,
    PriceTable,
    convert,
    fetch_price_table,
    get_price_table,
    reset_price_table_for_tests,
)

__all__ = [
    "DEFAULT_PRICES",
    "ConversionResult",
    "PriceTable",
    "convert",
    "fetch_price_table",
    "get_price_table",
    "reset_price_table_for_tests",
]
