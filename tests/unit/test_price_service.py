import pytest
import requests

from resource_service.errors import PriceFeedError, ValidationError
from resource_service.services import price_service
from resource_service.services.price_service import (
    DEFAULT_PRICES,
    PriceTable,
    convert,
    fetch_price_table,
    get_price_table,
)


@pytest.fixture
def table():
    return PriceTable.from_entries(DEFAULT_PRICES)


def test_default_table_contains_every_shipped_currency(table):
    assert len(table) == len(DEFAULT_PRICES)
    assert table.currencies[0] == "BLUR"
    assert table.get("USD") == 1.0
    assert "bNEO" in table
    assert "BNEO" not in table


def test_duplicate_symbols_keep_last_price_in_first_position():
    t = PriceTable.from_entries([
        {"currency": "AAA", "price": 1},
        {"currency": "BBB", "price": 2},
        {"currency": "AAA", "price": 3},
    ])
    assert t.currencies == ["AAA", "BBB"]
    assert t.get("AAA") == 3.0


def test_malformed_entries_are_skipped():
    t = PriceTable.from_entries([
        {"currency": "OK", "price": "2.5"},
        {"currency": "ZERO", "price": 0},
        {"currency": "NEG", "price": -1},
        {"currency": "TXT", "price": "abc"},
        {"price": 1},
        "junk",
    ])
    assert t.currencies == ["OK"]
    assert t.get("OK") == 2.5


def test_convert_eth_to_usd(table):
    result = convert(table, "ETH", "USD", 1)
    assert result.output == 1645.9337
    assert result.rate == pytest.approx(1645.9337373737374)


def test_convert_uses_price_ratio(table):
    result = convert(table, "USD", "ETH", "1000")
    assert result.amount == 1000.0
    assert result.rate == pytest.approx(1 / 1645.9337373737374)
    assert result.output == round(1000.0 * (1 / 1645.9337373737374), 4)


def test_convert_same_token_returns_amount(table):
    result = convert(table, "ATOM", "ATOM", 2.5)
    assert result.rate == 1.0
    assert result.output == 2.5


@pytest.mark.parametrize("amount", [None, "", "abc", 0, -3, "nan", "inf"])
def test_convert_rejects_invalid_amount(table, amount):
    with pytest.raises(ValidationError) as excinfo:
        convert(table, "ETH", "USD", amount)
    assert excinfo.value.message == "Enter a valid amount."


def test_convert_rejects_amount_that_overflows_output(table):
    with pytest.raises(ValidationError) as excinfo:
        convert(table, "WBTC", "IRIS", "1e308")
    assert excinfo.value.message == "Enter a valid amount."


def test_convert_unknown_token(table):
    with pytest.raises(ValidationError) as excinfo:
        convert(table, "ETH", "DOGE", 1)
    assert excinfo.value.message == "Price data not available for selected tokens."


class _FakeResponse:
    def __init__(self, payload=None, status_code=200, exc=None):
        self._payload = payload
        self.status_code = status_code
        self._exc = exc

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._exc is not None:
            raise self._exc
        return self._payload


def test_fetch_price_table_builds_table(monkeypatch):
    calls = {}

    def fake_get(url, timeout):
        calls["url"] = url
        calls["timeout"] = timeout
        return _FakeResponse([{"currency": "ETH", "price": 2000}, {"currency": "USD", "price": 1}])

    monkeypatch.setattr(price_service.requests, "get", fake_get)
    t = fetch_price_table("https://prices.example/feed.json", 2.0)
    assert calls == {"url": "https://prices.example/feed.json", "timeout": 2.0}
    assert t.currencies == ["ETH", "USD"]


def test_fetch_price_table_http_error(monkeypatch):
    monkeypatch.setattr(price_service.requests, "get", lambda url, timeout: _FakeResponse(status_code=503))
    with pytest.raises(PriceFeedError) as excinfo:
        fetch_price_table("https://prices.example/feed.json", 1.0)
    assert "503" in excinfo.value.detail


def test_fetch_price_table_rejects_non_list(monkeypatch):
    monkeypatch.setattr(price_service.requests, "get", lambda url, timeout: _FakeResponse({"ETH": 1}))
    with pytest.raises(PriceFeedError):
        fetch_price_table("https://prices.example/feed.json", 1.0)


def test_fetch_price_table_invalid_json(monkeypatch):
    monkeypatch.setattr(
        price_service.requests,
        "get",
        lambda url, timeout: _FakeResponse(exc=ValueError("Expecting value")),
    )
    with pytest.raises(PriceFeedError):
        fetch_price_table("https://prices.example/feed.json", 1.0)


def test_get_price_table_defaults_without_feed():
    t = get_price_table()
    assert len(t) == len(DEFAULT_PRICES)
    assert get_price_table() is t


def test_get_price_table_uses_configured_feed(monkeypatch):
    monkeypatch.setenv("PRICE_FEED_URL", "https://prices.example/feed.json")
    monkeypatch.setenv("PRICE_FEED_TIMEOUT", "1.5")
    seen = {}

    def fake_get(url, timeout):
        seen["timeout"] = timeout
        return _FakeResponse([{"currency": "ETH", "price": 2000}])

    monkeypatch.setattr(price_service.requests, "get", fake_get)
    t = get_price_table()
    assert t.currencies == ["ETH"]
    assert seen["timeout"] == 1.5
