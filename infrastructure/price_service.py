from __future__ import annotations

import json
import logging
from pathlib import Path

import requests

from config import PRICE_API_URL, PRICE_CACHE_PATH, PRICE_TIMEOUT, PRICE_VS_CURRENCY
from domain.errors import InvalidAmount, PriceUnavailable
from domain.money import Money
from domain.wallets import CryptoCurrency

logger = logging.getLogger(__name__)


class CurrentCurrencyPrices:
    """Price lookup backed by a CoinGecko-compatible ``simple/price`` endpoint.

    Prices are fetched for all supported coins at once and cached in a JSON
    file. When the network or the response is unusable the last cached
    prices are used instead. ``PriceUnavailable`` is raised only when neither
    source knows the requested coin.
    """

    def __init__(
        self,
        api_url: str = PRICE_API_URL,
        vs_currency: str = PRICE_VS_CURRENCY,
        cache_file: str | Path = PRICE_CACHE_PATH,
        timeout: float = PRICE_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self._api_url = api_url
        self._vs_currency = vs_currency.lower()
        self._cache_file = Path(cache_file)
        self._timeout = timeout
        self._session = session or requests.Session()
        self._prices: dict[str, Money] | None = None

    def get_current_price(self, currency: CryptoCurrency) -> Money:
        coin = CryptoCurrency.parse(currency)
        if self._prices is None:
            self._prices = self._fetch_and_cache_prices() or {}
        price = self._prices.get(coin.value)
        if price is None:
            raise PriceUnavailable(f"No price available for {coin.value}")
        return price

    def refresh(self) -> None:
        self._prices = None

    def _fetch_and_cache_prices(self) -> dict[str, Money] | None:
        ids = ",".join(coin.provider_id for coin in CryptoCurrency)
        try:
            resp = self._session.get(
                self._api_url,
                params={"ids": ids, "vs_currencies": self._vs_currency},
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
            resp.raise_for_status()
            payload = resp.json()
        except requests.RequestException as e:
            logger.warning("Network error fetching prices: %s", e)
            return self._load_cached()
        except ValueError as e:
            logger.warning("Invalid JSON in price response: %s", e)
            return self._load_cached()

        prices = self._parse_prices(payload)
        if prices:
            self._save_cache(prices)
            return prices
        logger.warning("No valid prices found in response")
        return self._load_cached()

    def _parse_prices(self, payload) -> dict[str, Money]:
        prices: dict[str, Money] = {}
        if not isinstance(payload, dict):
            return prices
        for coin in CryptoCurrency:
            entry = payload.get(coin.provider_id)
            if not isinstance(entry, dict) or self._vs_currency not in entry:
                continue
            try:
                prices[coin.value] = Money.of(entry[self._vs_currency])
            except InvalidAmount as e:
                logger.warning("Invalid price value for %s: %s", coin.value, e)
        return prices

    def _load_cached(self) -> dict[str, Money] | None:
        if not self._cache_file.exists():
            return None
        try:
            with open(self._cache_file, encoding="utf-8") as f:
                data = json.load(f)
            return {str(code): Money.of(value) for code, value in data.items()}
        except (OSError, ValueError, AttributeError) as e:
            logger.warning("Failed to load cached prices from %s: %s", self._cache_file, e)
            return None

    def _save_cache(self, prices: dict[str, Money]) -> None:
        try:
            with open(self._cache_file, "w", encoding="utf-8") as f:
                json.dump({code: str(price) for code, price in prices.items()}, f, indent=2)
        except OSError as e:
            logger.warning("Failed to save price cache: %s", e)
