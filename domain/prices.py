from __future__ import annotations

from typing import Protocol

from .money import Money
from .wallets import CryptoCurrency


class CurrentPriceForCurrency(Protocol):
    """Price lookup capability consumed by wallet operations.

    Implementations raise ``PriceUnavailable`` when no price can be given.
    """

    def get_current_price(self, currency: CryptoCurrency) -> Money:
        ...
