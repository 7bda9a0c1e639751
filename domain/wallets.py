from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum

from .errors import InsufficientAmount, InvalidAmount, WalletError

AMOUNT_SCALE = 8
_AMOUNT_QUANTUM = Decimal(1).scaleb(-AMOUNT_SCALE)
_FEE_QUANTUM = Decimal("0.01")


class CryptoCurrency(str, Enum):
    BTC = "BTC"
    ETH = "ETH"
    LTC = "LTC"
    XRP = "XRP"
    ADA = "ADA"
    DOGE = "DOGE"
    SOL = "SOL"
    DOT = "DOT"

    @property
    def provider_id(self) -> str:
        return _PROVIDER_IDS[self]

    @classmethod
    def parse(cls, value: str | CryptoCurrency) -> CryptoCurrency:
        if isinstance(value, cls):
            return value
        code = str(value or "").strip().upper()
        try:
            return cls(code)
        except ValueError:
            raise WalletError(f"Unsupported crypto currency: {value}") from None


_PROVIDER_IDS = {
    CryptoCurrency.BTC: "bitcoin",
    CryptoCurrency.ETH: "ethereum",
    CryptoCurrency.LTC: "litecoin",
    CryptoCurrency.XRP: "ripple",
    CryptoCurrency.ADA: "cardano",
    CryptoCurrency.DOGE: "dogecoin",
    CryptoCurrency.SOL: "solana",
    CryptoCurrency.DOT: "polkadot",
}


def _as_decimal(value, quantum: Decimal, label: str) -> Decimal:
    if isinstance(value, bool):
        raise InvalidAmount(f"{label} must be a number")
    try:
        parsed = value if isinstance(value, Decimal) else Decimal(str(value).strip())
        if not parsed.is_finite():
            raise InvalidAmount(f"{label} must be finite")
        return parsed.quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise InvalidAmount(f"Invalid {label.lower()}: {value!r}") from exc


def as_crypto_amount(value) -> Decimal:
    return _as_decimal(value, _AMOUNT_QUANTUM, "Amount")


def format_crypto_amount(value: Decimal) -> str:
    # str() switches to exponent form for small values such as 0E-8
    return f"{value:f}"


@dataclass(frozen=True)
class Wallet:
    name: str
    currency: CryptoCurrency
    fee_percent: Decimal = Decimal("0.00")
    amount: Decimal = Decimal(0)

    def __post_init__(self) -> None:
        name = str(self.name or "").strip()
        if not name:
            raise WalletError("Wallet name is required")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "currency", CryptoCurrency.parse(self.currency))

        fee = _as_decimal(self.fee_percent, _FEE_QUANTUM, "Fee")
        if not (Decimal(0) <= fee <= Decimal(100)):
            raise InvalidAmount("Fee must be between 0 and 100 percent")
        object.__setattr__(self, "fee_percent", fee)

        amount = as_crypto_amount(self.amount)
        if amount < 0:
            raise InvalidAmount("Wallet amount must not be negative")
        object.__setattr__(self, "amount", amount)

    def with_added(self, amount) -> Wallet:
        delta = as_crypto_amount(amount)
        if delta < 0:
            raise InvalidAmount("Amount must not be negative")
        return replace(self, amount=self.amount + delta)

    def with_removed(self, amount) -> Wallet:
        delta = as_crypto_amount(amount)
        if delta < 0:
            raise InvalidAmount("Amount must not be negative")
        if delta > self.amount:
            raise InsufficientAmount()
        return replace(self, amount=self.amount - delta)


class WalletList:
    """Ordered collection of wallets keyed by unique name."""

    def __init__(self, wallets: Iterable[Wallet] = ()) -> None:
        self._wallets: list[Wallet] = []
        for wallet in wallets:
            self.add(wallet)

    def add(self, wallet: Wallet) -> None:
        if self._index_of(wallet.name) is not None:
            raise WalletError(f"Wallet already exists: {wallet.name}")
        self._wallets.append(wallet)

    def remove(self, name: str) -> Wallet:
        index = self._require_index(name)
        return self._wallets.pop(index)

    def get(self, name: str) -> Wallet:
        return self._wallets[self._require_index(name)]

    def replace(self, wallet: Wallet) -> None:
        self._wallets[self._require_index(wallet.name)] = wallet

    def _index_of(self, name: str) -> int | None:
        key = str(name or "").strip()
        for index, wallet in enumerate(self._wallets):
            if wallet.name == key:
                return index
        return None

    def _require_index(self, name: str) -> int:
        index = self._index_of(name)
        if index is None:
            raise WalletError(f"Wallet not found: {name}")
        return index

    def __iter__(self) -> Iterator[Wallet]:
        return iter(list(self._wallets))

    def __len__(self) -> int:
        return len(self._wallets)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._index_of(name) is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WalletList):
            return NotImplemented
        return self._wallets == other._wallets

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"WalletList({self._wallets!r})"
