import logging
from decimal import Decimal

from domain.bank_account import BankAccount
from domain.errors import InvalidAmount
from domain.money import Money
from domain.prices import CurrentPriceForCurrency
from domain.wallets import (
    CryptoCurrency,
    Wallet,
    WalletList,
    as_crypto_amount,
    format_crypto_amount,
)

logger = logging.getLogger(__name__)


def _positive_crypto_amount(amount) -> Decimal:
    value = as_crypto_amount(amount)
    if value <= 0:
        raise InvalidAmount("Crypto amount must be positive")
    return value


def _resolve_price(
    wallet: Wallet, price, prices: CurrentPriceForCurrency | None
) -> Money:
    if price is not None:
        resolved = Money.of(price)
    elif prices is not None:
        resolved = prices.get_current_price(wallet.currency)
    else:
        raise InvalidAmount("A price or a price provider is required")
    if resolved.is_negative():
        raise InvalidAmount("Price must not be negative")
    return resolved


def _fee(total: Money, wallet: Wallet) -> Money:
    return total * (wallet.fee_percent / Decimal(100))


class Deposit:
    def __init__(self, account: BankAccount):
        self._account = account

    def execute(self, amount) -> Money:
        self._account.deposit(amount)
        logger.info("Deposit amount=%s balance=%s", amount, self._account.balance)
        return self._account.balance


class Withdraw:
    def __init__(self, account: BankAccount):
        self._account = account

    def execute(self, amount) -> Money:
        self._account.withdraw(amount)
        logger.info("Withdraw amount=%s balance=%s", amount, self._account.balance)
        return self._account.balance


class AddWallet:
    def __init__(self, wallets: WalletList):
        self._wallets = wallets

    def execute(self, *, name: str, currency: str, fee_percent="0") -> Wallet:
        wallet = Wallet(
            name=name,
            currency=CryptoCurrency.parse(currency),
            fee_percent=fee_percent,
        )
        self._wallets.add(wallet)
        logger.info("Wallet created name=%s currency=%s", wallet.name, wallet.currency.value)
        return wallet


class RemoveWallet:
    def __init__(self, wallets: WalletList):
        self._wallets = wallets

    def execute(self, name: str) -> Wallet:
        wallet = self._wallets.remove(name)
        logger.info(
            "Wallet removed name=%s amount=%s", wallet.name, format_crypto_amount(wallet.amount)
        )
        return wallet


class BuyCrypto:
    """Buy coins into a wallet, paying price and fee from the bank account."""

    def __init__(
        self,
        account: BankAccount,
        wallets: WalletList,
        prices: CurrentPriceForCurrency | None = None,
    ):
        self._account = account
        self._wallets = wallets
        self._prices = prices

    def execute(self, *, name: str, amount, price=None) -> Money:
        wallet = self._wallets.get(name)
        crypto_amount = _positive_crypto_amount(amount)
        unit_price = _resolve_price(wallet, price, self._prices)
        total = unit_price * crypto_amount
        cost = total + _fee(total, wallet)
        # withdraw first: a failed withdrawal must leave the wallet untouched
        self._account.withdraw(cost)
        self._wallets.replace(wallet.with_added(crypto_amount))
        logger.info(
            "Bought %s %s into wallet=%s cost=%s",
            format_crypto_amount(crypto_amount),
            wallet.currency.value,
            name,
            cost,
        )
        return cost


class SellCrypto:
    """Sell coins from a wallet, crediting proceeds minus fee to the account."""

    def __init__(
        self,
        account: BankAccount,
        wallets: WalletList,
        prices: CurrentPriceForCurrency | None = None,
    ):
        self._account = account
        self._wallets = wallets
        self._prices = prices

    def execute(self, *, name: str, amount, price=None) -> Money:
        wallet = self._wallets.get(name)
        crypto_amount = _positive_crypto_amount(amount)
        unit_price = _resolve_price(wallet, price, self._prices)
        updated = wallet.with_removed(crypto_amount)
        total = unit_price * crypto_amount
        proceeds = total - _fee(total, wallet)
        self._wallets.replace(updated)
        self._account.deposit(proceeds)
        logger.info(
            "Sold %s %s from wallet=%s proceeds=%s",
            format_crypto_amount(crypto_amount),
            wallet.currency.value,
            name,
            proceeds,
        )
        return proceeds
