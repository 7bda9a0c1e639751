from decimal import Decimal

import pytest

from app.use_cases import AddWallet, BuyCrypto, Deposit, RemoveWallet, SellCrypto, Withdraw
from domain.bank_account import BankAccount
from domain.errors import (
    InsufficientAmount,
    InsufficientBalance,
    InvalidAmount,
    PriceUnavailable,
    WalletError,
)
from domain.money import Money
from domain.wallets import CryptoCurrency, WalletList


class StubPrices:
    def __init__(self, prices: dict[CryptoCurrency, str]):
        self._prices = prices
        self.calls: list[CryptoCurrency] = []

    def get_current_price(self, currency: CryptoCurrency) -> Money:
        self.calls.append(currency)
        if currency not in self._prices:
            raise PriceUnavailable(f"No price available for {currency.value}")
        return Money.of(self._prices[currency])


@pytest.fixture
def wallets():
    wallets = WalletList()
    AddWallet(wallets).execute(name="Main", currency="BTC", fee_percent="1")
    return wallets


def test_deposit_and_withdraw_return_balance():
    account = BankAccount()
    assert Deposit(account).execute("100") == Money.of("100.00")
    assert Withdraw(account).execute("30.50") == Money.of("69.50")
    with pytest.raises(InsufficientBalance):
        Withdraw(account).execute("69.51")


def test_add_and_remove_wallet(wallets):
    assert wallets.get("Main").currency is CryptoCurrency.BTC
    with pytest.raises(WalletError):
        AddWallet(wallets).execute(name="Main", currency="ETH")
    RemoveWallet(wallets).execute("Main")
    assert len(wallets) == 0


class TestBuyCrypto:
    def test_buy_with_explicit_price_charges_fee(self, wallets):
        account = BankAccount("1000.00")
        cost = BuyCrypto(account, wallets).execute(name="Main", amount="0.5", price="100.00")
        # 50.00 + 1% fee
        assert cost == Money.of("50.50")
        assert account.balance == Money.of("949.50")
        assert wallets.get("Main").amount == Decimal("0.5")

    def test_buy_looks_up_price(self, wallets):
        account = BankAccount("1000.00")
        prices = StubPrices({CryptoCurrency.BTC: "200.00"})
        BuyCrypto(account, wallets, prices).execute(name="Main", amount="1")
        assert prices.calls == [CryptoCurrency.BTC]
        assert account.balance == Money.of("798.00")

    def test_insufficient_balance_leaves_wallet_untouched(self, wallets):
        account = BankAccount("10.00")
        with pytest.raises(InsufficientBalance):
            BuyCrypto(account, wallets).execute(name="Main", amount="1", price="10.00")
        assert account.balance == Money.of("10.00")
        assert wallets.get("Main").amount == Decimal(0)

    def test_price_unavailable_propagates(self, wallets):
        account = BankAccount("10.00")
        with pytest.raises(PriceUnavailable):
            BuyCrypto(account, wallets, StubPrices({})).execute(name="Main", amount="1")
        assert account.balance == Money.of("10.00")

    def test_requires_price_source(self, wallets):
        with pytest.raises(InvalidAmount):
            BuyCrypto(BankAccount("1.00"), wallets).execute(name="Main", amount="1")

    @pytest.mark.parametrize("amount", ["0", "-1"])
    def test_non_positive_amount_rejected(self, wallets, amount):
        with pytest.raises(InvalidAmount):
            BuyCrypto(BankAccount("1.00"), wallets).execute(
                name="Main", amount=amount, price="1.00"
            )


class TestSellCrypto:
    def test_sell_credits_proceeds_minus_fee(self, wallets):
        account = BankAccount("0.00")
        wallets.replace(wallets.get("Main").with_added("2"))
        proceeds = SellCrypto(account, wallets).execute(name="Main", amount="1", price="100.00")
        assert proceeds == Money.of("99.00")
        assert account.balance == Money.of("99.00")
        assert wallets.get("Main").amount == Decimal("1")

    def test_selling_more_than_held_raises(self, wallets):
        account = BankAccount("5.00")
        with pytest.raises(InsufficientAmount):
            SellCrypto(account, wallets).execute(name="Main", amount="0.1", price="1.00")
        assert account.balance == Money.of("5.00")

    def test_unknown_wallet_raises(self):
        with pytest.raises(WalletError):
            SellCrypto(BankAccount(), WalletList()).execute(name="x", amount="1", price="1")
