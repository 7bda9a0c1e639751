from __future__ import annotations

from dataclasses import dataclass

from .errors import InsufficientBalance, InvalidAmount
from .money import Money, add, subtract


@dataclass(frozen=True)
class WithdrawResult:
    ok: bool
    balance: Money
    error: InsufficientBalance | None = None


def _require_non_negative(amount: Money, operation: str) -> None:
    if amount.is_negative():
        raise InvalidAmount(f"{operation} amount must not be negative: {amount}")


class BankAccount:
    """Cash account with a balance that can never drop below zero.

    ``None`` passed to ``deposit`` or ``withdraw`` means "nothing to move"
    and leaves the balance untouched. Negative amounts are rejected with
    ``InvalidAmount``; a negative deposit would otherwise act as a withdrawal
    that skips the balance check.
    """

    def __init__(self, balance=None) -> None:
        initial = Money.zero() if balance is None else Money.of(balance)
        if initial.is_negative():
            raise InvalidAmount(f"Balance must not be negative: {initial}")
        self._balance = initial

    @property
    def balance(self) -> Money:
        return self._balance

    def deposit(self, amount) -> None:
        if amount is None:
            return
        money = Money.of(amount)
        _require_non_negative(money, "Deposit")
        self._balance = add(self._balance, money)

    def try_withdraw(self, amount) -> WithdrawResult:
        if amount is None:
            return WithdrawResult(ok=True, balance=self._balance)
        money = Money.of(amount)
        _require_non_negative(money, "Withdraw")
        candidate = subtract(self._balance, money)
        if candidate.is_negative():
            return WithdrawResult(
                ok=False, balance=self._balance, error=InsufficientBalance()
            )
        self._balance = candidate
        return WithdrawResult(ok=True, balance=candidate)

    def withdraw(self, amount) -> None:
        result = self.try_withdraw(amount)
        if not result.ok:
            raise result.error or InsufficientBalance()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BankAccount):
            return NotImplemented
        return self._balance == other._balance

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"BankAccount(balance={self._balance})"
