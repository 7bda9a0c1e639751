from __future__ import annotations

from abc import ABC, abstractmethod

from domain.bank_account import BankAccount
from domain.wallets import WalletList


class DataStore(ABC):
    """Persistence contract for the bank account and the wallet list.

    Both aggregates are stored independently; saving one never touches the
    other and there is no atomicity across them.
    """

    @abstractmethod
    def save_bank_account(self, account: BankAccount | None) -> None:
        """Persist the account. No-op for None. Raises SaveData."""
        pass

    @abstractmethod
    def save_wallet_list(self, wallets: WalletList | None) -> None:
        """Persist the wallet list. No-op for None. Raises SaveData."""
        pass

    @abstractmethod
    def retrieve_bank_account(self) -> BankAccount:
        """Load the account. Raises RetrieveData."""
        pass

    @abstractmethod
    def retrieve_wallet_list(self) -> WalletList:
        """Load the wallet list. Raises RetrieveData."""
        pass
