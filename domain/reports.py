from __future__ import annotations

from prettytable import PrettyTable

from .bank_account import BankAccount
from .wallets import WalletList, format_crypto_amount


class WalletReport:
    def __init__(self, account: BankAccount, wallets: WalletList) -> None:
        self._account = account
        self._wallets = wallets

    def wallet_rows(self) -> list[tuple[str, str, str, str]]:
        return [
            (
                wallet.name,
                wallet.currency.value,
                f"{wallet.fee_percent}",
                format_crypto_amount(wallet.amount),
            )
            for wallet in self._wallets
        ]

    def as_table(self) -> str:
        table = PrettyTable()
        table.field_names = ["Wallet", "Coin", "Fee (%)", "Amount"]
        table.align["Amount"] = "r"

        rows = self.wallet_rows()
        for row in rows:
            table.add_row(list(row))
        if not rows:
            table.add_row(["(no wallets)", "", "", ""])

        table.add_row(["BANK ACCOUNT", "", "", str(self._account.balance)], divider=True)
        return str(table)
