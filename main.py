from __future__ import annotations

import argparse
import logging
import sys

from app.session import default_session
from app.use_cases import AddWallet, BuyCrypto, Deposit, RemoveWallet, SellCrypto, Withdraw
from config import LOG_LEVEL
from domain.errors import DomainError
from domain.reports import WalletReport
from domain.wallets import CryptoCurrency
from infrastructure.price_service import CurrentCurrencyPrices


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Track a bank account balance and a list of crypto wallets."
    )
    parser.add_argument("--account-path", help="Path to the bank account file")
    parser.add_argument("--wallets-path", help="Path to the wallet list file")
    parser.add_argument("--backup-dir", help="Directory for backups of unreadable files")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Increase log output (-v, -vv)"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("show", help="Print bank account and wallets")

    deposit = sub.add_parser("deposit", help="Deposit money to the bank account")
    deposit.add_argument("amount")

    withdraw = sub.add_parser("withdraw", help="Withdraw money from the bank account")
    withdraw.add_argument("amount")

    add_wallet = sub.add_parser("add-wallet", help="Create a new wallet")
    add_wallet.add_argument("name")
    add_wallet.add_argument("coin", type=str.upper, choices=[c.value for c in CryptoCurrency])
    add_wallet.add_argument("--fee", default="0", help="Fee in percent (default: 0)")

    remove_wallet = sub.add_parser("remove-wallet", help="Delete a wallet")
    remove_wallet.add_argument("name")

    for command, help_text in (("buy", "Buy crypto into a wallet"), ("sell", "Sell crypto")):
        trade = sub.add_parser(command, help=help_text)
        trade.add_argument("name")
        trade.add_argument("amount")
        trade.add_argument("--price", help="Unit price; looked up online when omitted")

    price = sub.add_parser("price", help="Show the current price of a coin")
    price.add_argument("coin", type=str.upper, choices=[c.value for c in CryptoCurrency])

    return parser.parse_args(argv)


def _configure_logging(verbose: int) -> None:
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = getattr(logging, str(LOG_LEVEL).upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def run(args: argparse.Namespace, prices=None) -> int:
    if args.command == "price":
        prices = prices or CurrentCurrencyPrices()
        try:
            print(f"{args.coin}: {prices.get_current_price(CryptoCurrency.parse(args.coin))}")
        except DomainError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        return 0

    session = default_session(args.account_path, args.wallets_path, args.backup_dir)
    account, wallets = session.load()

    try:
        if args.command == "deposit":
            Deposit(account).execute(args.amount)
        elif args.command == "withdraw":
            Withdraw(account).execute(args.amount)
        elif args.command == "add-wallet":
            AddWallet(wallets).execute(name=args.name, currency=args.coin, fee_percent=args.fee)
        elif args.command == "remove-wallet":
            RemoveWallet(wallets).execute(args.name)
        elif args.command in ("buy", "sell"):
            if args.price is None and prices is None:
                prices = CurrentCurrencyPrices()
            use_case = BuyCrypto if args.command == "buy" else SellCrypto
            use_case(account, wallets, prices).execute(
                name=args.name, amount=args.amount, price=args.price
            )
    except DomainError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(WalletReport(account, wallets).as_table())
    if args.command != "show" and not session.save(account, wallets):
        print("Warning: could not store bank account and/or wallet list", file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    _configure_logging(args.verbose)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
