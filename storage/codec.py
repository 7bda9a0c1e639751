"""Versioned JSON encoding for the persisted aggregates.

Each aggregate is wrapped in an envelope::

    {"format_version": 1, "kind": "bank_account", "data": {...}}

Decimal values are written as strings so their scale survives the round
trip. Decoders are strict: unknown or missing keys, wrong types and values
that break domain invariants raise ``DecodeError`` instead of producing a
partially populated object.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from domain.bank_account import BankAccount
from domain.errors import DomainError
from domain.money import SCALE
from domain.wallets import Wallet, WalletList, format_crypto_amount

FORMAT_VERSION = 1
BANK_ACCOUNT_KIND = "bank_account"
WALLET_LIST_KIND = "wallet_list"

_WALLET_KEYS = {"name", "currency", "fee_percent", "amount"}


class DecodeError(ValueError):
    pass


def _envelope(kind: str, data: dict[str, Any]) -> dict[str, Any]:
    return {"format_version": FORMAT_VERSION, "kind": kind, "data": data}


def _open_envelope(payload: Any, kind: str) -> Any:
    if not isinstance(payload, dict):
        raise DecodeError(f"Expected JSON object for {kind}, got {type(payload).__name__}")
    if set(payload) != {"format_version", "kind", "data"}:
        raise DecodeError(f"Unexpected envelope keys: {sorted(payload)}")
    version = payload["format_version"]
    if isinstance(version, bool) or not isinstance(version, int):
        raise DecodeError(f"Invalid format_version: {version!r}")
    if version != FORMAT_VERSION:
        raise DecodeError(f"Unsupported format_version: {version}")
    if payload["kind"] != kind:
        raise DecodeError(f"Expected kind '{kind}', got {payload['kind']!r}")
    return payload["data"]


def _require_keys(item: Any, keys: set[str], owner: str) -> dict[str, Any]:
    if not isinstance(item, dict):
        raise DecodeError(f"{owner}: expected object, got {type(item).__name__}")
    if set(item) != keys:
        missing = sorted(keys - set(item))
        extra = sorted(set(item) - keys)
        raise DecodeError(f"{owner}: missing keys {missing}, unexpected keys {extra}")
    return item


def _decimal_field(value: Any, field: str) -> Decimal:
    if not isinstance(value, str):
        raise DecodeError(f"{field}: expected decimal string, got {type(value).__name__}")
    try:
        parsed = Decimal(value)
    except InvalidOperation as exc:
        raise DecodeError(f"{field}: invalid decimal {value!r}") from exc
    if not parsed.is_finite():
        raise DecodeError(f"{field}: invalid decimal {value!r}")
    return parsed


def encode_bank_account(account: BankAccount) -> dict[str, Any]:
    return _envelope(BANK_ACCOUNT_KIND, {"balance": str(account.balance)})


def decode_bank_account(payload: Any) -> BankAccount:
    data = _require_keys(_open_envelope(payload, BANK_ACCOUNT_KIND), {"balance"}, "bank_account")
    balance = _decimal_field(data["balance"], "balance")
    if balance.as_tuple().exponent != -SCALE:
        raise DecodeError(f"balance: expected {SCALE} fractional digits, got {data['balance']!r}")
    try:
        return BankAccount(balance)
    except DomainError as exc:
        raise DecodeError(f"balance: {exc}") from exc


def encode_wallet_list(wallets: WalletList) -> dict[str, Any]:
    items = [
        {
            "name": wallet.name,
            "currency": wallet.currency.value,
            "fee_percent": str(wallet.fee_percent),
            "amount": format_crypto_amount(wallet.amount),
        }
        for wallet in wallets
    ]
    return _envelope(WALLET_LIST_KIND, {"wallets": items})


def decode_wallet_list(payload: Any) -> WalletList:
    data = _require_keys(_open_envelope(payload, WALLET_LIST_KIND), {"wallets"}, "wallet_list")
    items = data["wallets"]
    if not isinstance(items, list):
        raise DecodeError(f"wallets: expected list, got {type(items).__name__}")

    wallets = WalletList()
    for index, raw in enumerate(items):
        owner = f"wallets[{index}]"
        item = _require_keys(raw, _WALLET_KEYS, owner)
        if not isinstance(item["name"], str) or not isinstance(item["currency"], str):
            raise DecodeError(f"{owner}: name and currency must be strings")
        try:
            wallets.add(
                Wallet(
                    name=item["name"],
                    currency=item["currency"],
                    fee_percent=_decimal_field(item["fee_percent"], f"{owner}.fee_percent"),
                    amount=_decimal_field(item["amount"], f"{owner}.amount"),
                )
            )
        except DomainError as exc:
            raise DecodeError(f"{owner}: {exc}") from exc
    return wallets
