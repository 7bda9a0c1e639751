import json

import pytest

from domain.errors import PriceUnavailable
from domain.money import Money
from main import parse_args, run


def _args(tmp_path, *command):
    return parse_args(
        [
            "--account-path",
            str(tmp_path / "account.json"),
            "--wallets-path",
            str(tmp_path / "walletlist.json"),
            "--backup-dir",
            str(tmp_path / "backups"),
            *command,
        ]
    )


class StubPrices:
    def get_current_price(self, currency):
        if currency.value == "BTC":
            return Money.of("100.00")
        raise PriceUnavailable(f"No price available for {currency.value}")


def _balance(tmp_path) -> str:
    with open(tmp_path / "account.json", encoding="utf-8") as f:
        return json.load(f)["data"]["balance"]


def test_deposit_and_withdraw_persist(tmp_path, capsys):
    assert run(_args(tmp_path, "deposit", "100.00")) == 0
    assert run(_args(tmp_path, "withdraw", "30.50")) == 0
    assert _balance(tmp_path) == "69.50"
    assert "69.50" in capsys.readouterr().out


def test_insufficient_balance_exits_with_error(tmp_path, capsys):
    run(_args(tmp_path, "deposit", "10.00"))
    assert run(_args(tmp_path, "withdraw", "10.01")) == 1
    assert "Insufficient balance" in capsys.readouterr().err
    assert _balance(tmp_path) == "10.00"


def test_buy_with_price_lookup(tmp_path):
    run(_args(tmp_path, "deposit", "500"))
    run(_args(tmp_path, "add-wallet", "Main", "btc", "--fee", "0"))
    assert run(_args(tmp_path, "buy", "Main", "2"), prices=StubPrices()) == 0
    assert _balance(tmp_path) == "300.00"
    with open(tmp_path / "walletlist.json", encoding="utf-8") as f:
        stored = json.load(f)
    assert stored["data"]["wallets"][0]["amount"] == "2.00000000"


def test_price_command(tmp_path, capsys):
    assert run(_args(tmp_path, "price", "BTC"), prices=StubPrices()) == 0
    assert "BTC: 100.00" in capsys.readouterr().out
    assert run(_args(tmp_path, "price", "ETH"), prices=StubPrices()) == 1


def test_show_does_not_write_files(tmp_path):
    assert run(_args(tmp_path, "show")) == 0
    assert not (tmp_path / "account.json").exists()


def test_unknown_coin_is_rejected_by_parser(tmp_path):
    with pytest.raises(SystemExit):
        _args(tmp_path, "add-wallet", "Main", "XYZ")
