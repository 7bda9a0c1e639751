import logging
import os

import pytest

from app.session import WalletSession, default_session
from domain.bank_account import BankAccount
from domain.errors import SaveData
from domain.wallets import Wallet, WalletList
from storage.file_storage import FileDataStore


@pytest.fixture
def store(tmp_path):
    return FileDataStore(str(tmp_path / "account.json"), str(tmp_path / "walletlist.json"))


class TestWalletSessionLoad:
    def test_missing_files_fall_back_to_defaults(self, store, tmp_path, caplog):
        session = WalletSession(store, str(tmp_path / "backups"))
        with caplog.at_level(logging.WARNING):
            account, wallets = session.load()
        assert account == BankAccount()
        assert wallets == WalletList()
        assert "Error on loading BankAccount" in caplog.text
        assert "Error on loading WalletList" in caplog.text
        assert not (tmp_path / "backups").exists()

    def test_corrupt_file_is_backed_up_and_replaced(self, store, tmp_path):
        with open(store.account_path, "w", encoding="utf-8") as f:
            f.write("{broken")
        backup_dir = tmp_path / "backups"
        session = WalletSession(store, str(backup_dir))

        account, _ = session.load()

        assert account == BankAccount()
        backups = list(backup_dir.iterdir())
        assert len(backups) == 1
        assert backups[0].name.startswith("account_backup_")
        assert backups[0].read_text(encoding="utf-8") == "{broken"

    def test_one_aggregate_failing_does_not_affect_the_other(self, store, tmp_path):
        store.save_bank_account(BankAccount("7.77"))
        with open(store.wallet_list_path, "w", encoding="utf-8") as f:
            f.write("[]")
        account, wallets = WalletSession(store, str(tmp_path / "b")).load()
        assert account == BankAccount("7.77")
        assert wallets == WalletList()

    def test_unparseable_files_do_not_crash_load(self, store, tmp_path):
        with open(store.account_path, "w", encoding="utf-8") as f:
            f.write('{"format_version": ' + "9" * 5000 + "}")
        with open(store.wallet_list_path, "w", encoding="utf-8") as f:
            f.write("[" * 200000)
        backup_dir = tmp_path / "backups"

        account, wallets = WalletSession(store, str(backup_dir)).load()

        assert account == BankAccount()
        assert wallets == WalletList()
        assert len(list(backup_dir.iterdir())) == 2


class TestWalletSessionSave:
    def test_save_then_load_round_trip(self, store):
        session = WalletSession(store)
        account = BankAccount("100.00")
        wallets = WalletList([Wallet(name="Main", currency="BTC", amount="0.5")])
        assert session.save(account, wallets) is True
        assert session.load() == (account, wallets)

    def test_save_failure_is_reported_not_raised(self, store, caplog):
        class FailingAccountStore(FileDataStore):
            def save_bank_account(self, account):
                raise SaveData("Error saving BankAccount to file: boom")

        failing = FailingAccountStore(store.account_path, store.wallet_list_path)
        session = WalletSession(failing)
        wallets = WalletList([Wallet(name="Main", currency="ETH")])
        with caplog.at_level(logging.WARNING):
            ok = session.save(BankAccount("1.00"), wallets)
        assert ok is False
        assert "Could not store BankAccount details" in caplog.text
        # the wallet list is still attempted
        assert store.retrieve_wallet_list() == wallets


def test_default_session_uses_given_paths(tmp_path):
    session = default_session(
        str(tmp_path / "a.json"), str(tmp_path / "w.json"), str(tmp_path / "b")
    )
    session.save(BankAccount("2.00"), WalletList())
    assert os.path.exists(tmp_path / "a.json")
    assert os.path.exists(tmp_path / "w.json")
