from __future__ import annotations

import logging
import os

from backup import create_backup
from config import ACCOUNT_PATH, BACKUP_DIR, WALLET_LIST_PATH
from domain.bank_account import BankAccount
from domain.errors import RetrieveData, SaveData
from domain.wallets import WalletList
from storage.base import DataStore
from storage.file_storage import FileDataStore

logger = logging.getLogger(__name__)


class WalletSession:
    """Startup and shutdown handling for the host application.

    ``load`` never fails: an aggregate that cannot be retrieved is replaced
    by a fresh default and a warning is logged. If the stored file exists but
    is unreadable it is backed up first, so the next ``save`` does not
    destroy the only copy. ``save`` likewise only warns on failure.
    """

    def __init__(self, data_store: DataStore, backup_dir: str | None = None) -> None:
        self._data_store = data_store
        self._backup_dir = backup_dir

    @property
    def data_store(self) -> DataStore:
        return self._data_store

    def load(self) -> tuple[BankAccount, WalletList]:
        return self._load_bank_account(), self._load_wallet_list()

    def _load_bank_account(self) -> BankAccount:
        try:
            account = self._data_store.retrieve_bank_account()
        except RetrieveData as exc:
            logger.warning("Error on loading BankAccount data, using new empty account: %s", exc)
            self._backup_unreadable(getattr(self._data_store, "account_path", None))
            return BankAccount()
        logger.info("BankAccount loaded")
        return account

    def _load_wallet_list(self) -> WalletList:
        try:
            wallets = self._data_store.retrieve_wallet_list()
        except RetrieveData as exc:
            logger.warning("Error on loading WalletList data, using new empty list: %s", exc)
            self._backup_unreadable(getattr(self._data_store, "wallet_list_path", None))
            return WalletList()
        logger.info("WalletList loaded")
        return wallets

    def _backup_unreadable(self, path: str | None) -> None:
        if not path or not os.path.exists(path):
            return
        try:
            create_backup(path, self._backup_dir)
        except OSError:
            logger.exception("Failed to back up unreadable store file %s", path)

    def save(self, account: BankAccount | None, wallets: WalletList | None) -> bool:
        ok = True
        try:
            self._data_store.save_bank_account(account)
            logger.info("BankAccount details stored")
        except SaveData as exc:
            logger.warning("Could not store BankAccount details: %s", exc)
            ok = False
        try:
            self._data_store.save_wallet_list(wallets)
            logger.info("WalletList details stored")
        except SaveData as exc:
            logger.warning("Could not store WalletList details: %s", exc)
            ok = False
        return ok


def default_session(
    account_path: str | None = None,
    wallet_list_path: str | None = None,
    backup_dir: str | None = None,
) -> WalletSession:
    store = FileDataStore(account_path or ACCOUNT_PATH, wallet_list_path or WALLET_LIST_PATH)
    return WalletSession(store, backup_dir or BACKUP_DIR)
