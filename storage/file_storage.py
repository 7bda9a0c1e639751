from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from collections.abc import Callable
from typing import Any

from config import ACCOUNT_PATH, WALLET_LIST_PATH
from domain.bank_account import BankAccount
from domain.errors import RetrieveData, SaveData
from domain.wallets import WalletList

from .base import DataStore
from .codec import (
    decode_bank_account,
    decode_wallet_list,
    encode_bank_account,
    encode_wallet_list,
)

logger = logging.getLogger(__name__)


class FileDataStore(DataStore):
    """DataStore writing each aggregate to its own JSON file.

    Writes go to a temporary file in the target directory and are moved into
    place with ``os.replace``, so a failed save leaves the previous snapshot
    intact.
    """

    _path_locks: dict[str, threading.RLock] = {}
    _path_locks_guard = threading.Lock()

    def __init__(
        self,
        account_path: str = ACCOUNT_PATH,
        wallet_list_path: str = WALLET_LIST_PATH,
    ) -> None:
        self._account_path = str(account_path)
        self._wallet_list_path = str(wallet_list_path)

    @property
    def account_path(self) -> str:
        return self._account_path

    @property
    def wallet_list_path(self) -> str:
        return self._wallet_list_path

    @classmethod
    def _lock_for(cls, path: str) -> threading.RLock:
        abs_path = os.path.abspath(path)
        with cls._path_locks_guard:
            if abs_path not in cls._path_locks:
                cls._path_locks[abs_path] = threading.RLock()
            return cls._path_locks[abs_path]

    def save_bank_account(self, account: BankAccount | None) -> None:
        if account is None:
            return
        self._write(self._account_path, "BankAccount", lambda: encode_bank_account(account))

    def save_wallet_list(self, wallets: WalletList | None) -> None:
        if wallets is None:
            return
        self._write(self._wallet_list_path, "WalletList", lambda: encode_wallet_list(wallets))

    def retrieve_bank_account(self) -> BankAccount:
        return self._read(self._account_path, "BankAccount", decode_bank_account)

    def retrieve_wallet_list(self) -> WalletList:
        return self._read(self._wallet_list_path, "WalletList", decode_wallet_list)

    def _write(self, path: str, label: str, encode: Callable[[], dict[str, Any]]) -> None:
        with self._lock_for(path):
            tmp_path: str | None = None
            try:
                payload = encode()
                directory = os.path.dirname(path) or "."
                fd, tmp_path = tempfile.mkstemp(prefix=".wallet_", suffix=".json", dir=directory)
                try:
                    f = os.fdopen(fd, "w", encoding="utf-8")
                except OSError:
                    os.close(fd)
                    raise
                with f:
                    json.dump(payload, f, indent=2, ensure_ascii=False)
                os.replace(tmp_path, path)
            except (OSError, TypeError, ValueError) as exc:
                raise SaveData(f"Error saving {label} to file {path}: {exc}") from exc
            finally:
                if tmp_path is not None and os.path.exists(tmp_path):
                    try:
                        os.remove(tmp_path)
                    except OSError:
                        logger.exception("Failed to cleanup temporary file during save: %s", tmp_path)
        logger.debug("%s saved to %s", label, path)

    def _read(self, path: str, label: str, decode: Callable[[Any], Any]):
        with self._lock_for(path):
            try:
                with open(path, encoding="utf-8") as f:
                    payload = json.load(f)
                result = decode(payload)
            except (OSError, ValueError, RecursionError) as exc:
                raise RetrieveData(f"Error retrieving {label} from file {path}: {exc}") from exc
        logger.debug("%s loaded from %s", label, path)
        return result
