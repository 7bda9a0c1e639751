import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent

ACCOUNT_PATH = os.environ.get("WALLET_ACCOUNT_PATH", str(PROJECT_ROOT / "account.json"))
WALLET_LIST_PATH = os.environ.get("WALLET_LIST_PATH", str(PROJECT_ROOT / "walletlist.json"))
BACKUP_DIR = os.environ.get("WALLET_BACKUP_DIR", str(PROJECT_ROOT / "backups"))

PRICE_API_URL = os.environ.get(
    "WALLET_PRICE_API_URL", "https://api.coingecko.com/api/v3/simple/price"
)
PRICE_VS_CURRENCY = os.environ.get("WALLET_PRICE_VS_CURRENCY", "eur")
PRICE_CACHE_PATH = os.environ.get(
    "WALLET_PRICE_CACHE_PATH", str(PROJECT_ROOT / "currency_prices.json")
)
PRICE_TIMEOUT = float(os.environ.get("WALLET_PRICE_TIMEOUT", "10"))

LOG_LEVEL = os.environ.get("WALLET_LOG_LEVEL", "WARNING")
