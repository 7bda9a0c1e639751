from __future__ import annotations

import logging
import shutil
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)


def create_backup(path: str, backup_dir: str | None = None) -> str | None:
    """Copy ``path`` to a timestamped file and return the copy's path.

    Returns None when the source does not exist.
    """
    source = Path(path)
    if not source.exists():
        return None
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    target_dir = Path(backup_dir) if backup_dir else source.parent / "backups"
    target_dir.mkdir(parents=True, exist_ok=True)
    backup_path = target_dir / f"{source.stem}_backup_{stamp}{source.suffix}"
    shutil.copy2(source, backup_path)
    logger.info("Backup created: %s", backup_path)
    return str(backup_path)
