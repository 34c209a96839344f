"""Restore archives for the target personal-finance app."""

import zipfile
from pathlib import Path
from typing import Optional

from config import Config
from logger import get_logger

logger = get_logger()

DB_ENTRY_NAME = "BACKUP"
PREF_ENTRY_NAME = "BACKUP_PREF"

_PREFERENCES = """<?xml version='1.0' encoding='utf-8' standalone='yes' ?>
<map>
\t<int name="FEATURE_USAGES_SPLIT_TRANSACTION" value="0" />
\t<long name="FEATURE_SYNCHRONIZATION_FIRST_USAGE" value="1881864837725" />
\t<int name="FEATURE_USAGES_HISTORY" value="0" />
\t<int name="FEATURE_USAGES_DISTRIBUTION" value="0" />
</map>"""


class BackupService:
    """Packages the ledger database as a restorable zip archive.

    Args:
        config: Application configuration (archive directory and filename).
    """

    def __init__(self, config: Config):
        self.config = config

    def write(self, db_path: Path, output_path: Optional[Path] = None) -> Path:
        """Write a restore archive holding the database and a preferences file.

        Args:
            db_path: SQLite database to package.
            output_path: Archive to create; defaults to config.archive_path.

        Returns:
            Path of the written archive.

        Raises:
            FileExistsError: If the archive already exists. It is never overwritten.
            FileNotFoundError: If the database does not exist.
        """
        output_path = Path(output_path or self.config.archive_path)
        if output_path.exists():
            raise FileExistsError(f"Archive already exists: {output_path}")
        if not Path(db_path).exists():
            raise FileNotFoundError(f"Database not found: {db_path}")

        output_path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(output_path, "x", compression=zipfile.ZIP_DEFLATED) as archive:
            archive.writestr(PREF_ENTRY_NAME, _PREFERENCES)
            archive.write(db_path, arcname=DB_ENTRY_NAME)

        logger.info(f"Wrote restore archive: {output_path}")
        return output_path
