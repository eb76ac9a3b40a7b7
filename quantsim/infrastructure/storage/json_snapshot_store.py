"""
JSON file store for ledger snapshots.
"""

import os
import tempfile
from pathlib import Path

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from quantsim.core.exceptions.ledger import DataError, ValidationError
from quantsim.core.models.portfolio import PortfolioLedger
from quantsim.core.models.portfolio_snapshot import LedgerSnapshot


class JsonSnapshotStore:
    """Persists ledger snapshots as a single JSON document.

    Writes go to a temporary file in the same directory which then replaces
    the target, so a crash never leaves a half-written snapshot behind.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        """Check if a snapshot has been saved."""
        return self.path.is_file()

    def save_snapshot(self, snapshot: LedgerSnapshot) -> Path:
        """Write a snapshot to disk.

        Raises:
            DataError: If the file cannot be written
        """
        payload = snapshot.model_dump_json(indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error(f"Failed to save ledger snapshot to {self.path}: {e}")
            raise DataError(f"Failed to save ledger snapshot to {self.path}: {e}") from e

        logger.info(
            f"Saved ledger snapshot to {self.path} "
            f"({len(snapshot.positions)} positions, {len(snapshot.transactions)} transactions)"
        )
        return self.path

    def load_snapshot(self) -> LedgerSnapshot | None:
        """Read the saved snapshot; None when nothing has been saved.

        Raises:
            DataError: If the file cannot be read or is not a valid snapshot
        """
        if not self.exists():
            logger.debug(f"No ledger snapshot at {self.path}")
            return None

        try:
            payload = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise DataError(f"Failed to read ledger snapshot {self.path}: {e}") from e

        try:
            return LedgerSnapshot.model_validate_json(payload)
        except PydanticValidationError as e:
            logger.error(f"Corrupt ledger snapshot {self.path}: {e.error_count()} errors")
            raise DataError(f"Corrupt ledger snapshot {self.path}") from e

    def save(self, ledger: PortfolioLedger) -> Path:
        """Persist the full state of a ledger."""
        return self.save_snapshot(ledger.to_snapshot())

    def load(self) -> PortfolioLedger | None:
        """Rebuild a ledger from the saved snapshot; None when nothing has been saved."""
        snapshot = self.load_snapshot()
        if snapshot is None:
            return None
        try:
            return PortfolioLedger.from_snapshot(snapshot)
        except ValidationError as e:
            raise DataError(f"Inconsistent ledger snapshot {self.path}: {e}") from e

    def clear(self) -> None:
        """Delete the saved snapshot if present."""
        self.path.unlink(missing_ok=True)
