import asyncio
import json
import logging
import os
import tempfile
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from core.models.errors import StorageError
from core.models.player import PlayerRecord, PlayerRegistration, StoreStats

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(UTC)


class PlayerStore:
    """
    Discord user id -> PUBG player mapping, persisted as a single JSON document.

    Every mutation reads the whole document, changes it in memory and writes it
    back. Mutations go through one lock so concurrent interactions cannot lose
    each other's updates. File I/O runs in a worker thread to keep the event
    loop free.
    """

    def __init__(self, path: Path | str, clock: Callable[[], datetime] = utc_now) -> None:
        self.path = Path(path)
        self.clock = clock
        # single writer for the read-modify-write cycle
        self._lock = asyncio.Lock()

    # ——— Document I/O ———

    def _ensure_dir(self) -> None:
        directory = self.path.parent
        if not directory.exists():
            directory.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created data directory: {directory}")

    def _read(self) -> dict[str, Any]:
        """Load the raw document. An unparsable document counts as an empty store."""
        try:
            self._ensure_dir()
            if not self.path.exists():
                return {}
            with self.path.open(encoding="utf-8") as f:
                raw = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.error(f"Error reading player store {self.path}: {e}")
            return {}

        if not isinstance(raw, dict):
            logger.error(f"Player store {self.path} is not a JSON object; treating it as empty")
            return {}
        return raw

    @staticmethod
    def _parse(user_id: str, entry: Any) -> PlayerRecord | None:
        try:
            return PlayerRecord.model_validate(entry)
        except ValidationError as e:
            logger.warning(f"Unreadable record for {user_id}: {e.error_count()} errors")
            return None

    def _read_records(self) -> dict[str, PlayerRecord]:
        """Every readable record. Unreadable entries are left out but stay in the file."""
        records: dict[str, PlayerRecord] = {}
        for user_id, entry in self._read().items():
            record = self._parse(user_id, entry)
            if record is not None:
                records[user_id] = record
        return records

    def _write(self, document: dict[str, Any]) -> None:
        try:
            self._ensure_dir()
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".users-", suffix=".tmp")
        except OSError as e:
            raise StorageError(f"Could not write player store {self.path}: {e}") from e

        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise StorageError(f"Could not write player store {self.path}: {e}") from e

        logger.debug(f"Player store saved to {self.path}")

    # ——— Public API ———

    async def save(self, user_id: str, registration: PlayerRegistration) -> None:
        """
        Create or overwrite the mapping for a Discord user.

        `saved_at` is kept from the first registration; `updated_at` is refreshed.
        Other users' entries are written back untouched, readable or not.

        Raises:
            StorageError: If the document could not be written.
        """
        async with self._lock:
            document = await asyncio.to_thread(self._read)
            now = self.clock()
            existing = self._parse(user_id, document[user_id]) if user_id in document else None
            saved_at = existing.saved_at if existing else now

            record = PlayerRecord(
                player_id=registration.player_id,
                player_name=registration.player_name,
                clan_id=registration.clan_id or None,
                saved_at=saved_at,
                updated_at=max(now, saved_at),
            )
            document[user_id] = record.model_dump(mode="json", by_alias=True)
            await asyncio.to_thread(self._write, document)

        logger.info(
            f"Saved mapping: {user_id} -> {registration.player_name} ({registration.player_id})"
        )

    async def get(self, user_id: str) -> PlayerRecord | None:
        document = await asyncio.to_thread(self._read)
        if user_id not in document:
            return None
        return self._parse(user_id, document[user_id])

    async def delete(self, user_id: str) -> bool:
        """Remove a user's mapping. Returns whether one existed."""
        async with self._lock:
            document = await asyncio.to_thread(self._read)
            if user_id not in document:
                return False

            del document[user_id]
            await asyncio.to_thread(self._write, document)

        logger.info(f"Deleted mapping for: {user_id}")
        return True

    async def get_all(self) -> dict[str, PlayerRecord]:
        return await asyncio.to_thread(self._read_records)

    async def has_registered(self, user_id: str) -> bool:
        return user_id in await self.get_all()

    async def stats(self) -> StoreStats:
        records = await self.get_all()
        with_clans = sum(1 for record in records.values() if record.clan_id)
        return StoreStats(
            total_users=len(records),
            users_with_clans=with_clans,
            users_without_clans=len(records) - with_clans,
            db_file_path=str(self.path),
        )
