import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ipgeo.errors import CacheIoError
from ipgeo.logger import logger
from ipgeo.models.common import LookupResponse


class CacheEntry(BaseModel):
    """The most recent successful lookup and when it was retrieved.

    `target` is the address the entry describes, None for a self lookup.
    """

    model_config = ConfigDict(frozen=True)

    response: LookupResponse
    retrieved_at: datetime
    target: str | None = None

    @field_validator("retrieved_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class ResponseCache:
    """Single-entry, file-backed cache of the last successful lookup.

    Writes go to a temporary file in the same directory that is then renamed
    over the cache file, so readers see either the old or the new entry.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def read(self) -> CacheEntry | None:
        """Return the stored entry, or None when it is missing or unreadable."""
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            logger.debug(f"No cached lookup path={self.path}")
            return None
        except OSError as exc:
            logger.warning(f"Failed to read lookup cache path={self.path} error={exc!r}")
            return None

        # Undecodable bytes surface as a ValidationError like any other malformed JSON.
        try:
            return CacheEntry.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning(f"Ignoring corrupt lookup cache path={self.path} error_count={exc.error_count()}")
            return None

    def write(self, entry: CacheEntry) -> None:
        """Atomically replace the stored entry."""
        payload = entry.model_dump_json(indent=2)
        tmp_path: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as exc:
            raise CacheIoError(f"Failed to write lookup cache {self.path}: {exc}") from exc
        finally:
            if tmp_path is not None:
                Path(tmp_path).unlink(missing_ok=True)

    def clear(self) -> None:
        """Remove the stored entry, if any."""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            raise CacheIoError(f"Failed to clear lookup cache {self.path}: {exc}") from exc

    @staticmethod
    def is_fresh(entry: CacheEntry, now: datetime, ttl: timedelta) -> bool:
        """Fresh when retrieved less than `ttl` ago. Entries stamped in the future are stale."""
        return timedelta(0) <= now - entry.retrieved_at < ttl


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
