"""Record store interface and implementations.

A record store keeps every record of one entity kind as a single top-level JSON
array and always reads and writes the whole collection. The JSON file store is
the production backend; the in-memory store runs the same codec without
touching the filesystem.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import Generic

from loguru import logger
from pydantic import ValidationError

from src.ticketing.entities import EntityKind
from src.ticketing.entities.core._base import EntityT
from src.ticketing.runtime.config.config_data import ConfigData
from src.ticketing.runtime.context import get_config


class StoreError(Exception):
    """Base class for record store failures."""


class StoreIOError(StoreError):
    """The backing storage could not be read or written."""


class CorruptStoreError(StoreError):
    """The backing storage exists but does not hold a JSON array of records."""


class RecordStore(ABC, Generic[EntityT]):
    """Abstract whole-collection store for one entity kind.

    Subclasses only move raw text in and out of their backend; decoding,
    encoding and the corrupt-document fallback are shared here.
    """

    def __init__(self, kind: EntityKind[EntityT], strict: bool = False):
        self._kind = kind
        self._strict = strict

    @property
    def kind(self) -> EntityKind[EntityT]:
        return self._kind

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable description of where records are kept."""

    @abstractmethod
    def _read_text(self) -> str | None:
        """Return the stored document, or None when nothing was stored yet.

        Raises:
            StoreIOError: If the backend exists but cannot be read
        """

    @abstractmethod
    def _write_text(self, text: str) -> None:
        """Replace the stored document.

        Raises:
            StoreIOError: If the backend cannot be written
        """

    @abstractmethod
    def lock(self) -> threading.RLock:
        """Lock guarding read-modify-write sequences on this store."""

    def load(self) -> list[EntityT]:
        """Load all records.

        A missing document is the first-run state and yields an empty list.
        An unreadable or corrupt document also yields an empty list unless
        the store was created with ``strict=True``.
        """
        if self._strict:
            return self.load_strict()
        try:
            return self.load_strict()
        except StoreError as e:
            logger.warning("Treating {} as empty: {}", self.location, e)
            return []

    def load_for_update(self) -> list[EntityT]:
        """Load all records ahead of a full rewrite.

        A corrupt document reads as empty, as in ``load``, so the rewrite
        replaces it. A document that exists but cannot be read is never
        treated as empty, since rewriting it would drop every stored record.

        Raises:
            StoreIOError: If the document exists but cannot be read
        """
        if self._strict:
            return self.load_strict()
        try:
            return self.load_strict()
        except CorruptStoreError as e:
            logger.warning("Replacing corrupt {}: {}", self.location, e)
            return []

    def load_strict(self) -> list[EntityT]:
        """Load all records, raising instead of falling back on a bad document.

        Raises:
            StoreIOError: If the document exists but cannot be read
            CorruptStoreError: If the document is not a JSON array of records
        """
        text = self._read_text()
        if text is None:
            logger.debug("No records stored at {} yet", self.location)
            return []

        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise CorruptStoreError(f"{self.location} is not valid JSON: {e}") from e

        if not isinstance(document, list):
            raise CorruptStoreError(
                f"{self.location} must hold a JSON array, found {type(document).__name__}"
            )

        try:
            records = [self._kind.decode(item) for item in document]
        except ValidationError as e:
            raise CorruptStoreError(f"{self.location} holds invalid records: {e}") from e

        logger.debug("Loaded {} {} record(s) from {}", len(records), self._kind.name, self.location)
        return records

    def save_all(self, records: Sequence[EntityT]) -> None:
        """Serialise the full collection and replace the stored document.

        Raises:
            StoreIOError: If serialisation or the write fails
        """
        try:
            text = json.dumps(
                [self._kind.encode(record) for record in records],
                indent=2,
                ensure_ascii=False,
            )
            # Lone surrogates pass json.dumps but cannot be stored as UTF-8
            text.encode("utf-8")
        except (TypeError, ValueError) as e:
            raise StoreIOError(f"Could not serialise {self._kind.name} records: {e}") from e

        self._write_text(text)
        logger.debug("Saved {} {} record(s) to {}", len(records), self._kind.name, self.location)

    def append_and_save(self, record: EntityT) -> None:
        """Load the collection, append one record and save it back."""
        with self.lock():
            records = self.load_for_update()
            records.append(record)
            self.save_all(records)


# One lock per resolved path so that every store on the same file in this
# process serialises its read-modify-write sequences. Other processes are not
# covered: concurrent writers still overwrite each other.
_path_locks: dict[Path, threading.RLock] = {}
_path_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    key = path.resolve()
    with _path_locks_guard:
        return _path_locks.setdefault(key, threading.RLock())


class JsonFileRecordStore(RecordStore[EntityT]):
    """Record store backed by one JSON file."""

    def __init__(self, kind: EntityKind[EntityT], path: Path | str, strict: bool = False):
        super().__init__(kind, strict=strict)
        self._path = Path(path)
        self._lock = _lock_for(self._path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    def lock(self) -> threading.RLock:
        return self._lock

    def _read_text(self) -> str | None:
        try:
            return self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as e:
            raise CorruptStoreError(f"{self._path} is not UTF-8 text: {e}") from e
        except OSError as e:
            raise StoreIOError(f"Could not read {self._path}: {e}") from e

    def _write_text(self, text: str) -> None:
        """Write to a temp file beside the target, then rename it into place."""
        tmp_name = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(text)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self._path)
        except (OSError, UnicodeError) as e:
            raise StoreIOError(f"Could not write {self._path}: {e}") from e
        finally:
            # Only present when the rename did not happen
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)


class InMemoryRecordStore(RecordStore[EntityT]):
    """Record store that keeps the encoded document in memory."""

    def __init__(
        self, kind: EntityKind[EntityT], text: str | None = None, strict: bool = False
    ):
        super().__init__(kind, strict=strict)
        self._text = text
        self._lock = threading.RLock()
        self.write_count = 0

    @property
    def text(self) -> str | None:
        """The stored document exactly as it would appear on disk."""
        return self._text

    @property
    def location(self) -> str:
        return f"<memory:{self._kind.name}>"

    def lock(self) -> threading.RLock:
        return self._lock

    def _read_text(self) -> str | None:
        return self._text

    def _write_text(self, text: str) -> None:
        self._text = text
        self.write_count += 1


def get_record_store(
    kind: EntityKind[EntityT], config: ConfigData | None = None
) -> JsonFileRecordStore[EntityT]:
    """Build the configured JSON file store for an entity kind."""
    storage = (config or get_config()).storage
    path = storage.path_for(kind.name, kind.default_file)
    logger.debug("Using {} for {} records", path, kind.name)
    return JsonFileRecordStore(kind, path, strict=storage.strict_reads)

