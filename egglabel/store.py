"""In-memory history of decoded records and its blob serialization."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from datetime import date, datetime

from .expiry import SOON_THRESHOLD_DAYS, days_remaining
from .models import Record

logger = logging.getLogger(__name__)

_BLOB_VERSION = 1


class RecordStore:
    """Ordered collection of records, oldest first.

    Mutations only touch memory; callers persist with :meth:`to_blob` at
    their own save points.
    """

    def __init__(self, records: list[Record] | None = None) -> None:
        self._records: list[Record] = []
        self._index: dict[str, Record] = {}
        for record in records or []:
            self.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(tuple(self._records))

    def append(self, record: Record) -> None:
        """Add a record at the end.

        Raises:
            ValueError: If the identifier is already in the store.
        """
        if record.identifier in self._index:
            raise ValueError(f"duplicate record identifier: {record.identifier}")
        self._records.append(record)
        self._index[record.identifier] = record

    def get(self, identifier: str) -> Record | None:
        return self._index.get(identifier)

    def toggle_favorite(self, identifier: str) -> bool:
        """Flip the favorite flag. Returns False if no record matches."""
        record = self._index.get(identifier)
        if record is None:
            return False
        record.is_favorite = not record.is_favorite
        return True

    def all(self) -> tuple[Record, ...]:
        return tuple(self._records)

    def favorites_only(self) -> tuple[Record, ...]:
        return tuple(r for r in self._records if r.is_favorite)

    def recent_first(self, favorites: bool = False) -> tuple[Record, ...]:
        records = self.favorites_only() if favorites else self.all()
        return tuple(reversed(records))

    def expiring(
        self, now: date | datetime, within_days: int = SOON_THRESHOLD_DAYS
    ) -> tuple[Record, ...]:
        """Records not yet expired whose expiry is at most ``within_days`` away.

        With the default window this matches the ``soon`` expiry state.
        """
        return tuple(
            r
            for r in self._records
            if r.expiry_date is not None
            and 0 < days_remaining(r.expiry_date, now) <= within_days
        )

    def to_blob(self) -> str:
        """Serialize the whole history as one JSON document."""
        return json.dumps(
            {
                "version": _BLOB_VERSION,
                "records": [r.to_dict() for r in self._records],
            },
            ensure_ascii=False,
        )

    @classmethod
    def from_blob(cls, blob: str | bytes | None) -> RecordStore:
        """Restore a store from :meth:`to_blob` output.

        A missing or unreadable blob gives an empty store; losing history
        must not block new decodes.
        """
        if not blob:
            return cls()
        try:
            data = json.loads(blob)
            entries = data["records"] if isinstance(data, dict) else data
            if not isinstance(entries, list):
                raise ValueError("records is not a list")
            return cls([Record.from_dict(entry) for entry in entries])
        except (KeyError, TypeError, ValueError, RecursionError) as e:
            logger.warning("Discarding unreadable history: %s", e)
            return cls()
