from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import NewRecord, Record


class RecordStore(Protocol):
    """Persistent collection of record documents.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def create(self, fields: NewRecord) -> Record:
        """Assign an id and ``timestamp = now()`` and persist."""

        raise NotImplementedError

    def get_by_id(self, record_id: str) -> Optional[Record]:
        raise NotImplementedError

    def list_by_owner(self, owner_id: str) -> Sequence[Record]:
        """Newest-first by timestamp."""

        raise NotImplementedError

    def list_all(self) -> Sequence[Record]:
        """Newest-first by timestamp."""

        raise NotImplementedError

    def delete_page(self, owner_id: Optional[str], page_size: int) -> int:
        """Delete up to ``page_size`` matching records in one commit; return how many went."""

        raise NotImplementedError
