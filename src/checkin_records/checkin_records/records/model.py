from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from ..common.validators import require_non_empty, require_positive_minutes
from ..core.enums import Ache, Change, ListScope
from ..core.exceptions import ValidationError

_ACHE_CODES = {Ache.BACK: "B", Ache.LEG: "L", Ache.ARM: "A"}
_CHANGE_CODES = {Change.IMPROVED: "+", Change.WORSENED: "-", Change.NO_CHANGE: "0"}


def _wire_minutes(minutes: float) -> Union[int, float]:
    return int(minutes) if float(minutes).is_integer() else float(minutes)


@dataclass(frozen=True)
class NewRecord:
    """Validated input for a record that does not exist yet."""

    aches: Ache
    minutes: float
    change: Change
    owner_id: str

    def __post_init__(self) -> None:
        if not isinstance(self.aches, Ache) or not isinstance(self.change, Change):
            raise ValidationError("aches and change must be enum members")
        object.__setattr__(self, "minutes", require_positive_minutes(self.minutes))
        object.__setattr__(self, "owner_id", require_non_empty(self.owner_id, "ownerId"))


@dataclass(frozen=True)
class Record:
    """A persisted check-in. Never updated in place."""

    record_id: str
    timestamp: str
    aches: Ache
    minutes: float
    change: Change
    owner_id: str

    @property
    def summary(self) -> str:
        return f"{_ACHE_CODES[self.aches]}/{_wire_minutes(self.minutes)}/{_CHANGE_CODES[self.change]}"

    def to_payload(self) -> dict:
        return {
            "id": self.record_id,
            "timestamp": self.timestamp,
            "aches": self.aches.value,
            "minutes": _wire_minutes(self.minutes),
            "change": self.change.value,
            "ownerId": self.owner_id,
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Record":
        return cls(
            record_id=str(payload["id"]),
            timestamp=str(payload["timestamp"]),
            aches=Ache(payload["aches"]),
            minutes=float(payload["minutes"]),
            change=Change(payload["change"]),
            owner_id=str(payload["ownerId"]),
        )


@dataclass(frozen=True)
class BulkDeleteResult:
    deleted_count: int
    owner_id: Optional[str]
    pages: int = 0

    @property
    def scope(self) -> ListScope:
        return ListScope.ALL if self.owner_id is None else ListScope.OWNER

    def to_payload(self) -> dict:
        return {"deletedCount": self.deleted_count, "ownerId": self.owner_id, "pages": self.pages}

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "BulkDeleteResult":
        return cls(
            deleted_count=int(payload.get("deletedCount") or 0),
            owner_id=payload.get("ownerId"),
            pages=int(payload.get("pages") or 0),
        )
