from __future__ import annotations

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_NAME = "No name"
DEFAULT_STATUS = "unknown"


@dataclass(frozen=True)
class Record:
    """
    A single pet as shown in the results list.

    Fields:

    - id: catalog identifier (always present)
    - name: display name, DEFAULT_NAME when the catalog has none
    - status: raw status string, DEFAULT_STATUS when the catalog has none
    """
    id: int
    name: str
    status: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _coerce_id(raw: Any) -> Optional[int]:
    # Only exact integers; int(1.9) would fold distinct ids together
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        digits = text[1:] if text.startswith("-") else text
        if digits.isdecimal():
            return int(text)
    return None


def _text_or_default(value: Any, default: str) -> str:
    if value is None or value == "":
        return default
    return value if isinstance(value, str) else str(value)


def normalise_record(entry: Any) -> Optional[Record]:
    """Map one raw catalog entry into a Record, or None if it has no usable id."""
    if not isinstance(entry, Mapping):
        return None

    record_id = _coerce_id(entry.get("id"))
    if record_id is None:
        return None

    return Record(
        id=record_id,
        name=_text_or_default(entry.get("name"), DEFAULT_NAME),
        status=_text_or_default(entry.get("status"), DEFAULT_STATUS),
    )


def normalise_records(payload: Any) -> List[Record]:
    """
    Validate a findByStatus payload and turn it into display records.

    - A payload that isn't a list is treated as an empty list.
    - Entries without an id (missing, null, or not an integer) are dropped.
    - Catalog order is preserved.
    """
    if not isinstance(payload, list):
        if payload is not None:
            logger.warning(
                "Catalog payload is not a list; treating as empty",
                extra={"payload_type": type(payload).__name__},
            )
        return []

    records: List[Record] = []
    dropped = 0
    for entry in payload:
        record = normalise_record(entry)
        if record is None:
            dropped += 1
            continue
        records.append(record)

    if dropped:
        logger.debug(
            "Dropped catalog entries without a usable id",
            extra={"n_dropped": dropped, "n_kept": len(records)},
        )
    return records
