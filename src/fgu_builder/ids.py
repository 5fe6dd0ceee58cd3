"""
Record id allocation.

FGU names every record element ``id-NNNNN``; ids are allocated per record kind,
starting at 1, in processing order. The allocator is an explicit object handed
to the build so that repeated or parallel builds in one process never share
counters.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum

from .errors import ContentError, IdOverflowError
from .models import ModuleContent

logger = logging.getLogger("fgu-builder.ids")

ID_WIDTH = 5
MAX_ID = 10**ID_WIDTH - 1


class RecordKind(str, Enum):
    SPELL = "spell"
    TABLE = "table"


def element_id(index: int) -> str:
    """Render an id or local index as an FGU element name (``id-00001``)."""
    if index < 1 or index > MAX_ID:
        raise IdOverflowError(f"Index {index} does not fit in id-{'N' * ID_WIDTH}")
    return f"id-{index:0{ID_WIDTH}d}"


class IdAllocator:
    """
    Thread-safe per-kind id counters.

    Each call to ``next`` returns the next integer for that kind: 1, 2, 3...
    with no gaps and no reuse until ``reset`` is called.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: dict[RecordKind, int] = {kind: 0 for kind in RecordKind}

    def next(self, kind: RecordKind) -> int:
        """Allocate the next id for ``kind``.

        Raises:
            IdOverflowError: The id would exceed ``MAX_ID``. The counter is
                left unchanged.
        """
        kind = RecordKind(kind)
        with self._lock:
            value = self._counters[kind] + 1
            if value > MAX_ID:
                raise IdOverflowError(
                    f"{kind.value} id counter exhausted after {MAX_ID} records"
                )
            self._counters[kind] = value
        return value

    def peek(self, kind: RecordKind) -> int:
        """Return the last id allocated for ``kind`` (0 if none)."""
        with self._lock:
            return self._counters[RecordKind(kind)]

    def reset(self) -> None:
        with self._lock:
            for kind in self._counters:
                self._counters[kind] = 0


def assign_ids(content: ModuleContent, allocator: IdAllocator) -> ModuleContent:
    """Return a copy of ``content`` with every missing record id allocated.

    Spells are numbered before tables, each in content order. Records that
    already carry an id keep it; duplicated ids within a kind are rejected.

    Raises:
        ContentError: Two records of the same kind end up with the same id.
    """
    spells = [
        spell if spell.id is not None
        else spell.model_copy(update={"id": allocator.next(RecordKind.SPELL)})
        for spell in content.spells
    ]
    tables = [
        table if table.id is not None
        else table.model_copy(update={"id": allocator.next(RecordKind.TABLE)})
        for table in content.tables
    ]

    _check_unique(RecordKind.SPELL, [s.id for s in spells])
    _check_unique(RecordKind.TABLE, [t.id for t in tables])

    logger.debug(
        "Assigned ids: %d spells, %d tables", len(spells), len(tables),
    )
    return content.model_copy(update={"spells": spells, "tables": tables})


def _check_unique(kind: RecordKind, ids: list[int | None]) -> None:
    seen: set[int] = set()
    for record_id in ids:
        if record_id in seen:
            raise ContentError(f"Duplicate {kind.value} id {record_id}")
        seen.add(record_id)
