"""Random tables in FGU's ``client.xml`` schema."""

from __future__ import annotations

import logging

from ..errors import ContentError
from ..formatting import MarkupConverter, to_markup
from ..ids import element_id
from ..markup import FORMATTED_TEXT, NUMBER, STRING, MarkupBuilder, type_attr
from ..models import TableDefinition, TableRange

logger = logging.getLogger("fgu-builder.emitters.table")


class TableEmitter:
    """Writes table records into a ``MarkupBuilder``.

    Tables are emitted as locked, single-column tables with the roll dice
    left empty; FGU derives the dice from the row ranges.
    """

    def __init__(self, to_markup: MarkupConverter = to_markup) -> None:
        self.to_markup = to_markup

    def emit(self, w: MarkupBuilder, table: TableDefinition) -> None:
        if table.id is None:
            raise ContentError(f"Table {table.name!r} has no id assigned")

        logger.debug("Emitting table %d: %s", table.id, table.name)
        notes = self.to_markup(table.formatted_text or "")

        with w.scope(element_id(table.id)):
            w.text("description", [STRING], table.description)
            w.text("dice", [type_attr("dice")], "")
            w.text("enabled", [NUMBER], 0)
            w.text("hiddenenabled", [STRING], "Disabled")
            w.text("hiderollresults", [NUMBER], 0)
            w.text("labelcol1", [STRING], "Effect")
            w.text("locked", [NUMBER], 1)
            w.text("mode", [NUMBER], 0)
            w.text("name", [STRING], table.name)
            w.raw("notes", [FORMATTED_TEXT], notes)
            w.text("resultscols", [NUMBER], 1)
            w.text("table_positionoffset", [NUMBER], 0)
            with w.scope("tablerows"):
                for index, row in enumerate(table.ranges, start=1):
                    _emit_row(w, index, row)


def _emit_row(w: MarkupBuilder, index: int, row: TableRange) -> None:
    with w.scope(element_id(index)):
        w.text("fromrange", [NUMBER], row.from_)
        w.text("torange", [NUMBER], row.until)
        with w.scope("results"):
            # One result column per row.
            with w.scope(element_id(1)):
                w.text("result", [STRING], row.description)
                with w.scope("resultlink", [type_attr("windowreference")]):
                    w.empty("class")
                    w.empty("recordname")
