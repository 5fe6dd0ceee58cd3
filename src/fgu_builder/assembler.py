"""
Assemble FGU module archives from a content model.

A module archive holds exactly two documents:

- ``client.xml``: library index plus every spell and table record
- ``definition.xml``: module name, category, author and ruleset

Both documents are built completely in memory before anything is written,
so any content or emission fault aborts the build without touching the
destination.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .archive import write_archive
from .emitters import (
    ROOT_ATTRIBUTES,
    ROOT_ELEMENT,
    SPELL_SECTION,
    TABLE_SECTION,
    SpellEmitter,
    TableEmitter,
    emit_definition,
    emit_library,
)
from .formatting import MarkupConverter, to_markup
from .ids import IdAllocator, assign_ids
from .markup import MarkupBuilder
from .models import ModuleContent, ModuleDefinition

logger = logging.getLogger("fgu-builder.assembler")

CLIENT_ENTRY = "client.xml"
DEFINITION_ENTRY = "definition.xml"
ENCODING = "utf-8"


class ModuleAssembler:
    """Compiles one ``ModuleContent`` into the documents of an FGU module.

    Records without an id are numbered by ``allocator`` when the assembler is
    created. Pass a fresh allocator (the default) per build to keep ids
    starting at 1.
    """

    def __init__(
        self,
        content: ModuleContent,
        *,
        allocator: IdAllocator | None = None,
        to_markup: MarkupConverter = to_markup,
    ) -> None:
        self.allocator = allocator if allocator is not None else IdAllocator()
        self.content = assign_ids(content, self.allocator)
        self.to_markup = to_markup

    @property
    def module(self) -> ModuleDefinition:
        return self.content.module

    def definition_document(self) -> str:
        builder = MarkupBuilder()
        with builder.scope(ROOT_ELEMENT, ROOT_ATTRIBUTES):
            emit_definition(builder, self.module)
        return builder.finish()

    def client_document(self) -> str:
        spells = self.content.spells
        tables = self.content.tables

        builder = MarkupBuilder()
        with builder.scope(ROOT_ELEMENT, ROOT_ATTRIBUTES):
            emit_library(
                builder,
                self.module,
                has_spells=bool(spells),
                has_tables=bool(tables),
            )

            if spells:
                spell_emitter = SpellEmitter(self.module, self.to_markup)
                with builder.scope(SPELL_SECTION):
                    for spell in spells:
                        spell_emitter.emit(builder, spell)

            if tables:
                table_emitter = TableEmitter(self.to_markup)
                with builder.scope(TABLE_SECTION):
                    for table in tables:
                        table_emitter.emit(builder, table)

        return builder.finish()

    def entries(self) -> list[tuple[str, bytes]]:
        """Archive members in write order: client first, then definition."""
        client = self.client_document()
        definition = self.definition_document()
        return [
            (CLIENT_ENTRY, client.encode(ENCODING)),
            (DEFINITION_ENTRY, definition.encode(ENCODING)),
        ]

    def write(self, destination: Path | str) -> Path:
        """Compile the module and write the archive to ``destination``."""
        logger.info(
            "Compiling module %r: %d spells, %d tables",
            self.module.name, len(self.content.spells), len(self.content.tables),
        )
        entries = self.entries()
        return write_archive(destination, entries)


def build_module(
    content: ModuleContent,
    destination: Path | str,
    *,
    allocator: IdAllocator | None = None,
) -> Path:
    """Compile ``content`` and write the module archive to ``destination``."""
    return ModuleAssembler(content, allocator=allocator).write(destination)
