"""Schema emitters: one per FGU record kind."""

from fgu_builder.emitters.module import (
    ROOT_ATTRIBUTES,
    ROOT_ELEMENT,
    SPELL_SECTION,
    TABLE_SECTION,
    emit_definition,
    emit_library,
)
from fgu_builder.emitters.spell import SpellEmitter
from fgu_builder.emitters.table import TableEmitter

__all__ = [
    "ROOT_ATTRIBUTES",
    "ROOT_ELEMENT",
    "SPELL_SECTION",
    "TABLE_SECTION",
    "SpellEmitter",
    "TableEmitter",
    "emit_definition",
    "emit_library",
]
