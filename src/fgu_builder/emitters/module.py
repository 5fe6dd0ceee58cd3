"""
Module-level elements: the document envelope, ``definition.xml`` content and
the library index at the top of ``client.xml``.
"""

from __future__ import annotations

from ..markup import STRING, Attribute, MarkupBuilder, type_attr
from ..models import ModuleDefinition

ROOT_ELEMENT = "root"
ROOT_ATTRIBUTES: list[Attribute] = [
    ("version", "4.1"),
    ("dataversion", "20210302"),
    ("release", "8.1|CoreRPG:4.1"),
]

SPELL_SECTION = "spell"
TABLE_SECTION = "tables"

STATIC: Attribute = ("static", "true")


def emit_definition(w: MarkupBuilder, module: ModuleDefinition) -> None:
    """Write the body of ``definition.xml``."""
    w.text("name", [STRING], module.name)
    w.text("category", [STRING], module.category.value)
    w.text("author", [STRING], module.author)
    w.text("ruleset", [STRING], module.ruleset.label)


def emit_library(
    w: MarkupBuilder,
    module: ModuleDefinition,
    *,
    has_spells: bool,
    has_tables: bool,
) -> None:
    """Write the ``library`` index.

    Entries are only listed for record kinds that have records; FGU fails to
    open a library entry whose section is missing.
    """
    key = module.library_key
    with w.scope("library"):
        with w.scope(key, [STATIC]):
            w.text("categoryname", [STRING], module.category.value)
            w.text("name", [STRING], key)
            with w.scope("entries"):
                if has_spells:
                    _emit_library_entry(w, SPELL_SECTION, "Spells")
                if has_tables:
                    _emit_library_entry(w, TABLE_SECTION, "Tables")


def _emit_library_entry(w: MarkupBuilder, record_type: str, label: str) -> None:
    with w.scope(record_type, [STATIC]):
        with w.scope("librarylink", [type_attr("windowreference")]):
            w.text("class", [], "reference_list")
            w.text("recordname", [], "..")
        w.text("name", [STRING], label)
        w.text("recordtype", [STRING], record_type)
