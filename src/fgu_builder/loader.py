"""
Load module source documents from YAML files.

A module file lists its spell and table files relative to its own directory::

    name: Test Book
    author: Jane Doe
    source: Homebrew
    category: Source Book
    ruleset: 5e
    spell-files:
      - spells/fire-bolt.yaml
    table-files:
      - tables/wild-magic.yaml
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from .errors import LoadError
from .models import ModuleContent, ModuleDefinition, SpellDefinition, TableDefinition

logger = logging.getLogger("fgu-builder.loader")

ModelT = TypeVar("ModelT", bound=BaseModel)


def _read_yaml(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise LoadError(path, f"cannot read file ({e.strerror or e})") from e
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise LoadError(path, f"invalid YAML: {e}") from e


def _load_model(path: Path | str, model: type[ModelT]) -> ModelT:
    path = Path(path)
    data = _read_yaml(path)
    if not isinstance(data, dict):
        raise LoadError(path, f"expected a mapping, got {type(data).__name__}")
    if "id" in data and "id" in model.model_fields:
        raise LoadError(path, "'id' cannot be set in a record file; ids are assigned at build time")
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise LoadError(path, f"invalid {model.__name__}:\n{e}") from e


def load_module_definition(path: Path | str) -> ModuleDefinition:
    return _load_model(path, ModuleDefinition)


def load_spell(path: Path | str) -> SpellDefinition:
    return _load_model(path, SpellDefinition)


def load_table(path: Path | str) -> TableDefinition:
    return _load_model(path, TableDefinition)


def load_module(path: Path | str) -> ModuleContent:
    """Load a module file together with every spell and table it lists.

    Records keep the order in which the module file lists them. Ids are not
    assigned here; see ``fgu_builder.ids.assign_ids``.

    Raises:
        LoadError: Any of the files cannot be read or validated.
    """
    path = Path(path)
    root_dir = path.parent
    module = load_module_definition(path)

    logger.info("Processing %d spells...", len(module.spell_files))
    spells = []
    for spell_file in module.spell_files:
        spell_path = root_dir / spell_file
        logger.info("Processing %s", spell_path)
        spells.append(load_spell(spell_path))

    logger.info("Processing %d tables...", len(module.table_files))
    tables = []
    for table_file in module.table_files:
        table_path = root_dir / table_file
        logger.info("Processing %s", table_path)
        tables.append(load_table(table_path))

    return ModuleContent(module=module, spells=spells, tables=tables)
