"""
fgu-builder - compile spells and random tables authored in YAML into
Fantasy Grounds Unity module archives.
"""

from .assembler import ModuleAssembler, build_module
from .errors import BuilderError, ContentError, EmissionError, LoadError, ScaffoldError
from .ids import IdAllocator, RecordKind, assign_ids
from .loader import load_module
from .markup import MarkupBuilder
from .models import ModuleContent, ModuleDefinition, SpellDefinition, TableDefinition

try:
    from importlib.metadata import version as _get_version
    __version__ = _get_version("fgu-builder")
except Exception:
    __version__ = "0.1.0"  # Fallback if metadata unavailable

__all__ = [
    "BuilderError",
    "ContentError",
    "EmissionError",
    "IdAllocator",
    "LoadError",
    "MarkupBuilder",
    "ModuleAssembler",
    "ModuleContent",
    "ModuleDefinition",
    "RecordKind",
    "ScaffoldError",
    "SpellDefinition",
    "TableDefinition",
    "assign_ids",
    "build_module",
    "load_module",
]
