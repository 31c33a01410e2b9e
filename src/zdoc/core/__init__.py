"""Core data model, configuration and output of zdoc.

Classes:
    CatalogEntry: Typed declaration of a reflected class, field or method
    DeclarationCatalog: Immutable lookup table of catalog entries
    AnnotateRules: Recognition, exclusion and inclusion policy of a run
    OutputWriter: Atomic writer for output files
    ZdocError, ConfigError, CatalogError, CompilerError: Error hierarchy
"""

from zdoc.core.catalog import (
    CatalogEntry,
    DeclarationCatalog,
    EntryKind,
    class_entry,
    field_entry,
    load_catalog,
    method_entry,
)
from zdoc.core.config import load_properties
from zdoc.core.exceptions import CatalogError, CompilerError, ConfigError, ZdocError
from zdoc.core.output_writer import OutputWriter, WriteResult
from zdoc.core.rules import AnnotateRules

__all__ = [
    "CatalogEntry",
    "DeclarationCatalog",
    "EntryKind",
    "class_entry",
    "field_entry",
    "load_catalog",
    "method_entry",
    "load_properties",
    "CatalogError",
    "CompilerError",
    "ConfigError",
    "ZdocError",
    "OutputWriter",
    "WriteResult",
    "AnnotateRules",
]
