"""
Read, write and edit TBX-Min glossaries.

TBX-Min is a minimal "Data Category as Tag Name" dialect of TBX (TermBase
eXchange) for simple bilingual and multilingual glossaries.

    >>> from tbxmin import parse_file, serialize
    >>> document = parse_file("glossary.tbx")
    >>> document.entries[0].lang_groups[0].term_groups[0].term
    'Bluthund'
"""

from .checker import CheckResult, DocumentChecker, check_document
from .codec import DIALECT, build_tree, parse, parse_file, serialize, write, write_file
from .config import CodecConfig, load_config
from .document import ConceptEntry, Directionality, Document, LangGroup, TermGroup
from .errors import (
    DialectMismatchError,
    InvalidArgumentError,
    Issue,
    IssueKind,
    StructuralError,
    TBXMinError,
    TBXSyntaxError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    # Model
    "Document",
    "ConceptEntry",
    "LangGroup",
    "TermGroup",
    "Directionality",
    # Codec
    "DIALECT",
    "parse",
    "parse_file",
    "build_tree",
    "serialize",
    "write",
    "write_file",
    # Config
    "CodecConfig",
    "load_config",
    # Checks
    "CheckResult",
    "DocumentChecker",
    "check_document",
    # Errors
    "TBXMinError",
    "DialectMismatchError",
    "TBXSyntaxError",
    "ValidationError",
    "StructuralError",
    "InvalidArgumentError",
    "Issue",
    "IssueKind",
]
