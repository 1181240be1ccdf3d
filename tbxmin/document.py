"""In-memory model of a TBX-Min glossary.

The tree has four levels, mirroring the XML::

    Document
      └── ConceptEntry      (<entry>)
            └── LangGroup   (<langGroup xml:lang="..">)
                  └── TermGroup (<termGroup>)

Scalar fields are plain attributes: read them directly, assign a new value to
change them and assign ``None`` to clear them. Empty strings are stored as
``None`` so that "empty" and "unset" are the same state, except for
``directionality`` and ``date_created``, which reject them.

Child sequences (``entries``, ``lang_groups``, ``term_groups``) return the
live list used for storage. They cannot be reassigned; new children go
through the type-checked ``add_*`` methods.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Iterable, List, Optional, Union

from .errors import InvalidArgumentError, ValidationError


class Directionality(str, Enum):
    """Translation direction the glossary is designed for."""

    BIDIRECTIONAL = "bidirectional"
    MONODIRECTIONAL = "monodirectional"


class _Node:
    """Normalizes empty strings to ``None`` on assignment.

    Fields listed in ``_validated`` receive the value unchanged so their
    setters can reject it.
    """

    __slots__ = ()
    _validated: frozenset = frozenset()

    def __setattr__(self, name: str, value) -> None:
        if isinstance(value, str) and not value and name not in self._validated:
            value = None
        object.__setattr__(self, name, value)


def _read_only(name: str, adder: str) -> property:
    def getter(self):
        return object.__getattribute__(self, "_" + name)

    def setter(self, value):
        raise AttributeError(f"{name} is read-only; use {adder}() to add items")

    return property(getter, setter, doc=f"Live list of {name.replace('_', ' ')}.")


def parse_directionality(value: Union[str, Directionality]) -> Directionality:
    try:
        return Directionality(value)
    except ValueError:
        raise ValidationError(f"Illegal directionality '{value}'") from None


def parse_date(value: Union[str, date, datetime]) -> datetime:
    """Parse an ISO-8601 string (or accept a date/datetime) as a ``datetime``.

    Date-only values are taken as midnight.
    """

    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if not isinstance(value, str):
        raise ValidationError(f"date must be an ISO 8601 string, got {type(value).__name__}")
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError as exc:
        raise ValidationError(f"date is not in ISO 8601 format: {value!r}") from exc


@dataclass(slots=True)
class TermGroup(_Node):
    """One term and the information attached to it."""

    term: Optional[str] = None
    part_of_speech: Optional[str] = None
    note: Optional[str] = None
    customer: Optional[str] = None
    status: Optional[str] = None


class LangGroup(_Node):
    """Terms representing one concept in one language."""

    __slots__ = ("code", "_term_groups")

    term_groups = _read_only("term_groups", "add_term_group")

    def __init__(self, code: Optional[str] = None, term_groups: Iterable[TermGroup] = ()):
        self.code = code
        object.__setattr__(self, "_term_groups", [])
        for term_group in term_groups:
            self.add_term_group(term_group)

    def add_term_group(self, term_group: TermGroup) -> None:
        if not isinstance(term_group, TermGroup):
            raise InvalidArgumentError(
                f"argument to add_term_group should be a TermGroup, got {type(term_group).__name__}"
            )
        self._term_groups.append(term_group)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LangGroup):
            return NotImplemented
        return self.code == other.code and self._term_groups == other._term_groups

    def __repr__(self) -> str:
        return f"LangGroup(code={self.code!r}, term_groups={self._term_groups!r})"


class ConceptEntry(_Node):
    """A single terminological concept and its language groups."""

    __slots__ = ("id", "subject_field", "_lang_groups")

    lang_groups = _read_only("lang_groups", "add_lang_group")

    def __init__(
        self,
        id: Optional[str] = None,
        subject_field: Optional[str] = None,
        lang_groups: Iterable[LangGroup] = (),
    ):
        self.id = id
        self.subject_field = subject_field
        object.__setattr__(self, "_lang_groups", [])
        for lang_group in lang_groups:
            self.add_lang_group(lang_group)

    def add_lang_group(self, lang_group: LangGroup) -> None:
        if not isinstance(lang_group, LangGroup):
            raise InvalidArgumentError(
                f"argument to add_lang_group should be a LangGroup, got {type(lang_group).__name__}"
            )
        self._lang_groups.append(lang_group)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConceptEntry):
            return NotImplemented
        return (
            self.id == other.id
            and self.subject_field == other.subject_field
            and self._lang_groups == other._lang_groups
        )

    def __repr__(self) -> str:
        return (
            f"ConceptEntry(id={self.id!r}, subject_field={self.subject_field!r}, "
            f"lang_groups={self._lang_groups!r})"
        )


class Document(_Node):
    """A TBX-Min glossary: header information plus concept entries."""

    __slots__ = (
        "id",
        "description",
        "creator",
        "license",
        "source_lang",
        "target_lang",
        "_directionality",
        "_date_created",
        "_entries",
    )

    entries = _read_only("entries", "add_entry")
    _validated = frozenset({"directionality", "date_created"})

    def __init__(
        self,
        id: Optional[str] = None,
        description: Optional[str] = None,
        date_created: Union[str, date, datetime, None] = None,
        creator: Optional[str] = None,
        license: Optional[str] = None,
        directionality: Union[str, Directionality, None] = None,
        source_lang: Optional[str] = None,
        target_lang: Optional[str] = None,
        entries: Iterable[ConceptEntry] = (),
    ):
        object.__setattr__(self, "_directionality", None)
        object.__setattr__(self, "_date_created", None)
        object.__setattr__(self, "_entries", [])
        self.id = id
        self.description = description
        self.date_created = date_created
        self.creator = creator
        self.license = license
        self.directionality = directionality
        self.source_lang = source_lang
        self.target_lang = target_lang
        for entry in entries:
            self.add_entry(entry)

    @property
    def directionality(self) -> Optional[Directionality]:
        return self._directionality

    @directionality.setter
    def directionality(self, value: Union[str, Directionality, None]) -> None:
        direction = None if value is None else parse_directionality(value)
        object.__setattr__(self, "_directionality", direction)

    @property
    def date_created(self) -> Optional[str]:
        """Creation date as canonical ISO-8601 text."""
        if self._date_created is None:
            return None
        return self._date_created.isoformat()

    @date_created.setter
    def date_created(self, value: Union[str, date, datetime, None]) -> None:
        parsed = None if value is None else parse_date(value)
        object.__setattr__(self, "_date_created", parsed)

    @property
    def created_at(self) -> Optional[datetime]:
        return self._date_created

    def add_entry(self, entry: ConceptEntry) -> None:
        if not isinstance(entry, ConceptEntry):
            raise InvalidArgumentError(
                f"argument to add_entry should be a ConceptEntry, got {type(entry).__name__}"
            )
        self._entries.append(entry)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return all(
            getattr(self, name) == getattr(other, name)
            for name in (
                "id",
                "description",
                "creator",
                "license",
                "source_lang",
                "target_lang",
                "_directionality",
                "_date_created",
                "_entries",
            )
        )

    def __repr__(self) -> str:
        return (
            f"Document(id={self.id!r}, directionality={self.directionality!r}, "
            f"source_lang={self.source_lang!r}, target_lang={self.target_lang!r}, "
            f"date_created={self.date_created!r}, entries={self._entries!r})"
        )


__all__ = [
    "Directionality",
    "TermGroup",
    "LangGroup",
    "ConceptEntry",
    "Document",
    "parse_date",
    "parse_directionality",
]
