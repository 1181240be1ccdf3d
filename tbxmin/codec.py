"""
TBX-Min XML reader and writer.

``parse`` streams the input through ``ElementTree.XMLPullParser`` and builds a
``Document`` as start/end events arrive; ``serialize`` renders a ``Document``
back to pretty-printed UTF-8 XML.

Example:
    >>> document = parse(b'<TBX dialect="TBX-Min"><header/><body/></TBX>')
    >>> document.entries
    []
    >>> xml_bytes = serialize(document)
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, IO, Iterator, List, Optional, Tuple, Union
from xml.etree import ElementTree as ET
import io
import logging
import re

from .config import CodecConfig
from .document import (
    ConceptEntry,
    Document,
    LangGroup,
    TermGroup,
    parse_date,
    parse_directionality,
)
from .errors import (
    DialectMismatchError,
    InvalidArgumentError,
    Issue,
    IssueKind,
    StructuralError,
    TBXSyntaxError,
)

logger = logging.getLogger(__name__)

DIALECT = "TBX-Min"
XML_LANG = "{http://www.w3.org/XML/1998/namespace}lang"

Source = Union[bytes, bytearray, str, IO[bytes], IO[str]]
WarningCallback = Callable[[Issue], None]


class Tag(str, Enum):
    """Element names understood by the reader."""

    TBX = "TBX"
    HEADER = "header"
    BODY = "body"
    ID = "id"
    DESCRIPTION = "description"
    DATE_CREATED = "dateCreated"
    CREATOR = "creator"
    LICENSE = "license"
    DIRECTIONALITY = "directionality"
    LANGUAGES = "languages"
    ENTRY = "entry"
    SUBJECT_FIELD = "subjectField"
    LANG_GROUP = "langGroup"
    TERM_GROUP = "termGroup"
    TERM = "term"
    PART_OF_SPEECH = "partOfSpeech"
    NOTE = "note"
    CUSTOMER = "customer"
    TERM_STATUS = "termStatus"


# Older TBX-Min files use TML-style names for the three entry levels
LEGACY_TAGS = {
    "termEntry": Tag.ENTRY,
    "langSet": Tag.LANG_GROUP,
    "tig": Tag.TERM_GROUP,
}

HEADER_TEXT_TAGS = (Tag.ID, Tag.DESCRIPTION, Tag.CREATOR, Tag.LICENSE)

TERM_FIELDS = {
    Tag.TERM: "term",
    Tag.PART_OF_SPEECH: "part_of_speech",
    Tag.NOTE: "note",
    Tag.CUSTOMER: "customer",
    Tag.TERM_STATUS: "status",
}

# Required parent of every element below the root
PARENTS = {
    Tag.HEADER: Tag.TBX,
    Tag.BODY: Tag.TBX,
    Tag.ID: Tag.HEADER,
    Tag.DESCRIPTION: Tag.HEADER,
    Tag.DATE_CREATED: Tag.HEADER,
    Tag.CREATOR: Tag.HEADER,
    Tag.LICENSE: Tag.HEADER,
    Tag.DIRECTIONALITY: Tag.HEADER,
    Tag.LANGUAGES: Tag.HEADER,
    Tag.ENTRY: Tag.BODY,
    Tag.SUBJECT_FIELD: Tag.ENTRY,
    Tag.LANG_GROUP: Tag.ENTRY,
    Tag.TERM_GROUP: Tag.LANG_GROUP,
    **{tag: Tag.TERM_GROUP for tag in TERM_FIELDS},
}

# Serialization order of the simple header elements and term group children
HEADER_ORDER = ("id", "creator", "license", "directionality", "description")
TERM_ORDER = (
    ("term", Tag.TERM),
    ("customer", Tag.CUSTOMER),
    ("note", Tag.NOTE),
    ("status", Tag.TERM_STATUS),
    ("part_of_speech", Tag.PART_OF_SPEECH),
)

_COMMENT_GAP = re.compile(rb">\s*<!--")


def _text(node: ET.Element) -> str:
    return "".join(node.itertext())


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _decamel(name: str) -> str:
    """``dateCreated`` -> ``date_created``."""
    return re.sub(r"([A-Z])", lambda m: "_" + m.group(1).lower(), name)


def _value(value) -> str:
    return value.value if isinstance(value, Enum) else str(value)


# ----------------------------------------------------------------------
# Reading
# ----------------------------------------------------------------------
@dataclass
class _ParseState:
    """Everything the reader tracks while events stream in."""

    config: CodecConfig
    on_warning: Optional[WarningCallback] = None
    document: Document = field(default_factory=Document)
    entry: Optional[ConceptEntry] = None
    lang_group: Optional[LangGroup] = None
    term_group: Optional[TermGroup] = None
    # open elements, innermost last; tag is None for unrecognised elements
    stack: List[Tuple[Optional[Tag], ET.Element]] = field(default_factory=list)

    def warn(self, kind: IssueKind, message: str, element: str) -> None:
        logger.warning(message)
        if self.on_warning is not None:
            self.on_warning(Issue(kind=kind, message=message, element=element))


def _classify(name: str, config: CodecConfig) -> Optional[Tag]:
    try:
        return Tag(name)
    except ValueError:
        pass
    if config.accept_legacy_names:
        return LEGACY_TAGS.get(name)
    return None


def _on_start(state: _ParseState, elem: ET.Element) -> None:
    name = _local_name(elem.tag)
    tag = _classify(name, state.config)

    if not state.stack:
        dialect = elem.get("dialect")
        if dialect != DIALECT:
            raise DialectMismatchError(dialect, DIALECT)
        if tag is not Tag.TBX:
            raise StructuralError(f"Root element must be <TBX>, got <{name}>")
        state.stack.append((tag, elem))
        return

    parent = state.stack[-1][0]

    if tag is None:
        if state.config.strict:
            raise StructuralError(f"Unknown element <{name}>")
        logger.debug(f"Ignoring unknown element <{name}>")
        state.stack.append((None, elem))
        return

    expected = PARENTS.get(tag)
    if expected is None:
        raise StructuralError(f"<{name}> is only allowed as the root element")
    if parent is not expected:
        where = f"<{parent.value}>" if parent is not None else "an unknown element"
        raise StructuralError(f"<{name}> must appear inside <{expected.value}>, found in {where}")
    state.stack.append((tag, elem))

    if tag is Tag.ENTRY:
        entry = ConceptEntry()
        entry_id = elem.get("id")
        if entry_id:
            entry.id = entry_id
        else:
            state.warn(IssueKind.MISSING_IDENTIFIER, f"found <{name}> missing id attribute", name)
        state.document.add_entry(entry)
        state.entry = entry
    elif tag is Tag.LANG_GROUP:
        lang_group = LangGroup()
        code = elem.get(XML_LANG)
        if code:
            lang_group.code = code
        else:
            state.warn(IssueKind.MISSING_LANGUAGE_CODE, f"found <{name}> missing xml:lang attribute", name)
        state.entry.add_lang_group(lang_group)
        state.lang_group = lang_group
    elif tag is Tag.TERM_GROUP:
        term_group = TermGroup()
        state.lang_group.add_term_group(term_group)
        state.term_group = term_group


def _on_end(state: _ParseState, elem: ET.Element) -> None:
    tag, _ = state.stack.pop()
    document = state.document

    if tag is None:
        return
    elif tag in HEADER_TEXT_TAGS:
        setattr(document, _decamel(tag.value), _text(elem))
    elif tag is Tag.DATE_CREATED:
        document.date_created = parse_date(_text(elem))
    elif tag is Tag.DIRECTIONALITY:
        document.directionality = parse_directionality(_text(elem).strip())
    elif tag is Tag.LANGUAGES:
        if elem.get("source"):
            document.source_lang = elem.get("source")
        if elem.get("target"):
            document.target_lang = elem.get("target")
    elif tag is Tag.SUBJECT_FIELD:
        state.entry.subject_field = _text(elem)
    elif tag in TERM_FIELDS:
        setattr(state.term_group, TERM_FIELDS[tag], _text(elem))
    elif tag is Tag.TERM_GROUP:
        state.term_group = None
    elif tag is Tag.LANG_GROUP:
        state.lang_group = None
    elif tag is Tag.ENTRY:
        state.entry = None
        # the entry is fully read; drop its subtree
        state.stack[-1][1].remove(elem)
    # root, header and body need no work on close


def _chunks(source: Source, size: int) -> Iterator[Union[bytes, str]]:
    if isinstance(source, (bytes, bytearray, str)):
        yield source
        return
    if isinstance(source, Path):
        raise InvalidArgumentError(f"parse() takes XML data or a stream; use parse_file() for paths: {source}")
    read = getattr(source, "read", None)
    if read is None:
        raise InvalidArgumentError(f"Cannot read TBX-Min from {type(source).__name__}")
    while True:
        chunk = read(size)
        if not chunk:
            return
        yield chunk


def _events(source: Source, config: CodecConfig) -> Iterator[Tuple[str, ET.Element]]:
    parser = ET.XMLPullParser(events=("start", "end"))
    try:
        for chunk in _chunks(source, config.chunk_size):
            parser.feed(chunk)
            yield from parser.read_events()
        parser.close()
        yield from parser.read_events()
    except ET.ParseError as exc:
        raise TBXSyntaxError(f"Malformed XML: {exc}", getattr(exc, "position", None)) from exc


def parse(
    source: Source,
    config: Optional[CodecConfig] = None,
    on_warning: Optional[WarningCallback] = None,
) -> Document:
    """
    Read a TBX-Min document.

    Args:
        source: XML as ``bytes``/``str``, or a readable binary or text stream
        config: Codec options (defaults to ``CodecConfig()``)
        on_warning: Called with an ``Issue`` for every recoverable problem,
            in addition to the warning logged for it

    Returns:
        The fully populated ``Document``

    Raises:
        DialectMismatchError: root is not ``dialect="TBX-Min"``
        TBXSyntaxError: input is not well-formed XML
        ValidationError: bad ``dateCreated`` or ``directionality`` value
        StructuralError: an element is outside its container
    """
    state = _ParseState(config=config or CodecConfig(), on_warning=on_warning)

    for event, elem in _events(source, state.config):
        if event == "start":
            _on_start(state, elem)
        else:
            _on_end(state, elem)

    return state.document


def parse_file(
    path: Union[str, Path],
    config: Optional[CodecConfig] = None,
    on_warning: Optional[WarningCallback] = None,
) -> Document:
    """Read a TBX-Min file from disk."""
    path = Path(path)
    with open(path, "rb") as fh:
        document = parse(fh, config=config, on_warning=on_warning)
    logger.info(f"Read {len(document.entries)} entries from TBX-Min: {path}")
    return document


# ----------------------------------------------------------------------
# Writing
# ----------------------------------------------------------------------
def build_tree(document: Document, config: Optional[CodecConfig] = None) -> ET.Element:
    """Build the ``<TBX>`` element tree for ``document`` (not indented)."""
    config = config or CodecConfig()

    root = ET.Element(Tag.TBX.value, attrib={"dialect": DIALECT})

    # Header
    header = ET.SubElement(root, Tag.HEADER.value)
    for name in HEADER_ORDER:
        value = getattr(document, name)
        if value:
            ET.SubElement(header, name).text = _value(value)

    if document.source_lang or document.target_lang:
        languages = {}
        if document.source_lang:
            languages["source"] = document.source_lang
        if document.target_lang:
            languages["target"] = document.target_lang
        ET.SubElement(header, Tag.LANGUAGES.value, attrib=languages)

    if document.date_created:
        ET.SubElement(header, Tag.DATE_CREATED.value).text = document.date_created

    # Body
    body = ET.SubElement(root, Tag.BODY.value)
    for entry in document.entries:
        entry_el = ET.SubElement(body, Tag.ENTRY.value, attrib={"id": entry.id} if entry.id else {})
        if config.entry_comment:
            body.append(ET.Comment(config.entry_comment))

        if entry.subject_field:
            ET.SubElement(entry_el, Tag.SUBJECT_FIELD.value).text = entry.subject_field

        for lang_group in entry.lang_groups:
            lang_el = ET.SubElement(
                entry_el,
                Tag.LANG_GROUP.value,
                attrib={XML_LANG: lang_group.code} if lang_group.code else {},
            )
            for term_group in lang_group.term_groups:
                term_el = ET.SubElement(lang_el, Tag.TERM_GROUP.value)
                for attr, tag in TERM_ORDER:
                    value = getattr(term_group, attr)
                    if value:
                        ET.SubElement(term_el, tag.value).text = value

    return root


def serialize(document: Document, config: Optional[CodecConfig] = None) -> bytes:
    """Render ``document`` as pretty-printed UTF-8 TBX-Min XML."""
    config = config or CodecConfig()

    root = build_tree(document, config)
    ET.indent(root, space=config.indent)
    data = ET.tostring(root, encoding="UTF-8", xml_declaration=config.xml_declaration)
    # a raw CR would come back as LF after parsing
    data = data.replace(b"\r", b"&#13;")

    if config.entry_comment:
        # keep each comment on the line of the entry it follows
        data = _COMMENT_GAP.sub(b"><!--", data)
    return data + b"\n"


def write(document: Document, sink: IO, config: Optional[CodecConfig] = None) -> None:
    """Write ``document`` to a binary or text stream."""
    data = serialize(document, config)
    if isinstance(sink, io.TextIOBase):
        sink.write(data.decode("utf-8"))
    else:
        sink.write(data)


def write_file(
    document: Document,
    path: Union[str, Path],
    config: Optional[CodecConfig] = None,
) -> Path:
    """Write ``document`` to ``path`` as UTF-8 XML."""
    path = Path(path)
    path.write_bytes(serialize(document, config))
    logger.info(f"Wrote {len(document.entries)} entries to TBX-Min: {path}")
    return path


__all__ = [
    "DIALECT",
    "Tag",
    "parse",
    "parse_file",
    "build_tree",
    "serialize",
    "write",
    "write_file",
]
