"""Shared fixtures for the TBX-Min tests."""

from pathlib import Path

import pytest

from tbxmin import ConceptEntry, Document, LangGroup, TermGroup


SAMPLE_TBX = """<?xml version="1.0" encoding="UTF-8"?>
<TBX dialect="TBX-Min">
    <header>
        <id>G1</id>
        <creator>Klaus-Dirk Schmidt</creator>
        <license>CC BY license can be freely copied and modified</license>
        <directionality>bidirectional</directionality>
        <description>A short sample file demonstrating TBX-Min</description>
        <dateCreated>2013-11-12T00:00:00</dateCreated>
        <languages source="de" target="en"/>
    </header>
    <body>
        <entry id="C002">
            <subjectField>biology</subjectField>
            <langGroup xml:lang="de">
                <termGroup>
                    <term>Bluthund</term>
                    <termStatus>preferred</termStatus>
                    <customer>SAP</customer>
                </termGroup>
            </langGroup>
            <langGroup xml:lang="en">
                <termGroup>
                    <term>bloodhound</term>
                    <termStatus>preferred</termStatus>
                    <customer>SAP</customer>
                </termGroup>
                <termGroup>
                    <term>hound</term>
                    <partOfSpeech>noun</partOfSpeech>
                    <note>however bloodhound is used rather than blooddog</note>
                    <customer>SAP</customer>
                    <termStatus>deprecated</termStatus>
                </termGroup>
            </langGroup>
        </entry>
    </body>
</TBX>
"""


@pytest.fixture
def sample_xml() -> str:
    """The bloodhound glossary as XML text."""
    return SAMPLE_TBX


@pytest.fixture
def tbx_file(tmp_path) -> Path:
    """The bloodhound glossary written to a temporary file."""
    path = tmp_path / "sample.tbx"
    path.write_text(SAMPLE_TBX, encoding="utf-8")
    return path


@pytest.fixture
def sample_document() -> Document:
    """A glossary built through the model API with every field set."""
    document = Document(
        id="knitting-001",
        description="Knitting terms",
        date_created="2024-05-01T09:30:00+02:00",
        creator="KPS",
        license="CC0",
        directionality="monodirectional",
        source_lang="ru",
        target_lang="en",
    )

    knit = ConceptEntry(id="C1", subject_field="knitting")
    ru = LangGroup(code="ru")
    ru.add_term_group(TermGroup(term="лицевая петля", part_of_speech="noun", status="preferred"))
    en = LangGroup(code="en")
    en.add_term_group(TermGroup(term="knit stitch", customer="ACME", note="most common stitch"))
    en.add_term_group(TermGroup(term="knit", status="admitted"))
    knit.add_lang_group(ru)
    knit.add_lang_group(en)

    purl = ConceptEntry(id="C2")
    purl.add_lang_group(LangGroup(code="ru", term_groups=[TermGroup(term="изнаночная петля")]))
    purl.add_lang_group(LangGroup(code="en", term_groups=[TermGroup(term="purl stitch")]))

    document.add_entry(knit)
    document.add_entry(purl)
    return document
