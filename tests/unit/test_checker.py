"""Tests for TBX-Min document checks."""

from tbxmin import (
    ConceptEntry,
    Document,
    IssueKind,
    LangGroup,
    TermGroup,
    check_document,
    parse,
)


def kinds(result):
    return [issue.kind for issue in result.issues]


def test_sample_glossary_is_clean(sample_xml):
    result = check_document(parse(sample_xml))
    assert result.is_valid
    assert result.issues == []
    assert result.summary.startswith("Valid")


def test_built_document_is_clean(sample_document):
    assert check_document(sample_document).issues == []


def test_duplicate_entry_ids_are_errors():
    document = Document(entries=[ConceptEntry(id="C1"), ConceptEntry(id="C1"), ConceptEntry(id="C2")])
    result = check_document(document)
    assert not result.is_valid
    assert kinds(result) == [IssueKind.DUPLICATE_IDENTIFIER]
    assert "'C1' is used 2 times" in result.errors[0].message


def test_missing_term_is_an_error():
    document = Document(entries=[
        ConceptEntry(id="C1", lang_groups=[LangGroup(code="en", term_groups=[TermGroup(note="orphan")])])
    ])
    result = check_document(document)
    assert not result.is_valid
    assert kinds(result) == [IssueKind.MISSING_TERM]
    assert result.errors[0].element == "entry[0]/langGroup[0]/termGroup[0]"


def test_missing_id_and_code_are_warnings():
    document = Document(entries=[
        ConceptEntry(lang_groups=[LangGroup(term_groups=[TermGroup(term="hound")])])
    ])
    result = check_document(document)
    assert result.is_valid
    assert kinds(result) == [IssueKind.MISSING_IDENTIFIER, IssueKind.MISSING_LANGUAGE_CODE]
    assert len(result.warnings) == 2


def test_duplicate_terms_per_language():
    document = Document(entries=[
        ConceptEntry(id="C1", lang_groups=[LangGroup(code="en", term_groups=[TermGroup(term="Hound")])]),
        ConceptEntry(id="C2", lang_groups=[
            LangGroup(code="en", term_groups=[TermGroup(term="hound ")]),
            LangGroup(code="de", term_groups=[TermGroup(term="hound")]),
        ]),
    ])
    result = check_document(document)
    assert kinds(result) == [IssueKind.DUPLICATE_TERM]
    assert "Duplicate term 'hound ' in language 'en'" in result.warnings[0].message


def test_unused_header_languages():
    document = Document(source_lang="de", target_lang="fr", entries=[
        ConceptEntry(id="C1", lang_groups=[LangGroup(code="de", term_groups=[TermGroup(term="Hund")])])
    ])
    result = check_document(document)
    assert kinds(result) == [IssueKind.UNUSED_LANGUAGE]
    assert "target language 'fr'" in result.warnings[0].message


def test_empty_document_has_no_issues():
    result = check_document(Document(source_lang="de", target_lang="en"))
    assert result.is_valid
    assert result.issues == []
