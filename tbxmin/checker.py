"""
Consistency checks for TBX-Min documents.

The reader only rejects what it cannot represent. This module reports the
softer problems a glossary can still carry: missing identifiers and language
codes, term groups without a term, duplicates, and header languages that no
entry uses.

Usage:
    >>> from tbxmin.checker import check_document
    >>>
    >>> result = check_document(document)
    >>> if not result.is_valid:
    ...     for issue in result.errors:
    ...         print(f"Error: {issue.message}")
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Set
import logging

from .document import Document
from .errors import Issue, IssueKind

logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
    """Issues found in a document."""

    issues: List[Issue] = field(default_factory=list)

    @property
    def errors(self) -> List[Issue]:
        return [issue for issue in self.issues if issue.severity == "error"]

    @property
    def warnings(self) -> List[Issue]:
        return [issue for issue in self.issues if issue.severity == "warning"]

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def summary(self) -> str:
        state = "Valid" if self.is_valid else "Invalid"
        return f"{state} TBX-Min document ({len(self.errors)} errors, {len(self.warnings)} warnings)"


class DocumentChecker:
    """
    Checks a ``Document`` for problems the codec tolerates.

    Errors:
    - duplicate concept entry ids
    - term groups without term text

    Warnings:
    - concept entries without id
    - language groups without language code
    - the same term twice in one language (case-insensitive)
    - header source/target language not used by any entry
    """

    def check(self, document: Document) -> CheckResult:
        result = CheckResult()

        self._check_entry_ids(document, result)
        self._check_lang_groups(document, result)
        self._check_duplicate_terms(document, result)
        self._check_header_languages(document, result)

        logger.debug(result.summary)
        return result

    def _check_entry_ids(self, document: Document, result: CheckResult):
        counts = Counter(entry.id for entry in document.entries if entry.id)

        for idx, entry in enumerate(document.entries):
            if not entry.id:
                result.issues.append(Issue(
                    kind=IssueKind.MISSING_IDENTIFIER,
                    message=f"entry[{idx}] has no id",
                    element=f"entry[{idx}]",
                ))

        for entry_id, count in counts.items():
            if count > 1:
                result.issues.append(Issue(
                    kind=IssueKind.DUPLICATE_IDENTIFIER,
                    message=f"Entry id '{entry_id}' is used {count} times",
                    element=f"entry[@id='{entry_id}']",
                    severity="error",
                ))

    def _check_lang_groups(self, document: Document, result: CheckResult):
        for entry_idx, entry in enumerate(document.entries):
            for lang_idx, lang_group in enumerate(entry.lang_groups):
                path = f"entry[{entry_idx}]/langGroup[{lang_idx}]"
                if not lang_group.code:
                    result.issues.append(Issue(
                        kind=IssueKind.MISSING_LANGUAGE_CODE,
                        message=f"{path} has no xml:lang code",
                        element=path,
                    ))

                for term_idx, term_group in enumerate(lang_group.term_groups):
                    if not term_group.term:
                        result.issues.append(Issue(
                            kind=IssueKind.MISSING_TERM,
                            message=f"{path}/termGroup[{term_idx}] has no term",
                            element=f"{path}/termGroup[{term_idx}]",
                            severity="error",
                        ))

    def _check_duplicate_terms(self, document: Document, result: CheckResult):
        seen: Dict[str, Set[str]] = {}

        for entry in document.entries:
            for lang_group in entry.lang_groups:
                lang = lang_group.code or "unknown"
                terms = seen.setdefault(lang, set())
                for term_group in lang_group.term_groups:
                    if not term_group.term:
                        continue
                    key = term_group.term.strip().casefold()
                    if key in terms:
                        result.issues.append(Issue(
                            kind=IssueKind.DUPLICATE_TERM,
                            message=f"Duplicate term '{term_group.term}' in language '{lang}'",
                            element=f"langGroup[{lang}]",
                        ))
                    terms.add(key)

    def _check_header_languages(self, document: Document, result: CheckResult):
        used = {
            lang_group.code
            for entry in document.entries
            for lang_group in entry.lang_groups
            if lang_group.code
        }
        # nothing to compare against in an empty glossary
        if not used:
            return

        for role, lang in (("source", document.source_lang), ("target", document.target_lang)):
            if lang and lang not in used:
                result.issues.append(Issue(
                    kind=IssueKind.UNUSED_LANGUAGE,
                    message=f"Header {role} language '{lang}' is not used by any entry",
                    element="languages",
                ))


def check_document(document: Document) -> CheckResult:
    """Run all checks on ``document`` (convenience function)."""
    return DocumentChecker().check(document)


__all__ = [
    "CheckResult",
    "DocumentChecker",
    "check_document",
]
