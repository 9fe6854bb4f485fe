#!/usr/bin/env python3
"""
Context Checker v1.0.0
======================
Send-context risks that have nothing to do with wording: wide recipient
lists, attachments that should be double-checked, messages that mention an
attachment without carrying one, and configured sensitive keywords.
"""

import re
from typing import List, Iterable, Optional, Tuple

from base_checker import BaseChecker, IssueCategory, IssueSeverity, IssueLocation, ReviewIssue
from tone_lexicon import ToneLexicon, get_default_lexicon, phrase_pattern

__version__ = "1.0.0"

RECIPIENT_LOW_THRESHOLD = 2
RECIPIENT_MEDIUM_THRESHOLD = 4
RECIPIENT_HIGH_THRESHOLD = 7

ATTACHMENT_REFERENCE = re.compile(
    r"\b(?:attached|attachments?|enclosed|please\s+find)\b",
    re.IGNORECASE,
)


def recipient_severity(count: int) -> Optional[IssueSeverity]:
    """Severity for a recipient count, or None below the threshold."""
    if count >= RECIPIENT_HIGH_THRESHOLD:
        return IssueSeverity.HIGH
    if count >= RECIPIENT_MEDIUM_THRESHOLD:
        return IssueSeverity.MEDIUM
    if count >= RECIPIENT_LOW_THRESHOLD:
        return IssueSeverity.LOW
    return None


class ContextChecker(BaseChecker):
    """Recipient, attachment and keyword heuristics."""

    CHECKER_NAME = "Context"
    CHECKER_VERSION = "1.0.0"
    CATEGORY = IssueCategory.CONTEXT

    def __init__(self, lexicon: Optional[ToneLexicon] = None, enabled: bool = True):
        super().__init__(enabled)
        lexicon = lexicon or get_default_lexicon()
        # Already scored by the tone pass
        self.tone_phrases = frozenset(signal.phrase.lower() for signal, _ in lexicon.signals)

    def check(self, snapshot, settings) -> List[ReviewIssue]:
        return self.analyze(snapshot, settings.keywords)

    def analyze(self, snapshot, keywords: Iterable[str] = ()) -> List[ReviewIssue]:
        issues: List[ReviewIssue] = []
        fields = (
            (IssueLocation.SUBJECT, snapshot.subject_text),
            (IssueLocation.BODY, snapshot.body_raw_text),
        )

        severity = recipient_severity(snapshot.recipient_count)
        if severity is not None:
            issues.append(self.create_issue(
                severity,
                f"Message goes to {snapshot.recipient_count} recipients.",
                rule_id='CX001',
            ))

        if snapshot.has_attachment:
            issues.append(self.create_issue(
                IssueSeverity.MEDIUM,
                "Attachment included: confirm final version before sending.",
                rule_id='CX002',
            ))
        else:
            mention = self._first_match(fields, ATTACHMENT_REFERENCE)
            if mention:
                location, match = mention
                issues.append(self.create_issue(
                    IssueSeverity.HIGH,
                    "Message mentions an attachment, but nothing is attached.",
                    evidence=match.group(0), location=location,
                    offset=match.start(), length=len(match.group(0)), rule_id='CX003',
                ))

        keywords = [kw for kw in keywords if kw and kw.strip().lower() not in self.tone_phrases]
        keyword_hit = self._find_keyword(fields, keywords)
        if keyword_hit:
            location, keyword = keyword_hit
            issues.append(self.create_issue(
                IssueSeverity.LOW,
                f'Sensitive keyword "{keyword}" found.',
                evidence=keyword, location=location, rule_id='CX004',
            ))

        return issues

    @staticmethod
    def _first_match(fields, pattern) -> Optional[Tuple[IssueLocation, "re.Match"]]:
        for location, text in fields:
            match = pattern.search(text or "")
            if match:
                return location, match
        return None

    @staticmethod
    def _find_keyword(fields, keywords: Iterable[str]) -> Optional[Tuple[IssueLocation, str]]:
        patterns = [(kw, phrase_pattern(kw)) for kw in keywords if kw and kw.strip()]
        for location, text in fields:
            lower = (text or "").lower()
            for keyword, pattern in patterns:
                if pattern.search(lower):
                    return location, keyword
        return None
