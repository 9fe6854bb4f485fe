#!/usr/bin/env python3
"""
Tone & Profanity Checker v1.0.0
===============================
Flags wording likely to land badly: profanity and slurs (including
leetspeak spellings such as "sh1t" or "@ss"), aggressive or blaming
phrases, shouting in ALL-CAPS, and runs of exclamation marks.
"""

import re
from typing import List, Optional, Tuple

from base_checker import BaseChecker, IssueCategory, IssueSeverity, IssueLocation, ReviewIssue
from tone_lexicon import ToneLexicon, TONE_CATEGORY_LABELS, get_default_lexicon

__version__ = "1.0.0"

CAPS_WORD_PATTERN = re.compile(r"\b[A-Z]{3,}\b")
CAPS_LOW_THRESHOLD = 2
CAPS_MEDIUM_THRESHOLD = 4
EXCLAMATION_LOW_THRESHOLD = 3
EXCLAMATION_MEDIUM_THRESHOLD = 5

# Upper-case tokens that are normal in business mail
COMMON_ACRONYMS = frozenset({
    'ASAP', 'FYI', 'CEO', 'CFO', 'CTO', 'COO', 'USA', 'API', 'PDF', 'FAQ',
    'ETA', 'EOD', 'EOW', 'COB', 'OOO', 'TBD', 'TBA', 'RSVP', 'KPI', 'ROI',
    'SLA', 'NDA', 'HTML', 'CSS', 'URL', 'HTTP', 'HTTPS', 'SQL', 'JSON', 'XML',
    'CSV', 'USD', 'EUR', 'GBP', 'NYC', 'LLC', 'INC', 'LTD', 'BCC', 'FWD',
    'SMS', 'VPN', 'AWS', 'GDPR', 'ISO', 'CRM', 'ERP', 'IPO', 'PTO', 'WFH',
})

LEET_MAP = {
    '4': 'a', '@': 'a', '3': 'e', '1': 'i', '!': 'i', '|': 'i',
    '0': 'o', '5': 's', '$': 's', '+': 't', '7': 't',
}
# Also ordinary punctuation; decoded only when a letter follows
_POSITIONAL_LEET = frozenset('1!|')
_NOISE_PATTERN = re.compile(r"[*._\-~^\"']")
_TOKEN_PATTERN = re.compile(r"\S+")
_ASCII_LETTER = re.compile(r"[a-z]")


def _decode_token(token: str) -> str:
    # Amounts, room numbers and punctuation runs carry no letters
    if not _ASCII_LETTER.search(token):
        return token
    token = _NOISE_PATTERN.sub("", token)
    chars = []
    for i, char in enumerate(token):
        replacement = LEET_MAP.get(char)
        if replacement and char in _POSITIONAL_LEET:
            following = token[i + 1] if i + 1 < len(token) else ""
            if not (following.isalpha() or (following in LEET_MAP and following not in _POSITIONAL_LEET)):
                replacement = None
        chars.append(replacement or char)
    return "".join(chars)


def normalize_leetspeak(text: str) -> str:
    """
    Lowercase and map digit/symbol substitutions back to letters.

    Decoding happens per whitespace-separated token, and only in tokens that
    already contain a letter. "1", "!" and "|" count as letters only before
    another letter, so "sh!t" decodes but a trailing "!!" stays punctuation.
    Noise characters inside such tokens are dropped ("f.u.c.k").
    """
    return _TOKEN_PATTERN.sub(lambda m: _decode_token(m.group(0)), (text or "").lower())


class ToneChecker(BaseChecker):
    """
    Lexicon-driven tone checker.

    Passes, in order:
    1. Curated profanity on lowercase and leetspeak-normalized text
    2. Extended generic list on normalized text only
    3. Tone-signal phrases (each at most once)
    4. ALL-CAPS word count
    5. Exclamation mark count
    """

    CHECKER_NAME = "Tone"
    CHECKER_VERSION = "1.0.0"
    CATEGORY = IssueCategory.TONE

    def __init__(self, lexicon: Optional[ToneLexicon] = None, enabled: bool = True):
        super().__init__(enabled)
        self.lexicon = lexicon or get_default_lexicon()

    def check(self, snapshot, settings=None) -> List[ReviewIssue]:
        return self.analyze(snapshot.subject_text, snapshot.body_raw_text)

    def analyze(self, subject: str, body: str) -> List[ReviewIssue]:
        subject = subject or ""
        body = body or ""
        issues: List[ReviewIssue] = []

        fields = [
            (IssueLocation.SUBJECT, subject, subject.lower(), normalize_leetspeak(subject)),
            (IssueLocation.BODY, body, body.lower(), normalize_leetspeak(body)),
        ]

        issues.extend(self._curated_pass(fields))
        issues.extend(self._extended_pass(fields))
        issues.extend(self._signal_pass(fields))

        combined = f"{subject}\n{body}"
        caps_issue = self._caps_issue(combined)
        if caps_issue:
            issues.append(caps_issue)
        exclamation_issue = self._exclamation_issue(combined)
        if exclamation_issue:
            issues.append(exclamation_issue)

        return issues

    # -------------------------------------------------------------------------
    # Lexicon passes
    # -------------------------------------------------------------------------

    def _curated_pass(self, fields) -> List[ReviewIssue]:
        issues = []
        for entry, pattern in self.lexicon.profanity:
            for location, original, lower, normalized in fields:
                hit = self._locate(pattern, original, lower)
                if hit is None and pattern.search(normalized):
                    hit = (entry.word, None, None)
                if hit is None:
                    continue
                evidence, offset, length = hit
                issues.append(self.create_issue(
                    entry.severity,
                    f'Profanity or slur detected: "{entry.word}".',
                    evidence=evidence, location=location,
                    offset=offset, length=length, rule_id='TN001',
                ))
                break
        return issues

    def _extended_pass(self, fields) -> List[ReviewIssue]:
        issues = []
        for word, pattern in self.lexicon.extended:
            for location, _original, _lower, normalized in fields:
                if pattern.search(normalized):
                    issues.append(self.create_issue(
                        IssueSeverity.MEDIUM,
                        f'Offensive language detected: "{word}".',
                        evidence=word, location=location, rule_id='TN002',
                    ))
                    break
        return issues

    def _signal_pass(self, fields) -> List[ReviewIssue]:
        issues = []
        for signal, pattern in self.lexicon.signals:
            for location, original, lower, _normalized in fields:
                hit = self._locate(pattern, original, lower)
                if hit is None:
                    continue
                evidence, offset, length = hit
                label = TONE_CATEGORY_LABELS[signal.category]
                issues.append(self.create_issue(
                    signal.severity,
                    f'{label}: "{signal.phrase}".',
                    evidence=evidence, location=location,
                    offset=offset, length=length, rule_id=f'TN1-{signal.category.value}',
                ))
                break
        return issues

    @staticmethod
    def _locate(pattern, original: str, lower: str) -> Optional[Tuple[str, Optional[int], Optional[int]]]:
        """Match on lowercase text; offsets are kept only when they line up with the original."""
        match = pattern.search(lower)
        if not match:
            return None
        if len(lower) == len(original):
            start, end = match.span()
            return original[start:end], start, end - start
        return match.group(0), None, None

    # -------------------------------------------------------------------------
    # Shouting
    # -------------------------------------------------------------------------

    def _caps_issue(self, text: str) -> Optional[ReviewIssue]:
        words = [w for w in CAPS_WORD_PATTERN.findall(text) if w not in COMMON_ACRONYMS]
        if len(words) < CAPS_LOW_THRESHOLD:
            return None
        severity = IssueSeverity.MEDIUM if len(words) >= CAPS_MEDIUM_THRESHOLD else IssueSeverity.LOW
        return self.create_issue(
            severity,
            f"{len(words)} words in ALL-CAPS can read as shouting.",
            evidence=" ".join(words[:5]), rule_id='TN201',
        )

    def _exclamation_issue(self, text: str) -> Optional[ReviewIssue]:
        count = text.count("!")
        if count < EXCLAMATION_LOW_THRESHOLD:
            return None
        severity = IssueSeverity.MEDIUM if count >= EXCLAMATION_MEDIUM_THRESHOLD else IssueSeverity.LOW
        return self.create_issue(
            severity,
            f"{count} exclamation marks may come across as agitated.",
            evidence="!" * min(count, 10), rule_id='TN202',
        )
