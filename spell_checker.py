#!/usr/bin/env python3
"""
Offline Spell Checker v1.0.0
============================
Spelling analysis without external service dependencies.

Features:
- Pure Python implementation (no API calls)
- Known-misspelling map (high confidence, medium severity)
- Fuzzy suggestions by Damerau-Levenshtein distance over length buckets
- Affix and compound tolerance so regular inflections are not flagged
- Custom dictionary support
- Confidence gate: suggestions are withheld when too many words are unknown
"""

import re
from typing import List, Dict, Iterable, Optional, Set, Tuple, FrozenSet, NamedTuple

from base_checker import BaseChecker, IssueCategory, IssueSeverity, IssueLocation, ReviewIssue
from spell_dictionary import COMMON_WORDS, CONTRACTIONS, COMMON_MISSPELLINGS, BUILT_IN_ALLOWLIST

__version__ = "1.0.0"

MAX_SUGGESTION_DISTANCE = 2
DEFAULT_MAX_ISSUES = 8
DEFAULT_UNKNOWN_RATIO_THRESHOLD = 0.35
MIN_LETTERS_FOR_LANGUAGE_GATE = 25
MIN_LATIN_SHARE = 0.75

NON_ENGLISH_MESSAGE = "Language appears non-English; typo checks are limited."
LOW_CONFIDENCE_MESSAGE = "Email contains many unknown terms; typo confidence is reduced."

# (rule_id, pattern, message); each reported at most once per text
CONFUSION_PATTERNS: Tuple[Tuple[str, "re.Pattern", str], ...] = (
    ('SP101', re.compile(r"\byour\s+(welcome|right|going|not|able)\b", re.IGNORECASE),
     'Use "you\'re" in this phrase.'),
    ('SP102', re.compile(r"\bits\s+(a|an|the|been|going)\b", re.IGNORECASE),
     'Use "it\'s" when you mean "it is".'),
    ('SP103', re.compile(r"\btheir\s+(is|are|was|were)\b", re.IGNORECASE),
     'Use "there" in this phrase.'),
    ('SP104', re.compile(r"\bmore then\b", re.IGNORECASE),
     'Use "than" after comparatives ("more than").'),
    ('SP105', re.compile(r"\bless then\b", re.IGNORECASE),
     'Use "than" after comparatives ("less than").'),
    ('SP106', re.compile(r"\brather then\b", re.IGNORECASE),
     'Use "than" in the phrase "rather than".'),
    ('SP107', re.compile(r"\b(could|should|would)\s+of\b", re.IGNORECASE),
     'Use "have" after could/should/would ("could have").'),
    ('SP108', re.compile(r"\balot\b", re.IGNORECASE),
     'Use "a lot" (two words).'),
)

TOKEN_PATTERN = re.compile(r"[A-Za-z][A-Za-z'-]+")
URL_OR_EMAIL_PATTERN = re.compile(r"https?://\S+|www\.\S+|\S+@\S+\.\S+", re.IGNORECASE)
SENTENCE_END_PATTERN = re.compile(r"[.!?\n]\s*$")
# Line after a comma-terminated line, e.g. the name under "Best,"
SIGN_OFF_PATTERN = re.compile(r",[ \t]*(?:\r?\n[ \t]*){1,2}$")

SUFFIXES = (
    'ing', 'ed', 'er', 'ers', 'est', 'ly', 's', 'es', 'tion', 'tions', 'ment',
    'ments', 'ness', 'able', 'ful', 'less', 'ity', 'al', 'ive', 'ize', 'ise',
)
PREFIXES = (
    'un', 're', 'pre', 'dis', 'mis', 'non', 'over', 'under', 'sub', 'super',
    'anti', 'auto', 'co', 'de', 'inter', 'multi', 'post', 'semi', 'trans', 'out',
)


class Token(NamedTuple):
    raw: str
    normalized: str
    index: int


def normalize_word(word: str) -> str:
    """Lowercase and trim surrounding apostrophes."""
    return word.lower().strip("'")


def damerau_levenshtein(a: str, b: str) -> int:
    """Optimal string alignment distance (adjacent transpositions cost 1)."""
    rows = len(a) + 1
    cols = len(b) + 1
    d = [[0] * cols for _ in range(rows)]
    for i in range(rows):
        d[i][0] = i
    for j in range(cols):
        d[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            d[i][j] = min(
                d[i - 1][j] + 1,
                d[i][j - 1] + 1,
                d[i - 1][j - 1] + cost,
            )
            if i > 1 and j > 1 and a[i - 1] == b[j - 2] and a[i - 2] == b[j - 1]:
                d[i][j] = min(d[i][j], d[i - 2][j - 2] + 1)

    return d[-1][-1]


def is_mostly_english(text: str) -> bool:
    """True unless the text has enough letters and too few of them are ASCII Latin."""
    letters = [c for c in text if c.isalpha()]
    if len(letters) < MIN_LETTERS_FOR_LANGUAGE_GATE:
        return True
    latin = sum(1 for c in letters if 'a' <= c.lower() <= 'z')
    return latin / len(letters) >= MIN_LATIN_SHARE


class SpellingDictionary:
    """
    Read-only vocabulary used by the spelling analyzer.

    Built once and shared; nothing mutates it after construction.
    """

    def __init__(
        self,
        words: Iterable[str] = COMMON_WORDS,
        misspellings: Optional[Dict[str, str]] = None,
        allowlist: Iterable[str] = BUILT_IN_ALLOWLIST,
        contractions: Iterable[str] = CONTRACTIONS,
    ):
        misspellings = dict(COMMON_MISSPELLINGS if misspellings is None else misspellings)
        word_set = {w.lower() for w in words} | {w.lower() for w in contractions}
        # A listed typo must never count as a known word
        word_set -= set(misspellings)

        self.words: FrozenSet[str] = frozenset(word_set)
        self.misspellings: Dict[str, str] = misspellings
        self.allowlist: FrozenSet[str] = frozenset(w.lower() for w in allowlist)

        buckets: Dict[int, List[str]] = {}
        for word in self.words:
            if "'" in word or ' ' in word:
                continue
            buckets.setdefault(len(word), []).append(word)
        self._buckets: Dict[int, Tuple[str, ...]] = {
            length: tuple(sorted(bucket)) for length, bucket in buckets.items()
        }

    def __contains__(self, word: str) -> bool:
        return word in self.words

    def bucket(self, length: int) -> Tuple[str, ...]:
        return self._buckets.get(length, ())

    def ignore_set(self, custom_dictionary: Iterable[str] = ()) -> Set[str]:
        """Built-in allowlist plus the caller's custom terms, lowercased."""
        ignore = set(self.allowlist)
        ignore.update(term.strip().lower() for term in custom_dictionary if term and term.strip())
        return ignore

    # -------------------------------------------------------------------------
    # Known-word checks
    # -------------------------------------------------------------------------

    def is_known(self, word: str) -> bool:
        """True if word is listed or is a regular derivation of a listed word."""
        if word in self.words:
            return True
        if word.endswith("'s") and self.is_known(word[:-2]):
            return True
        if '-' in word:
            parts = [p for p in word.split('-') if p]
            return bool(parts) and all(len(p) < 3 or self.is_known(p) for p in parts)
        return self._has_valid_affix(word) or self._is_valid_compound(word)

    def _has_valid_suffix(self, word: str) -> bool:
        for suffix in SUFFIXES:
            if not word.endswith(suffix) or len(word) - len(suffix) < 2:
                continue
            base = word[:-len(suffix)]
            if base in self.words or (base + 'e') in self.words:
                return True
            # running -> run
            if len(base) > 2 and base[-1] == base[-2] and base[:-1] in self.words:
                return True
            # tried -> try, happiness -> happy
            if base.endswith('i') and (base[:-1] + 'y') in self.words:
                return True
        return False

    def _has_valid_affix(self, word: str) -> bool:
        if self._has_valid_suffix(word):
            return True
        for prefix in PREFIXES:
            if word.startswith(prefix) and len(word) - len(prefix) >= 3:
                base = word[len(prefix):]
                if base in self.words or self._has_valid_suffix(base):
                    return True
        return False

    def _is_valid_compound(self, word: str) -> bool:
        for i in range(3, len(word) - 2):
            if word[:i] in self.words and word[i:] in self.words:
                return True
        return False

    # -------------------------------------------------------------------------
    # Suggestions
    # -------------------------------------------------------------------------

    def candidates(self, word: str) -> List[str]:
        """Words within two letters of length sharing the first or second character."""
        result = []
        for length in range(len(word) - 2, len(word) + 3):
            for candidate in self.bucket(length):
                if candidate[0] == word[0] or (
                    len(candidate) > 1 and len(word) > 1 and candidate[1] == word[1]
                ):
                    result.append(candidate)
        return result

    def suggest(self, word: str, max_distance: int = MAX_SUGGESTION_DISTANCE) -> Optional[str]:
        """Closest candidate within max_distance, or None."""
        best_word, best_distance = None, max_distance + 1
        for candidate in self.candidates(word):
            distance = damerau_levenshtein(word, candidate)
            if distance < best_distance:
                best_word, best_distance = candidate, distance
                if distance == 1:
                    break
        return best_word


_default_dictionary: Optional[SpellingDictionary] = None


def get_default_dictionary() -> SpellingDictionary:
    """Shared built-in dictionary, created on first use."""
    global _default_dictionary
    if _default_dictionary is None:
        _default_dictionary = SpellingDictionary()
    return _default_dictionary


class SpellingChecker(BaseChecker):
    """
    Offline spelling analyzer.

    Deterministic: the same text, options and dictionary always give the
    same issues in the same order.
    """

    CHECKER_NAME = "Spelling"
    CHECKER_VERSION = "1.0.0"
    CATEGORY = IssueCategory.GRAMMAR

    def __init__(
        self,
        dictionary: Optional[SpellingDictionary] = None,
        unknown_ratio_threshold: float = DEFAULT_UNKNOWN_RATIO_THRESHOLD,
        max_issues: int = DEFAULT_MAX_ISSUES,
        enabled: bool = True,
    ):
        super().__init__(enabled)
        self.dictionary = dictionary or get_default_dictionary()
        self.unknown_ratio_threshold = unknown_ratio_threshold
        self.max_issues = max_issues

    def check(self, snapshot, settings) -> List[ReviewIssue]:
        """Check subject and body of a ComposeSnapshot."""
        issues: List[ReviewIssue] = []
        fields = (
            (IssueLocation.SUBJECT, snapshot.subject_text),
            (IssueLocation.BODY, snapshot.body_raw_text),
        )
        for location, text in fields:
            issues.extend(self.analyze(
                text,
                strict=settings.is_strict,
                custom_dictionary=settings.custom_dictionary,
                location=location,
            ))
        return issues

    def analyze(
        self,
        text: str,
        strict: bool = False,
        custom_dictionary: Iterable[str] = (),
        max_issues: Optional[int] = None,
        location: Optional[IssueLocation] = None,
    ) -> List[ReviewIssue]:
        """
        Analyze one text field.

        Args:
            text: Field text; token offsets index into it
            strict: Raise fuzzy suggestions from low to medium severity
            custom_dictionary: Extra terms to accept
            max_issues: Cap on returned issues (default: instance setting)
            location: Field tag copied onto every issue

        Returns:
            List of grammar-category ReviewIssue objects
        """
        limit = self.max_issues if max_issues is None else max_issues
        issues: List[ReviewIssue] = []

        if not text or not text.strip() or limit <= 0:
            return issues

        if not is_mostly_english(text):
            issues.append(self.create_issue(
                IssueSeverity.LOW, NON_ENGLISH_MESSAGE, location=location, rule_id='SP001'))
            return issues

        ignore = self.dictionary.ignore_set(custom_dictionary)

        covered = self._add_confusion_issues(text, issues, limit, location)
        if len(issues) >= limit:
            return issues[:limit]

        tokens = self.collect_tokens(text)
        skip_spans = [m.span() for m in URL_OR_EMAIL_PATTERN.finditer(text)] + covered
        low_confidence: List[ReviewIssue] = []
        unknown_count = 0
        fuzzy_severity = IssueSeverity.MEDIUM if strict else IssueSeverity.LOW

        for token in tokens:
            if len(issues) + len(low_confidence) >= limit:
                break
            if self._should_skip(token, text, ignore, skip_spans):
                continue

            fix = self.dictionary.misspellings.get(token.normalized)
            if fix:
                unknown_count += 1
                issues.append(self._typo_issue(token, fix, IssueSeverity.MEDIUM, location, 'SP002'))
                continue

            if self._is_exempt(token, text) or self.dictionary.is_known(token.normalized):
                continue

            unknown_count += 1
            suggestion = self.dictionary.suggest(token.normalized)
            if suggestion:
                low_confidence.append(self._typo_issue(token, suggestion, fuzzy_severity, location, 'SP003'))

        unknown_ratio = unknown_count / len(tokens) if tokens else 0.0
        if unknown_ratio <= self.unknown_ratio_threshold:
            issues.extend(low_confidence)
        elif not issues:
            issues.append(self.create_issue(
                IssueSeverity.LOW, LOW_CONFIDENCE_MESSAGE, location=location, rule_id='SP004'))

        return issues[:limit]

    @staticmethod
    def collect_tokens(text: str) -> List[Token]:
        return [
            Token(m.group(0), normalize_word(m.group(0)), m.start())
            for m in TOKEN_PATTERN.finditer(text)
        ]

    def _add_confusion_issues(self, text: str, issues: List[ReviewIssue], limit: int,
                              location: Optional[IssueLocation]) -> List[Tuple[int, int]]:
        """Append confusion-pattern issues; return the spans they cover."""
        covered = []
        for rule_id, pattern, message in CONFUSION_PATTERNS:
            if len(issues) >= limit:
                break
            match = pattern.search(text)
            if match:
                issues.append(self.create_issue(
                    IssueSeverity.MEDIUM, message, evidence=match.group(0), location=location,
                    offset=match.start(), length=len(match.group(0)), rule_id=rule_id,
                ))
                covered.append(match.span())
        return covered

    @staticmethod
    def _should_skip(token: Token, text: str, ignore: Set[str],
                     skip_spans: List[Tuple[int, int]]) -> bool:
        if len(token.normalized) < 3 or token.normalized in ignore:
            return True
        if any(start <= token.index < end for start, end in skip_spans):
            return True
        return any(c.isdigit() for c in token.raw)

    @staticmethod
    def _is_exempt(token: Token, text: str) -> bool:
        """Likely acronyms and proper nouns are not checked against the dictionary."""
        if token.raw == token.raw.upper() and len(token.raw) <= 6:
            return True
        if not re.match(r"^[A-Z][a-z]", token.raw):
            return False
        i = token.index
        if SIGN_OFF_PATTERN.search(text[max(0, i - 16):i]):
            return True
        starts_sentence = i == 0 or bool(SENTENCE_END_PATTERN.search(text[max(0, i - 3):i]))
        prev_char = text[i - 1] if i > 0 else ""
        return not starts_sentence and prev_char in (" ", "\n")

    def _typo_issue(self, token: Token, fix: str, severity: IssueSeverity,
                    location: Optional[IssueLocation], rule_id: str) -> ReviewIssue:
        return self.create_issue(
            severity,
            f'Possible typo: "{token.raw}" -> "{fix}"',
            evidence=token.raw,
            location=location,
            offset=token.index,
            length=len(token.raw),
            rule_id=rule_id,
        )
