"""
LanguageTool Client for MicroPause
==================================
Calls the LanguageTool HTTP API and maps its matches onto ReviewIssue.

Features:
- Form-encoded POST via requests, fresh Session per call, bounded timeout
- Category and severity mapping from rule category / issue type
- Custom dictionary filtering of flagged words
- Suppression of punctuation complaints caused by line-wrapped text
- Fail-open: fetch_issues() never raises, it returns [] on any failure

Requires: pip install requests
"""

import re
from concurrent.futures import Executor, Future
from typing import List, Dict, Any, Iterable, Optional, Set
from dataclasses import dataclass, field

import requests

from base_checker import IssueCategory, IssueSeverity, IssueLocation, ReviewIssue
from config_logging import get_logger, fail_open, GrammarServiceError
from ..base import NLPIntegrationBase
from ..config import LanguageToolConfig, get_config

__version__ = "1.0.0"

_logger = get_logger('nlp.languagetool')

# Rule category id -> issue category; anything else is dropped
CATEGORY_MAP: Dict[str, IssueCategory] = {
    'TYPOS': IssueCategory.GRAMMAR,
    'GRAMMAR': IssueCategory.GRAMMAR,
    'PUNCTUATION': IssueCategory.FORMATTING,
    'TYPOGRAPHY': IssueCategory.FORMATTING,
    'STYLE': IssueCategory.TONE,
    'TONE_OF_VOICE': IssueCategory.TONE,
}

# Issue types that map to grammar regardless of rule category
GRAMMAR_ISSUE_TYPES = frozenset({'misspelling', 'grammar'})
MEDIUM_ISSUE_TYPES = frozenset({'misspelling', 'grammar'})

LINE_WRAP_CATEGORIES = frozenset({'PUNCTUATION', 'TYPOGRAPHY'})
COMMA_SPACE_MESSAGE = "space after the comma"
COMMA_BREAK_WINDOW = 3
_COMMA_BREAK = re.compile(r",[ \t]*\r?\n")

_SINGLE_WORD = re.compile(r"^[A-Za-z]+$")
_EDGE_NON_ALNUM = re.compile(r"^[^a-z0-9]+|[^a-z0-9]+$")


def normalize_dictionary_token(value: str) -> str:
    """Lowercase and strip non-alphanumerics from both ends."""
    return _EDGE_NON_ALNUM.sub("", (value or "").lower())


@dataclass
class GrammarMatch:
    """One match from the LanguageTool response."""
    message: str
    offset: int
    length: int
    replacements: List[str] = field(default_factory=list)
    context_text: str = ""
    context_offset: int = 0
    context_length: int = 0
    rule_id: str = ""
    category_id: str = ""
    issue_type: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GrammarMatch':
        """
        Parse a raw match.

        Raises:
            KeyError, TypeError, ValueError: on a malformed match
        """
        context = data['context']
        rule = data['rule']
        offset = int(data['offset'])
        length = int(data['length'])
        context_offset = int(context['offset'])
        context_length = int(context['length'])
        if min(offset, length, context_offset, context_length) < 0:
            raise ValueError("negative offset or length")

        return cls(
            message=str(data['message']),
            offset=offset,
            length=length,
            replacements=[str(r['value']) for r in data.get('replacements') or [] if isinstance(r, dict) and 'value' in r],
            context_text=str(context['text']),
            context_offset=context_offset,
            context_length=context_length,
            rule_id=str(rule.get('id', '')),
            category_id=str((rule.get('category') or {}).get('id', '')),
            issue_type=str(rule.get('issueType', '')),
        )

    @property
    def evidence(self) -> str:
        """Flagged text as cut from the match context."""
        return self.context_text[self.context_offset:self.context_offset + self.context_length]

    @property
    def category(self) -> Optional[IssueCategory]:
        if self.issue_type in GRAMMAR_ISSUE_TYPES:
            return IssueCategory.GRAMMAR
        return CATEGORY_MAP.get(self.category_id)

    @property
    def severity(self) -> IssueSeverity:
        return IssueSeverity.MEDIUM if self.issue_type in MEDIUM_ISSUE_TYPES else IssueSeverity.LOW

    def preferred_replacement(self) -> Optional[str]:
        """Multi-word replacement for a single flagged word, else the first non-empty one."""
        values = [value.strip() for value in self.replacements if value and value.strip()]
        if not values:
            return None
        if _SINGLE_WORD.match(self.evidence):
            for value in values:
                if " " in value:
                    return value
        return values[0]

    def build_message(self) -> str:
        replacement = self.preferred_replacement()
        if replacement:
            return f'{self.message} "{self.evidence}" -> "{replacement}"'
        return self.message


def is_line_wrap_false_positive(match: GrammarMatch, source_text: str) -> bool:
    """
    True for punctuation/typography matches triggered by a line break.

    Any one signal is enough: a comma followed by a line break near the
    offset, the comma + line break + flagged word appearing anywhere in the
    text, or a line break inside the evidence, context or flagged slice.
    """
    if match.category_id not in LINE_WRAP_CATEGORIES:
        return False

    evidence = match.evidence

    if COMMA_SPACE_MESSAGE in match.message.lower():
        start = max(0, match.offset - COMMA_BREAK_WINDOW)
        end = match.offset + max(match.length, 1) + COMMA_BREAK_WINDOW
        if _COMMA_BREAK.search(source_text[start:end]):
            return True

        word = normalize_dictionary_token(evidence)
        if word and re.search(r",[ \t]*\r?\n\s*" + re.escape(word), source_text, re.IGNORECASE):
            return True

    if "\n" in evidence or "\n" in match.context_text:
        return True

    flagged = source_text[match.offset:match.offset + max(match.length, 1)]
    return "\n" in flagged


class LanguageToolClient(NLPIntegrationBase):
    """
    LanguageTool HTTP API client.

    No state is shared between calls; a new requests.Session is opened and
    closed for every request, so one client can serve several threads.
    """

    INTEGRATION_NAME = "LanguageTool"
    INTEGRATION_VERSION = "1.0.0"

    def __init__(self, config: Optional[LanguageToolConfig] = None):
        super().__init__()
        self.config = config or get_config().languagetool
        self.config.validate()
        self._available = bool(self.config.enabled)

    @property
    def timeout_seconds(self) -> float:
        return float(self.config.timeout_seconds)

    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the LanguageTool integration."""
        return {
            'available': self.is_available,
            'language': self.config.language,
            'api_url': self.config.api_url,
            'timeout_seconds': self.timeout_seconds,
            'error': self._error,
        }

    def check(self, text: str) -> List[GrammarMatch]:
        """
        Send text to the API and parse its matches.

        Individually malformed matches are skipped.

        Raises:
            GrammarServiceError: on network failure, timeout, non-2xx status
                or an unusable response body
        """
        try:
            with requests.Session() as session:
                response = session.post(
                    self.config.api_url,
                    data={'text': text, 'language': self.config.language},
                    timeout=self.timeout_seconds,
                )
        except requests.Timeout as e:
            raise GrammarServiceError(f"LanguageTool request timed out: {e}") from e
        except requests.RequestException as e:
            raise GrammarServiceError(f"LanguageTool request failed: {e}") from e

        if not response.ok:
            raise GrammarServiceError(
                f"LanguageTool returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise GrammarServiceError(f"LanguageTool returned malformed JSON: {e}") from e

        raw_matches = payload.get('matches') if isinstance(payload, dict) else None
        if not isinstance(raw_matches, list):
            raise GrammarServiceError("LanguageTool response has no matches list")

        matches = []
        for raw in raw_matches:
            try:
                matches.append(GrammarMatch.from_dict(raw))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                _logger.debug(f"Skipping malformed LanguageTool match: {e}")
        return matches

    def to_issues(
        self,
        matches: Iterable[GrammarMatch],
        source_text: str,
        custom_dictionary: Iterable[str] = (),
        location: Optional[IssueLocation] = None,
    ) -> List[ReviewIssue]:
        """Map, filter and cap matches."""
        ignore: Set[str] = {normalize_dictionary_token(term) for term in custom_dictionary}
        ignore.discard("")

        issues: List[ReviewIssue] = []
        for match in matches:
            category = match.category
            if category is None:
                continue
            if is_line_wrap_false_positive(match, source_text):
                continue
            word = normalize_dictionary_token(match.evidence)
            if word and word in ignore:
                continue

            issues.append(ReviewIssue(
                category=category,
                severity=match.severity,
                message=match.build_message(),
                evidence=match.evidence,
                location=location,
                offset=match.offset,
                length=match.length,
                rule_id=match.rule_id,
            ))
        return issues[:self.config.max_issues]

    @fail_open(list, _logger)
    def fetch_issues(
        self,
        text: str,
        custom_dictionary: Iterable[str] = (),
        location: Optional[IssueLocation] = None,
    ) -> List[ReviewIssue]:
        """
        Grammar issues for one field; [] on any failure.

        Args:
            text: Field text
            custom_dictionary: Terms whose findings are dropped
            location: Field tag copied onto every issue
        """
        if not self.is_available or not text or not text.strip():
            return []
        matches = self.check(text)
        return self.to_issues(matches, text, custom_dictionary, location)

    def submit(
        self,
        executor: Executor,
        text: str,
        custom_dictionary: Iterable[str] = (),
        location: Optional[IssueLocation] = None,
    ) -> Future:
        """Schedule fetch_issues() on an executor and return its future."""
        return executor.submit(self.fetch_issues, text, tuple(custom_dictionary), location)
