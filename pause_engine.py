#!/usr/bin/env python3
"""
MicroPause Decision Engine
==========================
Runs every analyzer over a ComposeSnapshot, groups the issues by category,
and turns them into a bounded cool-down delay.

Delay = clamp(base_delay + ceil(sum(severity weights) x multiplier), 0, 30)
where the multiplier is 1.35 for strict settings and 1 otherwise.

The remote grammar calls for subject and body run on worker threads while
the local analyzers work; each is joined against a shared deadline and
contributes nothing if it misses it.
"""

import math
import time
from decimal import Decimal
from concurrent.futures import ThreadPoolExecutor, Future, CancelledError
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union
from dataclasses import dataclass, field

from base_checker import IssueCategory, IssueLocation, ReviewIssue, CATEGORY_ORDER
from compose_context import ComposeSnapshot
from config_logging import get_logger, StructuredLogger
from context_checker import ContextChecker
from formatting_checker import FormattingChecker
from pause_settings import (
    PauseSettings, Strictness, normalize_settings,
    MIN_DELAY_SECONDS, MAX_DELAY_SECONDS,
)
from spell_checker import SpellingChecker, SpellingDictionary, get_default_dictionary
from tone_checker import ToneChecker
from tone_lexicon import ToneLexicon, get_default_lexicon

__version__ = "1.0.0"

_logger = get_logger('engine')

# Decimal keeps 20 x 1.35 at exactly 27
STRICT_MULTIPLIER = Decimal('1.35')

STRICTNESS_MULTIPLIERS: Dict[Strictness, Decimal] = {
    Strictness.BALANCED: Decimal('1'),
    Strictness.STRICT: STRICT_MULTIPLIER,
}

SUMMARY_HEADLINES: Dict[IssueCategory, str] = {
    IssueCategory.GRAMMAR: "Possible spelling or grammar mistakes",
    IssueCategory.FORMATTING: "Formatting could be cleaner",
    IssueCategory.TONE: "Tone may come across as harsh",
    IssueCategory.CONTEXT: "Double-check recipients and attachments",
}

GRAMMAR_GRACE_SECONDS = 0.5
GRAMMAR_FALLBACK_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class CategorySummary:
    """Headline and issue count for one non-empty category."""
    category: IssueCategory
    headline: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'category': self.category.value,
            'headline': self.headline,
            'count': self.count,
        }


@dataclass
class PauseAnalysis:
    """Result of one analysis: the delay plus what caused it."""
    delay_seconds: int
    summaries: List[CategorySummary] = field(default_factory=list)
    issues_by_category: Dict[IssueCategory, List[ReviewIssue]] = field(
        default_factory=lambda: {category: [] for category in CATEGORY_ORDER}
    )

    @property
    def issues(self) -> List[ReviewIssue]:
        """All issues in category order."""
        return [issue for category in CATEGORY_ORDER for issue in self.issues_by_category[category]]

    @property
    def issue_count(self) -> int:
        return sum(len(issues) for issues in self.issues_by_category.values())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'delay_seconds': self.delay_seconds,
            'summaries': [summary.to_dict() for summary in self.summaries],
            'issues_by_category': {
                category.value: [issue.to_dict() for issue in self.issues_by_category[category]]
                for category in CATEGORY_ORDER
            },
        }


def empty_issue_map() -> Dict[IssueCategory, List[ReviewIssue]]:
    return {category: [] for category in CATEGORY_ORDER}


def compute_penalty(issues: Iterable[ReviewIssue], strictness: Strictness = Strictness.BALANCED) -> int:
    """ceil(sum of severity weights x strictness multiplier)."""
    total = sum(issue.severity.weight for issue in issues)
    return math.ceil(total * STRICTNESS_MULTIPLIERS[strictness])


def compute_delay(base_delay_seconds: int, penalty: int) -> int:
    """Clamp base + penalty into [MIN_DELAY_SECONDS, MAX_DELAY_SECONDS]."""
    return max(MIN_DELAY_SECONDS, min(MAX_DELAY_SECONDS, int(base_delay_seconds) + int(penalty)))


def build_summaries(issues_by_category: Dict[IssueCategory, List[ReviewIssue]]) -> List[CategorySummary]:
    """One summary per non-empty category, in CATEGORY_ORDER."""
    return [
        CategorySummary(category, SUMMARY_HEADLINES[category], len(issues_by_category[category]))
        for category in CATEGORY_ORDER
        if issues_by_category.get(category)
    ]


class PauseEngine:
    """
    Analysis and decision engine.

    Holds only read-only collaborators (dictionary, lexicon, grammar client);
    every call to analyze() builds fresh checkers, so one engine can serve
    concurrent send attempts.
    """

    def __init__(
        self,
        grammar_client=None,
        spelling_dictionary: Optional[SpellingDictionary] = None,
        tone_lexicon: Optional[ToneLexicon] = None,
        grace_seconds: float = GRAMMAR_GRACE_SECONDS,
    ):
        if grammar_client is None:
            from nlp.languagetool import get_client
            grammar_client = get_client()
        self.grammar_client = grammar_client
        self.spelling_dictionary = spelling_dictionary or get_default_dictionary()
        self.tone_lexicon = tone_lexicon or get_default_lexicon()
        self.grace_seconds = grace_seconds

    def analyze(self, snapshot: ComposeSnapshot,
                settings: Union[PauseSettings, Dict[str, Any], None] = None) -> PauseAnalysis:
        """
        Analyze one send attempt.

        Args:
            snapshot: The message being sent
            settings: PauseSettings, or a raw mapping coerced by normalize_settings()

        Returns:
            PauseAnalysis with all four categories present
        """
        if not isinstance(settings, PauseSettings):
            settings = normalize_settings(settings)

        issues_by_category = empty_issue_map()
        if not settings.enabled:
            return PauseAnalysis(MIN_DELAY_SECONDS, [], issues_by_category)

        StructuredLogger.new_correlation_id()
        with _logger.log_operation('pause_analysis', recipients=snapshot.recipient_count,
                                   strictness=settings.strictness.value):
            for issue in self._collect_issues(snapshot, settings):
                issues_by_category[issue.category].append(issue)

            all_issues = [issue for issues in issues_by_category.values() for issue in issues]
            penalty = compute_penalty(all_issues, settings.strictness)
            delay = compute_delay(settings.base_delay_seconds, penalty)

        _logger.info("Pause decided", delay_seconds=delay, penalty=penalty,
                     issue_count=len(all_issues))
        return PauseAnalysis(delay, build_summaries(issues_by_category), issues_by_category)

    def _collect_issues(self, snapshot: ComposeSnapshot, settings: PauseSettings) -> List[ReviewIssue]:
        executor: Optional[ThreadPoolExecutor] = None
        futures: List[Tuple[IssueLocation, Future]] = []
        collected: List[ReviewIssue] = []

        try:
            if settings.check_grammar:
                executor, futures = self._submit_grammar(snapshot, settings)
                collected.extend(SpellingChecker(self.spelling_dictionary).safe_check(snapshot, settings))

            if settings.check_formatting:
                collected.extend(FormattingChecker().safe_check(snapshot, settings))

            collected.extend(ToneChecker(self.tone_lexicon).safe_check(snapshot, settings))
            collected.extend(ContextChecker(self.tone_lexicon).safe_check(snapshot, settings))

            collected.extend(self._join_grammar(futures))
        finally:
            if executor is not None:
                executor.shutdown(wait=False, cancel_futures=True)

        return collected

    def _submit_grammar(self, snapshot: ComposeSnapshot, settings: PauseSettings):
        fields = [
            (location, text)
            for location, text in ((IssueLocation.SUBJECT, snapshot.subject_text),
                                   (IssueLocation.BODY, snapshot.body_raw_text))
            if text and text.strip()
        ]
        if not fields:
            return None, []

        executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix='grammar')
        futures = []
        for location, text in fields:
            try:
                futures.append(
                    (location, self.grammar_client.submit(executor, text, settings.custom_dictionary, location)))
            except Exception as e:
                _logger.warning(f"Grammar check could not start: {type(e).__name__}: {e}",
                                location=location.value)
        return executor, futures

    def _join_grammar(self, futures: List[Tuple[IssueLocation, Future]]) -> List[ReviewIssue]:
        if not futures:
            return []

        deadline = time.monotonic() + self._grammar_timeout() + self.grace_seconds
        results: List[ReviewIssue] = []
        for location, future in futures:
            remaining = max(0.0, deadline - time.monotonic())
            try:
                results.extend(future.result(timeout=remaining))
            except FuturesTimeoutError:
                future.cancel()
                _logger.warning("Grammar check missed its deadline", location=location.value)
            except CancelledError:
                _logger.warning("Grammar check was cancelled", location=location.value)
            except Exception as e:
                _logger.warning(f"Grammar check failed: {type(e).__name__}: {e}",
                                location=location.value)
        return results

    def _grammar_timeout(self) -> float:
        try:
            return float(self.grammar_client.timeout_seconds)
        except (AttributeError, TypeError, ValueError) as e:
            _logger.warning(f"Unreadable grammar timeout, using {GRAMMAR_FALLBACK_TIMEOUT_SECONDS}s: {e}")
            return GRAMMAR_FALLBACK_TIMEOUT_SECONDS


_default_engine: Optional[PauseEngine] = None


def get_engine() -> PauseEngine:
    """Shared engine with the built-in dictionary, lexicon and grammar client."""
    global _default_engine
    if _default_engine is None:
        _default_engine = PauseEngine()
    return _default_engine


def compute_pause_analysis(snapshot: ComposeSnapshot,
                           settings: Union[PauseSettings, Dict[str, Any], None] = None) -> PauseAnalysis:
    """Analyze a snapshot with the shared engine."""
    return get_engine().analyze(snapshot, settings)
