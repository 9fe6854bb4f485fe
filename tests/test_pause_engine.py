"""
Tests for the pause decision engine
===================================
Grammar service calls are replaced with in-process fakes that hand work to
the engine's executor the same way LanguageToolClient.submit() does.
"""

import threading
import time

import pytest

from base_checker import (
    IssueCategory, IssueSeverity, IssueLocation, ReviewIssue, CATEGORY_ORDER, SEVERITY_WEIGHTS,
)
from compose_context import build_snapshot
from pause_engine import (
    PauseEngine, PauseAnalysis, SUMMARY_HEADLINES, STRICTNESS_MULTIPLIERS,
    build_summaries, compute_delay, compute_penalty, empty_issue_map,
)
from pause_settings import PauseSettings, Strictness, MAX_DELAY_SECONDS, MIN_DELAY_SECONDS
from tone_checker import ToneChecker


class FakeGrammarClient:
    """Returns canned issues per field and records what it was asked."""

    def __init__(self, results=None, timeout_seconds=1.0):
        self.results = results or {}
        self.timeout_seconds = timeout_seconds
        self.calls = []

    def submit(self, executor, text, custom_dictionary=(), location=None):
        self.calls.append((location, text, tuple(custom_dictionary)))
        return executor.submit(lambda: list(self.results.get(location, [])))


class BlockingGrammarClient(FakeGrammarClient):
    """Never answers until released."""

    def __init__(self):
        super().__init__(timeout_seconds=0.05)
        self.release = threading.Event()

    def submit(self, executor, text, custom_dictionary=(), location=None):
        self.calls.append((location, text, tuple(custom_dictionary)))

        def wait():
            self.release.wait(5)
            return [grammar_issue(IssueSeverity.HIGH, location)]

        return executor.submit(wait)


class FailingGrammarClient(FakeGrammarClient):

    def submit(self, executor, text, custom_dictionary=(), location=None):
        def fail():
            raise RuntimeError("service exploded")
        return executor.submit(fail)


def grammar_issue(severity=IssueSeverity.LOW, location=IssueLocation.BODY,
                  category=IssueCategory.GRAMMAR):
    return ReviewIssue(category, severity, "Remote finding", evidence="x", location=location)


@pytest.fixture
def grammar():
    return FakeGrammarClient()


@pytest.fixture
def engine(grammar):
    return PauseEngine(grammar_client=grammar)


CLEAN_BODY = "Thanks for the update."


class TestDelay:

    def test_wide_recipient_list(self, engine):
        snapshot = build_snapshot(recipient_count=8, body_text=CLEAN_BODY)

        balanced = engine.analyze(snapshot, PauseSettings())
        assert balanced.delay_seconds == 8
        assert [s.category for s in balanced.summaries] == [IssueCategory.CONTEXT]

        strict = engine.analyze(snapshot, PauseSettings(strictness=Strictness.STRICT))
        assert strict.delay_seconds == 10

    def test_clean_message_with_zero_base(self, engine):
        snapshot = build_snapshot(recipient_count=1, body_text=CLEAN_BODY)
        analysis = engine.analyze(snapshot, PauseSettings(base_delay_seconds=0))
        assert analysis.delay_seconds == 0
        assert analysis.summaries == []
        assert analysis.issue_count == 0

    def test_delay_is_capped(self):
        many = [grammar_issue(IssueSeverity.HIGH) for _ in range(20)]
        engine = PauseEngine(grammar_client=FakeGrammarClient({IssueLocation.BODY: many}))
        analysis = engine.analyze(build_snapshot(body_text=CLEAN_BODY), PauseSettings())
        assert analysis.delay_seconds == MAX_DELAY_SECONDS

    @pytest.mark.parametrize("kwargs", [
        dict(recipient_count=8, body_text=CLEAN_BODY),
        dict(subject="URGENT!!!", body_text="teh report is attached"),
        dict(has_attachment=True, body_text="\tone\n  two"),
        dict(body_text="YOU NEVER FINISH ANYTHING!!!"),
        dict(body_text=""),
    ])
    def test_strict_never_shorter_and_bounded(self, engine, kwargs):
        snapshot = build_snapshot(**kwargs)
        balanced = engine.analyze(snapshot, PauseSettings()).delay_seconds
        strict = engine.analyze(snapshot, PauseSettings(strictness="strict")).delay_seconds
        assert MIN_DELAY_SECONDS <= balanced <= strict <= MAX_DELAY_SECONDS

    def test_settings_mapping_accepted(self, engine):
        snapshot = build_snapshot(recipient_count=8, body_text=CLEAN_BODY)
        assert engine.analyze(snapshot, {'strictness': 'strict'}).delay_seconds == 10
        assert engine.analyze(snapshot, None).delay_seconds == 8


class TestPenalty:

    def test_strict_multiplier_is_exact(self):
        issues = [grammar_issue(IssueSeverity.LOW) for _ in range(20)]
        assert compute_penalty(issues, Strictness.STRICT) == 27
        assert compute_penalty(issues, Strictness.BALANCED) == 20

    def test_rounds_up(self):
        assert compute_penalty([grammar_issue(IssueSeverity.LOW)], Strictness.STRICT) == 2

    def test_no_issues(self):
        assert compute_penalty([], Strictness.STRICT) == 0

    @pytest.mark.parametrize("base, penalty, expected", [
        (5, 0, 5),
        (5, 40, MAX_DELAY_SECONDS),
        (0, 0, MIN_DELAY_SECONDS),
    ])
    def test_compute_delay(self, base, penalty, expected):
        assert compute_delay(base, penalty) == expected


class TestEngineBehaviour:

    def test_disabled(self, engine, grammar):
        snapshot = build_snapshot(recipient_count=9, subject="teh", body_text="YOU NEVER FINISH!!!")
        analysis = engine.analyze(snapshot, PauseSettings(enabled=False))
        assert analysis.delay_seconds == MIN_DELAY_SECONDS
        assert analysis.summaries == []
        assert set(analysis.issues_by_category) == set(IssueCategory)
        assert analysis.issue_count == 0
        assert grammar.calls == []

    def test_all_categories_present(self, engine):
        analysis = engine.analyze(build_snapshot(body_text=CLEAN_BODY), PauseSettings())
        assert list(analysis.issues_by_category) == list(CATEGORY_ORDER)

    def test_idempotent(self, engine):
        snapshot = build_snapshot(
            recipient_count=5, subject="Re: plan",
            body_text="Please find attached teh plan.\n\n\n\n\nYOU NEVER READ IT!!!",
        )
        settings = PauseSettings(strictness=Strictness.STRICT)
        first = engine.analyze(snapshot, settings)
        second = engine.analyze(snapshot, settings)
        assert first.to_dict() == second.to_dict()

    def test_grammar_fields_submitted(self, engine, grammar):
        snapshot = build_snapshot(subject="Plan", body_text="Body text")
        engine.analyze(snapshot, PauseSettings(custom_dictionary=["Acme"]))
        assert [(loc, text) for loc, text, _ in grammar.calls] == [
            (IssueLocation.SUBJECT, "Plan"), (IssueLocation.BODY, "Body text"),
        ]
        assert grammar.calls[0][2] == ("acme",)

    def test_empty_subject_not_submitted(self, engine, grammar):
        engine.analyze(build_snapshot(subject="", body_text="Body"), PauseSettings())
        assert [loc for loc, _, _ in grammar.calls] == [IssueLocation.BODY]

    def test_grammar_disabled(self, engine, grammar):
        snapshot = build_snapshot(body_text="We saw teh draft")
        analysis = engine.analyze(snapshot, PauseSettings(check_grammar=False))
        assert grammar.calls == []
        assert analysis.issues_by_category[IssueCategory.GRAMMAR] == []

    def test_formatting_disabled(self, engine):
        snapshot = build_snapshot(body_text="\tone\n  two")
        analysis = engine.analyze(snapshot, PauseSettings(check_formatting=False))
        assert analysis.issues_by_category[IssueCategory.FORMATTING] == []

    def test_remote_issues_keep_their_category(self):
        remote = [grammar_issue(IssueSeverity.LOW, category=IssueCategory.FORMATTING)]
        engine = PauseEngine(grammar_client=FakeGrammarClient({IssueLocation.BODY: remote}))
        analysis = engine.analyze(build_snapshot(body_text=CLEAN_BODY), PauseSettings())
        assert analysis.issues_by_category[IssueCategory.FORMATTING] == remote
        assert analysis.delay_seconds == 6

    def test_slow_grammar_service_is_abandoned(self):
        client = BlockingGrammarClient()
        engine = PauseEngine(grammar_client=client, grace_seconds=0.0)
        try:
            started = time.monotonic()
            analysis = engine.analyze(build_snapshot(body_text=CLEAN_BODY), PauseSettings())
            assert time.monotonic() - started < 2
        finally:
            client.release.set()
        assert analysis.issues_by_category[IssueCategory.GRAMMAR] == []
        assert analysis.delay_seconds == 5

    def test_failing_grammar_service(self):
        engine = PauseEngine(grammar_client=FailingGrammarClient())
        analysis = engine.analyze(build_snapshot(recipient_count=2, body_text=CLEAN_BODY), PauseSettings())
        assert analysis.delay_seconds == 6

    def test_failing_analyzer_is_isolated(self, engine, monkeypatch):
        def explode(self, snapshot, settings=None):
            raise RuntimeError("bad lexicon")

        monkeypatch.setattr(ToneChecker, 'check', explode)
        snapshot = build_snapshot(recipient_count=2, body_text="This is bullshit")
        analysis = engine.analyze(snapshot, PauseSettings())
        assert analysis.issues_by_category[IssueCategory.TONE] == []
        assert len(analysis.issues_by_category[IssueCategory.CONTEXT]) == 1

    def test_urgency_scored_once(self, engine):
        analysis = engine.analyze(build_snapshot(body_text="This is urgent"), PauseSettings())
        assert [issue.rule_id for issue in analysis.issues] == ['TN1-urgency']
        assert analysis.delay_seconds == 6

    def test_checker_records_failure(self, monkeypatch):
        def explode(self, snapshot, settings=None):
            raise RuntimeError("bad lexicon")

        monkeypatch.setattr(ToneChecker, 'check', explode)
        checker = ToneChecker()
        assert checker.safe_check(build_snapshot(body_text="hi"), PauseSettings()) == []
        assert checker.get_errors() == ["Tone error: bad lexicon"]

    def test_failing_grammar_submit(self):
        class RefusingClient(FakeGrammarClient):
            def submit(self, executor, text, custom_dictionary=(), location=None):
                raise RuntimeError("no connection pool")

        engine = PauseEngine(grammar_client=RefusingClient())
        analysis = engine.analyze(build_snapshot(recipient_count=2, body_text=CLEAN_BODY), PauseSettings())
        assert analysis.issues_by_category[IssueCategory.GRAMMAR] == []
        assert analysis.delay_seconds == 6

    def test_unreadable_grammar_timeout(self):
        class BrokenTimeoutClient(FakeGrammarClient):
            @property
            def timeout_seconds(self):
                raise ValueError("timeout not configured")

            @timeout_seconds.setter
            def timeout_seconds(self, value):
                pass

        remote = [grammar_issue(IssueSeverity.LOW)]
        engine = PauseEngine(grammar_client=BrokenTimeoutClient({IssueLocation.BODY: remote}))
        analysis = engine.analyze(build_snapshot(recipient_count=2, body_text=CLEAN_BODY), PauseSettings())
        assert analysis.issues_by_category[IssueCategory.GRAMMAR] == remote
        assert analysis.delay_seconds == 7


class TestSummaries:

    def test_order_and_counts(self):
        issues = empty_issue_map()
        issues[IssueCategory.CONTEXT].append(grammar_issue(category=IssueCategory.CONTEXT))
        issues[IssueCategory.GRAMMAR].extend([grammar_issue(), grammar_issue()])
        summaries = build_summaries(issues)
        assert [(s.category, s.count) for s in summaries] == [
            (IssueCategory.GRAMMAR, 2), (IssueCategory.CONTEXT, 1),
        ]
        assert summaries[0].headline == SUMMARY_HEADLINES[IssueCategory.GRAMMAR]

    def test_tables_cover_every_member(self):
        assert set(SUMMARY_HEADLINES) == set(IssueCategory)
        assert set(STRICTNESS_MULTIPLIERS) == set(Strictness)
        assert set(SEVERITY_WEIGHTS) == set(IssueSeverity)
        assert set(CATEGORY_ORDER) == set(IssueCategory)

    def test_to_dict(self, engine):
        analysis = engine.analyze(build_snapshot(recipient_count=8, body_text=CLEAN_BODY), PauseSettings())
        data = analysis.to_dict()
        assert data['delay_seconds'] == 8
        assert data['summaries'] == [{'category': 'context', 'headline': SUMMARY_HEADLINES[IssueCategory.CONTEXT], 'count': 1}]
        assert list(data['issues_by_category']) == ['grammar', 'formatting', 'tone', 'context']
        assert data['issues_by_category']['context'][0]['severity'] == 'high'

    def test_default_analysis(self):
        analysis = PauseAnalysis(delay_seconds=3)
        assert analysis.issues == []
        assert set(analysis.issues_by_category) == set(IssueCategory)
