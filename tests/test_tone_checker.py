"""
Tests for the tone & profanity checker
======================================
"""

import pytest

from base_checker import IssueCategory, IssueSeverity, IssueLocation
from tone_checker import ToneChecker, normalize_leetspeak
from tone_lexicon import (
    ToneCategory, ToneLexicon, TONE_CATEGORY_LABELS, TONE_SIGNALS, PROFANITY,
    phrase_pattern,
)


@pytest.fixture
def checker() -> ToneChecker:
    return ToneChecker()


def by_rule(issues, rule_id):
    return [issue for issue in issues if issue.rule_id == rule_id]


class TestShouting:

    def test_caps_exclamations_and_blame(self, checker):
        issues = checker.analyze("", "YOU NEVER FINISH ANYTHING!!!")
        assert all(issue.category == IssueCategory.TONE for issue in issues)

        caps = by_rule(issues, 'TN201')
        assert len(caps) == 1
        assert caps[0].severity == IssueSeverity.MEDIUM
        assert caps[0].location is None

        exclamations = by_rule(issues, 'TN202')
        assert len(exclamations) == 1
        assert exclamations[0].severity == IssueSeverity.LOW

        blame = by_rule(issues, 'TN1-blame')
        assert len(blame) == 1
        assert blame[0].severity == IssueSeverity.MEDIUM
        assert '"you never"' in blame[0].message
        assert blame[0].evidence == "YOU NEVER"

    def test_two_caps_words_is_low(self, checker):
        caps = by_rule(checker.analyze("", "PLEASE READ this"), 'TN201')
        assert caps[0].severity == IssueSeverity.LOW

    def test_acronyms_do_not_count(self, checker):
        issues = checker.analyze("FYI", "The CEO needs the PDF by EOD")
        assert by_rule(issues, 'TN201') == []

    def test_caps_counted_across_subject_and_body(self, checker):
        assert len(by_rule(checker.analyze("READ THIS", "NOW please"), 'TN201')) == 1

    def test_five_exclamations_is_medium(self, checker):
        exclamations = by_rule(checker.analyze("", "Great!!!!!"), 'TN202')
        assert exclamations[0].severity == IssueSeverity.MEDIUM

    def test_two_exclamations_ignored(self, checker):
        assert checker.analyze("", "Great news! Thanks!") == []


class TestProfanity:

    def test_curated_word(self, checker):
        issues = checker.analyze("", "This is bullshit")
        assert len(issues) == 1
        assert issues[0].rule_id == 'TN001'
        assert issues[0].severity == IssueSeverity.HIGH
        assert issues[0].evidence == "bullshit"

    def test_curated_offset(self, checker):
        issue = checker.analyze("", "Well, damn.")[0]
        assert (issue.offset, issue.length) == (6, 4)
        assert issue.location == IssueLocation.BODY

    @pytest.mark.parametrize("body, word", [
        ("You are a m0r0n", "moron"),
        ("what a pile of sh1t", "shit"),
        ("you @$$hole", "asshole"),
        ("f.u.c.k this", "fuck"),
    ])
    def test_leetspeak_spellings(self, checker, body, word):
        issues = by_rule(checker.analyze("", body), 'TN001')
        assert len(issues) == 1
        assert issues[0].evidence == word
        assert issues[0].offset is None

    @pytest.mark.parametrize("body, word", [
        ("You m0r0n!", "moron"),
        ("Total sh1t!!", "shit"),
        ("This is sh!t", "shit"),
    ])
    def test_leetspeak_before_trailing_exclamation(self, checker, body, word):
        issues = by_rule(checker.analyze("", body), 'TN001')
        assert [issue.evidence for issue in issues] == [word]

    def test_extended_word_before_exclamation(self, checker):
        issues = checker.analyze("", "What a wanker!")
        assert [issue.rule_id for issue in issues] == ['TN002']

    @pytest.mark.parametrize("body", [
        "Invoice total is $1,455.",
        "Please see room 455 at 3pm.",
        "Order 4455 ships on 5/5.",
    ])
    def test_numbers_are_not_decoded(self, checker, body):
        assert checker.analyze("", body) == []

    def test_word_boundaries(self, checker):
        assert checker.analyze("", "Scunthorpe class assessment") == []

    def test_subject_reported_before_body(self, checker):
        issues = checker.analyze("damn it", "damn")
        assert len(issues) == 1
        assert issues[0].location == IssueLocation.SUBJECT

    def test_extended_list(self, checker):
        issues = checker.analyze("", "What a wanker")
        assert len(issues) == 1
        assert issues[0].rule_id == 'TN002'
        assert issues[0].severity == IssueSeverity.MEDIUM


class TestSignals:

    def test_each_phrase_once(self, checker):
        issues = checker.analyze("", "you never listen. you never call.")
        assert len(by_rule(issues, 'TN1-blame')) == 1

    def test_phrase_spanning_line_break(self, checker):
        issues = checker.analyze("", "This is\nunacceptable")
        assert by_rule(issues, 'TN1-aggressive')[0].severity == IssueSeverity.HIGH

    def test_clean_message(self, checker):
        assert checker.analyze("Update", "Thanks for the update, see you tomorrow.") == []


class TestLexicon:

    def test_extended_words_exclude_curated(self):
        lexicon = ToneLexicon()
        curated = {entry.word for entry in PROFANITY}
        assert curated.isdisjoint(lexicon.extended_words)
        assert "wanker" in lexicon.extended_words

    def test_every_category_has_a_label(self):
        assert set(TONE_CATEGORY_LABELS) == set(ToneCategory)
        assert {signal.category for signal in TONE_SIGNALS} <= set(TONE_CATEGORY_LABELS)

    def test_phrase_pattern(self):
        pattern = phrase_pattern("Fix this now")
        assert pattern.search("please fix  this\tnow")
        assert not pattern.search("prefix this now")

    @pytest.mark.parametrize("text, expected", [
        ("Sh1t", "shit"),
        ("@$$hole", "asshole"),
        ("sh!t!!", "shit!!"),
        ("m.o.r.o.n", "moron"),
        ("$1,455.", "$1,455."),
        ("room 455", "room 455"),
        ("f*ck", "fck"),
        (None, ""),
    ])
    def test_normalize_leetspeak(self, text, expected):
        assert normalize_leetspeak(text) == expected
