"""
Tests for pause settings coercion
=================================
"""

import dataclasses

import pytest

from pause_settings import (
    PauseSettings, Strictness, clamp_delay, normalize_settings, normalize_terms,
    DEFAULT_DELAY_SECONDS, DEFAULT_KEYWORDS, MAX_DELAY_SECONDS, MIN_DELAY_SECONDS,
)


class TestClampDelay:

    @pytest.mark.parametrize("value, expected", [
        (99, MAX_DELAY_SECONDS),
        (-5, MIN_DELAY_SECONDS),
        ("12", 12),
        (2.5, 3),
        (2.4, 2),
        (None, DEFAULT_DELAY_SECONDS),
        ("abc", DEFAULT_DELAY_SECONDS),
        (float('nan'), DEFAULT_DELAY_SECONDS),
        (float('inf'), DEFAULT_DELAY_SECONDS),
    ])
    def test_clamp(self, value, expected):
        assert clamp_delay(value) == expected


class TestPauseSettings:

    def test_defaults(self):
        settings = PauseSettings()
        assert settings.enabled
        assert settings.base_delay_seconds == 5
        assert settings.check_grammar and settings.check_formatting
        assert settings.strictness == Strictness.BALANCED
        assert settings.custom_dictionary == frozenset()
        assert settings.keywords == DEFAULT_KEYWORDS

    def test_direct_construction_is_normalized(self):
        settings = PauseSettings(
            base_delay_seconds=45,
            strictness="STRICT",
            custom_dictionary=[" Foo ", "foo", "BAR", ""],
            keywords=[" Urgent ", "urgent"],
        )
        assert settings.base_delay_seconds == 30
        assert settings.is_strict
        assert settings.custom_dictionary == frozenset({"foo", "bar"})
        assert settings.keywords == ("urgent",)

    def test_unknown_strictness_is_balanced(self):
        assert PauseSettings(strictness="paranoid").strictness == Strictness.BALANCED

    def test_empty_keywords_use_defaults(self):
        assert PauseSettings(keywords=[]).keywords == DEFAULT_KEYWORDS

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            PauseSettings().enabled = False

    def test_to_dict(self):
        data = PauseSettings(custom_dictionary=["zeta", "alpha"]).to_dict()
        assert data['strictness'] == 'balanced'
        assert data['custom_dictionary'] == ['alpha', 'zeta']
        assert PauseSettings.from_dict(data) == PauseSettings(custom_dictionary=["zeta", "alpha"])


class TestNormalizeSettings:

    @pytest.mark.parametrize("raw", [None, "garbage", 42, ["enabled"]])
    def test_non_mapping_gives_defaults(self, raw):
        assert normalize_settings(raw) == PauseSettings()

    def test_partial_mapping(self):
        settings = normalize_settings({'enabled': False, 'base_delay_seconds': '7'})
        assert not settings.enabled
        assert settings.base_delay_seconds == 7
        assert settings.check_grammar

    def test_null_fields_take_defaults(self):
        settings = normalize_settings({'check_grammar': None, 'strictness': None})
        assert settings.check_grammar
        assert settings.strictness == Strictness.BALANCED

    def test_malformed_lists_ignored(self):
        settings = normalize_settings({'keywords': 'urgent', 'custom_dictionary': 'foo'})
        assert settings.keywords == DEFAULT_KEYWORDS
        assert settings.custom_dictionary == frozenset()

    def test_normalize_terms(self):
        assert normalize_terms(["B", "a", "b", None]) == ("b", "a")
        assert normalize_terms("single") == ("single",)
        assert normalize_terms(None) == ()
