#!/usr/bin/env python3
"""
Tone lexicon
============
Curated profanity/slur entries, a broader generic word list, and the
phrase table for aggressive, blaming, dismissive, urgent and negative
wording.

ToneLexicon compiles these once into boundary-anchored patterns. It is
read-only after construction and safe to share between threads.
"""

import re
from enum import Enum
from typing import Dict, List, Iterable, NamedTuple, Optional, Tuple

from base_checker import IssueSeverity

__version__ = "1.0.0"


class ToneCategory(Enum):
    AGGRESSIVE = "aggressive"
    BLAME = "blame"
    DISMISSIVE = "dismissive"
    URGENCY = "urgency"
    NEGATIVE = "negative"


TONE_CATEGORY_LABELS: Dict[ToneCategory, str] = {
    ToneCategory.AGGRESSIVE: "Aggressive wording",
    ToneCategory.BLAME: "Blaming language",
    ToneCategory.DISMISSIVE: "Dismissive phrasing",
    ToneCategory.URGENCY: "Pressure or urgency",
    ToneCategory.NEGATIVE: "Negative sentiment",
}


class ToneSignal(NamedTuple):
    category: ToneCategory
    phrase: str
    severity: IssueSeverity


class ProfanityEntry(NamedTuple):
    word: str
    severity: IssueSeverity


_LOW, _MEDIUM, _HIGH = IssueSeverity.LOW, IssueSeverity.MEDIUM, IssueSeverity.HIGH

TONE_SIGNALS: Tuple[ToneSignal, ...] = (
    ToneSignal(ToneCategory.AGGRESSIVE, "this is unacceptable", _HIGH),
    ToneSignal(ToneCategory.AGGRESSIVE, "fix this now", _HIGH),
    ToneSignal(ToneCategory.AGGRESSIVE, "what is wrong with you", _HIGH),
    ToneSignal(ToneCategory.AGGRESSIVE, "i am furious", _HIGH),
    ToneSignal(ToneCategory.AGGRESSIVE, "this makes me angry", _MEDIUM),

    ToneSignal(ToneCategory.BLAME, "you failed to", _HIGH),
    ToneSignal(ToneCategory.BLAME, "why didn't you", _MEDIUM),
    ToneSignal(ToneCategory.BLAME, "this is your fault", _HIGH),
    ToneSignal(ToneCategory.BLAME, "you should have", _MEDIUM),
    ToneSignal(ToneCategory.BLAME, "you never", _MEDIUM),

    ToneSignal(ToneCategory.DISMISSIVE, "obviously", _LOW),
    ToneSignal(ToneCategory.DISMISSIVE, "just do it", _MEDIUM),
    ToneSignal(ToneCategory.DISMISSIVE, "as i already said", _MEDIUM),
    ToneSignal(ToneCategory.DISMISSIVE, "as i said before", _MEDIUM),
    ToneSignal(ToneCategory.DISMISSIVE, "how many times", _MEDIUM),
    ToneSignal(ToneCategory.DISMISSIVE, "i shouldn't have to explain", _HIGH),

    ToneSignal(ToneCategory.URGENCY, "asap", _LOW),
    ToneSignal(ToneCategory.URGENCY, "immediately", _MEDIUM),
    ToneSignal(ToneCategory.URGENCY, "urgent", _LOW),
    ToneSignal(ToneCategory.URGENCY, "right now", _MEDIUM),

    ToneSignal(ToneCategory.NEGATIVE, "terrible job", _HIGH),
    ToneSignal(ToneCategory.NEGATIVE, "absolutely useless", _HIGH),
    ToneSignal(ToneCategory.NEGATIVE, "completely wrong", _MEDIUM),
    ToneSignal(ToneCategory.NEGATIVE, "waste of time", _MEDIUM),
    ToneSignal(ToneCategory.NEGATIVE, "not good enough", _MEDIUM),
    ToneSignal(ToneCategory.NEGATIVE, "this is ridiculous", _MEDIUM),
    ToneSignal(ToneCategory.NEGATIVE, "never works", _MEDIUM),
    ToneSignal(ToneCategory.NEGATIVE, "always broken", _MEDIUM),
    ToneSignal(ToneCategory.NEGATIVE, "i can't believe", _LOW),
    ToneSignal(ToneCategory.NEGATIVE, "disappointing", _LOW),
    ToneSignal(ToneCategory.NEGATIVE, "unacceptable behavior", _HIGH),
    ToneSignal(ToneCategory.NEGATIVE, "deeply frustrated", _MEDIUM),
)

PROFANITY: Tuple[ProfanityEntry, ...] = (
    ProfanityEntry("fuck", _HIGH),
    ProfanityEntry("fucking", _HIGH),
    ProfanityEntry("shit", _HIGH),
    ProfanityEntry("bullshit", _HIGH),
    ProfanityEntry("asshole", _HIGH),
    ProfanityEntry("bastard", _HIGH),
    ProfanityEntry("bitch", _MEDIUM),
    ProfanityEntry("damn", _MEDIUM),
    ProfanityEntry("dammit", _MEDIUM),
    ProfanityEntry("crap", _MEDIUM),
    ProfanityEntry("moron", _MEDIUM),
    ProfanityEntry("idiot", _MEDIUM),
    ProfanityEntry("jerk", _MEDIUM),
    ProfanityEntry("screw you", _HIGH),
    ProfanityEntry("piss off", _HIGH),
    ProfanityEntry("nigger", _HIGH),
    ProfanityEntry("nigga", _HIGH),
    ProfanityEntry("retard", _HIGH),
    ProfanityEntry("chink", _HIGH),
    ProfanityEntry("clanker", _HIGH),
)

# Broad coverage, not individually tuned; overlaps with PROFANITY are removed
EXTENDED_PROFANITY: Tuple[str, ...] = (
    "arse", "arsehole", "ass", "asshat", "asshole", "bastard", "bitch",
    "bollocks", "bugger", "bullshit", "cock", "crap", "cunt", "damn",
    "douche", "douchebag", "dickhead", "dumbass", "fag", "faggot", "fck",
    "fuck", "fucked", "fucker", "fuk", "goddamn", "idiot", "jackass",
    "motherfucker", "piss", "pissed", "prick", "shit", "shithead", "shitty",
    "slut", "stfu", "twat", "wanker", "whore", "wtf",
)


def phrase_pattern(phrase: str) -> "re.Pattern":
    """Whole word/phrase match on lowercase text; inner spaces match any whitespace run."""
    body = r"\s+".join(re.escape(part) for part in phrase.lower().split())
    return re.compile(rf"(?<![a-z0-9]){body}(?![a-z0-9])")


class ToneLexicon:
    """Compiled, read-only tone and profanity lookup tables."""

    def __init__(
        self,
        profanity: Iterable[ProfanityEntry] = PROFANITY,
        extended_words: Iterable[str] = EXTENDED_PROFANITY,
        signals: Iterable[ToneSignal] = TONE_SIGNALS,
    ):
        self.profanity: Tuple[Tuple[ProfanityEntry, "re.Pattern"], ...] = tuple(
            (entry, phrase_pattern(entry.word)) for entry in profanity
        )
        curated = {entry.word.lower() for entry, _ in self.profanity}

        seen = set()
        extended: List[Tuple[str, "re.Pattern"]] = []
        for word in extended_words:
            word = word.lower()
            if word in curated or word in seen:
                continue
            seen.add(word)
            extended.append((word, phrase_pattern(word)))
        self.extended: Tuple[Tuple[str, "re.Pattern"], ...] = tuple(extended)

        self.signals: Tuple[Tuple[ToneSignal, "re.Pattern"], ...] = tuple(
            (signal, phrase_pattern(signal.phrase)) for signal in signals
        )

    @property
    def extended_words(self) -> Tuple[str, ...]:
        return tuple(word for word, _ in self.extended)


_default_lexicon: Optional[ToneLexicon] = None


def get_default_lexicon() -> ToneLexicon:
    """Shared built-in lexicon, compiled on first use."""
    global _default_lexicon
    if _default_lexicon is None:
        _default_lexicon = ToneLexicon()
    return _default_lexicon
