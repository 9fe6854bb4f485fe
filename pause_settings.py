#!/usr/bin/env python3
"""
Pause settings
==============
User-facing configuration for the pause decision and its coercion rules.

Settings arrive from an external store and may be stale, partial or
hand-edited. normalize_settings() turns any mapping into a valid
PauseSettings; PauseSettings itself clamps and normalizes on construction
so a directly built instance is just as safe.
"""

import math
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple
from dataclasses import dataclass, field

from config_logging import get_logger

__version__ = "1.0.0"

_logger = get_logger('settings')

MIN_DELAY_SECONDS = 0
MAX_DELAY_SECONDS = 30
DEFAULT_DELAY_SECONDS = 5
DEFAULT_KEYWORDS: Tuple[str, ...] = ("urgent", "asap", "confidential", "private")


class Strictness(Enum):
    BALANCED = "balanced"
    STRICT = "strict"


def clamp_delay(seconds: Any, default: int = DEFAULT_DELAY_SECONDS) -> int:
    """Round to whole seconds and clamp into [MIN_DELAY_SECONDS, MAX_DELAY_SECONDS]."""
    try:
        value = float(seconds)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(value):
        return default
    # half-up: 2.5 -> 3
    rounded = int(math.floor(value + 0.5))
    return max(MIN_DELAY_SECONDS, min(MAX_DELAY_SECONDS, rounded))


def normalize_terms(terms: Optional[Iterable[Any]]) -> Tuple[str, ...]:
    """Trim, lowercase and de-duplicate, keeping first-seen order."""
    if terms is None or isinstance(terms, (str, bytes)):
        terms = [] if terms is None else [terms]
    seen = []
    for term in terms:
        if term is None:
            continue
        value = str(term).strip().lower()
        if value and value not in seen:
            seen.append(value)
    return tuple(seen)


def _coerce_strictness(value: Any) -> Strictness:
    if isinstance(value, Strictness):
        return value
    try:
        return Strictness(str(value).strip().lower())
    except ValueError:
        return Strictness.BALANCED


@dataclass(frozen=True)
class PauseSettings:
    """Analysis and delay configuration (read-only input to the engine)."""
    enabled: bool = True
    base_delay_seconds: int = DEFAULT_DELAY_SECONDS
    check_grammar: bool = True
    check_formatting: bool = True
    strictness: Strictness = Strictness.BALANCED
    custom_dictionary: FrozenSet[str] = field(default_factory=frozenset)
    keywords: Tuple[str, ...] = DEFAULT_KEYWORDS

    def __post_init__(self):
        object.__setattr__(self, 'base_delay_seconds', clamp_delay(self.base_delay_seconds))
        object.__setattr__(self, 'strictness', _coerce_strictness(self.strictness))
        object.__setattr__(self, 'custom_dictionary', frozenset(normalize_terms(self.custom_dictionary)))
        object.__setattr__(self, 'keywords', normalize_terms(self.keywords) or DEFAULT_KEYWORDS)
        for name in ('enabled', 'check_grammar', 'check_formatting'):
            object.__setattr__(self, name, bool(getattr(self, name)))

    @property
    def is_strict(self) -> bool:
        return self.strictness is Strictness.STRICT

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PauseSettings':
        """Create from a mapping; see normalize_settings()."""
        return normalize_settings(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'enabled': self.enabled,
            'base_delay_seconds': self.base_delay_seconds,
            'check_grammar': self.check_grammar,
            'check_formatting': self.check_formatting,
            'strictness': self.strictness.value,
            'custom_dictionary': sorted(self.custom_dictionary),
            'keywords': list(self.keywords),
        }


def normalize_settings(raw: Any) -> PauseSettings:
    """
    Coerce an arbitrary stored value into PauseSettings.

    Missing or malformed fields take their defaults; nothing is rejected.
    A non-mapping input yields the default settings.
    """
    if not isinstance(raw, dict):
        if raw is not None:
            _logger.warning("Settings payload is not a mapping; using defaults",
                            payload_type=type(raw).__name__)
        return PauseSettings()

    defaults = PauseSettings()

    def flag(name: str) -> bool:
        value = raw.get(name)
        return getattr(defaults, name) if value is None else bool(value)

    keywords = raw.get('keywords')
    dictionary = raw.get('custom_dictionary')

    return PauseSettings(
        enabled=flag('enabled'),
        base_delay_seconds=raw.get('base_delay_seconds', defaults.base_delay_seconds),
        check_grammar=flag('check_grammar'),
        check_formatting=flag('check_formatting'),
        strictness=raw.get('strictness', defaults.strictness),
        custom_dictionary=dictionary if isinstance(dictionary, (list, tuple, set, frozenset)) else (),
        keywords=keywords if isinstance(keywords, (list, tuple)) else defaults.keywords,
    )
