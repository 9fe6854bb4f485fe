#!/usr/bin/env python3
"""
Base Checker Contract
=====================
Defines the issue vocabulary and the interface all compose checkers implement.

Categories, severities and locations are closed enumerations. Tables keyed by
them must cover every member; see CATEGORY_ORDER and SEVERITY_WEIGHTS.
"""

from enum import Enum
from typing import List, Dict, Any, Optional
from dataclasses import dataclass

from config_logging import get_logger

__version__ = "1.0.0"

_logger = get_logger('checkers')


class IssueCategory(Enum):
    """Which family of problem an issue belongs to."""
    GRAMMAR = "grammar"
    FORMATTING = "formatting"
    TONE = "tone"
    CONTEXT = "context"


class IssueSeverity(Enum):
    """How much an issue should slow the send down."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def weight(self) -> int:
        return SEVERITY_WEIGHTS[self]


class IssueLocation(Enum):
    """Message field an issue points into."""
    SUBJECT = "subject"
    BODY = "body"


# Fixed presentation order for summaries
CATEGORY_ORDER = (
    IssueCategory.GRAMMAR,
    IssueCategory.FORMATTING,
    IssueCategory.TONE,
    IssueCategory.CONTEXT,
)

SEVERITY_WEIGHTS: Dict[IssueSeverity, int] = {
    IssueSeverity.LOW: 1,
    IssueSeverity.MEDIUM: 2,
    IssueSeverity.HIGH: 3,
}


@dataclass(frozen=True)
class ReviewIssue:
    """
    A single flagged finding.

    offset/length, when present, index into the raw (line-preserving) text
    of the field named by location.
    """
    category: IssueCategory
    severity: IssueSeverity
    message: str
    evidence: Optional[str] = None
    location: Optional[IssueLocation] = None
    offset: Optional[int] = None
    length: Optional[int] = None
    rule_id: str = ""

    def __post_init__(self):
        if self.offset is not None and self.offset < 0:
            raise ValueError(f"offset must be >= 0, got {self.offset}")
        if self.length is not None and self.length < 0:
            raise ValueError(f"length must be >= 0, got {self.length}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            'category': self.category.value,
            'severity': self.severity.value,
            'message': self.message,
        }
        if self.evidence is not None:
            result['evidence'] = self.evidence
        if self.location is not None:
            result['location'] = self.location.value
        if self.offset is not None:
            result['offset'] = self.offset
        if self.length is not None:
            result['length'] = self.length
        if self.rule_id:
            result['rule_id'] = self.rule_id
        return result


class BaseChecker:
    """
    Base class for all compose checkers.

    All checkers must implement:
    - check() method that returns List[ReviewIssue]
    - CHECKER_NAME, CHECKER_VERSION and CATEGORY class attributes
    """

    CHECKER_NAME = "Base"
    CHECKER_VERSION = "1.0.0"
    CATEGORY: IssueCategory = IssueCategory.GRAMMAR

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._errors: List[str] = []

    def check(self, *args, **kwargs) -> List[ReviewIssue]:
        """
        Run the check.

        Returns:
            List of ReviewIssue objects
        """
        raise NotImplementedError("Subclasses must implement check()")

    def safe_check(self, *args, **kwargs) -> List[ReviewIssue]:
        """Run check(); an unexpected failure is logged and yields no issues."""
        if not self.enabled:
            return []
        try:
            return self.check(*args, **kwargs)
        except Exception as e:
            self._errors.append(f"{self.CHECKER_NAME} error: {e}")
            _logger.exception(f"{self.CHECKER_NAME} check failed: {e}", checker=self.CHECKER_NAME)
            return []

    def create_issue(
        self,
        severity: IssueSeverity,
        message: str,
        evidence: Optional[str] = None,
        location: Optional[IssueLocation] = None,
        offset: Optional[int] = None,
        length: Optional[int] = None,
        rule_id: str = "",
        category: Optional[IssueCategory] = None,
    ) -> ReviewIssue:
        """
        Create an issue tagged with this checker's category.

        Args:
            severity: Issue severity
            message: Human-readable issue description
            evidence: Text that triggered the issue
            location: Field the issue was found in
            offset: Character offset into the raw field text
            length: Length of the flagged span
            rule_id: Stable rule identifier
            category: Override for checkers that emit several categories
        """
        return ReviewIssue(
            category=category or self.CATEGORY,
            severity=severity,
            message=message,
            evidence=evidence,
            location=location,
            offset=offset,
            length=length,
            rule_id=rule_id,
        )

    def get_errors(self) -> List[str]:
        """Get accumulated errors."""
        return self._errors.copy()
