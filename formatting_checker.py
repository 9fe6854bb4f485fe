#!/usr/bin/env python3
"""
Formatting Checker v1.0.0
=========================
Structural checks on the message body: mixed tab/space indentation, large
blank-line gaps, mixed list styles, trailing whitespace, and uneven
nesting depth.

Works on the raw (line-preserving) body text plus the block sequence from
compose_context. Every rule fires at most once.
"""

import re
from typing import List, Sequence

from base_checker import BaseChecker, IssueCategory, IssueSeverity, IssueLocation, ReviewIssue
from compose_context import LIST_KINDS, BodyBlock

__version__ = "1.0.0"

BLANK_RUN_THRESHOLD = 4
INDENT_SPREAD_THRESHOLD = 2

_SPACE_INDENT = re.compile(r"^ {2,}\S")
_TRAILING_WS = re.compile(r"[ \t]+$")
_DASH_LIST_LINE = re.compile(r"^\s*[-*]\s+\S")
_NUMBER_LIST_LINE = re.compile(r"^\s*\d+[.)]\s+\S")


class FormattingChecker(BaseChecker):
    """Checks body layout for formatting slips."""

    CHECKER_NAME = "Formatting"
    CHECKER_VERSION = "1.0.0"
    CATEGORY = IssueCategory.FORMATTING

    def check(self, snapshot, settings=None) -> List[ReviewIssue]:
        return self.analyze(snapshot.body_raw_text, snapshot.body_blocks)

    def analyze(self, raw_text: str, blocks: Sequence[BodyBlock] = ()) -> List[ReviewIssue]:
        """
        Analyze body layout.

        Args:
            raw_text: Line-preserving body text
            blocks: Block sequence for the same body

        Returns:
            List of formatting-category ReviewIssue objects located at the body
        """
        raw_text = raw_text or ""
        lines = raw_text.split("\n")
        issues: List[ReviewIssue] = []

        has_tab_indent = any(line.startswith("\t") for line in lines)
        has_space_indent = any(_SPACE_INDENT.match(line) for line in lines)
        if has_tab_indent and has_space_indent:
            issues.append(self._issue(
                IssueSeverity.MEDIUM, "Indentation mixes tabs and spaces.", rule_id='FM001'))

        longest_gap = self._longest_blank_run(lines)
        if longest_gap >= BLANK_RUN_THRESHOLD:
            issues.append(self._issue(
                IssueSeverity.LOW, f"Large gap of {longest_gap} blank lines.", rule_id='FM002'))

        if self._has_mixed_lists(lines, blocks):
            issues.append(self._issue(
                IssueSeverity.LOW, "Bullet and numbered lists are mixed.", rule_id='FM003'))

        trailing = self._first_trailing_whitespace(lines)
        if trailing is not None:
            line, offset = trailing
            issues.append(self._issue(
                IssueSeverity.LOW, "Line ends with trailing whitespace.",
                evidence=line, offset=offset, length=len(line), rule_id='FM004'))

        depths = [block.indent_level for block in blocks if not block.is_blank]
        if depths and max(depths) - min(depths) >= INDENT_SPREAD_THRESHOLD:
            issues.append(self._issue(
                IssueSeverity.LOW, "Indentation depth is inconsistent across the message.",
                rule_id='FM005'))

        return issues

    def _issue(self, severity: IssueSeverity, message: str, **kwargs) -> ReviewIssue:
        return self.create_issue(severity, message, location=IssueLocation.BODY, **kwargs)

    @staticmethod
    def _longest_blank_run(lines: List[str]) -> int:
        longest = current = 0
        for line in lines:
            if line.strip():
                current = 0
            else:
                current += 1
                longest = max(longest, current)
        return longest

    @staticmethod
    def _has_mixed_lists(lines: List[str], blocks: Sequence[BodyBlock]) -> bool:
        if {block.kind for block in blocks if block.kind in LIST_KINDS} == set(LIST_KINDS):
            return True
        has_dash = any(_DASH_LIST_LINE.match(line) for line in lines)
        has_number = any(_NUMBER_LIST_LINE.match(line) for line in lines)
        return has_dash and has_number

    @staticmethod
    def _first_trailing_whitespace(lines: List[str]):
        """Return (line, offset) of the first non-blank line ending in spaces or tabs."""
        offset = 0
        for line in lines:
            if line.strip() and _TRAILING_WS.search(line):
                return line, offset
            offset += len(line) + 1
        return None
