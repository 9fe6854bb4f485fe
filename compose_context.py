#!/usr/bin/env python3
"""
Compose Context Builder
=======================
Turns the body of an in-progress message into an ordered sequence of typed
blocks and packages it, with recipients, attachment state and subject, into
an immutable ComposeSnapshot.

Two body sources are supported:
- HTML markup from the host's editable body (parsed with BeautifulSoup)
- plain text, split line by line

Raw text keeps line structure (one line per block, blank blocks become empty
lines). Plain text is the raw text with every whitespace run collapsed.
"""

import re
import copy
from enum import Enum
from typing import List, Optional, Tuple, Iterable, Union
from dataclasses import dataclass, field

from bs4 import BeautifulSoup, NavigableString, Tag, Comment

__version__ = "1.0.0"


class BlockKind(Enum):
    """Structural role of a body block."""
    PARAGRAPH = "paragraph"
    BULLET_ITEM = "bullet-item"
    NUMBER_ITEM = "number-item"
    QUOTE = "quote"
    BLANK = "blank"


LIST_KINDS = (BlockKind.BULLET_ITEM, BlockKind.NUMBER_ITEM)


@dataclass(frozen=True)
class BodyBlock:
    """One structural unit of body content."""
    kind: BlockKind
    text: str = ""
    indent_level: int = 0
    origin_tag: str = ""

    @property
    def is_blank(self) -> bool:
        return self.kind is BlockKind.BLANK


@dataclass(frozen=True)
class ComposeSnapshot:
    """
    Read-only view of a message at the moment the user tried to send it.

    Degraded values are coerced rather than rejected: a missing or negative
    recipient count becomes 0 and missing strings become "".
    """
    recipient_count: int = 0
    has_attachment: bool = False
    subject_text: str = ""
    body_plain_text: str = ""
    body_raw_text: str = ""
    body_blocks: Tuple[BodyBlock, ...] = field(default_factory=tuple)

    def __post_init__(self):
        try:
            count = int(self.recipient_count)
        except (TypeError, ValueError):
            count = 0
        object.__setattr__(self, 'recipient_count', max(0, count))
        object.__setattr__(self, 'has_attachment', bool(self.has_attachment))
        object.__setattr__(self, 'subject_text', self.subject_text or "")
        object.__setattr__(self, 'body_plain_text', self.body_plain_text or "")
        object.__setattr__(self, 'body_raw_text', self.body_raw_text or "")
        object.__setattr__(self, 'body_blocks', tuple(self.body_blocks or ()))


# =============================================================================
# TEXT NORMALIZATION
# =============================================================================

def clean_raw_text(text: Optional[str]) -> str:
    """Normalize line endings and non-breaking spaces, keep everything else."""
    return (text or "").replace("\r\n", "\n").replace("\r", "\n").replace(" ", " ")


def normalize_block_text(text: Optional[str]) -> str:
    """Strip trailing whitespace from every line, then trim the whole text."""
    lines = clean_raw_text(text).split("\n")
    return "\n".join(re.sub(r"[ \t]+$", "", line) for line in lines).strip()


def collapse_whitespace(text: Optional[str]) -> str:
    """Collapse every whitespace run to one space and trim."""
    return re.sub(r"\s+", " ", text or "").strip()


def join_raw_text(blocks: Iterable[BodyBlock]) -> str:
    """Rebuild line-preserving text from blocks; blank blocks are empty lines."""
    return "\n".join("" if block.is_blank else block.text for block in blocks)


def trim_boundary_blanks(blocks: List[BodyBlock]) -> List[BodyBlock]:
    """Drop leading and trailing blank blocks."""
    start, end = 0, len(blocks)
    while start < end and blocks[start].is_blank:
        start += 1
    while end > start and blocks[end - 1].is_blank:
        end -= 1
    return blocks[start:end]


def parse_recipient_count(recipients: Union[str, Iterable[str], None]) -> int:
    """
    Count distinct recipients.

    Accepts either a raw address field ("a@x.com; b@y.com, c@z.com") or an
    iterable of addresses. Entries are compared case-insensitively.
    """
    if not recipients:
        return 0
    if isinstance(recipients, str):
        entries = re.split(r"[;,]", recipients)
    else:
        entries = list(recipients)
    return len({str(entry).strip().lower() for entry in entries if str(entry).strip()})


# =============================================================================
# BLOCK BUILDER
# =============================================================================

class BodyModelBuilder:
    """
    Builds BodyBlock sequences from HTML markup or plain text.

    Stateless; a single instance can be shared.
    """

    BLOCK_TAGS = frozenset({
        'article', 'blockquote', 'div', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6',
        'li', 'ol', 'p', 'pre', 'section', 'ul',
    })

    # Quoted reply history is not part of what the user is about to send
    QUOTED_REPLY_SELECTORS = (
        "div.gmail_quote",
        "blockquote[type='cite']",
        ".gmail_quote_container",
    )

    INDENT_WIDTH = 2

    _QUOTE_LINE = re.compile(r"^>\s?(.*)$")
    _BULLET_LINE = re.compile(r"^[-*•]\s+(.*)$")
    _NUMBER_LINE = re.compile(r"^\d+[.)]\s+(.*)$")

    # -------------------------------------------------------------------------
    # HTML
    # -------------------------------------------------------------------------

    def from_html(self, html: Optional[str]) -> List[BodyBlock]:
        """Parse body markup into blocks."""
        soup = self.parse_html(html)
        return self.blocks_from_soup(soup)

    def parse_html(self, html: Optional[str]) -> BeautifulSoup:
        """Parse markup and remove quoted reply containers."""
        soup = BeautifulSoup(html or "", 'html.parser')
        for element in soup.select(", ".join(self.QUOTED_REPLY_SELECTORS)):
            element.decompose()
        return soup

    def blocks_from_soup(self, soup: BeautifulSoup) -> List[BodyBlock]:
        blocks: List[BodyBlock] = []
        for child in list(soup.children):
            self._parse_node(child, blocks, 0, False)

        if not blocks:
            text = normalize_block_text(soup.get_text())
            if text:
                blocks.append(BodyBlock(BlockKind.PARAGRAPH, text, 0, 'body'))

        return trim_boundary_blanks(blocks)

    def _push(self, blocks: List[BodyBlock], kind: BlockKind, text: str,
              indent_level: int, origin_tag: str):
        if kind is not BlockKind.BLANK and not text:
            return
        if kind is BlockKind.BLANK and blocks and blocks[-1].is_blank:
            return
        blocks.append(BodyBlock(kind, text, indent_level, origin_tag))

    def _parse_node(self, node, blocks: List[BodyBlock], indent_level: int, in_quote: bool):
        text_kind = BlockKind.QUOTE if in_quote else BlockKind.PARAGRAPH

        if isinstance(node, Comment):
            return

        if isinstance(node, NavigableString):
            self._push(blocks, text_kind, normalize_block_text(str(node)), indent_level, '#text')
            return

        if not isinstance(node, Tag):
            return

        tag = node.name.lower()

        if tag == 'br':
            self._push(blocks, BlockKind.BLANK, "", indent_level, 'br')
            return

        if tag == 'blockquote':
            before = len(blocks)
            for child in list(node.children):
                self._parse_node(child, blocks, indent_level + 1, True)
            if len(blocks) == before:
                quote_text = normalize_block_text(node.get_text())
                self._push(blocks, BlockKind.QUOTE, quote_text, indent_level + 1, 'blockquote')
            return

        if tag in ('ul', 'ol'):
            self._parse_list(node, blocks, indent_level, in_quote)
            return

        if tag == 'li':
            parent = node.parent.name.lower() if isinstance(node.parent, Tag) else ''
            kind = BlockKind.NUMBER_ITEM if parent == 'ol' else BlockKind.BULLET_ITEM
            self._push(blocks, BlockKind.QUOTE if in_quote else kind,
                       normalize_block_text(node.get_text()), indent_level, 'li')
            return

        if tag in self.BLOCK_TAGS:
            has_structure = any(
                isinstance(child, Tag) and (child.name.lower() in self.BLOCK_TAGS or child.name.lower() == 'br')
                for child in node.children
            )
            if has_structure:
                for child in list(node.children):
                    self._parse_node(child, blocks, indent_level, in_quote)
                return

            text = normalize_block_text(node.get_text())
            if text:
                self._push(blocks, text_kind, text, indent_level, tag)
            elif tag in ('div', 'p'):
                self._push(blocks, BlockKind.BLANK, "", indent_level, tag)
            return

        # Inline element at block level (span, b, a, ...)
        self._push(blocks, text_kind, normalize_block_text(node.get_text()), indent_level, tag)

    def _parse_list(self, list_node: Tag, blocks: List[BodyBlock], indent_level: int, in_quote: bool):
        item_kind = BlockKind.NUMBER_ITEM if list_node.name.lower() == 'ol' else BlockKind.BULLET_ITEM

        for item in list_node.find_all('li', recursive=False):
            own = copy.copy(item)
            for nested in own.find_all(['ul', 'ol'], recursive=False):
                nested.decompose()
            self._push(blocks, BlockKind.QUOTE if in_quote else item_kind,
                       normalize_block_text(own.get_text()), indent_level, 'li')

            for nested in item.find_all(['ul', 'ol'], recursive=False):
                self._parse_list(nested, blocks, indent_level + 1, in_quote)

    # -------------------------------------------------------------------------
    # Plain text
    # -------------------------------------------------------------------------

    def from_text(self, text: Optional[str]) -> List[BodyBlock]:
        """Split a plain-text body into blocks, one per line."""
        blocks: List[BodyBlock] = []

        for line in clean_raw_text(text).split("\n"):
            if not line.strip():
                self._push(blocks, BlockKind.BLANK, "", 0, 'line')
                continue

            expanded = line.expandtabs(self.INDENT_WIDTH)
            content = expanded.lstrip(" ")
            indent_level = (len(expanded) - len(content)) // self.INDENT_WIDTH
            content = content.rstrip()

            kind = BlockKind.PARAGRAPH
            for pattern, candidate in ((self._QUOTE_LINE, BlockKind.QUOTE),
                                       (self._BULLET_LINE, BlockKind.BULLET_ITEM),
                                       (self._NUMBER_LINE, BlockKind.NUMBER_ITEM)):
                match = pattern.match(content)
                if match:
                    kind, content = candidate, match.group(1).strip()
                    break

            if kind is BlockKind.QUOTE and not content:
                continue
            self._push(blocks, kind, content, indent_level, 'line')

        return trim_boundary_blanks(blocks)


_builder = BodyModelBuilder()


def build_snapshot(
    recipient_count: Union[int, str, Iterable[str], None] = 0,
    has_attachment: bool = False,
    subject: Optional[str] = "",
    body_html: Optional[str] = None,
    body_text: Optional[str] = None,
) -> ComposeSnapshot:
    """
    Build a ComposeSnapshot for one send attempt.

    Args:
        recipient_count: A count, an address field string, or a list of addresses
        has_attachment: Whether the draft carries an attachment
        subject: Subject line
        body_html: Body markup (takes precedence over body_text)
        body_text: Plain-text body

    Returns:
        ComposeSnapshot
    """
    if not isinstance(recipient_count, int) or isinstance(recipient_count, bool):
        recipient_count = parse_recipient_count(recipient_count)

    if body_html is not None:
        soup = _builder.parse_html(body_html)
        blocks = _builder.blocks_from_soup(soup)
        # Walked blocks keep the line breaks a flat text extraction would lose
        raw_text = join_raw_text(blocks) if blocks else clean_raw_text(soup.get_text())
    else:
        blocks = _builder.from_text(body_text)
        raw_text = clean_raw_text(body_text)

    return ComposeSnapshot(
        recipient_count=recipient_count,
        has_attachment=has_attachment,
        subject_text=collapse_whitespace(subject),
        body_plain_text=collapse_whitespace(raw_text),
        body_raw_text=raw_text,
        body_blocks=tuple(blocks),
    )
