"""Data models for kmd-parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Union


class TokenType(Enum):
    """Classification of a token for paragraph grouping.

    Attributes:
        BLOCK: Headings, paragraphs and hard line breaks.
        INLINE: Text runs, emphasis and links.
    """

    BLOCK = auto()
    INLINE = auto()


@dataclass
class Text:
    """Run of literal inline content. Never contains a newline."""

    content: str

    @property
    def token_type(self) -> TokenType:
        return TokenType.INLINE

    def to_dict(self) -> dict:
        return {"type": "text", "content": self.content}


@dataclass
class Newline:
    """Hard line break inside a paragraph."""

    @property
    def token_type(self) -> TokenType:
        return TokenType.BLOCK

    def to_dict(self) -> dict:
        return {"type": "newline"}


@dataclass
class Heading:
    """Heading line.

    Attributes:
        level: Number of consecutive heading markers that introduced the line.
        text: Remainder of the line, trimmed.
    """

    level: int
    text: str

    @property
    def token_type(self) -> TokenType:
        return TokenType.BLOCK

    def to_dict(self) -> dict:
        return {"type": "heading", "level": self.level, "text": self.text}


@dataclass
class Paragraph:
    """Block grouping of inline tokens (plus hard line breaks)."""

    children: list[Token] = field(default_factory=list)

    @property
    def token_type(self) -> TokenType:
        return TokenType.BLOCK

    def to_dict(self) -> dict:
        return {"type": "paragraph", "children": [child.to_dict() for child in self.children]}


@dataclass
class Emphasis:
    """Emphasis run.

    Attributes:
        strength: Number of marker characters collapsed into this run; bold
            is strength 2.
        children: Inline tokens enclosed by the markers.
    """

    strength: int
    children: list[Token] = field(default_factory=list)

    @property
    def token_type(self) -> TokenType:
        return TokenType.INLINE

    def to_dict(self) -> dict:
        return {
            "type": "emphasis",
            "strength": self.strength,
            "children": [child.to_dict() for child in self.children],
        }


@dataclass
class Link:
    """Inline link. Reserved; no construct produces it yet."""

    label: str
    url: str

    @property
    def token_type(self) -> TokenType:
        return TokenType.INLINE

    def to_dict(self) -> dict:
        return {"type": "link", "label": self.label, "url": self.url}


Token = Union[Text, Newline, Heading, Paragraph, Emphasis, Link]


@dataclass
class TokenizerState:
    """Mutable accumulator owned by a single scan.

    Attributes:
        inline: True for nested (emphasis) scans, which never cross a newline
            and never open blocks.
        depth: Number of enclosing emphasis scans.
        current_line: Text collected since the last token boundary.
        tokens: Tokens produced so far, in document order.
        current_heading_size: Heading markers counted at the start of the
            line, or None when no heading run is in progress.
        should_start_new_paragraph: Forces the next paragraph append to open a
            fresh `Paragraph`.
        failed_openers: Positions of emphasis markers whose run never closed.
            Shared by every scan of one document.
    """

    inline: bool = False
    depth: int = 0
    current_line: str = ""
    tokens: list[Token] = field(default_factory=list)
    current_heading_size: int | None = None
    should_start_new_paragraph: bool = True
    failed_openers: set[int] = field(default_factory=set)


@dataclass
class ScanResult:
    """Outcome of one scan.

    Attributes:
        tokens: Tokens collected by the scan.
        stopped_by_predicate: True when the caller's stop predicate ended the
            scan, False when the input (or the inline line) ran out.
    """

    tokens: list[Token]
    stopped_by_predicate: bool
