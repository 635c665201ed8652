"""Human-readable views of a token sequence."""

from __future__ import annotations

import json

from .models import Emphasis, Heading, Link, Newline, Paragraph, Text, Token


def _describe(token: Token) -> str:
    if isinstance(token, Text):
        return f"Text({token.content!r})"
    if isinstance(token, Newline):
        return "Newline"
    if isinstance(token, Heading):
        return f"Heading(level={token.level}, text={token.text!r})"
    if isinstance(token, Paragraph):
        return "Paragraph"
    if isinstance(token, Emphasis):
        return f"Emphasis(strength={token.strength})"
    if isinstance(token, Link):
        return f"Link(label={token.label!r}, url={token.url!r})"
    raise TypeError(f"Unsupported token: {token!r}")


def format_tree(tokens: list[Token], indent_chars: str = "  ") -> list[str]:
    """Render tokens as an indented tree, one line per token.

    Args:
        tokens: Top-level tokens, as returned by `tokenize`.
        indent_chars: Characters added per nesting level.

    Returns:
        list[str]: Lines of the tree, each ending with a newline.

    Examples:
        format_tree(tokenize("*hi*"))
        # ["Paragraph\\n", "  Emphasis(strength=1)\\n", "    Text('hi')\\n"]
    """
    lines: list[str] = []
    stack = [(token, 0) for token in reversed(tokens)]
    while stack:
        token, level = stack.pop()
        lines.append(f"{indent_chars * level}{_describe(token)}\n")
        if isinstance(token, (Paragraph, Emphasis)):
            stack.extend((child, level + 1) for child in reversed(token.children))
    return lines


def tokens_to_json(tokens: list[Token]) -> str:
    return json.dumps([token.to_dict() for token in tokens], indent=2, ensure_ascii=False)
