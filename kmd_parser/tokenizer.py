"""Single-pass tokenizer turning markup text into block and inline tokens."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from .config import ConfigError, TokenizerConfig, validate_config
from .constants import DEFAULT_CONFIG, NEWLINE, SPACE
from .cursor import Cursor
from .exceptions import InputError
from .filesystem import collect_file_stat, enforce_file_size, get_max_file_size, read_document
from .models import (
    Emphasis,
    Heading,
    Newline,
    Paragraph,
    ScanResult,
    Text,
    Token,
    TokenizerState,
    TokenType,
)

StopPredicate = Callable[[str, TokenizerState], bool]


def _never_stop(character: str, state: TokenizerState) -> bool:
    return False


def _is_newline(character: str) -> bool:
    return character == NEWLINE


def resolve_paragraph(state: TokenizerState) -> list[Token]:
    """Return the children of the paragraph that inline content goes into.

    Opens a new `Paragraph` when the state requests one or when the last
    top-level token is not a paragraph; otherwise reuses the last one.

    Args:
        state: Tokenizer state whose top-level token list is updated.

    Returns:
        list[Token]: Mutable child list of the last top-level paragraph.

    Examples:
        state = TokenizerState()
        resolve_paragraph(state).append(Text("hello"))
    """
    last = state.tokens[-1] if state.tokens else None
    if state.should_start_new_paragraph or not isinstance(last, Paragraph):
        last = Paragraph()
        state.tokens.append(last)
    state.should_start_new_paragraph = False
    return last.children


def _inline_target(state: TokenizerState) -> list[Token]:
    if state.inline:
        return state.tokens
    return resolve_paragraph(state)


def _flush_line(state: TokenizerState, strip_trailing: bool = False) -> None:
    """Move pending text into the active collection as a `Text`.

    Blank text is dropped. Trailing whitespace is only stripped where a line
    ends; text flushed before an emphasis run or at the end of an inline run
    keeps its spaces.
    """
    text = state.current_line.rstrip() if strip_trailing else state.current_line
    state.current_line = ""
    if text.strip():
        _inline_target(state).append(Text(text))


def match_heading(cursor: Cursor, state: TokenizerState, config: TokenizerConfig) -> bool:
    """Check whether the current heading marker continues a heading run.

    A run can only start on an empty line and must be followed by another
    marker or by a space.

    Examples:
        cursor = Cursor("# Title")
        cursor.advance()
        match_heading(cursor, TokenizerState(), TokenizerConfig())  # True
    """
    if state.current_line:
        return False
    return cursor.peek() in (config.heading_marker, SPACE)


def consume_heading(cursor: Cursor, state: TokenizerState, config: TokenizerConfig) -> None:
    """Count one heading marker and emit the heading once the run ends.

    When the lookahead is a space, the rest of the line becomes the heading
    text. A blank heading text is not a heading: the counted markers are put
    back as literal text.
    """
    state.current_heading_size = (state.current_heading_size or 0) + 1
    if not cursor.next_is(SPACE):
        return

    cursor.advance()
    text = cursor.collect_until(_is_newline).strip()
    if text:
        state.tokens.append(Heading(state.current_heading_size, text))
    else:
        state.current_line = config.heading_marker * state.current_heading_size
    state.current_heading_size = None


def abandon_heading(state: TokenizerState, config: TokenizerConfig) -> None:
    """Restore the markers of an interrupted heading run as literal text."""
    if state.current_heading_size is None:
        return
    state.current_line = config.heading_marker * state.current_heading_size + state.current_line
    state.current_heading_size = None


def _ends_with_content(line: str) -> bool:
    return bool(line) and not line[-1].isspace()


def closes_emphasis(marker: str) -> StopPredicate:
    """Build the stop predicate that recognizes a closing emphasis marker.

    A closer must directly follow a completed sub-token or non-space text, so
    ``**`` and ``* text *`` never close a run.
    """

    def predicate(character: str, state: TokenizerState) -> bool:
        if character != marker:
            return False
        return bool(state.tokens) or _ends_with_content(state.current_line)

    return predicate


def match_emphasis(cursor: Cursor, state: TokenizerState, config: TokenizerConfig) -> bool:
    """Check whether the current emphasis marker may open a run.

    Markers followed by a space never open a run, and neither do markers past
    the configured nesting depth or markers whose run already failed to close
    earlier in the same document.
    """
    if state.depth >= config.max_emphasis_depth:
        return False
    if cursor.index in state.failed_openers:
        return False
    return not cursor.next_is(SPACE)


def consume_emphasis(cursor: Cursor, state: TokenizerState, config: TokenizerConfig) -> None:
    """Try to read an emphasis run starting after the current marker.

    Scans a clone of the cursor in inline mode up to a closing marker. On
    success the clone's position is adopted and the run is appended; a run
    wrapping exactly one emphasis token is collapsed into it with one more
    unit of strength. Without a closer the marker is kept as literal text, the
    cursor does not move, and the marker position is remembered so no later
    scan retries it.
    """
    speculative = cursor.clone()
    result = scan(
        speculative,
        inline=True,
        stop_predicate=closes_emphasis(config.emphasis_marker),
        config=config,
        depth=state.depth + 1,
        failed_openers=state.failed_openers,
    )

    if not result.stopped_by_predicate:
        state.failed_openers.add(cursor.index)
        state.current_line += config.emphasis_marker
        return

    cursor.set_index(speculative.index)

    if len(result.tokens) == 1 and isinstance(result.tokens[0], Emphasis):
        inner = result.tokens[0]
        emphasis = Emphasis(inner.strength + 1, inner.children)
    else:
        emphasis = Emphasis(1, result.tokens)

    _flush_line(state)
    _inline_target(state).append(emphasis)


def _end_line(cursor: Cursor, state: TokenizerState, config: TokenizerConfig) -> None:
    """Handle a newline outside inline mode.

    Flushes the pending line into the active paragraph, adds a hard break
    when the line ended in enough spaces and no blank line follows, decides
    whether the next content opens a new paragraph, and swallows the whole
    run of newlines.
    """
    pending: Text | None = None
    hard_break = False

    if state.current_line:
        hard_break = state.current_line.endswith(SPACE * config.hard_break_spaces)
        text = state.current_line.rstrip()
        if text:
            pending = Text(text)
        state.current_line = ""

    blank_line_follows = cursor.next_is(NEWLINE)

    if pending is not None or hard_break:
        children = resolve_paragraph(state)
        if pending is not None:
            children.append(pending)
        if hard_break and not blank_line_follows:
            children.append(Newline())

    last = state.tokens[-1] if state.tokens else None
    if isinstance(last, Paragraph) and not blank_line_follows:
        start_new_paragraph = False
    elif last is not None and last.token_type is TokenType.BLOCK:
        start_new_paragraph = True
    else:
        start_new_paragraph = blank_line_follows

    cursor.skip_while(_is_newline)

    if start_new_paragraph:
        state.should_start_new_paragraph = True


def scan(
    cursor: Cursor,
    inline: bool = False,
    stop_predicate: StopPredicate | None = None,
    config: TokenizerConfig | None = None,
    depth: int = 0,
    failed_openers: set[int] | None = None,
) -> ScanResult:
    """Run the tokenizer loop over `cursor` until input ends or a stop fires.

    Inline scans stop at the first newline and never open headings or
    paragraphs. `stop_predicate` is evaluated on every character before it is
    dispatched; the character that triggers it is consumed but produces no
    token.

    Args:
        cursor: Cursor to advance. Speculative callers pass a clone.
        inline: Whether this is a nested inline scan.
        stop_predicate: Pure function of the character and the scan state.
        config: Tokenizer configuration; the default configuration when omitted.
        depth: Number of enclosing emphasis scans.
        failed_openers: Marker positions whose emphasis run is known not to
            close. Nested scans share the set of their caller.

    Returns:
        ScanResult: Collected tokens and whether `stop_predicate` ended the scan.
    """
    config = config or DEFAULT_CONFIG
    stop_predicate = stop_predicate or _never_stop
    state = TokenizerState(inline=inline, depth=depth)
    if failed_openers is not None:
        state.failed_openers = failed_openers
    stopped_by_predicate = False

    while (character := cursor.advance()) is not None:
        stopped_by_predicate = stop_predicate(character, state)
        if stopped_by_predicate or (inline and character == NEWLINE):
            break

        if (
            not inline
            and character == config.heading_marker
            and match_heading(cursor, state, config)
        ):
            consume_heading(cursor, state, config)
            continue

        abandon_heading(state, config)

        if not inline and character == NEWLINE:
            _end_line(cursor, state, config)
        elif character == config.emphasis_marker and match_emphasis(cursor, state, config):
            consume_emphasis(cursor, state, config)
        else:
            state.current_line += character

    abandon_heading(state, config)
    _flush_line(state, strip_trailing=not inline)

    return ScanResult(tokens=state.tokens, stopped_by_predicate=stopped_by_predicate)


def tokenize(content: str, config: TokenizerConfig | None = None) -> list[Token]:
    """Tokenize a markup document into top-level block tokens.

    Never fails: malformed markup degrades to literal text. CRLF and lone CR
    line endings are read as newlines.

    Args:
        content: The whole document.
        config: Configuration for markers and limits. Defaults to a new
            `TokenizerConfig` when omitted.

    Returns:
        list[Token]: Headings and paragraphs in document order.

    Raises:
        ConfigError: If the configuration fails validation.

    Examples:
        tokenize("*hi*")  # [Paragraph([Emphasis(1, [Text("hi")])])]
    """
    config = config or TokenizerConfig()
    validate_config(config)
    content = content.replace("\r\n", NEWLINE).replace("\r", NEWLINE)
    return scan(Cursor(content), config=config).tokens


class TokenizeFileError(Exception):
    """Raised when tokenizing a document file fails."""


def tokenize_file(filepath: Path, config: TokenizerConfig | None = None) -> list[Token]:
    """Read a document file and tokenize it.

    Args:
        filepath: Path to the document.
        config: Configuration controlling tokenizing and the size limit;
            defaults to a new `TokenizerConfig` when omitted.

    Returns:
        list[Token]: Top-level tokens of the document.

    Raises:
        TokenizeFileError: If configuration is invalid, the file is too large,
            or it cannot be read or decoded.

    Examples:
        tokens = tokenize_file(Path("notes.md"))
    """
    config = config or TokenizerConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise TokenizeFileError(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise TokenizeFileError(str(error)) from error

    try:
        stat_result = collect_file_stat(filepath)
        enforce_file_size(stat_result, max_file_size)
        content = read_document(filepath)
    except InputError as error:
        raise TokenizeFileError(f"{filepath}: {error}") from error
    except IOError as error:
        raise TokenizeFileError(str(error)) from error

    return tokenize(content, config)
