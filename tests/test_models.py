from kmd_parser.models import (
    Emphasis,
    Heading,
    Link,
    Newline,
    Paragraph,
    ScanResult,
    Text,
    TokenizerState,
    TokenType,
)


def test_token_type_members():
    assert list(TokenType) == [TokenType.BLOCK, TokenType.INLINE]


def test_block_tokens():
    for token in (Heading(1, "Title"), Paragraph(), Newline()):
        assert token.token_type is TokenType.BLOCK


def test_inline_tokens():
    for token in (Text("x"), Emphasis(1), Link("label", "https://example.com")):
        assert token.token_type is TokenType.INLINE


def test_tokenizer_state_defaults():
    state = TokenizerState()

    assert state.inline is False
    assert state.depth == 0
    assert state.current_line == ""
    assert state.tokens == []
    assert state.current_heading_size is None
    assert state.should_start_new_paragraph is True
    assert state.failed_openers == set()


def test_tokenizer_states_do_not_share_tokens():
    first = TokenizerState()
    second = TokenizerState(inline=True)
    first.tokens.append(Text("x"))

    assert second.tokens == []


def test_to_dict_nests_children():
    token = Paragraph([Text("a"), Emphasis(2, [Text("b")]), Newline()])

    assert token.to_dict() == {
        "type": "paragraph",
        "children": [
            {"type": "text", "content": "a"},
            {"type": "emphasis", "strength": 2, "children": [{"type": "text", "content": "b"}]},
            {"type": "newline"},
        ],
    }


def test_scan_result_fields():
    result = ScanResult(tokens=[Text("x")], stopped_by_predicate=True)

    assert result.tokens == [Text("x")]
    assert result.stopped_by_predicate is True
