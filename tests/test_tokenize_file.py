from __future__ import annotations

from pathlib import Path

import pytest

from kmd_parser.config import TokenizerConfig
from kmd_parser.models import Emphasis, Heading, Paragraph, Text
from kmd_parser.tokenizer import TokenizeFileError, tokenize_file


def _write(tmp_path: Path, content: str) -> Path:
    target = tmp_path / "doc.md"
    target.write_text(content, encoding="utf-8")
    return target


def test_tokenize_file_reads_document(tmp_path: Path):
    target = _write(tmp_path, "# Title\n\nSome **bold** text\n")

    assert tokenize_file(target) == [
        Heading(1, "Title"),
        Paragraph([Text("Some "), Emphasis(2, [Text("bold")]), Text(" text")]),
    ]


def test_tokenize_file_uses_config(tmp_path: Path):
    target = _write(tmp_path, "_x_\n")

    tokens = tokenize_file(target, TokenizerConfig(emphasis_marker="_"))

    assert tokens == [Paragraph([Emphasis(1, [Text("x")])])]


def test_tokenize_file_rejects_large_files(tmp_path: Path):
    target = _write(tmp_path, "x" * 32)

    with pytest.raises(TokenizeFileError, match="exceeds the maximum allowed size"):
        tokenize_file(target, TokenizerConfig(max_file_size=16))


def test_tokenize_file_honours_environment_limit(tmp_path: Path, monkeypatch):
    target = _write(tmp_path, "x" * 32)
    monkeypatch.setenv("KMD_PARSER_MAX_FILE_SIZE", "8")

    with pytest.raises(TokenizeFileError):
        tokenize_file(target)


def test_tokenize_file_rejects_bad_environment_limit(tmp_path: Path, monkeypatch):
    target = _write(tmp_path, "text")
    monkeypatch.setenv("KMD_PARSER_MAX_FILE_SIZE", "lots")

    with pytest.raises(TokenizeFileError, match="KMD_PARSER_MAX_FILE_SIZE"):
        tokenize_file(target)


def test_tokenize_file_rejects_invalid_utf8(tmp_path: Path):
    target = tmp_path / "broken.md"
    target.write_bytes(b"abc \xff\xfe")

    with pytest.raises(TokenizeFileError, match="Invalid UTF-8"):
        tokenize_file(target)


def test_tokenize_file_rejects_missing_file(tmp_path: Path):
    with pytest.raises(TokenizeFileError):
        tokenize_file(tmp_path / "missing.md")


def test_tokenize_file_rejects_invalid_config(tmp_path: Path):
    target = _write(tmp_path, "text")

    with pytest.raises(TokenizeFileError):
        tokenize_file(target, TokenizerConfig(heading_marker="##"))
