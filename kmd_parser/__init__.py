"""
kmd-parser: tokenizer for a lightweight markup dialect.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    kmd-tokenize notes.md

Library Usage:
    from kmd_parser import tokenize, format_tree

    tokens = tokenize("# Title\\nSome *emphasis* here")
    print("".join(format_tree(tokens)), end="")
"""

from .config import ConfigError, TokenizerConfig
from .cursor import Cursor
from .exceptions import InputError, InputTooLargeError, InvalidEncodingError
from .models import (
    Emphasis,
    Heading,
    Link,
    Newline,
    Paragraph,
    ScanResult,
    Text,
    Token,
    TokenizerState,
    TokenType,
)
from .printer import format_tree, tokens_to_json
from .tokenizer import TokenizeFileError, scan, tokenize, tokenize_file

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "tokenize",
    "tokenize_file",
    "scan",
    "Cursor",
    # Data models
    "Token",
    "TokenType",
    "Text",
    "Newline",
    "Heading",
    "Paragraph",
    "Emphasis",
    "Link",
    "TokenizerState",
    "ScanResult",
    # Configuration
    "TokenizerConfig",
    # Utilities
    "format_tree",
    "tokens_to_json",
    # Exceptions
    "ConfigError",
    "InputError",
    "InputTooLargeError",
    "InvalidEncodingError",
    "TokenizeFileError",
    # Version
    "__version__",
]
