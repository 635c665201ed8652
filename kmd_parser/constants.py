"""Constants used across the kmd-parser package."""

from __future__ import annotations

from .config import TokenizerConfig

DEFAULT_CONFIG = TokenizerConfig()

# Markup characters
NEWLINE = "\n"
SPACE = " "

# Limits
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size

MARKDOWN_EXTENSIONS = (".md", ".markdown", ".mdown", ".mkd", ".txt")

SAMPLE_DOCUMENT = """\
# This is some heading

Here is some text with a little bit of length **for testing**.

*Hello this is *some* nested emphasis*

*Italic**Bold*Italic**
"""
