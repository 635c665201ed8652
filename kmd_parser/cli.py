"""
Tokenizes a markup document and prints its token tree.
Without a file argument, the built-in sample document is tokenized.
"""

from __future__ import annotations

from pathlib import Path

import click
from .config import ConfigError, build_config
from .constants import SAMPLE_DOCUMENT
from .filesystem import normalize_filepath
from .printer import format_tree, tokens_to_json
from .tokenizer import TokenizeFileError, tokenize, tokenize_file

__all__ = ["cli"]


@click.command()
@click.version_option(package_name="kmd-parser")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["tree", "json"]),
    default="tree",
    show_default=True,
    help="Output format",
)
@click.option("--heading-marker", help="Heading marker character")
@click.option("--emphasis-marker", help="Emphasis marker character")
@click.option("--max-emphasis-depth", type=int, help="Maximum emphasis nesting depth")
@click.argument("filepath", required=False, type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str | None,
    output_format: str = "tree",
    heading_marker: str | None = None,
    emphasis_marker: str | None = None,
    max_emphasis_depth: int | None = None,
):
    """
    Entry point for inspecting the tokens of a markup document.

    Args:
        filepath: Path to the document to tokenize. The sample document is
            used when omitted.
        output_format: `tree` for an indented listing or `json`.
        heading_marker: Override for the heading marker.
        emphasis_marker: Override for the emphasis marker.
        max_emphasis_depth: Override for the emphasis nesting limit.

    Raises:
        click.BadParameter: If the path or the configuration is invalid.
        click.ClickException: If the document cannot be read or is too large.

    Examples:
        kmd-tokenize notes.md --format json
    """
    base_dir = Path.cwd().resolve()
    document_path = None
    if filepath is not None:
        try:
            document_path = normalize_filepath(filepath, base_dir)
        except ValueError as error:
            raise click.BadParameter(str(error)) from error

    try:
        config = build_config(
            document_path.parent if document_path is not None else base_dir,
            heading_marker=heading_marker,
            emphasis_marker=emphasis_marker,
            max_emphasis_depth=max_emphasis_depth,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    if document_path is None:
        tokens = tokenize(SAMPLE_DOCUMENT, config)
    else:
        try:
            tokens = tokenize_file(document_path, config)
        except TokenizeFileError as error:
            raise click.ClickException(str(error)) from error

    if not tokens:
        click.echo("Warning: the document produced no tokens", err=True)

    if output_format == "json":
        click.echo(tokens_to_json(tokens))
    else:
        click.echo("".join(format_tree(tokens)), nl=False)


if __name__ == "__main__":
    cli()
