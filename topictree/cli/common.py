"""
Shared Click options and helpers for CLI commands.
"""
import click

from topictree.core.config import get_max_terms_per_label, get_max_vocab
from topictree.core.models import ChatNode
from topictree.core.parser import parse_transcript


def transcript_argument(f):
    """Transcript file argument; ``-`` reads from stdin."""
    return click.argument("transcript", type=click.File("r", encoding="utf-8"))(f)


def format_option(f):
    return click.option(
        "--format",
        "output_format",
        type=click.Choice(["text", "json"]),
        default="text",
        show_default=True,
        help="Output format",
    )(f)


def clustering_options(f):
    """--k / --max-vocab / --max-terms, with environment-backed defaults."""
    f = click.option(
        "--max-terms",
        type=click.IntRange(min=0),
        default=get_max_terms_per_label,
        show_default="4",
        help="Terms per topic label (TOPICTREE_MAX_TERMS)",
    )(f)
    f = click.option(
        "--max-vocab",
        type=click.IntRange(min=0),
        default=get_max_vocab,
        show_default="250",
        help="Vocabulary size cap (TOPICTREE_MAX_VOCAB)",
    )(f)
    f = click.option(
        "--k",
        "k",
        type=int,
        default=None,
        help="Number of topics (clamped to 2..min(10, messages))",
    )(f)
    return f


def load_tree(transcript) -> ChatNode:
    """Read and parse a transcript file, failing with a usage error when blank."""
    root = parse_transcript(transcript.read())
    if root is None:
        raise click.UsageError("Transcript is empty; nothing to cluster.")
    return root
