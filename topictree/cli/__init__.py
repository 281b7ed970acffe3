"""
Click-based command line interface.

Usage: ``python -m topictree <command>`` or the ``topictree`` console script.
"""
import click

from topictree import __version__
from topictree.cli.commands.serve import serve
from topictree.cli.commands.thread import jump, thread
from topictree.cli.commands.topics import topics
from topictree.core.config import configure_logging


@click.group()
@click.version_option(__version__, prog_name="topictree")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """Cluster branching chat transcripts into navigable topics."""
    configure_logging(verbose=verbose)


cli.add_command(topics)
cli.add_command(thread)
cli.add_command(jump)
cli.add_command(serve)


def main(argv=None):
    return cli.main(args=argv, prog_name="topictree")
