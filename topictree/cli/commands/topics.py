"""
Topic clustering CLI command.
"""
import json
import logging

import click

from topictree.cli.common import clustering_options, format_option, load_tree, transcript_argument
from topictree.core.models import ClusterOptions
from topictree.services.topic_navigator import TopicNavigator

logger = logging.getLogger(__name__)

COLLAPSED_ITEMS = 5


@click.command()
@transcript_argument
@clustering_options
@format_option
@click.option("--all", "show_all", is_flag=True, help="List every message of each topic")
def topics(transcript, k, max_vocab, max_terms, output_format, show_all):
    """Cluster the messages of TRANSCRIPT into labeled topics."""
    root = load_tree(transcript)
    navigator = TopicNavigator(root)
    options = ClusterOptions(max_vocab=max_vocab, max_terms_per_label=max_terms)
    views = navigator.topic_views(k=k, options=options)
    logger.info("Found %d topics in %d messages", len(views), len(navigator.nodes))

    if output_format == "json":
        payload = {
            "total_messages": len(navigator.nodes),
            "clusters": [v.to_dict() for v in views],
        }
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    if not views:
        click.secho("No messages to cluster yet.", fg="yellow")
        return

    click.echo(f"{len(views)} topics across {len(navigator.nodes)} messages\n")
    for view in views:
        click.secho(f"{view.cluster.label}", fg="green", bold=True, nl=False)
        click.echo(f"  ({view.size} msgs) [{view.cluster.id}]")
        shown = view.entries if show_all else view.entries[:COLLAPSED_ITEMS]
        for entry in shown:
            click.echo(f"  - {entry.node.role.value:<9} {entry.node.id}  {entry.preview}")
        hidden = len(view.entries) - len(shown)
        if hidden > 0:
            click.echo(f"  ... {hidden} more (use --all)")
        click.echo()
