"""
Thread navigation CLI commands (default branch and jump-to-message).
"""
import json

import click

from topictree.cli.common import format_option, load_tree, transcript_argument
from topictree.core.tree import get_branch_path_to_node, get_default_path, get_linear_thread
from topictree.services.topic_navigator import preview


def _echo_thread(root, path, output_format):
    nodes = get_linear_thread(root, path)
    if output_format == "json":
        click.echo(json.dumps(
            {"path": path, "messages": [
                {"id": n.id, "role": n.role.value, "content": n.content} for n in nodes
            ]},
            indent=2,
            ensure_ascii=False,
        ))
        return
    for depth, node in enumerate(nodes):
        click.echo(f"{depth:>3} {node.role.value:<9} {node.id}  {preview(node.content)}")


@click.command()
@transcript_argument
@format_option
def thread(transcript, output_format):
    """Show the default branch of TRANSCRIPT (first child at every step)."""
    root = load_tree(transcript)
    _echo_thread(root, get_default_path(root), output_format)


@click.command()
@transcript_argument
@click.argument("node_id")
@format_option
def jump(transcript, node_id, output_format):
    """Show the branch of TRANSCRIPT that leads to NODE_ID."""
    root = load_tree(transcript)
    path = get_branch_path_to_node(root, node_id)
    if path is None:
        click.secho(f"Message {node_id} not found in transcript.", fg="yellow")
        raise click.Abort()
    _echo_thread(root, path, output_format)
