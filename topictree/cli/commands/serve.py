"""
HTTP API server command.

Starts the FastAPI app with uvicorn.
"""
import click


@click.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
@click.option("--port", type=int, default=5000, help="Port to bind to (default: 5000)")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host, port, reload):
    """Start the topic clustering API server."""
    try:
        import uvicorn
    except ImportError:
        click.secho(
            "uvicorn is required. Install with: pip install uvicorn[standard]",
            fg="red",
            err=True,
        )
        return

    click.echo(f"Starting topictree server on http://{host}:{port}")
    click.echo("\nPress Ctrl+C to stop\n")
    uvicorn.run("topictree.api.main:app", host=host, port=port, reload=reload)
