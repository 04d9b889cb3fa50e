"""Command-line interface for SpaceBio."""

import asyncio
import json
import logging

import click
import uvicorn

from spacebio.config import get_settings
from spacebio.helpers.categorize import categorize_publication


@click.group()
@click.version_option(package_name="spacebio")
def main():
    """SpaceBio: browse and analyze space biology research."""
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@main.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
@click.option(
    "--ingest/--no-ingest",
    default=False,
    show_default=True,
    help="Ingest NASA publications before serving",
)
@click.option("-q", "--query", default=None, help="Ingestion query (defaults to settings)")
@click.option("-n", "--limit", default=None, type=int, help="Ingestion result limit")
def serve(host: str, port: int, ingest: bool, query: str | None, limit: int | None):
    """Serve the dashboard API."""
    from spacebio.api.main import create_app

    app = create_app()

    if ingest:
        from spacebio.services.ingestion import ingest_publications

        settings = get_settings()

        async def _ingest():
            # The server runs on its own event loop; drop this loop's session.
            try:
                return await ingest_publications(
                    app.state.store,
                    app.state.nasa_client,
                    app.state.research_ai,
                    query or settings.default_ingest_query,
                    limit or settings.default_ingest_limit,
                )
            finally:
                await app.state.nasa_client.close()

        result = asyncio.run(_ingest())
        click.echo(f"{result.message} ({result.ingested}/{result.total})")

    uvicorn.run(app, host=host, port=port, log_level=get_settings().log_level.lower())


@main.command()
@click.option("-t", "--title", required=True, help="Publication title")
@click.option("-a", "--abstract", default="", help="Publication abstract")
@click.option("-k", "--keyword", "keywords", multiple=True, help="Keyword (repeatable)")
def categorize(title: str, abstract: str, keywords: tuple[str, ...]):
    """Show the tags the ingestion heuristic would assign."""
    categories = categorize_publication(title, abstract, list(keywords))
    click.echo(json.dumps(categories.model_dump(), indent=2))


if __name__ == "__main__":
    main()
