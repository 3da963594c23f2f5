"""CLI entry point for api-reference."""

import json
import os
from pathlib import Path

import click

from api_reference.catalog.loader import CatalogError, default_catalog, load_catalog
from api_reference.config import ENV_PREFIX, Settings
from api_reference.search import count_endpoints, filter_categories
from api_reference.service import CatalogService, CategoryNotFoundError

catalog_option = click.option(
    "--catalog", "catalog_path", default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Catalog YAML file (defaults to the bundled CommonWell v4.3 catalog).",
)


def _service(catalog_path: Path | None) -> CatalogService:
    try:
        catalog = load_catalog(catalog_path) if catalog_path else default_catalog()
    except CatalogError as e:
        raise click.ClickException(str(e))
    return CatalogService(catalog)


@click.group()
def main():
    """API Reference — browse and serve the API endpoint catalog."""
    pass


@main.command()
@click.option("--host", default=None, help="Bind address (default: API_REFERENCE_HOST or 0.0.0.0).")
@click.option("--port", default=None, type=int, help="Port (default: API_REFERENCE_PORT or 8000).")
@click.option("--reload", is_flag=True, help="Reload on code changes.")
@catalog_option
def serve(host: str | None, port: int | None, reload: bool, catalog_path: Path | None):
    """Run the reference page and JSON API under uvicorn."""
    import uvicorn

    if catalog_path:
        # the app factory reads its settings from the environment
        os.environ[f"{ENV_PREFIX}CATALOG"] = str(catalog_path)
    settings = Settings.from_env()

    uvicorn.run(
        "api_reference.server.app:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@main.command(name="list")
@catalog_option
def list_categories(catalog_path: Path | None):
    """List categories with their endpoint counts."""
    service = _service(catalog_path)
    for category in service.list_categories():
        click.echo(f"{category.id:<22} {category.name} ({len(category.endpoints)})")


@main.command()
@click.argument("query")
@catalog_option
def search(query: str, catalog_path: Path | None):
    """Find endpoints whose title, path, method or description contains QUERY."""
    service = _service(catalog_path)
    results = filter_categories(service.list_categories(), query)

    if not results:
        click.echo(f'No endpoints found matching "{query}".')
        return

    for category in results:
        click.echo(f"## {category.name}")
        for ep in category.endpoints:
            click.echo(f"  {ep.method:<9} {ep.endpoint}")
            click.echo(f"            {ep.title} [{ep.id}]")
    total = count_endpoints(results)
    click.echo(f'Found {total} endpoint{"" if total == 1 else "s"} matching "{query}"')


@main.command()
@click.argument("category_id")
@click.option("--json", "as_json", is_flag=True, help="Print the category as JSON.")
@catalog_option
def show(category_id: str, as_json: bool, catalog_path: Path | None):
    """Print one category and its endpoints."""
    service = _service(catalog_path)
    try:
        category = service.get_category(category_id)
    except CategoryNotFoundError as e:
        raise click.ClickException(str(e))

    if as_json:
        data = category.model_dump(by_alias=True, exclude_none=True)
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return

    click.echo(category.name)
    click.echo(category.description)
    for ep in category.endpoints:
        click.echo("")
        click.echo(f"{ep.method} {ep.endpoint}")
        click.echo(f"  {ep.title}: {ep.description}")
        for param in ep.search_params or []:
            click.echo(f"    - {param}")
