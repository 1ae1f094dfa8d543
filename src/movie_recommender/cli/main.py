"""Main CLI entry point."""

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click

from .. import __version__
from ..config import ConfigManager
from ..core.models import (
    ContentBlocked,
    ContentType,
    CycleReset,
    GuardrailRequest,
    Recommendation,
    RecommendationFailed,
    RecommendationOutcome,
    SecurityBlocked,
)
from ..infrastructure import Container, configure_server_logging, setup_logging
from ..utils import ConfigurationError, MovieRecommenderError, normalize_imdb_url


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.version_option(version=__version__, prog_name="movie-recommender")
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], verbose: bool) -> None:
    """Guarded Movie Recommender - family-friendly picks screened by an LLM guardrail."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config

    # Skip configuration loading for commands that don't need it
    if ctx.invoked_subcommand == "init":
        return

    try:
        config_manager = ConfigManager(config)
        app_config = config_manager.load_config()

        if verbose:
            app_config.logging.level = "DEBUG"
        setup_logging(app_config.logging)

        container = Container(config_manager)
        container.configure_default_services()

        ctx.obj["config"] = app_config
        ctx.obj["container"] = container

    except (ConfigurationError, FileNotFoundError, ValueError) as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Initialization error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=Path.cwd() / "config" / "config.yaml",
    help="Output path for configuration file",
)
def init(output: Path) -> None:
    """Initialize configuration file."""
    try:
        if output.exists():
            if not click.confirm(f"Configuration file {output} already exists. Overwrite?"):
                return

        output.parent.mkdir(parents=True, exist_ok=True)

        ConfigManager.create_default_config(output)
        click.echo(f"Configuration file created at: {output}")
        click.echo("Please set OPENAI_API_KEY (or edit the file) before running recommendations.")

    except Exception as e:
        click.echo(f"Failed to create configuration: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.pass_context
def validate(ctx: click.Context) -> None:
    """Validate configuration and prerequisites."""
    from ..core.interfaces import IRecommendationOrchestrator

    container = ctx.obj["container"]
    orchestrator = container.get(IRecommendationOrchestrator)

    errors = orchestrator.validate_prerequisites()
    if errors:
        for error in errors:
            click.echo(f"✗ {error}")
        click.echo("Validation failed", err=True)
        sys.exit(1)

    click.echo("All prerequisites validated successfully")


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show system status and configuration."""
    config = ctx.obj["config"]

    click.echo("Guarded Movie Recommender Status")
    click.echo("=" * 40)

    click.echo(f"LLM Provider: {config.llm.provider}")
    click.echo(f"LLM Model: {config.llm.model}")
    click.echo(f"API Key Configured: {'✓' if config.llm.api_key else '✗'}")
    click.echo(f"Guardrail Enabled: {'✓' if config.guardrail.enabled else '✗'}")
    click.echo(f"Output Validation: {'✓' if config.recommendation.validate_output else '✗'}")
    click.echo(f"Catalog Size: {len(config.recommendation.catalog)}")
    click.echo(f"Request Timeout: {config.recommendation.request_timeout}s")
    click.echo(
        f"Page Cache: {'✓' if config.scraper.cache_enabled else '✗'} "
        f"({config.scraper.cache_ttl_hours}h)"
    )
    click.echo(f"Server: {config.server.host}:{config.server.port}")


@cli.command()
@click.option("--host", help="Bind address (overrides configuration)")
@click.option("--port", type=int, help="Bind port (overrides configuration)")
@click.pass_context
def serve(ctx: click.Context, host: Optional[str], port: Optional[int]) -> None:
    """Run the HTTP API server."""
    import uvicorn

    from ..api import create_app

    config = ctx.obj["config"]
    container = ctx.obj["container"]

    configure_server_logging(config.logging)

    bind_host = host or config.server.host
    bind_port = port or config.server.port
    click.echo(f"Serving on http://{bind_host}:{bind_port}")

    uvicorn.run(
        create_app(container),
        host=bind_host,
        port=bind_port,
        log_config=None,
        access_log=config.logging.access_log,
    )


@cli.command()
@click.argument("description")
@click.option("--url", "-u", "urls", multiple=True, help="IMDb title URL of a reference movie")
@click.pass_context
def recommend(ctx: click.Context, description: str, urls: Tuple[str, ...]) -> None:
    """Recommend one movie for DESCRIPTION."""
    container = ctx.obj["container"]

    try:
        outcome = asyncio.run(_run_recommend(container, description, list(urls)))
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled by user.")
        sys.exit(1)
    except MovieRecommenderError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not _print_outcome(outcome):
        sys.exit(1)


@cli.command()
@click.argument("url")
@click.option("--title-only", is_flag=True, help="Only extract the title")
@click.pass_context
def scrape(ctx: click.Context, url: str, title_only: bool) -> None:
    """Scrape an IMDb title page and print what was extracted."""
    container = ctx.obj["container"]

    canonical = normalize_imdb_url(url)
    if canonical is None:
        click.echo(f"Not an IMDb title URL: {url}", err=True)
        sys.exit(1)

    payload = asyncio.run(_run_scrape(container, canonical, title_only))
    if not payload:
        click.echo(f"Failed to extract movie info from {canonical}", err=True)
        sys.exit(1)

    click.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@cli.command()
@click.argument("text")
@click.option(
    "--type",
    "content_type",
    type=click.Choice([content_type.value for content_type in ContentType]),
    default=ContentType.DESCRIPTION.value,
    show_default=True,
    help="Kind of content being checked",
)
@click.pass_context
def check(ctx: click.Context, text: str, content_type: str) -> None:
    """Run the content guardrail on TEXT."""
    container = ctx.obj["container"]

    try:
        verdict = asyncio.run(_run_check(container, text, ContentType(content_type)))
    except MovieRecommenderError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(json.dumps(verdict, indent=2, ensure_ascii=False))
    if not verdict["isAppropriate"]:
        sys.exit(2)


async def _run_recommend(
    container: Container, description: str, urls: List[str]
) -> RecommendationOutcome:
    """Run one recommendation and release network resources."""
    from ..core.interfaces import IRecommendationOrchestrator

    try:
        orchestrator = container.get(IRecommendationOrchestrator)  # type: ignore
        errors = orchestrator.validate_prerequisites()
        if errors:
            for error in errors:
                click.echo(f"✗ {error}", err=True)
            raise MovieRecommenderError("Prerequisites not met")

        return await orchestrator.recommend(description, urls)
    finally:
        await container.close()


async def _run_scrape(
    container: Container, url: str, title_only: bool
) -> Optional[Dict[str, Any]]:
    """Scrape one page and release network resources."""
    from ..core.interfaces import IMetadataExtractor

    extractor = container.get(IMetadataExtractor)  # type: ignore
    try:
        if title_only:
            title = await extractor.fetch_title(url)
            return {"url": url, "title": title} if title else None

        info = await extractor.fetch_movie_info(url)
        if not info.has_title:
            return None
        return {"url": url, **info.model_dump(exclude_none=True)}
    finally:
        await container.close()


async def _run_check(
    container: Container, text: str, content_type: ContentType
) -> Dict[str, Any]:
    """Classify one piece of content and release network resources."""
    from ..core.interfaces import IContentGuardrail

    guardrail = container.get(IContentGuardrail)  # type: ignore
    try:
        verdict = await guardrail.classify(
            GuardrailRequest(content=text, content_type=content_type)
        )
        return verdict.model_dump(mode="json", by_alias=True)
    finally:
        await container.close()


def _print_outcome(outcome: RecommendationOutcome) -> bool:
    """Print a recommendation outcome.

    Returns:
        True if a recommendation (or cycle reset) was produced.
    """
    if isinstance(outcome, Recommendation):
        click.echo(f"Recommendation: {outcome.title}")
        click.echo(f"Reasoning: {outcome.reasoning}")
        return True

    if isinstance(outcome, CycleReset):
        click.echo(outcome.message)
        click.echo(f"Reasoning: {outcome.reasoning}")
        return True

    if isinstance(outcome, (SecurityBlocked, ContentBlocked)):
        click.echo(f"Blocked: {outcome.reasoning}", err=True)
        for item in outcome.blocked_items:
            click.echo(f"  ✗ {item}", err=True)
        for suggestion in outcome.suggestions:
            click.echo(f"  → {suggestion}", err=True)
        return False

    if isinstance(outcome, RecommendationFailed):
        click.echo(f"Error: {outcome.message}", err=True)
        return False

    return False


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
