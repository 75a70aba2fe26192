"""
Command-line interface for track_mirror.
"""
from pathlib import Path
from typing import Optional

import click

from ..core.config import Config
from ..core.exceptions import AuthenticationError, TrackMirrorError
from ..core.matching import find_best_match, score_candidates
from ..core.models import EXPLICIT_MARKER, ReferenceTrack
from ..core.resolver import MirrorResolver
from ..integrations.tidal.auth import TidalAuth
from ..integrations.tidal.executor import TidalQueryExecutor
from ..utils.music_utils import (
    candidate_from_dict,
    load_track_records,
    reference_from_dict,
)


def _build_resolver(config: Config) -> MirrorResolver:
    """Authenticate with Tidal and wire up a resolver."""
    tidal_auth = TidalAuth(config)
    tidal_auth.login_callback = lambda message: click.echo(f"🔐 {message}")

    click.echo("🔐 Authenticating with Tidal...")
    try:
        session = tidal_auth.authenticate()
    except TrackMirrorError:
        raise
    except Exception as e:
        raise AuthenticationError(f"Tidal authentication failed: {e}")

    executor = TidalQueryExecutor(session, limit=config.search_limit)
    return MirrorResolver(
        executor,
        providers=config.providers,
        fallback_prefix=config.fallback_prefix,
    )


def _reference_from_options(
    title: str,
    author: str,
    duration_ms: int,
    isrc: Optional[str],
    explicit: bool,
) -> ReferenceTrack:
    return ReferenceTrack(
        title=title,
        author=author,
        duration=duration_ms,
        isrc=isrc,
        uri=f"?{EXPLICIT_MARKER}" if explicit else None,
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, verbose, debug):
    """Find playable equivalents of tracks on secondary providers."""
    ctx.ensure_object(dict)

    try:
        config = Config.from_dotenv()
        if debug:
            config.log_level = "DEBUG"
        elif verbose:
            config.log_level = "INFO"
        config.validate()
    except (TrackMirrorError, ValueError) as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        ctx.exit(1)

    config.setup_logging()
    ctx.obj["config"] = config


@cli.command()
@click.option("--title", "-t", required=True, help="Track title")
@click.option("--author", "-a", default="unknown", help="Track artist(s)")
@click.option(
    "--duration-ms",
    "-d",
    required=True,
    type=click.IntRange(0, None),
    help="Track duration in milliseconds",
)
@click.option("--isrc", default=None, help="International Standard Recording Code")
@click.option("--explicit", is_flag=True, help="The track contains explicit content")
@click.pass_context
def resolve(ctx, title, author, duration_ms, isrc, explicit):
    """Resolve a single track on Tidal."""
    config = ctx.obj["config"]
    reference = _reference_from_options(title, author, duration_ms, isrc, explicit)

    click.echo(f"🎵 Resolving: {reference} ({reference.duration_formatted})")

    try:
        resolver = _build_resolver(config)
        result = resolver.resolve(reference)
    except TrackMirrorError as e:
        click.echo(f"❌ Resolution failed: {e}", err=True)
        ctx.exit(1)

    if result:
        click.echo(f"✅ Match: {result} ({result.duration_formatted})")
        if result.uri:
            click.echo(f"🔗 {result.uri}")
    else:
        click.echo("✗ No match found")


@cli.command("resolve-file")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def resolve_file(ctx, path):
    """Resolve every track listed in a JSON file."""
    config = ctx.obj["config"]

    try:
        references = [
            reference_from_dict(record) for record in load_track_records(path)
        ]
    except ValueError as e:
        click.echo(f"❌ Invalid track file: {e}", err=True)
        ctx.exit(1)

    click.echo(f"🎵 Resolving {len(references)} tracks from {path}")

    try:
        resolver = _build_resolver(config)
        summary = resolver.resolve_all(references)
    except TrackMirrorError as e:
        click.echo(f"❌ Resolution failed: {e}", err=True)
        ctx.exit(1)

    click.echo("\n📊 Resolution Results:")
    click.echo(f"  Total tracks: {summary.total}")
    click.echo(f"  Matched: {summary.matched}")
    click.echo(f"  Not found: {summary.failed}")
    click.echo(f"  Success rate: {summary.match_rate:.1f}%")


@cli.command()
@click.argument(
    "candidates_file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option("--title", "-t", required=True, help="Reference track title")
@click.option("--author", "-a", default="unknown", help="Reference track artist(s)")
@click.option(
    "--duration-ms",
    "-d",
    required=True,
    type=click.IntRange(0, None),
    help="Reference duration in milliseconds",
)
@click.option("--explicit", is_flag=True, help="The reference is explicit")
@click.pass_context
def rank(ctx, candidates_file, title, author, duration_ms, explicit):
    """Score candidates from a JSON file without querying any provider."""
    reference = _reference_from_options(title, author, duration_ms, None, explicit)

    try:
        candidates = [
            candidate_from_dict(record)
            for record in load_track_records(candidates_file)
        ]
    except ValueError as e:
        click.echo(f"❌ Invalid candidate file: {e}", err=True)
        ctx.exit(1)

    scored = score_candidates(candidates, reference)
    click.echo(
        f"📋 {len(scored)}/{len(candidates)} candidates within duration tolerance"
    )
    for entry in scored:
        click.echo(f"  {entry.score:>8.1f}  {entry.candidate}")

    best_match = find_best_match(candidates, reference)
    if best_match is not None:
        click.echo(f"✅ Best match: {best_match}")
    else:
        click.echo("✗ No match found")


@cli.command()
@click.pass_context
def config_info(ctx):
    """Display configuration information."""
    config = ctx.obj["config"]

    click.echo("⚙️  Configuration:")
    click.echo("  Providers:")
    for provider in config.providers:
        click.echo(f"    - {provider}")
    click.echo(f"  Fallback prefix: {config.fallback_prefix}")
    click.echo(f"  Search limit: {config.search_limit}")
    click.echo(f"  Log level: {config.log_level}")

    env_file = Path(".env")
    if env_file.exists():
        click.echo("  Environment file: ✅ Found (.env)")
    else:
        click.echo("  Environment file: ❌ Not found (.env)")


if __name__ == "__main__":
    cli()
