#!/usr/bin/env python3
"""Command-line interface for the Riftbound card catalog pipeline."""

from pathlib import Path
from typing import NoReturn, Optional

import typer

from .config import CatalogConfig
from .dataset import load_cards, load_manifest
from .image_sync import ImageSync
from .json_writer import EFFECT_TAXONOMY_FILENAME, ENRICHED_FILENAME, IMAGE_MANIFEST_FILENAME, JsonWriter
from .publisher import publish_catalog
from .taxonomy import build_effect_taxonomy
from .transform import RAW_DUMP_FILENAME, EnrichmentTransformer
from .utils import PipelineError, set_log_level


app = typer.Typer(help="Build and publish the Riftbound card catalog.", no_args_is_help=True)

DATA_DIR = Path("data")


def _fail(exc: Exception) -> NoReturn:
    typer.echo(f"ERROR: {exc}", err=True)
    raise typer.Exit(code=1)


@app.callback()
def configure(
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging.", show_default=False),
) -> None:
    """Build and publish the Riftbound card catalog."""
    if verbose:
        set_log_level("DEBUG")


@app.command()
def transform(
    dump: Path = typer.Option(Path(RAW_DUMP_FILENAME), "--dump", help="Raw columnar card dump."),
    out_dir: Path = typer.Option(DATA_DIR, "--out-dir", help="Directory for the generated JSON."),
) -> None:
    """Enrich the raw dump into the catalog dataset and image manifest."""
    try:
        result = EnrichmentTransformer(JsonWriter(out_dir)).run(dump.expanduser().resolve())
    except PipelineError as exc:
        _fail(exc)

    typer.echo(f"Wrote {result.total_cards} cards to {result.dataset_path}")
    typer.echo(f"Wrote {result.total_cards} image entries to {result.manifest_path}")


@app.command()
def publish(
    table: Optional[str] = typer.Option(None, "--table", help="Catalog table (default: $CARD_CATALOG_TABLE)."),
    region: Optional[str] = typer.Option(None, "--region", help="AWS region (default: $AWS_REGION)."),
    source: Optional[Path] = typer.Option(
        None, "--source", help="Enriched dataset (default: $CARD_CATALOG_SOURCE)."
    ),
) -> None:
    """Upload the enriched dataset to the catalog table."""
    config = CatalogConfig.from_env().with_overrides(table_name=table, region=region, source_path=source)
    try:
        uploaded = publish_catalog(config)
    except PipelineError as exc:
        typer.echo("Card upload failed.", err=True)
        _fail(exc)

    typer.echo(f"Uploaded {uploaded} cards to {config.table_name}")


@app.command()
def taxonomy(
    source: Path = typer.Option(DATA_DIR / ENRICHED_FILENAME, "--source", help="Enriched dataset."),
    out_dir: Path = typer.Option(DATA_DIR, "--out-dir", help="Directory for the taxonomy JSON."),
) -> None:
    """Write the effect-class taxonomy of the enriched catalog."""
    try:
        cards = load_cards(source)
    except PipelineError as exc:
        _fail(exc)

    output_path = JsonWriter(out_dir).write(EFFECT_TAXONOMY_FILENAME, build_effect_taxonomy(cards))
    typer.echo(f"Wrote {len(cards)} cards to {output_path}")


@app.command("sync-images")
def sync_images(
    manifest: Path = typer.Option(DATA_DIR / IMAGE_MANIFEST_FILENAME, "--manifest", help="Image manifest."),
    asset_root: Path = typer.Option(Path("."), "--asset-root", help="Root that localPath entries resolve against."),
    force: bool = typer.Option(False, "--force", help="Re-download images that already exist.", show_default=False),
) -> None:
    """Download manifest images and store them as WebP."""
    try:
        entries = load_manifest(manifest)
    except PipelineError as exc:
        _fail(exc)

    with ImageSync(asset_root.expanduser().resolve(), force=force) as syncer:
        summary = syncer.sync(entries)
    typer.echo(
        f"Images: {summary.downloaded} downloaded, {summary.skipped} skipped, {summary.failed} failed"
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
