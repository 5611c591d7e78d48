"""CLI interface for mapseq."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from mapseq import __version__, constants
from mapseq.api.processor import MapSequencer, describe_result
from mapseq.core.config import SequencerConfigBuilder
from mapseq.core.profiler import ProfileSettings, profile_run
from mapseq.exceptions import MapSeqError
from mapseq.logging_utils import setup_logging

logger = logging.getLogger("mapseq.cli.main")


@click.group()
@click.version_option(__version__)
def main() -> None:
    """mapseq - resequence geotagged image uploads."""
    setup_logging()


@main.command()
@click.argument(
    "path",
    type=click.Path(exists=True, file_okay=True, dir_okay=True, path_type=Path),
)
@click.option(
    "--timezone",
    type=str,
    default=constants.DEFAULT_TIMEZONE,
    show_default=True,
    help="Time zone the capture times were recorded in, e.g. Asia/Taipei.",
)
@click.option(
    "--cutoff-time",
    "--cutoff_time",
    "cutoff_time",
    type=int,
    default=constants.DEFAULT_CUTOFF_TIME,
    show_default=True,
    help="Cut the sequence when adjacent images are more than this many seconds apart.",
)
@click.option(
    "--duplicate-distance",
    "--duplicate_distance",
    "duplicate_distance",
    type=click.FloatRange(min=0),
    default=constants.DEFAULT_DUPLICATE_DISTANCE,
    show_default=True,
    help="Drop an image closer than this many meters to the previous one.",
)
@click.option(
    "--max-sequence-length",
    "--max_sequence_length",
    "max_sequence_length",
    type=click.IntRange(min=1),
    default=constants.DEFAULT_MAX_SEQUENCE_LENGTH,
    show_default=True,
    help="Maximum number of images in one sequence.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Report the result without rewriting the description file.",
)
@click.option(
    "--profile",
    is_flag=True,
    default=False,
    help="Enable cProfile and write stats to disk.",
)
@click.option(
    "--profile-out",
    type=click.Path(path_type=Path),
    default=None,
    help="Output .prof file or directory (default: temp directory).",
)
def resequence(
    path: Path,
    timezone: str,
    cutoff_time: int,
    duplicate_distance: float,
    max_sequence_length: int,
    dry_run: bool,
    profile: bool,
    profile_out: Optional[Path],
) -> None:
    """Deduplicate and resequence the images of an upload directory.

    PATH: Directory holding the images and mapillary_image_description.json
    (the description file itself is accepted too).

    Examples:

    \b
        # Camera clock set to Taipei time
        mapseq resequence ./uploads --timezone Asia/Taipei

    \b
        # Split on 30s gaps, at most 100 images per sequence
        mapseq resequence ./uploads --cutoff-time 30 --max-sequence-length 100
    """
    if profile:
        settings = ProfileSettings(enabled=True, output=profile_out)
    else:
        settings = ProfileSettings.from_env()

    try:
        config = (
            SequencerConfigBuilder()
            .with_timezone(timezone)
            .with_cutoff_time(cutoff_time)
            .with_duplicate_distance(duplicate_distance)
            .with_max_sequence_length(max_sequence_length)
            .build()
        )
        processor = MapSequencer(configure_logging=False)
        with profile_run(settings, label="cli-resequence") as stats_path:
            result = processor.resequence_with_config(path, config, dry_run=dry_run)
    except MapSeqError as e:
        logger.exception("Resequencing failed")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for line in describe_result(result):
        click.echo(line)
    if dry_run:
        click.echo("Dry run: description file left unchanged.")
    if stats_path is not None:
        click.echo(f"Profiler output written to {stats_path}")


if __name__ == "__main__":
    main()
