"""Public Python API for mapseq."""

import logging
from typing import Any, Optional, Sequence

from mapseq import constants
from mapseq.core.config import SequencerConfig, SequencerConfigBuilder
from mapseq.core.sequencer import Sequencer, SequencingResult
from mapseq.io.description_file import (
    PathLike,
    load_description,
    resolve_description_path,
    write_description,
)
from mapseq.logging_utils import setup_logging

logger = logging.getLogger("mapseq.api.processor")


class MapSequencer:
    """Main public API for resequencing image description files."""

    def __init__(self, configure_logging: bool = True) -> None:
        """Initialize MapSequencer.

        Args:
            configure_logging: Install mapseq's log handlers (see setup_logging)
        """
        if configure_logging:
            setup_logging()

    def resequence_directory(
        self,
        path: PathLike,
        timezone: Optional[str] = None,
        cutoff_time: int = constants.DEFAULT_CUTOFF_TIME,
        duplicate_distance: float = constants.DEFAULT_DUPLICATE_DISTANCE,
        max_sequence_length: int = constants.DEFAULT_MAX_SEQUENCE_LENGTH,
        dry_run: bool = False,
    ) -> SequencingResult:
        """Deduplicate and resequence the description file of an image directory.

        Args:
            path: Image directory containing mapillary_image_description.json
            timezone: IANA timezone the capture times were recorded in (default: UTC)
            cutoff_time: Seconds between images that start a new sequence
            duplicate_distance: Meters below which an image is a duplicate
            max_sequence_length: Maximum number of images per sequence
            dry_run: Report the result without rewriting the file

        Example:
            >>> processor = MapSequencer()
            >>> result = processor.resequence_directory(
            ...     "uploads/2023-05-01",
            ...     timezone="Asia/Taipei",
            ...     cutoff_time=10,
            ... )
            >>> result.sequence_count
            3
        """
        config = (
            SequencerConfigBuilder()
            .with_timezone(timezone)
            .with_cutoff_time(cutoff_time)
            .with_duplicate_distance(duplicate_distance)
            .with_max_sequence_length(max_sequence_length)
            .build()
        )
        return self.resequence_with_config(path, config, dry_run=dry_run)

    def resequence_with_config(
        self, path: PathLike, config: SequencerConfig, dry_run: bool = False
    ) -> SequencingResult:
        """Resequence a description file using a SequencerConfig object.

        The file is only rewritten after every record has been processed, so
        a malformed record leaves it untouched.
        """
        description_path = resolve_description_path(path)
        records = load_description(description_path)
        logger.info("Resequencing %d entries from %s", len(records), description_path)

        result = self.resequence_records(records, config)
        if dry_run:
            logger.info("Dry run, %s left unchanged", description_path)
        else:
            write_description(description_path, result.records)
        return result

    def resequence_records(
        self, records: Sequence[Any], config: Optional[SequencerConfig] = None
    ) -> SequencingResult:
        """Resequence already loaded records without touching any file."""
        return Sequencer(config).process(records)


def describe_result(result: SequencingResult) -> list[str]:
    """Human readable summary lines for a finished run."""
    return [
        f"{result.processed_count} entries proceeded, skipped {result.skipped_count} entries.",
        f"Re-written with {len(result.records)} entries and {result.sequence_count} sequences.",
    ]