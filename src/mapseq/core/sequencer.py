"""Single-pass resequencing of image description records.

Records are classified in order against the previously processed record (the
anchor). An image closer than ``duplicate_distance`` meters to the anchor is
dropped. Any other image starts a new sequence when it was taken more than
``cutoff_time`` seconds after the anchor, comes from a different source
sequence, or the current sequence is full.

Malformed records abort the whole pass. The input list and its entries are
never modified, so a failed run leaves the caller's data as it was.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Optional, Sequence

from geopy.distance import geodesic

from mapseq import constants
from mapseq.core.config import SequencerConfig
from mapseq.core.record import ParsedImage, is_error_record, parse_image, to_utc_capture_time
from mapseq.exceptions import StructuralError

logger = logging.getLogger(__name__)


@dataclass
class SequencingResult:
    """Output of one resequencing pass."""

    records: list[dict[str, Any]]
    processed_count: int = 0
    skipped_count: int = 0
    sequence_count: int = 0

    @property
    def kept_count(self) -> int:
        """Number of processed records that survived deduplication."""
        return self.processed_count - self.skipped_count


@dataclass
class _AnchorState:
    """Mutable state carried from one record to the next."""

    source_sequence_id: int = 0
    point: Optional[tuple[float, float]] = None
    capture_time: Optional[datetime] = None
    sequence_id: int = 0
    sequence_length: int = 0
    processed: int = 0
    skipped: int = 0
    output: list[dict[str, Any]] = field(default_factory=list)

    @property
    def anchored(self) -> bool:
        return self.point is not None and self.capture_time is not None

    def move_to(self, image: ParsedImage) -> None:
        self.source_sequence_id = image.source_sequence_id
        self.point = image.point
        self.capture_time = image.capture_time_utc
        self.processed += 1


class Sequencer:
    """Deduplicates and resequences an ordered list of image records."""

    def __init__(self, config: Optional[SequencerConfig] = None) -> None:
        """Initialize the sequencer.

        Args:
            config: Sequencing configuration (defaults to SequencerConfig())
        """
        self.config = config if config is not None else SequencerConfig()
        self._cutoff = timedelta(seconds=self.config.cutoff_time)

    def process(self, records: Sequence[Any]) -> SequencingResult:
        """Run one pass over ``records``.

        Args:
            records: Chronologically ordered records as loaded from JSON

        Returns:
            SequencingResult holding the new record list and counters

        Raises:
            StructuralError: If an entry is not a JSON object
            FieldParseError: If a record field cannot be parsed
        """
        state = _AnchorState()
        for index, entry in enumerate(records):
            if not isinstance(entry, dict):
                raise StructuralError(
                    f"Record {index}: entry should be an object, got {type(entry).__name__}"
                )
            if is_error_record(entry):
                state.output.append(entry)
                continue

            image = parse_image(entry, self.config.zone, index)
            if not state.anchored:
                # The first image keeps its fields and opens sequence 0.
                state.output.append(entry)
                state.sequence_length = 1
            elif self._is_duplicate(image, state):
                logger.debug("Record %d is a duplicate, dropping it", index)
                state.skipped += 1
            else:
                if self._is_boundary(image, state):
                    state.sequence_id += 1
                    state.sequence_length = 0
                    logger.debug("Record %d starts sequence %d", index, state.sequence_id)
                state.output.append(self._rewrite(entry, image, state.sequence_id))
                state.sequence_length += 1
            state.move_to(image)

        sequence_count = state.sequence_id + 1 if state.processed else 0
        logger.info(
            "Processed %d records, skipped %d duplicates, %d sequences",
            state.processed,
            state.skipped,
            sequence_count,
        )
        return SequencingResult(
            records=state.output,
            processed_count=state.processed,
            skipped_count=state.skipped,
            sequence_count=sequence_count,
        )

    def _is_duplicate(self, image: ParsedImage, state: _AnchorState) -> bool:
        distance = geodesic(state.point, image.point).meters
        return distance < self.config.duplicate_distance

    def _is_boundary(self, image: ParsedImage, state: _AnchorState) -> bool:
        return (
            image.capture_time_utc - state.capture_time > self._cutoff
            or image.source_sequence_id != state.source_sequence_id
            or state.sequence_length >= self.config.max_sequence_length
        )

    @staticmethod
    def _rewrite(entry: dict[str, Any], image: ParsedImage, sequence_id: int) -> dict[str, Any]:
        rewritten = dict(entry)
        rewritten[constants.CAPTURE_TIME_KEY] = to_utc_capture_time(image.capture_time)
        rewritten[constants.SEQUENCE_UUID_KEY] = str(sequence_id)
        return rewritten


def sequence(records: Sequence[Any], config: Optional[SequencerConfig] = None) -> SequencingResult:
    """Deduplicate and resequence ``records`` with ``config``."""
    return Sequencer(config).process(records)
