"""Configuration classes using Builder pattern for sequencing settings."""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from mapseq import constants
from mapseq.exceptions import ConfigurationError

# Largest whole number of seconds a timedelta can hold
MAX_CUTOFF_SECONDS = timedelta.max.days * 86400 + timedelta.max.seconds


def resolve_timezone(name: str) -> ZoneInfo:
    """Look up an IANA timezone by name.

    Raises:
        ConfigurationError: If the name is not a known timezone.
    """
    if not isinstance(name, str) or not name.strip():
        raise ConfigurationError(f"Invalid timezone: {name!r}")
    try:
        return ZoneInfo(name.strip())
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise ConfigurationError(f"Unknown timezone: {name!r}") from exc


@dataclass
class SequencerConfig:
    """Configuration for one resequencing pass."""

    timezone: str = constants.DEFAULT_TIMEZONE
    cutoff_time: int = constants.DEFAULT_CUTOFF_TIME  # seconds
    duplicate_distance: float = constants.DEFAULT_DUPLICATE_DISTANCE  # meters
    max_sequence_length: int = constants.DEFAULT_MAX_SEQUENCE_LENGTH
    zone: ZoneInfo = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self.zone = resolve_timezone(self.timezone)
        if isinstance(self.cutoff_time, bool) or not isinstance(self.cutoff_time, int):
            raise ConfigurationError("Cutoff time must be an integer number of seconds")
        if abs(self.cutoff_time) > MAX_CUTOFF_SECONDS:
            raise ConfigurationError(
                f"Cutoff time must be within +/-{MAX_CUTOFF_SECONDS} seconds"
            )
        if isinstance(self.duplicate_distance, bool) or not isinstance(
            self.duplicate_distance, (int, float)
        ):
            raise ConfigurationError("Duplicate distance must be a number")
        if self.duplicate_distance < 0:
            raise ConfigurationError("Duplicate distance cannot be negative")
        if isinstance(self.max_sequence_length, bool) or not isinstance(
            self.max_sequence_length, int
        ):
            raise ConfigurationError("Max sequence length must be an integer")
        if self.max_sequence_length < 1:
            raise ConfigurationError("Max sequence length must be at least 1")


class SequencerConfigBuilder:
    """Builder for SequencerConfig using Builder pattern."""

    def __init__(self) -> None:
        """Initialize the builder."""
        self._timezone: str = constants.DEFAULT_TIMEZONE
        self._cutoff_time: int = constants.DEFAULT_CUTOFF_TIME
        self._duplicate_distance: float = constants.DEFAULT_DUPLICATE_DISTANCE
        self._max_sequence_length: int = constants.DEFAULT_MAX_SEQUENCE_LENGTH

    def with_timezone(self, timezone: Optional[str]) -> "SequencerConfigBuilder":
        """Set the timezone capture times are recorded in."""
        if timezone is not None:
            self._timezone = timezone
        return self

    def with_cutoff_time(self, seconds: int) -> "SequencerConfigBuilder":
        """Set the gap (seconds) that starts a new sequence."""
        self._cutoff_time = seconds
        return self

    def with_duplicate_distance(self, meters: float) -> "SequencerConfigBuilder":
        """Set the distance (meters) below which an image is a duplicate."""
        self._duplicate_distance = meters
        return self

    def with_max_sequence_length(self, length: int) -> "SequencerConfigBuilder":
        """Set the maximum number of images per sequence."""
        self._max_sequence_length = length
        return self

    def build(self) -> SequencerConfig:
        """Build the SequencerConfig object."""
        return SequencerConfig(
            timezone=self._timezone,
            cutoff_time=self._cutoff_time,
            duplicate_distance=self._duplicate_distance,
            max_sequence_length=self._max_sequence_length,
        )
