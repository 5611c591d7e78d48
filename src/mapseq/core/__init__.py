"""Core modules for record parsing and resequencing."""

from mapseq.core.config import SequencerConfig, SequencerConfigBuilder
from mapseq.core.sequencer import Sequencer, SequencingResult, sequence

__all__ = [
    "Sequencer",
    "SequencingResult",
    "SequencerConfig",
    "SequencerConfigBuilder",
    "sequence",
]
