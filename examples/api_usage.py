"""Example: Using the Python API programmatically."""

import json

from mapseq import MapSequencer
from mapseq.core.config import SequencerConfigBuilder

# Initialize processor
processor = MapSequencer()

# Method 1: Using convenience method
result = processor.resequence_directory(
    "uploads/2023-05-01",
    timezone="Asia/Taipei",
    cutoff_time=10,
    duplicate_distance=2.0,
)
print(f"{result.sequence_count} sequences, {result.skipped_count} duplicates dropped")

# Method 2: Using builder pattern for more control
config = (
    SequencerConfigBuilder()
    .with_timezone("Europe/Berlin")
    .with_cutoff_time(30)
    .with_duplicate_distance(5.0)
    .with_max_sequence_length(100)
    .build()
)

preview = processor.resequence_with_config("uploads/2023-05-02", config, dry_run=True)
print(f"Would keep {len(preview.records)} of {preview.processed_count} images")

# Method 3: Records already in memory, no file access
with open("uploads/2023-05-03/mapillary_image_description.json", encoding="utf-8") as fd:
    records = json.load(fd)

result = processor.resequence_records(records, config)
