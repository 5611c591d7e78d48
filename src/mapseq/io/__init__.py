"""I/O modules for the image description file."""

from mapseq.io.description_file import (
    load_description,
    resolve_description_path,
    write_description,
)

__all__ = ["load_description", "resolve_description_path", "write_description"]
