"""Reading and rewriting ``mapillary_image_description.json``."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Union

from mapseq import constants
from mapseq.exceptions import DescriptionFileError, StructuralError

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def resolve_description_path(path: PathLike) -> Path:
    """Return the description file for an image directory.

    Args:
        path: Image directory, or the description file itself

    Returns:
        Path to the description file

    Raises:
        DescriptionFileError: If the path or the description file is missing
    """
    path = Path(path).expanduser()
    if path.is_dir():
        path = path / constants.DESCRIPTION_FILENAME
    elif not path.exists():
        raise DescriptionFileError(f"Input path does not exist: {path}", path)

    if not path.is_file():
        raise DescriptionFileError(f"Description file not found: {path}", path)
    return path


def load_description(path: PathLike) -> list[Any]:
    """Load the record list from a description file.

    Raises:
        DescriptionFileError: If the file cannot be read or is not valid JSON
        StructuralError: If the top-level value is not a list
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as fd:
            document = json.load(fd)
    except OSError as exc:
        raise DescriptionFileError(f"Cannot read {path}: {exc}", path) from exc
    except json.JSONDecodeError as exc:
        raise DescriptionFileError(f"Invalid JSON in {path}: {exc}", path) from exc

    if not isinstance(document, list):
        raise StructuralError(f"{path}: top-level JSON value should be a list")
    logger.debug("Loaded %d entries from %s", len(document), path)
    return document


def write_description(path: PathLike, records: list[Any]) -> None:
    """Replace the description file with ``records``.

    The list is written to a temporary file in the same directory first and
    moved over the original, so readers never see a partial document.
    """
    path = Path(path)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent)
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            json.dump(records, tmp, indent=constants.JSON_INDENT, ensure_ascii=False)
        if path.exists():
            os.chmod(tmp_name, path.stat().st_mode & 0o777)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.info("Wrote %d entries to %s", len(records), path)
