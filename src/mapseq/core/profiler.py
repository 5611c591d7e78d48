"""Optional cProfile instrumentation for resequencing runs."""

from __future__ import annotations

import cProfile
import io
import logging
import os
import pstats
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class ProfileSettings:
    """Whether to profile, and where the ``.prof`` file goes."""

    enabled: bool = False
    output: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "ProfileSettings":
        """Read ``MAPSEQ_PROFILE`` and ``MAPSEQ_PROFILE_OUT``."""
        enabled = os.environ.get("MAPSEQ_PROFILE", "").strip().lower() in _TRUTHY
        output = os.environ.get("MAPSEQ_PROFILE_OUT", "").strip()
        return cls(enabled=enabled, output=Path(output) if output else None)

    def resolve_path(self, label: str) -> Path:
        """Return the stats file path; a suffix-less output is a directory."""
        name = f"mapseq-{label}-{datetime.now():%Y%m%d-%H%M%S}.prof"
        if self.output is None:
            return Path(tempfile.gettempdir()) / name
        output = self.output.expanduser()
        return output if output.suffix else output / name


def _write_summary(profiler: cProfile.Profile, stats_path: Path) -> None:
    stream = io.StringIO()
    pstats.Stats(profiler, stream=stream).strip_dirs().sort_stats("cumulative").print_stats(30)
    stats_path.with_name(stats_path.name + ".txt").write_text(stream.getvalue(), encoding="utf-8")


@contextmanager
def profile_run(settings: ProfileSettings, label: str) -> Iterator[Optional[Path]]:
    """Profile the enclosed block when ``settings.enabled``.

    Yields the path the stats will be written to, or None when disabled.
    """
    if not settings.enabled:
        yield None
        return

    stats_path = settings.resolve_path(label)
    profiler = cProfile.Profile()
    profiler.enable()
    try:
        yield stats_path
    finally:
        profiler.disable()
        stats_path.parent.mkdir(parents=True, exist_ok=True)
        profiler.dump_stats(str(stats_path))
        try:
            _write_summary(profiler, stats_path)
        except OSError as exc:
            logger.warning("Failed to write profiler summary: %s", exc)
        logger.info("Profiler output written to %s", stats_path)
