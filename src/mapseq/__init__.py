"""Deduplicate and resequence geotagged image descriptions."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["MapSequencer"]


def __getattr__(name: str):
    if name == "MapSequencer":
        from mapseq.api.processor import MapSequencer

        return MapSequencer
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + ["MapSequencer"])
