"""Shared fixtures for mapseq tests."""

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

import pytest
from geopy.distance import geodesic

BASE_POINT = (25.0330, 121.5654)  # (lat, lon)
BASE_TIME = datetime(2023, 5, 1, 12, 0, 0)


def capture_time(offset_seconds: float = 0.0, base: datetime = BASE_TIME) -> str:
    """Capture time string ``offset_seconds`` after ``base``."""
    value = base + timedelta(seconds=offset_seconds)
    return f"{value:%Y_%m_%d_%H_%M_%S}_{value.microsecond // 1000:03d}"


def offset_point(meters: float, point: tuple[float, float] = BASE_POINT) -> tuple[float, float]:
    """Point ``meters`` north of ``point`` as (lat, lon)."""
    destination = geodesic(meters=meters).destination(point, bearing=0)
    return (destination.latitude, destination.longitude)


def make_record(
    seq_id: str = "0",
    point: tuple[float, float] = BASE_POINT,
    time: Optional[str] = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build one image description record."""
    record = {
        "filename": extra.pop("filename", "IMG.jpg"),
        "MAPSequenceUUID": seq_id,
        "MAPLatitude": point[0],
        "MAPLongitude": point[1],
        "MAPCaptureTime": time if time is not None else capture_time(),
    }
    record.update(extra)
    return record


@pytest.fixture
def record_track() -> Callable[..., list[dict[str, Any]]]:
    """Factory for a straight track of non-duplicate records.

    Each image is ``spacing`` meters north of the previous one and ``interval``
    seconds later.
    """

    def _track(
        count: int,
        interval: float = 1.0,
        spacing: float = 10.0,
        seq_id: str = "0",
    ) -> list[dict[str, Any]]:
        return [
            make_record(
                seq_id=seq_id,
                point=offset_point(i * spacing),
                time=capture_time(i * interval),
                filename=f"IMG_{i:04d}.jpg",
            )
            for i in range(count)
        ]

    return _track


@pytest.fixture(autouse=True)
def isolated_logging(tmp_path_factory, monkeypatch):
    """Send log files to a temp dir and drop mapseq handlers after each test."""
    log_dir = tmp_path_factory.mktemp("logs")
    monkeypatch.setenv("MAPSEQ_LOG_PATH", str(log_dir / "mapseq.log"))
    yield log_dir
    logger = logging.getLogger("mapseq")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
