"""Tests for the command line interface."""

import json
from pathlib import Path

from click.testing import CliRunner

from mapseq import __version__
from mapseq.cli.main import main


def write_upload(directory: Path, records) -> Path:
    desc = directory / "mapillary_image_description.json"
    desc.write_text(json.dumps(records), encoding="utf-8")
    return desc


class TestResequenceCommand:
    """Tests for `mapseq resequence`."""

    def test_rewrites_description(self, tmp_path: Path, record_track) -> None:
        desc = write_upload(tmp_path, record_track(3, interval=15))

        result = CliRunner().invoke(main, ["resequence", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "3 entries proceeded, skipped 0 entries." in result.output
        assert "Re-written with 3 entries and 3 sequences." in result.output
        written = json.loads(desc.read_text(encoding="utf-8"))
        assert [r["MAPSequenceUUID"] for r in written] == ["0", "1", "2"]

    def test_underscore_option_names(self, tmp_path: Path, record_track) -> None:
        write_upload(tmp_path, record_track(3, interval=15))

        result = CliRunner().invoke(
            main,
            [
                "resequence",
                str(tmp_path),
                "--cutoff_time",
                "20",
                "--duplicate_distance",
                "1",
                "--max_sequence_length",
                "2",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "and 2 sequences." in result.output

    def test_accepts_description_file(self, tmp_path: Path, record_track) -> None:
        desc = write_upload(tmp_path, record_track(2))

        result = CliRunner().invoke(main, ["resequence", str(desc)])

        assert result.exit_code == 0, result.output

    def test_dry_run(self, tmp_path: Path, record_track) -> None:
        desc = write_upload(tmp_path, record_track(3, interval=15))
        before = desc.read_bytes()

        result = CliRunner().invoke(main, ["resequence", str(tmp_path), "--dry-run"])

        assert result.exit_code == 0, result.output
        assert "Dry run" in result.output
        assert desc.read_bytes() == before

    def test_invalid_timezone(self, tmp_path: Path, record_track) -> None:
        desc = write_upload(tmp_path, record_track(2))
        before = desc.read_bytes()

        result = CliRunner().invoke(
            main, ["resequence", str(tmp_path), "--timezone", "Nowhere/City"]
        )

        assert result.exit_code == 1
        assert "Unknown timezone" in result.output
        assert desc.read_bytes() == before

    def test_malformed_record(self, tmp_path: Path, record_track) -> None:
        records = record_track(3)
        records[2]["MAPLatitude"] = "north"
        desc = write_upload(tmp_path, records)
        before = desc.read_bytes()

        result = CliRunner().invoke(main, ["resequence", str(tmp_path)])

        assert result.exit_code == 1
        assert "Record 2" in result.output
        assert desc.read_bytes() == before

    def test_cutoff_out_of_range(self, tmp_path: Path, record_track) -> None:
        desc = write_upload(tmp_path, record_track(2))
        before = desc.read_bytes()

        result = CliRunner().invoke(
            main, ["resequence", str(tmp_path), "--cutoff-time", "100000000000000"]
        )

        assert result.exit_code == 1
        assert "Error: Cutoff time" in result.output
        assert desc.read_bytes() == before

    def test_max_length_must_be_positive(self, tmp_path: Path, record_track) -> None:
        write_upload(tmp_path, record_track(2))

        result = CliRunner().invoke(
            main, ["resequence", str(tmp_path), "--max-sequence-length", "0"]
        )

        assert result.exit_code == 2

    def test_missing_path(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(main, ["resequence", str(tmp_path / "missing")])

        assert result.exit_code == 2

    def test_profile(self, tmp_path: Path, record_track) -> None:
        write_upload(tmp_path, record_track(2))
        prof = tmp_path / "out" / "run.prof"

        result = CliRunner().invoke(
            main, ["resequence", str(tmp_path), "--profile", "--profile-out", str(prof)]
        )

        assert result.exit_code == 0, result.output
        assert prof.exists()
        assert "Profiler output written to" in result.output


def test_version() -> None:
    result = CliRunner().invoke(main, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output
