"""Tests for the end-to-end filter → classify → format pipeline."""

import json

import pytest

from changedfiles.changes.classifier import ClassificationError
from changedfiles.changes.models import ChangedFileRecord
from changedfiles.config.schema import OutputFormat
from changedfiles.engine import build_report
from changedfiles.output.formatter import SpaceInFilenameError


class TestBuildReport:
    def test_space_delimited_scenario(self, sample_records):
        report = build_report(sample_records, ["*"], OutputFormat.SPACE_DELIMITED)
        assert report.category_outputs() == {
            "all": "a.txt b.txt c.txt d.txt e.txt",
            "added": "a.txt",
            "modified": "b.txt e.txt",
            "removed": "c.txt",
            "renamed": "d.txt e.txt",
            "added_modified": "a.txt b.txt e.txt",
            "added_modified_renamed": "a.txt b.txt d.txt e.txt",
        }

    def test_deleted_alias(self, sample_records):
        outputs = build_report(sample_records, None, OutputFormat.CSV).step_outputs()
        assert outputs["deleted"] == outputs["removed"] == "c.txt"
        assert list(outputs)[-1] == "deleted"

    def test_alias_not_in_category_outputs(self, sample_records):
        report = build_report(sample_records, None, OutputFormat.CSV)
        assert "deleted" not in report.category_outputs()

    def test_filter_applied(self):
        records = [
            ChangedFileRecord("x.yml", "modified"),
            ChangedFileRecord(".github/workflows/ci.yml", "modified"),
            ChangedFileRecord("dir/.github/a/b.yml", "added"),
        ]
        report = build_report(records, ["*.yml", "!.github/*/*.yml"], OutputFormat.JSON)
        assert json.loads(report.outputs["all"]) == ["x.yml"]
        assert report.total_records == 3
        assert report.filtered_out == 2

    def test_extension(self, sample_records):
        assert build_report(sample_records, None, OutputFormat.SPACE_DELIMITED).extension == "txt"
        assert build_report(sample_records, None, OutputFormat.JSON).extension == "json"

    def test_custom_predicate(self, sample_records):
        report = build_report(
            sample_records, ["*"], OutputFormat.CSV, include=lambda f: f.startswith("a")
        )
        assert report.outputs["all"] == "a.txt"

    def test_unknown_status_fails(self, sample_records):
        records = sample_records + [ChangedFileRecord("z.txt", "unknown")]
        with pytest.raises(ClassificationError):
            build_report(records, ["*"], OutputFormat.JSON)

    def test_space_fails_only_for_space_delimited(self):
        records = [ChangedFileRecord("my file.txt", "added")]
        with pytest.raises(SpaceInFilenameError):
            build_report(records, ["*"], OutputFormat.SPACE_DELIMITED)
        assert build_report(records, ["*"], OutputFormat.CSV).outputs["added"] == "my file.txt"
        assert build_report(records, ["*"], OutputFormat.JSON).outputs["added"] == '["my file.txt"]'
