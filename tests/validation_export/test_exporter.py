"""
Unit Tests: Result Exporter

Covers record flattening, CSV quoting and header, compact JSON output,
empty input and write failures.
"""

import csv
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from validation_export.errors import FileWriteError
from validation_export.exporter import (
    CSV_COLUMNS,
    ResultExporter,
    flatten_items,
    write_csv,
    write_json,
)
from validation_export.models import ExportRecord


@pytest.fixture
def exporter(tmp_path):
    return ResultExporter(tmp_path / "issues.csv", tmp_path / "issues.json")


# ============================================================================
# Test: Flattening
# ============================================================================

def test_single_item_scenario(make_item):
    items = [make_item("home", "content_type", "default", [("title", ["Required", "Too long"])])]

    records = flatten_items(items)

    assert records == [
        ExportRecord(
            issue_type="content_type",
            item="home",
            language="default",
            element="title",
            message="Required& Too long",
        )
    ]


def test_single_message_is_unchanged(make_item):
    records = flatten_items([make_item(issues=[("title", ["Required"])])])
    assert records[0].message == "Required"


def test_no_messages_gives_empty_message(make_item):
    records = flatten_items([make_item(issues=[("title", [])])])
    assert records[0].message == ""


def test_records_keep_item_then_issue_order(make_item):
    items = [
        make_item("a", issues=[("x", ["1"]), ("y", ["2"])]),
        make_item("b", issues=[]),
        make_item("c", issues=[("z", ["3"])]),
    ]

    records = flatten_items(items)

    assert [(r.item, r.element) for r in records] == [("a", "x"), ("a", "y"), ("c", "z")]


def test_empty_items_give_no_records():
    assert flatten_items([]) == []


# ============================================================================
# Test: CSV
# ============================================================================

def test_csv_header_and_quoting(tmp_path):
    path = tmp_path / "out.csv"
    records = [ExportRecord(issue_type="t", item="123", language="en", element="e", message="m")]

    write_csv(records, path)

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == '"Issue type","Item","language","Element","Message"'
    assert lines[1] == '"t","123","en","e","m"'


def test_csv_escapes_embedded_quotes_and_commas(tmp_path):
    path = tmp_path / "out.csv"
    records = [ExportRecord(
        issue_type="t", item="i", language="l", element="e", message='Say "hi", then leave'
    )]

    write_csv(records, path)

    with open(path, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[1][4] == 'Say "hi", then leave'


def test_csv_columns_match_record_fields():
    assert [key for key, _ in CSV_COLUMNS] == list(ExportRecord.model_fields)


# ============================================================================
# Test: JSON
# ============================================================================

def test_json_is_compact_array(tmp_path, make_item):
    path = tmp_path / "out.json"
    records = flatten_items([make_item(issues=[("title", ["Required", "Too long"])])])

    write_json(records, path)

    content = path.read_text(encoding="utf-8")
    assert "\n" not in content
    assert content == (
        '[{"issue_type":"content_type","item":"home","language":"default",'
        '"element":"title","message":"Required& Too long"}]'
    )


def test_json_round_trips_records(tmp_path, make_item):
    path = tmp_path / "out.json"
    records = flatten_items([
        make_item("a", issues=[("x", ["1", "2"])]),
        make_item("b", language="cz", issues=[("y", ["3"])]),
    ])

    write_json(records, path)

    loaded = json.loads(path.read_text(encoding="utf-8"))
    assert [ExportRecord(**row) for row in loaded] == records


# ============================================================================
# Test: ResultExporter
# ============================================================================

def test_export_writes_both_files(exporter, make_item):
    written = exporter.export([make_item(issues=[("title", ["Required"])])])

    assert written == [exporter.csv_path, exporter.json_path]
    assert exporter.csv_path.exists()
    assert exporter.json_path.exists()


def test_export_empty_items_writes_nothing(exporter):
    written = exporter.export([])

    assert written == []
    assert not exporter.csv_path.exists()
    assert not exporter.json_path.exists()


def test_export_creates_output_directory(tmp_path, make_item):
    exporter = ResultExporter(tmp_path / "nested" / "out.csv", tmp_path / "nested" / "out.json")

    exporter.export([make_item(issues=[("title", ["Required"])])])

    assert (tmp_path / "nested" / "out.csv").exists()


def test_csv_failure_skips_json(exporter, make_item):
    with patch("validation_export.exporter.write_json") as mock_write_json, \
            patch("validation_export.exporter.write_csv",
                  side_effect=FileWriteError(str(exporter.csv_path), "disk full")):
        with pytest.raises(FileWriteError):
            exporter.export([make_item(issues=[("title", ["Required"])])])

    mock_write_json.assert_not_called()
    assert not exporter.json_path.exists()


def test_unwritable_path_raises_file_write_error(tmp_path, make_item):
    # A directory in place of the CSV file cannot be opened for writing
    blocked = tmp_path / "blocked.csv"
    blocked.mkdir()
    exporter = ResultExporter(blocked, tmp_path / "blocked.json")

    with pytest.raises(FileWriteError) as exc_info:
        exporter.export([make_item(issues=[("title", ["Required"])])])

    assert exc_info.value.path == str(blocked)
    assert not Path(tmp_path / "blocked.json").exists()
