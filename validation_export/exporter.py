"""
Result Exporter

Flattens validation items into export records and writes them as a CSV file
(every field quoted, human-readable header) and a compact JSON array sharing
the same base name.
"""

import csv
import json
import logging
from pathlib import Path
from typing import List, Sequence, Tuple

from validation_export.errors import FileWriteError
from validation_export.models import ExportRecord, ValidationItem


logger = logging.getLogger(__name__)

MESSAGE_SEPARATOR = "& "

# (field key, header title) in column order
CSV_COLUMNS: Tuple[Tuple[str, str], ...] = (
    ("issue_type", "Issue type"),
    ("item", "Item"),
    ("language", "language"),
    ("element", "Element"),
    ("message", "Message"),
)


def flatten_items(items: Sequence[ValidationItem]) -> List[ExportRecord]:
    """Produce one record per issue, in item order then issue order."""
    return [
        ExportRecord(
            issue_type=item.issue_type,
            item=item.item.codename,
            language=item.language.codename,
            element=issue.element.codename,
            message=MESSAGE_SEPARATOR.join(issue.messages),
        )
        for item in items
        for issue in item.issues
    ]


def write_csv(records: Sequence[ExportRecord], path: Path) -> None:
    """Write records as CSV with every field quoted.

    Raises:
        FileWriteError: If the file cannot be written
    """
    fieldnames = [key for key, _ in CSV_COLUMNS]
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames, quoting=csv.QUOTE_ALL)
            writer.writerow(dict(CSV_COLUMNS))
            for record in records:
                writer.writerow(record.model_dump())
    except OSError as e:
        raise FileWriteError(str(path), f"Cannot write CSV file '{path}': {e}") from e


def write_json(records: Sequence[ExportRecord], path: Path) -> None:
    """Write records as a single unformatted JSON array.

    Raises:
        FileWriteError: If the file cannot be written
    """
    payload = json.dumps(
        [record.model_dump() for record in records],
        ensure_ascii=False,
        separators=(",", ":"),
    )
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(payload)
    except OSError as e:
        raise FileWriteError(str(path), f"Cannot write JSON file '{path}': {e}") from e


class ResultExporter:
    """Writes the CSV and JSON exports for one run.

    Attributes:
        csv_path: Destination of the CSV export
        json_path: Destination of the JSON export
    """

    def __init__(self, csv_path: Path, json_path: Path):
        self.csv_path = Path(csv_path)
        self.json_path = Path(json_path)

    def export(self, items: Sequence[ValidationItem]) -> List[Path]:
        """Flatten and write both files.

        Nothing is written for an empty item list. The CSV is written first;
        if it fails the JSON file is not attempted.

        Returns:
            Paths of the files written, in write order
        """
        if not items:
            logger.debug("No validation items, skipping export")
            return []

        records = flatten_items(items)
        logger.debug(f"Flattened {len(items)} item(s) into {len(records)} record(s)")

        try:
            self.csv_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileWriteError(
                str(self.csv_path.parent),
                f"Cannot create output directory '{self.csv_path.parent}': {e}",
            ) from e

        write_csv(records, self.csv_path)
        logger.debug(f"Wrote {len(records)} record(s) to '{self.csv_path}'")

        write_json(records, self.json_path)
        logger.debug(f"Wrote {len(records)} record(s) to '{self.json_path}'")

        return [self.csv_path, self.json_path]
