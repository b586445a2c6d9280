"""Result table: the ordered (label, value) pairs of one report row."""
import csv
from typing import Any, List, Optional, TextIO, Tuple
import logging

from .reporter import ActivityReporter
from .utils import ResultTableFinalizedError

logger = logging.getLogger(__name__)


class ResultTable:
    """
    Collects one row of results, in the order they are appended.

    Once finalized the table can no longer be changed.
    """

    def __init__(self) -> None:
        self._pairs: List[Tuple[str, str]] = []
        self._finalized = False

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def pairs(self) -> List[Tuple[str, str]]:
        return list(self._pairs)

    @property
    def labels(self) -> List[str]:
        return [label for label, _ in self._pairs]

    @property
    def values(self) -> List[str]:
        return [value for _, value in self._pairs]

    def append(self, label: str, value: Any) -> None:
        if self._finalized:
            raise ResultTableFinalizedError(f"Cannot append {label!r} to a finalized result table")
        self._pairs.append((label, str(value)))

    def finalize(self) -> None:
        self._finalized = True

    def rows(self, include_headers: bool = True) -> List[List[str]]:
        """
        Return the table as CSV rows.

        Args:
            include_headers: Prepend the row of labels

        Returns:
            The header row (optionally) followed by the value row
        """
        rows = [self.values]
        if include_headers:
            rows.insert(0, self.labels)
        return rows

    def __len__(self) -> int:
        return len(self._pairs)


class CSVResultWriter:
    """Writes result rows to a text stream as CSV."""

    def __init__(self, stream: TextIO):
        self.stream = stream

    def write(self, rows: List[List[str]]) -> None:
        writer = csv.writer(self.stream)
        writer.writerows(rows)


def save_results(
    table: ResultTable,
    stream: Optional[TextIO],
    reporter: ActivityReporter,
    include_headers: bool = True
) -> None:
    """
    Finalize ``table`` and write it to ``stream``.

    Args:
        table: The collected results
        stream: Open text stream; None when output is disabled
        reporter: Progress and error reporter
        include_headers: False when appending to an existing file
    """
    table.finalize()

    if stream is None:
        logger.info("Output disabled, results not saved")
        return

    reporter.start("Writing to file")
    try:
        CSVResultWriter(stream).write(table.rows(include_headers=include_headers))
    except (OSError, csv.Error) as e:
        reporter.check_error(e)
        return
    reporter.end("OK")
