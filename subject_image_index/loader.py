"""Reads subject rows from a delimited text file."""

import csv
from pathlib import Path
from typing import Dict, List, Optional, Union

import structlog

from .core.errors import EmptyDatasetError

logger = structlog.get_logger(__name__)

DEFAULT_ENCODING = "utf-16-le"
DEFAULT_DELIMITER = ","


def parse_subject_rows(
    text: str,
    delimiter: Optional[str] = None
) -> List[Dict[str, Optional[str]]]:
    """
    Parse delimited text into field-keyed rows.

    The first non-blank line supplies the column names and each following
    non-blank line one row. Short rows get None for their missing columns;
    cells beyond the header are dropped.

    Args:
        text: Decoded file contents
        delimiter: Field delimiter (defaults to ``,``)

    Returns:
        Rows in file order, keyed by column name

    Raises:
        EmptyDatasetError: If there is no data row after the header
    """
    lines = [line for line in text.lstrip("\ufeff").splitlines() if line.strip()]
    if len(lines) < 2:
        raise EmptyDatasetError("Invalid CSV: No data rows available.")

    reader = csv.reader(lines, delimiter=delimiter or DEFAULT_DELIMITER)
    header = [column.strip() for column in next(reader)]

    rows = []
    for values in reader:
        if len(values) != len(header):
            logger.warning(
                "Row width does not match header",
                line=reader.line_num,
                expected=len(header),
                actual=len(values),
            )
        rows.append({
            column: values[i] if i < len(values) else None
            for i, column in enumerate(header)
        })
    return rows


def read_subject_rows(
    filepath: Union[str, Path],
    encoding: Optional[str] = None,
    delimiter: Optional[str] = None
) -> List[Dict[str, Optional[str]]]:
    """
    Read a subject file from disk.

    Args:
        filepath: Path to the file
        encoding: File encoding (defaults to UTF-16LE)
        delimiter: Field delimiter (defaults to ``,``)

    Returns:
        Rows in file order, keyed by column name
    """
    with open(filepath, mode="r", encoding=encoding or DEFAULT_ENCODING, newline="") as f:
        text = f.read()
    return parse_subject_rows(text, delimiter)
