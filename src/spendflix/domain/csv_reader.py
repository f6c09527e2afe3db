"""Reading statement files into header-keyed rows."""

import csv
import io

from spendflix.domain.errors import ValidationError

EMPTY_FILE_MESSAGE = "File is empty or has no valid data"


def _sniff_delimiter(sample: str) -> str:
    try:
        return csv.Sniffer().sniff(sample, delimiters=",;\t").delimiter
    except csv.Error:
        return ","


def read_statement(content: bytes) -> tuple[list[str], list[dict]]:
    """Decode a CSV file and split it into its header row and data rows.

    Blank lines and rows whose cells are all empty are skipped.

    Args:
        content: Raw file bytes (UTF-8, optionally with a BOM)

    Returns:
        Tuple of (headers, rows) where each row maps header to cell text

    Raises:
        ValidationError: If the file cannot be decoded, has no header row
            or no data rows
    """
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise ValidationError("File is not valid UTF-8 text") from None

    if not text.strip():
        raise ValidationError(EMPTY_FILE_MESSAGE)

    reader = csv.DictReader(io.StringIO(text), delimiter=_sniff_delimiter(text[:4096]))
    headers = [h.strip() for h in (reader.fieldnames or []) if h is not None]
    if not any(headers):
        raise ValidationError(EMPTY_FILE_MESSAGE)
    reader.fieldnames = headers

    rows = [row for row in reader if any(_cells(row))]
    if not rows:
        raise ValidationError(EMPTY_FILE_MESSAGE)
    return headers, rows


def _cells(row: dict) -> list[str]:
    """Return a row's non-empty cells, including any beyond the header width."""
    cells = []
    for key, value in row.items():
        values = value if key is None else [value]
        cells.extend(v.strip() for v in values if isinstance(v, str) and v.strip())
    return cells


def populated_cell_count(row: dict) -> int:
    """Count the non-empty cells of a row."""
    return len(_cells(row))
