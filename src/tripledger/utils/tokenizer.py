"""Delimited-text tokenizer for bank statement exports.

Bank exports arrive tab, comma or semicolon separated, with Windows, old Mac
or Unix line endings, and with inconsistent quoting. The standard library
``csv`` sniffer guesses wrong on several Irish bank exports (a single quoted
description full of commas is enough), so the delimiter is decided once from
the header line and each line is scanned by hand.
"""

from collections import Counter
from dataclasses import dataclass, field
import logging
import re

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

TAB = "\t"
COMMA = ","
SEMICOLON = ";"
BOM = "\ufeff"

EMPTY_FILE = "File appears to be empty"
TOO_FEW_LINES = "CSV file must have headers and at least one data row"
NO_VALID_ROWS = "No valid data rows found in CSV"


@dataclass
class ParsedTable:
    """Tokenized statement: cleaned headers plus data rows."""

    headers: list[str]
    rows: list[list[str]]
    delimiter: str
    total_rows: int
    dropped_rows: int = 0
    column_counts: dict[int, int] = field(default_factory=dict)


def split_lines(text: str) -> list[str]:
    """Split on any line ending and drop blank lines."""
    return [line for line in _LINE_BREAK.split(text) if line.strip()]


def detect_delimiter(first_line: str) -> str:
    """Pick the delimiter for the whole file from its first line.

    Tab wins ties (a header with no separators at all is treated as tab
    separated); semicolon only beats comma when strictly more frequent.
    """
    tabs = first_line.count(TAB)
    commas = first_line.count(COMMA)
    semicolons = first_line.count(SEMICOLON)
    if tabs >= commas and tabs >= semicolons:
        return TAB
    if semicolons > commas:
        return SEMICOLON
    return COMMA


def split_line(line: str, delimiter: str) -> list[str]:
    """Split one line into trimmed cells.

    Tab-separated lines are split directly and lose one layer of surrounding
    double quotes. Comma and semicolon lines go through a quote-aware scan in
    which ``""`` inside a quoted field is a literal quote.
    """
    if delimiter == TAB:
        return [_strip_quotes(cell.strip()) for cell in line.split(TAB)]

    cells: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    while i < len(line):
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < len(line) and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            cells.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1
    cells.append("".join(current).strip())
    return cells


def _strip_quotes(cell: str) -> str:
    if cell.startswith('"'):
        cell = cell[1:]
    if cell.endswith('"'):
        cell = cell[:-1]
    return cell


def clean_headers(cells: list[str]) -> list[str]:
    """Name blank headers and make every header unique.

    Blank headers become ``Column N`` (1-indexed). A repeated name gets a
    ``" (k)"`` suffix where k starts at its occurrence count, so the second
    "Amount" becomes "Amount (2)". k keeps rising past any name already
    taken, including one the file itself uses.
    """
    occurrences: Counter[str] = Counter()
    taken: set[str] = set()
    headers = []
    for idx, cell in enumerate(cells):
        name = cell.strip() or f"Column {idx + 1}"
        occurrences[name] += 1
        unique = name
        k = max(occurrences[name], 2)
        while unique in taken:
            unique = f"{name} ({k})"
            k += 1
        taken.add(unique)
        headers.append(unique)
    return headers


def tokenize(text: str) -> ParsedTable:
    """Tokenize a statement export into headers and data rows.

    Args:
        text: Full file content

    Returns:
        ParsedTable with cleaned headers and the rows that carry at least two
        non-empty cells

    Raises:
        ValueError: If the text is empty, has fewer than two non-blank
            lines, or has no usable data rows
    """
    if text and text.startswith(BOM):
        text = text[len(BOM):]
    if not text or not text.strip():
        raise ValueError(EMPTY_FILE)

    lines = split_lines(text)
    delimiter = detect_delimiter(lines[0])
    logger.debug(
        "Lines: %d, delimiter: %r (tabs=%d, commas=%d, semicolons=%d)",
        len(lines),
        delimiter,
        lines[0].count(TAB),
        lines[0].count(COMMA),
        lines[0].count(SEMICOLON),
    )

    parsed = [split_line(line, delimiter) for line in lines]
    if len(parsed) < 2:
        raise ValueError(TOO_FEW_LINES)

    headers = clean_headers(parsed[0])
    data = parsed[1:]
    rows = [row for row in data if sum(1 for cell in row if cell.strip()) >= 2]
    if not rows:
        raise ValueError(NO_VALID_ROWS)

    column_counts = dict(Counter(len(row) for row in rows))
    logger.debug("Headers: %s", " | ".join(headers))
    logger.debug(
        "Data rows: %d, valid (>=2 cells): %d, column counts: %s",
        len(data),
        len(rows),
        column_counts,
    )

    return ParsedTable(
        headers=headers,
        rows=rows,
        delimiter=delimiter,
        total_rows=len(data),
        dropped_rows=len(data) - len(rows),
        column_counts=column_counts,
    )
