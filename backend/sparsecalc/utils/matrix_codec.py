"""
Text format for sparse matrices.

Input files look like:

    rows=3
    cols=3
    (0, 1, 5)
    (2, 2, -7)

Rendered output uses a single summary header instead:

    Rows: 3, Columns: 3
    (0, 1, 5)
    (2, 2, -7)

Both headers are accepted by parse_text so rendered output can be read back.
"""

import re

from .errors import MalformedEntry, MissingDimensions

ROWS_PATTERN = re.compile(r'rows\s*=\s*(\d+)', re.ASCII)
COLS_PATTERN = re.compile(r'cols\s*=\s*(\d+)', re.ASCII)
SUMMARY_PATTERN = re.compile(r'Rows:\s*(\d+),\s*Columns:\s*(\d+)', re.ASCII)
ENTRY_PATTERN = re.compile(r'\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(-?\d+)\s*\)', re.ASCII)


def _parse_header(lines):
    """Returns (rows, cols, number of header lines consumed)"""
    if not lines:
        raise MissingDimensions("Invalid file format: rows or cols not found")

    summary = SUMMARY_PATTERN.fullmatch(lines[0][1])
    if summary:
        return int(summary.group(1)), int(summary.group(2)), 1

    if len(lines) < 2:
        raise MissingDimensions("Invalid file format: rows or cols not found")

    rows_match = ROWS_PATTERN.fullmatch(lines[0][1])
    cols_match = COLS_PATTERN.fullmatch(lines[1][1])
    if not rows_match or not cols_match:
        raise MissingDimensions("Invalid file format: rows or cols not found")

    return int(rows_match.group(1)), int(cols_match.group(1)), 2


def parse_text(text):
    """
    Parses matrix text into its dimensions and entry triples.

    Args:
        text (str): File content

    Returns:
        tuple: (rows, cols, entries) where entries is a list of
        (row, col, value) triples in file order. Bounds are not checked here.

    Raises:
        MissingDimensions: header lines absent or malformed
        MalformedEntry: an entry line does not match (row, col, value)
    """
    # (line number, stripped content), blank lines dropped
    lines = [
        (number, line.strip())
        for number, line in enumerate(text.splitlines(), start=1)
        if line.strip()
    ]

    rows, cols, consumed = _parse_header(lines)

    entries = []
    for number, line in lines[consumed:]:
        match = ENTRY_PATTERN.fullmatch(line)
        if not match:
            raise MalformedEntry(number, line)
        row, col, value = match.groups()
        entries.append((int(row), int(col), int(value)))

    return rows, cols, entries


def render(matrix):
    """Renders a matrix as a summary header plus one line per stored entry"""
    lines = [f"Rows: {matrix.rows}, Columns: {matrix.cols}\n"]
    for (row, col), value in matrix.data.items():
        lines.append(f"({row}, {col}, {value})\n")
    return "".join(lines)
