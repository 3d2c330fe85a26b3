"""
VAULTPREP Relation Serializer

Converts rows into the delimited text the Data Vault generator reads.
Fields are comma-joined; a field containing a comma, a double quote or a
line break is wrapped in double quotes with inner quotes doubled. Rows are
newline-joined with no trailing delimiter.
"""

from typing import Any, Iterable, Sequence

DELIMITER = ","
QUOTE = '"'
_NEEDS_QUOTING = (DELIMITER, QUOTE, "\n", "\r")


def escape_field(value: Any) -> str:
    """Render one field, quoting it when needed. ``None`` is an empty field."""
    if value is None:
        return ""
    text = str(value)
    if any(token in text for token in _NEEDS_QUOTING):
        return QUOTE + text.replace(QUOTE, QUOTE * 2) + QUOTE
    return text


def rows_to_csv(rows: Iterable[Sequence[Any]]) -> str:
    """
    Serialize a rectangular row set, header row first.

    Args:
        rows (Iterable[Sequence[Any]]): Header followed by data rows

    Returns:
        str: Delimited text
    """
    return "\n".join(DELIMITER.join(escape_field(cell) for cell in row) for row in rows)
