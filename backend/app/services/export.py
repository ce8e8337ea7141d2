"""CSV serialization for ledger exports."""

import csv
import io
from typing import Iterable, Mapping, Sequence

ACCOUNT_COLUMNS = (
    "Payment Date",
    "Payment Type",
    "Payment Mode",
    "Amount",
    "Client Name",
    "Credit/Debit",
    "Notes",
    "Created At",
    "Updated At",
)

INVOICE_COLUMNS = (
    "Invoice Number",
    "Created Date",
    "Due Date",
    "Bill To",
    "Total Amount",
    "Amount Received",
    "Remaining Amount",
    "Status",
    "Notes",
    "Created At",
    "Updated At",
)

# Commas in these columns become semicolons so spreadsheet users see one cell
FREE_TEXT_COLUMNS = frozenset({"Notes", "Bill To", "Client Name"})


def _format_cell(column: str, value) -> str:
    if value is None:
        return ""
    text = str(value)
    if column in FREE_TEXT_COLUMNS:
        text = text.replace(",", ";")
    return text


def to_csv(records: Iterable[Mapping[str, object]], columns: Sequence[str]) -> str:
    """Render records as a header line plus one line per record.

    Cells that still contain a delimiter, quote or newline after the
    free-text substitution are quoted; rows are joined with ``\\n`` and the
    output has no trailing newline.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(columns)
    for record in records:
        writer.writerow([_format_cell(column, record.get(column)) for column in columns])
    output = buffer.getvalue()
    return output[:-1] if output.endswith("\n") else output
