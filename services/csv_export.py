"""
CSV export of listed returns.

Same columns, headers and escaping the dashboard uses for its download
button: comma/quote/CR/LF fields are quote-wrapped with embedded quotes
doubled, nulls are empty, lines are joined by CRLF with no line ending
after the last row.
"""
import csv
import io
from datetime import date
from typing import Iterable, Optional

from core.models.return_record import ReturnRecord

LINE_TERMINATOR = "\r\n"

CSV_HEADERS = (
    "Ticket link",
    "Order #",
    "SKU",
    "Customer",
    "Priority",
    "OM Request",
    "Status",
    "OM Update",
    "Last follow up",
    "Request date",
    "Designated OM agent",
)


def export_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"om-requests-{today.isoformat()}.csv"


def rows_to_csv(rows: Iterable[ReturnRecord]) -> str:
    """Render records as CSV text with a header line."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator=LINE_TERMINATOR)
    writer.writerow(CSV_HEADERS)
    for row in rows:
        writer.writerow(["" if value is None else value for value in row.to_csv_values()])
    return buffer.getvalue().removesuffix(LINE_TERMINATOR)
