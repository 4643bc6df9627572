from datetime import date
from typing import List, Optional, Sequence
import csv
import io

from src.models.variants import Variant, get_variant

BASE_HEADERS = ["File Name", "Page Number", "Title", "Summary"]
TERM_SEPARATOR = "; "


def csv_filename(day: Optional[date] = None) -> str:
    day = day or date.today()
    return f"slide_analysis_{day.isoformat()}.csv"


def csv_headers(variant: Variant) -> List[str]:
    return BASE_HEADERS + variant.column_headers()


def record_row(record) -> List[str]:
    row = [record.file_name, str(record.page_number), record.title, record.summary]
    row += [TERM_SEPARATOR.join(terms) for terms in record.analysis.taxonomy_columns().values()]
    row += list(record.analysis.narrative_columns().values())
    return row


def records_to_csv(records: Sequence, variant=None) -> str:
    """Header + one row per record; every cell quoted, quotes doubled.

    The variant fixes the columns; by default it is taken from the first
    record (a batch only ever holds one variant).
    """
    if variant is None:
        variant = records[0].variant if records else "medical_affairs"
    variant = get_variant(variant)

    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(csv_headers(variant))
    for record in records:
        writer.writerow(record_row(record))

    # no trailing newline after the last row
    return buf.getvalue().rstrip("\n")
